"""Errors raised when a lasso path cannot be computed.

Non-convergence is not an error: a solve that reaches ``max_iter`` returns
``max_iter`` as its iteration count, and estimators report it with
:class:`sklearn.exceptions.ConvergenceWarning`.
"""


class InvalidDimension(ValueError):
    """Raised when ``X`` and ``y`` have incompatible or empty shapes.

    Covers a number of rows of ``X`` different from the length of ``y``,
    ``n_samples == 0`` and ``n_features == 0``.
    """


class InvalidConfig(ValueError):
    """Raised when solver or path options are outside their valid range.

    Examples are ``max_iter <= 0``, negative tolerances, ``rho_ratio <= 0``,
    ``lambda_min_ratio`` outside ``(0, 1)`` or a lambda sequence that is not
    strictly positive and strictly decreasing.
    """


class NumericDegeneracy(FloatingPointError):
    """Raised when the problem is numerically degenerate.

    This happens when the spectral radius of ``X.T @ X`` is not finite or
    falls below the safety floor, when the automatic lambda grid cannot be
    built because ``lambda_max`` is zero, or when non-finite values appear in
    the iterates.
    """
