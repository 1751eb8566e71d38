import warnings
from numbers import Integral, Real

import numpy as np
from sklearn.exceptions import DataConversionWarning
from sklearn.utils import check_array
from sklearn.utils._param_validation import (
    Interval, StrOptions, InvalidParameterError, validate_parameter_constraints
)

from admmlasso.exceptions import InvalidConfig, InvalidDimension


PATH_PARAMETER_CONSTRAINTS = {
    "lambdas": ["array-like", None],
    "n_lambdas": [Interval(Integral, 1, None, closed="left")],
    "lambda_min_ratio": [Interval(Real, 0, 1, closed="neither"), None],
    "standardize": ["boolean"],
    "fit_intercept": ["boolean"],
    "max_iter": [Interval(Integral, 1, None, closed="left")],
    "eps_abs": [Interval(Real, 0, None, closed="left")],
    "eps_rel": [Interval(Real, 0, None, closed="left")],
    "rho_ratio": [Interval(Real, 0, None, closed="neither")],
    "primal_update": [StrOptions({"linearized", "exact"})],
    "rho_policy": [StrOptions({"fixed", "per_lambda"})],
    "rho_scaling": [StrOptions({"sprad", "normalized"})],
    "spectral_radius": [StrOptions({"svds", "norm", "frobenius"}), callable],
    "verbose": ["boolean", Interval(Integral, 0, None, closed="left")],
}


def check_options(caller_name, **params):
    """Check path and solver options against ``PATH_PARAMETER_CONSTRAINTS``.

    Parameters
    ----------
    caller_name : str
        Name of the function or class reported in the error message.

    **params : kwargs
        Option names mapped to their values. Names absent from
        ``PATH_PARAMETER_CONSTRAINTS`` are not checked.

    Raises
    ------
    InvalidConfig
        If any option violates its constraint.
    """
    # the number of lambdas only matters when the grid is generated
    if params.get("lambdas") is not None:
        params.pop("n_lambdas", None)
        params.pop("lambda_min_ratio", None)

    try:
        validate_parameter_constraints(
            PATH_PARAMETER_CONSTRAINTS, params, caller_name=caller_name)
    except InvalidParameterError as e:
        raise InvalidConfig(str(e)) from e


def check_lambdas(lambdas):
    """Check a user supplied lambda sequence.

    Parameters
    ----------
    lambdas : array-like, shape (n_lambdas,)
        Regularization strengths, largest first.

    Returns
    -------
    lambdas : array, shape (n_lambdas,)
        The sequence as a float64 array, unchanged.

    Raises
    ------
    InvalidConfig
        If the sequence is empty, not one-dimensional, not finite, not
        strictly positive or not strictly decreasing.
    """
    lambdas = np.asarray(lambdas, dtype=np.float64)
    if lambdas.ndim != 1 or lambdas.shape[0] == 0:
        raise InvalidConfig(
            "`lambdas` must be a non-empty 1d sequence, got shape %s."
            % (lambdas.shape,))
    if not np.all(np.isfinite(lambdas)):
        raise InvalidConfig("`lambdas` must only contain finite values.")
    if np.any(lambdas <= 0):
        raise InvalidConfig(
            "`lambdas` must be strictly positive, got min(lambdas)=%s."
            % lambdas.min())
    if np.any(np.diff(lambdas) >= 0):
        raise InvalidConfig("`lambdas` must be strictly decreasing.")
    return lambdas


def check_X_y(X, y):
    """Validate and copy the design matrix and the response.

    Parameters
    ----------
    X : array-like, shape (n_samples, n_features)
        Design matrix.

    y : array-like, shape (n_samples,)
        Response vector.

    Returns
    -------
    X : array, shape (n_samples, n_features)
        Fortran ordered float64 copy of ``X``.

    y : array, shape (n_samples,)
        float64 copy of ``y``.

    Raises
    ------
    InvalidDimension
        If ``X`` is not 2d, ``y`` is not 1d, their first dimensions differ,
        or ``X`` has no row or no column.
    """
    X = check_array(X, dtype=np.float64, order='F', copy=True, ensure_2d=False,
                    allow_nd=True, ensure_min_samples=0, ensure_min_features=0)
    y = check_array(y, dtype=np.float64, copy=True, ensure_2d=False,
                    allow_nd=True, ensure_min_samples=0, ensure_min_features=0)

    if X.ndim != 2:
        raise InvalidDimension(
            "X must be a 2d array, got an array of dimension %d." % X.ndim)

    if y.ndim == 2 and y.shape[1] == 1:
        warnings.warn("A column-vector y was passed when a 1d array was "
                      "expected.", DataConversionWarning)
        y = y[:, 0]
    if y.ndim != 1:
        raise InvalidDimension(
            "y must be a 1d array, got an array of shape %s." % (y.shape,))

    n_samples, n_features = X.shape
    if n_samples != y.shape[0]:
        raise InvalidDimension("X and y have inconsistent dimensions (%d != %d)"
                               % (n_samples, y.shape[0]))
    if n_samples == 0 or n_features == 0:
        raise InvalidDimension(
            "X must have at least one sample and one feature, got shape %s."
            % (X.shape,))
    return X, y
