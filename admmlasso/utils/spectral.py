import numpy as np
from numpy.linalg import norm
from scipy.sparse.linalg import svds

from admmlasso.exceptions import InvalidConfig, NumericDegeneracy


SPRAD_FLOOR = 1e-12


def spectral_radius(X, method="svds"):
    """Compute the largest eigenvalue of ``X.T @ X``.

    The ADMM solver only needs an upper bound on this quantity, so cheap
    conservative bounds are accepted as well as exact values.

    Parameters
    ----------
    X : array, shape (n_samples, n_features)
        Design matrix, usually standardized.

    method : {'svds', 'norm', 'frobenius'} or callable, default 'svds'
        - ``'svds'``: largest singular value from an ARPACK truncated SVD.
        - ``'norm'``: dense LAPACK spectral norm.
        - ``'frobenius'``: the bound ``||X||_F^2``.
        - a callable ``f(X) -> float`` returning the eigenvalue or a bound.

    Returns
    -------
    sprad : float
        Largest eigenvalue of ``X.T @ X``, or an upper bound on it.
    """
    if callable(method):
        return float(method(X))
    if method == "svds":
        if not np.any(X):
            return 0.
        # ARPACK needs k < min(X.shape)
        if min(X.shape) < 2:
            return norm(X, ord=2) ** 2
        s = svds(X, k=1, return_singular_vectors=False)
        return float(s[0]) ** 2
    elif method == "norm":
        return norm(X, ord=2) ** 2
    elif method == "frobenius":
        return norm(X, ord='fro') ** 2
    raise InvalidConfig(
        "Unknown spectral radius method. Expected 'svds', 'norm', 'frobenius' "
        f"or a callable. Got {method!r}")


def check_spectral_radius(sprad, X):
    """Ensure ``sprad`` can be used to size the ADMM penalty parameter.

    Parameters
    ----------
    sprad : float
        Spectral radius estimate of ``X.T @ X``.

    X : array, shape (n_samples, n_features)
        Design matrix ``sprad`` was computed from.

    Returns
    -------
    sprad : float
        The validated estimate.

    Raises
    ------
    NumericDegeneracy
        If ``sprad`` is not finite, or at or below
        ``SPRAD_FLOOR * max(1, ||X||_F^2)``.
    """
    sprad = float(sprad)
    if not np.isfinite(sprad):
        raise NumericDegeneracy(
            f"The spectral radius of X.T @ X is not finite, got {sprad}.")

    floor = SPRAD_FLOOR * max(1., norm(X, ord='fro') ** 2)
    if sprad <= floor:
        raise NumericDegeneracy(
            f"The spectral radius of X.T @ X ({sprad:.3e}) is below the safety "
            f"floor {floor:.3e}. The design matrix is (numerically) zero.")
    return sprad
