import numpy as np
from numba import njit


@njit
def ST_vec(x, u):
    """Entrywise soft-thresholding of array x at level u."""
    return np.sign(x) * np.maximum(0., np.abs(x) - u)


@njit
def value_L1(w, alpha):
    """Compute the value of the L1 penalty alpha * ||w||_1."""
    return alpha * np.sum(np.abs(w))
