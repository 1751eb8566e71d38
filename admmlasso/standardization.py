import numpy as np
from scipy import sparse


class DataStandardizer:
    r"""Center and scale a regression problem, and map solutions back.

    After :meth:`standardize`, the columns of ``X`` are centered when
    ``fit_intercept`` is ``True`` and have squared norm ``n_samples`` when
    ``standardize`` is ``True``. The response is centered (with
    ``fit_intercept``) and always divided by its root mean square
    ``scale_y_``. Hence the problem

    .. math::
        1 / (2 xx n_"samples") ||y - X beta - beta_0||_2 ^ 2 + lambda ||beta||_1

    reads, in standardized units,

    .. math::
        1 / 2 ||tilde y - tilde X tilde beta||_2 ^ 2
        + (lambda xx n_"samples" / "scale_y") ||tilde beta||_1

    where, with ``standardize=True``, the penalty applies to the standardized
    coefficients.

    Constant columns (and a constant response) cannot be scaled: they are
    set to zero and given a unit scale, so their coefficients stay exactly
    zero.

    Parameters
    ----------
    standardize : bool, default True
        Scale the columns of ``X`` to a common norm. If ``False``, columns are
        only centered.

    fit_intercept : bool, default True
        Center ``X`` and ``y``. If ``False`` the intercept is forced to zero.

    Attributes
    ----------
    mean_X_ : array, shape (n_features,)
        Column means of ``X`` (zeros when ``fit_intercept=False``).

    scale_X_ : array, shape (n_features,)
        Column scales of ``X`` (ones when ``standardize=False``).

    mean_y_ : float
        Mean of ``y`` (zero when ``fit_intercept=False``).

    scale_y_ : float
        Root mean square of the centered ``y``.

    n_samples_ : int
        Number of samples of the standardized problem.
    """

    def __init__(self, standardize=True, fit_intercept=True):
        self.standardize_X = standardize
        self.fit_intercept = fit_intercept

    def standardize(self, X, y):
        """Standardize ``X`` and ``y`` in place.

        Parameters
        ----------
        X : array, shape (n_samples, n_features)
            Design matrix, modified in place.

        y : array, shape (n_samples,)
            Response vector, modified in place.

        Returns
        -------
        X, y : arrays
            The standardized inputs (the same objects).
        """
        n_samples, n_features = X.shape
        self.n_samples_ = n_samples
        eps = np.finfo(X.dtype).eps

        if self.fit_intercept:
            self.mean_X_ = X.mean(axis=0)
            self.mean_y_ = y.mean()
            X -= self.mean_X_
            y -= self.mean_y_
        else:
            self.mean_X_ = np.zeros(n_features)
            self.mean_y_ = 0.

        scale_X = np.sqrt(np.sum(X ** 2, axis=0) / n_samples)
        # centering a constant column leaves rounding errors only
        constant = scale_X <= 10 * eps * np.maximum(np.abs(self.mean_X_), 1.)
        X[:, constant] = 0.
        if self.standardize_X:
            scale_X[constant] = 1.
            X /= scale_X
            self.scale_X_ = scale_X
        else:
            self.scale_X_ = np.ones(n_features)

        scale_y = np.sqrt(np.sum(y ** 2) / n_samples)
        if scale_y <= 10 * eps * max(abs(self.mean_y_), 1.):
            y[:] = 0.
            scale_y = 1.
        y /= scale_y
        self.scale_y_ = scale_y

        return X, y

    def recover(self, beta0, coef):
        """Map a solution from standardized to original units.

        Parameters
        ----------
        beta0 : float
            Intercept in standardized units (zero for the ADMM solver, which
            works on centered data).

        coef : array, shape (n_features,) or sparse matrix, shape (n_features, 1)
            Coefficients in standardized units. The sparsity pattern of a
            sparse input is preserved.

        Returns
        -------
        beta0 : float
            Intercept in original units.

        coef : array or sparse matrix
            Coefficients in original units, of the same kind as the input.
        """
        if sparse.issparse(coef):
            coef = sparse.csc_matrix(coef, copy=True)
            rows = coef.indices
            coef.data *= self.scale_y_ / self.scale_X_[rows]
            offset = self.mean_X_[rows] @ coef.data
        else:
            coef = coef * self.scale_y_ / self.scale_X_
            offset = self.mean_X_ @ coef

        beta0 = self.scale_y_ * beta0 + self.mean_y_ - offset
        return beta0, coef

    def get_scaleY(self):
        """Return the response scale factor ``scale_y_``."""
        return self.scale_y_

    def transform_lambda(self, lambdas):
        """Convert ``1/(2n)``-averaged lambdas to the solver convention."""
        return np.asarray(lambdas) * self.n_samples_ / self.scale_y_

    def inverse_transform_lambda(self, lambdas):
        """Convert solver lambdas back to the ``1/(2n)``-averaged convention."""
        return np.asarray(lambdas) / self.n_samples_ * self.scale_y_
