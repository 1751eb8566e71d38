# License: BSD 3 clause

import warnings
import numpy as np

from sklearn.exceptions import ConvergenceWarning
from sklearn.linear_model._base import RegressorMixin, LinearModel
from sklearn.utils.validation import check_array, check_is_fitted

from admmlasso.path import admm_lasso_path


class LassoADMM(RegressorMixin, LinearModel):
    r"""Lasso estimator computing a whole regularization path with ADMM.

    The optimization objective for Lasso is:

    .. math::
        1 / (2 xx n_"samples")  ||y - Xw - w_0||_2 ^ 2 + lambda ||w||_1

    and is solved for a decreasing sequence of lambdas, each fit being warm
    started from the previous one. ``coef_`` and ``intercept_`` hold the
    solution for the smallest lambda.

    Parameters
    ----------
    lambdas : array-like, shape (n_lambdas,), optional
        Strictly positive and strictly decreasing regularization strengths.
        If None, a geometric grid from ``lambda_max`` is generated.

    n_lambdas : int, optional
        Number of lambdas in the generated grid.

    lambda_min_ratio : float, optional
        Ratio between the smallest and the largest lambda of the generated
        grid. Defaults to ``1e-2`` if ``n_samples < n_features`` and ``1e-4``
        otherwise.

    standardize : bool, optional (default=True)
        Scale the features to unit variance before fitting. Coefficients are
        always returned on the original scale.

    fit_intercept : bool, optional (default=True)
        Whether or not to fit an intercept.

    max_iter : int, optional
        Maximum number of ADMM iterations for each lambda.

    eps_abs : float, optional
        Absolute tolerance of the ADMM stopping criterion.

    eps_rel : float, optional
        Relative tolerance of the ADMM stopping criterion.

    rho_ratio : float, optional
        The ADMM penalty parameter is ``lambda / (rho_ratio * sprad)``, with
        ``sprad`` the largest eigenvalue of ``X.T @ X``.

    primal_update : str
        ``"linearized"`` or ``"exact"``, see :class:`.ADMMLasso`.

    rho_policy : str
        ``"fixed"`` keeps the penalty parameter of the first lambda along the
        path, ``"per_lambda"`` recomputes it for each lambda.

    rho_scaling : str
        ``"sprad"`` or ``"normalized"``, see :func:`.admm_lasso_path`.

    spectral_radius : str or callable
        ``"svds"``, ``"norm"``, ``"frobenius"`` or a function of ``X``
        returning the largest eigenvalue of ``X.T @ X`` (or an upper bound).

    verbose : bool or int
        Amount of verbosity.

    Attributes
    ----------
    lambdas_ : array, shape (n_lambdas,)
        The lambdas along the path.

    coef_path_ : scipy.sparse.csc_matrix, shape (n_features + 1, n_lambdas)
        Coefficients along the path. The first row holds the intercepts.

    n_iter_ : array, shape (n_lambdas,)
        Number of ADMM iterations for each lambda.

    coef_ : array, shape (n_features,)
        Parameter vector (:math:`w` in the cost function formula) for the
        smallest lambda.

    intercept_ : float
        Constant term in decision function for the smallest lambda.

    See Also
    --------
    admm_lasso_path : The function computing the path.
    """

    def __init__(self, lambdas=None, n_lambdas=100, lambda_min_ratio=None,
                 standardize=True, fit_intercept=True, max_iter=10_000,
                 eps_abs=1e-5, eps_rel=1e-5, rho_ratio=0.1,
                 primal_update="linearized", rho_policy="fixed",
                 rho_scaling="sprad", spectral_radius="svds", verbose=0):
        super().__init__()
        self.lambdas = lambdas
        self.n_lambdas = n_lambdas
        self.lambda_min_ratio = lambda_min_ratio
        self.standardize = standardize
        self.fit_intercept = fit_intercept
        self.max_iter = max_iter
        self.eps_abs = eps_abs
        self.eps_rel = eps_rel
        self.rho_ratio = rho_ratio
        self.primal_update = primal_update
        self.rho_policy = rho_policy
        self.rho_scaling = rho_scaling
        self.spectral_radius = spectral_radius
        self.verbose = verbose

    def fit(self, X, y):
        """Fit the model according to the given training data.

        Parameters
        ----------
        X : array-like, shape (n_samples, n_features)
            Training data, where n_samples is the number of samples and
            n_features is the number of features.
        y : array-like, shape (n_samples,)
            Target vector relative to X.

        Returns
        -------
        self :
            Fitted estimator.
        """
        lambdas, coefs, n_iters = admm_lasso_path(
            X, y, lambdas=self.lambdas, n_lambdas=self.n_lambdas,
            lambda_min_ratio=self.lambda_min_ratio, standardize=self.standardize,
            fit_intercept=self.fit_intercept, max_iter=self.max_iter,
            eps_abs=self.eps_abs, eps_rel=self.eps_rel, rho_ratio=self.rho_ratio,
            primal_update=self.primal_update, rho_policy=self.rho_policy,
            rho_scaling=self.rho_scaling, spectral_radius=self.spectral_radius,
            verbose=self.verbose)

        self.lambdas_ = lambdas
        self.coef_path_ = coefs
        self.n_iter_ = n_iters
        self.n_features_in_ = coefs.shape[0] - 1
        self.intercept_, self.coef_ = self.get_coef(-1)

        not_converged = np.flatnonzero(n_iters >= self.max_iter)
        if len(not_converged):
            warnings.warn(
                f"ADMM did not converge for {len(not_converged)} lambda(s) "
                f"out of {len(lambdas)} with max_iter={self.max_iter}, "
                f"eps_abs={self.eps_abs:.3e} and eps_rel={self.eps_rel:.3e}.\n"
                "Consider increasing `max_iter` and/or the tolerances.",
                category=ConvergenceWarning
            )
        return self

    def get_coef(self, index):
        """Return the intercept and coefficients for one lambda of the path.

        Parameters
        ----------
        index : int
            Position of the lambda in ``lambdas_``.

        Returns
        -------
        intercept : float
            Intercept for ``lambdas_[index]``.

        coef : array, shape (n_features,)
            Coefficients for ``lambdas_[index]``.
        """
        check_is_fitted(self, "coef_path_")
        column = self.coef_path_[:, index].toarray().ravel()
        return column[0], column[1:]

    def predict_path(self, X):
        """Predict target values for every lambda of the path.

        Parameters
        ----------
        X : array, shape (n_samples, n_features)
            The data matrix to predict from.

        Returns
        -------
        y_pred : array, shape (n_samples, n_lambdas)
            Predictions, one column per lambda.
        """
        check_is_fitted(self, "coef_path_")
        X = check_array(X, dtype=np.float64)
        if X.shape[1] != self.n_features_in_:
            raise ValueError(
                f"X has {X.shape[1]} features, but {self.__class__.__name__} "
                f"is expecting {self.n_features_in_} features as input.")
        intercepts = self.coef_path_[0, :].toarray().ravel()
        return np.asarray((self.coef_path_[1:, :].T @ X.T).T) + intercepts
