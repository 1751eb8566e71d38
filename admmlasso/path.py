import warnings

import numpy as np
from sklearn.exceptions import ConvergenceWarning

from admmlasso.exceptions import NumericDegeneracy
from admmlasso.solvers import ADMMLasso
from admmlasso.standardization import DataStandardizer
from admmlasso.utils.sparse_ops import ColumnSparseBuilder
from admmlasso.utils.spectral import spectral_radius as get_spectral_radius
from admmlasso.utils.spectral import check_spectral_radius
from admmlasso.utils.validation import check_options, check_lambdas, check_X_y


RHO_FLOOR = 1e-8


def compute_rho(lam, rho_ratio, sprad, rho_scaling="sprad"):
    """Penalty parameter for the regularization strength ``lam``.

    Parameters
    ----------
    lam : float
        Regularization strength of the standardized problem.

    rho_ratio : float
        Ratio between ``lam`` and the penalty on the scaled objective.

    sprad : float
        Largest eigenvalue of ``X.T @ X``.

    rho_scaling : {'sprad', 'normalized'}, default 'sprad'
        ``'sprad'`` returns ``lam / (rho_ratio * sprad)``. ``'normalized'``
        applies the same rule to the objective divided by ``sprad``, whose
        smooth part has unit curvature. Expressed for the original objective
        this is ``lam / rho_ratio``.

    Returns
    -------
    rho : float
        The penalty parameter, floored at ``RHO_FLOOR``.
    """
    if rho_scaling == "normalized":
        rho = lam / rho_ratio
    else:
        rho = lam / (rho_ratio * sprad)
    return max(rho, RHO_FLOOR)

def admm_lasso_path(X, y, lambdas=None, n_lambdas=100, lambda_min_ratio=None,
                    standardize=True, fit_intercept=True, max_iter=10_000,
                    eps_abs=1e-5, eps_rel=1e-5, rho_ratio=0.1,
                    primal_update="linearized", rho_policy="fixed",
                    rho_scaling="sprad", spectral_radius="svds", verbose=0):
    r"""Compute the Lasso path with warm started ADMM.

    The optimization objective for each lambda is:

    .. math::
        1 / (2 xx n_"samples") ||y - X beta - beta_0||_2 ^ 2 + lambda ||beta||_1

    where, when ``standardize=True``, the penalty applies to the coefficients
    of the standardized columns of ``X``.

    Parameters
    ----------
    X : array-like, shape (n_samples, n_features)
        Design matrix.

    y : array-like, shape (n_samples,)
        Response vector.

    lambdas : array-like, shape (n_lambdas,), optional
        Strictly positive and strictly decreasing regularization strengths,
        used verbatim. If None, a geometric grid is generated.

    n_lambdas : int, default 100
        Number of lambdas in the generated grid.

    lambda_min_ratio : float in ]0, 1[, optional
        Ratio between the smallest and the largest lambda of the generated
        grid. Defaults to ``1e-2`` when ``n_samples < n_features`` and
        ``1e-4`` otherwise.

    standardize : bool, default True
        Scale the columns of ``X`` to unit variance before fitting.

    fit_intercept : bool, default True
        Whether or not to fit an intercept.

    max_iter : int, default 10_000
        Maximum number of ADMM iterations for each lambda.

    eps_abs : float, default 1e-5
        Absolute tolerance of the ADMM stopping criterion.

    eps_rel : float, default 1e-5
        Relative tolerance of the ADMM stopping criterion.

    rho_ratio : float, default 0.1
        The penalty parameter is ``rho = lambda / (rho_ratio * sprad)`` with
        ``sprad`` the largest eigenvalue of ``X.T @ X``.

    primal_update : {'linearized', 'exact'}, default 'linearized'
        How the primal variable is updated, see :class:`.ADMMLasso`.

    rho_policy : {'fixed', 'per_lambda'}, default 'fixed'
        ``'fixed'`` computes ``rho`` from the first lambda and keeps it along
        the path. ``'per_lambda'`` recomputes it for every lambda.

    rho_scaling : {'sprad', 'normalized'}, default 'sprad'
        ``'normalized'`` sizes ``rho`` for the objective divided by ``sprad``,
        that is ``rho = lambda / rho_ratio``, see :func:`compute_rho`. It
        converges faster when ``rho_ratio`` is large, at the price of a dual
        residual measured on a different scale.

    spectral_radius : {'svds', 'norm', 'frobenius'} or callable, default 'svds'
        How the largest eigenvalue of ``X.T @ X`` is computed, see
        :func:`admmlasso.utils.spectral_radius`. It is computed once.

    verbose : bool or int, default 0
        Amount of verbosity. 0/False is silent, 2 also prints ADMM iterations.

    Returns
    -------
    lambdas : array, shape (n_lambdas,)
        The lambdas along the path where models are computed.

    coefs : scipy.sparse.csc_matrix, shape (n_features + 1, n_lambdas)
        Coefficients along the path, the intercept being the first row.

    n_iters : array, shape (n_lambdas,)
        The number of ADMM iterations along the path. An entry equal to
        ``max_iter`` means the solver did not converge for that lambda, an
        entry equal to 0 that the solution is zero (``lambda >= lambda_max``).

    Raises
    ------
    NumericDegeneracy
        If the spectral radius is zero or not finite, if the grid must be
        generated for a constant ``y``, or if the first solve produces a
        non-finite iterate. A non-finite iterate at a later lambda only
        truncates the path to the lambdas solved before, with a
        ``ConvergenceWarning``.
    """
    check_options(
        "admm_lasso_path", lambdas=lambdas, n_lambdas=n_lambdas,
        lambda_min_ratio=lambda_min_ratio, standardize=standardize,
        fit_intercept=fit_intercept, max_iter=max_iter, eps_abs=eps_abs,
        eps_rel=eps_rel, rho_ratio=rho_ratio, primal_update=primal_update,
        rho_policy=rho_policy, rho_scaling=rho_scaling,
        spectral_radius=spectral_radius, verbose=verbose)
    X, y = check_X_y(X, y)
    if lambdas is not None:
        lambdas = check_lambdas(lambdas)

    n_samples, n_features = X.shape
    if lambda_min_ratio is None:
        lambda_min_ratio = 1e-2 if n_samples < n_features else 1e-4

    datstd = DataStandardizer(standardize=standardize, fit_intercept=fit_intercept)
    X, y = datstd.standardize(X, y)

    sprad = check_spectral_radius(get_spectral_radius(X, spectral_radius), X)
    solver = ADMMLasso(X, y, sprad, eps_abs=eps_abs, eps_rel=eps_rel,
                       primal_update=primal_update, verbose=max(verbose - 1, 0))

    if lambdas is None:
        # the grid starts exactly at the internal lambda_max
        lambda_max = solver.lambda_max()
        if lambda_max <= 0:
            raise NumericDegeneracy(
                "lambda_max is zero: y is constant, the lambda grid cannot be "
                "generated. Pass `lambdas` explicitly.")
        internal_lambdas = np.geomspace(
            lambda_max, lambda_min_ratio * lambda_max, num=n_lambdas)
        lambdas = datstd.inverse_transform_lambda(internal_lambdas)
    else:
        internal_lambdas = datstd.transform_lambda(lambdas)

    n_lambdas = len(lambdas)
    coefs = ColumnSparseBuilder(n_features + 1, n_lambdas,
                                nnz_per_col=min(n_samples, n_features) + 1)
    n_iters = np.zeros(n_lambdas, dtype=int)

    for t in range(n_lambdas):
        lam = internal_lambdas[t]
        if t == 0:
            solver.init(lam, compute_rho(lam, rho_ratio, sprad, rho_scaling))
        elif rho_policy == "per_lambda":
            solver.init_warm(
                lam, rho=compute_rho(lam, rho_ratio, sprad, rho_scaling))
        else:
            solver.init_warm(lam)

        try:
            n_iters[t] = solver.solve(max_iter)
        except NumericDegeneracy as e:
            if t == 0:
                raise
            warnings.warn(
                f"{e} The path stops at lambda {t + 1}/{n_lambdas} "
                f"({lambdas[t]:.4e}) and only holds the {t} lambdas solved "
                "before.", ConvergenceWarning)
            return lambdas[:t], coefs.tocsc()[:, :t], n_iters[:t]

        beta0, coef = datstd.recover(0., solver.get_x())

        column = np.zeros(n_features + 1)
        column[0] = beta0
        column[1:] = coef.toarray().ravel()
        coefs.set_column(t, column)

        if verbose:
            print(
                f"Lambda {t + 1}/{n_lambdas}: {lambdas[t]:.4e}, "
                f"iterations: {n_iters[t]}, non zeros: {coef.nnz}"
            )

    return lambdas, coefs.tocsc(), n_iters
