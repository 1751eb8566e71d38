import pytest
import numpy as np
from numpy.testing import assert_allclose, assert_array_equal

from sklearn.base import clone
from sklearn.exceptions import ConvergenceWarning, NotFittedError
from sklearn.linear_model import Lasso as Lasso_sklearn
from sklearn.model_selection import GridSearchCV

from admmlasso import LassoADMM, admm_lasso_path
from admmlasso.exceptions import InvalidConfig, InvalidDimension
from admmlasso.utils.data import make_correlated_data


X, y, _ = make_correlated_data(n_samples=50, n_features=10, density=0.3,
                               random_state=0, intercept=-1.)
X_test, _, _ = make_correlated_data(n_samples=7, n_features=10, random_state=1)


def test_fit_matches_path():
    estimator = LassoADMM(n_lambdas=10, lambda_min_ratio=0.01).fit(X, y)
    lambdas, coefs, n_iters = admm_lasso_path(X, y, n_lambdas=10,
                                              lambda_min_ratio=0.01)

    assert_allclose(estimator.lambdas_, lambdas)
    assert_allclose(estimator.coef_path_.toarray(), coefs.toarray())
    assert_array_equal(estimator.n_iter_, n_iters)
    assert estimator.n_features_in_ == X.shape[1]

    last = coefs[:, -1].toarray().ravel()
    assert_allclose(estimator.intercept_, last[0])
    assert_allclose(estimator.coef_, last[1:])

    intercept, coef = estimator.get_coef(0)
    assert_array_equal(coef, 0.)
    assert_allclose(intercept, y.mean(), atol=1e-5)


def test_predict():
    estimator = LassoADMM(n_lambdas=10, lambda_min_ratio=0.01).fit(X, y)

    y_pred = estimator.predict(X_test)
    assert_allclose(y_pred, X_test @ estimator.coef_ + estimator.intercept_)

    y_path = estimator.predict_path(X_test)
    assert y_path.shape == (X_test.shape[0], 10)
    assert_allclose(y_path[:, -1], y_pred)
    for t in range(10):
        intercept, coef = estimator.get_coef(t)
        assert_allclose(y_path[:, t], X_test @ coef + intercept)

    with pytest.raises(ValueError, match="features"):
        estimator.predict_path(X_test[:, :3])


def test_match_sklearn_lasso():
    alpha = 0.05 * np.max(np.abs((X - X.mean(0)).T @ (y - y.mean()))) / len(y)
    ours = LassoADMM(lambdas=[alpha], standardize=False, eps_abs=1e-10,
                     eps_rel=1e-10, max_iter=100_000).fit(X, y)
    theirs = Lasso_sklearn(alpha=alpha, tol=1e-12, max_iter=100_000).fit(X, y)

    assert_allclose(ours.coef_, theirs.coef_, atol=1e-5)
    assert_allclose(ours.intercept_, theirs.intercept_, atol=1e-5)
    assert_allclose(ours.score(X, y), theirs.score(X, y), rtol=1e-6)


def test_convergence_warning():
    with pytest.warns(ConvergenceWarning, match="did not converge"):
        LassoADMM(n_lambdas=5, max_iter=1, eps_abs=1e-12, eps_rel=1e-12).fit(X, y)


def test_not_fitted():
    with pytest.raises(NotFittedError):
        LassoADMM().predict_path(X_test)


def test_errors_propagate():
    with pytest.raises(InvalidConfig):
        LassoADMM(rho_ratio=-1.).fit(X, y)
    with pytest.raises(InvalidConfig):
        LassoADMM(rho_scaling="none").fit(X, y)
    with pytest.raises(InvalidDimension):
        LassoADMM().fit(X, y[:-1])


def test_clone_and_grid_search():
    estimator = LassoADMM(n_lambdas=5, rho_ratio=1.)
    cloned = clone(estimator)
    assert cloned.get_params() == estimator.get_params()

    grid = GridSearchCV(estimator, {"lambda_min_ratio": [0.5, 0.01]}, cv=3)
    grid.fit(X, y)
    assert grid.best_params_["lambda_min_ratio"] in (0.5, 0.01)


if __name__ == '__main__':
    pass
