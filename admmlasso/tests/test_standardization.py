import pytest
import numpy as np
from numpy.testing import assert_allclose
from scipy import sparse

from admmlasso.standardization import DataStandardizer
from admmlasso.utils.data import make_correlated_data


X, y, _ = make_correlated_data(n_samples=30, n_features=4, random_state=0,
                               intercept=3.)
X[:, 2] += 5.  # non centered column


@pytest.mark.parametrize("standardize, fit_intercept",
                         [(True, True), (True, False), (False, True), (False, False)])
def test_recover_prediction_equivalence(standardize, fit_intercept):
    datstd = DataStandardizer(standardize=standardize, fit_intercept=fit_intercept)
    X_std, y_std = datstd.standardize(X.copy(), y.copy())

    coef_std = np.random.RandomState(1).randn(X.shape[1])
    beta0, coef = datstd.recover(0., coef_std)

    pred_orig = X @ coef + beta0
    pred_std = datstd.get_scaleY() * (X_std @ coef_std) + datstd.mean_y_
    assert_allclose(pred_orig, pred_std, rtol=1e-10, atol=1e-10)


@pytest.mark.parametrize("standardize, fit_intercept",
                         [(True, True), (False, False)])
def test_recover_sparse(standardize, fit_intercept):
    datstd = DataStandardizer(standardize=standardize, fit_intercept=fit_intercept)
    datstd.standardize(X.copy(), y.copy())

    coef_std = np.array([0., 1.5, 0., -2.])
    beta0_dense, coef_dense = datstd.recover(0., coef_std)
    beta0_sp, coef_sp = datstd.recover(0., sparse.csc_matrix(coef_std[:, None]))

    assert sparse.issparse(coef_sp)
    assert coef_sp.nnz == 2
    assert_allclose(coef_sp.toarray().ravel(), coef_dense)
    assert_allclose(beta0_sp, beta0_dense)


def test_standardize_inplace_moments():
    X_, y_ = X.copy(), y.copy()
    datstd = DataStandardizer(standardize=True, fit_intercept=True)
    X_std, y_std = datstd.standardize(X_, y_)

    assert X_std is X_ and y_std is y_
    n_samples = X.shape[0]
    assert_allclose(X_std.mean(axis=0), 0., atol=1e-12)
    assert_allclose(np.sum(X_std ** 2, axis=0), n_samples)
    assert_allclose(y_std.mean(), 0., atol=1e-12)
    assert_allclose(np.sum(y_std ** 2), n_samples)
    assert_allclose(datstd.scale_X_, X.std(axis=0))
    assert_allclose(datstd.scale_y_, y.std())


def test_no_intercept_no_centering():
    datstd = DataStandardizer(standardize=True, fit_intercept=False)
    X_std, _ = datstd.standardize(X.copy(), y.copy())

    assert_allclose(datstd.mean_X_, 0.)
    assert datstd.mean_y_ == 0.
    assert_allclose(datstd.scale_X_, np.sqrt(np.mean(X ** 2, axis=0)))
    assert_allclose(datstd.scale_y_, np.sqrt(np.mean(y ** 2)))
    # columns are only rescaled
    assert_allclose(X_std * datstd.scale_X_, X)

    beta0, _ = datstd.recover(0., np.ones(X.shape[1]))
    assert beta0 == 0.


@pytest.mark.parametrize("fit_intercept", [True, False])
def test_degenerate_columns_and_response(fit_intercept):
    X_ = X.copy()
    X_[:, 0] = 0.
    X_[:, 3] = 7.
    y_ = np.zeros(X.shape[0])

    datstd = DataStandardizer(standardize=True, fit_intercept=fit_intercept)
    X_std, y_std = datstd.standardize(X_, y_)

    assert np.all(np.isfinite(X_std))
    np.testing.assert_equal(X_std[:, 0], 0.)
    assert datstd.scale_X_[0] == 1.
    assert datstd.scale_y_ == 1.
    np.testing.assert_equal(y_std, 0.)
    if fit_intercept:
        # a constant column is absorbed by the intercept
        np.testing.assert_equal(X_std[:, 3], 0.)


def test_lambda_conversion():
    datstd = DataStandardizer()
    datstd.standardize(X.copy(), y.copy())

    lambdas = np.array([1., 0.1, 0.01])
    internal = datstd.transform_lambda(lambdas)
    assert_allclose(internal, lambdas * X.shape[0] / datstd.get_scaleY())
    assert_allclose(datstd.inverse_transform_lambda(internal), lambdas)


if __name__ == '__main__':
    pass
