"""
==================================
Lasso regularization path via ADMM
==================================
Compute the whole Lasso path with warm started ADMM and compare the
coefficients to the ones of scikit-learn's coordinate descent.
"""

import numpy as np
import matplotlib.pyplot as plt
from sklearn.linear_model import lasso_path

from admmlasso import admm_lasso_path
from admmlasso.utils.data import make_correlated_data

# %%
# Simulate a problem with correlated features and a sparse ground truth.
X, y, w_true = make_correlated_data(
    n_samples=200, n_features=30, rho=0.5, density=0.3, random_state=0)

# %%
# The lambda grid is generated from ``lambda_max``, the smallest lambda for
# which all coefficients are zero. Every point is warm started from the
# previous one, so that most of them converge in a few iterations.
lambdas, coefs, n_iters = admm_lasso_path(
    X, y, n_lambdas=50, lambda_min_ratio=1e-3, standardize=False,
    eps_abs=1e-8, eps_rel=1e-8)
print(f"Total number of ADMM iterations: {n_iters.sum()}")

# %%
# Coordinate descent on the same grid. The intercept is the first row of
# ``coefs``, hence it is dropped for the comparison.
X_c, y_c = X - X.mean(axis=0), y - y.mean()
_, coefs_cd, _ = lasso_path(X_c, y_c, alphas=lambdas, tol=1e-10)
print("Max difference with coordinate descent: "
      f"{np.max(np.abs(coefs[1:].toarray() - coefs_cd)):.2e}")

# %%
# Finally, plot the path.
plt.close('all')
fig, axarr = plt.subplots(2, 1, sharex=True, figsize=(6, 6),
                          constrained_layout=True)
axarr[0].semilogx(lambdas, coefs[1:].toarray().T)
axarr[0].set_ylabel("coefficients")
axarr[0].set_title("Lasso path")
axarr[1].semilogx(lambdas, n_iters, marker='.')
axarr[1].set_ylabel("ADMM iterations")
axarr[1].set_xlabel(r"$\lambda$")
plt.show(block=False)
