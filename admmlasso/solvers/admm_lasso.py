import numpy as np
from numpy.linalg import norm
from scipy import sparse
from scipy.linalg import cho_factor, cho_solve

from admmlasso.exceptions import InvalidConfig
from admmlasso.solvers.base import BaseADMM
from admmlasso.utils.prox_funcs import ST_vec, value_L1


class ADMMLasso(BaseADMM):
    r"""ADMM solver for the Lasso with warm starts.

    The optimization objective is:

    .. math::
        1 / 2 ||y - X beta||_2 ^ 2 + lambda ||beta||_1

    It is split as :math:`beta - z = 0` with the smooth part on ``beta`` and the
    L1 norm on ``z``. One iteration reads:

    .. math::
        beta & <- (X^T X + rho I)^(-1) (X^T y + rho (z - u)) \\
        z & <- "ST"(beta + u, lambda / rho) \\
        u & <- u + beta - z

    With ``primal_update='linearized'``, the quadratic :math:`1/2 ||y - X
    beta||^2` is majorized at the current ``beta`` with curvature ``sprad``,
    and the first step becomes

    .. math::
        ("sprad" + rho) beta^+ = "sprad" beta - X^T X beta + X^T y + rho (z - u)

    When ``lambda >= lambda_max``, ``solve`` sets ``beta = z = 0`` and
    ``u = X^T y / rho``, which is the exact solution, without iterating.

    Parameters
    ----------
    X : array, shape (n_samples, n_features)
        Design matrix, usually standardized.

    y : array, shape (n_samples,)
        Response vector, usually standardized.

    sprad : float
        Largest eigenvalue of ``X.T @ X``, or an upper bound on it.

    eps_abs : float, default 1e-5
        Absolute tolerance of the stopping criterion.

    eps_rel : float, default 1e-5
        Relative tolerance of the stopping criterion.

    primal_update : {'linearized', 'exact'}, default 'linearized'
        ``'linearized'`` takes a proximal gradient step with weight ``sprad``,
        which requires no factorization.
        ``'exact'`` solves the linear system with a Cholesky factorization
        computed whenever ``rho`` changes.

    verbose : bool or int, default 0
        Amount of verbosity. 0/False is silent.

    Attributes
    ----------
    lam : float
        Current regularization strength.

    Xty : array, shape (n_features,)
        Pre-computed quantity equal to ``X.T @ y``.
    """

    def __init__(self, X, y, sprad, eps_abs=1e-5, eps_rel=1e-5,
                 primal_update="linearized", verbose=0):
        super().__init__(X.shape[1], eps_abs=eps_abs, eps_rel=eps_rel,
                         verbose=verbose)
        if primal_update not in ("linearized", "exact"):
            raise InvalidConfig(
                "Unknown primal update. Expected `linearized` or `exact`. "
                f"Got {primal_update!r}")
        sprad = float(sprad)
        if not np.isfinite(sprad) or sprad <= 0:
            raise InvalidConfig(f"`sprad` must be finite and positive, got {sprad}.")

        n_samples, n_features = X.shape
        self.X = X
        self.y = y
        self.sprad = sprad
        self.primal_update = primal_update
        self.lam = 0.

        self.Xty = X.T @ y
        if primal_update == "exact" or n_features <= n_samples:
            self._XtX = X.T @ X
        else:
            self._XtX = None
        self._chol = None

    def lambda_max(self):
        """Return the smallest lambda for which 0 is solution: ``||X.T @ y||_inf``."""
        return norm(self.Xty, ord=np.inf)

    def init(self, lam, rho):
        """Reset the iterates to zero and set ``lam`` and ``rho``.

        Parameters
        ----------
        lam : float
            Regularization strength, non negative.

        rho : float
            Penalty parameter, strictly positive.
        """
        self.lam = self._check_lambda(lam)
        self._reset(rho)

    def init_warm(self, lam, rho=None):
        """Keep the current iterates and change the regularization strength.

        Parameters
        ----------
        lam : float
            New regularization strength, non negative.

        rho : float, optional
            New penalty parameter. By default ``rho`` is kept, which is what
            makes warm starts along a path converge in few iterations. When
            given, the scaled dual variable is rescaled and the factorization
            is refreshed.
        """
        if not self.is_initialized:
            raise RuntimeError("Call `init` before `init_warm`.")
        self.lam = self._check_lambda(lam)
        self.n_iter_ = 0
        self.converged_ = False
        if rho is not None and rho != self.rho:
            self._set_rho(rho)

    def get_x(self):
        """Return the solution as a sparse column of shape (n_features, 1)."""
        return sparse.csc_matrix(self.z[:, np.newaxis])

    def objective(self):
        """Value of the Lasso objective at the solution."""
        residual = self.y - self.X @ self.z
        return 0.5 * residual @ residual + value_L1(self.z, self.lam)

    def _closed_form(self):
        # 0 is optimal and the dual below satisfies the primal optimality
        # condition X^T X beta - X^T y + rho (beta - z + u) = 0
        if self.lam < self.lambda_max():
            return False
        self.beta = np.zeros(self.n_features)
        self.z = np.zeros(self.n_features)
        self.u = self.Xty / self.rho
        return True

    def _update_primal(self, beta, z, u):
        rhs = self.Xty + self.rho * (z - u)
        if self.primal_update == "exact":
            return cho_solve(self._chol, rhs)

        if self._XtX is not None:
            XtX_beta = self._XtX @ beta
        else:
            XtX_beta = self.X.T @ (self.X @ beta)
        return (self.sprad * beta - XtX_beta + rhs) / (self.sprad + self.rho)

    def _update_split(self, v):
        return ST_vec(v, self.lam / self.rho)

    def _rho_changed(self):
        if self.primal_update == "exact":
            system = self._XtX.copy()
            system.flat[::self.n_features + 1] += self.rho
            self._chol = cho_factor(system)

    @staticmethod
    def _check_lambda(lam):
        lam = float(lam)
        if not np.isfinite(lam) or lam < 0:
            raise InvalidConfig(
                f"`lambda` must be finite and non negative, got {lam}.")
        return lam
