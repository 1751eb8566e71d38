from abc import abstractmethod, ABC
from numbers import Integral

import numpy as np
from numpy.linalg import norm

from admmlasso.exceptions import InvalidConfig, NumericDegeneracy


class BaseADMM(ABC):
    r"""Base class for ADMM solvers of consensus problems.

    Solve

    .. math::
        min_(beta, z) f(beta) + g(z) quad "subject to" quad beta - z = 0

    with the scaled form of ADMM. Every iteration performs

    .. math::
        beta & <- "argmin"_beta f(beta) + rho / 2 ||beta - z + u||_2 ^ 2 \\
        z & <- "argmin"_z g(z) + rho / 2 ||beta - z + u||_2 ^ 2 \\
        u & <- u + beta - z

    and stops when both the primal residual :math:`r = beta - z` and the dual
    residual :math:`s = rho (z - z_"old")` satisfy

    .. math::
        ||r|| <= epsilon_"abs" sqrt(p) + epsilon_"rel" max(||beta||, ||z||) \\
        ||s|| <= epsilon_"abs" sqrt(p) + epsilon_"rel" rho ||u||

    Subclasses implement ``_update_primal`` and ``_update_split``,
    ``_rho_changed`` when they cache quantities depending on ``rho``, and
    ``_closed_form`` when the solution is known for some parameters.

    Parameters
    ----------
    n_features : int
        Dimension of ``beta``, ``z`` and ``u``.

    eps_abs : float, default 1e-5
        Absolute tolerance of the stopping criterion.

    eps_rel : float, default 1e-5
        Relative tolerance of the stopping criterion.

    verbose : bool or int, default 0
        Amount of verbosity. 0/False is silent.

    Attributes
    ----------
    beta : array, shape (n_features,)
        Primal variable.

    z : array, shape (n_features,)
        Split variable.

    u : array, shape (n_features,)
        Scaled dual variable.

    rho : float
        Penalty parameter of the augmented Lagrangian.

    n_iter_ : int
        Number of iterations performed by the last call to ``solve``.

    converged_ : bool
        Whether the last call to ``solve`` met the stopping criterion.

    primal_residual_, dual_residual_ : float
        Residual norms at the returned iterate.

    eps_primal_, eps_dual_ : float
        Tolerances the residual norms were compared to.

    References
    ----------
    .. [1] Boyd, S. and Parikh, N. and Chu, E. and Peleato, B. and Eckstein, J.
           "Distributed Optimization and Statistical Learning via the
           Alternating Direction Method of Multipliers", 2011,
           Foundations and Trends in Machine Learning.
           https://web.stanford.edu/~boyd/papers/admm_distr_stats.html
    """

    def __init__(self, n_features, eps_abs=1e-5, eps_rel=1e-5, verbose=0):
        if not eps_abs >= 0 or not eps_rel >= 0:
            raise InvalidConfig(
                "Tolerances must be non negative, got eps_abs=%s and eps_rel=%s."
                % (eps_abs, eps_rel))
        self.n_features = n_features
        self.eps_abs = eps_abs
        self.eps_rel = eps_rel
        self.verbose = verbose

        self.beta = np.zeros(n_features)
        self.z = np.zeros(n_features)
        self.u = np.zeros(n_features)
        self.rho = None
        self.n_iter_ = 0
        self.converged_ = False
        self.primal_residual_ = np.inf
        self.dual_residual_ = np.inf
        self.eps_primal_ = 0.
        self.eps_dual_ = 0.

    @abstractmethod
    def _update_primal(self, beta, z, u):
        """Compute the new primal variable.

        Parameters
        ----------
        beta : array, shape (n_features,)
            Current primal variable.

        z : array, shape (n_features,)
            Current split variable.

        u : array, shape (n_features,)
            Current scaled dual variable.

        Returns
        -------
        beta : array, shape (n_features,)
            Minimizer (or majorization-minimizer) of
            ``f(beta) + rho / 2 ||beta - z + u||^2``.
        """

    @abstractmethod
    def _update_split(self, v):
        """Compute the proximal operator of ``g / rho`` at ``v = beta + u``."""

    def _rho_changed(self):
        """Refresh quantities depending on ``rho``."""
        pass

    def _closed_form(self):
        """Set ``beta``, ``z`` and ``u`` to a known solution, if any.

        Returns
        -------
        found : bool
            Whether the iterates were set, in which case ``solve`` returns
            without iterating.
        """
        return False

    @property
    def is_initialized(self):
        return self.rho is not None

    def _reset(self, rho):
        self.beta = np.zeros(self.n_features)
        self.z = np.zeros(self.n_features)
        self.u = np.zeros(self.n_features)
        self.n_iter_ = 0
        self.converged_ = False
        self._set_rho(rho)

    def _set_rho(self, rho):
        rho = float(rho)
        if not np.isfinite(rho) or rho <= 0:
            raise InvalidConfig(f"`rho` must be finite and positive, got {rho}.")

        if self.rho is not None:
            # keep the unscaled dual variable rho * u unchanged
            self.u *= self.rho / rho
        self.rho = rho
        self._rho_changed()

    def solve(self, max_iter):
        """Run ADMM iterations until convergence or ``max_iter``.

        Parameters
        ----------
        max_iter : int
            Maximum number of iterations.

        Returns
        -------
        n_iter : int
            Number of iterations performed. ``n_iter == max_iter`` signals
            that the stopping criterion was not met (see ``converged_``).
            It is 0 when the solution is known in closed form.

        Raises
        ------
        NumericDegeneracy
            If an iterate is not finite. The solver keeps the last finite
            iterate.
        """
        if not self.is_initialized:
            raise RuntimeError("Call `init` before `solve`.")
        if not isinstance(max_iter, Integral) or max_iter < 1:
            raise InvalidConfig(
                f"`max_iter` must be a positive integer, got {max_iter!r}.")

        sqrt_p = np.sqrt(self.n_features)
        if self._closed_form():
            self.n_iter_ = 0
            self.converged_ = True
            self.primal_residual_, self.dual_residual_ = 0., 0.
            self.eps_primal_ = self.eps_abs * sqrt_p
            self.eps_dual_ = (self.eps_abs * sqrt_p +
                              self.eps_rel * self.rho * norm(self.u))
            return 0

        beta, z, u = self.beta, self.z, self.u
        converged = False

        for n_iter in range(1, max_iter + 1):
            beta_new = self._update_primal(beta, z, u)
            z_new = self._update_split(beta_new + u)

            if not (np.all(np.isfinite(beta_new)) and np.all(np.isfinite(z_new))):
                self.beta, self.z, self.u = beta, z, u
                raise NumericDegeneracy(
                    f"Non-finite iterate at ADMM iteration {n_iter}.")

            u = u + beta_new - z_new

            r_norm = norm(beta_new - z_new)
            s_norm = self.rho * norm(z_new - z)
            eps_primal = (self.eps_abs * sqrt_p +
                          self.eps_rel * max(norm(beta_new), norm(z_new)))
            eps_dual = self.eps_abs * sqrt_p + self.eps_rel * self.rho * norm(u)
            beta, z = beta_new, z_new

            if self.verbose:
                print(
                    f"Iteration {n_iter}: primal res {r_norm:.2e} "
                    f"(tol {eps_primal:.2e}), dual res {s_norm:.2e} "
                    f"(tol {eps_dual:.2e})"
                )

            if r_norm <= eps_primal and s_norm <= eps_dual:
                converged = True
                break

        self.beta, self.z, self.u = beta, z, u
        self.n_iter_ = n_iter
        self.converged_ = converged
        self.primal_residual_, self.dual_residual_ = r_norm, s_norm
        self.eps_primal_, self.eps_dual_ = eps_primal, eps_dual
        return n_iter
