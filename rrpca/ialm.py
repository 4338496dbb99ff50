"""Robust PCA via the inexact augmented Lagrange multiplier (IALM) method.

This module contains the IALM controller.  Given a real ``(m, n)`` matrix
``A`` it computes a low-rank component ``L`` and a sparse component ``S``
with ``A ~= L + S`` by alternating

* a soft-thresholding update of ``S``;
* a singular value shrinkage update of ``L`` whose SVD width follows an
  adaptive target rank ``k``;
* an update of the Lagrange multiplier ``Z`` and of the penalty ``mu``.

The SVD is either exact or randomised (see :mod:`rrpca.svd_backends`).
All iteration state lives in an :class:`IALMState` owned by a single call
of :func:`decompose`, so independent calls can run concurrently.

References
----------
Lin, Chen and Ma, "The augmented Lagrange multiplier method for exact
recovery of corrupted low-rank matrices" (2010), arXiv:1009.5055.

Erichson, Voronin, Brunton and Kutz, "Randomized matrix decompositions
using R" (2016), arXiv:1608.02148.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable

import numpy as np
from numpy.linalg import norm

from .config import RRPCAConfig
from .exceptions import DecompositionFailure
from .norms import estimate_norms
from .svd_backends import NumpySVD, SVDBackend, select_svd_step
from .thresholding import singular_value_shrink, soft_threshold
from .validation import check_matrix, check_params

logger = logging.getLogger(__name__)

GAMMA = 1.25
RHO = 1.5
MU_BAR_FACTOR = 1e7
RANK_GROWTH = 0.05


@dataclass
class IALMState:
    """Mutable state of one decomposition run."""

    L: np.ndarray
    S: np.ndarray
    Z: np.ndarray
    mu: float
    mu_bar: float
    k: int = 1
    iteration: int = 1
    err: float = 1.0
    errors: list[float] = field(default_factory=list)


@dataclass(frozen=True)
class IterationInfo:
    """Diagnostics emitted after every iteration.

    ``mu`` is the penalty used during the iteration, before the schedule
    update.  ``method`` is ``"svd"`` or ``"rsvd"``.
    """

    iteration: int
    svp: int
    k: int
    err: float
    mu: float
    method: str


@dataclass
class RRPCAResult:
    """Output of :func:`decompose`.

    Attributes
    ----------
    L : ndarray of shape (m, n)
        Low-rank component.
    S : ndarray of shape (m, n)
        Sparse component.
    k : int
        Final target rank.
    errors : list of float
        Relative Frobenius error ``||A - L - S||_F / ||A||_F`` recorded at
        every iteration.
    """

    L: np.ndarray
    S: np.ndarray
    k: int
    errors: list[float]

    @property
    def n_iter(self) -> int:
        return len(self.errors)

    def converged(self, tol: float) -> bool:
        """Whether the last recorded error reached ``tol``."""
        return bool(self.errors) and self.errors[-1] <= tol


def update_target_rank(svp: int, k: int, shape: tuple[int, int]) -> int:
    """Adapt the target rank from the predicted rank ``svp``.

    Grows by one when ``svp <= k`` and by 5% of the column count otherwise,
    capped at ``n`` and at ``min(m, n)``.
    """
    m, n = shape
    if svp <= k:
        k_new = min(svp + 1, n)
    else:
        k_new = min(svp + int(round(RANK_GROWTH * n)), n)
    return min(k_new, m, n)


def decompose(A,
              lam: float | str | None = None,
              maxiter: int = 50,
              tol: float = 1e-5,
              oversample: int = 10,
              power_iters: int = 2,
              use_randomized_svd: bool = True,
              trace: bool = False,
              callback: Callable[[IterationInfo], None] | None = None,
              svd_backend: SVDBackend | None = None,
              random_state: int | None = None) -> RRPCAResult:
    """Separate ``A`` into a low-rank and a sparse component.

    Parameters
    ----------
    A : array_like of shape (m, n)
        Finite real matrix.  Objects exposing ``toarray()`` (sparse
        matrices) are densified.  ``A`` itself is never modified.
    lam : float, "auto" or None, optional
        Sparsity weight.  Defaults to ``max(m, n) ** -0.5``.
    maxiter : int, optional
        Iteration budget.
    tol : float, optional
        Stop once the relative Frobenius error is ``<= tol``.
    oversample : int, optional
        Oversampling parameter of the randomised SVD.
    power_iters : int, optional
        Number of power iterations of the randomised SVD.
    use_randomized_svd : bool, optional
        If ``True``, use the randomised SVD (with the exact fallback for
        large target ranks), otherwise always the exact SVD.
    trace : bool, optional
        Print one progress line per iteration.
    callback : callable, optional
        Called with an :class:`IterationInfo` after every iteration.
    svd_backend : SVDBackend, optional
        SVD primitive.  Defaults to a fresh :class:`NumpySVD` seeded with
        ``random_state``.
    random_state : int, optional
        Seed for the default backend.  Ignored when ``svd_backend`` is given.

    Returns
    -------
    result : RRPCAResult
        ``L``, ``S``, the final target rank ``k`` and the error history.
        Exhausting ``maxiter`` is not an error; compare the last entry of
        ``errors`` with ``tol`` to tell the two outcomes apart.

    Raises
    ------
    InvalidInputError
        If ``A`` or a hyperparameter is invalid.
    DecompositionFailure
        If the SVD primitive raises while estimating the norms or
        decomposing a residual.  ``iteration`` tells which stage failed.
    """
    A = check_matrix(A)
    check_params(lam, maxiter, tol, oversample, power_iters)
    if lam is None or lam == "auto":
        lam = max(A.shape) ** -0.5
    lam = float(lam)
    m, n = A.shape

    if not np.any(A):
        # Nothing to separate: the zero split is exact
        logger.debug("zero input matrix of shape %s", A.shape)
        return RRPCAResult(L=np.zeros_like(A), S=np.zeros_like(A), k=1, errors=[0.0])

    backend = svd_backend if svd_backend is not None else NumpySVD(random_state)
    svd_step = select_svd_step(use_randomized_svd, backend, oversample, power_iters)

    try:
        norms = estimate_norms(A, lam, backend, randomized=use_randomized_svd)
    except Exception as exc:
        raise DecompositionFailure(f"norm estimation failed: {exc}", iteration=0) from exc

    mu0 = GAMMA / norms.spectral
    mu_bar = mu0 * MU_BAR_FACTOR
    state = IALMState(L=np.zeros_like(A),
                      S=np.zeros_like(A),
                      Z=A / norms.dual,
                      mu=min(mu0 * RHO, mu_bar),
                      mu_bar=mu_bar)
    logger.debug("rrpca start: shape=%s lambda=%.4g spectral=%.4g dual=%.4g",
                 A.shape, lam, norms.spectral, norms.dual)

    while state.err > tol and state.iteration <= maxiter:
        mu = state.mu

        # 1. Sparse update via soft-thresholding
        state.S = soft_threshold(A - state.L + state.Z / mu, lam / mu)

        # 2./3. SVD of the low-rank residual
        R = A - state.S + state.Z / mu
        try:
            U, d, Vt = svd_step(R, state.k)
        except Exception as exc:
            raise DecompositionFailure(
                f"SVD failed at iteration {state.iteration}: {exc}",
                iteration=state.iteration) from exc
        del R

        # 4./5. Predicted rank and target rank for the next SVD
        svp = int(np.sum(d > 1 / mu))
        state.k = update_target_rank(svp, state.k, (m, n))

        # 6. Low-rank update, sliced by the predicted rank
        state.L = singular_value_shrink(U, d, Vt, 1 / mu, svp)

        # 7./8. Multiplier update and convergence metric
        Astar = A - state.L - state.S
        state.Z = state.Z + mu * Astar
        state.err = float(norm(Astar, "fro")) / norms.fro
        state.errors.append(state.err)

        info = IterationInfo(iteration=state.iteration, svp=svp, k=state.k,
                             err=state.err, mu=mu, method=svd_step.last_method)
        logger.debug("iteration %d: svp=%d k=%d err=%.3e mu=%.3e (%s)",
                     info.iteration, svp, state.k, state.err, mu, info.method)
        if trace:
            print(f"Iteration: {info.iteration} predicted rank = {svp} "
                  f"target rank k = {state.k} Fro. error = {state.err:.6e}")
        if callback is not None:
            callback(info)

        # 9./10. Penalty schedule
        state.mu = min(mu * RHO, state.mu_bar)
        state.iteration += 1

    if state.err > tol:
        logger.info("convergence not reached after %d iterations (err=%.3e, tol=%.1e)",
                    maxiter, state.err, tol)

    return RRPCAResult(L=state.L, S=state.S, k=state.k, errors=state.errors)


class RRPCA:
    """Estimator-style wrapper around :func:`decompose`.

    Parameters
    ----------
    config : RRPCAConfig, optional
        Hyperparameters.  Keyword arguments override individual fields.
    svd_backend : SVDBackend, optional
        SVD primitive forwarded to :func:`decompose`.
    **overrides
        Any field of :class:`RRPCAConfig`.

    Attributes
    ----------
    L_, S_ : ndarray
        Components of the last fitted matrix.
    k_ : int
        Final target rank.
    errors_ : list of float
        Error history of the last fit.
    """

    def __init__(self,
                 config: RRPCAConfig | None = None,
                 svd_backend: SVDBackend | None = None,
                 **overrides) -> None:
        base = config.to_dict() if config is not None else {}
        base.update(overrides)
        self.config = RRPCAConfig.from_dict(base)
        self.svd_backend = svd_backend

        self.L_: np.ndarray | None = None
        self.S_: np.ndarray | None = None
        self.k_: int | None = None
        self.errors_: list[float] = []

    @classmethod
    def from_yaml(cls, path: str, **overrides) -> "RRPCA":
        return cls(RRPCAConfig.from_yaml(path), **overrides)

    @property
    def converged_(self) -> bool:
        return bool(self.errors_) and self.errors_[-1] <= self.config.tol

    def fit(self, A) -> "RRPCA":
        cfg = self.config
        result = decompose(A,
                           lam=cfg.lam,
                           maxiter=cfg.maxiter,
                           tol=cfg.tol,
                           oversample=cfg.oversample,
                           power_iters=cfg.power_iters,
                           use_randomized_svd=cfg.use_randomized_svd,
                           trace=cfg.trace,
                           svd_backend=self.svd_backend,
                           random_state=cfg.random_state)
        self.L_ = result.L
        self.S_ = result.S
        self.k_ = result.k
        self.errors_ = result.errors
        return self

    def fit_transform(self, A) -> tuple[np.ndarray, np.ndarray]:
        self.fit(A)
        return self.L_, self.S_
