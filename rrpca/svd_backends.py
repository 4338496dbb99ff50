"""SVD primitives and the rank-adaptive SVD step.

The IALM controller never calls :mod:`numpy.linalg` directly.  It talks to
an :class:`SVDBackend`, which exposes two operations:

* ``full_svd(X)`` returns the exact thin SVD;
* ``approx_svd(X, rank, oversample, power_iters)`` returns an approximate
  truncated SVD computed with a randomised range finder.

On top of a backend, an SVD *step* decides which of the two operations to
use in a given iteration.  :class:`ExactSVDStep` always uses the exact SVD.
:class:`RandomizedSVDStep` requests ``k + 10`` triplets from the randomised
routine, but falls back to the exact SVD whenever the current target rank
``k`` exceeds one fifth of ``min(m, n)``.  The test is repeated on every
call because ``k`` moves from one iteration to the next.

Example
-------

```python
import numpy as np
from rrpca.svd_backends import NumpySVD, select_svd_step

step = select_svd_step(True, NumpySVD(random_state=0), oversample=10, power_iters=2)
U, d, Vt = step(np.random.randn(200, 100), k=3)
```
"""

from __future__ import annotations

import numpy as np
from numpy.linalg import svd

SVDTriplet = tuple[np.ndarray, np.ndarray, np.ndarray]


class SVDBackend:
    """Interface of the SVD primitive required by the solver.

    Both operations must return ``(U, d, Vt)`` with ``d`` in descending
    order, ``U`` of shape ``(m, r)`` and ``Vt`` of shape ``(r, n)``.
    """

    def full_svd(self, X: np.ndarray) -> SVDTriplet:
        raise NotImplementedError

    def approx_svd(self,
                   X: np.ndarray,
                   rank: int,
                   oversample: int,
                   power_iters: int) -> SVDTriplet:
        raise NotImplementedError


class NumpySVD(SVDBackend):
    """Dense exact and Gaussian randomised SVD built on :mod:`numpy`.

    Parameters
    ----------
    random_state : int, numpy.random.Generator or None, optional
        Seed (or generator) for the Gaussian test matrices drawn by
        :meth:`approx_svd`.  Each instance owns its own generator, so two
        instances created with the same integer seed produce identical
        sketches.
    """

    def __init__(self, random_state: int | np.random.Generator | None = None) -> None:
        self.rng = np.random.default_rng(random_state)

    def full_svd(self, X: np.ndarray) -> SVDTriplet:
        return svd(X, full_matrices=False)

    def approx_svd(self,
                   X: np.ndarray,
                   rank: int,
                   oversample: int,
                   power_iters: int) -> SVDTriplet:
        """Randomised truncated SVD of ``X``.

        Parameters
        ----------
        X : ndarray of shape (m, n)
            Matrix to decompose.
        rank : int
            Number of singular triplets to return (capped at ``min(m, n)``).
        oversample : int
            Extra sketch columns beyond ``rank``.
        power_iters : int
            Number of subspace (power) iterations.

        Returns
        -------
        U : ndarray of shape (m, rank)
        d : ndarray of shape (rank,)
        Vt : ndarray of shape (rank, n)
        """
        m, n = X.shape
        rank = max(1, min(rank, m, n))
        ell = min(rank + oversample, m, n)

        # 1) Sample the range of X with a Gaussian test matrix
        Omega = self.rng.standard_normal(size=(n, ell))
        Q, _ = np.linalg.qr(X @ Omega, mode="reduced")

        # 2) Power iterations, re-orthonormalised to keep small singular
        #    directions from being lost to round-off
        for _ in range(power_iters):
            W, _ = np.linalg.qr(X.T @ Q, mode="reduced")
            Q, _ = np.linalg.qr(X @ W, mode="reduced")

        # 3) SVD of the small projected matrix B = Q^T X
        B = Q.T @ X
        Ub, d, Vt = svd(B, full_matrices=False)
        U = Q @ Ub
        return U[:, :rank], d[:rank], Vt[:rank, :]


class ExactSVDStep:
    """Always compute the exact thin SVD of the residual."""

    def __init__(self, backend: SVDBackend) -> None:
        self.backend = backend
        self.last_method = "svd"

    def __call__(self, R: np.ndarray, k: int) -> SVDTriplet:
        self.last_method = "svd"
        return self.backend.full_svd(R)


class RandomizedSVDStep:
    """Randomised truncated SVD with an exact fallback for large ranks.

    Parameters
    ----------
    backend : SVDBackend
        Primitive providing ``full_svd`` and ``approx_svd``.
    oversample : int
        Oversampling parameter passed to ``approx_svd``.
    power_iters : int
        Number of power iterations passed to ``approx_svd``.
    extra_rank : int, optional
        Triplets requested beyond the target rank.  Defaults to 10.
    """

    def __init__(self,
                 backend: SVDBackend,
                 oversample: int,
                 power_iters: int,
                 extra_rank: int = 10) -> None:
        self.backend = backend
        self.oversample = int(oversample)
        self.power_iters = int(power_iters)
        self.extra_rank = int(extra_rank)
        self.last_method = "rsvd"

    def use_exact(self, shape: tuple[int, int], k: int) -> bool:
        """Return ``True`` when ``k`` is too large for truncation to pay off."""
        return k > min(shape) / 5

    def __call__(self, R: np.ndarray, k: int) -> SVDTriplet:
        if self.use_exact(R.shape, k):
            self.last_method = "svd"
            return self.backend.full_svd(R)
        self.last_method = "rsvd"
        rank = min(k + self.extra_rank, min(R.shape))
        return self.backend.approx_svd(R, rank, self.oversample, self.power_iters)


def select_svd_step(randomized: bool,
                    backend: SVDBackend,
                    oversample: int = 10,
                    power_iters: int = 2) -> ExactSVDStep | RandomizedSVDStep:
    """Pick the SVD step strategy for one decomposition call."""
    if randomized:
        return RandomizedSVDStep(backend, oversample, power_iters)
    return ExactSVDStep(backend)
