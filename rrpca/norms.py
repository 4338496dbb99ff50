"""Matrix norms used to initialise the IALM iteration."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.linalg import norm

from .svd_backends import SVDBackend

# Sketch settings for the rank-1 randomised estimate of the spectral norm
SPECTRAL_OVERSAMPLE = 10
SPECTRAL_POWER_ITERS = 1


@dataclass(frozen=True)
class MatrixNorms:
    """Norms of the input matrix.

    Attributes
    ----------
    spectral : float
        Largest singular value of ``A``.
    inf : float
        Maximum absolute row sum of ``A`` divided by ``lambda``.
    fro : float
        Frobenius norm of ``A``.
    """

    spectral: float
    inf: float
    fro: float

    @property
    def dual(self) -> float:
        """Dual norm ``max(spectral, inf)`` used to scale the multiplier."""
        return max(self.spectral, self.inf)


def estimate_norms(A: np.ndarray,
                   lam: float,
                   backend: SVDBackend,
                   randomized: bool = False) -> MatrixNorms:
    """Compute the spectral, scaled infinity and Frobenius norms of ``A``.

    Parameters
    ----------
    A : ndarray of shape (m, n)
        Input matrix.  It is not modified.
    lam : float
        Sparsity weight; the infinity norm is divided by it.
    backend : SVDBackend
        SVD primitive used for the spectral norm.
    randomized : bool, optional
        If ``True`` the spectral norm is taken from a rank-1 randomised SVD,
        otherwise from the exact SVD.

    Returns
    -------
    norms : MatrixNorms
    """
    if randomized:
        _, d, _ = backend.approx_svd(A, 1, SPECTRAL_OVERSAMPLE, SPECTRAL_POWER_ITERS)
    else:
        _, d, _ = backend.full_svd(A)
    spectral = float(d[0])
    inf = float(norm(A, np.inf)) / lam
    fro = float(norm(A, "fro"))
    return MatrixNorms(spectral=spectral, inf=inf, fro=fro)
