"""Metric functions for evaluating low-rank plus sparse decompositions."""

from __future__ import annotations

from typing import Sequence

import numpy as np
from numpy.linalg import norm, svd


def relative_error(A: np.ndarray,
                   L: np.ndarray,
                   S: np.ndarray) -> float:
    """Compute the relative Frobenius error of a decomposition.

    Parameters
    ----------
    A : ndarray of shape (m, n)
        Reference matrix.
    L : ndarray of shape (m, n)
        Low-rank component.
    S : ndarray of shape (m, n)
        Sparse component.

    Returns
    -------
    rel_err : float
        ``||A - L - S||_F / ||A||_F``, or the absolute residual norm when
        ``A`` is zero.
    """
    A = np.asarray(A, dtype=float)
    residual = norm(A - L - S, 'fro')
    denom = norm(A, 'fro')
    if denom == 0.0:
        return float(residual)
    return float(residual / denom)


def sparsity(S: np.ndarray, atol: float = 0.0) -> float:
    """Fraction of entries of ``S`` whose magnitude exceeds ``atol``.

    Parameters
    ----------
    S : ndarray
        Sparse component.
    atol : float, optional
        Entries with ``|s| <= atol`` count as zero.

    Returns
    -------
    density : float
        Value in ``[0, 1]``; ``0`` means ``S`` is identically zero.
    """
    S = np.asarray(S)
    if S.size == 0:
        return 0.0
    return float(np.count_nonzero(np.abs(S) > atol) / S.size)


def numerical_rank(L: np.ndarray, rtol: float = 1e-10) -> int:
    """Number of singular values of ``L`` above ``rtol * sigma_max``."""
    s = svd(np.asarray(L, dtype=float), compute_uv=False)
    if s.size == 0 or s[0] == 0.0:
        return 0
    return int(np.sum(s > rtol * s[0]))


def is_non_decreasing(values: Sequence[float]) -> bool:
    """Return ``True`` if ``values[i] <= values[i+1]`` for every ``i``."""
    return all(values[i] <= values[i + 1] for i in range(len(values) - 1))
