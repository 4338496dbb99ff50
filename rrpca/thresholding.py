"""Proximal operators used by the IALM iteration.

* :func:`soft_threshold` is the proximal operator of the scaled l1 norm
  and produces the sparse component.
* :func:`singular_value_shrink` rebuilds a matrix from the leading singular
  triplets after shrinking the singular values, i.e. the proximal operator
  of the nuclear norm restricted to the triplets that survive.
"""

from __future__ import annotations

import numpy as np


def soft_threshold(T: np.ndarray, eps: float) -> np.ndarray:
    """Elementwise soft-thresholding of ``T`` by ``eps``.

    Parameters
    ----------
    T : ndarray of shape (m, n)
        Residual matrix.
    eps : float
        Threshold.  Entries with ``|t| <= eps`` map to exactly zero.

    Returns
    -------
    S : ndarray of shape (m, n)
        ``t - eps`` where ``t > eps``, ``t + eps`` where ``t < -eps`` and
        ``0`` elsewhere.
    """
    S = np.zeros_like(T, dtype=float)
    high = T > eps
    S[high] = T[high] - eps
    low = T < -eps
    S[low] = T[low] + eps
    return S


def singular_value_shrink(U: np.ndarray,
                          d: np.ndarray,
                          Vt: np.ndarray,
                          tau: float,
                          rank: int) -> np.ndarray:
    """Reconstruct ``U[:, :rank] diag(d[:rank] - tau) Vt[:rank]``.

    Parameters
    ----------
    U : ndarray of shape (m, r)
        Left singular vectors.
    d : ndarray of shape (r,)
        Singular values in descending order.
    Vt : ndarray of shape (r, n)
        Right singular vectors (transposed).
    tau : float
        Amount subtracted from every retained singular value.
    rank : int
        Number of leading triplets to keep.  ``0`` gives a zero matrix.

    Returns
    -------
    X : ndarray of shape (m, n)
    """
    # Scale the columns of U instead of forming diag(.)
    return (U[:, :rank] * (d[:rank] - tau)) @ Vt[:rank, :]
