"""Argument checks shared by :func:`rrpca.decompose` and :class:`rrpca.RRPCAConfig`."""

from __future__ import annotations

import numbers

import numpy as np

from .exceptions import InvalidInputError

# bool, signed int, unsigned int, float
REAL_KINDS = "biuf"


def check_matrix(A) -> np.ndarray:
    """Return ``A`` as a finite real 2-D float array or raise.

    Objects exposing ``toarray()`` (sparse matrices) are densified first.
    Complex, string and object arrays are rejected rather than cast.
    """
    if hasattr(A, "toarray"):
        A = A.toarray()
    try:
        A = np.asarray(A)
    except (TypeError, ValueError) as exc:
        raise InvalidInputError(f"A must be a numeric matrix: {exc}") from exc
    if A.dtype.kind not in REAL_KINDS:
        raise InvalidInputError(f"A must be a real numeric matrix, got dtype {A.dtype}")
    A = A.astype(float, copy=False)
    if A.ndim != 2:
        raise InvalidInputError(f"A must be 2-D, got an array with ndim={A.ndim}")
    if A.size == 0:
        raise InvalidInputError(f"A must not be empty, got shape {A.shape}")
    if not np.all(np.isfinite(A)):
        raise InvalidInputError("A contains NaN or infinite entries")
    return A


def check_params(lam, maxiter, tol, oversample, power_iters) -> None:
    """Validate hyperparameters.

    ``lam`` may be ``None`` or ``"auto"``; any other value must be a
    positive real.
    """
    if not (lam is None or (isinstance(lam, str) and lam == "auto")):
        if isinstance(lam, (bool, str)) or not isinstance(lam, numbers.Real) or not lam > 0:
            raise InvalidInputError(f"lambda must be positive or 'auto', got {lam!r}")
    if isinstance(tol, bool) or not isinstance(tol, numbers.Real) or not tol > 0:
        raise InvalidInputError(f"tol must be positive, got {tol!r}")
    for name, value, lower in (("maxiter", maxiter, 1),
                               ("oversample", oversample, 0),
                               ("power_iters", power_iters, 0)):
        if isinstance(value, bool) or not isinstance(value, numbers.Integral) or value < lower:
            raise InvalidInputError(f"{name} must be an integer >= {lower}, got {value!r}")
