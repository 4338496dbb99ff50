"""Randomized robust principal component analysis (RRPCA).

This package separates a real matrix into a low-rank plus a sparse
component using the inexact augmented Lagrange multiplier method, with an
exact or randomised SVD in the inner loop.  The main components include:

* :mod:`ialm` – the IALM controller (:func:`decompose` and the
  :class:`RRPCA` estimator);
* :mod:`svd_backends` – exact and randomised SVD primitives and the
  rank-adaptive SVD step;
* :mod:`thresholding` – soft-thresholding and singular value shrinkage;
* :mod:`norms` – the matrix norms used to initialise the iteration;
* :mod:`config` – YAML-backed hyperparameter configuration;
* :mod:`metrics` – diagnostics for decompositions;
* :mod:`plotting` – convergence and component figures;
* :mod:`utils` – YAML loading and dumping, missing-value zero fill;
* :mod:`validation` – checks on the input matrix and hyperparameters.
"""

from .config import RRPCAConfig  # noqa: F401
from .exceptions import DecompositionFailure, InvalidInputError, RRPCAError  # noqa: F401
from .ialm import RRPCA, IterationInfo, RRPCAResult, decompose  # noqa: F401
from .svd_backends import NumpySVD, SVDBackend  # noqa: F401

__all__ = [
    "RRPCA",
    "RRPCAConfig",
    "RRPCAResult",
    "IterationInfo",
    "decompose",
    "NumpySVD",
    "SVDBackend",
    "RRPCAError",
    "InvalidInputError",
    "DecompositionFailure",
]
