"""Exception types raised by the RRPCA solver."""

from __future__ import annotations


class RRPCAError(Exception):
    """Base class for all errors raised by :mod:`rrpca`."""


class InvalidInputError(RRPCAError, ValueError):
    """The input matrix or a hyperparameter is outside its valid domain.

    Raised before any iteration state is created, so no partial result
    is ever returned alongside it.
    """


class DecompositionFailure(RRPCAError, RuntimeError):
    """The SVD primitive failed on a residual matrix.

    Parameters
    ----------
    message : str
        Human readable description.
    iteration : int
        Iteration index at which the failure occurred.  ``0`` denotes the
        norm estimation stage that runs before the first iteration.

    Notes
    -----
    The original exception is chained as ``__cause__``.  Failures are not
    retried.
    """

    def __init__(self, message: str, iteration: int) -> None:
        super().__init__(message)
        self.iteration = int(iteration)
