"""Hyperparameter configuration for RRPCA runs.

Configurations are plain YAML mappings, for example::

    lam: auto
    maxiter: 50
    tol: 1.0e-5
    oversample: 10
    power_iters: 2
    use_randomized_svd: true
    trace: false
    random_state: 0
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Any

from .exceptions import InvalidInputError
from .utils import load_config
from .validation import check_params


@dataclass
class RRPCAConfig:
    """Hyperparameters of :func:`rrpca.decompose`.

    ``lam`` may be a positive float, ``"auto"`` or ``None``; the last two
    resolve to ``max(m, n) ** -0.5`` once the matrix shape is known.
    """

    lam: float | str | None = None
    maxiter: int = 50
    tol: float = 1e-5
    oversample: int = 10
    power_iters: int = 2
    use_randomized_svd: bool = True
    trace: bool = False
    random_state: int | None = None

    def validate(self) -> "RRPCAConfig":
        # PyYAML reads exponents without a dot (1e-5) as strings
        if isinstance(self.tol, str):
            try:
                self.tol = float(self.tol)
            except ValueError as exc:
                raise InvalidInputError(f"tol must be positive, got {self.tol!r}") from exc
        check_params(self.lam, self.maxiter, self.tol, self.oversample, self.power_iters)
        return self

    @classmethod
    def from_dict(cls, cfg: dict[str, Any]) -> "RRPCAConfig":
        known = {f.name for f in fields(cls)}
        unknown = set(cfg) - known
        if unknown:
            raise InvalidInputError(f"unknown configuration keys: {sorted(unknown)}")
        return cls(**cfg).validate()

    @classmethod
    def from_yaml(cls, path: str) -> "RRPCAConfig":
        """Load a configuration from a YAML file.

        An optional top-level ``rrpca`` section is unwrapped, so the
        hyperparameters can live next to other settings in a shared file.
        """
        cfg = load_config(path) or {}
        if "rrpca" in cfg:
            cfg = cfg["rrpca"] or {}
        return cls.from_dict(cfg)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
