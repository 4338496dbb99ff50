"""Miscellaneous helpers for RRPCA runs."""

from __future__ import annotations

import numpy as np
import yaml


def load_config(config_path: str) -> dict:
    """Load a YAML configuration file.

    Parameters
    ----------
    config_path : str
        Path to a YAML file.

    Returns
    -------
    cfg : dict
        Configuration dictionary.
    """
    with open(config_path, 'r', encoding='utf-8') as f:
        cfg = yaml.safe_load(f)
    return cfg


def _to_builtin(value):
    if isinstance(value, np.ndarray):
        return value.tolist()
    if isinstance(value, np.generic):
        return value.item()
    if isinstance(value, dict):
        return {str(k): _to_builtin(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_builtin(v) for v in value]
    return value


def save_results(path: str, results: dict) -> None:
    """Dump ``results`` to YAML, converting NumPy values to plain Python."""
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(_to_builtin(results), f)


def zero_fill_nonfinite(A) -> np.ndarray:
    """Return a float copy of ``A`` with NaN and infinite entries set to 0.

    This is the crude missing-value policy applied to coverage matrices
    before decomposition.  :func:`rrpca.decompose` never calls it; callers
    opt in explicitly.
    """
    A = np.array(A, dtype=float, copy=True)
    A[~np.isfinite(A)] = 0.0
    return A
