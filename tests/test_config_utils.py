from __future__ import annotations

import numpy as np
import pytest
import yaml

from rrpca import RRPCA
from rrpca.config import RRPCAConfig
from rrpca.exceptions import InvalidInputError
from rrpca.utils import load_config, save_results, zero_fill_nonfinite


def test_config_defaults_follow_reference_settings() -> None:
    cfg = RRPCAConfig()
    assert cfg.lam is None
    assert cfg.maxiter == 50
    assert cfg.tol == 1e-5
    assert cfg.oversample == 10
    assert cfg.power_iters == 2
    assert cfg.use_randomized_svd is True
    assert cfg.trace is False


def test_config_from_flat_yaml(tmp_path) -> None:
    path = tmp_path / "cfg.yaml"
    path.write_text("lam: auto\nmaxiter: 20\noversample: 5\nrandom_state: 4\n")
    cfg = RRPCAConfig.from_yaml(str(path))
    assert cfg.lam == "auto"
    assert cfg.maxiter == 20
    assert cfg.oversample == 5
    assert cfg.random_state == 4
    assert cfg.tol == 1e-5


def test_config_accepts_yaml_exponent_string() -> None:
    assert RRPCAConfig.from_dict({"tol": "1e-5"}).tol == 1e-5


def test_estimator_rejects_bad_config_types() -> None:
    with pytest.raises(InvalidInputError):
        RRPCA(maxiter="ten")


def test_config_round_trips_through_dict() -> None:
    cfg = RRPCAConfig(lam=0.2, maxiter=7, use_randomized_svd=False)
    assert RRPCAConfig.from_dict(cfg.to_dict()) == cfg


@pytest.mark.parametrize("bad", [
    {"lam": 0.0},
    {"lam": "big"},
    {"tol": -1e-3},
    {"maxiter": 0},
    {"oversample": -1},
    {"power_iters": -1},
    {"unknown_key": 1},
    {"maxiter": "ten"},
    {"maxiter": 2.5},
    {"oversample": None},
    {"power_iters": "2"},
    {"tol": "abc"},
    {"lam": [0.1]},
])
def test_config_rejects_invalid_values(bad) -> None:
    with pytest.raises(InvalidInputError):
        RRPCAConfig.from_dict(bad)


def test_save_results_converts_numpy_values(tmp_path) -> None:
    path = tmp_path / "out.yaml"
    save_results(str(path), {"k": np.int64(3),
                             "errors": np.array([0.5, 0.01]),
                             "final": np.float64(0.01)})
    loaded = load_config(str(path))
    assert loaded == {"k": 3, "errors": [0.5, 0.01], "final": 0.01}
    assert yaml.safe_load(path.read_text())["k"] == 3


def test_zero_fill_nonfinite_returns_copy() -> None:
    A = np.array([[1.0, np.nan], [np.inf, -np.inf]])
    filled = zero_fill_nonfinite(A)
    assert np.array_equal(filled, np.array([[1.0, 0.0], [0.0, 0.0]]))
    assert np.isnan(A[0, 1])
