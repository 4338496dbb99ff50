from __future__ import annotations

import numpy as np

from rrpca.svd_backends import (ExactSVDStep, NumpySVD, RandomizedSVDStep,
                                SVDBackend, select_svd_step)


class RecordingBackend(SVDBackend):
    """Backend that records which primitive was called and with what rank."""

    def __init__(self) -> None:
        self.inner = NumpySVD(random_state=0)
        self.calls: list[tuple[str, int | None]] = []

    def full_svd(self, X):
        self.calls.append(("svd", None))
        return self.inner.full_svd(X)

    def approx_svd(self, X, rank, oversample, power_iters):
        self.calls.append(("rsvd", rank))
        return self.inner.approx_svd(X, rank, oversample, power_iters)


def _low_rank(m: int, n: int, r: int, seed: int) -> np.ndarray:
    rng = np.random.default_rng(seed)
    u, _ = np.linalg.qr(rng.normal(size=(m, r)))
    v, _ = np.linalg.qr(rng.normal(size=(n, r)))
    singulars = np.linspace(10.0, 2.0, num=r)
    return (u * singulars[np.newaxis, :]) @ v.T


def test_approx_svd_recovers_exact_low_rank_spectrum() -> None:
    A = _low_rank(60, 40, 5, seed=0)
    U, d, Vt = NumpySVD(random_state=1).approx_svd(A, 5, 5, 1)

    assert U.shape == (60, 5)
    assert d.shape == (5,)
    assert Vt.shape == (5, 40)
    np.testing.assert_allclose(d, np.linspace(10.0, 2.0, num=5), rtol=1e-8)
    np.testing.assert_allclose((U * d) @ Vt, A, atol=1e-8)


def test_approx_svd_returns_descending_values() -> None:
    rng = np.random.default_rng(3)
    A = rng.standard_normal((50, 30))
    _, d, _ = NumpySVD(random_state=3).approx_svd(A, 10, 10, 2)
    assert np.all(np.diff(d) <= 0)


def test_approx_svd_caps_rank_at_matrix_size() -> None:
    rng = np.random.default_rng(4)
    A = rng.standard_normal((10, 8))
    U, d, Vt = NumpySVD(random_state=0).approx_svd(A, 20, 10, 1)
    assert d.shape == (8,)
    assert U.shape == (10, 8)
    assert Vt.shape == (8, 8)


def test_same_seed_gives_identical_sketches() -> None:
    rng = np.random.default_rng(5)
    A = rng.standard_normal((40, 40))
    first = NumpySVD(random_state=7).approx_svd(A, 3, 5, 1)
    second = NumpySVD(random_state=7).approx_svd(A, 3, 5, 1)
    for a, b in zip(first, second):
        assert np.array_equal(a, b)


def test_randomized_step_uses_rsvd_for_small_rank() -> None:
    backend = RecordingBackend()
    step = RandomizedSVDStep(backend, oversample=10, power_iters=2)
    R = np.random.default_rng(6).standard_normal((20, 20))

    U, d, Vt = step(R, k=4)  # 4 is not > 20 / 5

    assert backend.calls == [("rsvd", 14)]
    assert step.last_method == "rsvd"
    assert d.shape == (14,)


def test_randomized_step_falls_back_to_exact_for_large_rank() -> None:
    backend = RecordingBackend()
    step = RandomizedSVDStep(backend, oversample=10, power_iters=2)
    R = np.random.default_rng(7).standard_normal((20, 20))

    _, d, _ = step(R, k=5)

    assert backend.calls == [("svd", None)]
    assert step.last_method == "svd"
    assert d.shape == (20,)


def test_randomized_step_reevaluates_every_call() -> None:
    backend = RecordingBackend()
    step = RandomizedSVDStep(backend, oversample=5, power_iters=1)
    R = np.random.default_rng(8).standard_normal((50, 30))

    for k in (1, 6, 7, 2):
        step(R, k)

    assert [method for method, _ in backend.calls] == ["rsvd", "rsvd", "svd", "rsvd"]
    assert backend.calls[0] == ("rsvd", 11)


def test_randomized_step_caps_requested_rank() -> None:
    backend = RecordingBackend()
    step = RandomizedSVDStep(backend, oversample=10, power_iters=0)
    step(np.eye(10), k=1)
    assert backend.calls == [("rsvd", 10)]


def test_exact_step_always_uses_full_svd() -> None:
    backend = RecordingBackend()
    step = ExactSVDStep(backend)
    R = np.random.default_rng(9).standard_normal((30, 30))
    step(R, 1)
    step(R, 25)
    assert backend.calls == [("svd", None), ("svd", None)]


def test_select_svd_step() -> None:
    backend = NumpySVD()
    assert isinstance(select_svd_step(False, backend), ExactSVDStep)
    step = select_svd_step(True, backend, oversample=4, power_iters=3)
    assert isinstance(step, RandomizedSVDStep)
    assert step.oversample == 4
    assert step.power_iters == 3
