# tests/test_reference.py
import numpy as np
import pytest

from core.moving_mean import InvalidConfiguration, moving_mean
from core.reference import batch_moving_mean, naive_moving_mean, resolve_device

def test_resolve_device_passthrough():
    assert resolve_device("cpu") == "cpu"
    assert resolve_device("auto") in {"cuda", "mps", "cpu"}

def test_naive_matches_known_values(step_data):
    out = naive_moving_mean(step_data, 5)
    np.testing.assert_allclose(out, [2.4, 2.6, 3.0, 3.4, 3.6, 4.0, 4.4, 4.6], atol=1e-12)

def test_short_input_gives_empty_result():
    assert naive_moving_mean([1, 2], 3).size == 0
    assert batch_moving_mean([1, 2], 3, device="cpu").size == 0

def test_batch_agrees_with_naive(rng):
    data = rng.normal(size=1000)
    for w in (1, 4, 10, 250):
        np.testing.assert_allclose(
            batch_moving_mean(data, w, device="cpu"), naive_moving_mean(data, w), atol=1e-10)

@pytest.mark.parametrize("w", [2, 5, 17])
def test_streaming_agrees_with_naive(rng, w):
    data = rng.uniform(-50, 50, size=2000)
    streamed = moving_mean().set_window(w).transform().feed(data)
    np.testing.assert_allclose(streamed, naive_moving_mean(data, w), atol=1e-9)

@pytest.mark.parametrize("w", [0, -1, 1.5, float("nan"), "3"])
def test_reference_rejects_bad_window(w):
    with pytest.raises(InvalidConfiguration):
        naive_moving_mean([1, 2, 3], w)
    with pytest.raises(InvalidConfiguration):
        batch_moving_mean([1, 2, 3], w, device="cpu")
