"""Tests for the multinomial draw, stick-breaking weights and normalization helpers."""

import numpy as np
import pytest

from dpm_cluster.distributions import (
    draw_index,
    normalize_by_max,
    normalize_by_sum,
    stick_breaking_weights,
)
from dpm_cluster.errors import NumericalDegeneracyError


def test_single_nonzero_weight_always_drawn():
    rng = np.random.default_rng(0)
    assert all(draw_index(rng, [1.0, 0.0, 0.0]) == 0 for _ in range(2000))


def test_zero_weights_never_drawn():
    rng = np.random.default_rng(1)
    draws = {draw_index(rng, [0.0, 2.0, 0.0, 1.0, 0.0]) for _ in range(2000)}
    assert draws == {1, 3}


@pytest.mark.parametrize("weights", [
    [0.0, 0.0, 0.0],
    [1.0, -0.5, 1.0],
    [1.0, float("nan")],
    [],
    [float("inf"), 1.0],
])
def test_degenerate_weights_raise(weights):
    rng = np.random.default_rng(0)
    with pytest.raises(NumericalDegeneracyError):
        draw_index(rng, weights)


def test_draw_frequencies_follow_weights():
    rng = np.random.default_rng(2)
    draws = np.array([draw_index(rng, [1.0, 3.0]) for _ in range(20_000)])
    assert abs(np.mean(draws == 1) - 0.75) < 0.02


@pytest.mark.parametrize("factor", [8.0, 0.25])
def test_scaling_weights_leaves_draws_unchanged(factor):
    w = np.array([0.2, 0.5, 0.1, 0.2])
    rng_a, rng_b = np.random.default_rng(7), np.random.default_rng(7)
    a = [draw_index(rng_a, w) for _ in range(500)]
    b = [draw_index(rng_b, w * factor) for _ in range(500)]
    assert a == b


def test_stick_breaking_weights_are_a_sub_probability_vector():
    rng = np.random.default_rng(3)
    for _ in range(100):
        pi = stick_breaking_weights(rng, np.zeros(5), alpha0=1.0)
        assert pi.shape == (5,)
        assert np.all(pi >= 0)
        assert pi.sum() <= 1.0 + 1e-12


def test_stick_breaking_favours_occupied_components():
    rng = np.random.default_rng(4)
    draws = np.array([stick_breaking_weights(rng, [0, 50, 0], alpha0=1.0) for _ in range(500)])
    assert np.mean(np.argmax(draws, axis=1) == 1) > 0.9


def test_normalize_by_max():
    out = normalize_by_max([0.5, 2.0, 1.0])
    assert out.tolist() == [0.25, 1.0, 0.5]
    with pytest.raises(NumericalDegeneracyError):
        normalize_by_max([0.0, 0.0])


def test_normalize_by_sum():
    out = normalize_by_sum([1.0, 3.0])
    assert out.tolist() == [0.25, 0.75]
    with pytest.raises(NumericalDegeneracyError):
        normalize_by_sum([0.0, 0.0])
