import numpy as np
import pytest

from lotto2d.models.posterior import (
    conditional_posterior,
    count_outcomes,
    counts_by_day,
    counts_by_month,
    dirichlet_posterior,
    shrink,
    uniform,
)


def test_count_outcomes_tabulates_every_value():
    counts, n = count_outcomes([3, 3, 99, 0])
    assert n == 4
    assert counts.shape == (100,)
    assert counts[3] == 2 and counts[99] == 1 and counts[0] == 1
    assert counts.sum() == 4


def test_count_outcomes_empty():
    counts, n = count_outcomes([])
    assert n == 0
    assert not counts.any()


def test_counts_by_day_and_month(day16_history):
    counts, n = counts_by_day(day16_history, 16)
    assert n == 150
    assert counts[7] == 150

    counts, n = counts_by_month(day16_history, 1)
    assert n == (day16_history["month"] == 1).sum()
    assert counts.sum() == n


@pytest.mark.parametrize("alpha", [0.0, 0.01, 0.5, 3.0])
def test_posterior_is_a_strictly_positive_distribution(alpha):
    counts, n = count_outcomes(list(range(100)) * 2 + [5, 5])
    p = dirichlet_posterior(counts, n, alpha)
    assert p.sum() == pytest.approx(1.0, abs=1e-12)
    assert (p > 0).all()


def test_posterior_alpha_zero_is_mle():
    counts, n = count_outcomes([1, 1, 2, 50])
    p = dirichlet_posterior(counts, n, alpha=0.0)
    assert np.allclose(p, counts / n)


def test_posterior_without_data_is_uniform():
    counts, n = count_outcomes([])
    for alpha in (0.0, 0.5):
        assert np.array_equal(dirichlet_posterior(counts, n, alpha), uniform())


def test_posterior_smoothing_formula():
    counts, n = count_outcomes([10] * 8)
    p = dirichlet_posterior(counts, n, alpha=0.5)
    assert p[10] == pytest.approx(8.5 / 58)
    assert p[11] == pytest.approx(0.5 / 58)


def test_shrink_with_no_observations_returns_base_exactly():
    p_base = dirichlet_posterior(*count_outcomes([1, 2, 3, 3]), alpha=0.5)
    p_spec = uniform()
    out = shrink(p_spec, p_base, 0, k=50)
    assert np.array_equal(out, p_base)
    assert out is not p_base


def test_shrink_weight_and_limit():
    p_base = uniform()
    p_spec = np.zeros(100)
    p_spec[4] = 1.0
    half = shrink(p_spec, p_base, 50, k=50)
    assert half[4] == pytest.approx(0.5 + 0.5 * 0.01)
    big = shrink(p_spec, p_base, 10**9, k=50)
    assert big[4] == pytest.approx(1.0, abs=1e-6)


def test_conditional_posterior_for_absent_key_is_base(day16_history):
    p_base = dirichlet_posterior(*count_outcomes(day16_history["last2"]), alpha=0.5)
    counts, n_spec = counts_by_day(day16_history, 31)
    assert n_spec == 0
    p = conditional_posterior(counts, n_spec, p_base)
    assert np.array_equal(p, p_base)
