import numpy as np
import pytest

from lotto2d.config import resolve_config
from lotto2d.errors import ConfigError
from lotto2d.predictor import build_posterior, rank_distribution, single_analysis
from lotto2d.scraper import records_to_frame
from tests.helpers import make_history


def test_day_effect_ranks_outcome_first(day16_history):
    out = single_analysis(day16_history, {"target_day": 16})
    top, p = out["rankings"][0]
    assert top == 7
    assert p > 0.05
    assert out["posterior"].sum() == pytest.approx(1.0)


def test_single_analysis_fields(day16_history):
    out = single_analysis(day16_history)
    assert out["N"] == 300
    assert out["most_recent"] == int(day16_history["last2"].iloc[0])
    assert out["target_month"] == int(day16_history["month"].iloc[0])
    assert out["target_day"] == 16
    assert len(out["rankings"]) == 100
    probs = [p for _, p in out["rankings"]]
    assert probs == sorted(probs, reverse=True)
    assert out["counts"].sum() == 300
    assert out["z_scores"].shape == out["p_values"].shape == out["significant"].shape == (100,)
    assert out["significant"][7]
    assert set(out["components"]) == {"base", "day", "month", "markov"}
    assert out["expected_value"] == pytest.approx(2000 * out["rankings"][0][1] - 80)


def test_target_month_override(day16_history):
    out = single_analysis(day16_history, {"target_month": 3})
    assert out["target_month"] == 3


def test_empty_history_gives_uniform():
    out = single_analysis(records_to_frame([]))
    assert out["N"] == 0
    assert out["most_recent"] is None
    assert out["target_month"] == 1
    assert np.allclose(out["posterior"], 0.01)
    assert not out["significant"].any()


def test_malformed_config_rejected_at_entry(day16_history):
    with pytest.raises(ConfigError):
        single_analysis(day16_history, {"weights": [1, 1]})


def test_analysis_does_not_mutate_history(day16_history):
    before = day16_history.copy()
    single_analysis(day16_history)
    assert day16_history.equals(before)


def test_markov_component_follows_most_recent():
    seq = [13, 42] * 30 + [13]
    df = make_history(seq)
    _, components = build_posterior(df, resolve_config(), 16, 1)
    assert components["most_recent"] == 13
    assert int(np.argmax(components["markov"])) == 42


def test_rank_distribution_breaks_ties_by_outcome():
    post = np.full(100, 0.01)
    ranked = rank_distribution(post)
    assert [d for d, _ in ranked[:3]] == [0, 1, 2]
