"""
Next-Draw Posterior for the Last-Two-Digit Prize

Assembles the four component views of a history frame (global, target day,
target month, Markov) and fuses them into the posterior for the next draw.
`build_posterior` is shared with the backtester so both paths run the exact
same pipeline.
"""
import numpy as np
import pandas as pd

from lotto2d.analysis import significance_analysis
from lotto2d.config import PRIZE_LAST2, TICKET_PRICE, resolve_config
from lotto2d.models.fusion import COMPONENTS, combine_posterior
from lotto2d.models.markov_chain import markov_distribution
from lotto2d.models.posterior import (
    conditional_posterior,
    count_outcomes,
    counts_by_day,
    counts_by_month,
    dirichlet_posterior,
)


def build_posterior(history, cfg, target_day, target_month):
    """
    Fused posterior for a draw on (target_day, target_month).

    Parameters
    ----------
    history : pd.DataFrame
        Training draws ordered newest first.
    cfg : dict
        A resolved configuration (see `resolve_config`).

    Returns
    -------
    (posterior, components) where components maps base/day/month/markov to
    their distributions and also carries 'most_recent'.
    """
    counts, n = count_outcomes(history["last2"])
    p_base = dirichlet_posterior(counts, n, cfg["alpha"])
    p_day = conditional_posterior(*counts_by_day(history, target_day), p_base,
                                  cfg["alpha"], cfg["k"])
    p_month = conditional_posterior(*counts_by_month(history, target_month), p_base,
                                    cfg["alpha"], cfg["k"])
    p_markov, most_recent = markov_distribution(history["last2"].to_numpy(), cfg["epsilon"])

    post = combine_posterior(p_base, p_day, p_month, p_markov, cfg["weights"])
    components = dict(zip(COMPONENTS, (p_base, p_day, p_month, p_markov)))
    components["most_recent"] = most_recent
    return post, components


def rank_distribution(post):
    """Outcomes sorted by probability descending; ties go to the lower outcome."""
    order = np.argsort(-np.asarray(post), kind="stable")
    return [(int(d), float(post[d])) for d in order]


def single_analysis(df: pd.DataFrame, cfg=None) -> dict:
    """
    Posterior for the next draw plus significance flags vs uniform.

    The target month defaults to the month of the most recent draw
    (January when the history is empty).

    Returns
    -------
    dict with keys:
        N, most_recent, target_day, target_month,
        posterior     : np.ndarray of length 100
        rankings      : list of (outcome, probability) sorted desc
        counts, z_scores, p_values, significant, flagged,
        components    : base/day/month/markov distributions
        expected_value: EV in baht of one ticket on the top pick
        settings      : the resolved configuration
    """
    cfg = resolve_config(cfg)

    target_day = cfg["target_day"]
    target_month = cfg["target_month"]
    if target_month is None:
        target_month = int(df["month"].iloc[0]) if len(df) else 1

    post, components = build_posterior(df, cfg, target_day, target_month)
    rankings = rank_distribution(post)

    counts, n = count_outcomes(df["last2"])
    sig = significance_analysis(counts, n, cfg["fdr"])

    p_best = rankings[0][1]

    return {
        "N": n,
        "most_recent": components.pop("most_recent"),
        "target_day": target_day,
        "target_month": target_month,
        "posterior": post,
        "rankings": rankings,
        "counts": counts,
        "z_scores": sig["z_scores"],
        "p_values": sig["p_values"],
        "significant": sig["significant"],
        "flagged": sig["flagged"],
        "components": components,
        "expected_value": PRIZE_LAST2 * p_best - TICKET_PRICE,
        "settings": cfg,
    }
