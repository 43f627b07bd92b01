"""
Dirichlet-Multinomial Posterior with Seasonal Shrinkage

Counts the 100 two-digit outcomes over any subset of draws, converts the
counts into an additively smoothed posterior, and blends sparse day-of-month
or month views toward the global posterior:

    p[i] = (count[i] + alpha) / (N + 100 * alpha)
    w    = n_spec / (n_spec + k)
    p    = w * p_spec + (1 - w) * p_base
"""

import numpy as np
import pandas as pd

from lotto2d.config import NUM_OUTCOMES


def uniform():
    """The uniform distribution over 00-99."""
    return np.full(NUM_OUTCOMES, 1.0 / NUM_OUTCOMES)


def count_outcomes(outcomes):
    """
    Tabulate occurrences of each outcome 0-99.

    Parameters
    ----------
    outcomes : array-like of int
        Outcome values, e.g. ``df["last2"]``. Must already be in [0, 99].

    Returns
    -------
    (counts, n) where counts is an int64 array of length 100.
    """
    values = np.asarray(outcomes, dtype=np.int64)
    counts = np.bincount(values, minlength=NUM_OUTCOMES).astype(np.int64)
    return counts, int(values.size)


def counts_by_day(df: pd.DataFrame, day: int):
    """Counts restricted to draws on the given day of month."""
    return count_outcomes(df.loc[df["day"] == day, "last2"])


def counts_by_month(df: pd.DataFrame, month: int):
    """Counts restricted to draws in the given month."""
    return count_outcomes(df.loc[df["month"] == month, "last2"])


def dirichlet_posterior(counts, n, alpha=0.5):
    """
    Posterior mean of a symmetric Dirichlet(alpha) prior after observing *counts*.

    With ``n == 0`` the result is uniform regardless of alpha; with
    ``alpha == 0`` and ``n > 0`` it is the maximum-likelihood estimate.
    """
    if n == 0:
        return uniform()
    counts = np.asarray(counts, dtype=np.float64)
    den = n + NUM_OUTCOMES * alpha
    return (counts + alpha) / den


def shrink(p_spec, p_base, n_spec, k=50.0):
    """Blend a conditional view toward the base view by its sample size."""
    p_base = np.asarray(p_base, dtype=np.float64)
    if n_spec == 0:
        return p_base.copy()
    w = n_spec / (n_spec + k)
    return w * np.asarray(p_spec, dtype=np.float64) + (1 - w) * p_base


def conditional_posterior(counts, n_spec, p_base, alpha=0.5, k=50.0):
    """
    Shrunk posterior of a day or month view built from its counts.

    ``counts, n_spec`` come from `counts_by_day` or `counts_by_month`.
    """
    p_spec = dirichlet_posterior(counts, n_spec, alpha)
    return shrink(p_spec, p_base, n_spec, k)
