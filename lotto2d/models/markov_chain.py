"""
Markov Chain Model for the Last-Two-Digit Prize

Builds a 100x100 transition matrix from consecutive historical draws. Each
entry T[a][b] counts how often outcome b was drawn immediately after
outcome a (chronologically earlier -> later).

Rows are smoothed with a symmetric prior epsilon:

    P[a][b] = (T[a][b] + epsilon) / (rowSum[a] + 100 * epsilon)

The usable prediction is the row of the most recent observed outcome.
"""

import numpy as np
import pandas as pd

from lotto2d.config import NUM_OUTCOMES
from lotto2d.models.posterior import uniform


def build_transition_counts(outcomes_newest_first):
    """
    Count outcome -> outcome transitions.

    The input is ordered newest first, so for adjacent positions i, i+1 the
    later draw is ``rows[i]`` and the earlier (previous) draw is ``rows[i+1]``.
    """
    rows = np.asarray(outcomes_newest_first, dtype=np.int64)
    trans = np.zeros((NUM_OUTCOMES, NUM_OUTCOMES), dtype=np.int64)
    if rows.size < 2:
        return trans
    prev = rows[1:]
    nxt = rows[:-1]
    np.add.at(trans, (prev, nxt), 1)
    return trans


def smooth_transitions(trans, epsilon=1.0):
    """
    Row-normalize transition counts with additive smoothing.

    A row with a zero denominator (never observed and epsilon == 0) is
    returned as the uniform distribution.
    """
    trans = np.asarray(trans, dtype=np.float64)
    row_sums = trans.sum(axis=1, keepdims=True)
    den = row_sums + NUM_OUTCOMES * epsilon
    prob = np.empty_like(trans)
    empty = (den == 0).ravel()
    prob[~empty] = (trans[~empty] + epsilon) / den[~empty]
    prob[empty] = 1.0 / NUM_OUTCOMES
    return prob


def markov_distribution(outcomes_newest_first, epsilon=1.0):
    """
    Conditional distribution of the next outcome given the most recent one.

    Returns
    -------
    (distribution, most_recent) where most_recent is None for empty history
    and the distribution is then uniform.
    """
    rows = np.asarray(outcomes_newest_first, dtype=np.int64)
    if rows.size == 0:
        return uniform(), None
    most_recent = int(rows[0])
    matrix = smooth_transitions(build_transition_counts(rows), epsilon)
    return matrix[most_recent], most_recent


def predict(df: pd.DataFrame, epsilon=1.0):
    """
    Build the Markov chain from a newest-first history frame.

    Returns
    -------
    dict with:
        'rankings': list of (outcome, probability) sorted descending
        'distribution': next-draw distribution given the most recent outcome
        'transition_matrix': smoothed 100x100 row-stochastic matrix
        'most_recent': most recent outcome or None
        'strongest_transition': (a, b, probability) of the largest cell
    """
    outcomes = df["last2"].to_numpy(dtype=np.int64)
    matrix = smooth_transitions(build_transition_counts(outcomes), epsilon)
    most_recent = int(outcomes[0]) if outcomes.size else None
    dist = matrix[most_recent] if most_recent is not None else uniform()

    order = np.argsort(-dist, kind="stable")
    rankings = [(int(d), float(dist[d])) for d in order]

    a, b = np.unravel_index(np.argmax(matrix), matrix.shape)

    return {
        "rankings": rankings,
        "distribution": dist,
        "transition_matrix": matrix,
        "most_recent": most_recent,
        "strongest_transition": (int(a), int(b), float(matrix[a, b])),
    }
