"""
Log-Linear Fusion of the Component Distributions

Combines the global, day, month and Markov distributions into one posterior
as a weighted geometric mixture:

    score[d] = sum_j w_j * ln(max(p_j[d], 1e-12))
    post     = softmax(score)

Weights are exponents on each source, not mixing proportions. An outcome
that any weighted component considers near-impossible is pulled down hard.
"""

import numpy as np

TINY = 1e-12

# Order of the weights tuple
COMPONENTS = ("base", "day", "month", "markov")


def softmax(scores):
    """Numerically stable softmax."""
    scores = np.asarray(scores, dtype=np.float64)
    ex = np.exp(scores - scores.max())
    s = ex.sum()
    return ex / (s or 1.0)


def combine_posterior(p_base, p_day, p_month, p_markov, weights):
    """Fuse four distributions with exponent weights (base, day, month, markov)."""
    w0, w1, w2, w3 = weights
    components = (p_base, p_day, p_month, p_markov)
    log_p = np.zeros(len(p_base), dtype=np.float64)
    for w, p in zip((w0, w1, w2, w3), components):
        log_p += w * np.log(np.maximum(np.asarray(p, dtype=np.float64), TINY))
    return softmax(log_p)
