"""
Last-Two-Digit Statistical Analysis

Frequency tabulation and significance testing of the 100 outcomes against a
uniform null (p0 = 1/100 per outcome):

    mu    = N / 100
    sigma = sqrt(N * p0 * (1 - p0))     (floored to 1 when zero)
    z     = (count - mu) / sigma
    p     = 2 * (1 - Phi(|z|))

The 100 simultaneous p-values are corrected with the Benjamini-Hochberg
step-up procedure so the expected share of false discoveries among the
flagged outcomes stays below the chosen FDR.

Phi uses the Abramowitz-Stegun 7.1.26 polynomial for erf (|error| < 1.5e-7),
so the resulting normal CDF is accurate to better than 1e-7.
"""

import numpy as np
import pandas as pd

from lotto2d.config import ALL_OUTCOMES, NUM_OUTCOMES
from lotto2d.models.posterior import count_outcomes

# Abramowitz & Stegun 7.1.26
_A1 = 0.254829592
_A2 = -0.284496736
_A3 = 1.421413741
_A4 = -1.453152027
_A5 = 1.061405429
_P = 0.3275911


# ===================================================================
# Normal distribution
# ===================================================================

def erf(x):
    """Polynomial approximation to the error function; scalar or array."""
    x = np.asarray(x, dtype=np.float64)
    sign = np.sign(x)
    ax = np.abs(x)
    t = 1.0 / (1.0 + _P * ax)
    y = 1.0 - ((((_A5 * t + _A4) * t + _A3) * t + _A2) * t + _A1) * t * np.exp(-ax * ax)
    out = sign * y
    return float(out) if out.ndim == 0 else out


def normal_cdf(z):
    """Standard normal CDF Phi(z)."""
    z = np.asarray(z, dtype=np.float64)
    out = 0.5 * (1.0 + np.asarray(erf(z / np.sqrt(2.0))))
    return float(out) if out.ndim == 0 else out


# ===================================================================
# Significance vs uniform
# ===================================================================

def z_and_pvalues(counts, n):
    """
    Two-sided z-test of each outcome's count against the uniform null.

    Returns
    -------
    (z, pvalues) arrays of length 100.
    """
    p0 = 1.0 / NUM_OUTCOMES
    mu = n * p0
    sigma = np.sqrt(n * p0 * (1 - p0)) or 1.0
    z = (np.asarray(counts, dtype=np.float64) - mu) / sigma
    pvals = 2.0 * (1.0 - normal_cdf(np.abs(z)))
    return z, pvals


def bh_fdr(pvals, fdr=0.10):
    """
    Benjamini-Hochberg step-up procedure.

    Finds the largest rank j with p_(j) <= (j / m) * fdr and rejects every
    hypothesis ranked at or below it.

    Returns
    -------
    np.ndarray of bool, True where the null is rejected.
    """
    pvals = np.asarray(pvals, dtype=np.float64)
    m = pvals.size
    order = np.argsort(pvals, kind="stable")
    thresholds = np.arange(1, m + 1) / m * fdr
    passed = np.nonzero(pvals[order] <= thresholds)[0]
    rejected = np.zeros(m, dtype=bool)
    if passed.size:
        rejected[order[: passed[-1] + 1]] = True
    return rejected


def significance_analysis(counts, n, fdr=0.10):
    """
    z-scores, p-values and BH flags for all 100 outcomes.

    Returns
    -------
    dict with keys:
        z_scores     : np.ndarray
        p_values     : np.ndarray
        significant  : np.ndarray of bool
        flagged      : list of outcomes flagged, strongest |z| first
        dataframe    : pd.DataFrame of flagged outcomes
    """
    z, pvals = z_and_pvalues(counts, n)
    sig = bh_fdr(pvals, fdr)

    flagged = sorted(np.nonzero(sig)[0].tolist(), key=lambda d: abs(z[d]), reverse=True)
    records = [{
        "outcome": d,
        "count": int(counts[d]),
        "z": float(z[d]),
        "p_value": float(pvals[d]),
    } for d in flagged]

    return {
        "z_scores": z,
        "p_values": pvals,
        "significant": sig,
        "flagged": flagged,
        "dataframe": pd.DataFrame(records, columns=["outcome", "count", "z", "p_value"]),
    }


# ===================================================================
# Frequency
# ===================================================================

def frequency_analysis(df: pd.DataFrame) -> dict:
    """
    Count each outcome 00-99 across all draws and rank them.

    Returns
    -------
    dict with keys:
        counts      : np.ndarray of length 100
        total_draws : int
        ranked      : list of (outcome, count) sorted desc
        dataframe   : pd.DataFrame summary
    """
    counts, n = count_outcomes(df["last2"])
    ranked = sorted(((d, int(counts[d])) for d in ALL_OUTCOMES),
                    key=lambda x: x[1], reverse=True)

    records = []
    for rank, (d, cnt) in enumerate(ranked, 1):
        records.append({
            "outcome": d,
            "count": cnt,
            "freq_pct": round(100.0 * cnt / n, 4) if n else 0.0,
            "rank": rank,
        })

    return {
        "counts": counts,
        "total_draws": n,
        "ranked": ranked,
        "dataframe": pd.DataFrame(records),
    }
