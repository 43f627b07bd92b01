"""
Backtesting Engine for the Last-Two-Digit Posterior

Walk-forward validation with an expanding window: for each of the last L
draws, trains on every strictly earlier draw, predicts the held-out draw,
and scores the prediction. Never uses future data.

    L = min(bt_last, T - 2)      (T = number of usable draws)

Metrics: top-1 and top-K accuracy, mean negative log-likelihood of the true
outcome, mean probability on the true outcome and on the top-1 pick.
"""
import json
import math
import os
import warnings

import numpy as np
import pandas as pd
from scipy import stats

from lotto2d.config import NUM_OUTCOMES, resolve_config
from lotto2d.errors import InsufficientDataError
from lotto2d.predictor import build_posterior

TINY = 1e-12


def run_backtest(df, cfg=None, verbose=False):
    """
    Run the expanding-window backtest.

    Args:
        df: Draw history ordered newest first
        cfg: Configuration dict (validated by `resolve_config`)
        verbose: Print progress

    Returns:
        Dict with aggregate metrics, per-case records, uniform baselines and
        a binomial significance check of the top-K hit rate

    Raises:
        InsufficientDataError: fewer than 3 usable draws
    """
    cfg = resolve_config(cfg)

    rows = df.iloc[::-1].reset_index(drop=True)  # oldest -> newest
    T = len(rows)
    L = min(cfg["bt_last"], T - 2)
    if L <= 0:
        raise InsufficientDataError(
            f"not enough data for a backtest: {T} draws, need at least 3"
        )
    if L < cfg["bt_last"]:
        warnings.warn(f"bt_last={cfg['bt_last']} exceeds available history; "
                      f"evaluating the last {L} draws instead.")
    start = T - L
    bt_top = cfg["bt_top"]

    if verbose:
        print(f"\n{'='*60}")
        print("BACKTESTING ENGINE")
        print(f"{'='*60}")
        print(f"Total draws: {T}")
        print(f"Held-out draws: {L} (from {rows['id'].iloc[start]})")
        print(f"{'='*60}\n")

    top1_hits = 0
    topk_hits = 0
    sum_nll = 0.0
    sum_true_p = 0.0
    sum_top1_p = 0.0
    per_case = []

    for t in range(start, T):
        # Training data: everything before this draw, newest first
        train = rows.iloc[:t].iloc[::-1]
        target = rows.iloc[t]
        truth = int(target["last2"])

        if verbose and (t - start) % 10 == 0:
            print(f"  [Backtest] draw {t - start + 1}/{L} (id: {target['id']})...")

        post, _ = build_posterior(train, cfg, int(target["day"]), int(target["month"]))
        order = np.argsort(-post, kind="stable")

        top1 = int(order[0])
        top1_p = float(post[top1])
        true_p = float(post[truth])

        if top1 == truth:
            top1_hits += 1
        if truth in order[:bt_top]:
            topk_hits += 1
        sum_nll += -math.log(max(true_p, TINY))
        sum_true_p += true_p
        sum_top1_p += top1_p

        per_case.append({
            "id": target["id"],
            "true": truth,
            "top1": top1,
            "top1_prob": top1_p,
            "true_prob": true_p,
        })

    n = L
    summary = {
        "n": n,
        "acc1": top1_hits / n,
        "acc_k": topk_hits / n,
        "mean_nll": sum_nll / n,
        "mean_true_p": sum_true_p / n,
        "mean_top1_p": sum_top1_p / n,
        "per_case": per_case,
    }
    summary.update(_compare_to_uniform(topk_hits, n, bt_top))
    summary["settings"] = {
        key: cfg[key] for key in ("bt_last", "bt_top", "weights", "alpha", "k", "epsilon")
    }

    if verbose:
        _print_summary(summary)

    return summary


def _compare_to_uniform(topk_hits, n, bt_top):
    """Uniform-guess baselines and a one-sided binomial test of top-K hits."""
    p_k = min(bt_top, NUM_OUTCOMES) / NUM_OUTCOMES
    test = stats.binomtest(topk_hits, n, p_k, alternative="greater")
    return {
        "baseline": {
            "acc1": 1.0 / NUM_OUTCOMES,
            "acc_k": p_k,
            "mean_nll": math.log(NUM_OUTCOMES),
        },
        "significance": {
            "topk_hits": topk_hits,
            "p_value": float(test.pvalue),
            "significant_at_005": bool(test.pvalue < 0.05),
        },
    }


def backtest_frame(result):
    """Per-case records of a backtest result as a DataFrame."""
    return pd.DataFrame(result["per_case"],
                        columns=["id", "true", "top1", "top1_prob", "true_prob"])


def _print_summary(summary):
    """Print a formatted backtest report."""
    bt_top = summary["settings"]["bt_top"]
    base = summary["baseline"]
    print(f"\n{'='*60}")
    print("BACKTEST RESULTS (rolling, expanding window)")
    print(f"{'='*60}")
    print(f"  Held-out draws: {summary['n']}")
    print(f"  Top-1 accuracy : {summary['acc1']*100:.2f}% (baseline ~{base['acc1']*100:.2f}%)")
    print(f"  Top-{bt_top} accuracy : {summary['acc_k']*100:.2f}% "
          f"(baseline ~{base['acc_k']*100:.2f}%)")
    print(f"  Mean true probability : {summary['mean_true_p']*100:.2f}%")
    print(f"  Mean top-1 probability : {summary['mean_top1_p']*100:.2f}%")
    print(f"  Mean NLL (lower better) : {summary['mean_nll']:.4f} "
          f"(uniform {base['mean_nll']:.4f})")

    sig = summary["significance"]
    print(f"\n  Top-{bt_top} hits vs uniform: p-value {sig['p_value']:.4f}")
    if sig["significant_at_005"]:
        print("  ✓ Significant at p < 0.05")
    else:
        print("  ✗ Not statistically significant")
    print(f"\n{'='*60}")


def save_results(summary, path):
    """Write the backtest summary as JSON ({settings, results})."""
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    results = {k: v for k, v in summary.items() if k != "settings"}
    payload = {"settings": summary["settings"], "results": results}
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2, ensure_ascii=False)
    return path
