#!/usr/bin/env python3
"""
Next-draw analysis for the last-two-digit prize.

Loads the local history, prints the fused posterior's top picks and the
outcomes whose frequency deviates significantly from uniform (BH-FDR).

Usage:
    python scripts/run_prediction.py --top 10 --target-day 16 --weights 0.5,1,0.5,1
"""
import argparse
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from lotto2d.analysis import frequency_analysis
from lotto2d.cli import add_model_arguments, config_from_args
from lotto2d.errors import Lotto2DError
from lotto2d.models.markov_chain import predict as markov_predict
from lotto2d.predictor import single_analysis
from lotto2d.scraper import load_history


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Posterior over 00-99 for the next draw"
    )
    parser.add_argument("--top", type=int, default=None, help="number of picks to show")
    parser.add_argument("--target-day", dest="target_day", type=int, default=None)
    parser.add_argument("--target-month", dest="target_month", type=int, default=None)
    parser.add_argument("--fdr", type=float, default=None,
                        help="Benjamini-Hochberg false discovery rate")
    add_model_arguments(parser)
    return parser.parse_args()


def main():
    args = parse_args()
    cfg = config_from_args(args, ("top", "target_day", "target_month", "fdr",
                                  "weights", "alpha", "k", "epsilon"))
    try:
        df = load_history(args.history)
        out = single_analysis(df, cfg)
    except Lotto2DError as e:
        print(f"Error: {e}")
        sys.exit(1)

    s = out["settings"]
    prev = f"{out['most_recent']:02d}" if out["most_recent"] is not None else "NA"
    print("=== SUMMARY ===")
    print(f"Draws analysed: {out['N']}")
    print(f"Most recent (prev) = {prev}")
    print(f"target-day={out['target_day']}, target-month={out['target_month']}")
    print(f"weights=[base,day,month,markov]={','.join(str(w) for w in s['weights'])}, "
          f"alpha={s['alpha']}, k={s['k']}, epsilon={s['epsilon']}")

    print("\n=== TOP PICKS ===")
    for i, (d, p) in enumerate(out["rankings"][:s["top"]]):
        print(f"{i+1:2d}. {d:02d}  | Posterior ~ {p*100:.2f}%")

    print(f"\n=== OUTCOMES WITH SIGNIFICANT DEVIATION vs UNIFORM (FDR {s['fdr']*100:.0f}%) ===")
    if not out["flagged"]:
        print("No outcome deviates significantly from uniform.")
    for d in out["flagged"]:
        print(f"{d:02d} : count={out['counts'][d]}, z={out['z_scores'][d]:.2f}")

    freq = frequency_analysis(df)
    print("\n=== MOST FREQUENT (all draws) ===")
    for row in freq["dataframe"].head(5).to_dict("records"):
        print(f"{row['rank']}. {row['outcome']:02d} : count={row['count']}, "
              f"{row['freq_pct']:.2f}%")

    markov = markov_predict(df, epsilon=s["epsilon"])
    a, b, p_ab = markov["strongest_transition"]
    print(f"Strongest transition: {a:02d} -> {b:02d} (p={p_ab:.4f})")

    p_best = out["rankings"][0][1]
    print("\n=== NOTE ON EXPECTED VALUE (EV) ===")
    print(f"Top pick: P ~ {p_best*100:.2f}% -> EV ~ {out['expected_value']:.2f} baht/ticket")
    print("Lottery EV is almost surely negative. For study purposes only.")


if __name__ == "__main__":
    main()
