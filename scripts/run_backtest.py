#!/usr/bin/env python3
"""
Walk-forward backtest of the last-two-digit posterior.

Prints aggregate metrics and the last 10 held-out draws, then writes the
summary to DATA_DIR/backtest_summary.json.

Usage:
    python scripts/run_backtest.py --bt-last 40 --bt-top 10
"""
import argparse
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from lotto2d.backtester import backtest_frame, run_backtest, save_results
from lotto2d.cli import add_model_arguments, config_from_args
from lotto2d.config import BACKTEST_SUMMARY_PATH
from lotto2d.errors import Lotto2DError
from lotto2d.scraper import load_history


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Expanding-window backtest over the most recent draws"
    )
    parser.add_argument("--bt-last", dest="bt_last", type=int, default=None,
                        help="number of most recent draws to hold out")
    parser.add_argument("--bt-top", dest="bt_top", type=int, default=None,
                        help="K for top-K accuracy")
    parser.add_argument("--output", type=str, default=BACKTEST_SUMMARY_PATH)
    add_model_arguments(parser)
    return parser.parse_args()


def main():
    args = parse_args()
    cfg = config_from_args(args, ("bt_last", "bt_top", "weights", "alpha", "k", "epsilon"))
    try:
        df = load_history(args.history)
        bt = run_backtest(df, cfg, verbose=True)
    except Lotto2DError as e:
        print(f"Error: {e}")
        sys.exit(1)

    print("\nLast 10 held-out draws (id, true, top1, p(top1), p(true)):")
    for r in backtest_frame(bt).tail(10).itertuples(index=False):
        print(f"{r.id} | true={r.true:02d} | top1={r.top1:02d} | "
              f"p(top1)={r.top1_prob*100:.2f}% | p(true)={r.true_prob*100:.2f}%")

    path = save_results(bt, args.output)
    print(f"\nSummary written to {path}")


if __name__ == "__main__":
    main()
