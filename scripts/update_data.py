#!/usr/bin/env python3
"""
Data Update Script for the last-two-digit history

1. --latest      fetch the latest draw and append/update it
2. --backfill N  walk N pages of the draw list (~20 draws each)
"""
import argparse
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from lotto2d.errors import Lotto2DError
from lotto2d.scraper import get_history_count, run_backfill, run_latest


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Update data/history.json")
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("--latest", action="store_true", help="store the latest draw")
    group.add_argument("--backfill", type=int, metavar="PAGES",
                       help="store every draw on list pages 1..PAGES")
    parser.add_argument("--history", type=str, default=None)
    return parser.parse_args()


def main():
    args = parse_args()
    try:
        if args.backfill is not None:
            run_backfill(max(0, args.backfill), path=args.history)
        else:
            run_latest(path=args.history)
    except Lotto2DError as e:
        print(f"Error: {e}")
        sys.exit(1)
    print(f"History now holds {get_history_count(args.history)} draws.")


if __name__ == "__main__":
    main()
