#!/usr/bin/env python3
"""
Horizon Backtester - Replay recorded spins and report how often each
horizon's pick matched the next spin.

Usage:
    python backtest_horizons.py <data_file>
    python backtest_horizons.py data/my_spins.txt

File format: one number (0-36) per line, most recent at the bottom.
"""

import os
import sys
import time

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from ruletanaliz.ml.backtest import load_spins, replay, HORIZONS


def main():
    if len(sys.argv) < 2:
        print("\nUsage: python backtest_horizons.py <data_file>")
        print("\nFile format: one number (0-36) per line, most recent at bottom")
        sys.exit(1)

    filepath = sys.argv[1]
    if not os.path.exists(filepath):
        print(f"  ERROR: File not found: {filepath}")
        sys.exit(1)

    numbers, skipped = load_spins(filepath)
    if not numbers:
        print("  ERROR: No valid numbers found in file!")
        sys.exit(1)

    print(f"\n{'═' * 60}")
    print(f"  HORIZON BACKTEST")
    print(f"{'═' * 60}")
    print(f"  Loaded:  {len(numbers)} spin numbers")
    if skipped > 0:
        print(f"  Skipped: {skipped} invalid lines")

    t0 = time.time()
    result = replay(numbers)
    t1 = time.time()

    baseline = result['baseline_hit_rate']
    print(f"\n  Scored predictions: {result['predictions_scored']}")
    print(f"  Random baseline:    {baseline * 100:.2f}%")
    print(f"  {'─' * 40}")
    for horizon in HORIZONS:
        h = result['horizons'][horizon]
        edge = (h['hit_rate'] - baseline) * 100
        print(f"  {horizon:12s} {h['hits']:6d} hits  {h['hit_rate'] * 100:6.2f}%  ({edge:+.2f}%)")
    print(f"\n  Time: {t1 - t0:.2f}s")


if __name__ == '__main__':
    main()
