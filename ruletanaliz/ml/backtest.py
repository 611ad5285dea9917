"""
Horizon Backtest - Replays a spin sequence through a fresh SpinSession and
scores each horizon's pick against the spin that actually came next.

A random pick hits 1 time in 37, so that is the baseline every hit rate is
reported against.
"""

from config import TOTAL_NUMBERS, HISTORY_MAX_LENGTH

from ruletanaliz.ml.errors import InsufficientHistory
from ruletanaliz.session.spin_session import SpinSession

HORIZONS = ('short_term', 'mid_term', 'long_term')


def parse_spins(lines):
    """Parse one number per line (first CSV column). Returns (numbers, skipped).

    Blank lines are ignored; non-numeric or out-of-range lines are counted
    as skipped.
    """
    numbers = []
    skipped = 0
    for line in lines:
        line = line.strip()
        if not line:
            continue
        value = line.split(',')[0].strip()
        try:
            num = int(value)
        except ValueError:
            skipped += 1
            continue
        if 0 <= num <= 36:
            numbers.append(num)
        else:
            skipped += 1
    return numbers, skipped


def load_spins(filepath):
    """Load spin numbers from a text/csv file, most recent at the bottom."""
    with open(filepath, 'r') as f:
        return parse_spins(f)


def replay(spins, max_length=HISTORY_MAX_LENGTH):
    """Feed `spins` one by one and score every prediction on the next spin.

    Returns a dict with per-horizon hits, predictions scored and hit rate,
    plus the uniform baseline.
    """
    session = SpinSession(max_length=max_length)
    hits = {h: 0 for h in HORIZONS}
    scored = 0
    pending = None

    for number in spins:
        if pending is not None:
            scored += 1
            for horizon in HORIZONS:
                if getattr(pending, horizon) == number:
                    hits[horizon] += 1
        try:
            pending = session.submit(number)
        except InsufficientHistory:
            pending = None

    return {
        'total_spins': len(spins),
        'predictions_scored': scored,
        'baseline_hit_rate': round(1.0 / TOTAL_NUMBERS, 4),
        'horizons': {
            h: {
                'hits': hits[h],
                'hit_rate': round(hits[h] / scored, 4) if scored else 0.0,
            }
            for h in HORIZONS
        },
    }
