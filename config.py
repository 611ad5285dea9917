"""
Configuration constants for the European Roulette Spin Predictor.
Single source of truth for all tunable parameters.
"""

import numbers
import os

BASE_DIR = os.path.dirname(os.path.abspath(__file__))

# ─── Number Domain ───────────────────────────────────────────────────
TOTAL_NUMBERS = 37  # 0-36
MIN_NUMBER = 0
MAX_NUMBER = 36

# Number properties (European single zero)
RED_NUMBERS = {1, 3, 5, 7, 9, 12, 14, 16, 18, 19, 21, 23, 25, 27, 30, 32, 34, 36}
BLACK_NUMBERS = {2, 4, 6, 8, 10, 11, 13, 15, 17, 20, 22, 24, 26, 28, 29, 31, 33, 35}
GREEN_NUMBERS = {0}

LOW_NUMBERS = set(range(1, 19))
HIGH_NUMBERS = set(range(19, 37))

FIRST_DOZEN = set(range(1, 13))
SECOND_DOZEN = set(range(13, 25))
THIRD_DOZEN = set(range(25, 37))

# ─── History Ledger ──────────────────────────────────────────────────
# Oldest spins are evicted once the ledger holds this many.
HISTORY_MAX_LENGTH = int(os.environ.get('HISTORY_MAX_LENGTH', 10000))
MIN_SPINS_FOR_PREDICTION = 2        # Need (penultimate, last) context

# ─── Recency / Trend (mid-term horizon) ──────────────────────────────
RECENCY_WINDOW = 15                 # Last 15 spins feed the trend
RECENCY_DECAY = 0.85                # Per-spin decay, most recent spin weighs 1.0

# ─── Frequency Analysis (long-term horizon) ──────────────────────────
MIN_SPINS_FOR_CHI_SQUARE = 10
HOT_NUMBER_THRESHOLD = 1.5          # Times above expected frequency
COLD_NUMBER_THRESHOLD = 0.5         # Times below expected frequency
LAST_SPINS_DISPLAY = 10             # "Last 10" card on the dashboard

# ─── Transition Model (short-term horizon) ───────────────────────────
MIN_SPINS_FOR_TRANSITIONS = 10      # Below this the strength summary reads 0

# ─── Server Settings ─────────────────────────────────────────────────
HOST = os.environ.get('HOST', '0.0.0.0')
PORT = int(os.environ.get('PORT', 3000))
DEBUG = os.environ.get('DEBUG', '0') == '1'
SECRET_KEY = os.environ.get('SECRET_KEY', 'ruletanaliz-spin-predictor')
SOCKETIO_ASYNC_MODE = os.environ.get('SOCKETIO_ASYNC_MODE', 'threading')


def is_valid_number(number):
    """True for an integral value in 0-36, numpy integers included.

    Booleans are rejected even though they are ints.
    """
    return (isinstance(number, numbers.Integral) and not isinstance(number, bool)
            and MIN_NUMBER <= number <= MAX_NUMBER)


# ─── Color Mapping for UI ────────────────────────────────────────────
def get_number_color(number):
    if number in RED_NUMBERS:
        return 'red'
    elif number in BLACK_NUMBERS:
        return 'black'
    return 'green'
