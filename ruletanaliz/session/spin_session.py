"""
Spin Session - Owns one HistoryLedger and one HybridPredictor and runs the
append → retrain → predict cycle under a single lock.

One instance lives on the Flask app (app.extensions['spin_session']); tests
build their own so nothing is shared between them.
"""

import threading

from config import HISTORY_MAX_LENGTH, LAST_SPINS_DISPLAY

from ruletanaliz.ml.hybrid import HybridPredictor
from ruletanaliz.session.ledger import HistoryLedger


class SpinSession:
    def __init__(self, max_length=HISTORY_MAX_LENGTH, predictor=None):
        self.ledger = HistoryLedger(max_length=max_length)
        self.predictor = predictor if predictor is not None else HybridPredictor()
        self._lock = threading.Lock()

    def submit(self, number):
        """Record a spin and predict the next one.

        Raises InvalidOutcome (ledger untouched) or InsufficientHistory
        (spin still recorded) so the caller can answer each distinctly.
        """
        with self._lock:
            self.ledger.append(number)
            self.predictor.retrain(self.ledger.all())
            penultimate, last = self._query_pair()
            return self.predictor.predict(penultimate, last)

    def _query_pair(self):
        recent = self.ledger.last(2)
        if len(recent) < 2:
            # predict() raises InsufficientHistory before looking at the pair
            return None, None
        return recent[0], recent[1]

    def history(self, limit=LAST_SPINS_DISPLAY):
        with self._lock:
            return {
                'numbers': self.ledger.last(limit),
                'total': len(self.ledger),
                'total_observed': self.ledger.total_observed,
            }

    def stats(self):
        """Auxiliary figures for the dashboard cards."""
        with self._lock:
            summary = self.predictor.get_summary()
            frequency = summary['frequency']
            return {
                'total_spins': summary['total_spins'],
                'last_numbers': self.ledger.last(LAST_SPINS_DISPLAY),
                'color_distribution': frequency['color_distribution'],
                'range_distribution': frequency['range_distribution'],
                'dozen_distribution': frequency['dozen_distribution'],
                'hot_numbers': frequency['hot_numbers'],
                'cold_numbers': frequency['cold_numbers'],
                'chi_square': frequency['chi_square'],
                'trend_strength': summary['recency']['strength'],
                'transition_strength': summary['transitions']['transition_strength'],
            }

    def reset(self):
        with self._lock:
            self.ledger.clear()
            self.predictor.reset()
