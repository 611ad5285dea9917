"""
History Ledger - Append-only record of observed spins.

Retains at most `max_length` spins; once full, appending evicts the oldest.
Past entries are never edited or reordered.
"""

from collections import deque

from config import HISTORY_MAX_LENGTH, MIN_SPINS_FOR_PREDICTION, is_valid_number

from ruletanaliz.ml.errors import InvalidOutcome


class HistoryLedger:
    def __init__(self, max_length=HISTORY_MAX_LENGTH):
        if max_length < MIN_SPINS_FOR_PREDICTION:
            raise ValueError(
                f'max_length must be at least {MIN_SPINS_FOR_PREDICTION}, got {max_length}'
            )
        self.max_length = max_length
        self._spins = deque(maxlen=max_length)
        self.total_observed = 0

    def __len__(self):
        return len(self._spins)

    def append(self, number):
        """Record a spin and return the number of spins retained."""
        if not is_valid_number(number):
            raise InvalidOutcome(number)
        self._spins.append(int(number))
        self.total_observed += 1
        return len(self._spins)

    def last(self, n):
        """Most recent n spins in original order (all of them if fewer exist)."""
        if n <= 0:
            return []
        return list(self._spins)[-n:]

    def all(self):
        return tuple(self._spins)

    def clear(self):
        self._spins.clear()
        self.total_observed = 0
