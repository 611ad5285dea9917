"""
Transition Model - Second-order follower counts keyed by (penultimate, last).
Predicts the short-term horizon from what historically followed the same pair.

Counts live in fixed-size arrays, so copying or extending the model costs the
same whatever the history length. `evict` removes the transitions that start
at the oldest spin when the history window slides forward.
"""

import numpy as np
from collections import deque

from config import TOTAL_NUMBERS, MIN_SPINS_FOR_TRANSITIONS


class TransitionModel:
    def __init__(self):
        self._reset()

    def _reset(self):
        self.total_spins = 0
        # Only the last two spins are needed to extend the counts
        self.context = deque(maxlen=2)
        # First order: follower counts of a single number (diagnostics only)
        self.counts_1 = np.zeros((TOTAL_NUMBERS, TOTAL_NUMBERS), dtype=np.int64)
        # Second order: counts_2[prev, current, next]
        self.counts_2 = np.zeros((TOTAL_NUMBERS, TOTAL_NUMBERS, TOTAL_NUMBERS), dtype=np.int64)

    def update(self, number):
        if len(self.context) >= 1:
            self.counts_1[self.context[-1], number] += 1
        if len(self.context) == 2:
            self.counts_2[self.context[0], self.context[1], number] += 1
        self.context.append(number)
        self.total_spins += 1

    def evict(self, window):
        """Forget the oldest spin.

        `window` holds the evicted spin followed by up to two spins that came
        after it in the history; their transitions are decremented.
        """
        window = tuple(window)
        if len(window) >= 2:
            self.counts_1[window[0], window[1]] -= 1
        if len(window) >= 3:
            self.counts_2[window[0], window[1], window[2]] -= 1
        self.total_spins -= 1

    def load_history(self, history):
        self._reset()
        for num in history:
            self.update(num)

    def has_pair(self, penultimate, last):
        """True once (penultimate, last) has been followed by at least one spin."""
        return bool(self.counts_2[penultimate, last].any())

    def get_followers(self, penultimate, last):
        """Follower counts for the pair, zeros when never observed."""
        return self.counts_2[penultimate, last].copy()

    def get_follower_pick(self, penultimate, last):
        """Most frequent follower of the pair, lowest value among ties.

        Returns None for a pair that was never followed; the caller owns
        the fallback.
        """
        if not self.has_pair(penultimate, last):
            return None
        return int(np.argmax(self.counts_2[penultimate, last]))

    def get_pair_probabilities(self, penultimate, last):
        """Follower distribution of the pair, uniform when never observed."""
        followers = self.get_followers(penultimate, last).astype(np.float64)
        total = followers.sum()
        if total == 0:
            return np.full(TOTAL_NUMBERS, 1.0 / TOTAL_NUMBERS)
        return followers / total

    def get_transition_strength(self):
        """How concentrated the first-order transitions are (0-100).

        Mean KL divergence from uniform over rows with data, Laplace smoothed.
        """
        if self.total_spins < MIN_SPINS_FOR_TRANSITIONS:
            return 0.0

        uniform = 1.0 / TOTAL_NUMBERS
        divergences = []
        for row in self.counts_1:
            if row.sum() == 0:
                continue
            smoothed = (row + 0.5) / (row.sum() + 0.5 * TOTAL_NUMBERS)
            divergences.append(float(np.sum(smoothed * np.log(smoothed / uniform))))

        if not divergences:
            return 0.0
        strength = min(100.0, float(np.mean(divergences)) * 100)
        return round(strength, 1)

    def get_pairs_observed(self):
        return int(np.count_nonzero(self.counts_2.sum(axis=2)))

    def get_summary(self):
        return {
            'total_spins': self.total_spins,
            'pairs_observed': self.get_pairs_observed(),
            'transition_strength': self.get_transition_strength(),
        }
