"""
Recency Analyzer - Exponentially decayed counts over a short sliding window.

Captures short-term drift for the mid-term horizon. Only the last
RECENCY_WINDOW spins are kept; inside the window the most recent spin has
weight 1.0 and each older spin is multiplied by RECENCY_DECAY once more.
"""

import numpy as np
from collections import deque

from config import TOTAL_NUMBERS, RECENCY_WINDOW, RECENCY_DECAY


class RecencyAnalyzer:
    """Trend model over the most recent spins."""

    def __init__(self, window=RECENCY_WINDOW, decay=RECENCY_DECAY):
        if window < 1:
            raise ValueError('window must be at least 1')
        if not 0.0 < decay <= 1.0:
            raise ValueError('decay must be in (0, 1]')
        self.window = window
        self.decay = decay
        self.recent = deque(maxlen=window)

    def update(self, number):
        """Add a new spin result."""
        self.recent.append(number)

    def trim(self, retained):
        """Drop spins older than the last `retained` of the history."""
        while len(self.recent) > retained:
            self.recent.popleft()

    def load_history(self, history):
        """Keep only the tail of the full history that fits the window."""
        self.recent = deque(list(history)[-self.window:], maxlen=self.window)

    def get_weighted_counts(self):
        """Decayed counts, shape (37,). All zeros when no spins are known."""
        weights = np.zeros(TOTAL_NUMBERS, dtype=np.float64)
        n = len(self.recent)
        for i, num in enumerate(self.recent):
            weights[num] += self.decay ** (n - 1 - i)
        return weights

    def get_number_probabilities(self):
        """Normalized trend distribution, uniform when empty."""
        weights = self.get_weighted_counts()
        total = weights.sum()
        if total == 0:
            return np.full(TOTAL_NUMBERS, 1.0 / TOTAL_NUMBERS)
        return weights / total

    def get_trend_pick(self):
        """Heaviest number in the window, lowest value among ties."""
        return int(np.argmax(self.get_weighted_counts()))

    def get_strength(self):
        """Signal strength 0-100. High = one number dominates the window.

        Returns:
            float 0-100
        """
        if not self.recent:
            return 0.0
        probs = self.get_number_probabilities()
        # A single repeated number scores 100, a spread-out window scores low
        top = float(probs.max())
        floor = 1.0 / min(len(self.recent), TOTAL_NUMBERS)
        if floor >= 1.0:
            return 100.0
        strength = (top - floor) / (1.0 - floor) * 100
        return round(min(100.0, max(0.0, strength)), 1)

    def get_summary(self):
        """Full summary for debugging/display."""
        return {
            'window': self.window,
            'decay': self.decay,
            'recent': list(self.recent),
            'trend_pick': self.get_trend_pick(),
            'strength': self.get_strength(),
        }
