"""
Frequency Analyzer - Occurrence counts per number, mode selection for the
long-term horizon, and auxiliary distribution statistics.

The mode is taken over raw counts of the whole retained history. Ties go to
the lowest number so the pick never depends on insertion order.
Chi-square, hot/cold and color/band figures are surfaced to the dashboard
only; they never enter the prediction arithmetic.
"""

import numpy as np
from scipy import stats
from collections import Counter

from config import (
    TOTAL_NUMBERS, HOT_NUMBER_THRESHOLD, COLD_NUMBER_THRESHOLD,
    RED_NUMBERS, BLACK_NUMBERS, LOW_NUMBERS, HIGH_NUMBERS,
    FIRST_DOZEN, SECOND_DOZEN, THIRD_DOZEN,
    MIN_SPINS_FOR_CHI_SQUARE,
)


class FrequencyAnalyzer:
    def __init__(self):
        self.total_spins = 0
        self.frequency_counts = Counter()

    def update(self, number):
        self.total_spins += 1
        self.frequency_counts[number] += 1

    def evict(self, number):
        """Forget one occurrence of the oldest spin."""
        self.total_spins -= 1
        self.frequency_counts[number] -= 1
        if self.frequency_counts[number] <= 0:
            del self.frequency_counts[number]

    def load_history(self, history):
        history = list(history)
        self.total_spins = len(history)
        self.frequency_counts = Counter(history)

    def get_counts(self):
        """Occurrence counts as an array of shape (37,)."""
        return np.array([self.frequency_counts.get(i, 0) for i in range(TOTAL_NUMBERS)],
                        dtype=np.int64)

    def get_mode(self):
        """Most frequent number, lowest value among ties.

        With no history every count is zero and the uniform prior yields 0.
        """
        # np.argmax returns the first maximal index, i.e. the lowest number
        return int(np.argmax(self.get_counts()))

    def get_number_probabilities(self):
        """Laplace-smoothed distribution over 0-36 (uniform when empty)."""
        total = self.total_spins
        probs = (self.get_counts() + 1.0) / (total + TOTAL_NUMBERS)
        return probs / probs.sum()

    def get_chi_square_result(self):
        """Chi-square goodness-of-fit test against uniform distribution."""
        if self.total_spins < MIN_SPINS_FOR_CHI_SQUARE:
            return {'statistic': 0.0, 'p_value': 1.0, 'significant': False}

        observed = self.get_counts()
        expected = np.full(TOTAL_NUMBERS, self.total_spins / TOTAL_NUMBERS)

        chi2, p_value = stats.chisquare(observed, expected)
        return {
            'statistic': float(chi2),
            'p_value': float(p_value),
            'significant': bool(p_value < 0.05)
        }

    def get_hot_numbers(self, top_n=5):
        """Numbers appearing significantly more than expected."""
        if not self.total_spins:
            return []

        total = self.total_spins
        expected = total / TOTAL_NUMBERS
        hot = []

        for num in range(TOTAL_NUMBERS):
            count = self.frequency_counts.get(num, 0)
            ratio = count / expected
            if ratio >= HOT_NUMBER_THRESHOLD:
                hot.append({
                    'number': num,
                    'count': count,
                    'ratio': round(ratio, 2),
                    'frequency': round(count / total, 4)
                })

        hot.sort(key=lambda x: (-x['ratio'], x['number']))
        return hot[:top_n]

    def get_cold_numbers(self, top_n=5):
        """Numbers appearing significantly less than expected."""
        if not self.total_spins:
            return []

        total = self.total_spins
        expected = total / TOTAL_NUMBERS
        cold = []

        for num in range(TOTAL_NUMBERS):
            count = self.frequency_counts.get(num, 0)
            ratio = count / expected
            if ratio <= COLD_NUMBER_THRESHOLD:
                cold.append({
                    'number': num,
                    'count': count,
                    'ratio': round(ratio, 2),
                    'frequency': round(count / total, 4)
                })

        cold.sort(key=lambda x: (x['ratio'], x['number']))
        return cold[:top_n]

    def _count_in(self, numbers):
        return sum(self.frequency_counts.get(n, 0) for n in numbers)

    def get_color_distribution(self):
        """Red/black/green counts. Zero is green, never black."""
        return {
            'red': self._count_in(RED_NUMBERS),
            'black': self._count_in(BLACK_NUMBERS),
            'green': self.frequency_counts.get(0, 0),
        }

    def get_range_distribution(self):
        """Low (1-18) / high (19-36) counts. Zero belongs to neither band."""
        return {
            'low': self._count_in(LOW_NUMBERS),
            'high': self._count_in(HIGH_NUMBERS),
        }

    def get_dozen_distribution(self):
        return {
            'first': self._count_in(FIRST_DOZEN),
            'second': self._count_in(SECOND_DOZEN),
            'third': self._count_in(THIRD_DOZEN),
        }

    def get_summary(self):
        return {
            'total_spins': self.total_spins,
            'mode': self.get_mode(),
            'chi_square': self.get_chi_square_result(),
            'hot_numbers': self.get_hot_numbers(),
            'cold_numbers': self.get_cold_numbers(),
            'color_distribution': self.get_color_distribution(),
            'range_distribution': self.get_range_distribution(),
            'dozen_distribution': self.get_dozen_distribution(),
        }
