"""
Hybrid Predictor - Combines the three sub-models into short, mid and
long-term next-number picks.

  short-term : TransitionModel follower of the (penultimate, last) query pair,
               falling back to the frequency mode for an unseen pair
  mid-term   : RecencyAnalyzer trend pick over the recent window
  long-term  : FrequencyAnalyzer mode over the retained history

Horizons are computed independently. Retraining builds a complete new
ModelState aside and commits it with a single reference swap, so a failure
halfway through leaves the previous state answering queries. Appended and
evicted spins are applied as count increments and decrements on copies of
fixed-size sub-models, so a steady stream of spins never forces a rebuild.
"""

import copy
from collections import namedtuple

from config import (
    RECENCY_WINDOW, RECENCY_DECAY, MIN_SPINS_FOR_PREDICTION, is_valid_number,
)

from ruletanaliz.ml.errors import InvalidOutcome, InsufficientHistory
from ruletanaliz.ml.frequency_analyzer import FrequencyAnalyzer
from ruletanaliz.ml.recency_analyzer import RecencyAnalyzer
from ruletanaliz.ml.transition_model import TransitionModel

# Largest number of evicted spins retrain tries to apply incrementally
MAX_EVICTION_SHIFT = 64


class PredictionTriple(namedtuple('PredictionTriple', ['short_term', 'mid_term', 'long_term'])):
    __slots__ = ()

    def to_dict(self):
        """Wire form expected by the mobile client."""
        return {
            'shortTerm': self.short_term,
            'midTerm': self.mid_term,
            'longTerm': self.long_term,
        }


class ModelState:
    """Sub-models trained on exactly `history`. Treated as immutable once built."""

    __slots__ = ('history', 'frequency', 'recency', 'transitions')

    def __init__(self, history, frequency, recency, transitions):
        self.history = history
        self.frequency = frequency
        self.recency = recency
        self.transitions = transitions

    @classmethod
    def build(cls, history, recency_window=RECENCY_WINDOW, recency_decay=RECENCY_DECAY):
        history = tuple(history)
        frequency = FrequencyAnalyzer()
        frequency.load_history(history)
        recency = RecencyAnalyzer(window=recency_window, decay=recency_decay)
        recency.load_history(history)
        transitions = TransitionModel()
        transitions.load_history(history)
        return cls(history, frequency, recency, transitions)

    def advanced(self, shift, tail):
        """New state with the oldest `shift` spins evicted and `tail` applied.

        Works on copies of the current sub-models; their size does not depend
        on the history length.
        """
        frequency = copy.deepcopy(self.frequency)
        recency = copy.deepcopy(self.recency)
        transitions = copy.deepcopy(self.transitions)
        trained = self.history
        for i in range(shift):
            frequency.evict(trained[i])
            transitions.evict(trained[i:i + 3])
        for num in tail:
            frequency.update(num)
            recency.update(num)
            transitions.update(num)
        history = trained[shift:] + tuple(tail)
        recency.trim(len(history))
        return ModelState(history, frequency, recency, transitions)


def find_shift(trained, history, max_shift=MAX_EVICTION_SHIFT):
    """Number of oldest spins `history` dropped from `trained`, or None.

    Matches when `history` is `trained` minus its first `shift` spins,
    followed by any new spins. At least the last two trained spins must
    survive so the transition context carries over.
    """
    for shift in range(min(len(trained), max_shift) + 1):
        overlap = len(trained) - shift
        if overlap > len(history):
            continue
        if shift and overlap < 2:
            break
        if history[:overlap] == trained[shift:]:
            return shift
    return None


def _validated(numbers):
    for num in numbers:
        if not is_valid_number(num):
            raise InvalidOutcome(num)
    return tuple(int(num) for num in numbers)


class HybridPredictor:
    def __init__(self, recency_window=RECENCY_WINDOW, recency_decay=RECENCY_DECAY):
        self.recency_window = recency_window
        self.recency_decay = recency_decay
        self._state = ModelState.build((), recency_window, recency_decay)

    @property
    def spin_count(self):
        return len(self._state.history)

    def retrain(self, history):
        """Bring the model in line with `history`.

        When `history` is the trained history with new spins appended, and
        possibly its oldest spins evicted, only those differences are applied.
        Any other change triggers a full rebuild. Training on the same content
        twice leaves the state as it was.
        """
        history = tuple(history)
        current = self._state
        trained = current.history
        if history == trained:
            return

        shift = find_shift(trained, history)
        if shift is not None:
            tail = _validated(history[len(trained) - shift:])
            state = current.advanced(shift, tail)
        else:
            state = ModelState.build(_validated(history), self.recency_window,
                                     self.recency_decay)

        self._state = state

    def reset(self):
        self._state = ModelState.build((), self.recency_window, self.recency_decay)

    def predict(self, penultimate, last):
        """Return a PredictionTriple for the query pair.

        Raises InsufficientHistory until two spins have been trained on.
        """
        state = self._state
        observed = len(state.history)
        if observed < MIN_SPINS_FOR_PREDICTION:
            raise InsufficientHistory(observed, MIN_SPINS_FOR_PREDICTION)
        for value in (penultimate, last):
            if not is_valid_number(value):
                raise InvalidOutcome(value)

        long_term = state.frequency.get_mode()
        mid_term = state.recency.get_trend_pick()
        short_term = state.transitions.get_follower_pick(penultimate, last)
        if short_term is None:
            short_term = long_term

        return PredictionTriple(short_term, mid_term, long_term)

    def get_summary(self):
        state = self._state
        return {
            'total_spins': len(state.history),
            'frequency': state.frequency.get_summary(),
            'recency': state.recency.get_summary(),
            'transitions': state.transitions.get_summary(),
        }
