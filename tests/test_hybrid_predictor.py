"""
Tests for HybridPredictor: horizon picks, retrain idempotence, incremental
vs full rebuild equivalence, all-or-nothing commits and error conditions.
"""
import pytest
import numpy as np
import sys
import os

PROJECT_ROOT = os.path.join(os.path.dirname(__file__), '..')
sys.path.insert(0, PROJECT_ROOT)

from ruletanaliz.ml.errors import InvalidOutcome, InsufficientHistory, PredictionError
from ruletanaliz.ml.frequency_analyzer import FrequencyAnalyzer
from ruletanaliz.ml.hybrid import HybridPredictor, PredictionTriple, ModelState, find_shift


SAMPLE_SPINS = [
    17, 25, 2, 21, 4, 19, 15, 3, 26, 0,
    32, 14, 35, 22, 9, 18, 29, 7, 28, 12,
    8, 30, 11, 36, 13, 27, 6, 34, 10, 33,
    1, 20, 16, 5, 24, 23, 31, 17, 25, 2,
    21, 4, 19, 15, 3, 26, 0, 32, 14, 35,
]

QUERY_PAIRS = [(17, 25), (25, 2), (0, 32), (14, 35), (36, 36), (0, 0)]


def _trained(history):
    p = HybridPredictor()
    p.retrain(history)
    return p


class TestInsufficientHistory:
    def test_empty_predictor(self):
        with pytest.raises(InsufficientHistory):
            HybridPredictor().predict(1, 2)

    def test_single_spin(self):
        p = _trained([3])
        with pytest.raises(InsufficientHistory) as exc:
            p.predict(3, 3)
        assert exc.value.observed == 1
        assert exc.value.code == 'insufficient_history'

    def test_two_spins_succeed(self):
        p = _trained([3, 8])
        triple = p.predict(3, 8)
        assert all(0 <= v <= 36 for v in triple)

    def test_is_a_prediction_error(self):
        assert issubclass(InsufficientHistory, PredictionError)
        assert issubclass(InvalidOutcome, ValueError)


class TestHorizons:
    def test_mode_scenario(self):
        p = _trained([5, 5, 5, 10, 17])
        triple = p.predict(10, 17)
        assert triple.long_term == 5
        # (10, 17) was never followed, short-term falls back to the mode
        assert triple.short_term == 5
        assert triple == PredictionTriple(5, 5, 5)

    def test_repeated_scenario_is_deterministic(self):
        p = _trained([2, 2, 2, 2])
        first = p.predict(2, 2)
        second = p.predict(2, 2)
        assert first == second == PredictionTriple(2, 2, 2)

    def test_short_term_follows_query_pair(self):
        p = _trained([1, 2, 30, 1, 2])
        triple = p.predict(1, 2)
        assert triple.short_term == 30
        assert triple.mid_term == 2
        assert triple.long_term == 1

    def test_short_term_uses_query_not_ledger_tail(self):
        p = _trained([1, 2, 30, 4, 5])
        assert p.predict(1, 2).short_term == 30
        # Unseen pair falls back to the mode (lowest of the five singletons)
        assert p.predict(4, 5).short_term == 1

    def test_long_term_is_mode_with_lowest_tie_break(self):
        assert _trained([20, 3, 20, 3]).predict(20, 3).long_term == 3
        assert _trained([4, 9, 9, 4, 9]).predict(4, 9).long_term == 9

    def test_zero_participates(self):
        p = _trained([0, 0, 0, 5, 0])
        triple = p.predict(0, 0)
        assert triple.long_term == 0
        assert triple.short_term == 0

    def test_invalid_query_values(self):
        p = _trained([1, 2, 3])
        for bad in (-1, 37, None, '2', True):
            with pytest.raises(InvalidOutcome):
                p.predict(bad, 2)

    def test_triple_wire_form(self):
        triple = PredictionTriple(1, 2, 3)
        assert triple.to_dict() == {'shortTerm': 1, 'midTerm': 2, 'longTerm': 3}


class TestRetrain:
    def test_empty_history_is_neutral(self):
        p = HybridPredictor()
        p.retrain([])
        assert p.spin_count == 0
        assert p.get_summary()['frequency']['mode'] == 0

    def test_idempotent(self):
        once = _trained(SAMPLE_SPINS)
        twice = _trained(SAMPLE_SPINS)
        twice.retrain(SAMPLE_SPINS)
        for pair in QUERY_PAIRS:
            assert once.predict(*pair) == twice.predict(*pair)
        assert once.get_summary() == twice.get_summary()

    def test_same_content_keeps_state_object(self):
        p = _trained(SAMPLE_SPINS)
        state = p._state
        p.retrain(list(SAMPLE_SPINS))
        assert p._state is state

    def test_incremental_matches_full_rebuild(self):
        incremental = HybridPredictor()
        for i in range(1, len(SAMPLE_SPINS) + 1):
            incremental.retrain(SAMPLE_SPINS[:i])
        full = _trained(SAMPLE_SPINS)

        assert incremental.spin_count == full.spin_count == len(SAMPLE_SPINS)
        for pair in QUERY_PAIRS:
            assert incremental.predict(*pair) == full.predict(*pair)
        assert incremental.get_summary() == full.get_summary()
        assert np.array_equal(incremental._state.transitions.counts_2,
                              full._state.transitions.counts_2)

    def test_incremental_does_not_mutate_previous_state(self):
        p = _trained([5, 5, 5])
        old_state = p._state
        p.retrain([5, 5, 5, 9, 9, 9, 9])
        assert old_state.frequency.frequency_counts[9] == 0
        assert p.predict(9, 9).long_term == 9

    def test_history_with_oldest_spins_dropped(self):
        p = _trained([5, 5, 5, 10, 17])
        p.retrain([10, 17, 17])
        assert p.spin_count == 3
        assert p.predict(10, 17).long_term == 17

    def test_invalid_history_leaves_state_untouched(self):
        p = _trained([5, 5, 5, 10, 17])
        before = p.predict(10, 17)
        with pytest.raises(InvalidOutcome):
            p.retrain([5, 5, 5, 10, 17, 99])
        assert p.spin_count == 5
        assert p.predict(10, 17) == before

    def test_failed_rebuild_is_all_or_nothing(self, monkeypatch):
        p = _trained([5, 5, 5, 10, 17])
        before = p.predict(10, 17)

        def boom(self, history):
            raise MemoryError('simulated')

        monkeypatch.setattr(FrequencyAnalyzer, 'load_history', boom)
        with pytest.raises(MemoryError):
            p.retrain([1, 2, 3])
        assert p.spin_count == 5
        assert p.predict(10, 17) == before

    def test_failed_incremental_update_is_all_or_nothing(self, monkeypatch):
        p = _trained([5, 5, 5, 10, 17])
        before = p.predict(10, 17)

        def boom(self, shift, tail):
            raise MemoryError('simulated')

        monkeypatch.setattr(ModelState, 'advanced', boom)
        with pytest.raises(MemoryError):
            p.retrain([5, 5, 5, 10, 17, 17])
        assert p.spin_count == 5
        assert p.predict(10, 17) == before

    def test_reset(self):
        p = _trained(SAMPLE_SPINS)
        p.reset()
        assert p.spin_count == 0
        with pytest.raises(InsufficientHistory):
            p.predict(1, 2)

    def test_summary_structure(self):
        summary = _trained(SAMPLE_SPINS).get_summary()
        assert summary['total_spins'] == len(SAMPLE_SPINS)
        for key in ('frequency', 'recency', 'transitions'):
            assert key in summary


class TestSlidingWindow:
    def test_find_shift(self):
        assert find_shift((), (1, 2)) == 0
        assert find_shift((1, 2, 3), (1, 2, 3, 4)) == 0
        assert find_shift((1, 2, 3, 4), (2, 3, 4, 5)) == 1
        assert find_shift((1, 2, 3, 4), (3, 4)) == 2
        assert find_shift((1, 2, 3, 4), (7, 8, 9)) is None
        # Fewer than two surviving spins cannot carry the pair context
        assert find_shift((1, 2, 3, 4), (4, 5)) is None

    def test_find_shift_respects_limit(self):
        trained = tuple(range(10))
        assert find_shift(trained, trained[5:] + (1,), max_shift=5) == 5
        assert find_shift(trained, trained[6:] + (1,), max_shift=5) is None

    def test_bounded_window_matches_full_rebuild(self):
        window = 8
        p = HybridPredictor()
        for i in range(1, len(SAMPLE_SPINS) + 1):
            history = SAMPLE_SPINS[max(0, i - window):i]
            p.retrain(history)
            full = ModelState.build(history)

            state = p._state
            assert state.history == full.history
            assert state.frequency.frequency_counts == full.frequency.frequency_counts
            assert list(state.recency.recent) == list(full.recency.recent)
            assert np.array_equal(state.transitions.counts_1, full.transitions.counts_1)
            assert np.array_equal(state.transitions.counts_2, full.transitions.counts_2)
            assert state.transitions.total_spins == full.transitions.total_spins

        rebuilt = _trained(SAMPLE_SPINS[-window:])
        for pair in QUERY_PAIRS:
            assert p.predict(*pair) == rebuilt.predict(*pair)
        assert p.get_summary() == rebuilt.get_summary()

    def test_window_shorter_than_recency_window(self):
        p = HybridPredictor()
        p.retrain([9, 9, 9, 1])
        p.retrain([9, 1, 1])
        assert list(p._state.recency.recent) == [9, 1, 1]
        assert p.predict(9, 1).mid_term == 1

    def test_steady_stream_never_rebuilds(self, monkeypatch):
        window = 10
        p = _trained(SAMPLE_SPINS[:window])

        def no_build(cls, *args, **kwargs):
            raise AssertionError('full rebuild on a sliding window')

        monkeypatch.setattr(ModelState, 'build', classmethod(no_build))
        for i in range(window + 1, len(SAMPLE_SPINS) + 1):
            p.retrain(SAMPLE_SPINS[i - window:i])
        assert p.spin_count == window
        assert p._state.history == tuple(SAMPLE_SPINS[-window:])


class TestNumpyInput:
    def test_retrain_accepts_numpy_array(self):
        p = HybridPredictor()
        p.retrain(np.array(SAMPLE_SPINS))
        expected = _trained(SAMPLE_SPINS)
        assert p.get_summary() == expected.get_summary()
        assert all(type(n) is int for n in p._state.history)

    def test_predict_accepts_numpy_integers(self):
        p = _trained(SAMPLE_SPINS)
        assert p.predict(np.int64(17), np.int64(25)) == p.predict(17, 25)

    def test_numpy_bool_rejected(self):
        p = _trained(SAMPLE_SPINS)
        with pytest.raises(InvalidOutcome):
            p.predict(np.bool_(True), 2)
