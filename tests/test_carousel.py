"""Tests for CarouselState — timing classification and rotation."""

from __future__ import annotations

import pytest

from layout_carousel.core.carousel import STREAK_COUNT_MAX, CarouselState
from layout_carousel.core.duration import Duration

START = 1_000.0


def press(state: CarouselState, at: float) -> int:
    state.advance_timing(at)
    return state.rotate()


# ------------------------------------------------------------------
# create_default
# ------------------------------------------------------------------

class TestCreateDefault:

    def test_identity_order_and_zeroed_pointers(self):
        state = CarouselState.create_default(4, now=START)
        assert state.layout_order == [0, 1, 2, 3]
        assert state.active_pointer == 0
        assert state.candidate_pointer == 0
        assert state.streak_count == 0
        assert state.streak_elapsed == 0.0
        assert state.last_call_time == START
        assert state.duration == Duration(0.4)

    def test_uses_current_time_by_default(self, monkeypatch):
        monkeypatch.setattr('layout_carousel.core.carousel.time.time', lambda: 42.0)
        assert CarouselState.create_default(2).last_call_time == 42.0

    @pytest.mark.parametrize("count,expected", [(0, False), (1, False), (2, True), (5, True)])
    def test_can_rotate(self, count, expected):
        assert CarouselState.create_default(count, now=START).can_rotate is expected


# ------------------------------------------------------------------
# advance_timing
# ------------------------------------------------------------------

class TestAdvanceTiming:

    def test_isolated_press_starts_new_streak(self):
        state = CarouselState.create_default(3, now=START)
        assert state.advance_timing(START + 5.0) == 1
        assert state.streak_elapsed == 0.0
        assert state.last_call_time == START + 5.0

    def test_rapid_press_extends_streak_and_clears_elapsed(self):
        state = CarouselState.create_default(3, now=START)
        state.advance_timing(START + 5.0)
        assert state.advance_timing(START + 5.1) == 2
        assert state.streak_elapsed == 0.0
        assert state.advance_timing(START + 5.2) == 3

    def test_slow_press_breaks_streak(self):
        state = CarouselState.create_default(3, now=START)
        for t in (5.0, 5.1, 5.2):
            state.advance_timing(START + t)
        assert state.advance_timing(START + 6.2) == 1

    def test_gap_accumulates_until_streak_has_two_presses(self):
        state = CarouselState.create_default(3, now=START)
        # First call counts as a streak of one but keeps its elapsed time
        assert state.advance_timing(START + 0.3) == 1
        assert state.streak_elapsed == pytest.approx(0.3)
        # 0.3 + 0.2 exceeds the window even though this gap alone does not
        assert state.advance_timing(START + 0.5) == 1
        assert state.streak_elapsed == 0.0

    def test_custom_duration(self):
        state = CarouselState.create_default(3, now=START)
        state.duration = Duration(0.9)
        state.advance_timing(START + 5.0)
        assert state.advance_timing(START + 5.8) == 2

    def test_counter_saturates(self):
        state = CarouselState.create_default(3, now=START)
        state.streak_count = STREAK_COUNT_MAX
        assert state.advance_timing(START + 0.1) == STREAK_COUNT_MAX
        assert state.advance_timing(START + 0.2) == STREAK_COUNT_MAX


# ------------------------------------------------------------------
# rotate
# ------------------------------------------------------------------

class TestRotate:

    def test_single_press_toggles_without_reordering(self):
        state = CarouselState.create_default(4, now=START)
        assert press(state, START + 5.0) == 1
        assert state.active_pointer == 1
        assert state.layout_order == [0, 1, 2, 3]

        assert press(state, START + 10.0) == 0
        assert state.active_pointer == 0
        assert state.layout_order == [0, 1, 2, 3]

    def test_double_press_picks_third_layout(self):
        state = CarouselState.create_default(4, now=START)
        press(state, START + 5.0)
        target = press(state, START + 5.1)

        assert state.streak_count == 2
        assert state.candidate_pointer == 2
        assert state.active_pointer == 0
        assert state.layout_order == [2, 1, 0, 3]
        assert target == 2

    def test_further_presses_walk_forward(self):
        state = CarouselState.create_default(4, now=START)
        press(state, START + 5.0)
        press(state, START + 5.1)

        assert press(state, START + 5.2) == 3
        assert state.candidate_pointer == 3
        assert state.layout_order == [3, 1, 0, 2]

        # Candidate wraps around to the active slot itself
        assert press(state, START + 5.3) == 3
        assert state.candidate_pointer == 0

        assert press(state, START + 5.4) == 1
        assert state.layout_order == [1, 3, 0, 2]

    def test_toggle_after_cycle_returns_to_previous_layout(self):
        state = CarouselState.create_default(4, now=START)
        press(state, START + 5.0)            # 1
        press(state, START + 5.1)            # 2, order [2, 1, 0, 3]
        assert press(state, START + 8.0) == 1
        assert press(state, START + 11.0) == 2

    def test_two_layouts(self):
        state = CarouselState.create_default(2, now=START)
        targets = [press(state, START + t) for t in (5.0, 5.1, 5.2)]
        assert targets == [1, 0, 1]
        assert sorted(state.layout_order) == [0, 1]

    def test_order_stays_a_permutation(self):
        state = CarouselState.create_default(5, now=START)
        t = START
        for i in range(40):
            t += 0.1 if i % 7 else 3.0
            press(state, t)
            assert sorted(state.layout_order) == [0, 1, 2, 3, 4]
            assert 0 <= state.candidate_pointer < 5
            assert state.active_pointer in (0, 1)


# ------------------------------------------------------------------
# Persisted form
# ------------------------------------------------------------------

class TestDictForm:

    def test_field_names(self):
        state = CarouselState.create_default(3, now=START)
        assert state.to_dict() == {
            'last_time': START,
            'layouts': [0, 1, 2],
            'index_frequent': 0,
            'index_rotational': 0,
            'sum_time': 0.0,
            'counter': 0,
            'max_duration': 0.4,
        }

    def test_roundtrip(self):
        state = CarouselState(
            last_call_time=START, layout_order=[2, 0, 1], active_pointer=1,
            candidate_pointer=2, streak_elapsed=0.25, streak_count=3,
            duration=Duration(0.6),
        )
        assert CarouselState.from_dict(state.to_dict()) == state

    def test_missing_max_duration_defaults(self):
        data = CarouselState.create_default(3, now=START).to_dict()
        del data['max_duration']
        assert CarouselState.from_dict(data).duration == Duration(0.4)

    @pytest.mark.parametrize("key,value", [
        ('layouts', [0, 1, 1]),
        ('layouts', "0,1"),
        ('layouts', [0, -1]),
        ('index_frequent', 3),
        ('index_rotational', -1),
        ('counter', 256),
        ('counter', True),
        ('last_time', "yesterday"),
        ('max_duration', None),
    ])
    def test_rejects_malformed(self, key, value):
        data = CarouselState.create_default(3, now=START).to_dict()
        data[key] = value
        with pytest.raises(ValueError):
            CarouselState.from_dict(data)

    def test_rejects_missing_field(self):
        data = CarouselState.create_default(3, now=START).to_dict()
        del data['counter']
        with pytest.raises(KeyError):
            CarouselState.from_dict(data)

    def test_rejects_non_object(self):
        with pytest.raises(ValueError):
            CarouselState.from_dict([1, 2, 3])
