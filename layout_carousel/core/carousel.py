"""CarouselState — persisted layout order plus the press-streak state machine.

A single press toggles between the two most recently used layouts
(slots 0 and 1 of ``layout_order``).  Rapid follow-up presses walk
``candidate_pointer`` through the rest of the list, swapping each
candidate into the active slot.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field

import layout_carousel.log  # registers TRACE level and logger.trace()
from layout_carousel.core.duration import Duration

logger = logging.getLogger(__name__)

# streak_count is persisted as an unsigned byte; it saturates instead of wrapping
STREAK_COUNT_MAX = 255


def _as_int(data: dict, key: str) -> int:
    value = data[key]
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"Invalid {key!r}: {value!r} (must be an integer)")
    return value


def _as_float(data: dict, key: str) -> float:
    value = data[key]
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"Invalid {key!r}: {value!r} (must be a number)")
    return float(value)


@dataclass
class CarouselState:
    last_call_time: float
    layout_order: list[int] = field(default_factory=list)
    active_pointer: int = 0
    candidate_pointer: int = 0
    streak_elapsed: float = 0.0
    streak_count: int = 0
    duration: Duration = field(default_factory=Duration)

    # -- construction ---------------------------------------------------

    @classmethod
    def create_default(cls, layout_count: int, now: float | None = None) -> CarouselState:
        """Fresh state for *layout_count* layouts in their natural order."""
        return cls(
            last_call_time=time.time() if now is None else now,
            layout_order=list(range(layout_count)),
        )

    @classmethod
    def from_dict(cls, data: dict) -> CarouselState:
        """Rebuild a state from its persisted form.

        Raises ``KeyError``/``ValueError`` on missing or malformed fields.
        ``max_duration`` is optional so that older records still load.
        """
        if not isinstance(data, dict):
            raise ValueError("State record must be a JSON object")

        layouts = data['layouts']
        if not isinstance(layouts, list) or any(
            isinstance(i, bool) or not isinstance(i, int) or i < 0 for i in layouts
        ):
            raise ValueError(f"Invalid 'layouts': {layouts!r}")
        if len(set(layouts)) != len(layouts):
            raise ValueError(f"Invalid 'layouts': duplicate entries in {layouts!r}")

        active = _as_int(data, 'index_frequent')
        candidate = _as_int(data, 'index_rotational')
        for name, pointer in (('index_frequent', active), ('index_rotational', candidate)):
            if pointer < 0 or (layouts and pointer >= len(layouts)):
                raise ValueError(f"Invalid {name!r}: {pointer} out of range")

        counter = _as_int(data, 'counter')
        if not (0 <= counter <= STREAK_COUNT_MAX):
            raise ValueError(f"Invalid 'counter': {counter} (must be between 0 and {STREAK_COUNT_MAX})")

        duration = Duration()
        if 'max_duration' in data:
            duration = Duration(_as_float(data, 'max_duration'))

        return cls(
            last_call_time=_as_float(data, 'last_time'),
            layout_order=list(layouts),
            active_pointer=active,
            candidate_pointer=candidate,
            streak_elapsed=_as_float(data, 'sum_time'),
            streak_count=counter,
            duration=duration,
        )

    def to_dict(self) -> dict:
        return {
            'last_time': self.last_call_time,
            'layouts': list(self.layout_order),
            'index_frequent': self.active_pointer,
            'index_rotational': self.candidate_pointer,
            'sum_time': self.streak_elapsed,
            'counter': self.streak_count,
            'max_duration': self.duration.value,
        }

    # -- state machine --------------------------------------------------

    @property
    def can_rotate(self) -> bool:
        """A carousel of fewer than two layouts has nothing to switch."""
        return len(self.layout_order) >= 2

    @property
    def target_layout(self) -> int:
        """Layout index the compositor should make active."""
        return self.layout_order[self.active_pointer]

    def advance_timing(self, now: float) -> int:
        """Account for a call at *now* and classify it within a streak.

        Returns the updated ``streak_count``: 1 for an isolated press (or the
        first of a new streak), 2 for the second rapid press, and so on.
        """
        gap = now - self.last_call_time
        self.last_call_time = now

        self.streak_elapsed += gap
        if self.duration.satisfies(self.streak_elapsed):
            self.streak_count = min(self.streak_count + 1, STREAK_COUNT_MAX)
        else:
            self.streak_elapsed = 0.0
            self.streak_count = 1

        # Within a streak every step is measured from the previous call only
        if self.streak_count > 1:
            self.streak_elapsed = 0.0

        logger.trace("gap=%.3fs streak_count=%d", gap, self.streak_count)  # type: ignore[attr-defined]
        return self.streak_count

    def rotate(self) -> int:
        """Move the pointers for the current streak and return the target layout."""
        if self.streak_count <= 1:
            self.active_pointer = (self.active_pointer + 1) % 2
        else:
            if self.streak_count > 2:
                self.candidate_pointer += 1
            else:
                # Undo the toggle made by the first press before picking a candidate
                self.active_pointer = (self.active_pointer + 1) % 2
                self.candidate_pointer = 2

            self.candidate_pointer %= len(self.layout_order)

            order = self.layout_order
            order[self.active_pointer], order[self.candidate_pointer] = (
                order[self.candidate_pointer], order[self.active_pointer]
            )

        logger.trace(  # type: ignore[attr-defined]
            "order=%s active=%d candidate=%d",
            self.layout_order, self.active_pointer, self.candidate_pointer,
        )
        return self.target_layout
