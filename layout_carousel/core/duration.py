"""Keypress duration — the window that groups presses into one streak."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from layout_carousel.errors import IncorrectMaxDurationError


@dataclass(frozen=True)
class Duration:
    """Maximum gap in seconds between two calls of the same streak."""

    DEFAULT: ClassVar[float] = 0.4
    MIN: ClassVar[float] = 0.2
    MAX: ClassVar[float] = 1.0

    value: float = DEFAULT

    @classmethod
    def validate(cls, value: float) -> bool:
        """True iff *value* lies in ``[MIN, MAX)``."""
        return cls.MIN <= value < cls.MAX

    @classmethod
    def parse(cls, value: float) -> Duration:
        """Build a user-supplied duration, rejecting out-of-range values."""
        if not cls.validate(value):
            raise IncorrectMaxDurationError(value)
        return cls(float(value))

    def within_range(self) -> bool:
        return self.validate(self.value)

    def satisfies(self, elapsed: float) -> bool:
        """True while *elapsed* still belongs to the current streak."""
        return elapsed < self.value

    def __str__(self) -> str:
        return str(self.value)
