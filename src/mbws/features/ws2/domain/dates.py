"""Where: src/mbws/features/ws2/domain/dates.py
What: Partial-precision calendar values used by temporal entity fields.
Why: The service reports dates as ``YYYY``, ``YYYY-MM``, ``YYYY-MM-DD`` or
     nothing at all, and a decode must keep that precision instead of
     guessing the missing parts.
"""

from __future__ import annotations

import datetime
import re
from dataclasses import dataclass
from enum import Enum
from functools import total_ordering
from typing import ClassVar, Final

from .errors import FieldDecodeError


class DatePrecision(str, Enum):
    """How much of a calendar date a value actually carries."""

    ABSENT = "absent"
    YEAR = "year"
    YEAR_MONTH = "year-month"
    FULL = "full"


_SHAPES: Final[dict[int, tuple[DatePrecision, re.Pattern[str]]]] = {
    0: (DatePrecision.YEAR, re.compile(r"(\d{4})", re.ASCII)),
    1: (DatePrecision.YEAR_MONTH, re.compile(r"(\d{4})-(\d{2})", re.ASCII)),
    2: (DatePrecision.FULL, re.compile(r"(\d{4})-(\d{2})-(\d{2})", re.ASCII)),
}

_PRECISION_RANK: Final[dict[DatePrecision, int]] = {
    DatePrecision.ABSENT: 0,
    DatePrecision.YEAR: 1,
    DatePrecision.YEAR_MONTH: 2,
    DatePrecision.FULL: 3,
}


@total_ordering
@dataclass(frozen=True, slots=True, eq=True)
class FlexibleDate:
    """A calendar point tagged with the precision it was reported at.

    Components finer than the precision are always ``None``; the absent
    value carries no components at all and never equals a real date.
    """

    precision: DatePrecision = DatePrecision.ABSENT
    year: int | None = None
    month: int | None = None
    day: int | None = None

    _ABSENT: ClassVar["FlexibleDate"]

    def __post_init__(self) -> None:
        expected = {
            DatePrecision.ABSENT: (False, False, False),
            DatePrecision.YEAR: (True, False, False),
            DatePrecision.YEAR_MONTH: (True, True, False),
            DatePrecision.FULL: (True, True, True),
        }[self.precision]
        present = (self.year is not None, self.month is not None, self.day is not None)
        if present != expected:
            raise ValueError(
                f"components {present} do not match precision {self.precision.value}"
            )
        if self.year is not None:
            # Raises ValueError for out-of-range components.
            _ = datetime.date(self.year, self.month or 1, self.day or 1)

    @classmethod
    def absent(cls) -> "FlexibleDate":
        """Return the shared absent sentinel."""

        return cls._ABSENT

    @classmethod
    def parse(cls, text: str | None, field: str = "date") -> "FlexibleDate":
        """Parse ``YYYY``, ``YYYY-MM`` or ``YYYY-MM-DD``.

        Empty or missing text yields the absent sentinel.

        Args:
            text: Raw element text.
            field: Field name reported when parsing fails.

        Returns:
            FlexibleDate: Value at the precision implied by the hyphen count.

        Raises:
            FieldDecodeError: The text has an unknown shape or out-of-range
                components.
        """
        if text is None:
            return cls._ABSENT
        stripped = text.strip()
        if not stripped:
            return cls._ABSENT

        shape = _SHAPES.get(stripped.count("-"))
        if shape is None:
            raise FieldDecodeError(field, text, "expected YYYY, YYYY-MM or YYYY-MM-DD")
        precision, pattern = shape
        match = pattern.fullmatch(stripped)
        if match is None:
            raise FieldDecodeError(field, text, f"not a {precision.value} date")

        parts: list[int | None] = [int(group) for group in match.groups()]
        year, month, day = (parts + [None, None])[:3]
        try:
            return cls(precision, year, month, day)
        except ValueError as exc:
            raise FieldDecodeError(field, text, str(exc)) from exc

    @property
    def is_absent(self) -> bool:
        return self.precision is DatePrecision.ABSENT

    def to_date(self) -> datetime.date | None:
        """Return the earliest day covered by this value, or None when absent."""

        if self.year is None:
            return None
        return datetime.date(self.year, self.month or 1, self.day or 1)

    def render(self) -> str:
        """Render the value back to the text form it was parsed from."""

        if self.precision is DatePrecision.YEAR:
            return f"{self.year:04d}"
        if self.precision is DatePrecision.YEAR_MONTH:
            return f"{self.year:04d}-{self.month:02d}"
        if self.precision is DatePrecision.FULL:
            return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"
        return ""

    def _sort_key(self) -> tuple[int, int, int, int, int]:
        if self.year is None:
            return (0, 0, 0, 0, 0)
        return (1, self.year, self.month or 0, self.day or 0, _PRECISION_RANK[self.precision])

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, FlexibleDate):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def __bool__(self) -> bool:
        return not self.is_absent

    def __str__(self) -> str:
        return self.render()


FlexibleDate._ABSENT = FlexibleDate()


__all__ = ["DatePrecision", "FlexibleDate"]
