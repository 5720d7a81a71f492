"""Ready-made domains: comparator, successor and text parser bundled together.

Discrete domains (integers, characters, dates, datetimes) step one value at a
time, so ``[1:2]`` and ``[3:4]`` coalesce into ``[1:4]``. Floats are treated as
continuous and never coalesce across a gap; ``float_successor`` is provided for
``make_strict_bounds``.
"""

import math
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Generic

from dateutil.parser import isoparse, isoparser

from spanalgebra.bound import Bound, new_bound, parse_bound
from spanalgebra.edge import Compare, Successor, T, natural_compare
from spanalgebra.span import Span

# Smallest representable step for datetime values
MICROSECOND = timedelta(microseconds=1)
DAY = timedelta(days=1)


@dataclass(frozen=True, kw_only=True)
class Domain(Generic[T]):
    """Everything a span needs to know about its value type.

    Attributes:
        name: Short label for the value type
        compare: Three-way comparator
        successor: Step function, or None for a continuous domain
        parser: Turns the text of one value into a value
    """

    name: str
    compare: "Compare[T]"
    successor: "Successor[T] | None"
    parser: Callable[[str], T]

    def bound(
        self, lo: T, hi: T, lo_included: bool = True, hi_included: bool = True
    ) -> Bound[T]:
        return new_bound(lo_included, lo, hi, hi_included, self.compare)

    def span(self, *bounds: Bound[T]) -> Span[T]:
        return Span(bounds, compare=self.compare, successor=self.successor)

    def parse(self, text: str) -> Bound[T]:
        """Parse one bound, e.g. ``INTEGER.parse("[1:5)")``."""
        return parse_bound(text, self.parser, self.compare)

    def parse_span(self, *texts: str) -> Span[T]:
        """Parse several bounds and union them into a span."""
        return self.span(*(self.parse(text) for text in texts))


def int_successor(value: int, target: int) -> int:
    if value == target:
        return value
    return value + 1 if value < target else value - 1


def char_successor(value: str, target: str) -> str:
    if value == target:
        return value
    step = 1 if value < target else -1
    return chr(ord(value) + step)


def _timedelta_successor(step: timedelta) -> "Successor[date]":
    def successor(value, target):
        if value == target:
            return value
        return value + step if value < target else value - step

    return successor


def float_successor(value: float, target: float) -> float:
    return math.nextafter(value, target)


def parse_char(text: str) -> str:
    if len(text) != 1:
        raise ValueError(f"Expected exactly one character, got {text!r}")
    return text


def parse_date(text: str) -> date:
    # Rejects trailing time components instead of truncating them
    return isoparser().parse_isodate(text)


INTEGER: Domain[int] = Domain(
    name="integer",
    compare=natural_compare,
    successor=int_successor,
    parser=int,
)

FLOAT: Domain[float] = Domain(
    name="float",
    compare=natural_compare,
    successor=None,
    parser=float,
)

CHAR: Domain[str] = Domain(
    name="char",
    compare=natural_compare,
    successor=char_successor,
    parser=parse_char,
)

DATE: Domain[date] = Domain(
    name="date",
    compare=natural_compare,
    successor=_timedelta_successor(DAY),
    parser=parse_date,
)

DATETIME: Domain[datetime] = Domain(
    name="datetime",
    compare=natural_compare,
    successor=_timedelta_successor(MICROSECOND),
    parser=isoparse,
)
