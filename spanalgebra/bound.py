"""Single contiguous ranges and the pairwise algebra between them.

Every operation takes the domain comparator explicitly, so bounds work for any
totally ordered type (integers, characters, timestamps, ...) without relying
on the type's own operators beyond what ``compare`` defines. Each method reads
at most a handful of boundary comparisons:

    lo/lo  compare(a.lo.value, b.lo.value)
    lo/hi  compare(a.lo.value, b.hi.value)
    hi/lo  compare(a.hi.value, b.lo.value)
    hi/hi  compare(a.hi.value, b.hi.value)
"""

from collections.abc import Callable
from dataclasses import InitVar, dataclass
from typing import Any, Generic

from typing_extensions import override

from spanalgebra.edge import (
    Compare,
    Edge,
    Successor,
    T,
    is_near,
    max_edge,
    min_edge,
    natural_compare,
)
from spanalgebra.errors import BoundParseError, InvalidBoundError

_LO_BRACKETS = {"[": True, "(": False}
_HI_BRACKETS = {"]": True, ")": False}
_DIVIDER = ":"


class _NaturalOrder:
    """Placeholder default for ``Bound(compare=...)``, read as ``natural_compare``."""

    @override
    def __repr__(self) -> str:
        return "<natural order>"


_NATURAL_ORDER: Any = _NaturalOrder()


@dataclass(frozen=True, kw_only=True)
class Bound(Generic[T]):
    lo: Edge[T]
    hi: Edge[T]
    compare: InitVar["Compare[T]"] = _NATURAL_ORDER

    def __post_init__(self, compare: "Compare[T]") -> None:
        if compare is None:
            raise TypeError("Bound requires a compare function, got None")
        if compare is _NATURAL_ORDER:
            compare = natural_compare

        compared = compare(self.lo.value, self.hi.value)
        if compared > 0:
            raise InvalidBoundError(
                f"Bound lower value ({self.lo.value!r}) must be <= "
                f"upper value ({self.hi.value!r})"
            )
        if compared == 0 and not (self.lo.included and self.hi.included):
            raise InvalidBoundError(
                f"Bound {format_edges(self.lo, self.hi)} contains no values.\n"
                f"A single-point bound must be closed on both ends: "
                f"[{self.lo.value}:{self.hi.value}]"
            )

    def contains(self, other: "Bound[T]", compare: "Compare[T]" = natural_compare) -> bool:
        """True if every value of ``other`` is also in this bound."""
        locmp = compare(self.lo.value, other.lo.value)
        hicmp = compare(self.hi.value, other.hi.value)

        start_within = locmp < 0 or (
            locmp == 0 and (self.lo.included or not other.lo.included)
        )
        end_within = hicmp > 0 or (
            hicmp == 0 and (self.hi.included or not other.hi.included)
        )
        return start_within and end_within

    def overlaps(self, other: "Bound[T]", compare: "Compare[T]" = natural_compare) -> bool:
        """True if the bounds share at least one value.

        Bounds touching at a point that either side excludes do not overlap:
        ``(1:2]`` and ``[2:3)`` overlap, ``(1:2]`` and ``(2:3)`` do not.
        """
        lohicmp = compare(self.lo.value, other.hi.value)
        hilocmp = compare(self.hi.value, other.lo.value)

        other_below = lohicmp > 0 or (
            lohicmp == 0 and not (self.lo.included and other.hi.included)
        )
        other_above = hilocmp < 0 or (
            hilocmp == 0 and not (self.hi.included and other.lo.included)
        )
        return not other_below and not other_above

    def position(self, value: T, compare: "Compare[T]" = natural_compare) -> int:
        """Locate ``value``: +1 before the bound, -1 after it, 0 inside."""
        locmp = compare(self.lo.value, value)
        if locmp > 0 or (locmp == 0 and not self.lo.included):
            return +1

        hicmp = compare(self.hi.value, value)
        if hicmp < 0 or (hicmp == 0 and not self.hi.included):
            return -1

        return 0

    def difference(
        self, other: "Bound[T]", compare: "Compare[T]" = natural_compare
    ) -> "list[Bound[T]]":
        """Return the parts of this bound not covered by ``other``.

        The result holds zero, one or two bounds in ascending order:

            [1:3] - (1:2) = [1:1] [2:3]
            [1:4] - [2:3] = [1:2) (3:4]
            [1:2] - [1:3] = (nothing)
        """
        if other.contains(self, compare):
            return []
        if not self.overlaps(other, compare):
            return [self]

        result: list[Bound[T]] = []

        locmp = compare(other.lo.value, self.lo.value)
        if locmp == 0:
            # [1:3] - (1:2] keeps the lone point [1:1]
            if self.lo.included and not other.lo.included:
                result.append(point(self.lo.value, compare=compare))
        elif locmp > 0:
            hi = Edge(value=other.lo.value, included=not other.lo.included)
            result.append(Bound(lo=self.lo, hi=hi, compare=compare))

        hicmp = compare(other.hi.value, self.hi.value)
        if hicmp == 0:
            if self.hi.included and not other.hi.included:
                result.append(point(self.hi.value, compare=compare))
        elif hicmp < 0:
            lo = Edge(value=other.hi.value, included=not other.hi.included)
            result.append(Bound(lo=lo, hi=self.hi, compare=compare))

        return result

    @override
    def __str__(self) -> str:
        return format_edges(self.lo, self.hi)

    @override
    def __format__(self, format_spec: str) -> str:
        return format_edges(self.lo, self.hi, format_spec)


def new_bound(
    lo_included: bool,
    lo: T,
    hi: T,
    hi_included: bool,
    compare: "Compare[T]" = natural_compare,
) -> Bound[T]:
    """Build a validated bound from raw values and inclusion flags."""
    return Bound(
        lo=Edge(value=lo, included=lo_included),
        hi=Edge(value=hi, included=hi_included),
        compare=compare,
    )


def closed(lo: T, hi: T, compare: "Compare[T]" = natural_compare) -> Bound[T]:
    """``[lo:hi]``"""
    return new_bound(True, lo, hi, True, compare)


def opened(lo: T, hi: T, compare: "Compare[T]" = natural_compare) -> Bound[T]:
    """``(lo:hi)``"""
    return new_bound(False, lo, hi, False, compare)


def closed_open(lo: T, hi: T, compare: "Compare[T]" = natural_compare) -> Bound[T]:
    """``[lo:hi)``"""
    return new_bound(True, lo, hi, False, compare)


def open_closed(lo: T, hi: T, compare: "Compare[T]" = natural_compare) -> Bound[T]:
    """``(lo:hi]``"""
    return new_bound(False, lo, hi, True, compare)


def point(value: T, compare: "Compare[T]" = natural_compare) -> Bound[T]:
    """``[value:value]``"""
    return new_bound(True, value, value, True, compare)


def union_bounds(
    a: Bound[T],
    b: Bound[T],
    compare: "Compare[T]" = natural_compare,
    successor: "Successor[T] | None" = None,
) -> "tuple[Bound[T], bool]":
    """Merge two bounds if they overlap or touch.

    Returns ``(merged, True)`` on success. Otherwise returns the lower of the
    two bounds unchanged with ``False``.

    Bounds that do not overlap still join in two cases (see ``is_near``):
    ``[1:2]`` with ``(2:3]`` gives ``[1:3]`` in any domain, and ``[1:2]`` with
    ``[3:4]`` gives ``[1:4]`` when ``successor`` says nothing lies between
    2 and 3.
    """
    if a.contains(b, compare):
        return a, True
    if b.contains(a, compare):
        return b, True

    if not a.overlaps(b, compare):
        if compare(a.hi.value, b.lo.value) <= 0 and is_near(
            successor, compare, a.hi, b.lo
        ):
            return Bound(lo=a.lo, hi=b.hi, compare=compare), True
        if compare(b.hi.value, a.lo.value) <= 0 and is_near(
            successor, compare, b.hi, a.lo
        ):
            return Bound(lo=b.lo, hi=a.hi, compare=compare), True

        lower = a if compare(a.lo.value, b.lo.value) <= 0 else b
        return lower, False

    lo = min_edge(a.lo, b.lo, compare)
    hi = max_edge(a.hi, b.hi, compare)
    return Bound(lo=lo, hi=hi, compare=compare), True


def format_edges(lo: Edge[T], hi: Edge[T], format_spec: str = "") -> str:
    opening = "[" if lo.included else "("
    closing = "]" if hi.included else ")"
    return (
        f"{opening}{format(lo.value, format_spec)}"
        f"{_DIVIDER}{format(hi.value, format_spec)}{closing}"
    )


def format_bound(bound: Bound[T], format_spec: str = "") -> str:
    """Render a bound as ``[lo:hi]``, ``(lo:hi)``, ``[lo:hi)`` or ``(lo:hi]``.

    ``format_spec`` is applied to both values, e.g. ``".2f"``.
    """
    return format_edges(bound.lo, bound.hi, format_spec)


def parse_bound(
    text: str,
    parser: Callable[[str], T],
    compare: "Compare[T]" = natural_compare,
) -> Bound[T]:
    """Parse ``[lo:hi]``-style text into a bound.

    ``[``/``]`` mark included edges and ``(``/``)`` excluded ones. Values are
    read with ``parser``. When the values themselves contain ``:`` (times of
    day, for instance) each divider position is tried from left to right and
    the first one where both halves parse wins.

    Raises:
        BoundParseError: If the text is malformed or a value does not parse
        InvalidBoundError: If the parsed bound is reversed or empty
    """
    if len(text) < 5:
        raise BoundParseError(
            f"Invalid bound {text!r}: too short.\n"
            f"Expected at least 5 characters, like '[1:2]'"
        )

    opening, closing = text[0], text[-1]
    if opening not in _LO_BRACKETS:
        raise BoundParseError(
            f"Invalid bound {text!r}: must start with '[' or '(', got {opening!r}"
        )
    if closing not in _HI_BRACKETS:
        raise BoundParseError(
            f"Invalid bound {text!r}: must end with ']' or ')', got {closing!r}"
        )

    body = text[1:-1]
    dividers = [i for i, char in enumerate(body) if char == _DIVIDER]
    if not dividers:
        raise BoundParseError(
            f"Invalid bound {text!r}: missing '{_DIVIDER}' between values.\n"
            f"Example: '[1:2)'"
        )

    last_error: Exception | None = None
    for divider in dividers:
        try:
            lo = parser(body[:divider])
            hi = parser(body[divider + 1 :])
        except (ValueError, TypeError, OverflowError) as exc:
            last_error = exc
            continue
        return new_bound(_LO_BRACKETS[opening], lo, hi, _HI_BRACKETS[closing], compare)

    raise BoundParseError(
        f"Invalid bound {text!r}: could not parse values ({last_error})"
    ) from last_error
