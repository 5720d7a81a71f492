"""Sets of values stored as sorted, maximally merged bounds.

Notation used in the docstrings below:

    [n:m]  both ends included
    (n:m)  both ends excluded
    [n:m)  lower included, upper excluded

A span always keeps its bounds sorted by lower edge with no two of them
overlapping or touching, so ``[a:o]`` plus ``[o:z]`` is stored as ``[a:z]``.
"""

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from functools import cmp_to_key, reduce
from typing import Any, Generic, Literal, TypeAlias

from typing_extensions import override

from spanalgebra.bound import Bound, closed, union_bounds
from spanalgebra.edge import Compare, Edge, Successor, T

logger = logging.getLogger(__name__)

LocationKind: TypeAlias = Literal["nowhere", "lower", "higher", "exact", "between"]


@dataclass(frozen=True, kw_only=True)
class Location:
    """Where a value falls relative to the bounds of a span.

    Attributes:
        kind: ``exact`` inside bound ``lo`` (== ``hi``); ``between`` in the gap
            after bound ``lo`` and before bound ``hi``; ``lower`` before the
            first bound; ``higher`` after the last bound; ``nowhere`` when the
            span is empty.
        lo: Index of the bound at or below the value, if any
        hi: Index of the bound at or above the value, if any
    """

    kind: LocationKind
    lo: int | None = None
    hi: int | None = None


class Span(Generic[T]):
    """An arbitrary subset of an ordered domain.

    Spans are values: ``union_bound``, ``difference`` and friends return a new
    span and never modify the receiver.

    Args:
        bounds: Initial bounds, in any order, possibly overlapping
        compare: Three-way comparator defining the domain order (required)
        successor: Step function for discrete domains; ``None`` means no two
            distinct values are ever adjacent

    Example:
        >>> from spanalgebra import INTEGER
        >>> s = INTEGER.parse_span("[1:2]", "[3:4]")
        >>> str(s)
        '[1:4]'
    """

    def __init__(
        self,
        bounds: Iterable[Bound[T]] = (),
        *,
        compare: "Compare[T] | None",
        successor: "Successor[T] | None" = None,
    ):
        if compare is None:
            raise TypeError(
                "Span requires a compare function, got None.\n"
                "Hint: pass compare=natural_compare for types with < and >, "
                "or use a preset like INTEGER.span(...)"
            )
        self.compare: Compare[T] = compare
        self.successor: Successor[T] | None = successor
        self._key: Any = cmp_to_key(
            lambda a, b: compare(a.lo.value, b.lo.value)
        )
        self._bounds: tuple[Bound[T], ...] = ()

        for bound in bounds:
            self._bounds = self._union_bound(bound)

    def _derive(self, bounds: Iterable[Bound[T]]) -> "Span[T]":
        """Return a span sharing this one's domain, trusting ``bounds`` order."""
        derived: Span[T] = Span(compare=self.compare, successor=self.successor)
        derived._bounds = tuple(bounds)
        return derived

    @property
    def bounds(self) -> tuple[Bound[T], ...]:
        return self._bounds

    def __iter__(self) -> Iterator[Bound[T]]:
        return iter(self._bounds)

    def __len__(self) -> int:
        return len(self._bounds)

    def __bool__(self) -> bool:
        return bool(self._bounds)

    # Queries

    def _search(self, value: T) -> tuple[int, bool]:
        """Binary search by ``Bound.position``.

        Returns ``(index, True)`` for the bound holding ``value``, otherwise
        ``(index, False)`` where ``index`` is the first bound after ``value``.
        """
        lo, hi = 0, len(self._bounds)
        while lo < hi:
            mid = (lo + hi) // 2
            position = self._bounds[mid].position(value, self.compare)
            if position < 0:
                lo = mid + 1
            elif position > 0:
                hi = mid
            else:
                return mid, True
        return lo, False

    def contains(self, value: T) -> bool:
        """True if ``value`` belongs to the span."""
        return self._search(value)[1]

    def contains_bound(self, bound: Bound[T]) -> bool:
        """True if every value of ``bound`` belongs to the span."""
        index, _ = self._search(bound.lo.value)
        # A miss still leaves a candidate when the next bound opens exactly at
        # bound.lo, e.g. (1:3) holding (1:2)
        if index >= len(self._bounds):
            return False
        return self._bounds[index].contains(bound, self.compare)

    def locate(self, value: T) -> Location:
        """Describe where ``value`` falls among the bounds."""
        if not self._bounds:
            return Location(kind="nowhere")

        index, found = self._search(value)
        if found:
            return Location(kind="exact", lo=index, hi=index)
        if index == 0:
            return Location(kind="lower", hi=0)
        if index == len(self._bounds):
            return Location(kind="higher", lo=index - 1)
        return Location(kind="between", lo=index - 1, hi=index)

    def __contains__(self, item: object) -> bool:
        if isinstance(item, Bound):
            return self.contains_bound(item)
        return self.contains(item)  # pyright: ignore[reportArgumentType]

    # Union

    def _union_bound(self, bound: Bound[T]) -> tuple[Bound[T], ...]:
        # Revalidate under this span's order in case the bound was built with
        # a different comparator
        candidate = Bound(lo=bound.lo, hi=bound.hi, compare=self.compare)

        kept: list[Bound[T]] = []
        absorbed = 0
        for existing in self._bounds:
            merged, ok = union_bounds(existing, candidate, self.compare, self.successor)
            if ok:
                candidate = merged
                absorbed += 1
                continue
            kept.append(existing)

        kept.append(candidate)
        kept.sort(key=self._key)

        if absorbed:
            logger.debug("Merged %s with %d bound(s) into %s", bound, absorbed, candidate)
        return tuple(kept)

    def union_bound(self, bound: Bound[T]) -> "Span[T]":
        """Return a span holding this span's values and the values of ``bound``.

        Every existing bound that overlaps or touches the candidate is absorbed
        into it; the rest are kept as they are.
        """
        return self._derive(self._union_bound(bound))

    def union(self, other: "Span[T] | Bound[T]") -> "Span[T]":
        """Return the union of this span with another span or bound."""
        if isinstance(other, Bound):
            return self.union_bound(other)

        result = self
        for bound in other.bounds:
            result = result.union_bound(bound)
        return result

    def __or__(self, other: "Span[T] | Bound[T]") -> "Span[T]":
        if not isinstance(other, (Span, Bound)):
            return NotImplemented
        return self.union(other)

    # Difference

    def _coalesce(self, bounds: list[Bound[T]]) -> list[Bound[T]]:
        """Merge neighbours in an already sorted list that have become adjacent."""
        result: list[Bound[T]] = []
        for bound in bounds:
            if result:
                merged, ok = union_bounds(result[-1], bound, self.compare, self.successor)
                if ok:
                    result[-1] = merged
                    continue
            result.append(bound)
        return result

    def difference_bound(self, bound: Bound[T]) -> "Span[T]":
        """Return this span with every value of ``bound`` removed.

        Existing bounds inside ``bound`` are dropped, overlapping ones are cut
        with ``Bound.difference`` and the rest are kept.
        """
        bound = Bound(lo=bound.lo, hi=bound.hi, compare=self.compare)

        result: list[Bound[T]] = []
        for existing in self._bounds:
            if bound.contains(existing, self.compare):
                logger.debug("Removed %s (inside %s)", existing, bound)
                continue
            if existing.overlaps(bound, self.compare):
                pieces = existing.difference(bound, self.compare)
                logger.debug("Cut %s by %s into %d piece(s)", existing, bound, len(pieces))
                result.extend(pieces)
                continue
            result.append(existing)

        # In a discrete domain a cut that removed no representable value,
        # like (2:3) from [1:6] over integers, leaves adjacent pieces
        return self._derive(self._coalesce(result))

    def difference(self, other: "Span[T] | Bound[T]") -> "Span[T]":
        """Return this span minus every value of another span or bound."""
        if isinstance(other, Bound):
            return self.difference_bound(other)

        result = self
        for bound in other.bounds:
            result = result.difference_bound(bound)
        return result

    def __sub__(self, other: "Span[T] | Bound[T]") -> "Span[T]":
        if not isinstance(other, (Span, Bound)):
            return NotImplemented
        return self.difference(other)

    # Comparison and text

    def _same_edge(self, a: Edge[T], b: Edge[T]) -> bool:
        return a.included == b.included and self.compare(a.value, b.value) == 0

    @override
    def __eq__(self, other: object) -> bool:
        """Spans are equal when their bounds match edge for edge.

        Spans over different comparators never compare equal.
        """
        if not isinstance(other, Span):
            return NotImplemented
        if self.compare is not other.compare:
            return False
        if len(self._bounds) != len(other._bounds):
            return False
        return all(
            self._same_edge(a.lo, b.lo) and self._same_edge(a.hi, b.hi)
            for a, b in zip(self._bounds, other._bounds)
        )

    @override
    def __str__(self) -> str:
        return "".join(str(bound) for bound in self._bounds)

    @override
    def __format__(self, format_spec: str) -> str:
        return "".join(format(bound, format_spec) for bound in self._bounds)

    @override
    def __repr__(self) -> str:
        return f"Span({str(self)!r})"


def union(*spans: "Span[T] | None") -> "Span[T]":
    """Union any number of spans over the same domain.

    ``None`` entries are skipped.
    """
    present = [span for span in spans if span is not None]
    if not present:
        raise ValueError(
            "union() requires at least one span argument.\n"
            "Example: union(span_a, span_b, span_c)"
        )

    def reducer(acc: "Span[T]", nxt: "Span[T]") -> "Span[T]":
        return acc | nxt

    return reduce(reducer, present)


def make_strict_bounds(
    span: Span[T], successor: "Successor[T] | None" = None
) -> Span[T]:
    """Rewrite every bound of ``span`` with closed edges only.

    An excluded lower edge moves one step up and an excluded upper edge one
    step down, so over characters ``(a:z)`` becomes ``[b:y]``. Bounds with no
    representable value left, like ``(1:2)`` over integers, are dropped.

    Args:
        span: Span to convert
        successor: Step function to use; defaults to the span's own

    Raises:
        ValueError: If neither ``successor`` nor the span provides one
    """
    step = successor if successor is not None else span.successor
    if step is None:
        raise ValueError(
            "make_strict_bounds() needs a successor function to close open "
            "edges.\n"
            "Hint: pass successor=... (e.g. math.nextafter for floats)"
        )

    bounds = span.bounds
    if not bounds:
        return span

    compare = span.compare
    min_value = bounds[0].lo.value
    max_value = bounds[-1].hi.value

    strict: list[Bound[T]] = []
    for bound in bounds:
        if bound.lo.included and bound.hi.included:
            strict.append(bound)
            continue

        lo = bound.lo.value if bound.lo.included else step(bound.lo.value, max_value)
        hi = bound.hi.value if bound.hi.included else step(bound.hi.value, min_value)

        if compare(lo, hi) > 0:
            logger.debug("Dropped %s: no closed equivalent", bound)
            continue
        strict.append(closed(lo, hi, compare))

    return Span(strict, compare=compare, successor=span.successor)


def from_pairs(
    pairs: Iterable[tuple[T, T]],
    *,
    compare: "Compare[T]",
    successor: "Successor[T] | None" = None,
) -> Span[T]:
    """Build a span of closed bounds from ``(lo, hi)`` pairs."""
    return Span(
        (closed(lo, hi, compare) for lo, hi in pairs),
        compare=compare,
        successor=successor,
    )


def to_edges(bounds: "Span[T] | Iterable[Bound[T]]") -> list[tuple[Edge[T], Edge[T]]]:
    """Flatten bounds into ``(lo_edge, hi_edge)`` tuples."""
    return [(bound.lo, bound.hi) for bound in bounds]
