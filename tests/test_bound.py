"""Tests for single-bound algebra, construction and text form."""

import math

import pytest

from spanalgebra import CHAR, DATETIME, FLOAT, INTEGER
from spanalgebra.bound import (
    Bound,
    closed,
    closed_open,
    format_bound,
    new_bound,
    open_closed,
    opened,
    parse_bound,
    point,
    union_bounds,
)
from spanalgebra.domains import int_successor
from spanalgebra.edge import Edge
from spanalgebra.errors import BoundParseError, InvalidBoundError

TINY = math.ulp(0.0)


def bf(text: str) -> Bound[float]:
    return FLOAT.parse(text)


def blf(text: str) -> list[Bound[float]]:
    return [bf(part) for part in text.split()]


# --- construction ---


def test_constructors_set_inclusion_flags():
    assert str(closed(1, 2)) == "[1:2]"
    assert str(opened(1, 2)) == "(1:2)"
    assert str(closed_open(1, 2)) == "[1:2)"
    assert str(open_closed(1, 2)) == "(1:2]"
    assert str(point(7)) == "[7:7]"
    assert new_bound(False, 1, 2, True) == open_closed(1, 2)


def test_reversed_bound_is_rejected():
    with pytest.raises(InvalidBoundError, match="must be <="):
        closed(3, 1)


@pytest.mark.parametrize(
    "lo_included, hi_included",
    [(False, True), (True, False), (False, False)],
)
def test_point_bound_with_excluded_side_is_rejected(lo_included, hi_included):
    with pytest.raises(InvalidBoundError, match="contains no values"):
        new_bound(lo_included, 1, 1, hi_included)


def test_validation_uses_supplied_comparator():
    def reverse(a, b):
        return (a < b) - (a > b)

    # 3 comes before 1 in reverse order
    assert str(closed(3, 1, reverse)) == "[3:1]"
    with pytest.raises(InvalidBoundError):
        closed(1, 3, reverse)


def test_missing_comparator_fails_fast():
    with pytest.raises(TypeError, match="compare function"):
        Bound(
            lo=Edge(value=1, included=True),
            hi=Edge(value=2, included=True),
            compare=None,  # pyright: ignore[reportArgumentType]
        )


def test_default_comparator_is_not_a_bound_method():
    bound = Bound(lo=Edge(value=1, included=True), hi=Edge(value=2, included=True))
    assert bound == closed(1, 2)
    assert not callable(bound.compare)  # pyright: ignore[reportAttributeAccessIssue]
    with pytest.raises(InvalidBoundError):
        Bound(lo=Edge(value=2, included=True), hi=Edge(value=1, included=True))


# --- contains / overlaps / position ---


@pytest.mark.parametrize(
    "a, b, want",
    [
        (bf("(0:3)"), bf("[1:2]"), True),
        (bf("(0:3)"), bf("[1:3]"), False),
        (bf("[1:2]"), bf("(1:2)"), True),
        (bf("(1:2)"), bf("[1:2]"), False),
        (closed(TINY, 1.0), bf("(0:1]"), False),
    ],
)
def test_contains(a, b, want):
    assert a.contains(b) is want


@pytest.mark.parametrize(
    "a, b, want",
    [
        (bf("(1:2)"), bf("(2:3)"), False),
        (bf("(1:2]"), bf("(2:3)"), False),
        (bf("(1:2)"), bf("(2:3]"), False),
        (bf("(1:2]"), bf("[2:3)"), True),
        (open_closed(-1.0, 0.0), closed_open(TINY, 1.0), False),
        (bf("(1:3)"), bf("(2:4)"), True),
        (bf("(2:4)"), bf("(1:3)"), True),
        (bf("(1:4)"), bf("(2:3)"), True),
        (bf("(2:3)"), bf("(1:4)"), True),
        (bf("(0:1)"), bf("[1:1]"), False),
        (bf("(0:1]"), bf("[1:1]"), True),
    ],
)
def test_overlaps(a, b, want):
    assert a.overlaps(b) is want


@pytest.mark.parametrize(
    "bound, value, want",
    [
        (bf("(0:1)"), 0.0, +1),
        (bf("(0:1]"), 0.0, +1),
        (bf("[0:1)"), 0.0, 0),
        (bf("[0:1]"), 0.0, 0),
        (bf("[0:1]"), 0.5, 0),
        (bf("[0:1)"), 1.0, -1),
        (closed(-1.0, -TINY), 0.0, -1),
    ],
)
def test_position(bound, value, want):
    assert bound.position(value) == want


def test_position_uses_at_most_two_comparisons():
    calls = []

    def counting(a, b):
        calls.append((a, b))
        return (a > b) - (a < b)

    bound = closed(1, 5, counting)
    calls.clear()
    bound.position(3, counting)
    assert len(calls) <= 2


# --- difference ---


@pytest.mark.parametrize(
    "a, b, want",
    [
        (bf("[1:3]"), bf("(1:2)"), blf("[1:1] [2:3]")),
        (bf("[1:3]"), bf("(1:2]"), blf("[1:1] (2:3]")),
        (bf("[1:2]"), bf("[1:3]"), []),
        (bf("[1:4]"), bf("[2:3]"), blf("[1:2) (3:4]")),
        (bf("[1:4]"), bf("(1:4)"), blf("[1:1] [4:4]")),
        (bf("[1:3]"), bf("(0:4)"), []),
        (bf("[1:3]"), bf("[0:2]"), blf("(2:3]")),
        (bf("[1:3]"), bf("[0:4]"), []),
        (bf("(1:3)"), bf("[2:4]"), blf("(1:2)")),
        (bf("(1:3)"), bf("(2:4)"), blf("(1:2]")),
        (bf("(1:3]"), bf("(2:4)"), blf("(1:2]")),
        (bf("[1:3)"), bf("(2:4)"), blf("[1:2]")),
        (bf("[1:3]"), bf("(0:1]"), blf("(1:3]")),
        (bf("[1:3]"), bf("[1:1]"), blf("(1:3]")),
        (bf("(1:3)"), bf("[1:1]"), blf("(1:3)")),
        (bf("[1:1]"), bf("(1:3)"), blf("[1:1]")),
        (bf("[1:1]"), bf("[1:3]"), []),
        (bf("[1:1]"), bf("[1:1]"), []),
    ],
)
def test_difference(a, b, want):
    assert a.difference(b) == want


@pytest.mark.parametrize(
    "a, b, want",
    [
        # shared upper value, every inclusion combination
        (bf("[1:3]"), bf("[2:3]"), blf("[1:2)")),
        (bf("[1:3]"), bf("[2:3)"), blf("[1:2) [3:3]")),
        (bf("[1:3)"), bf("[2:3]"), blf("[1:2)")),
        (bf("[1:3)"), bf("[2:3)"), blf("[1:2)")),
        # shared lower value, every inclusion combination
        (bf("[1:3]"), bf("[1:2]"), blf("(2:3]")),
        (bf("[1:3]"), bf("(1:2]"), blf("[1:1] (2:3]")),
        (bf("(1:3]"), bf("[1:2]"), blf("(2:3]")),
        (bf("(1:3]"), bf("(1:2)"), blf("[2:3]")),
        # other starts at this bound's upper value
        (bf("[1:3]"), bf("[3:5]"), blf("[1:3)")),
        (bf("[1:3]"), bf("(3:5]"), blf("[1:3]")),
        (bf("[1:3)"), bf("[3:5]"), blf("[1:3)")),
        # other ends at this bound's lower value
        (bf("[1:3]"), bf("[0:1]"), blf("(1:3]")),
        (bf("[1:3]"), bf("[0:1)"), blf("[1:3]")),
        (bf("(1:3]"), bf("[0:1]"), blf("(1:3]")),
        # single points
        (bf("[1:3]"), bf("[3:3]"), blf("[1:3)")),
        (bf("[2:2]"), bf("(1:3)"), []),
        (bf("[3:3]"), bf("[1:3)"), blf("[3:3]")),
    ],
)
def test_difference_at_shared_boundaries(a, b, want):
    assert a.difference(b) == want


# --- union ---


@pytest.mark.parametrize(
    "a, b, want, want_ok",
    [
        (bf("(0:1]"), bf("[1:2)"), bf("(0:2)"), True),
        (bf("(0:1)"), bf("[1:2)"), bf("(0:2)"), True),
        (bf("[1:2)"), bf("(0:1)"), bf("(0:2)"), True),
        (bf("(0:1)"), bf("(1:2)"), bf("(0:1)"), False),
        (closed(-1.0, 0.0), closed(TINY, 1.0), closed(-1.0, 0.0), False),
        (closed(TINY, 1.0), closed(-1.0, 0.0), closed(-1.0, 0.0), False),
        (bf("[0:5]"), bf("(1:2)"), bf("[0:5]"), True),
        (bf("(1:2)"), bf("[0:5]"), bf("[0:5]"), True),
        (bf("[0:3)"), bf("(0:3]"), bf("[0:3]"), True),
    ],
)
def test_union_bounds_without_successor(a, b, want, want_ok):
    got, ok = union_bounds(a, b)
    assert got == want
    assert ok is want_ok


def test_union_bounds_joins_adjacent_integers():
    got, ok = union_bounds(closed(1, 2), closed(3, 4), successor=int_successor)
    assert (got, ok) == (closed(1, 4), True)

    got, ok = union_bounds(closed(3, 4), closed(1, 2), successor=int_successor)
    assert (got, ok) == (closed(1, 4), True)


def test_union_bounds_keeps_gap_with_excluded_edge():
    got, ok = union_bounds(closed_open(1, 2), closed(3, 4), successor=int_successor)
    assert (got, ok) == (closed_open(1, 2), False)


def test_union_bounds_shared_closed_point():
    a, b = CHAR.parse("[a:o]"), CHAR.parse("[o:z]")
    assert union_bounds(a, b) == (CHAR.parse("[a:z]"), True)


# --- text form ---


@pytest.mark.parametrize("text", ["[1:2]", "(1:2)", "[1:2)", "(1:2]", "[-5:-1]", "[0:0]"])
def test_parse_format_round_trip(text):
    assert format_bound(INTEGER.parse(text)) == text
    assert str(INTEGER.parse(text)) == text


def test_parse_reads_inclusion():
    bound = parse_bound("(1:5]", int)
    assert bound.lo == Edge(value=1, included=False)
    assert bound.hi == Edge(value=5, included=True)


@pytest.mark.parametrize(
    "text, message",
    [
        ("[1:2", "too short"),
        ("", "too short"),
        ("{1:2]", "must start with"),
        ("[1:2}", "must end with"),
        ("[1 2]", "missing ':'"),
        ("[1:x]", "could not parse"),
        ("[a:b]", "could not parse"),
    ],
)
def test_parse_rejects_malformed_text(text, message):
    with pytest.raises(BoundParseError, match=message):
        parse_bound(text, int)


def test_parse_chains_parser_error():
    with pytest.raises(BoundParseError) as info:
        parse_bound("[1:x]", int)
    assert isinstance(info.value.__cause__, ValueError)


def test_parse_error_is_an_invalid_bound_error():
    with pytest.raises(InvalidBoundError):
        parse_bound("[1-2]", int)


def test_parse_of_reversed_bound_is_a_construction_error():
    with pytest.raises(InvalidBoundError) as info:
        parse_bound("[3:1]", int)
    assert not isinstance(info.value, BoundParseError)


def test_parse_values_containing_divider():
    assert CHAR.parse("[:::]") == point(":")

    bound = DATETIME.parse("[2025-01-01T09:00:00:2025-01-01T17:00:00)")
    assert bound.lo.value.hour == 9
    assert bound.hi.value.hour == 17
    assert not bound.hi.included


def test_format_spec_applies_to_both_values():
    assert format(closed(1.0, 2.5), ".2f") == "[1.00:2.50]"
    assert format_bound(opened(1, 12), "03d") == "(001:012)"
    assert f"{closed_open(0.5, 1.0):.1f}" == "[0.5:1.0)"
