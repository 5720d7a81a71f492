from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeAlias, TypeVar

T = TypeVar("T")

Compare: TypeAlias = Callable[[T, T], int]
"""Three-way comparison: negative, zero or positive like ``a - b``."""

Successor: TypeAlias = Callable[[T, T], T]
"""Step ``value`` one representable value toward ``target``.

Returns ``value`` unchanged when both are equal. Only discrete domains
supply one; continuous domains pass ``None``.
"""


def natural_compare(a: Any, b: Any) -> int:
    """Compare two values with their own ``<`` and ``>`` operators."""
    if a < b:
        return -1
    if a > b:
        return 1
    return 0


@dataclass(frozen=True, kw_only=True)
class Edge(Generic[T]):
    value: T
    included: bool


def is_near(
    successor: "Successor[T] | None",
    compare: "Compare[T]",
    lower: Edge[T],
    higher: Edge[T],
) -> bool:
    """Return True when no value lies between ``lower`` and ``higher``.

    ``lower`` is assumed to be at or below ``higher``. Two cases join:

    - equal values unless both edges are excluded:
      ``[1:2] [2:3]``, ``[1:2) [2:3]``, ``[1:2] (2:3]`` but not ``[1:2) (2:3]``
    - both edges included and ``successor`` reaches ``higher`` in one step:
      ``[1:2] [3:4]`` for integers, never for a domain without a successor
    """
    if compare(lower.value, higher.value) == 0 and (
        lower.included or higher.included
    ):
        return True

    if successor is None or not (lower.included and higher.included):
        return False

    return compare(successor(lower.value, higher.value), higher.value) >= 0


def min_edge(a: Edge[T], b: Edge[T], compare: "Compare[T]") -> Edge[T]:
    """Lesser of two edges; on a tie the closed edge wins."""
    compared = compare(a.value, b.value)
    if compared > 0:
        return b
    if compared < 0:
        return a
    return Edge(value=a.value, included=a.included or b.included)


def max_edge(a: Edge[T], b: Edge[T], compare: "Compare[T]") -> Edge[T]:
    """Greater of two edges; on a tie the closed edge wins."""
    compared = compare(a.value, b.value)
    if compared > 0:
        return a
    if compared < 0:
        return b
    return Edge(value=a.value, included=a.included or b.included)
