from .bound import (
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
from .domains import (
    CHAR,
    DATE,
    DATETIME,
    FLOAT,
    INTEGER,
    Domain,
    char_successor,
    float_successor,
    int_successor,
)
from .edge import Compare, Edge, Successor, is_near, max_edge, min_edge, natural_compare
from .errors import BoundParseError, InvalidBoundError, SpanError
from .span import Location, Span, from_pairs, make_strict_bounds, to_edges, union

__all__ = [
    "Edge",
    "Bound",
    "Span",
    "Location",
    "Domain",
    "Compare",
    "Successor",
    "natural_compare",
    "is_near",
    "min_edge",
    "max_edge",
    "new_bound",
    "closed",
    "opened",
    "closed_open",
    "open_closed",
    "point",
    "union_bounds",
    "parse_bound",
    "format_bound",
    "union",
    "make_strict_bounds",
    "from_pairs",
    "to_edges",
    "INTEGER",
    "FLOAT",
    "CHAR",
    "DATE",
    "DATETIME",
    "int_successor",
    "char_successor",
    "float_successor",
    "SpanError",
    "InvalidBoundError",
    "BoundParseError",
]
