"""Exceptions raised when bounds are built or parsed from invalid input."""


class SpanError(ValueError):
    """Base class for span algebra errors."""


class InvalidBoundError(SpanError):
    """Raised when a bound would be reversed or contain no values."""


class BoundParseError(InvalidBoundError):
    """Raised when bound text like ``[1:2)`` is malformed."""
