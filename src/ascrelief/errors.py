"""
Exception types raised by the elevation raster pipeline.

Parsing failures abort the pipeline before anything is rendered. Everything
downstream of a successful parse is a pure computation that absorbs NaN and
degenerate ranges into default pixel values instead of raising.
"""


class ReliefError(Exception):
    """Base class for all ascrelief errors."""


class ParseError(ReliefError, ValueError):
    """Raised when grid text has a malformed or missing header field or data token."""


class ShapeMismatchError(ParseError):
    """Raised when the number of cell values differs from ncols * nrows."""

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Expected {expected} cell values (ncols * nrows), found {actual}")


class EmptyRangeError(ReliefError, ValueError):
    """Raised when every cell is NaN, so no value range can be computed."""
