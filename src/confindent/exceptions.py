"""
Exception hierarchy for confindent.

Parse errors abort the whole parse and carry the offending line. Query errors
are raised by a single lookup or conversion and never affect the tree.
"""

from typing import Optional


class ConfindentError(Exception):
    """Base exception for all confindent errors."""
    pass


class ParseError(ConfindentError):
    """
    Raised when a document cannot be parsed.

    Attributes:
        line_number: 1-based line number of the offending line (if known)
        line: Raw text of the offending line (if known)
    """

    def __init__(self, message: str, line_number: Optional[int] = None, line: Optional[str] = None):
        self.message = message
        self.line_number = line_number
        self.line = line
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)


class IndentError(ParseError):
    """Leading whitespace is inconsistent with the document's indentation unit."""


class StructureError(ParseError):
    """A line's depth cannot be reached from the current ancestor chain."""


class EncodingError(ParseError):
    """The input buffer is not valid text in the configured encoding."""


class QuoteError(ParseError):
    """A quoted key or value is malformed."""


class QueryError(ConfindentError):
    """Base exception for failed lookups and conversions on a parsed tree."""


class MissingValueError(QueryError):
    """A node queried for its value has none."""

    def __init__(self, name: Optional[str]):
        self.name = name
        if name is None:
            super().__init__("The document root has no value")
        else:
            super().__init__(f"Section '{name}' has no value")


class MissingChildError(QueryError):
    """A required child section was not found."""

    def __init__(self, name: str, parent: Optional[str] = None):
        self.name = name
        self.parent = parent
        where = f"section '{parent}'" if parent else "document"
        super().__init__(f"No section named '{name}' in {where}")


class ConversionError(QueryError):
    """A present value could not be converted to the requested type."""

    def __init__(self, value: str, target: str, reason: Optional[str] = None):
        self.value = value
        self.target = target
        message = f"Cannot convert {value!r} to {target}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class SerializationError(ConfindentError):
    """A tree cannot be written back to text."""
