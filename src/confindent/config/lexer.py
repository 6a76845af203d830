"""
Line classifier for confindent documents.

Each raw line is classified as blank, comment or content. Content lines get a
nesting depth derived from their leading whitespace plus a key and an
optional value. The classifier learns the document's indentation character
and unit from the first indented content line and holds them fixed for the
rest of the parse.

Quoting grammar:
    key   := bare | quoted
    bare  := run of non-whitespace characters not starting with '"'
    quoted:= '"' ( any char except '"' and '\\' | '\\"' | '\\\\' )* '"'

A value is the remainder of the line, trimmed. If the whole remainder is a
single quoted string it is unquoted with the same escapes; an opening quote
that is never closed leaves the value verbatim.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from ..exceptions import IndentError, QuoteError
from ..models.options import ParseOptions


logger = logging.getLogger(__name__)

QUOTE = '"'
ESCAPE = '\\'


class LineKind(Enum):
    """Classification of a single input line."""
    BLANK = "blank"
    COMMENT = "comment"
    CONTENT = "content"


@dataclass(frozen=True)
class ClassifiedLine:
    """
    One classified input line.

    Attributes:
        kind: Line classification
        line_number: 1-based position in the document
        text: Raw line text without the line terminator
        depth: Nesting depth (content lines only)
        key: Section name (content lines only)
        value: Section value, None when absent (content lines only)
    """
    kind: LineKind
    line_number: int
    text: str
    depth: int = 0
    key: Optional[str] = None
    value: Optional[str] = None

    @property
    def is_content(self) -> bool:
        return self.kind is LineKind.CONTENT


def scan_quoted(text: str, start: int) -> Optional[Tuple[str, int]]:
    """
    Scan a double-quoted string starting at ``text[start]``.

    Returns:
        Tuple of (unescaped contents, index just past the closing quote),
        or None if the string is not terminated
    """
    chars = []
    i = start + 1
    while i < len(text):
        ch = text[i]
        if ch == ESCAPE and i + 1 < len(text) and text[i + 1] in (QUOTE, ESCAPE):
            chars.append(text[i + 1])
            i += 2
            continue
        if ch == QUOTE:
            return ''.join(chars), i + 1
        chars.append(ch)
        i += 1
    return None


def read_quoted(text: str, start: int, line_number: Optional[int] = None) -> Tuple[str, int]:
    """
    Read a double-quoted string starting at ``text[start]``.

    Returns:
        Tuple of (unescaped contents, index just past the closing quote)

    Raises:
        QuoteError: If the string is not terminated
    """
    scanned = scan_quoted(text, start)
    if scanned is None:
        raise QuoteError("Unterminated quoted string", line_number, text)
    return scanned


def split_key_value(body: str, line_number: Optional[int] = None) -> Tuple[str, str]:
    """
    Split the text after indentation into a key and the untrimmed remainder.

    Raises:
        QuoteError: For an empty quoted key or text glued to its closing quote
    """
    if body.startswith(QUOTE):
        key, end = read_quoted(body, 0, line_number)
        if not key:
            raise QuoteError("Section name cannot be empty", line_number, body)
        rest = body[end:]
        if rest and not rest[0].isspace():
            raise QuoteError("Expected whitespace after quoted section name", line_number, body)
        return key, rest

    for i, ch in enumerate(body):
        if ch.isspace():
            return body[:i], body[i:]
    return body, ''


def strip_inline_comment(rest: str, marker: str) -> str:
    """
    Cut ``rest`` at the first unquoted marker that follows whitespace.

    Only a quote that opens the value protects a marker, the same rule
    ``parse_value`` uses; an unterminated opening quote protects nothing.
    """
    i = 0
    start = len(rest) - len(rest.lstrip())
    if rest.startswith(QUOTE, start):
        scanned = scan_quoted(rest, start)
        if scanned is not None:
            i = scanned[1]

    while i < len(rest):
        if i > 0 and rest[i - 1].isspace() and rest.startswith(marker, i):
            return rest[:i]
        i += 1
    return rest


def parse_value(rest: str) -> Optional[str]:
    """
    Turn the remainder of a content line into a value.

    Returns None when nothing but whitespace remains. A value that is one
    complete quoted string is unquoted; anything else, including an
    unterminated opening quote, is kept verbatim.
    """
    value = rest.strip()
    if not value:
        return None
    if value.startswith(QUOTE):
        scanned = scan_quoted(value, 0)
        if scanned is not None and scanned[1] == len(value):
            return scanned[0]
    return value


class LineClassifier:
    """
    Stateful classifier for the lines of one document.

    The only state is the learned indentation character and unit, so a fresh
    classifier must be used for every parse.
    """

    def __init__(self, options: Optional[ParseOptions] = None):
        self.options = options or ParseOptions()
        self.indent_char: Optional[str] = None
        self.indent_unit: Optional[int] = self.options.indent_unit

    def classify(self, text: str, line_number: int) -> ClassifiedLine:
        """
        Classify one line.

        Args:
            text: Line text without its terminator
            line_number: 1-based line number, used in error messages

        Returns:
            The classified line

        Raises:
            IndentError: If the indentation is inconsistent with the document
            QuoteError: If quoting in the key is malformed
        """
        body = text.lstrip(' \t')
        if not body.strip():
            return ClassifiedLine(LineKind.BLANK, line_number, text)
        if body.startswith(self.options.comment_marker):
            return ClassifiedLine(LineKind.COMMENT, line_number, text)

        if body[0].isspace():
            raise IndentError("Indentation may only use spaces or tabs", line_number, text)

        leading = text[:len(text) - len(body)]
        depth = self._measure(leading, text, line_number)

        key, rest = split_key_value(body, line_number)
        if self.options.inline_comments:
            rest = strip_inline_comment(rest, self.options.comment_marker)
        value = parse_value(rest)

        return ClassifiedLine(LineKind.CONTENT, line_number, text, depth=depth, key=key, value=value)

    def _measure(self, leading: str, text: str, line_number: int) -> int:
        if not leading:
            return 0

        chars = set(leading)
        if len(chars) > 1:
            raise IndentError("Mixed tabs and spaces in indentation", line_number, text)
        char = leading[0]

        if self.indent_char is None:
            self.indent_char = char
            logger.debug(f"Indentation character set to {char!r} at line {line_number}")
        elif char != self.indent_char:
            expected = "tabs" if self.indent_char == '\t' else "spaces"
            raise IndentError(f"Indentation must use {expected} throughout the document", line_number, text)

        width = len(leading)
        if char == '\t':
            # one tab is always one level
            return width

        if self.indent_unit is None:
            self.indent_unit = width
            logger.debug(f"Indentation unit learned as {width} at line {line_number}")

        if width % self.indent_unit:
            raise IndentError(
                f"Indentation of {width} is not a multiple of the unit {self.indent_unit}",
                line_number,
                text,
            )
        return width // self.indent_unit
