"""
Parser for confindent documents.

This module turns text into a ``Document`` tree. Lines are classified one at
a time by ``LineClassifier`` and handed to ``TreeBuilder``, which attaches
each section to its parent using an explicit stack of open ancestors rather
than recursion, so nesting depth is bounded only by memory.

Every error is fatal: either the whole document parses or a ``ParseError``
is raised and no partial tree is returned.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional, Union

from ..exceptions import EncodingError, StructureError
from ..models.node import Document, Node
from ..models.options import ParseOptions
from .lexer import ClassifiedLine, LineClassifier


logger = logging.getLogger(__name__)

BOM = '\ufeff'


@dataclass
class _OpenSection:
    """A section whose children are still being collected."""
    name: str
    value: Optional[str]
    line_number: int
    children: List[Node] = field(default_factory=list)

    def freeze(self) -> Node:
        return Node(name=self.name, raw_value=self.value, sections=tuple(self.children))


class TreeBuilder:
    """
    Builds a document tree from classified lines.

    The stack holds the chain of open ancestors; the section at index ``i``
    sits at depth ``i``. A section is frozen into an immutable ``Node`` when
    it is popped, once all of its children have been seen.
    """

    def __init__(self):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def build(self, lines: Iterable[ClassifiedLine]) -> Document:
        """
        Build a document from classified lines.

        Args:
            lines: Classified lines in document order

        Returns:
            The parsed document

        Raises:
            StructureError: If a line is nested more than one level below
                the previous section
        """
        top_level: List[Node] = []
        stack: List[_OpenSection] = []
        total = 0

        for line in lines:
            if not line.is_content:
                continue

            if line.depth > len(stack):
                if stack:
                    reason = f"Depth {line.depth} is more than one level below '{stack[-1].name}' (depth {len(stack) - 1})"
                else:
                    reason = f"Depth {line.depth} has no parent section"
                raise StructureError(reason, line.line_number, line.text)

            while len(stack) > line.depth:
                self._close(stack, top_level)
            stack.append(_OpenSection(line.key, line.value, line.line_number))
            total += 1

        while stack:
            self._close(stack, top_level)

        self.logger.debug(f"Built tree of {total} sections")
        return Document(sections=tuple(top_level))

    @staticmethod
    def _close(stack: List[_OpenSection], top_level: List[Node]) -> None:
        node = stack.pop().freeze()
        if stack:
            stack[-1].children.append(node)
        else:
            top_level.append(node)


class ConfigParser:
    """
    Parser for indentation-delimited configuration text.

    A parser instance only holds options, so it can be reused for many
    documents; per-document state lives in a fresh ``LineClassifier``.
    """

    def __init__(self, options: Optional[ParseOptions] = None):
        """
        Initialize the parser.

        Args:
            options: Parse settings; defaults are used if None
        """
        self.options = options or ParseOptions()
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def parse(self, text: Union[str, bytes]) -> Document:
        """
        Parse a complete document.

        Args:
            text: Document text, or bytes in the configured encoding

        Returns:
            The parsed document

        Raises:
            EncodingError: If byte input is not valid in the configured encoding
            IndentError: If indentation is inconsistent
            StructureError: If nesting skips a level
            QuoteError: If a quoted key or value is malformed
        """
        text = self._decode(text)
        document = TreeBuilder().build(self.classify_lines(text))
        self.logger.debug(f"Parsed document with {len(document.sections)} top-level sections")
        return document

    def classify_lines(self, text: str) -> Iterator[ClassifiedLine]:
        """Yield every line of ``text`` classified, in order."""
        if text.startswith(BOM):
            text = text[1:]
        classifier = LineClassifier(self.options)
        for line_number, line in enumerate(text.split('\n'), start=1):
            if line.endswith('\r'):
                line = line[:-1]
            yield classifier.classify(line, line_number)

    def _decode(self, text: Union[str, bytes]) -> str:
        if isinstance(text, str):
            return text
        if not isinstance(text, (bytes, bytearray, memoryview)):
            raise TypeError(f"Expected str or bytes, got {type(text).__name__}")

        data = bytes(text)
        encoding = self.options.encoding
        if encoding == 'utf-8':
            encoding = 'utf-8-sig'
        try:
            return data.decode(encoding)
        except UnicodeDecodeError as e:
            line_number = data[:e.start].count(b'\n') + 1
            raise EncodingError(
                f"Invalid {self.options.encoding} data at byte {e.start}: {e.reason}",
                line_number,
            ) from e


def parse(text: Union[str, bytes], options: Optional[ParseOptions] = None, **settings) -> Document:
    """
    Convenience function to parse a document.

    Args:
        text: Document text or bytes
        options: Parse settings (optional)
        **settings: Individual ParseOptions fields, used when ``options`` is None

    Returns:
        The parsed document

    Raises:
        ParseError: If the document cannot be parsed
    """
    if options is None:
        options = ParseOptions(**settings)
    elif settings:
        options = ParseOptions(**{**options.model_dump(), **settings})
    return ConfigParser(options).parse(text)


loads = parse
