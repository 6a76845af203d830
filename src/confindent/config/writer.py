"""
Writer for confindent documents.

Produces text that the parser reads back into an equal tree. Names and values
are written bare where possible and double-quoted when bare text would be
read differently.
"""

import logging
from typing import List, Optional, Union

from ..exceptions import SerializationError
from ..models.node import Document, Node
from ..models.options import WriteOptions
from .lexer import ESCAPE, QUOTE
from .parser import BOM


logger = logging.getLogger(__name__)

LINE_BREAKS = ('\n', '\r')


def quote(text: str) -> str:
    """Wrap text in double quotes, escaping quotes and backslashes."""
    escaped = text.replace(ESCAPE, ESCAPE * 2).replace(QUOTE, ESCAPE + QUOTE)
    return f'{QUOTE}{escaped}{QUOTE}'


class ConfigWriter:
    """Serializes documents to indentation-delimited text."""

    def __init__(self, options: Optional[WriteOptions] = None):
        self.options = options or WriteOptions()
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def write(self, document: Union[Document, Node]) -> str:
        """
        Serialize a document (or a single section) to text.

        Args:
            document: Tree to write; a Node is written as the only top-level section

        Returns:
            Document text

        Raises:
            SerializationError: If a name or value contains a line break
        """
        if isinstance(document, Node):
            document = Document(sections=(document,))

        lines: List[str] = []
        for depth, node in document.walk():
            line = self.options.indent * depth + self.format_name(node.name)
            if node.raw_value is not None:
                line = f"{line} {self.format_value(node.raw_value, node.name)}"
            lines.append(line)

        self.logger.debug(f"Wrote {len(lines)} sections")
        text = '\n'.join(lines)
        if lines and self.options.trailing_newline:
            text += '\n'
        return text

    def format_name(self, name: str) -> str:
        if any(brk in name for brk in LINE_BREAKS):
            raise SerializationError(f"Section name {name!r} contains a line break")
        if (
            name.startswith(QUOTE)
            or name.startswith(self.options.comment_marker)
            or name.startswith(BOM)
            or any(ch.isspace() for ch in name)
        ):
            return quote(name)
        return name

    def format_value(self, value: str, name: str = '') -> str:
        if any(brk in value for brk in LINE_BREAKS):
            raise SerializationError(f"Value of section '{name}' contains a line break")
        if self._needs_quotes(value):
            return quote(value)
        return value

    def _needs_quotes(self, value: str) -> bool:
        if not value or value != value.strip() or value.startswith(QUOTE):
            return True
        return self.options.inline_comments and self.options.comment_marker in value


def dumps(document: Union[Document, Node], options: Optional[WriteOptions] = None, **settings) -> str:
    """
    Convenience function to serialize a document.

    Args:
        document: Tree to write
        options: Write settings (optional)
        **settings: Individual WriteOptions fields, used when ``options`` is None

    Returns:
        Document text
    """
    if options is None:
        options = WriteOptions(**settings)
    elif settings:
        options = WriteOptions(**{**options.model_dump(), **settings})
    return ConfigWriter(options).write(document)
