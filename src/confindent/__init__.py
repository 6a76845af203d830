"""
confindent - configuration by indentation.

Parses indentation-delimited, SSH-config style documents into an immutable
tree of named sections and provides typed access to their values.
"""

import logging

from .config import ConfigParser, ConfigWriter, TreeBuilder, dumps, loads, parse
from .exceptions import (
    ConfindentError,
    ConversionError,
    EncodingError,
    IndentError,
    MissingChildError,
    MissingValueError,
    ParseError,
    QueryError,
    QuoteError,
    SerializationError,
    StructureError,
)
from .models import Document, Node, ParseOptions, WriteOptions
from .tools import register_converter

__version__ = "0.1.0"
__author__ = "confindent developers"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    'ConfigParser',
    'ConfigWriter',
    'TreeBuilder',
    'parse',
    'loads',
    'dumps',
    'Document',
    'Node',
    'ParseOptions',
    'WriteOptions',
    'register_converter',
    'ConfindentError',
    'ParseError',
    'IndentError',
    'StructureError',
    'EncodingError',
    'QuoteError',
    'QueryError',
    'MissingValueError',
    'MissingChildError',
    'ConversionError',
    'SerializationError',
]
