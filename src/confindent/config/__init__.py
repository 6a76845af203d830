"""
Reading and writing package for confindent.

This package provides the line classifier, the tree builder and the writer
that turns a tree back into text.
"""

from .lexer import ClassifiedLine, LineClassifier, LineKind
from .parser import ConfigParser, TreeBuilder, loads, parse
from .writer import ConfigWriter, dumps

__all__ = [
    'ClassifiedLine',
    'LineClassifier',
    'LineKind',
    'ConfigParser',
    'TreeBuilder',
    'parse',
    'loads',
    'ConfigWriter',
    'dumps'
]
