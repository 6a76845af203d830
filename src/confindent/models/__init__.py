"""
Data models for confindent.

This module contains the tree structure produced by the parser and the
option models that control parsing and writing.
"""

from .node import ConfParent, Document, Node
from .options import ParseOptions, WriteOptions

__all__ = ['ConfParent', 'Document', 'Node', 'ParseOptions', 'WriteOptions']
