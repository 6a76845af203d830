"""
Option models for parsing and writing confindent documents.

These models hold the handful of settings that change how text is read and
written: the comment marker, the indentation unit and the output indent.
"""

import codecs
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, field_validator


def _validate_marker(v: str) -> str:
    if not v:
        raise ValueError("Comment marker cannot be empty")
    if any(ch.isspace() for ch in v):
        raise ValueError(f"Comment marker cannot contain whitespace: {v!r}")
    if '"' in v or '\\' in v:
        raise ValueError(f"Comment marker cannot contain quotes or backslashes: {v!r}")
    return v


class ParseOptions(BaseModel):
    """
    Settings for the line classifier and tree builder.

    Attributes:
        comment_marker: Leading text that turns a line into a comment
        indent_unit: Fixed width of one indentation level (learned if None)
        inline_comments: Whether an unquoted marker after whitespace ends a value
        encoding: Encoding used when the input is given as bytes
    """

    comment_marker: str = Field("#", description="Leading text marking a comment line")
    indent_unit: Optional[int] = Field(None, gt=0, description="Fixed indentation width")
    inline_comments: bool = Field(False, description="Strip unquoted trailing comments from values")
    encoding: str = Field("utf-8", description="Encoding for byte input")

    @field_validator('comment_marker')
    @classmethod
    def validate_comment_marker(cls, v: str) -> str:
        """Reject markers that would be ambiguous with keys or quoting."""
        return _validate_marker(v)

    @field_validator('encoding')
    @classmethod
    def validate_encoding(cls, v: str) -> str:
        """Normalize the encoding name and make sure Python knows it."""
        try:
            return codecs.lookup(v).name
        except LookupError:
            raise ValueError(f"Unknown encoding: {v}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return self.model_dump()


class WriteOptions(BaseModel):
    """
    Settings for the document writer.

    The comment marker and inline comment flag must match the options the
    text will later be parsed with, since they decide what needs quoting.
    """

    indent: str = Field("\t", description="Whitespace written for one nesting level")
    comment_marker: str = Field("#", description="Comment marker of the target parser")
    inline_comments: bool = Field(False, description="Whether the target parser strips inline comments")
    trailing_newline: bool = Field(True, description="End the output with a newline")

    @field_validator('indent')
    @classmethod
    def validate_indent(cls, v: str) -> str:
        """Indent must be a non-empty run of a single whitespace character."""
        if not v:
            raise ValueError("Indent cannot be empty")
        if set(v) not in ({' '}, {'\t'}):
            raise ValueError(f"Indent must be all spaces or all tabs: {v!r}")
        return v

    @field_validator('comment_marker')
    @classmethod
    def validate_comment_marker(cls, v: str) -> str:
        return _validate_marker(v)

    def to_parse_options(self) -> ParseOptions:
        """Build the parse options that read this writer's output back."""
        return ParseOptions(
            comment_marker=self.comment_marker,
            inline_comments=self.inline_comments,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return self.model_dump()
