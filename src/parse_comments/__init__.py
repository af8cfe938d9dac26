"""parse-comments - parse JSDoc and Closure Compiler comments into structured nodes."""

__version__ = "0.4.0"

from typing import Any

from .config.settings import ParseOverrides, ParserConfig
from .core.comments import Comments
from .core.exceptions import (
    ConfigError,
    HandlerTypeError,
    ParseCommentsError,
    ParseError,
    TagSyntaxError,
    TypeSyntaxError,
)
from .core.models import Comment, InlineReference, RawComment, Tag, TypeNode
from .format import format_comment
from .parsers.inline import parse_inline
from .parsers.stringify import stringify_type
from .parsers.types import parse_type as _parse_type


def parse(source: str, **options: Any) -> list[Comment]:
    """Parse every documentation comment in ``source`` with a fresh parser.

    Args:
        source: JavaScript source text
        **options: ParserConfig fields (``strict``, ``format``, ...)

    Returns:
        Parsed comments in source order
    """
    return Comments(**options).parse(source)


def parse_type(literal: str) -> TypeNode:
    """Parse a type literal such as ``Array.<string>=``.

    The literal is taken without the braces that delimit it in a tag, so
    ``{a: number}`` is a record type.
    """
    return _parse_type(literal)


__all__ = [
    "Comment",
    "Comments",
    "ConfigError",
    "HandlerTypeError",
    "InlineReference",
    "ParseCommentsError",
    "ParseError",
    "ParseOverrides",
    "ParserConfig",
    "RawComment",
    "Tag",
    "TagSyntaxError",
    "TypeNode",
    "TypeSyntaxError",
    "__version__",
    "format_comment",
    "parse",
    "parse_inline",
    "parse_type",
    "stringify_type",
]
