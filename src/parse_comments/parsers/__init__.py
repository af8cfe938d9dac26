"""Default parsing collaborators: extraction, tokenizing, tags, types and inline references."""

from .extract import extract_comments, is_valid_comment
from .inline import parse_inline
from .normalize import normalize_tag, validate_tag
from .stringify import stringify_type
from .tag import split_tag
from .tokenize import tokenize
from .types import TypeParser, parse_type

__all__ = [
    "TypeParser",
    "extract_comments",
    "is_valid_comment",
    "normalize_tag",
    "parse_inline",
    "parse_type",
    "split_tag",
    "stringify_type",
    "tokenize",
    "validate_tag",
]
