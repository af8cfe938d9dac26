"""Core models, errors and the handler pipeline for parse-comments."""

from .events import EventEmitter
from .exceptions import (
    ConfigError,
    HandlerTypeError,
    ParseCommentsError,
    ParseError,
    TagSyntaxError,
    TypeSyntaxError,
)
from .models import (
    Comment,
    CommentTokens,
    InlineReference,
    RawComment,
    Tag,
    TypeNode,
)
from .pipeline import Phase, Pipeline
from .results import Outcome, Rejection, settle

__all__ = [
    # Exceptions
    "ConfigError",
    "HandlerTypeError",
    "ParseCommentsError",
    "ParseError",
    "TagSyntaxError",
    "TypeSyntaxError",
    # Models
    "Comment",
    "CommentTokens",
    "InlineReference",
    "RawComment",
    "Tag",
    "TypeNode",
    # Pipeline
    "EventEmitter",
    "Outcome",
    "Phase",
    "Pipeline",
    "Rejection",
    "settle",
]
