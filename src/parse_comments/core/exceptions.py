"""Typed exception hierarchy for parse-comments.

Hierarchy
---------
ParseCommentsError (base)
├── ParseError             – malformed comment input
│   ├── TypeSyntaxError    – malformed type literal (brackets, record keys, signatures)
│   └── TagSyntaxError     – tag line cannot be split into title/type/name/description
├── HandlerTypeError       – a registered pipeline handler is not callable
└── ConfigError            – invalid parser configuration

``ParseError`` subclasses are governed by the ``strict`` setting: they are
raised in strict mode and coerced to a dropped tag otherwise.
``HandlerTypeError`` is always raised, since it signals a mistake in the
embedding application rather than in the parsed text. It also inherits from
the built-in ``TypeError`` so callers can catch it either way.
"""

from typing import Any


class ParseCommentsError(Exception):
    """Base exception for parse-comments."""

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.context = context or {}


# ── Input errors ────────────────────────────────────────────────────────


class ParseError(ParseCommentsError):
    """Malformed comment input (subject to the ``strict`` policy)."""

    pass


class TypeSyntaxError(ParseError):
    """A type literal could not be parsed.

    Attributes:
        literal: The literal text that was being parsed
        position: Zero-based offset of the offending token, when known
    """

    def __init__(
        self,
        message: str,
        literal: str = "",
        position: int | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, context)
        self.literal = literal
        self.position = position


class TagSyntaxError(ParseError):
    """A tag line could not be split into its fields."""

    def __init__(
        self, message: str, raw: str = "", context: dict[str, Any] | None = None
    ) -> None:
        super().__init__(message, context)
        self.raw = raw


# ── Pipeline errors ─────────────────────────────────────────────────────


class HandlerTypeError(ParseCommentsError, TypeError):
    """A pipeline handler registered for a node type is not callable.

    Attributes:
        node: The node the handler was about to be invoked on
        phase: The pipeline phase (``before``, ``middleware`` or ``after``)
    """

    def __init__(self, message: str, node: Any = None, phase: str = "") -> None:
        super().__init__(message, {"phase": phase})
        self.node = node
        self.phase = phase


# ── Configuration ───────────────────────────────────────────────────────


class ConfigError(ParseCommentsError):
    """Configuration / validation errors."""

    pass
