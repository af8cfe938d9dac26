"""Default comment extraction for JavaScript source.

Finds block comments, records their location and makes a best-effort guess
at the code construct on the first line that follows each one.
"""

from __future__ import annotations

import re

from ..config.defaults import CONFIG_COMMENT_MARKERS, PROTECTED_COMMENT_MARKERS
from ..core.models import CodeContext, Location, RawComment

BLOCK_COMMENT_RE = re.compile(r"/\*(?!/)[\s\S]*?\*/")
CONFIG_COMMENT_RE = re.compile(
    r"^\s*(?:" + "|".join(CONFIG_COMMENT_MARKERS) + r")s?\b"
)

# Checked in order; the first match wins
CONTEXT_PATTERNS: list[tuple[str, re.Pattern[str]]] = [
    (
        "class",
        re.compile(r"^\s*(?:export\s+(?:default\s+)?)?class\s+(?P<name>[\w$]+)"),
    ),  # class Name
    (
        "function",
        re.compile(
            r"^\s*(?:export\s+(?:default\s+)?)?(?:async\s+)?function\s*\*?\s*(?P<name>[\w$]+)\s*\("
        ),
    ),  # function name(
    (
        "method",
        re.compile(
            r"^\s*(?P<parent>[\w$.]+)\.prototype\.(?P<name>[\w$]+)\s*=\s*(?:async\s+)?function"
        ),
    ),  # Foo.prototype.name = function
    (
        "property",
        re.compile(r"^\s*(?P<parent>[\w$.]+)\.prototype\.(?P<name>[\w$]+)\s*="),
    ),  # Foo.prototype.name =
    (
        "method",
        re.compile(
            r"^\s*(?P<parent>[\w$.]+)\.(?P<name>[\w$]+)\s*=\s*(?:async\s+)?(?:function|\([^)]*\)\s*=>)"
        ),
    ),  # foo.name = function
    (
        "function",
        re.compile(
            r"^\s*(?:export\s+)?(?:const|let|var)\s+(?P<name>[\w$]+)\s*=\s*(?:async\s+)?(?:function|\([^)]*\)\s*=>|[\w$]+\s*=>)"
        ),
    ),  # const name = () =>
    (
        "property",
        re.compile(r"^\s*(?P<parent>[\w$.]+)\.(?P<name>[\w$]+)\s*="),
    ),  # foo.name =
    (
        "declaration",
        re.compile(r"^\s*(?:export\s+)?(?:const|let|var)\s+(?P<name>[\w$]+)"),
    ),  # const name
    (
        "method",
        re.compile(
            r"^\s*(?:static\s+)?(?:async\s+)?(?:get\s+|set\s+)?(?P<name>[\w$]+)\s*\([^)]*\)\s*\{"
        ),
    ),  # name() {  (class body)
    (
        "property",
        re.compile(r"^\s*(?P<name>[\w$]+)\s*:"),
    ),  # name: value  (object literal)
]

_KEYWORDS = frozenset({"if", "for", "while", "switch", "catch", "return", "function"})


def extract_comments(source: str) -> list[RawComment]:
    """Return every block comment in ``source``, in source order."""
    comments = []
    for match in BLOCK_COMMENT_RE.finditer(source):
        raw = match.group()
        start_line = source.count("\n", 0, match.start()) + 1
        end_line = start_line + raw.count("\n")
        comments.append(
            RawComment(
                raw=raw,
                value=_comment_body(raw),
                loc=Location(
                    start_line=start_line,
                    end_line=end_line,
                    start=match.start(),
                    end=match.end(),
                ),
                code=extract_code_context(source, match.end(), end_line),
            )
        )
    return comments


def extract_code_context(
    source: str, offset: int, line: int = 0
) -> CodeContext | None:
    """Describe the first code line after ``offset``.

    Args:
        source: Full source text
        offset: Position just past the comment
        line: Line number the comment ends on

    Returns:
        CodeContext, or None when the comment is followed by nothing or by
        another comment
    """
    rest = source[offset:]
    for text in rest.split("\n"):
        if text.strip():
            break
        line += 1
    else:
        return None

    stripped = text.strip()
    if stripped.startswith(("/*", "//")):
        return None

    for kind, pattern in CONTEXT_PATTERNS:
        match = pattern.match(text)
        if match is None or match.group("name") in _KEYWORDS:
            continue
        groups = match.groupdict()
        return CodeContext(
            kind=kind,
            name=groups["name"],
            parent=groups.get("parent"),
            value=stripped,
            line=line,
        )

    return CodeContext(value=stripped, line=line)


def is_protected_comment(raw: str) -> bool:
    """True for ``/*!`` blocks and blocks carrying @license or @preserve."""
    stripped = raw.lstrip()
    if stripped.startswith(("/*!", "/**!")):
        return True
    return any(marker in raw for marker in PROTECTED_COMMENT_MARKERS)


def is_config_comment(value: str) -> bool:
    """True for lint/tooling directives such as ``/* eslint-disable */``."""
    return CONFIG_COMMENT_RE.match(value.lstrip("*! \t\n")) is not None


def is_valid_comment(comment: RawComment, protected: bool = True) -> bool:
    """Default validity predicate: documentation blocks only.

    Valid blocks open with ``/**`` (not a ``/***`` rule), have a body, and
    are not lint configuration. Protected blocks are rejected when
    ``protected`` is False.
    """
    raw = comment.raw.lstrip()
    if not raw.startswith("/**") or raw.startswith("/***") or raw == "/**/":
        return False
    if not protected and is_protected_comment(comment.raw):
        return False
    return not is_config_comment(comment.value)


def _comment_body(raw: str) -> str:
    body = raw[2:-2]
    if body.startswith("*"):
        body = body[1:]
    if body.startswith("!"):
        body = body[1:]
    return body
