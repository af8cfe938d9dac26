"""Inline ``{@tag value}`` reference scanning."""

from __future__ import annotations

import re

from ..config.defaults import LINK_INLINE_TAGS
from ..core.models import InlineReference

INLINE_START_RE = re.compile(r"\{@([A-Za-z][\w-]*)")


def parse_inline(text: str, strip: bool = False) -> tuple[str, list[InlineReference]]:
    """Find inline references in ``text``.

    Args:
        text: Free description text
        strip: Replace each marker with readable text instead of leaving it

    Returns:
        Tuple of (text, references). The text is unchanged unless ``strip``
        is set. Unterminated markers stay verbatim and yield no reference.
    """
    if not isinstance(text, str):
        raise TypeError(f"expected a string, got {type(text).__name__}")

    references: list[InlineReference] = []
    parts: list[str] = []
    pos = 0

    while True:
        match = INLINE_START_RE.search(text, pos)
        if match is None:
            break

        end = find_closing(text, match.start())
        if end is None:
            parts.append(text[pos : match.end()])
            pos = match.end()
            continue

        ref = InlineReference(
            raw=text[match.start() : end + 1],
            tag=match.group(1),
            value=text[match.end() : end].strip(),
        )
        references.append(ref)
        parts.append(text[pos : match.start()])
        parts.append(render_inline(ref) if strip else ref.raw)
        pos = end + 1

    parts.append(text[pos:])
    return "".join(parts), references


def render_inline(ref: InlineReference) -> str:
    """Readable text for an inline reference.

    ``{@link Foo#bar|the bar}`` and ``{@link Foo#bar the bar}`` render as
    ``the bar``; a bare ``{@link Foo#bar}`` renders as its target.
    """
    if ref.tag not in LINK_INLINE_TAGS:
        return ref.value

    target, sep, label = ref.value.partition("|")
    if sep:
        return label.strip() or target.strip()
    target, _, label = ref.value.partition(" ")
    return label.strip() or target


def find_closing(
    text: str, start: int, open_char: str = "{", close_char: str = "}"
) -> int | None:
    """Index of the character closing the one at ``start``, or None."""
    depth = 0
    for i in range(start, len(text)):
        char = text[i]
        if char == open_char:
            depth += 1
        elif char == close_char:
            depth -= 1
            if depth == 0:
                return i
    return None
