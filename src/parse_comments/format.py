"""Optional post-processing of parsed comments."""

from __future__ import annotations

import re
import textwrap

from .core.models import Comment

# "@param {string} name - The name": the dash only separates name and text
LEADING_SEPARATOR_RE = re.compile(r"^\s*-\s+")
EXCESS_BLANK_LINES_RE = re.compile(r"\n{3,}")


def format_comment(comment: Comment) -> Comment:
    """Return a tidied copy of ``comment``.

    Description and footer lose surrounding blank lines and common
    indentation. Tag descriptions lose a leading `` - `` separator and their
    wrapped lines are joined with single spaces.
    """
    formatted = comment.model_copy(deep=True)
    formatted.description = _tidy_block(formatted.description)
    formatted.footer = _tidy_block(formatted.footer)
    for tag in formatted.tags:
        tag.description = " ".join(
            LEADING_SEPARATOR_RE.sub("", tag.description).split()
        )
    return formatted


def _tidy_block(text: str) -> str:
    lines = [line.rstrip() for line in textwrap.dedent(text).split("\n")]
    return EXCESS_BLANK_LINES_RE.sub("\n\n", "\n".join(lines)).strip("\n")
