"""Default tokenizer: split a comment body into description, tags, examples and footer."""

from __future__ import annotations

import re
import textwrap

from ..core.models import CommentTokens, Example

GUTTER_RE = re.compile(r"^\s*\* ?")
TAG_LINE_RE = re.compile(r"^\s*@[A-Za-z]")
FENCE_RE = re.compile(r"^\s*(?P<marker>```+|~~~+)\s*(?P<language>[\w+-]*)")
EXAMPLE_TAG_RE = re.compile(r"^\s*@example\b[ \t]*(?P<description>.*)$")


def tokenize(body: str, strip_stars: bool | None = None) -> CommentTokens:
    """Split a comment body into its segments.

    Args:
        body: Comment text without the ``/**`` and ``*/`` delimiters
        strip_stars: Remove leading ``*`` gutters; None detects them

    Returns:
        CommentTokens with description, raw tag lines (continuation lines
        joined with newlines), examples and footer
    """
    lines = body.split("\n")
    if strip_stars is None:
        strip_stars = has_gutters(lines)
    if strip_stars:
        lines = [GUTTER_RE.sub("", line, count=1) for line in lines]
    return _Tokenizer(lines).run()


def has_gutters(lines: list[str]) -> bool:
    """True when every non-blank line after the first starts with ``*``."""
    candidates = [line for line in lines[1:] if line.strip()]
    return bool(candidates) and all(
        line.lstrip().startswith("*") for line in candidates
    )


class _Tokenizer:
    def __init__(self, lines: list[str]) -> None:
        self.lines = lines
        self.description: list[str] = []
        self.footer: list[str] = []
        self.tags: list[str] = []
        self.examples: list[Example] = []
        self.current_tag: list[str] | None = None
        self.seen_tags = False
        self.blank_in_tag = False

    def run(self) -> CommentTokens:
        i = 0
        while i < len(self.lines):
            line = self.lines[i]

            example = EXAMPLE_TAG_RE.match(line)
            if example:
                self._close_tag()
                self.seen_tags = True
                i = self._read_javadoc_example(i, example.group("description"))
                continue

            fence = FENCE_RE.match(line)
            if fence:
                i = self._read_fence(i, fence)
                continue

            if TAG_LINE_RE.match(line):
                self._close_tag()
                self.current_tag = [line.strip()]
                self.seen_tags = True
            elif self.current_tag is not None:
                if not line.strip():
                    self.blank_in_tag = True
                elif self.blank_in_tag:
                    self._close_tag()
                    self.footer.append(line)
                else:
                    self.current_tag.append(line.strip())
            elif self.seen_tags:
                self.footer.append(line)
            else:
                self.description.append(line)
            i += 1

        self._close_tag()
        return CommentTokens(
            description=_block(self.description),
            footer=_block(self.footer),
            tags=self.tags,
            examples=self.examples,
        )

    def _close_tag(self) -> None:
        if self.current_tag is not None:
            self.tags.append("\n".join(self.current_tag).strip())
        self.current_tag = None
        self.blank_in_tag = False

    def _read_fence(self, start: int, fence: re.Match[str]) -> int:
        marker = fence.group("marker")
        end = start + 1
        while end < len(self.lines) and not self.lines[end].lstrip().startswith(marker):
            end += 1

        code = self.lines[start + 1 : end]
        self.examples.append(
            Example(
                style="gfm",
                language=fence.group("language"),
                value=textwrap.dedent("\n".join(code)).strip("\n"),
                raw="\n".join(self.lines[start : end + 1]),
            )
        )
        return end + 1

    def _read_javadoc_example(self, start: int, description: str) -> int:
        code: list[str] = []
        language = ""
        in_fence = False
        end = start + 1
        while end < len(self.lines):
            line = self.lines[end]
            fence = FENCE_RE.match(line)
            if fence:
                if not in_fence and not language:
                    language = fence.group("language")
                in_fence = not in_fence
            elif not in_fence and TAG_LINE_RE.match(line):
                break
            else:
                code.append(line)
            end += 1

        self.examples.append(
            Example(
                style="javadoc",
                language=language,
                description=description.strip(),
                value=textwrap.dedent("\n".join(code)).strip("\n"),
                raw="\n".join(self.lines[start:end]).rstrip(),
            )
        )
        return end


def _block(lines: list[str]) -> str:
    return textwrap.dedent("\n".join(lines)).strip()
