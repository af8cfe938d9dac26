"""Split a raw tag line into title, type literal, name and description."""

from __future__ import annotations

import re

from ..core.exceptions import TagSyntaxError
from ..core.models import Tag
from ..core.results import Outcome
from .inline import find_closing
from .normalize import expects_name, resolve_title

TITLE_RE = re.compile(r"^\s*@?(?P<title>[^\s{}\[\]]+)")
NAME_RE = re.compile(r"\S+")


def split_tag(raw: str) -> Outcome[Tag]:
    """Split one tag line into a Tag whose type is not parsed yet.

    ``raw_type`` keeps the braces. Names are only read for titles that take
    one; ``[name]`` and ``[name=default]`` mark optional parameters.

    Args:
        raw: Tag line, with or without the leading ``@``

    Returns:
        Outcome holding the Tag, or a TagSyntaxError
    """
    match = TITLE_RE.match(raw)
    if match is None:
        return Outcome.fail(TagSyntaxError("Missing tag title", raw=raw))

    title = resolve_title(match.group("title"))
    body = raw[match.end() :].lstrip()

    raw_type = None
    # '{@' opens an inline reference, not a type
    if body.startswith("{") and not body.startswith("{@"):
        end = find_closing(body, 0)
        if end is None:
            return Outcome.fail(
                TagSyntaxError(f"Unbalanced braces in type of @{title}", raw=raw)
            )
        raw_type = body[: end + 1]
        body = body[end + 1 :].lstrip()

    tag = Tag(title=title, raw_type=raw_type, raw=raw)

    if expects_name(title) and body:
        if body.startswith("["):
            end = find_closing(body, 0, "[", "]")
            if end is None:
                return Outcome.fail(
                    TagSyntaxError(f"Unbalanced brackets in name of @{title}", raw=raw)
                )
            name, sep, default = body[1:end].partition("=")
            if not name.strip():
                return Outcome.fail(
                    TagSyntaxError(f"Empty optional name in @{title}", raw=raw)
                )
            tag.name = name.strip()
            tag.optional = True
            tag.default = default.strip() if sep else None
            body = body[end + 1 :]
        else:
            name_match = NAME_RE.match(body)
            tag.name = name_match.group()
            body = body[name_match.end() :]

    tag.description = body.strip()
    return Outcome.ok(tag)
