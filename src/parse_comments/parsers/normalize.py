"""Tag title canonicalization and type-policy validation."""

from __future__ import annotations

from loguru import logger

from ..config.defaults import (
    KNOWN_TAGS,
    NAME_EXPECTED,
    TAG_ALIASES,
    TYPE_FORBIDDEN,
    TYPE_REQUIRED,
)
from ..config.settings import ParserConfig
from ..core.models import Tag
from ..core.results import Outcome, Rejection


# Known titles and aliases match case-insensitively
_CANONICAL_TITLES = {title.lower(): title for title in KNOWN_TAGS}


def resolve_title(title: str) -> str:
    """Map a tag spelling to its canonical title.

    ``@Param`` and ``@RETURN`` resolve like ``@param`` and ``@return``;
    unknown titles keep their spelling.
    """
    if title in TAG_ALIASES:
        return TAG_ALIASES[title]
    key = title.lower()
    if key in TAG_ALIASES:
        return TAG_ALIASES[key]
    return _CANONICAL_TITLES.get(key, title)


def allows_type(title: str) -> bool:
    return title not in TYPE_FORBIDDEN


def expects_type(title: str) -> bool:
    return title in TYPE_REQUIRED


def expects_name(title: str) -> bool:
    return title in NAME_EXPECTED


def normalize_tag(tag: Tag, config: ParserConfig | None = None) -> Tag:
    """Canonicalize the title and trim the free-text fields in place."""
    tag.title = resolve_title(tag.title)
    if tag.name is not None:
        tag.name = tag.name.strip() or None
    tag.description = tag.description.strip()
    return tag


def validate_tag(tag: Tag, config: ParserConfig) -> Outcome[Tag]:
    """Apply the type policy for the tag's title.

    A type clause on a tag that forbids one is discarded rather than
    rejected. A missing required type leaves ``type`` as None, or rejects
    the tag in strict mode. Unknown titles pass through unless a closed
    vocabulary is configured.
    """
    if config.closed_vocabulary and tag.title not in KNOWN_TAGS:
        return Outcome.reject(Rejection.UNKNOWN_TITLE)

    if not allows_type(tag.title) and tag.type is not None:
        logger.debug(f"Discarding type on @{tag.title}: {tag.raw_type}")
        tag.type = None

    if expects_type(tag.title) and tag.type is None:
        if config.strict:
            return Outcome.reject(Rejection.MISSING_TYPE)
        logger.debug(f"@{tag.title} has no type: {tag.raw!r}")

    return Outcome.ok(tag)
