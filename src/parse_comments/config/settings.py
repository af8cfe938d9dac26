"""Parser configuration."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml

from ..core.exceptions import ConfigError
from .defaults import MAX_TYPE_DEPTH

if TYPE_CHECKING:
    from ..core.models import (
        Comment,
        CommentTokens,
        InlineReference,
        RawComment,
        Tag,
        TypeNode,
    )


# camelCase spellings accepted for the per-stage overrides
_STAGE_ALIASES = {"inlineTag": "inline_tag", "paramType": "param_type"}


@dataclass(frozen=True)
class ParseOverrides:
    """Per-stage replacements for the built-in parsing steps.

    Each callable receives the stage input followed by the resolved
    ``ParserConfig``.
    """

    comment: Callable[[RawComment, ParserConfig], Comment] | None = None
    tags: Callable[[CommentTokens, ParserConfig], list[Tag]] | None = None
    tag: Callable[[str, ParserConfig], Tag | None] | None = None
    inline_tag: (
        Callable[[str, ParserConfig], tuple[str, list[InlineReference]]] | None
    ) = None
    type: Callable[[str, Tag | None, ParserConfig], TypeNode] | None = None
    param_type: Callable[[str, ParserConfig], str] | None = None

    def __post_init__(self) -> None:
        for f in fields(self):
            fn = getattr(self, f.name)
            if fn is not None and not callable(fn):
                raise ConfigError(
                    f"parse override '{f.name}' must be callable, got {type(fn).__name__}"
                )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ParseOverrides:
        """Create overrides from a mapping of stage name to callable."""
        return cls(**{cls.stage_name(key): fn for key, fn in data.items()})

    @classmethod
    def stage_name(cls, key: str) -> str:
        """Resolve a stage name, accepting camelCase spellings."""
        name = _STAGE_ALIASES.get(key, key)
        if name not in {f.name for f in fields(cls)}:
            raise ConfigError(f"unknown parse override '{key}'")
        return name


@dataclass(frozen=True)
class ParserConfig:
    """Resolved configuration, built once per ``Comments`` instance."""

    # Raise TypeSyntaxError/TagSyntaxError instead of dropping the tag
    strict: bool = False
    # Run the formatter over every finished comment
    format: bool = False
    # Reject tags whose title is not in KNOWN_TAGS
    closed_vocabulary: bool = False
    # Replace inline {@link ...} markers with readable text
    strip_inline: bool = False
    # Keep /*! ... */ and @license/@preserve blocks
    protected: bool = True
    # Tokenizer hint; None auto-detects comment gutters
    strip_stars: bool | None = None
    max_type_depth: int = MAX_TYPE_DEPTH

    extract: Callable[[str, ParserConfig], list[RawComment]] | None = None
    preprocess: Callable[[RawComment, ParserConfig], RawComment] | None = None
    is_valid: Callable[[RawComment], bool] | None = None
    parse: ParseOverrides = field(default_factory=ParseOverrides)

    def __post_init__(self) -> None:
        if self.max_type_depth < 1:
            raise ConfigError(
                f"max_type_depth must be positive, got {self.max_type_depth}"
            )
        for name in ("extract", "preprocess", "is_valid"):
            fn = getattr(self, name)
            if fn is not None and not callable(fn):
                raise ConfigError(f"'{name}' must be callable")

    @classmethod
    def load(cls, path: Path) -> ParserConfig:
        """Load configuration from YAML file.

        Only the scalar settings can be expressed in YAML; callables are
        supplied in code.

        Args:
            path: Path to YAML configuration file

        Returns:
            ParserConfig instance (defaults if the file does not exist)
        """
        if not path.exists():
            return cls()

        with open(path) as f:
            try:
                data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigError(f"Invalid YAML in {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"Expected a mapping in {path}")
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ParserConfig:
        """Create config from dictionary.

        Args:
            data: Configuration dictionary

        Returns:
            ParserConfig instance

        Raises:
            ConfigError: On unknown keys
        """
        return cls().with_options(**data)

    def with_options(self, **options: Any) -> ParserConfig:
        """Return a copy with the given settings applied."""
        known = {f.name for f in fields(self)}
        unknown = sorted(set(options) - known)
        if unknown:
            raise ConfigError(f"Unknown configuration keys: {', '.join(unknown)}")

        parse = options.get("parse")
        if isinstance(parse, dict):
            options["parse"] = ParseOverrides.from_dict(parse)
        elif parse is None and "parse" in options:
            options["parse"] = ParseOverrides()
        return replace(self, **options)

    def to_dict(self) -> dict[str, Any]:
        """Convert the scalar settings to a dictionary for serialization."""
        return {
            "strict": self.strict,
            "format": self.format,
            "closed_vocabulary": self.closed_vocabulary,
            "strip_inline": self.strip_inline,
            "protected": self.protected,
            "strip_stars": self.strip_stars,
            "max_type_depth": self.max_type_depth,
        }

    def save(self, path: Path) -> None:
        """Save the scalar settings to a YAML file."""
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)
