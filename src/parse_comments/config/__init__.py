"""Configuration for parse-comments."""

from .settings import ParseOverrides, ParserConfig

__all__ = ["ParseOverrides", "ParserConfig"]
