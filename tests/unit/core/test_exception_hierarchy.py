"""Tests for the typed exception hierarchy.

Validates:
- Class hierarchy is correct (isinstance checks)
- Exceptions are exported from the package root
- Error attributes carry the diagnostic context
"""

from __future__ import annotations

import pytest

# ---------------------------------------------------------------------------
# Hierarchy tests
# ---------------------------------------------------------------------------


class TestExceptionHierarchy:
    """Verify the class hierarchy defined in core/exceptions.py."""

    def test_parse_comments_error_is_base_exception(self):
        from parse_comments.core.exceptions import ParseCommentsError

        err = ParseCommentsError("base")
        assert isinstance(err, Exception)
        assert err.context == {}

    def test_parse_error_inherits_from_base(self):
        from parse_comments.core.exceptions import ParseCommentsError, ParseError

        assert isinstance(ParseError("parse"), ParseCommentsError)

    def test_type_syntax_error_inherits_from_parse_error(self):
        from parse_comments.core.exceptions import ParseError, TypeSyntaxError

        err = TypeSyntaxError("bad type", literal="Array<", position=6)
        assert isinstance(err, ParseError)
        assert err.literal == "Array<"
        assert err.position == 6

    def test_tag_syntax_error_inherits_from_parse_error(self):
        from parse_comments.core.exceptions import ParseError, TagSyntaxError

        err = TagSyntaxError("bad tag", raw="@param {x")
        assert isinstance(err, ParseError)
        assert err.raw == "@param {x"

    def test_handler_type_error_is_also_type_error(self):
        from parse_comments.core.exceptions import (
            HandlerTypeError,
            ParseCommentsError,
            ParseError,
        )

        err = HandlerTypeError("not callable", node="n", phase="after")
        assert isinstance(err, ParseCommentsError)
        assert isinstance(err, TypeError)
        assert not isinstance(err, ParseError)
        assert err.node == "n"
        assert err.context == {"phase": "after"}

    def test_config_error_inherits_from_base(self):
        from parse_comments.core.exceptions import ConfigError, ParseCommentsError

        assert isinstance(ConfigError("config"), ParseCommentsError)

    def test_context_is_kept(self):
        from parse_comments.core.exceptions import ParseError

        err = ParseError("parse", context={"line": 3})
        assert err.context == {"line": 3}
        assert str(err) == "parse"


# ---------------------------------------------------------------------------
# Package-root exports
# ---------------------------------------------------------------------------


class TestPackageExports:
    @pytest.mark.parametrize(
        "name",
        [
            "ParseCommentsError",
            "ParseError",
            "TypeSyntaxError",
            "TagSyntaxError",
            "HandlerTypeError",
            "ConfigError",
        ],
    )
    def test_exported_from_root(self, name):
        import parse_comments
        from parse_comments.core import exceptions

        assert getattr(parse_comments, name) is getattr(exceptions, name)
