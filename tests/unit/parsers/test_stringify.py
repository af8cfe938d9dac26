"""Tests for rendering type ASTs back to type literals."""

import pytest

import parse_comments
from parse_comments.core.models import FieldType, NameType, RecordType
from parse_comments.parsers.stringify import stringify_type
from parse_comments.parsers.types import parse_type


@pytest.mark.parametrize(
    "literal, expected",
    [
        ("string", "string"),
        ("Array<String>", "Array.<String>"),
        ("String[]", "Array.<String>"),
        ("Object.<string,number>", "Object.<string, number>"),
        ("?string", "?string"),
        ("string?", "string?"),
        ("!Object", "!Object"),
        ("(a|b)=", "(a|b)="),
        ("...number", "...number"),
        ("*", "*"),
        ("?", "?"),
        ("{a:number,b}", "{a: number, b}"),
        ("function(this:Foo,string):boolean", "function(this:Foo, string): boolean"),
        ("function(new:Foo)", "function(new:Foo)"),
        ("function(...a:b)", "function(...a:b)"),
    ],
)
def test_canonical_form(literal, expected):
    assert stringify_type(parse_type(literal)) == expected


@pytest.mark.parametrize(
    "literal",
    [
        "Array<String|Function|Array>=",
        "{'b c': string, d: ?Array.<number>}",
        "function(this:Window, ...string): !Object",
        "'up'|'down'|42",
        "module:foo/bar.<T>",
    ],
)
def test_canonical_form_parses_to_same_tree(literal):
    node = parse_type(literal)
    assert parse_type(stringify_type(node)) == node


def test_record_keys_are_quoted_when_needed():
    node = RecordType(
        fields=[
            FieldType(key="plain", value=NameType(name="a")),
            FieldType(key="with space"),
        ]
    )
    assert stringify_type(node) == '{plain: a, "with space"}'


def test_rejects_non_nodes():
    with pytest.raises(TypeError):
        stringify_type("string")


@pytest.mark.parametrize(
    "literal",
    [
        "{a: number}",
        "{a: number}|{b: string}",
        "Array.<{id: string}>",
        "function({a: b}): {c: d}",
    ],
)
def test_canonical_form_round_trips_through_package_api(literal):
    node = parse_comments.parse_type(literal)
    assert parse_comments.parse_type(parse_comments.stringify_type(node)) == node
