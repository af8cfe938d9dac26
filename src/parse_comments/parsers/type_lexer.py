"""Scanner for type literals."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import StrEnum

from ..core.exceptions import TypeSyntaxError


class TokenType(StrEnum):
    NAME = "name"
    STRING = "string"
    NUMBER = "number"
    ELLIPSIS = "..."
    DOT_LT = ".<"
    LT = "<"
    GT = ">"
    LPAREN = "("
    RPAREN = ")"
    LBRACE = "{"
    RBRACE = "}"
    LBRACKET = "["
    RBRACKET = "]"
    PIPE = "|"
    COMMA = ","
    COLON = ":"
    EQUALS = "="
    QUESTION = "?"
    BANG = "!"
    STAR = "*"
    EOF = "eof"


@dataclass(frozen=True)
class Token:
    type: TokenType
    value: str
    position: int


# Namespaced names (module:foo/bar, external:String, event:Foo#change) may
# contain path characters; plain names are dotted identifiers with JSDoc's
# instance/inner separators.
_IDENT = r"[A-Za-z_$][\w$]*"
_PATH = r"[\w$/\-#~]+"
_TOKEN_RE = re.compile(
    rf"""
    (?P<ws>\s+)
    |(?P<namespaced>(?:module|external|event):{_PATH}(?:\.{_PATH})*)
    |(?P<name>{_IDENT}(?:[#~]{_IDENT}|\.{_IDENT})*)
    |(?P<string>"(?:[^"\\]|\\.)*"|'(?:[^'\\]|\\.)*')
    |(?P<number>-?\d+(?:\.\d+)?)
    |(?P<ellipsis>\.\.\.)
    |(?P<dot_lt>\.<)
    |(?P<punct>[<>(){{}}\[\]|,:=?!*])
    """,
    re.VERBOSE,
)

_PUNCT = {t.value: t for t in TokenType if len(t.value) == 1}


def tokenize(literal: str) -> list[Token]:
    """Split a type literal into tokens, ending with an EOF token.

    Raises:
        TypeSyntaxError: On characters that cannot start any token
    """
    tokens: list[Token] = []
    pos = 0
    while pos < len(literal):
        match = _TOKEN_RE.match(literal, pos)
        if match is None:
            raise TypeSyntaxError(
                f"Unexpected character {literal[pos]!r} at {pos}",
                literal=literal,
                position=pos,
            )
        kind = match.lastgroup
        text = match.group()
        if kind == "namespaced" or kind == "name":
            tokens.append(Token(TokenType.NAME, text, pos))
        elif kind == "string":
            tokens.append(Token(TokenType.STRING, text, pos))
        elif kind == "number":
            tokens.append(Token(TokenType.NUMBER, text, pos))
        elif kind == "ellipsis":
            tokens.append(Token(TokenType.ELLIPSIS, text, pos))
        elif kind == "dot_lt":
            tokens.append(Token(TokenType.DOT_LT, text, pos))
        elif kind == "punct":
            tokens.append(Token(_PUNCT[text], text, pos))
        pos = match.end()

    tokens.append(Token(TokenType.EOF, "", len(literal)))
    return tokens
