"""Recursive-descent parser for JSDoc / Closure Compiler type literals.

Precedence, lowest to highest::

    union     := postfix ('|' postfix)*
    postfix   := prefix '='?
    prefix    := ('?' | '!' | '...')* suffixed
    suffixed  := primary ('[' ']')* ('?' | '!')*
    primary   := name generic? | '*' | '?' | literal | record | function | '(' union ')'

``T[]`` desugars to ``Array.<T>``; ``Array<T>`` and ``Array.<T>`` produce
the same node. Any identifier is accepted as a name.
"""

from __future__ import annotations

from ..config.defaults import MAX_TYPE_DEPTH
from ..core.exceptions import TypeSyntaxError
from ..core.models import (
    AllType,
    FieldType,
    FunctionType,
    GenericType,
    GroupType,
    LiteralType,
    NameType,
    NonNullableType,
    NullableType,
    OptionalType,
    ParameterType,
    RecordType,
    TypeNode,
    UnionType,
    UnknownType,
    VariadicType,
)
from .type_lexer import Token, TokenType, tokenize

# Tokens that may follow a bare '?' when it stands for the unknown type
_TERMINATORS = frozenset(
    {
        TokenType.EOF,
        TokenType.PIPE,
        TokenType.COMMA,
        TokenType.RPAREN,
        TokenType.RBRACE,
        TokenType.RBRACKET,
        TokenType.GT,
        TokenType.EQUALS,
    }
)

_CLOSERS = {
    TokenType.RPAREN: "parenthesis",
    TokenType.RBRACE: "brace",
    TokenType.RBRACKET: "bracket",
    TokenType.GT: "angle bracket",
}


def parse_type(literal: str, max_depth: int = MAX_TYPE_DEPTH) -> TypeNode:
    """Parse the inner text of a ``{...}`` type literal.

    Args:
        literal: Type text without the surrounding braces
        max_depth: Maximum nesting of grouped/generic/record/function types

    Returns:
        Root node of the type AST. Empty text yields an empty RecordType.

    Raises:
        TypeSyntaxError: If the literal is malformed or nested too deeply
    """
    return TypeParser(literal, max_depth=max_depth).parse()


class TypeParser:
    """Parses one type literal; instances are single-use."""

    def __init__(self, literal: str, max_depth: int = MAX_TYPE_DEPTH) -> None:
        self._literal = literal
        self._tokens = tokenize(literal)
        self._pos = 0
        self._depth = 0
        self._max_depth = max_depth

    def parse(self) -> TypeNode:
        if self._at_end():
            return RecordType()

        try:
            node = self._parse_union()
        except RecursionError:
            # max_depth set beyond what the interpreter stack allows
            raise self._error("Type literal nested too deeply", self._current()) from None
        if not self._at_end():
            tok = self._current()
            if tok.type in _CLOSERS:
                raise self._error(f"Unbalanced closing {_CLOSERS[tok.type]}", tok)
            raise self._error(f"Unexpected token {tok.value!r}", tok)
        return node

    # ------------------------------------------------------------------
    # Token access helpers
    # ------------------------------------------------------------------

    def _current(self) -> Token:
        return self._tokens[self._pos]

    def _peek_next_type(self) -> TokenType:
        if self._pos + 1 < len(self._tokens):
            return self._tokens[self._pos + 1].type
        return TokenType.EOF

    def _at_end(self) -> bool:
        return self._current().type == TokenType.EOF

    def _check(self, *types: TokenType) -> bool:
        return self._current().type in types

    def _advance(self) -> Token:
        tok = self._tokens[self._pos]
        if self._pos < len(self._tokens) - 1:
            self._pos += 1
        return tok

    def _expect(self, token_type: TokenType, message: str) -> Token:
        tok = self._current()
        if tok.type != token_type:
            raise self._error(message, tok)
        return self._advance()

    def _error(self, message: str, tok: Token) -> TypeSyntaxError:
        found = tok.value or "end of input"
        return TypeSyntaxError(
            f"{message} (found {found!r} at {tok.position} in {self._literal!r})",
            literal=self._literal,
            position=tok.position,
        )

    # ------------------------------------------------------------------
    # Productions
    # ------------------------------------------------------------------

    def _descend(self) -> None:
        # Paired with a `self._depth -= 1` in a finally block
        self._depth += 1
        if self._depth > self._max_depth:
            raise self._error(
                f"Type literal nested deeper than {self._max_depth} levels",
                self._current(),
            )

    def _parse_union(self) -> TypeNode:
        self._descend()
        try:
            elements = [self._parse_postfix()]
            while self._check(TokenType.PIPE):
                self._advance()
                elements.append(self._parse_postfix())
        finally:
            self._depth -= 1

        if len(elements) == 1:
            return elements[0]
        return UnionType(elements=elements)

    def _parse_postfix(self) -> TypeNode:
        node = self._parse_prefix()
        if self._check(TokenType.EQUALS):
            self._advance()
            node = OptionalType(expression=node)
        return node

    def _parse_prefix(self) -> TypeNode:
        # Collected iteratively so long modifier runs do not recurse
        modifiers: list[Token] = []
        while self._check(TokenType.QUESTION, TokenType.BANG, TokenType.ELLIPSIS):
            if (
                self._check(TokenType.QUESTION)
                and self._peek_next_type() in _TERMINATORS
            ):
                break
            modifiers.append(self._advance())

        node = self._parse_suffixed()
        for tok in reversed(modifiers):
            if tok.type == TokenType.QUESTION:
                node = NullableType(expression=node)
            elif tok.type == TokenType.BANG:
                node = NonNullableType(expression=node)
            else:
                node = VariadicType(expression=node)
        return node

    def _parse_suffixed(self) -> TypeNode:
        node = self._parse_primary()
        while self._check(TokenType.LBRACKET):
            self._advance()
            self._expect(TokenType.RBRACKET, "Expected ']' after '['")
            node = GenericType(name="Array", params=[node])
        while self._check(TokenType.QUESTION, TokenType.BANG):
            if self._advance().type == TokenType.QUESTION:
                node = NullableType(expression=node, prefix=False)
            else:
                node = NonNullableType(expression=node, prefix=False)
        return node

    def _parse_primary(self) -> TypeNode:
        tok = self._current()

        if tok.type == TokenType.NAME:
            if tok.value == "function" and self._peek_next_type() == TokenType.LPAREN:
                return self._parse_function()
            self._advance()
            if self._check(TokenType.LT, TokenType.DOT_LT):
                return self._parse_generic(tok.value)
            return NameType(name=tok.value)

        if tok.type == TokenType.STAR:
            self._advance()
            return AllType()

        if tok.type == TokenType.QUESTION:
            self._advance()
            return UnknownType()

        if tok.type in (TokenType.STRING, TokenType.NUMBER):
            self._advance()
            return LiteralType(value=tok.value)

        if tok.type == TokenType.LBRACE:
            return self._parse_record()

        if tok.type == TokenType.LPAREN:
            self._advance()
            inner = self._parse_union()
            self._expect(TokenType.RPAREN, "Unclosed parenthesis")
            return GroupType(expression=inner)

        if tok.type == TokenType.EOF:
            raise self._error("Expected a type", tok)
        raise self._error(f"Expected a type, got {tok.value!r}", tok)

    def _parse_generic(self, name: str) -> GenericType:
        self._advance()  # '<' or '.<'
        params = [self._parse_union()]
        while self._check(TokenType.COMMA):
            self._advance()
            params.append(self._parse_union())
        self._expect(TokenType.GT, f"Unclosed type application on {name!r}")
        return GenericType(name=name, params=params)

    def _parse_record(self) -> RecordType:
        self._advance()  # '{'
        fields: list[FieldType] = []
        seen: set[str] = set()

        if not self._check(TokenType.RBRACE):
            while True:
                key = self._parse_record_key()
                if key in seen:
                    raise self._error(f"Duplicate record key {key!r}", self._current())
                seen.add(key)

                value = None
                if self._check(TokenType.COLON):
                    self._advance()
                    value = self._parse_union()
                fields.append(FieldType(key=key, value=value))

                if not self._check(TokenType.COMMA):
                    break
                self._advance()

        self._expect(TokenType.RBRACE, "Unclosed record type")
        return RecordType(fields=fields)

    def _parse_record_key(self) -> str:
        tok = self._current()
        if tok.type == TokenType.NAME and not any(c in tok.value for c in ".#~:"):
            self._advance()
            return tok.value
        if tok.type == TokenType.STRING:
            self._advance()
            return tok.value[1:-1]
        if tok.type == TokenType.NUMBER:
            self._advance()
            return tok.value
        raise self._error("Malformed record key", tok)

    def _parse_function(self) -> FunctionType:
        self._descend()
        try:
            return self._parse_signature()
        finally:
            self._depth -= 1

    def _parse_signature(self) -> FunctionType:
        self._advance()  # 'function'
        self._advance()  # '('
        params: list[TypeNode] = []
        this = None
        new = None

        if not self._check(TokenType.RPAREN):
            while True:
                tok = self._current()
                if (
                    tok.type == TokenType.NAME
                    and tok.value in ("this", "new")
                    and self._peek_next_type() == TokenType.COLON
                ):
                    self._advance()
                    self._advance()
                    binding = self._parse_union()
                    if tok.value == "this":
                        this = binding
                    else:
                        new = binding
                else:
                    params.append(self._parse_function_param())

                if not self._check(TokenType.COMMA):
                    break
                self._advance()

        self._expect(TokenType.RPAREN, "Unclosed function signature")

        result = None
        if self._check(TokenType.COLON):
            self._advance()
            result = self._parse_prefix()
        return FunctionType(params=params, result=result, this=this, new=new)

    def _parse_function_param(self) -> TypeNode:
        if self._check(TokenType.ELLIPSIS):
            self._advance()
            return VariadicType(expression=self._parse_param_body())
        return self._parse_param_body()

    def _parse_param_body(self) -> TypeNode:
        tok = self._current()
        if tok.type == TokenType.NAME and self._peek_next_type() == TokenType.COLON:
            self._advance()
            self._advance()
            return ParameterType(name=tok.value, expression=self._parse_postfix())
        return self._parse_postfix()
