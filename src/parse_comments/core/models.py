"""Data models for parsed comments.

Every node carries a literal ``kind`` discriminator. Type AST nodes are
frozen; ``Tag`` and ``Comment`` stay mutable so pipeline handlers can
update them in place or return replacements.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

# --- Type AST ---


class _TypeNode(BaseModel):
    model_config = ConfigDict(frozen=True)


class NameType(_TypeNode):
    """Bare identifier, possibly dotted or namespaced (``Foo.Bar``, ``module:foo``)."""

    kind: Literal["name"] = "name"
    name: str


class AllType(_TypeNode):
    """The ``*`` wildcard."""

    kind: Literal["all"] = "all"


class UnknownType(_TypeNode):
    """A bare ``?`` with no operand (Closure's unknown type)."""

    kind: Literal["unknown"] = "unknown"


class LiteralType(_TypeNode):
    """Quoted string or numeric literal type (``'up'``, ``42``)."""

    kind: Literal["literal"] = "literal"
    value: str


class UnionType(_TypeNode):
    kind: Literal["union"] = "union"
    elements: list[TypeNode]


class GroupType(_TypeNode):
    """Parenthesized group; keeps ``(A|B)`` distinct from ``A|B``."""

    kind: Literal["group"] = "group"
    expression: TypeNode


class OptionalType(_TypeNode):
    kind: Literal["optional"] = "optional"
    expression: TypeNode


class NullableType(_TypeNode):
    kind: Literal["nullable"] = "nullable"
    expression: TypeNode
    prefix: bool = True


class NonNullableType(_TypeNode):
    kind: Literal["non_nullable"] = "non_nullable"
    expression: TypeNode
    prefix: bool = True


class VariadicType(_TypeNode):
    kind: Literal["variadic"] = "variadic"
    expression: TypeNode


class GenericType(_TypeNode):
    """``Array.<String>``, ``Array<String>`` and ``String[]`` all land here."""

    kind: Literal["generic"] = "generic"
    name: str
    params: list[TypeNode]


class FieldType(_TypeNode):
    kind: Literal["field"] = "field"
    key: str
    value: TypeNode | None = None


class RecordType(_TypeNode):
    kind: Literal["record"] = "record"
    fields: list[FieldType] = Field(default_factory=list)


class ParameterType(_TypeNode):
    """Named entry of a function parameter list (``a:b`` in ``function(...a:b)``)."""

    kind: Literal["parameter"] = "parameter"
    name: str
    expression: TypeNode


class FunctionType(_TypeNode):
    kind: Literal["function"] = "function"
    params: list[TypeNode] = Field(default_factory=list)
    result: TypeNode | None = None
    this: TypeNode | None = None
    new: TypeNode | None = None


TypeNode = Annotated[
    Union[
        NameType,
        AllType,
        UnknownType,
        LiteralType,
        UnionType,
        GroupType,
        OptionalType,
        NullableType,
        NonNullableType,
        VariadicType,
        GenericType,
        FieldType,
        RecordType,
        ParameterType,
        FunctionType,
    ],
    Field(discriminator="kind"),
]

for _model in (
    UnionType,
    GroupType,
    OptionalType,
    NullableType,
    NonNullableType,
    VariadicType,
    GenericType,
    FieldType,
    RecordType,
    ParameterType,
    FunctionType,
):
    _model.model_rebuild()


# --- Comment nodes ---


class InlineReference(BaseModel):
    """A ``{@tag value}`` marker found in description text."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["inline"] = "inline"
    raw: str
    tag: str
    value: str = ""


class Tag(BaseModel):
    """One ``@title {type} name description`` annotation."""

    kind: Literal["tag"] = "tag"
    title: str
    raw_type: str | None = Field(
        default=None, description="Bracketed type literal, braces included"
    )
    type: TypeNode | None = None
    name: str | None = None
    description: str = ""
    inline_tags: list[InlineReference] = Field(default_factory=list)
    optional: bool = Field(default=False, description="Name was written as [name]")
    default: str | None = Field(default=None, description="Default from [name=value]")
    raw: str = Field(default="", description="Original tag line")


class Location(BaseModel):
    """Where a comment block sits in its source (lines are 1-based)."""

    start_line: int
    end_line: int
    start: int = 0
    end: int = 0


class CodeContext(BaseModel):
    """Best-effort description of the code construct following a comment."""

    kind: str | None = None
    name: str | None = None
    parent: str | None = None
    value: str = ""
    line: int | None = None


class RawComment(BaseModel):
    """A comment block as produced by the extraction collaborator."""

    raw: str
    value: str
    loc: Location | None = None
    code: CodeContext | None = None


class Example(BaseModel):
    """A code example lifted out of a comment body."""

    style: Literal["gfm", "javadoc"] = "gfm"
    language: str = ""
    description: str = ""
    value: str = ""
    raw: str = ""


class CommentTokens(BaseModel):
    """A comment body split into segments by the tokenization collaborator."""

    description: str = ""
    footer: str = ""
    tags: list[str] = Field(default_factory=list)
    examples: list[Example] = Field(default_factory=list)


class Comment(BaseModel):
    """A fully parsed documentation comment."""

    kind: Literal["comment"] = "comment"
    raw: str = ""
    description: str = ""
    footer: str = ""
    tags: list[Tag] = Field(default_factory=list)
    inline_tags: list[InlineReference] = Field(default_factory=list)
    examples: list[Example] = Field(default_factory=list)
    code: CodeContext | None = None
    loc: Location | None = None

    def get_tags(self, title: str) -> list[Tag]:
        """Return the tags with the given canonical title, in source order."""
        return [tag for tag in self.tags if tag.title == title]


Node = Comment | Tag | InlineReference
