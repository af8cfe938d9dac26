"""Render a type AST back to canonical type-literal syntax."""

from __future__ import annotations

import re

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

_BARE_KEY_RE = re.compile(r"[A-Za-z_$][\w$]*|\d+")


def stringify_type(node: TypeNode) -> str:
    """Return the canonical surface form of ``node`` (without outer braces).

    Generics always use the ``Array.<T>`` form, so ``T[]`` and
    ``Array<T>`` print identically.
    """
    match node:
        case NameType():
            return node.name
        case AllType():
            return "*"
        case UnknownType():
            return "?"
        case LiteralType():
            return node.value
        case UnionType():
            return "|".join(stringify_type(e) for e in node.elements)
        case GroupType():
            return f"({stringify_type(node.expression)})"
        case OptionalType():
            return f"{stringify_type(node.expression)}="
        case NullableType():
            inner = stringify_type(node.expression)
            return f"?{inner}" if node.prefix else f"{inner}?"
        case NonNullableType():
            inner = stringify_type(node.expression)
            return f"!{inner}" if node.prefix else f"{inner}!"
        case VariadicType():
            return f"...{stringify_type(node.expression)}"
        case GenericType():
            params = ", ".join(stringify_type(p) for p in node.params)
            return f"{node.name}.<{params}>"
        case FieldType():
            key = node.key if _BARE_KEY_RE.fullmatch(node.key) else f'"{node.key}"'
            if node.value is None:
                return key
            return f"{key}: {stringify_type(node.value)}"
        case RecordType():
            return "{" + ", ".join(stringify_type(f) for f in node.fields) + "}"
        case ParameterType():
            return f"{node.name}:{stringify_type(node.expression)}"
        case FunctionType():
            params = []
            if node.this is not None:
                params.append(f"this:{stringify_type(node.this)}")
            if node.new is not None:
                params.append(f"new:{stringify_type(node.new)}")
            params.extend(stringify_type(p) for p in node.params)
            text = f"function({', '.join(params)})"
            if node.result is not None:
                text += f": {stringify_type(node.result)}"
            return text
    raise TypeError(f"not a type node: {node!r}")
