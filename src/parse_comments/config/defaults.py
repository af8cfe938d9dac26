"""Default tables for tag normalization and validation."""

# Alternate spellings mapped to their canonical tag title
TAG_ALIASES: dict[str, str] = {
    "arg": "param",
    "argument": "param",
    "return": "returns",
    "prop": "property",
    "augments": "extends",
    "const": "constant",
    "defaultvalue": "default",
    "desc": "description",
    "exception": "throws",
    "fileoverview": "file",
    "overview": "file",
    "emits": "fires",
    "func": "function",
    "method": "function",
    "var": "member",
    "virtual": "abstract",
    "host": "external",
    "yield": "yields",
    "inheritdoc": "inheritDoc",
}

# Tags that must carry a type literal
TYPE_REQUIRED: frozenset[str] = frozenset(
    {
        "define",
        "param",
        "property",
        "returns",
        "this",
        "type",
        "typedef",
    }
)

# Tags whose meaning excludes a type literal; a spurious one is discarded
TYPE_FORBIDDEN: frozenset[str] = frozenset(
    {
        "abstract",
        "api",
        "author",
        "class",
        "constructor",
        "deprecated",
        "dict",
        "example",
        "final",
        "ignore",
        "inheritDoc",
        "interface",
        "license",
        "name",
        "nosideeffects",
        "override",
        "preserve",
        "private",
        "protected",
        "public",
        "readonly",
        "record",
        "since",
        "static",
        "struct",
        "unrestricted",
        "version",
    }
)

# Tags whose first word after the type is an identifier
NAME_EXPECTED: frozenset[str] = frozenset(
    {
        "callback",
        "member",
        "param",
        "property",
        "template",
        "typedef",
    }
)

# Every title recognized when a closed vocabulary is requested
KNOWN_TAGS: frozenset[str] = (
    TYPE_REQUIRED
    | TYPE_FORBIDDEN
    | NAME_EXPECTED
    | frozenset(
        {
            "access",
            "alias",
            "async",
            "borrows",
            "classdesc",
            "constant",
            "constructs",
            "copyright",
            "default",
            "description",
            "enum",
            "event",
            "export",
            "exports",
            "extends",
            "external",
            "file",
            "fires",
            "function",
            "generator",
            "global",
            "hideconstructor",
            "implements",
            "inner",
            "instance",
            "kind",
            "lends",
            "link",
            "listens",
            "memberof",
            "mixes",
            "mixin",
            "module",
            "namespace",
            "nocollapse",
            "package",
            "requires",
            "see",
            "summary",
            "suppress",
            "throws",
            "todo",
            "tutorial",
            "variation",
            "yields",
        }
    )
)

# Inline tags rendered as links when inline markers are substituted
LINK_INLINE_TAGS: frozenset[str] = frozenset({"link", "linkcode", "linkplain"})

# Leading words that mark lint/tooling configuration comments
CONFIG_COMMENT_MARKERS: tuple[str, ...] = (
    "eslint",
    "eshint",
    "global",
    "istanbul",
    "jscs",
    "jshint",
    "jslint",
)

# Markers of license/preserved comments
PROTECTED_COMMENT_MARKERS: tuple[str, ...] = ("@license", "@preserve")

# Maximum nesting depth accepted by the type grammar
MAX_TYPE_DEPTH = 64
