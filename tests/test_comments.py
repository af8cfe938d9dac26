"""Integration tests for the Comments orchestrator."""

import pytest

import parse_comments
from parse_comments import Comments
from parse_comments.core.exceptions import ConfigError, HandlerTypeError, TypeSyntaxError
from parse_comments.core.models import (
    Comment,
    FieldType,
    GenericType,
    InlineReference,
    NameType,
    OptionalType,
    RawComment,
    RecordType,
    UnionType,
)
from parse_comments.core.pipeline import Pipeline


@pytest.fixture
def sample_js_code():
    """Sample JavaScript with two documentation comments."""
    return """/**
 * Adds two numbers.
 *
 * @param {number} a The first number
 * @param {number} [b=0] The second number
 * @returns {number} The sum, see {@link Math#add}
 */
function add(a, b) {
  return a + b;
}

/* not documentation */

/**
 * A point.
 * @constructor
 * @private {string}
 */
function Point() {}
"""


@pytest.fixture
def comments():
    return Comments()


def single(text: str) -> str:
    return "/**\n" + "".join(f" * {line}\n" for line in text.split("\n")) + " */"


class TestParse:
    def test_parses_documentation_comments_only(self, comments, sample_js_code):
        parsed = comments.parse(sample_js_code)

        assert len(parsed) == 2
        assert comments.comments == parsed
        assert [c.description for c in parsed] == ["Adds two numbers.", "A point."]

    def test_tags_are_parsed(self, comments, sample_js_code):
        add = comments.parse(sample_js_code)[0]

        a, b = add.get_tags("param")
        assert (a.name, a.type) == ("a", NameType(name="number"))
        assert (b.name, b.optional, b.default) == ("b", True, "0")

        [returns] = add.get_tags("returns")
        assert returns.type == NameType(name="number")
        assert returns.inline_tags == [
            InlineReference(raw="{@link Math#add}", tag="link", value="Math#add")
        ]

    def test_location_and_code_context(self, comments, sample_js_code):
        add, point = comments.parse(sample_js_code)

        assert (add.loc.start_line, add.loc.end_line) == (1, 7)
        assert add.code.name == "add"
        assert point.code.name == "Point"

    def test_type_forbidden_tags_keep_no_type(self, comments, sample_js_code):
        point = comments.parse(sample_js_code)[1]

        assert [t.title for t in point.tags] == ["constructor", "private"]
        assert all(t.type is None for t in point.tags)

    def test_parse_is_idempotent(self, comments, sample_js_code):
        assert comments.parse(sample_js_code) == comments.parse(sample_js_code)

    def test_module_level_parse(self, sample_js_code):
        assert parse_comments.parse(sample_js_code) == Comments().parse(sample_js_code)

    def test_inline_references_in_description(self, comments):
        [comment] = comments.parse(single("Use {@link Foo#bar} here."))
        assert comment.inline_tags[0].value == "Foo#bar"
        assert comment.description == "Use {@link Foo#bar} here."

    def test_strip_inline(self):
        [comment] = Comments(strip_inline=True).parse(single("Use {@link Foo#bar} here."))
        assert comment.description == "Use Foo#bar here."

    def test_examples(self, comments):
        body = "Doubles.\n@param {number} n\n@example\ndouble(2);\n@returns {number} twice n"
        [comment] = comments.parse(single(body))

        assert [t.title for t in comment.tags] == ["param", "returns"]
        assert comment.examples[0].value == "double(2);"

    def test_protected_comments_can_be_dropped(self):
        source = "/** @license MIT */\n/** Documented. */\nvar x;"

        assert len(Comments().parse(source)) == 2
        assert len(Comments(protected=False).parse(source)) == 1

    def test_format_option(self):
        source = single("Sum.\n@param {number} a - The first\n  number")

        [comment] = Comments(format=True).parse(source)

        assert comment.tags[0].description == "The first number"


class TestParseComment:
    def test_from_text(self, comments):
        assert comments.parse_comment("/** Hello */").description == "Hello"

    def test_from_raw_comment(self, comments):
        raw = RawComment(raw="/** Hi */", value=" Hi ")
        assert comments.parse_comment(raw).description == "Hi"

    def test_same_input_gives_equal_nodes(self, comments):
        raw = single("Text.\n@param {Array<string>} list The list")
        assert comments.parse_comment(raw) == comments.parse_comment(raw)

    def test_emits_comment_event(self, comments, sample_js_code):
        seen = []
        comments.on("comment", seen.append)

        parsed = comments.parse(sample_js_code)

        assert seen == parsed


class TestParseTag:
    def test_param(self, comments):
        tag = comments.parse_tag("@param {String} name The name to use for foo")

        assert tag.title == "param"
        assert tag.type == NameType(name="String")
        assert tag.name == "name"
        assert tag.description == "The name to use for foo"

    def test_union_type(self, comments):
        tag = comments.parse_tag("@type {String|Array}")
        assert tag.type == UnionType(elements=[NameType(name="String"), NameType(name="Array")])

    def test_private_with_type_in_lenient_mode(self, comments):
        tag = comments.parse_tag("@private {string}")
        assert tag.title == "private"
        assert tag.type is None

    def test_private_with_type_in_strict_mode(self):
        tag = Comments(strict=True).parse_tag("@private {string}")
        assert tag is not None
        assert tag.type is None

    def test_alias(self, comments):
        assert comments.parse_tag("@return {string} x").title == "returns"

    def test_title_case_does_not_bypass_policy(self, comments):
        tag = comments.parse_tag("@Param {string} name The name")
        assert tag.title == "param"
        assert tag.name == "name"
        assert tag.type == NameType(name="string")

        assert comments.parse_tag("@Private {string}").type is None

    def test_malformed_type_dropped_when_lenient(self, comments):
        assert comments.parse_tag("@param {function(...a} x") is None

    def test_malformed_type_raises_when_strict(self):
        with pytest.raises(TypeSyntaxError, match="Unclosed function signature"):
            Comments(strict=True).parse_tag("@param {function(...a} x")

    def test_missing_type(self, comments):
        assert comments.parse_tag("@param name").type is None
        assert Comments(strict=True).parse_tag("@param name") is None

    def test_closed_vocabulary(self, comments):
        assert comments.parse_tag("@frobnicate x").title == "frobnicate"
        assert Comments(closed_vocabulary=True).parse_tag("@frobnicate x") is None

    def test_description_inline_references(self, comments):
        tag = comments.parse_tag("@see {@link Foo}")
        assert tag.inline_tags[0].tag == "link"


class TestParseType:
    def test_optional_generic_union(self, comments):
        expected = OptionalType(
            expression=GenericType(
                name="Array",
                params=[
                    UnionType(
                        elements=[
                            NameType(name="String"),
                            NameType(name="Function"),
                            NameType(name="Array"),
                        ]
                    )
                ],
            )
        )
        assert comments.parse_type("Array<String|Function|Array>=") == expected
        assert parse_comments.parse_type("Array<String|Function|Array>=") == expected

    def test_record_through_package_api(self):
        assert parse_comments.parse_type("{a: number}") == RecordType(
            fields=[FieldType(key="a", value=NameType(name="number"))]
        )

    def test_union_of_records_through_package_api(self):
        node = parse_comments.parse_type("{a: number}|{b: string}")
        assert node == UnionType(
            elements=[
                RecordType(fields=[FieldType(key="a", value=NameType(name="number"))]),
                RecordType(fields=[FieldType(key="b", value=NameType(name="string"))]),
            ]
        )

    def test_unbalanced_function(self, comments):
        with pytest.raises(TypeSyntaxError):
            comments.parse_type("function(...a")

    def test_depth_limit_from_config(self):
        with pytest.raises(TypeSyntaxError):
            Comments(max_type_depth=2).parse_type("((a))")

    def test_rejects_non_string(self, comments):
        with pytest.raises(TypeError):
            comments.parse_type(None)

    def test_deeply_nested_signature_drops_only_the_tag(self, comments):
        literal = "function(" * 3000 + ")" * 3000
        assert comments.parse_tag("@param {" + literal + "} x") is None

        with pytest.raises(TypeSyntaxError):
            Comments(strict=True).parse_tag("@param {" + literal + "} x")


class TestBatchErrors:
    SOURCE = """/**
 * Broken.
 * @param {Array<} x
 */
function a() {}

/**
 * Fine.
 * @returns {string} ok
 */
function b() {}
"""

    def test_strict_batch_skips_failing_comment(self):
        comments = Comments(strict=True)

        parsed = comments.parse(self.SOURCE)

        assert [c.description for c in parsed] == ["Fine."]
        assert len(comments.errors) == 1
        assert isinstance(comments.errors[0], TypeSyntaxError)

    def test_lenient_batch_drops_only_the_tag(self):
        comments = Comments()

        broken, fine = comments.parse(self.SOURCE)

        assert broken.tags == []
        assert fine.tags[0].title == "returns"
        assert comments.errors == []


class TestHooks:
    def test_before_hook_uppercases_param_name(self, comments):
        observed = []
        comments.before("param", lambda tag: tag.model_copy(update={"name": tag.name.upper()}))
        comments.after("param", lambda tag: observed.append(tag.name))

        [comment] = comments.parse(single("@param {string} name The name"))

        assert comment.tags[0].name == "NAME"
        assert observed == ["NAME"]

    def test_before_hook_sees_unparsed_type(self, comments):
        seen = []
        comments.before("param", lambda tag: seen.append((tag.raw_type, tag.type)))

        comments.parse_tag("@param {string} x")

        assert seen == [("{string}", None)]

    def test_after_hook_on_comment(self, comments):
        comments.after("comment", lambda c: c.model_copy(update={"footer": "seen"}))
        assert comments.parse_comment("/** Text */").footer == "seen"

    def test_tag_middleware_replaces_core_handling(self, comments):
        comments.set("param", lambda tag: tag.model_copy(update={"description": "custom"}))

        tag = comments.parse_tag("@param {string} x text")

        assert tag.description == "custom"
        assert tag.type is None

    def test_comment_middleware(self, comments):
        comments.middleware("comment", lambda raw: Comment(raw=raw.raw, description="custom"))
        assert comments.parse_comment("/** Text */").description == "custom"

    def test_comment_middleware_may_return_dict(self, comments):
        comments.set("comment", lambda raw: {"description": "from dict"})
        assert comments.parse_comment("/** Text */").description == "from dict"

    def test_handlers_for_several_types(self, comments):
        seen = []
        comments.after(["param", "returns"], lambda tag: seen.append(tag.title))

        comments.parse(single("@param {a} b\n@returns {c}"))

        assert seen == ["param", "returns"]

    def test_run_returns_chain(self, comments):
        comments.before("comment", lambda c: c.model_copy(update={"description": "x"}))
        assert comments.run("before")(Comment()).description == "x"

    def test_non_callable_handler_is_fatal(self, comments, sample_js_code):
        comments.before("param", "not callable")

        with pytest.raises(HandlerTypeError) as exc_info:
            comments.parse(sample_js_code)

        assert exc_info.value.phase == "before"

    def test_registration_does_not_affect_running_parse(self, comments):
        seen = []

        def register_more(tag):
            comments.after("param", lambda t: seen.append("late"))

        comments.before("param", register_more)
        comments.parse(single("@param {a} b"))

        assert seen == []
        assert "param" in comments.pipeline.after


class TestPlugins:
    def test_plugin_registers_handlers(self, comments):
        def shout(instance):
            instance.after("returns", lambda tag: tag.model_copy(update={"description": tag.description.upper()}))

        comments.use(shout)

        assert comments.parse_tag("@returns {string} done").description == "DONE"
        assert comments.pipeline.plugins == (shout,)

    def test_plugin_may_return_pipeline(self, comments):
        comments.use(lambda instance: Pipeline().with_after("since", lambda tag: tag.model_copy(update={"description": "v2"})))
        assert comments.parse_tag("@since 1").description == "v2"

    def test_plugin_list_applied_in_order(self, comments):
        order = []
        comments.use([lambda c: order.append(1), lambda c: order.append(2)])
        assert order == [1, 2]

    def test_same_plugin_applied_twice(self, comments):
        calls = []
        plugin = calls.append
        comments.use(plugin).use(plugin)
        assert calls == [comments, comments]

    def test_non_callable_plugin(self, comments):
        with pytest.raises(HandlerTypeError):
            comments.use(42)


class TestCollaborators:
    def test_custom_extract(self):
        def extract(source, config):
            return [RawComment(raw=f"/** {source} */", value=f" {source} ")]

        [comment] = Comments(extract=extract).parse("hello")
        assert comment.description == "hello"

    def test_custom_is_valid(self):
        comments = Comments(is_valid=lambda raw: "keep" in raw.value)
        parsed = comments.parse("/** keep */\n/** drop */")
        assert [c.description for c in parsed] == ["keep"]

    def test_preprocess_copies(self, comments):
        raw = RawComment(raw="/** a */", value=" a ")
        copy = comments.preprocess(raw)
        assert copy == raw
        assert copy is not raw

    def test_is_valid_rejects_other_types(self, comments):
        with pytest.raises(TypeError):
            comments.is_valid("/** text */")

    def test_stage_overrides(self):
        comments = Comments(
            parse={
                "type": lambda literal, tag, config: NameType(name=literal.upper()),
                "paramType": lambda name, config: name.lstrip("$"),
            }
        )

        tag = comments.parse_tag("@param {string} $x")

        assert tag.type == NameType(name="STRING")
        assert tag.name == "x"

    def test_tag_override_wins_over_middleware(self):
        comments = Comments(parse={"tag": lambda raw, config: None})
        comments.set("param", lambda tag: tag)
        assert comments.parse_tag("@param {a} b") is None

    def test_registered_parser_replaces_stage(self, comments):
        comments.parser("paramType", lambda name, config: name.lstrip("$"))
        comments.parser("type", lambda literal, tag, config: NameType(name=literal.upper()))

        tag = comments.parse_tag("@param {string} $x")

        assert comments.parsers.keys() == {"param_type", "type"}
        assert tag.type == NameType(name="STRING")
        assert tag.name == "x"

    def test_configured_override_wins_over_registered_parser(self):
        comments = Comments(parse={"type": lambda literal, tag, config: NameType(name="cfg")})
        comments.parser("type", lambda literal, tag, config: NameType(name="registered"))
        assert comments.parse_type("string") == NameType(name="cfg")

    def test_parser_for_unknown_stage(self, comments):
        with pytest.raises(ConfigError, match="unknown parse override 'frobnicate'"):
            comments.parser("frobnicate", lambda text, config: text)

    def test_non_callable_parser(self, comments):
        with pytest.raises(HandlerTypeError):
            comments.parser("tag", "not a function")

    def test_tokens_are_recorded_per_parse(self, comments, sample_js_code):
        comments.parse(sample_js_code)
        assert [t.description for t in comments.tokens] == ["Adds two numbers.", "A point."]

        comments.parse(sample_js_code)
        assert len(comments.tokens) == 2
