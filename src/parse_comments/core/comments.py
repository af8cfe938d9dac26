"""Comment orchestrator: the entry point for parsing documentation comments."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from typing import Any

from loguru import logger

from ..config.settings import ParseOverrides, ParserConfig
from ..format import format_comment
from ..parsers.extract import extract_comments, is_valid_comment
from ..parsers.inline import parse_inline
from ..parsers.normalize import allows_type, normalize_tag, validate_tag
from ..parsers.tag import split_tag
from ..parsers.tokenize import tokenize
from ..parsers.types import parse_type
from .events import EventEmitter
from .exceptions import HandlerTypeError, ParseError, TypeSyntaxError
from .models import (
    Comment,
    CommentTokens,
    InlineReference,
    RawComment,
    Tag,
    TypeNode,
)
from .pipeline import Handler, Phase, Pipeline, Plugin
from .results import Outcome, settle


class Comments(EventEmitter):
    """Parse code comments into Comment nodes.

    Configuration is resolved once, at construction. Handlers and plugins
    registered afterwards build a new ``Pipeline``; each parse call works on
    the pipeline that was current when it started.

    Example:
        >>> comments = Comments(strict=True)
        >>> comments.before("param", lambda tag: tag.model_copy(update={"name": tag.name.upper()}))
        >>> nodes = comments.parse(source)

    Events:
        ``comment``: emitted with each finished Comment
    """

    def __init__(self, config: ParserConfig | None = None, **options: Any) -> None:
        """Create a parser.

        Args:
            config: Base configuration (defaults if omitted)
            **options: ParserConfig fields overriding ``config``
        """
        super().__init__()
        config = config or ParserConfig()
        self.config = config.with_options(**options) if options else config
        self.pipeline = Pipeline()
        self.parsers: dict[str, Callable[..., Any]] = {}
        self.comments: list[Comment] = []
        self.tokens: list[CommentTokens] = []
        self.errors: list[ParseError] = []

    # ------------------------------------------------------------------
    # Pipeline registration
    # ------------------------------------------------------------------

    def use(self, plugin: Plugin | list[Plugin] | tuple[Plugin, ...]) -> Comments:
        """Apply a plugin function (or a list of them) to this instance.

        The plugin is called immediately with the instance and may register
        handlers. If it returns a ``Pipeline``, that pipeline replaces the
        current one. Applying the same plugin twice applies it twice.
        """
        plugins = list(plugin) if isinstance(plugin, (list, tuple)) else [plugin]
        for fn in plugins:
            if not callable(fn):
                raise HandlerTypeError(
                    f"expected plugin to be a function, got {fn!r}", phase="use"
                )
            result = fn(self)
            if isinstance(result, Pipeline):
                self.pipeline = result
            self.pipeline = self.pipeline.with_plugin(fn)
        return self

    def parser(self, stage: str, fn: Callable[..., Any]) -> Comments:
        """Register a replacement for one built-in parsing stage.

        ``stage`` is a ParseOverrides field (``comment``, ``tags``, ``tag``,
        ``inline_tag``, ``type``, ``param_type``; camelCase accepted) and
        ``fn`` takes the same arguments as that override. Overrides given
        in the configuration take precedence over registered parsers.

        Raises:
            ConfigError: If ``stage`` is not a parsing stage
            HandlerTypeError: If ``fn`` is not callable
        """
        name = ParseOverrides.stage_name(stage)
        if not callable(fn):
            raise HandlerTypeError(
                f"expected parser for '{stage}' to be a function, got {fn!r}",
                phase="parser",
            )
        self.parsers[name] = fn
        return self

    def set(
        self, types: str | Iterable[str] | Mapping[str, Handler], fn: Handler | None = None
    ) -> Comments:
        """Register middleware replacing the core handling of a node type.

        ``comment`` middleware receives the RawComment and must produce the
        Comment; tag middleware (keyed by title) receives the split Tag
        instead of having its type parsed and validated.
        """
        self.pipeline = self.pipeline.with_middleware(types, fn)
        return self

    middleware = set

    def before(
        self, types: str | Iterable[str] | Mapping[str, Handler], fn: Handler | None = None
    ) -> Comments:
        """Register handler(s) run on a node before its core handling.

        Accepts a type and a handler, a list of types sharing one handler,
        or a mapping of type to handler.
        """
        self.pipeline = self.pipeline.with_before(types, fn)
        return self

    def after(
        self, types: str | Iterable[str] | Mapping[str, Handler], fn: Handler | None = None
    ) -> Comments:
        """Register handler(s) run on a node after its core handling."""
        self.pipeline = self.pipeline.with_after(types, fn)
        return self

    def run(self, phase: Phase | str) -> Callable[[Any], Any]:
        """Return a function running the current ``before``/``after`` chain."""
        return self.pipeline.run(phase)

    # ------------------------------------------------------------------
    # Collaborators
    # ------------------------------------------------------------------

    def extract(self, source: str) -> list[RawComment]:
        """Extract, filter and copy the comment blocks of ``source``."""
        if self.config.extract is not None:
            found = list(self.config.extract(source, self.config) or [])
        else:
            found = extract_comments(source)

        return [self.preprocess(c) for c in found if self.is_valid(c)]

    def is_valid(self, comment: RawComment) -> bool:
        """True if ``comment`` should be parsed.

        By default only ``/**`` blocks that are not lint directives are
        valid; protected blocks are dropped when ``protected`` is False.
        """
        if not isinstance(comment, RawComment):
            raise TypeError(
                f"expected comment to be a RawComment, got {type(comment).__name__}"
            )
        if self.config.is_valid is not None:
            return bool(self.config.is_valid(comment))
        return is_valid_comment(comment, protected=self.config.protected)

    def preprocess(self, comment: RawComment) -> RawComment:
        """Copy a block so parsing never aliases caller-held structures."""
        if self.config.preprocess is not None:
            return self.config.preprocess(comment, self.config)
        return comment.model_copy(deep=True)

    def tokenize(self, body: str) -> CommentTokens:
        """Split a comment body into description, tag lines, examples and footer."""
        return tokenize(body, strip_stars=self.config.strip_stars)

    # ------------------------------------------------------------------
    # Parsing
    # ------------------------------------------------------------------

    def parse(self, source: str) -> list[Comment]:
        """Extract and parse every documentation comment in ``source``.

        A comment that raises ParseError (strict mode) is skipped and its
        error recorded in ``errors``; the remaining comments still parse.

        Args:
            source: JavaScript source text

        Returns:
            Parsed comments in source order
        """
        self.errors = []
        self.tokens = []
        parsed = []
        for raw in self.extract(str(source)):
            try:
                parsed.append(self.parse_comment(raw))
            except ParseError as e:
                line = raw.loc.start_line if raw.loc else "?"
                logger.warning(f"Skipping comment at line {line}: {e}")
                self.errors.append(e)

        self.comments = parsed
        return parsed

    def parse_comment(self, comment: RawComment | str) -> Comment:
        """Parse a single comment block.

        Args:
            comment: Extracted block, or comment text

        Returns:
            The finished Comment, after hooks and optional formatting

        Raises:
            ParseError: In strict mode, when a tag or type is malformed
            HandlerTypeError: When a registered handler is not callable
        """
        pipeline = self.pipeline
        if isinstance(comment, str):
            comment = self._coerce_raw(comment)

        override = self._override("comment")
        if override is not None:
            node = override(comment, self.config)
        elif "comment" in pipeline.middleware:
            node = pipeline.invoke(
                pipeline.middleware["comment"], comment, Phase.MIDDLEWARE
            )
        else:
            node = self._parse_comment(comment, pipeline)

        if not isinstance(node, Comment):
            node = Comment.model_validate(node)

        if node.description:
            node.description, node.inline_tags = self.parse_inline(node.description)

        node = pipeline.run(Phase.BEFORE)(node)
        node = pipeline.run(Phase.AFTER)(node)

        if self.config.format:
            node = format_comment(node)

        self.emit("comment", node)
        return node

    def parse_tags(self, tokens: CommentTokens) -> list[Tag]:
        """Parse every raw tag line of a tokenized comment, dropping failures."""
        return self._parse_tags(tokens, self.pipeline)

    def parse_tag(self, raw: str) -> Tag | None:
        """Parse one tag line such as ``@param {String} name The name``.

        Returns:
            The Tag, or None if it was malformed (non-strict) or rejected

        Raises:
            TagSyntaxError, TypeSyntaxError: In strict mode
        """
        return self._parse_tag(raw, self.pipeline)

    def parse_type(self, literal: str, tag: Tag | None = None) -> TypeNode:
        """Parse a type literal (without its braces) into a type AST.

        Raises:
            TypeSyntaxError: If the literal is malformed
        """
        if not isinstance(literal, str):
            raise TypeError(f"expected a string, got {type(literal).__name__}")
        override = self._override("type")
        if override is not None:
            return override(literal, tag, self.config)
        return parse_type(literal, max_depth=self.config.max_type_depth)

    def parse_param_type(self, name: str) -> str:
        """Hook for the documented name of name-taking tags; identity by default."""
        if not isinstance(name, str):
            raise TypeError(f"expected a string, got {type(name).__name__}")
        override = self._override("param_type")
        if override is not None:
            return override(name, self.config)
        return name

    def parse_inline(self, text: str) -> tuple[str, list[InlineReference]]:
        """Find ``{@tag value}`` references in description text."""
        if not isinstance(text, str):
            raise TypeError(f"expected a string, got {type(text).__name__}")
        override = self._override("inline_tag")
        if override is not None:
            return override(text, self.config)
        return parse_inline(text, strip=self.config.strip_inline)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _coerce_raw(self, text: str) -> RawComment:
        extracted = self.extract(text)
        if extracted:
            return extracted[0]
        return RawComment(raw=text, value=text)

    def _parse_comment(self, raw: RawComment, pipeline: Pipeline) -> Comment:
        tokens = self.tokenize(raw.value)
        self.tokens.append(tokens)
        return Comment(
            raw=raw.raw,
            description=tokens.description,
            footer=tokens.footer,
            tags=self._parse_tags(tokens, pipeline),
            examples=tokens.examples,
            code=raw.code.model_copy() if raw.code is not None else None,
            loc=raw.loc,
        )

    def _parse_tags(self, tokens: CommentTokens, pipeline: Pipeline) -> list[Tag]:
        override = self._override("tags")
        if override is not None:
            return list(override(tokens, self.config))

        tags = []
        for raw in tokens.tags:
            tag = self._parse_tag(raw, pipeline)
            if tag is not None:
                tags.append(tag)
        return tags

    def _parse_tag(self, raw: str, pipeline: Pipeline) -> Tag | None:
        override = self._override("tag")
        if override is not None:
            return override(raw, self.config)

        tag = self._settle(split_tag(raw))
        if tag is None:
            return None
        return pipeline.handle(tag, lambda node: self._settle(self._process_tag(node)))

    def _process_tag(self, tag: Tag) -> Outcome[Tag]:
        """Core handling of a split tag: type, name, normalization, validation."""
        if tag.raw_type is not None and allows_type(tag.title):
            try:
                tag.type = self.parse_type(tag.raw_type[1:-1], tag)
            except TypeSyntaxError as e:
                return Outcome.fail(e)

        if tag.name is not None:
            tag.name = self.parse_param_type(tag.name)

        outcome = validate_tag(normalize_tag(tag, self.config), self.config)
        if not outcome.is_ok:
            return outcome

        if tag.description:
            tag.description, tag.inline_tags = self.parse_inline(tag.description)
        return outcome

    def _override(self, stage: str) -> Callable[..., Any] | None:
        configured = getattr(self.config.parse, stage)
        return configured if configured is not None else self.parsers.get(stage)

    def _settle(self, outcome: Outcome[Tag]) -> Tag | None:
        return settle(outcome, self.config.strict)
