"""Per-node-type handler pipeline.

A ``Pipeline`` is an immutable set of registrations. Every ``with_*`` call
returns a new pipeline layered over the previous one, so a parse that
started with one pipeline is unaffected by later registrations.

For a single node the order is: every ``before`` handler registered for
the node's type (registration order), then the ``middleware`` handler for
that type if there is one, otherwise the core handling, then every
``after`` handler. A handler returning None leaves the node unchanged.

Node types are ``"comment"`` for comments, the canonical title for tags
(``"param"``, ``"returns"``, ...) and ``"inline"`` for inline references.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType
from typing import Any

from loguru import logger

from .exceptions import HandlerTypeError
from .models import Comment, InlineReference, Tag

Handler = Callable[[Any], Any]
Plugin = Callable[[Any], Any]


class Phase(StrEnum):
    BEFORE = "before"
    MIDDLEWARE = "middleware"
    AFTER = "after"


def node_type(node: Any) -> str:
    """Key under which handlers for ``node`` are registered."""
    match node:
        case Comment():
            return "comment"
        case Tag():
            return node.title
        case InlineReference():
            return "inline"
    return getattr(node, "kind", type(node).__name__)


def _frozen(mapping: dict[str, Any]) -> Mapping[str, Any]:
    return MappingProxyType(mapping)


def _expand(
    types: str | Iterable[str] | Mapping[str, Handler], fn: Handler | None
) -> list[tuple[str, Handler | None]]:
    """Normalize the accepted registration shapes to (type, handler) pairs."""
    if isinstance(types, str):
        return [(types, fn)]
    if isinstance(types, Mapping):
        return list(types.items())
    return [(t, fn) for t in types]


@dataclass(frozen=True)
class Pipeline:
    """Registered middleware, before/after hooks and plugins."""

    middleware: Mapping[str, Handler] = field(default_factory=lambda: _frozen({}))
    before: Mapping[str, tuple[Handler, ...]] = field(
        default_factory=lambda: _frozen({})
    )
    after: Mapping[str, tuple[Handler, ...]] = field(
        default_factory=lambda: _frozen({})
    )
    plugins: tuple[Plugin, ...] = ()

    # ------------------------------------------------------------------
    # Registration (each returns a new pipeline)
    # ------------------------------------------------------------------

    def with_middleware(
        self, types: str | Iterable[str] | Mapping[str, Handler], fn: Handler | None = None
    ) -> Pipeline:
        """Replace the core handling for the given node type(s)."""
        middleware = dict(self.middleware)
        for key, handler in _expand(types, fn):
            if key in middleware:
                logger.debug(f"Replacing middleware for '{key}'")
            middleware[key] = handler
        return Pipeline(_frozen(middleware), self.before, self.after, self.plugins)

    def with_before(
        self, types: str | Iterable[str] | Mapping[str, Handler], fn: Handler | None = None
    ) -> Pipeline:
        """Append handler(s) run before the core handling of a node type."""
        return Pipeline(
            self.middleware,
            self._append(self.before, types, fn, Phase.BEFORE),
            self.after,
            self.plugins,
        )

    def with_after(
        self, types: str | Iterable[str] | Mapping[str, Handler], fn: Handler | None = None
    ) -> Pipeline:
        """Append handler(s) run after the core handling of a node type."""
        return Pipeline(
            self.middleware,
            self.before,
            self._append(self.after, types, fn, Phase.AFTER),
            self.plugins,
        )

    def with_plugin(self, plugin: Plugin) -> Pipeline:
        """Record an applied plugin."""
        return Pipeline(
            self.middleware, self.before, self.after, self.plugins + (plugin,)
        )

    @staticmethod
    def _append(
        table: Mapping[str, tuple[Handler, ...]],
        types: str | Iterable[str] | Mapping[str, Handler],
        fn: Handler | None,
        phase: Phase,
    ) -> Mapping[str, tuple[Handler, ...]]:
        updated = dict(table)
        for key, handler in _expand(types, fn):
            updated[key] = updated.get(key, ()) + (handler,)
            logger.debug(f"Registered {phase.value} handler for '{key}'")
        return _frozen(updated)

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    def run(self, phase: Phase | str) -> Callable[[Any], Any]:
        """Return a function running the ``before`` or ``after`` chain on a node.

        Args:
            phase: Either ``before`` or ``after``

        Returns:
            Function taking a node and returning the (possibly replaced) node
        """
        phase = Phase(phase)
        if phase is Phase.MIDDLEWARE:
            raise ValueError("run() takes 'before' or 'after'")
        table = self.before if phase is Phase.BEFORE else self.after

        def run_handlers(node: Any) -> Any:
            for fn in table.get(node_type(node), ()):
                node = self.invoke(fn, node, phase)
            return node

        return run_handlers

    def handle(self, node: Any, default: Callable[[Any], Any]) -> Any:
        """Run the full before / middleware-or-default / after chain.

        Returns None when ``default`` drops the node; the ``after`` chain is
        skipped in that case.
        """
        node = self.run(Phase.BEFORE)(node)

        fn = self.middleware.get(node_type(node))
        if fn is not None:
            node = self.invoke(fn, node, Phase.MIDDLEWARE)
        else:
            node = default(node)
            if node is None:
                return None

        return self.run(Phase.AFTER)(node)

    @staticmethod
    def invoke(fn: Handler, node: Any, phase: Phase) -> Any:
        """Call one handler, treating a None result as "unchanged"."""
        if not callable(fn):
            raise HandlerTypeError(
                f"expected {phase.value} handler for '{node_type(node)}' "
                f"to be a function, got {fn!r}",
                node=node,
                phase=phase.value,
            )
        result = fn(node)
        return node if result is None else result
