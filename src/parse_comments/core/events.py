"""Synchronous lifecycle notifications."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Callable
from typing import Any

from loguru import logger

Listener = Callable[..., Any]


class EventEmitter:
    """Minimal observer registry; listeners run in registration order.

    Example:
        >>> emitter = EventEmitter()
        >>> seen = []
        >>> _ = emitter.on("comment", seen.append)
        >>> emitter.emit("comment", "node")
        1
        >>> seen
        ['node']
    """

    def __init__(self) -> None:
        self._listeners: dict[str, list[Listener]] = defaultdict(list)

    def on(self, event: str, listener: Listener) -> EventEmitter:
        """Register a listener for ``event``."""
        if not callable(listener):
            raise TypeError(f"listener for '{event}' must be callable")
        self._listeners[event].append(listener)
        logger.debug(f"Registered listener for '{event}' event")
        return self

    def off(self, event: str, listener: Listener) -> EventEmitter:
        """Remove a previously registered listener, if present."""
        listeners = self._listeners.get(event, [])
        if listener in listeners:
            listeners.remove(listener)
        return self

    def listeners(self, event: str) -> list[Listener]:
        return list(self._listeners.get(event, []))

    def emit(self, event: str, *args: Any) -> int:
        """Call every listener for ``event``; returns how many were called."""
        listeners = self.listeners(event)
        for listener in listeners:
            listener(*args)
        return len(listeners)
