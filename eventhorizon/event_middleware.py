"""Event handler middleware that handles events in the background.

An event handler is any callable taking an event.
"""

from __future__ import annotations

import queue
import threading
from typing import Any, Callable, Optional

from eventhorizon.command_middleware import CancelScope
from eventhorizon.event import Event

EventHandler = Callable[[Event], None]
Middleware = Callable[[EventHandler], Callable[..., None]]

ERROR_QUEUE_SIZE = 20


class EventError(Exception):
    """A failure of an event handled in the background."""

    def __init__(self, error: Exception, scope: Optional[CancelScope], event: Event) -> None:
        super().__init__(f"{event}: {error}")
        self.error = error
        self.scope = scope
        self.event = event


def async_middleware() -> tuple[Middleware, "queue.Queue[EventError]"]:
    """Return a middleware handling events in a background thread, and its error queue."""
    errors: "queue.Queue[EventError]" = queue.Queue(maxsize=ERROR_QUEUE_SIZE)

    def middleware(handler: EventHandler) -> Callable[..., None]:
        def handle(event: Event, scope: Optional[CancelScope] = None) -> None:
            def run() -> None:
                try:
                    handler(event)
                except Exception as exc:
                    errors.put(EventError(exc, scope, event))

            threading.Thread(target=run, daemon=True).start()

        return handle

    return middleware, errors


__all__: Any = ["EventError", "async_middleware"]