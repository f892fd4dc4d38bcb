"""Command handler middleware: background handling, scheduling and validation.

A command handler is any callable taking a command. A middleware takes a
handler and returns a new handler; the handlers returned here also accept an
optional ``scope`` that can cancel pending work.
"""

from __future__ import annotations

import queue
import threading
import time
from concurrent.futures import CancelledError
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Optional

CommandHandler = Callable[[Any], None]
Middleware = Callable[[CommandHandler], Callable[..., None]]

ERROR_QUEUE_SIZE = 20

_CANCELED = "context canceled"
_DEADLINE_EXCEEDED = "context deadline exceeded"


class CancelScope:
    """A cancellation signal with an optional deadline, in seconds from creation."""

    def __init__(self, timeout: Optional[float] = None) -> None:
        self._done = threading.Event()
        self._lock = threading.Lock()
        self._reason: Optional[str] = None
        self._deadline = None if timeout is None else time.monotonic() + timeout

    def _finish(self, reason: str) -> None:
        with self._lock:
            if self._reason is None:
                self._reason = reason
                self._done.set()

    def _expire_if_due(self) -> None:
        if self._deadline is not None and time.monotonic() >= self._deadline:
            self._finish(_DEADLINE_EXCEEDED)

    def cancel(self) -> None:
        """Cancel the scope; has no effect once it is already done."""
        self._finish(_CANCELED)

    @property
    def done(self) -> bool:
        """Whether the scope was cancelled or its deadline has passed."""
        self._expire_if_due()
        return self._done.is_set()

    @property
    def error(self) -> Optional[Exception]:
        """The reason the scope is done, as an exception, or None."""
        self._expire_if_due()
        if self._reason == _CANCELED:
            return CancelledError(_CANCELED)
        if self._reason == _DEADLINE_EXCEEDED:
            return TimeoutError(_DEADLINE_EXCEEDED)
        return None

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until the scope is done or timeout passes; return whether it is done."""
        if self._deadline is None:
            return self._done.wait(timeout)
        remaining = max(self._deadline - time.monotonic(), 0.0)
        limit = remaining if timeout is None else min(timeout, remaining)
        self._done.wait(max(limit, 0.0))
        self._expire_if_due()
        return self._done.is_set()


class CommandError(Exception):
    """A failure of a command handled in the background."""

    def __init__(self, error: Exception, scope: Optional[CancelScope], command: Any) -> None:
        super().__init__(f"{command.command_type} ({command.aggregate_id}): {error}")
        self.error = error
        self.scope = scope
        self.command = command


class _Wrapper:
    """Delegates unknown attributes to the wrapped command."""

    command: Any

    def __getattr__(self, name: str) -> Any:
        if name == "command" or name.startswith("__"):
            raise AttributeError(name)
        return getattr(self.command, name)


@dataclass(frozen=True, eq=False)
class ScheduledCommand(_Wrapper):
    """A command that should be handled at a given time."""

    command: Any
    execute_at: Optional[datetime] = None


@dataclass(frozen=True, eq=False)
class ValidatedCommand(_Wrapper):
    """A command carrying its own validation; validate raises when invalid."""

    command: Any
    validator: Callable[[], None]

    def validate(self) -> None:
        """Run the validation, raising on an invalid command."""
        self.validator()


def async_middleware() -> tuple[Middleware, "queue.Queue[CommandError]"]:
    """Return a middleware handling commands in a background thread, and its error queue."""
    errors: "queue.Queue[CommandError]" = queue.Queue(maxsize=ERROR_QUEUE_SIZE)

    def middleware(handler: CommandHandler) -> Callable[..., None]:
        def handle(command: Any, scope: Optional[CancelScope] = None) -> None:
            def run() -> None:
                try:
                    handler(command)
                except Exception as exc:
                    errors.put(CommandError(exc, scope, command))

            threading.Thread(target=run, daemon=True).start()

        return handle

    return middleware, errors


def _delay_until(execute_at: datetime) -> float:
    now = datetime.now(execute_at.tzinfo)
    return max((execute_at - now).total_seconds(), 0.0)


def scheduler_middleware() -> tuple[Middleware, "queue.Queue[CommandError]"]:
    """Return a middleware delaying commands that carry an execution time, and its error queue."""
    errors: "queue.Queue[CommandError]" = queue.Queue(maxsize=ERROR_QUEUE_SIZE)

    def middleware(handler: CommandHandler) -> Callable[..., None]:
        def handle(command: Any, scope: Optional[CancelScope] = None) -> None:
            execute_at = getattr(command, "execute_at", None)
            if not isinstance(execute_at, datetime):
                handler(command)
                return

            def run() -> None:
                delay = _delay_until(execute_at)
                try:
                    if scope is not None:
                        if scope.wait(delay):
                            raise scope.error
                    else:
                        time.sleep(delay)
                    handler(command)
                except Exception as exc:
                    errors.put(CommandError(exc, scope, command))

            threading.Thread(target=run, daemon=True).start()

        return handle

    return middleware, errors


def command_with_execute_time(command: Any, execute_at: Optional[datetime]) -> ScheduledCommand:
    """Wrap a command with the time it should be handled at; None means now."""
    return ScheduledCommand(command, execute_at)


def validation_middleware() -> Middleware:
    """Return a middleware that validates commands having a validate method."""

    def middleware(handler: CommandHandler) -> Callable[..., None]:
        def handle(command: Any, scope: Optional[CancelScope] = None) -> None:
            validate = getattr(command, "validate", None)
            if callable(validate):
                validate()
            handler(command)

        return handle

    return middleware


def command_with_validation(command: Any, validate: Callable[[], None]) -> ValidatedCommand:
    """Wrap a command with a validation callable that raises when invalid."""
    return ValidatedCommand(command, validate)