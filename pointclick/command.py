"""Commands queued for execution by the application during a frame."""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, List

from .future import Future, Promise, continue_with

__all__ = ["Command", "CommandFunc", "CommandAsyncFunc", "CommandQueue"]


class Command(ABC):
    """An operation with side effects on the application.

    Implementations complete ``done`` when they finish.
    """

    @abstractmethod
    def execute(self, app: Any, done: Promise) -> None:
        """Run the command against ``app`` and complete ``done``."""


@dataclass(frozen=True)
class CommandFunc(Command):
    """A synchronous function used as a command.

    The function's return value completes the promise; an exception it
    raises fails the promise.
    """

    fn: Callable[[Any], Any]

    def execute(self, app: Any, done: Promise) -> None:
        try:
            value = self.fn(app)
        except Exception as exc:  # noqa: BLE001 - reported through the promise
            done.complete_with_error(exc)
        else:
            done.complete_with_value(value)


@dataclass(frozen=True)
class CommandAsyncFunc(Command):
    """A function returning a future, used as a command."""

    fn: Callable[[Any], Future]

    def execute(self, app: Any, done: Promise) -> None:
        done.bind(self.fn(app))


class CommandQueue:
    """Thread-safe queue of commands run by the application each frame."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._pending: List[Callable[[Any], None]] = []

    def push(self, command: Command) -> Future:
        """Queue ``command`` for the next frame and return its future."""
        promise = Promise()
        with self._lock:
            self._pending.append(lambda app: command.execute(app, promise))
        return promise

    def push_sequence(self, command: Command, *args: Command) -> Future:
        """Queue commands to run one after the other.

        Each command is queued only once the previous one has succeeded.
        """
        future = self.push(command)
        for following in args:
            future = continue_with(
                future, lambda _value, cmd=following: self.push(cmd)
            )
        return future

    def execute(self, app: Any) -> None:
        """Run all commands queued so far against ``app``."""
        with self._lock:
            pending, self._pending = self._pending, []
        for run in pending:
            run(app)