"""Futures and promises used to track asynchronous game actions."""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from typing import Any, Callable, Optional

__all__ = [
    "BrokenPromiseError",
    "Future",
    "Promise",
    "already_succeeded",
    "already_failed",
    "continue_with",
    "future_map",
    "ignore_error",
    "recover",
    "recover_with_value",
]


class BrokenPromiseError(Exception):
    """Raised by a future whose promise was broken before completion."""

    def __init__(self, message: str = "broken promise") -> None:
        super().__init__(message)


class Future(ABC):
    """A value that becomes available at some later point."""

    @abstractmethod
    def wait(self, timeout: Optional[float] = None) -> Any:
        """Block until completed, then return the value or raise the error.

        Raises TimeoutError if the timeout expires first.
        """

    @abstractmethod
    def is_completed(self) -> bool:
        """Return True once the future has a value or an error."""


class _Succeeded(Future):
    def __init__(self, value: Any) -> None:
        self._value = value

    def wait(self, timeout: Optional[float] = None) -> Any:
        return self._value

    def is_completed(self) -> bool:
        return True


class _Failed(Future):
    def __init__(self, error: BaseException) -> None:
        self._error = error

    def wait(self, timeout: Optional[float] = None) -> Any:
        raise self._error

    def is_completed(self) -> bool:
        return True


def already_succeeded(value: Any) -> Future:
    """Return a future already completed with ``value``."""
    return _Succeeded(value)


def already_failed(error: BaseException) -> Future:
    """Return a future already failed with ``error``."""
    return _Failed(error)


class Promise(Future):
    """A future that is completed explicitly by its producer."""

    def __init__(self) -> None:
        self._event = threading.Event()
        self._lock = threading.Lock()
        self._value: Any = None
        self._error: Optional[BaseException] = None

    def wait(self, timeout: Optional[float] = None) -> Any:
        if not self._event.wait(timeout):
            raise TimeoutError("promise not completed in time")
        if self._error is not None:
            raise self._error
        return self._value

    def is_completed(self) -> bool:
        return self._event.is_set()

    def complete(self) -> None:
        """Complete with no value and no error."""
        self.complete_with(None, None)

    def complete_with(self, value: Any, error: Optional[BaseException]) -> None:
        """Complete with the given value and error."""
        with self._lock:
            if self._event.is_set():
                raise RuntimeError("promise already completed")
            self._value = value
            self._error = error
            self._event.set()

    def complete_with_value(self, value: Any) -> None:
        """Complete successfully with ``value``."""
        self.complete_with(value, None)

    def complete_with_error(self, error: BaseException) -> None:
        """Complete with ``error``."""
        self.complete_with(None, error)

    def bind(self, other: Future) -> None:
        """Complete this promise with the outcome of ``other`` once it completes."""

        def run() -> None:
            try:
                value = other.wait()
            except Exception as exc:  # noqa: BLE001 - errors are forwarded
                self.complete_with_error(exc)
            else:
                self.complete_with_value(value)

        _spawn(run)

    def break_promise(self) -> None:
        """Fail the promise with a BrokenPromiseError."""
        self.complete_with_error(BrokenPromiseError())

    def complete_after(self, value: Any, delay: float) -> None:
        """Complete with ``value`` after ``delay`` seconds."""
        if delay == 0:
            self.complete_with_value(value)
            return
        timer = threading.Timer(delay, self.complete_with_value, args=(value,))
        timer.daemon = True
        timer.start()


def _spawn(target: Callable[[], None]) -> None:
    threading.Thread(target=target, daemon=True).start()


def continue_with(future: Optional[Future], fn: Callable[[Any], Future]) -> Future:
    """Wait for ``future`` and then return the outcome of ``fn(value)``.

    If ``future`` is None, ``fn(None)`` is returned directly. If ``future``
    fails, the result fails with the same error and ``fn`` is not called.
    """
    if future is None:
        return fn(None)

    promise = Promise()

    def run() -> None:
        try:
            value = future.wait()
        except Exception as exc:  # noqa: BLE001
            promise.complete_with_error(exc)
            return
        try:
            value = fn(value).wait()
        except Exception as exc:  # noqa: BLE001
            promise.complete_with_error(exc)
        else:
            promise.complete_with_value(value)

    _spawn(run)
    return promise


def future_map(future: Optional[Future], fn: Callable[[Any], Any]) -> Future:
    """Map the value of ``future`` through ``fn``; errors pass through."""
    return continue_with(future, lambda value: already_succeeded(fn(value)))


def recover(future: Future, fn: Callable[[BaseException], Future]) -> Future:
    """If ``future`` fails, return the outcome of ``fn(error)`` instead."""
    promise = Promise()

    def run() -> None:
        try:
            value = future.wait()
        except Exception as exc:  # noqa: BLE001
            try:
                value = fn(exc).wait()
            except Exception as inner:  # noqa: BLE001
                promise.complete_with_error(inner)
                return
        promise.complete_with_value(value)

    _spawn(run)
    return promise


def recover_with_value(future: Future, fn: Callable[[BaseException], Any]) -> Future:
    """If ``future`` fails, succeed with ``fn(error)`` instead."""
    return recover(future, lambda error: already_succeeded(fn(error)))


def ignore_error(future: Future, value: Any) -> Future:
    """Replace any error of ``future`` with ``value``."""
    return recover_with_value(future, lambda _error: value)