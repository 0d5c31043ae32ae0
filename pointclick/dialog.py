"""Colours and on-screen dialog lines."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Tuple

from .future import Future, Promise

__all__ = [
    "Color",
    "BLANK",
    "BLACK",
    "BLUE",
    "GREEN",
    "CYAN",
    "RED",
    "MAGENTA",
    "BROWN",
    "LIGHT_GRAY",
    "DARK_GRAY",
    "BRIGHT_BLUE",
    "BRIGHT_GREEN",
    "BRIGHT_CYAN",
    "BRIGHT_RED",
    "BRIGHT_MAGENTA",
    "YELLOW",
    "WHITE",
    "BRIGHT_GREY",
    "LETTERS_PER_SECOND",
    "DEFAULT_DIALOG_COLOR",
    "DEFAULT_DIALOG_POSITION",
    "Dialog",
]


@dataclass(frozen=True)
class Color:
    """An RGBA colour."""

    r: int
    g: int
    b: int
    a: int = 0xFF


BLANK = Color(0, 0, 0, 0)

# Colours from the EGA palette.
BLACK = Color(0x00, 0x00, 0x00)
BLUE = Color(0x00, 0x00, 0xAA)
GREEN = Color(0x00, 0xAA, 0x00)
CYAN = Color(0x00, 0xAA, 0xAA)
RED = Color(0xAA, 0x00, 0x00)
MAGENTA = Color(0xAA, 0x00, 0xAA)
BROWN = Color(0xAA, 0x55, 0x00)
LIGHT_GRAY = Color(0xAA, 0xAA, 0xAA)
DARK_GRAY = Color(0x55, 0x55, 0x55)
BRIGHT_BLUE = Color(0x55, 0x55, 0xFF)
BRIGHT_GREEN = Color(0x55, 0xFF, 0x55)
BRIGHT_CYAN = Color(0x55, 0xFF, 0xFF)
BRIGHT_RED = Color(0xFF, 0x55, 0x55)
BRIGHT_MAGENTA = Color(0xFF, 0x55, 0xFF)
YELLOW = Color(0xFF, 0xFF, 0x55)
WHITE = Color(0xFF, 0xFF, 0xFF)
BRIGHT_GREY = Color(0xAA, 0xAA, 0xAA)

LETTERS_PER_SECOND = 10
"""Letters an adult reads comfortably per second."""

DEFAULT_DIALOG_COLOR = MAGENTA
DEFAULT_DIALOG_POSITION: Tuple[int, int] = (160, 20)

_MIN_DURATION = 2


@dataclass(eq=False)
class Dialog:
    """A line of text shown on screen for a time based on its length.

    A blank colour is replaced by the default dialog colour, and a zero
    speed by 1.
    """

    actor: Any
    text: str
    position: Tuple[int, int] = DEFAULT_DIALOG_POSITION
    color: Color = BLANK
    speed: float = 1.0
    bounds: Any = None
    _done: Optional[Promise] = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.color == BLANK:
            self.color = DEFAULT_DIALOG_COLOR
        if self.speed == 0:
            self.speed = 1.0

    def set_bounds(self, bounds: Any) -> None:
        """Set the rectangle the dialog text must stay within."""
        self.bounds = bounds

    def duration(self) -> float:
        """Seconds the dialog stays on screen.

        One second per ten letters, at least two, divided by the whole part
        of the speed. Raises ValueError if that whole part is zero.
        """
        divisor = int(self.speed)
        if divisor == 0:
            raise ValueError(f"dialog speed too low: {self.speed}")
        seconds = max(len(self.text) // LETTERS_PER_SECOND, _MIN_DURATION)
        return seconds / divisor

    def begin(self) -> Future:
        """Start the timer that completes the dialog and return its future."""
        duration = self.duration()
        self._done = Promise()
        self._done.complete_after(None, duration)
        return self._done

    def done(self) -> Optional[Future]:
        """Return the future completed when the dialog ends, or None before begin."""
        return self._done

    def is_visible(self) -> bool:
        """Return True until the dialog has been completed."""
        return self._done is None or not self._done.is_completed()