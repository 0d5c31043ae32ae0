"""Sprite-sheet animations made of timed frames."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import BinaryIO, List, Optional

from .encoding import read_values, write_values

__all__ = ["DEFAULT_ANIMATION_DELAY", "AnimationFrame", "Animation"]

DEFAULT_ANIMATION_DELAY = 0.1

_NANOS = 1_000_000_000


@dataclass(frozen=True)
class AnimationFrame:
    """One frame: a cell of the sprite sheet and how long it is shown (seconds)."""

    col: int
    row: int
    delay: float


@dataclass
class Animation:
    """A sequence of sprite-sheet frames played in a loop."""

    frames: List[AnimationFrame] = field(default_factory=list)
    flip: bool = False
    current_frame: int = field(default=0, compare=False, repr=False)
    _last_frame: Optional[float] = field(default=None, compare=False, repr=False)

    def add_frames(self, delay: float, row: int, *args: int) -> "Animation":
        """Append one frame per column in ``args``, all on sheet row ``row``."""
        self.frames.extend(AnimationFrame(col, row, delay) for col in args)
        return self

    def with_flip(self, flip: bool) -> "Animation":
        """Set whether the frames are drawn mirrored."""
        self.flip = flip
        return self

    def tick(self, now: Optional[float] = None) -> AnimationFrame:
        """Advance the animation to time ``now`` and return the frame to show.

        The frame moves forward once the current frame's delay has elapsed
        since the last change, wrapping around at the end.
        """
        if not self.frames:
            raise ValueError("animation has no frames")
        if now is None:
            now = time.monotonic()
        delay = self.frames[self.current_frame].delay
        if self._last_frame is None or delay < now - self._last_frame:
            self._last_frame = now
            self.current_frame = (self.current_frame + 1) % len(self.frames)
        return self.frames[self.current_frame]

    def binary_encode(self, stream: BinaryIO) -> int:
        """Write the flip flag, frame count and frames; return bytes written."""
        n = write_values(stream, "?I", self.flip, len(self.frames))
        for frame in self.frames:
            n += write_values(
                stream, "BBQ", frame.col, frame.row, round(frame.delay * _NANOS)
            )
        return n

    @classmethod
    def binary_decode(cls, stream: BinaryIO) -> "Animation":
        """Read an animation written by :meth:`binary_encode`."""
        flip, count = read_values(stream, "?I")
        frames = []
        for _ in range(count):
            col, row, delay = read_values(stream, "BBQ")
            frames.append(AnimationFrame(col, row, delay / _NANOS))
        return cls(frames=frames, flip=bool(flip))