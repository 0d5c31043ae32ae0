"""Costumes: a sprite sheet plus the animations played for each action."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, BinaryIO, Callable, Dict, Optional

from .anim import Animation
from .encoding import read_values, write_values

__all__ = ["costume_idle", "costume_speak", "costume_walk", "Costume"]

_IDLE = 0
_SPEAK = 1
_WALK = 2


def _action(kind: int, direction: int) -> int:
    return (kind << 2) | (int(direction) & 0x03)


def costume_idle(direction: int) -> int:
    """Return the costume action for standing idle in ``direction``."""
    return _action(_IDLE, direction)


def costume_speak(direction: int) -> int:
    """Return the costume action for speaking in ``direction``."""
    return _action(_SPEAK, direction)


def costume_walk(direction: int) -> int:
    """Return the costume action for walking in ``direction``."""
    return _action(_WALK, direction)


@dataclass
class Costume:
    """Animations of an actor or room element, keyed by action code.

    Predefined actions come from :func:`costume_idle`, :func:`costume_speak`
    and :func:`costume_walk`; custom actions use codes above 0x80.
    """

    sprites: Any
    animations: Dict[int, Animation] = field(default_factory=dict)

    def with_animation(self, action: int, animation: Animation) -> "Costume":
        """Set the animation played for ``action``."""
        self.animations[action] = animation
        return self

    def animation(self, action: int) -> Optional[Animation]:
        """Return the animation for ``action``, or None if there is none."""
        return self.animations.get(action)

    def binary_encode(self, stream: BinaryIO) -> int:
        """Write the sprite sheet, the animation count and each (action, animation)."""
        n = self.sprites.binary_encode(stream)
        n += write_values(stream, "I", len(self.animations))
        for action, anim in self.animations.items():
            n += write_values(stream, "B", action)
            n += anim.binary_encode(stream)
        return n

    @classmethod
    def binary_decode(
        cls, stream: BinaryIO, sprites_decoder: Callable[[BinaryIO], Any]
    ) -> "Costume":
        """Read a costume; ``sprites_decoder`` reads the sprite sheet from the stream."""
        sprites = sprites_decoder(stream)
        (count,) = read_values(stream, "I")
        animations: Dict[int, Animation] = {}
        for _ in range(count):
            (action,) = read_values(stream, "B")
            animations[action] = Animation.binary_decode(stream)
        return cls(sprites, animations)