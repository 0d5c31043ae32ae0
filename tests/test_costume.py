import io

import pytest

from pointclick.anim import Animation
from pointclick.costume import Costume, costume_idle, costume_speak, costume_walk
from pointclick.encoding import read_string, write_string


class FakeSprites:
    def __init__(self, name):
        self.name = name

    def binary_encode(self, stream):
        return write_string(stream, self.name)

    def __eq__(self, other):
        return isinstance(other, FakeSprites) and other.name == self.name


def decode_sprites(stream):
    return FakeSprites(read_string(stream))


@pytest.mark.parametrize("direction", [0, 1, 2, 3])
def test_actions_keep_direction_bits(direction):
    for fn in (costume_idle, costume_speak, costume_walk):
        assert fn(direction) & 0x03 == direction


@pytest.mark.parametrize("direction", [0, 1, 2, 3])
def test_actions_are_distinct(direction):
    codes = {costume_idle(direction), costume_speak(direction), costume_walk(direction)}
    assert len(codes) == 3


def test_direction_is_masked():
    assert costume_walk(5) == costume_walk(1)
    assert costume_idle(0) == 0


def test_animation_lookup():
    anim = Animation().add_frames(0.1, 0, 1, 2)
    costume = Costume(FakeSprites("s")).with_animation(costume_idle(1), anim)
    assert costume.animation(costume_idle(1)) is anim
    assert costume.animation(costume_walk(1)) is None


def test_round_trip():
    costume = Costume(FakeSprites("hero"))
    costume.with_animation(costume_idle(0), Animation().add_frames(0.2, 0, 0))
    costume.with_animation(0x81, Animation().with_flip(True).add_frames(0.1, 3, 4, 5, 6))
    buf = io.BytesIO()
    n = costume.binary_encode(buf)
    assert n == len(buf.getvalue())

    buf.seek(0)
    decoded = Costume.binary_decode(buf, decode_sprites)
    assert decoded.sprites == FakeSprites("hero")
    assert decoded.animations == costume.animations


def test_count_follows_sprites():
    costume = Costume(FakeSprites("ab"))
    costume.with_animation(costume_idle(0), Animation())
    costume.with_animation(costume_speak(0), Animation())
    buf = io.BytesIO()
    costume.binary_encode(buf)
    raw = buf.getvalue()
    assert raw[:4] == b"\x02\x00ab"
    assert raw[4:8] == (2).to_bytes(4, "little")


def test_truncated_decode_fails():
    costume = Costume(FakeSprites("x")).with_animation(
        costume_walk(2), Animation().add_frames(0.1, 0, 1)
    )
    buf = io.BytesIO()
    costume.binary_encode(buf)
    truncated = io.BytesIO(buf.getvalue()[:-3])
    with pytest.raises(EOFError):
        Costume.binary_decode(truncated, decode_sprites)