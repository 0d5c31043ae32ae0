import io

import pytest

from pointclick.anim import DEFAULT_ANIMATION_DELAY, Animation, AnimationFrame


def _walk_animation():
    return (
        Animation()
        .with_flip(True)
        .add_frames(0.1, 2, 0, 1, 2)
        .add_frames(0.25, 3, 4)
    )


def test_add_frames_order():
    anim = _walk_animation()
    assert [(f.col, f.row) for f in anim.frames] == [(0, 2), (1, 2), (2, 2), (4, 3)]
    assert anim.frames[3].delay == 0.25
    assert anim.flip is True


def test_binary_round_trip():
    anim = _walk_animation()
    buf = io.BytesIO()
    n = anim.binary_encode(buf)
    assert n == len(buf.getvalue())
    buf.seek(0)
    decoded = Animation.binary_decode(buf)
    assert decoded == anim


def test_binary_wire_format():
    anim = Animation().with_flip(True).add_frames(DEFAULT_ANIMATION_DELAY, 2, 3)
    buf = io.BytesIO()
    anim.binary_encode(buf)
    assert buf.getvalue() == (
        b"\x01" + b"\x01\x00\x00\x00" + b"\x03\x02" + b"\x00\xe1\xf5\x05\x00\x00\x00\x00"
    )


def test_empty_round_trip():
    buf = io.BytesIO()
    Animation().binary_encode(buf)
    buf.seek(0)
    assert Animation.binary_decode(buf) == Animation()


def test_decode_truncated():
    buf = io.BytesIO()
    _walk_animation().binary_encode(buf)
    with pytest.raises(EOFError):
        Animation.binary_decode(io.BytesIO(buf.getvalue()[:-3]))


def test_tick_advances_on_first_call_and_waits_for_delay():
    anim = _walk_animation()
    assert anim.tick(now=100.0) == anim.frames[1]
    assert anim.tick(now=100.05) == anim.frames[1]
    assert anim.tick(now=100.2) == anim.frames[2]


def test_tick_wraps_around():
    anim = _walk_animation()
    seen = [anim.tick(now=float(t)) for t in range(1, 9)]
    assert seen[3] == anim.frames[0]
    assert seen[:4] == seen[4:]


def test_tick_single_frame_stays():
    anim = Animation().add_frames(0.1, 0, 5)
    assert anim.tick(now=1.0) == AnimationFrame(5, 0, 0.1)
    assert anim.tick(now=5.0) == AnimationFrame(5, 0, 0.1)


def test_tick_without_frames():
    with pytest.raises(ValueError):
        Animation().tick(now=1.0)