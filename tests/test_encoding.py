import gzip
import io
import struct

import pytest

from pointclick.encoding import (
    RESOURCE_FORMAT_VERSION,
    IndexEntry,
    ResourceCompression,
    ResourceEncoder,
    ResourceError,
    ResourceFileLoader,
    ResourceHeader,
    ResourceType,
    read_string,
    read_values,
    write_string,
    write_values,
)

CODE = b"print('Hello, world!')"


class _LuaScript:
    def __init__(self, code: bytes) -> None:
        self.code = code

    def binary_encode(self, stream) -> int:
        n = write_values(stream, "BI", 1, len(self.code))
        stream.write(self.code)
        return n + len(self.code)


def _script_bytes(code: bytes) -> bytes:
    return b"\x01" + struct.pack("<I", len(code)) + code


def _encode_hello(compression):
    idx = io.BytesIO()
    dat = io.BytesIO()
    enc = ResourceEncoder(idx, dat)
    enc.encode_script("hello", _LuaScript(CODE), compression)
    return enc, idx.getvalue(), dat.getvalue()


def test_binary_encode_decode():
    buf = io.BytesIO()
    n = write_string(buf, "foo/bar") + write_values(buf, "Q", 42)
    assert n > 0
    buf.seek(0)
    assert read_string(buf) == "foo/bar"
    assert read_values(buf, "Q") == (42,)


def test_resource_encoder_empty():
    idx = io.BytesIO()
    dat = io.BytesIO()
    ResourceEncoder(idx, dat)
    idx_bytes = idx.getvalue()
    dat_bytes = dat.getvalue()

    assert idx_bytes[0:8] == b"PCTK:IDX"
    assert idx_bytes[8] == RESOURCE_FORMAT_VERSION & 0x00FF
    assert idx_bytes[9] == (RESOURCE_FORMAT_VERSION & 0xFF00) >> 8
    assert len(idx_bytes) == 10

    assert dat_bytes[0:8] == b"PCTK:DAT"
    assert dat_bytes[8] == RESOURCE_FORMAT_VERSION & 0x00FF
    assert dat_bytes[9] == (RESOURCE_FORMAT_VERSION & 0xFF00) >> 8
    assert len(dat_bytes) == 10


def test_resource_encoder_encode_resource():
    enc, idx, dat = _encode_hello(ResourceCompression.NONE)

    assert idx[0x0A:0x11] == b"\x05\x00hello"
    assert struct.unpack("<I", idx[0x11:0x15])[0] == 0x0A
    assert struct.unpack("<I", idx[0x15:0x19])[0] == 43

    expected = bytes(
        [
            0x04,
            0x00,
            0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00,
            0x00, 0x00, 0x00, 0x00, 0x00, 0x00,
            0x01,
            0x16, 0x00, 0x00, 0x00,
        ]
    ) + CODE
    assert dat[10:] == expected
    assert enc.data_bytes_written() == 10 + 43


def test_resource_encoder_encode_resource_with_gzip():
    enc, idx, dat = _encode_hello(ResourceCompression.GZIP)

    assert idx[0x0A:0x11] == b"\x05\x00hello"
    assert struct.unpack("<I", idx[0x11:0x15])[0] == 0x0A
    size = struct.unpack("<I", idx[0x15:0x19])[0]
    assert size == len(dat) - 10
    assert enc.data_bytes_written() == len(dat)

    assert dat[0x0A] == 0x04
    assert dat[0x0B] == 0x01
    assert dat[0x0C:0x1A] == bytes(14)
    assert gzip.decompress(dat[0x1A:]) == _script_bytes(CODE)


def test_index_entry_round_trip():
    buf = io.BytesIO()
    entry = IndexEntry("scripts/boot", 10, 99)
    n = entry.binary_encode(buf)
    assert n == len(buf.getvalue())
    buf.seek(0)
    assert IndexEntry.binary_decode(buf) == entry


def test_resource_header_is_sixteen_bytes():
    buf = io.BytesIO()
    header = ResourceHeader(ResourceType.COSTUME, ResourceCompression.GZIP)
    assert header.binary_encode(buf) == 16
    buf.seek(0)
    assert ResourceHeader.binary_decode(buf) == header


def test_resource_header_unknown_compression():
    buf = io.BytesIO(bytes([4, 9]) + bytes(14))
    with pytest.raises(ResourceError):
        ResourceHeader.binary_decode(buf)


def test_read_values_short_stream():
    with pytest.raises(EOFError):
        read_values(io.BytesIO(b"\x01\x02"), "I")


def test_read_string_truncated():
    with pytest.raises(EOFError):
        read_string(io.BytesIO(b"\x05\x00he"))


def _write_package(tmp_path, compression, name="resources"):
    with open(tmp_path / f"{name}.idx", "wb") as idx, open(
        tmp_path / f"{name}.dat", "wb"
    ) as dat:
        enc = ResourceEncoder(idx, dat)
        enc.encode_script("hello", _LuaScript(CODE), compression)
        enc.encode_script("other", _LuaScript(b"x = 1"), ResourceCompression.NONE)


@pytest.mark.parametrize(
    "compression", [ResourceCompression.NONE, ResourceCompression.GZIP]
)
def test_loader_round_trip(tmp_path, compression):
    _write_package(tmp_path, compression)
    loader = ResourceFileLoader(tmp_path)
    assert loader.read_resource("resources", "hello", ResourceType.SCRIPT) == _script_bytes(CODE)
    stream = loader.open_resource("resources", "other", ResourceType.SCRIPT)
    assert stream.read() == _script_bytes(b"x = 1")


def test_loader_wrong_type(tmp_path):
    _write_package(tmp_path, ResourceCompression.NONE)
    loader = ResourceFileLoader(tmp_path)
    with pytest.raises(ResourceError):
        loader.read_resource("resources", "hello", ResourceType.IMAGE)


def test_loader_missing_resource(tmp_path):
    _write_package(tmp_path, ResourceCompression.NONE)
    loader = ResourceFileLoader(tmp_path)
    with pytest.raises(ResourceError):
        loader.read_resource("resources", "missing", ResourceType.SCRIPT)


def test_loader_missing_package(tmp_path):
    loader = ResourceFileLoader(tmp_path)
    with pytest.raises(ResourceError):
        loader.read_resource("nothing", "hello", ResourceType.SCRIPT)


def test_loader_bad_magic(tmp_path):
    (tmp_path / "bad.idx").write_bytes(b"NOTMAGIC\x01\x00")
    (tmp_path / "bad.dat").write_bytes(b"PCTK:DAT\x01\x00")
    loader = ResourceFileLoader(tmp_path)
    with pytest.raises(ResourceError):
        loader.read_resource("bad", "hello", ResourceType.SCRIPT)


def test_loader_truncated_data(tmp_path):
    _write_package(tmp_path, ResourceCompression.NONE)
    dat_path = tmp_path / "resources.dat"
    dat_path.write_bytes(dat_path.read_bytes()[:30])
    loader = ResourceFileLoader(tmp_path)
    with pytest.raises(ResourceError):
        loader.read_resource("resources", "hello", ResourceType.SCRIPT)