"""Binary encoding of game resources into index and data files."""

from __future__ import annotations

import gzip
import io
import os
import struct
import zlib
from dataclasses import dataclass
from enum import IntEnum
from pathlib import Path
from typing import Any, BinaryIO, Dict, Protocol, Tuple, Union

__all__ = [
    "RESOURCE_FORMAT_VERSION",
    "RESOURCE_HEADER_SIZE",
    "INDEX_MAGIC",
    "DATA_MAGIC",
    "ResourceError",
    "ResourceCompression",
    "ResourceType",
    "IndexEntry",
    "ResourceHeader",
    "write_values",
    "read_values",
    "write_string",
    "read_string",
    "ResourceEncoder",
    "ResourceFileLoader",
]

RESOURCE_FORMAT_VERSION = 0x0001
RESOURCE_HEADER_SIZE = 16
INDEX_MAGIC = b"PCTK:IDX"
DATA_MAGIC = b"PCTK:DAT"

_FILE_HEADER = "8sH"


class ResourceError(Exception):
    """Raised when a resource file is missing, malformed or inconsistent."""


class ResourceCompression(IntEnum):
    """Compression applied to a resource body."""

    NONE = 0
    GZIP = 1


class ResourceType(IntEnum):
    """Kind of resource stored in a data file."""

    UNDEFINED = 0
    COSTUME = 1
    IMAGE = 2
    MUSIC = 3
    SCRIPT = 4
    SOUND = 5
    SPRITE_SHEET = 6


class BinaryEncodable(Protocol):
    def binary_encode(self, stream: BinaryIO) -> int: ...


def _struct_for(fmt: str) -> struct.Struct:
    if fmt and fmt[0] in "<>!=@":
        return struct.Struct(fmt)
    return struct.Struct("<" + fmt)


def write_values(stream: BinaryIO, fmt: str, *args: Any) -> int:
    """Pack ``args`` with a struct format (little-endian by default) and write them.

    Returns the number of bytes written.
    """
    packed = _struct_for(fmt).pack(*args)
    stream.write(packed)
    return len(packed)


def _read_exact(stream: BinaryIO, size: int) -> bytes:
    data = stream.read(size)
    if len(data) != size:
        raise EOFError(f"expected {size} bytes, got {len(data)}")
    return data


def read_values(stream: BinaryIO, fmt: str) -> Tuple[Any, ...]:
    """Read and unpack values with a struct format (little-endian by default).

    Raises EOFError if the stream ends before all values are read.
    """
    layout = _struct_for(fmt)
    return layout.unpack(_read_exact(stream, layout.size))


def write_string(stream: BinaryIO, text: str) -> int:
    """Write ``text`` as UTF-8 prefixed by its byte length as a uint16."""
    raw = text.encode("utf-8")
    n = write_values(stream, "H", len(raw))
    stream.write(raw)
    return n + len(raw)


def read_string(stream: BinaryIO) -> str:
    """Read a string written by :func:`write_string`."""
    (size,) = read_values(stream, "H")
    return _read_exact(stream, size).decode("utf-8")


@dataclass(frozen=True)
class IndexEntry:
    """Location of a resource inside a data file."""

    resource_id: str
    offset: int
    size: int

    def binary_encode(self, stream: BinaryIO) -> int:
        n = write_string(stream, self.resource_id)
        return n + write_values(stream, "II", self.offset, self.size)

    @classmethod
    def binary_decode(cls, stream: BinaryIO) -> "IndexEntry":
        resource_id = read_string(stream)
        offset, size = read_values(stream, "II")
        return cls(resource_id, offset, size)


@dataclass(frozen=True)
class ResourceHeader:
    """Fixed-size header preceding every resource in a data file."""

    type: ResourceType
    compression: ResourceCompression

    def binary_encode(self, stream: BinaryIO) -> int:
        return write_values(stream, "BB14x", int(self.type), int(self.compression))

    @classmethod
    def binary_decode(cls, stream: BinaryIO) -> "ResourceHeader":
        raw_type, raw_compression = read_values(stream, "BB14x")
        try:
            res_type = ResourceType(raw_type)
        except ValueError:
            raise ResourceError(f"unknown resource type: {raw_type}") from None
        try:
            compression = ResourceCompression(raw_compression)
        except ValueError:
            raise ResourceError(
                f"unsupported compression: {raw_compression}"
            ) from None
        return cls(res_type, compression)


class ResourceEncoder:
    """Writes resources into an index stream and a data stream.

    The file headers are written when the encoder is created.
    """

    def __init__(self, index: BinaryIO, data: BinaryIO) -> None:
        self._index = index
        self._data = data
        write_values(index, _FILE_HEADER, INDEX_MAGIC, RESOURCE_FORMAT_VERSION)
        self._next = write_values(
            data, _FILE_HEADER, DATA_MAGIC, RESOURCE_FORMAT_VERSION
        )

    def data_bytes_written(self) -> int:
        """Return the number of bytes written to the data stream."""
        return self._next

    def encode_costume(
        self, resource_id: str, costume: BinaryEncodable, compression: ResourceCompression
    ) -> None:
        self._encode(resource_id, costume, ResourceType.COSTUME, compression)

    def encode_image(
        self, resource_id: str, image: BinaryEncodable, compression: ResourceCompression
    ) -> None:
        self._encode(resource_id, image, ResourceType.IMAGE, compression)

    def encode_music(
        self, resource_id: str, music: BinaryEncodable, compression: ResourceCompression
    ) -> None:
        self._encode(resource_id, music, ResourceType.MUSIC, compression)

    def encode_script(
        self, resource_id: str, script: BinaryEncodable, compression: ResourceCompression
    ) -> None:
        self._encode(resource_id, script, ResourceType.SCRIPT, compression)

    def encode_sound(
        self, resource_id: str, sound: BinaryEncodable, compression: ResourceCompression
    ) -> None:
        self._encode(resource_id, sound, ResourceType.SOUND, compression)

    def encode_sprite_sheet(
        self, resource_id: str, sprites: BinaryEncodable, compression: ResourceCompression
    ) -> None:
        self._encode(resource_id, sprites, ResourceType.SPRITE_SHEET, compression)

    def _encode(
        self,
        resource_id: str,
        resource: BinaryEncodable,
        res_type: ResourceType,
        compression: ResourceCompression,
    ) -> None:
        compression = ResourceCompression(compression)
        n = ResourceHeader(res_type, compression).binary_encode(self._data)
        if compression is ResourceCompression.NONE:
            n += resource.binary_encode(self._data)
        else:
            body = io.BytesIO()
            resource.binary_encode(body)
            compressed = gzip.compress(body.getvalue(), mtime=0)
            self._data.write(compressed)
            n += len(compressed)
        IndexEntry(resource_id, self._next, n).binary_encode(self._index)
        self._next += n


class ResourceFileLoader:
    """Loads resources from ``<package>.idx`` and ``<package>.dat`` files."""

    def __init__(self, path: Union[str, os.PathLike]) -> None:
        self._path = Path(path)
        self._indexes: Dict[str, Dict[str, IndexEntry]] = {}

    def read_resource(
        self, package: str, resource_id: str, resource_type: ResourceType
    ) -> bytes:
        """Return the decompressed body of a resource.

        Raises ResourceError if it cannot be found or does not match the type.
        """
        entry = self._index_entry(package, resource_id)
        size = entry.size - RESOURCE_HEADER_SIZE
        data_path = self._path / f"{package}.dat"
        try:
            with open(data_path, "rb") as file:
                file.seek(entry.offset)
                try:
                    header = ResourceHeader.binary_decode(file)
                except EOFError as exc:
                    raise ResourceError(
                        f"error decoding resource header: {exc}"
                    ) from exc
                body = file.read(size)
        except OSError as exc:
            raise ResourceError(f"error opening data file: {exc}") from exc

        if header.type != resource_type:
            raise ResourceError(
                f"wrong resource type: {header.type.name} != {ResourceType(resource_type).name}"
            )
        if len(body) != size:
            raise ResourceError(f"short read: {len(body)} != {size}")

        if header.compression is ResourceCompression.NONE:
            return body
        try:
            return gzip.decompress(body)
        except (OSError, EOFError, zlib.error) as exc:
            raise ResourceError(f"error reading gzip data: {exc}") from exc

    def open_resource(
        self, package: str, resource_id: str, resource_type: ResourceType
    ) -> BinaryIO:
        """Return the body of a resource as a readable binary stream."""
        return io.BytesIO(self.read_resource(package, resource_id, resource_type))

    def _index_entry(self, package: str, resource_id: str) -> IndexEntry:
        index = self._indexes.get(package)
        if index is None:
            index = self._load_index(package)
            self._indexes[package] = index
        try:
            return index[resource_id]
        except KeyError:
            raise ResourceError(
                f"resource not found: {package}:{resource_id}"
            ) from None

    def _load_index(self, package: str) -> Dict[str, IndexEntry]:
        index_path = self._path / f"{package}.idx"
        try:
            raw = index_path.read_bytes()
        except OSError as exc:
            raise ResourceError(
                f"error opening index file for package {package}: {exc}"
            ) from exc

        stream = io.BytesIO(raw)
        try:
            magic, _version = read_values(stream, _FILE_HEADER)
        except EOFError as exc:
            raise ResourceError(f"error decoding index header: {exc}") from exc
        if magic != INDEX_MAGIC:
            raise ResourceError(f"wrong magic number in index file {index_path}: {magic!r}")

        index: Dict[str, IndexEntry] = {}
        while stream.tell() < len(raw):
            try:
                entry = IndexEntry.binary_decode(stream)
            except (EOFError, UnicodeDecodeError) as exc:
                raise ResourceError(f"error decoding index entry: {exc}") from exc
            index[entry.resource_id] = entry
        return index