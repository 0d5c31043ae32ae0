"""Raster images stored as PNG in resource files."""

from __future__ import annotations

import io
import os
from typing import BinaryIO, Union

from PIL import Image as PILImage

from .encoding import ResourceError, read_values, write_values

__all__ = ["Image"]


class Image:
    """A graphic image backed by a Pillow image."""

    def __init__(self, raw: PILImage.Image) -> None:
        self.raw = raw

    @classmethod
    def from_file(cls, path: Union[str, os.PathLike]) -> "Image":
        """Load an image from a file; raise ResourceError if it cannot be read."""
        try:
            with PILImage.open(path) as src:
                raw = src.copy()
        except OSError as exc:
            raise ResourceError(f"failed to load image from file {path}: {exc}") from exc
        return cls(raw)

    @property
    def width(self) -> int:
        """Width of the image in pixels."""
        return self.raw.width

    @property
    def height(self) -> int:
        """Height of the image in pixels."""
        return self.raw.height

    def binary_encode(self, stream: BinaryIO) -> int:
        """Write a uint32 length followed by the image in PNG format."""
        buf = io.BytesIO()
        self.raw.save(buf, format="PNG")
        png = buf.getvalue()
        n = write_values(stream, "I", len(png))
        stream.write(png)
        return n + len(png)

    @classmethod
    def binary_decode(cls, stream: BinaryIO) -> "Image":
        """Read an image written by :meth:`binary_encode`."""
        (length,) = read_values(stream, "I")
        (png,) = read_values(stream, f"{length}s")
        try:
            with PILImage.open(io.BytesIO(png), formats=["PNG"]) as src:
                raw = src.copy()
        except OSError as exc:
            raise ResourceError(f"invalid image data: {exc}") from exc
        return cls(raw)