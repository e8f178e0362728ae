"""Loading raw files and decoded images into memory."""

from __future__ import annotations

import io
import os
from dataclasses import dataclass
from typing import Union

from PIL import Image

PathLike = Union[str, "os.PathLike[str]"]

_NATIVE_MODES = {"L": 1, "LA": 2, "RGB": 3, "RGBA": 4}


class FileLoadError(OSError):
    """Raised when a file cannot be opened, read or decoded."""


@dataclass(frozen=True)
class FileData:
    """The raw bytes of a file."""

    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class ImageData:
    """Decoded 8-bit pixels, row by row, interleaved by channel."""

    pixels: bytes
    width: int
    height: int
    channels: int


def load_file(path: PathLike) -> FileData:
    """Read the whole file at ``path``."""
    name = os.fspath(path)
    try:
        with open(name, "rb") as handle:
            data = handle.read()
    except OSError as exc:
        raise FileLoadError(f"Failed to open file: {name}") from exc
    return FileData(data)


def _native_image(image: Image.Image) -> Image.Image:
    """Convert to an 8-bit mode with the image's own channel count."""
    mode = image.mode
    if mode in _NATIVE_MODES:
        return image
    if mode == "P":
        return image.convert("RGBA" if "transparency" in image.info else "RGB")
    if mode == "PA":
        return image.convert("RGBA")
    if mode in ("1", "I", "I;16", "I;16B", "I;16L", "F"):
        return image.convert("L")
    if "A" in image.getbands():
        return image.convert("RGBA")
    return image.convert("RGB")


def load_image(path: PathLike) -> ImageData:
    """Read and decode the image at ``path``, keeping its own channel count."""
    file_data = load_file(path)
    try:
        with Image.open(io.BytesIO(file_data.data)) as image:
            image.load()
            decoded = _native_image(image)
            width, height = decoded.size
            pixels = decoded.tobytes()
            channels = _NATIVE_MODES[decoded.mode]
    except (OSError, ValueError, SyntaxError) as exc:
        raise FileLoadError(f"Failed to decode image: {os.fspath(path)}") from exc
    return ImageData(pixels, width, height, channels)