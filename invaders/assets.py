"""Loading of sprite textures and shader sources from disk."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Union

from PIL import Image

PathLike = Union[str, Path]

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"

_CHANNELS = {"RGB": 3, "RGBA": 4}

_UNSUPPORTED = {
    "1": "grayscale",
    "L": "grayscale",
    "I": "grayscale",
    "I;16": "grayscale",
    "I;16B": "grayscale",
    "I;16L": "grayscale",
    "P": "palette look up table",
    "PA": "palette look up table",
    "LA": "grayscale with alpha",
}


class AssetError(Exception):
    """Raised when a texture or shader file cannot be loaded."""


@dataclass(frozen=True)
class Texture:
    """Decoded pixel data of an image, rows top to bottom, 8 bits per channel."""

    width: int
    height: int
    channels: int
    data: bytes

    def __post_init__(self) -> None:
        if self.channels not in (3, 4):
            raise ValueError(f"unsupported channel count: {self.channels}")
        if self.width < 0 or self.height < 0:
            raise ValueError("width and height must not be negative")
        expected = self.width * self.height * self.channels
        if len(self.data) != expected:
            raise ValueError(
                f"expected {expected} bytes of pixel data, got {len(self.data)}"
            )

    @property
    def mode(self) -> str:
        """The pixel layout: ``"RGB"`` or ``"RGBA"``."""
        return "RGB" if self.channels == 3 else "RGBA"

    @property
    def row_bytes(self) -> int:
        """The number of bytes in one row of pixels."""
        return self.width * self.channels

    def row(self, y: int) -> bytes:
        """The pixel bytes of row ``y``, counted from the top."""
        if not 0 <= y < self.height:
            raise IndexError(f"row {y} out of range")
        start = y * self.row_bytes
        return self.data[start:start + self.row_bytes]


def load_texture(path: PathLike) -> Texture:
    """Read an RGB or RGBA PNG file into a Texture.

    Raises AssetError if the file is missing, is not a PNG, cannot be
    decoded, or holds grayscale or palette pixels.
    """
    path = Path(path)
    try:
        with path.open("rb") as fp:
            header = fp.read(len(PNG_SIGNATURE))
    except OSError as exc:
        raise AssetError(f"Could not open {path} for reading") from exc

    if not header:
        raise AssetError(f"Could not read png header of {path}")
    if header != PNG_SIGNATURE:
        raise AssetError(f"{path} is not a valid png file")

    try:
        with Image.open(path) as image:
            image.load()
            mode = image.mode
            if mode not in _CHANNELS:
                reason = _UNSUPPORTED.get(mode, f"unsupported pixel mode {mode}")
                raise AssetError(f"{path}: {reason}")
            width, height = image.size
            data = image.tobytes()
    except AssetError:
        raise
    except (OSError, ValueError) as exc:
        raise AssetError(f"could not decode {path}: {exc}") from exc

    return Texture(width=width, height=height, channels=_CHANNELS[mode], data=data)


def load_shader_source(path: PathLike) -> str:
    """Return the text of a shader source file."""
    path = Path(path)
    try:
        return path.read_text()
    except OSError as exc:
        raise AssetError(f"Could not open {path} for reading") from exc