"""Processor configuration and format tokens."""
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from imageproc.conversion.errors import UnsupportedFormatError


class Format(str, Enum):
    JPEG = "jpeg"
    JPG = "jpg"
    GIF = "gif"
    PNG = "png"
    WEBP = "webp"

    @classmethod
    def parse(cls, token: str) -> "Format":
        """Case-insensitive lookup. Raises UnsupportedFormatError naming the token."""
        try:
            return cls((token or "").lower())
        except ValueError:
            raise UnsupportedFormatError(token) from None

    @property
    def media_type(self) -> str:
        return _MEDIA_TYPES[self]


_MEDIA_TYPES = {
    Format.JPEG: "image/jpeg",
    Format.JPG: "image/jpeg",
    Format.GIF: "image/gif",
    Format.PNG: "image/png",
    Format.WEBP: "image/webp",
}

# Pillow format names the decoder is allowed to recognize
DECODE_FORMATS = ("JPEG", "PNG", "GIF", "WEBP")

# Pillow's reported format -> detected token. Multi-picture JPEGs open as MPO.
DECODED_FORMATS = {
    "JPEG": Format.JPEG,
    "MPO": Format.JPEG,
    "PNG": Format.PNG,
    "GIF": Format.GIF,
    "WEBP": Format.WEBP,
}


@dataclass(frozen=True)
class Conversion:
    enabled: bool = False
    format: str = Format.WEBP.value


@dataclass(frozen=True)
class JPEGOptions:
    quality: int = 100


@dataclass(frozen=True)
class PNGOptions:
    compression: int = 9  # zlib level 0-9
    lossless: bool = True
    optimize: bool = True


@dataclass(frozen=True)
class WebPOptions:
    quality: float = 100  # 0-100; effort when lossless
    lossless: bool = True


@dataclass(frozen=True)
class ResizeOptions:
    enabled: bool = False
    max_width: int = 0
    max_height: int = 0


@dataclass(frozen=True)
class ProcessorConfig:
    conversion: Conversion = field(default_factory=Conversion)
    jpeg: JPEGOptions = field(default_factory=JPEGOptions)
    png: PNGOptions = field(default_factory=PNGOptions)
    webp: WebPOptions = field(default_factory=WebPOptions)
    resize: ResizeOptions = field(default_factory=ResizeOptions)


def default_config() -> ProcessorConfig:
    """Convert everything to lossless WebP, no resizing."""
    return ProcessorConfig(
        conversion=Conversion(enabled=True, format=Format.WEBP.value),
        jpeg=JPEGOptions(quality=100),
        png=PNGOptions(compression=9, lossless=True, optimize=True),
        webp=WebPOptions(quality=100, lossless=True),
        resize=ResizeOptions(enabled=False),
    )


def valid_extension(ext: str) -> bool:
    """True only for the exact lowercase tokens jpeg, jpg, gif, png, webp."""
    return ext in {f.value for f in Format}


def detect_format(data: bytes) -> Optional[Format]:
    """Sniff the container signature of encoded image bytes."""
    if data.startswith(b"\x89PNG\r\n\x1a\n"):
        return Format.PNG
    if data.startswith(b"\xff\xd8\xff"):
        return Format.JPEG
    if data[:6] in (b"GIF87a", b"GIF89a"):
        return Format.GIF
    if len(data) >= 12 and data[:4] == b"RIFF" and data[8:12] == b"WEBP":
        return Format.WEBP
    return None
