"""Decode, optionally resize, and re-encode images with Pillow."""
import io
import logging
from typing import BinaryIO, Callable, Optional, Union

from PIL import Image

from imageproc import config as app_config
from imageproc.conversion.errors import DecodeError, EncodeError
from imageproc.conversion.models import DECODE_FORMATS, DECODED_FORMATS, Format, ProcessorConfig, default_config
from imageproc.conversion.resize import resize_keep_aspect

logger = logging.getLogger("imageproc.service")

ImageSource = Union[bytes, bytearray, BinaryIO]

# Modes the JPEG encoder writes directly; anything else is flattened to RGB
_JPEG_MODES = ("RGB", "L", "CMYK")
# Modes the PNG encoder writes directly; alpha modes go to RGBA, the rest to RGB
_PNG_MODES = ("1", "L", "LA", "I", "I;16", "P", "RGB", "RGBA")
_ALPHA_MODES = ("PA", "RGBa", "La")


class ImageProcessor:
    """
    Stateless apart from its read-only config, so one instance can serve
    concurrent callers. Errors are raised to the caller, never logged here.
    """

    def __init__(self, config: Optional[ProcessorConfig] = None):
        self._config = config if config is not None else default_config()
        self._encoders: dict[Format, Callable[[Image.Image, io.BytesIO], None]] = {
            Format.JPEG: self._encode_jpeg,
            Format.JPG: self._encode_jpeg,
            Format.PNG: self._encode_png,
            Format.WEBP: self._encode_webp,
            Format.GIF: self._encode_gif,
        }

    @property
    def config(self) -> ProcessorConfig:
        return self._config

    def optimize(self, source: ImageSource) -> bytes:
        """Resize if enabled, switch to the configured format if enabled, then encode."""
        img, fmt = self._decode(source)
        if self._config.resize.enabled:
            img = self._resize(img)
        if self._config.conversion.enabled:
            fmt = self._config.conversion.format
        return self._encode(img, fmt)

    def resize(self, source: ImageSource) -> bytes:
        """Always resize (ignores resize.enabled) and keep the detected format."""
        img, fmt = self._decode(source)
        img = self._resize(img)
        return self._encode(img, fmt)

    def convert(self, source: ImageSource, to_format: str) -> bytes:
        """Re-encode as to_format (case-insensitive) without resizing."""
        img, _ = self._decode(source)
        return self._encode(img, to_format)

    @staticmethod
    def _decode(source: ImageSource) -> tuple[Image.Image, str]:
        data = bytes(source) if isinstance(source, (bytes, bytearray)) else source.read()
        try:
            img = Image.open(io.BytesIO(data), formats=DECODE_FORMATS)
            img.load()
        except (OSError, SyntaxError, ValueError, Image.DecompressionBombError) as e:
            raise DecodeError(str(e)) from e
        detected = DECODED_FORMATS.get(img.format)
        fmt = detected.value if detected else img.format.lower()
        logger.debug("Decoded %s image %sx%s (%s bytes)", fmt, img.width, img.height, len(data))
        return img, fmt

    def _resize(self, img: Image.Image) -> Image.Image:
        opts = self._config.resize
        return resize_keep_aspect(img, opts.max_width, opts.max_height)

    def _encode(self, img: Image.Image, fmt_token: str) -> bytes:
        fmt = Format.parse(fmt_token)
        buf = io.BytesIO()
        try:
            self._encoders[fmt](img, buf)
        except (OSError, ValueError, KeyError, RuntimeError) as e:
            raise EncodeError(fmt.value, str(e)) from e
        out = buf.getvalue()
        logger.debug("Encoded %sx%s as %s (%s bytes)", img.width, img.height, fmt.value, len(out))
        return out

    def _encode_jpeg(self, img: Image.Image, buf: io.BytesIO) -> None:
        if img.mode not in _JPEG_MODES:
            img = img.convert("RGB")
        img.save(buf, format="JPEG", quality=self._config.jpeg.quality)

    def _encode_png(self, img: Image.Image, buf: io.BytesIO) -> None:
        # png.lossless is accepted for completeness; PNG is always lossless
        opts = self._config.png
        if img.mode not in _PNG_MODES:
            img = img.convert("RGBA" if img.mode in _ALPHA_MODES else "RGB")
        img.save(buf, format="PNG", compress_level=opts.compression, optimize=opts.optimize)

    def _encode_webp(self, img: Image.Image, buf: io.BytesIO) -> None:
        opts = self._config.webp
        img.save(buf, format="WEBP", lossless=opts.lossless, quality=opts.quality)

    @staticmethod
    def _encode_gif(img: Image.Image, buf: io.BytesIO) -> None:
        img.save(buf, format="GIF")


# Singleton
_image_processor: Optional[ImageProcessor] = None


def get_image_processor() -> ImageProcessor:
    global _image_processor
    if _image_processor is None:
        _image_processor = ImageProcessor(app_config.load_processor_config())
        logger.info("ImageProcessor initialized with %s", _image_processor.config)
    return _image_processor
