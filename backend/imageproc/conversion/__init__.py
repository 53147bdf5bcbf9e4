from .service import ImageProcessor, get_image_processor
from .errors import DecodeError, EncodeError, ImageProcessingError, UnsupportedFormatError
from .models import Format, ProcessorConfig, default_config, detect_format, valid_extension

__all__ = [
    "ImageProcessor",
    "get_image_processor",
    "DecodeError",
    "EncodeError",
    "ImageProcessingError",
    "UnsupportedFormatError",
    "Format",
    "ProcessorConfig",
    "default_config",
    "detect_format",
    "valid_extension",
]
