"""Application configuration. Loads from environment and .env file."""
import logging
import os
from pathlib import Path

from dotenv import load_dotenv

from imageproc.conversion.models import (
    Conversion,
    JPEGOptions,
    PNGOptions,
    ProcessorConfig,
    ResizeOptions,
    WebPOptions,
    default_config,
)

BASE_DIR = Path(__file__).resolve().parent.parent
# Load .env from cwd, then backend/.env, then project root .env
load_dotenv()
load_dotenv(BASE_DIR / ".env")
load_dotenv(BASE_DIR.parent / ".env")

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in _TRUE_VALUES


def load_processor_config() -> ProcessorConfig:
    """Build the processor config from env, falling back to default_config() per field."""
    base = default_config()
    return ProcessorConfig(
        conversion=Conversion(
            enabled=_env_bool("CONVERSION_ENABLED", base.conversion.enabled),
            format=os.getenv("CONVERSION_FORMAT", base.conversion.format).strip(),
        ),
        jpeg=JPEGOptions(quality=int(os.getenv("JPEG_QUALITY", str(base.jpeg.quality)))),
        png=PNGOptions(
            compression=int(os.getenv("PNG_COMPRESSION", str(base.png.compression))),
            lossless=_env_bool("PNG_LOSSLESS", base.png.lossless),
            optimize=_env_bool("PNG_OPTIMIZE", base.png.optimize),
        ),
        webp=WebPOptions(
            quality=float(os.getenv("WEBP_QUALITY", str(base.webp.quality))),
            lossless=_env_bool("WEBP_LOSSLESS", base.webp.lossless),
        ),
        resize=ResizeOptions(
            enabled=_env_bool("RESIZE_ENABLED", base.resize.enabled),
            max_width=int(os.getenv("RESIZE_MAX_WIDTH", str(base.resize.max_width))),
            max_height=int(os.getenv("RESIZE_MAX_HEIGHT", str(base.resize.max_height))),
        ),
    )


# Limits (env)
MAX_IMAGE_SIZE_MB = int(os.getenv("MAX_IMAGE_SIZE_MB", "20"))
MAX_IMAGE_SIZE_BYTES = MAX_IMAGE_SIZE_MB * 1024 * 1024

# Server (for uvicorn)
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "8000"))
# CORS: comma-separated origins, e.g. "http://localhost:5173,http://127.0.0.1:5173"
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "http://localhost:5173,http://127.0.0.1:5173").split(",") if o.strip()]

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=getattr(logging, LOG_LEVEL, logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("imageproc")
