"""API routes exposing optimize, resize and convert over uploads."""
import asyncio
import logging
from dataclasses import asdict
from typing import Callable

from fastapi import APIRouter, File, HTTPException, Query, UploadFile
from fastapi.responses import Response

from imageproc.config import MAX_IMAGE_SIZE_BYTES
from imageproc.conversion.errors import DecodeError, EncodeError, UnsupportedFormatError
from imageproc.conversion.models import Format, detect_format
from imageproc.conversion.service import get_image_processor

logger = logging.getLogger("imageproc.api")
router = APIRouter(prefix="/api", tags=["imageproc"])


async def _read_upload(file: UploadFile) -> bytes:
    """Buffer the upload in memory, enforcing MAX_IMAGE_SIZE_BYTES."""
    max_mb = MAX_IMAGE_SIZE_BYTES // (1024 * 1024)
    chunks: list[bytes] = []
    total = 0
    while chunk := await file.read(1024 * 1024):
        total += len(chunk)
        if total > MAX_IMAGE_SIZE_BYTES:
            raise HTTPException(413, f"File too large (max {max_mb} MB)")
        chunks.append(chunk)
    if total == 0:
        raise HTTPException(400, "Empty upload")
    return b"".join(chunks)


async def _process(file: UploadFile, op: Callable[[bytes], bytes]) -> Response:
    data = await _read_upload(file)
    try:
        out = await asyncio.to_thread(op, data)
    except (DecodeError, UnsupportedFormatError) as e:
        logger.warning("Rejected %s: %s", file.filename, e)
        raise HTTPException(400, str(e))
    except EncodeError as e:
        logger.exception("Encoding failed for %s: %s", file.filename, e)
        raise HTTPException(500, str(e))
    fmt = detect_format(out)
    media_type = fmt.media_type if fmt else "application/octet-stream"
    logger.info("Processed %s: %s -> %s bytes (%s)", file.filename, len(data), len(out), media_type)
    return Response(content=out, media_type=media_type)


@router.get("/health")
def health():
    return {"status": "ok"}


@router.get("/formats")
def get_formats():
    tokens = [f.value for f in Format]
    return {"input": tokens, "output": tokens}


@router.get("/config")
def get_config():
    """Active processor configuration."""
    return asdict(get_image_processor().config)


@router.get("/limits")
def get_limits():
    return {
        "max_image_size_mb": MAX_IMAGE_SIZE_BYTES // (1024 * 1024),
        "max_image_size_bytes": MAX_IMAGE_SIZE_BYTES,
    }


@router.post("/optimize")
async def optimize_image(file: UploadFile = File(...)):
    """Resize and convert according to the server configuration."""
    return await _process(file, get_image_processor().optimize)


@router.post("/resize")
async def resize_image(file: UploadFile = File(...)):
    """Shrink to the configured bounds, keeping the input format."""
    return await _process(file, get_image_processor().resize)


@router.post("/convert")
async def convert_image(
    file: UploadFile = File(...),
    fmt: str = Query(..., alias="format", description="Target format: jpeg, jpg, png, gif, webp"),
):
    svc = get_image_processor()
    return await _process(file, lambda data: svc.convert(data, fmt))
