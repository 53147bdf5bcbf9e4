import io

import pytest
from PIL import Image

from imageproc.conversion import service
from imageproc.conversion.models import ProcessorConfig, ResizeOptions, default_config


def make_image(size=(10, 10), fmt="PNG", mode="RGB", color="red") -> bytes:
    img = Image.new(mode, size, color=color)
    buf = io.BytesIO()
    img.save(buf, format=fmt)
    return buf.getvalue()


def open_image(data: bytes) -> Image.Image:
    img = Image.open(io.BytesIO(data))
    img.load()
    return img


def bounded_config(max_width=1000, max_height=1000, enabled=True, **overrides) -> ProcessorConfig:
    base = default_config()
    fields = {
        "conversion": base.conversion,
        "jpeg": base.jpeg,
        "png": base.png,
        "webp": base.webp,
        "resize": ResizeOptions(enabled=enabled, max_width=max_width, max_height=max_height),
    }
    fields.update(overrides)
    return ProcessorConfig(**fields)


@pytest.fixture
def installed_processor(monkeypatch):
    """Replace the process-wide processor for the duration of a test."""

    def install(config: ProcessorConfig) -> service.ImageProcessor:
        proc = service.ImageProcessor(config)
        monkeypatch.setattr(service, "_image_processor", proc)
        return proc

    return install
