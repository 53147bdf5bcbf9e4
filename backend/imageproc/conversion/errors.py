"""Errors raised by the image processor. None are retried or logged here."""


class ImageProcessingError(Exception):
    pass


class DecodeError(ImageProcessingError):
    """Input is not a decodable JPEG, PNG, GIF or WebP image."""

    def __init__(self, reason: str):
        super().__init__(f"failed to decode image: {reason}")


class EncodeError(ImageProcessingError):
    def __init__(self, fmt: str, reason: str):
        self.format = fmt
        super().__init__(f"failed to encode {fmt}: {reason}")


class UnsupportedFormatError(ImageProcessingError):
    def __init__(self, fmt: str):
        self.format = fmt
        super().__init__(f"unsupported format: {fmt}")
