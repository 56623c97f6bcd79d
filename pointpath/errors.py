# errors.py


class PointPathError(Exception):
    """Base class for failures in the screenshot/HTTP layer."""


class ImageDecodeError(PointPathError):
    """Uploaded bytes are not a readable image."""


class OCRError(PointPathError):
    """The OCR engine failed or returned no text."""
