"""
Color engine error taxonomy.

Every failure the engine can signal is a ValueError subclass, so callers that
already guard bad input with ``except ValueError`` keep working.
"""

from typing import Any


class ColorEngineError(ValueError):
    """Base class for all color engine failures."""

    code: str = "color_engine_error"


class InvalidColorFormat(ColorEngineError):
    """Raised when a hex color string cannot be parsed."""

    code = "invalid_color_format"

    def __init__(self, value: Any):
        self.value = value
        super().__init__(f"Invalid hex color format: {value!r}")


class EmptyImageError(ColorEngineError):
    """Raised when sampling leaves no usable pixels to cluster."""

    code = "empty_image"

    def __init__(self, width: int, height: int, include_transparent: bool = False):
        self.width = width
        self.height = height
        self.include_transparent = include_transparent
        detail = "" if include_transparent else " (transparent pixels excluded)"
        super().__init__(
            f"No valid colors found in {width}x{height} image{detail}"
        )

    @property
    def pixel_count(self) -> int:
        return max(0, self.width * self.height)


class ImageDecodeError(ColorEngineError):
    """Raised when uploaded image data cannot be decoded into pixels."""

    code = "image_decode_error"
