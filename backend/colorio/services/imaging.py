"""
Color.io Imaging Utilities
Decodes uploaded images into the flat RGBA buffers the color engine consumes.
"""
import base64
import binascii
import io
from typing import Optional, Tuple, Union

from PIL import Image, UnidentifiedImageError
from loguru import logger

from colorio.config import config
from colorio.services.colors.errors import ImageDecodeError

DATA_URL_PREFIX = "data:"

_MAGIC_BYTES = (
    (b"\xff\xd8\xff", "image/jpeg"),
    (b"\x89PNG\r\n\x1a\n", "image/png"),
)


def strip_data_url(payload: str) -> str:
    """Drop a ``data:<mime>;base64,`` header if present."""
    payload = payload.strip()
    if payload.startswith(DATA_URL_PREFIX) and "," in payload:
        return payload.split(",", 1)[1]
    return payload


def decode_base64_payload(payload: str) -> bytes:
    """
    Decode base64 image data, optionally wrapped in a data URL.

    Raises:
        ImageDecodeError: for malformed base64
    """
    try:
        return base64.b64decode(strip_data_url(payload), validate=True)
    except (binascii.Error, ValueError) as e:
        raise ImageDecodeError(f"Invalid base64 image data: {e}") from e


def detect_mime_type(file_bytes: bytes) -> str:
    """
    Identify the image format from its magic bytes.

    Raises:
        ImageDecodeError: for unrecognised or truncated data
    """
    if len(file_bytes) < 12:
        raise ImageDecodeError("File too small or corrupt")

    for magic, mime_type in _MAGIC_BYTES:
        if file_bytes.startswith(magic):
            return mime_type
    if file_bytes[:4] == b"RIFF" and file_bytes[8:12] == b"WEBP":
        return "image/webp"

    raise ImageDecodeError(
        f"Unsupported image format. Supported: {', '.join(config.SUPPORTED_MIME_TYPES)}"
    )


def decode_image_to_rgba(data: Union[bytes, str],
                         max_dimension: Optional[int] = None) -> Tuple[bytes, int, int]:
    """
    Decode PNG, JPEG or WebP data into a flat RGBA buffer.

    Args:
        data: raw image bytes, or base64 text (a ``data:`` URL is accepted)
        max_dimension: longest edge after downsizing; the aspect ratio is
            preserved and smaller images are left as they are

    Returns:
        (rgba_bytes, width, height)

    Raises:
        ImageDecodeError: for oversize, unsupported or corrupt images
    """
    file_bytes = decode_base64_payload(data) if isinstance(data, str) else bytes(data)

    max_bytes = config.MAX_FILE_MB * 1024 * 1024
    if len(file_bytes) > max_bytes:
        raise ImageDecodeError(f"File too large. Maximum size: {config.MAX_FILE_MB}MB")

    mime_type = detect_mime_type(file_bytes)

    try:
        with Image.open(io.BytesIO(file_bytes)) as image:
            rgba = image.convert("RGBA")
    except (UnidentifiedImageError, OSError, ValueError) as e:
        raise ImageDecodeError(f"Failed to decode image: {e}") from e

    original_size = rgba.size
    if max_dimension is not None and max(rgba.size) > max_dimension:
        rgba.thumbnail((max_dimension, max_dimension), Image.Resampling.LANCZOS)

    width, height = rgba.size
    logger.debug(f"Decoded {mime_type} {original_size[0]}x{original_size[1]} -> {width}x{height}")
    return rgba.tobytes(), width, height
