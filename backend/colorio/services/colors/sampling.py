"""
Pixel sampling for color extraction.

Walks a flat RGBA buffer on a fixed stride so the amount of work stays bounded
no matter how large the source image is.
"""

import math
from typing import Sequence, Union

import numpy as np
from loguru import logger

MAX_SAMPLES = 40000
ALPHA_THRESHOLD = 128

PixelBuffer = Union[bytes, bytearray, memoryview, np.ndarray, Sequence[int]]


def sampling_step(total_pixels: int, max_samples: int = MAX_SAMPLES) -> int:
    """Stride applied to both axes so roughly ``max_samples`` pixels are visited."""
    if total_pixels <= 0:
        return 1
    return max(1, int(math.floor(math.sqrt(total_pixels / max_samples))))


def as_rgba_array(pixel_buffer: PixelBuffer, width: int, height: int) -> np.ndarray:
    """
    View a flat RGBA buffer as a (height, width, 4) uint8 array.

    Raises:
        ValueError: if the buffer holds fewer than width * height * 4 bytes
    """
    if isinstance(pixel_buffer, (bytes, bytearray, memoryview)):
        data = np.frombuffer(pixel_buffer, dtype=np.uint8)
    else:
        data = np.asarray(pixel_buffer, dtype=np.uint8).ravel()

    expected = width * height * 4
    if data.size < expected:
        raise ValueError(
            f"Pixel buffer too small for {width}x{height} RGBA image: "
            f"{data.size} < {expected} bytes"
        )
    return data[:expected].reshape(height, width, 4)


def sample_pixels(pixel_buffer: PixelBuffer, width: int, height: int,
                  include_transparent: bool = False,
                  max_samples: int = MAX_SAMPLES) -> np.ndarray:
    """
    Sample RGB triples from an RGBA buffer.

    Every ``step``-th pixel on both axes is visited in row-major order. Pixels
    with alpha below 128 are skipped unless ``include_transparent`` is set.

    Returns:
        (N, 3) uint8 array; empty when nothing qualifies
    """
    total_pixels = width * height
    if total_pixels <= 0:
        logger.debug(f"Empty image {width}x{height}, nothing to sample")
        return np.empty((0, 3), dtype=np.uint8)

    image = as_rgba_array(pixel_buffer, width, height)
    step = sampling_step(total_pixels, max_samples)
    visited = image[::step, ::step].reshape(-1, 4)

    if include_transparent:
        kept = visited
    else:
        kept = visited[visited[:, 3] >= ALPHA_THRESHOLD]

    logger.debug(f"Sampled {len(kept)}/{len(visited)} pixels "
                 f"(step={step}, include_transparent={include_transparent})")
    return kept[:, :3].copy()
