"""
Palette extraction pipeline.

Turns a raw RGBA pixel buffer into a small ranked list of perceptually
distinct colors:

    sample -> median cut seeds -> k-means refinement -> Delta-E dedup -> Color

The pipeline is synchronous and side-effect free apart from logging and
stage timings.
"""

import time
from typing import Optional

from loguru import logger

from .dedup import deduplicate_clusters
from .errors import EmptyImageError
from .kmeans import refine_centroids
from .median_cut import initial_centroids
from .models import Color, ColorCluster, ExtractionOptions, ExtractionResult, round_half_up
from .names import get_color_name
from .sampling import PixelBuffer, sample_pixels
from .space import rgb_to_hsl
from ...utils.metrics import performance_monitor


def cluster_to_color(cluster: ColorCluster) -> Color:
    """Named Color for a cluster centroid, percentage rounded to one decimal."""
    rgb = cluster.centroid
    return Color(
        rgb=rgb,
        hsl=rgb_to_hsl(rgb),
        name=get_color_name(rgb),
        percentage=round_half_up(cluster.percentage * 10) / 10,
    )


def extract_colors(pixel_buffer: PixelBuffer, width: int, height: int,
                   options: Optional[ExtractionOptions] = None) -> ExtractionResult:
    """
    Extract the dominant colors of an image.

    Args:
        pixel_buffer: flat RGBA bytes, row-major, 4 bytes per pixel
        width: image width in pixels
        height: image height in pixels
        options: palette size and transparency policy

    Returns:
        ExtractionResult with colors ranked by share, strongest first

    Raises:
        EmptyImageError: if no pixel survives sampling
        ValueError: if the buffer is smaller than width * height * 4
    """
    options = options or ExtractionOptions()
    start = time.perf_counter()
    logger.info(f"Starting extraction of {width}x{height} image "
                f"(color_count={options.color_count}, include_transparent={options.include_transparent})")

    with performance_monitor("pixel_sampling", width=width, height=height):
        samples = sample_pixels(pixel_buffer, width, height,
                                include_transparent=options.include_transparent)

    if len(samples) == 0:
        raise EmptyImageError(width, height, options.include_transparent)

    with performance_monitor("median_cut", sample_count=len(samples)):
        seeds = initial_centroids(samples, options.color_count * 2)

    with performance_monitor("kmeans", seed_count=len(seeds)):
        clusters = refine_centroids(samples, seeds)

    with performance_monitor("dedup", cluster_count=len(clusters)):
        distinct = deduplicate_clusters(clusters, limit=options.color_count)

    if not distinct:
        raise EmptyImageError(width, height, options.include_transparent)

    colors = [cluster_to_color(cluster) for cluster in distinct]
    processing_time = (time.perf_counter() - start) * 1000

    summary = ", ".join(f"{c.hex} {c.percentage}%" for c in colors)
    logger.info(f"Extracted {len(colors)} colors from {len(samples)} samples "
                f"in {processing_time:.1f}ms: {summary}")

    return ExtractionResult(colors=colors, dominant_color=colors[0], processing_time=processing_time)
