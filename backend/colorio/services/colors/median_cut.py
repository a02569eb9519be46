"""
Median cut partitioning.

Recursively bisects the sampled colors along their widest channel to produce
seed centroids for k-means refinement.
"""

import math
from typing import List

import numpy as np

from .models import ColorBucket, RGB


def partition_depth(target_buckets: int) -> int:
    """Recursion depth whose full binary split yields at least ``target_buckets`` leaves."""
    if target_buckets <= 1:
        return 0
    return int(math.ceil(math.log2(target_buckets)))


def median_cut(colors: np.ndarray, depth: int) -> List[ColorBucket]:
    """
    Split ``colors`` into leaf buckets.

    A set becomes a leaf once ``depth`` is exhausted or it has fewer than two
    members. Otherwise it is stably sorted on its widest channel and split at
    ``len // 2``; both halves recurse independently.

    Args:
        colors: (N, 3) array of RGB samples
        depth: remaining split levels

    Returns:
        Leaf buckets in left-to-right order
    """
    if len(colors) == 0:
        return []

    bucket = ColorBucket.from_colors(colors)
    if depth <= 0 or len(colors) < 2:
        return [bucket]

    channel = bucket.widest_channel()
    ordered = colors[np.argsort(colors[:, channel], kind="stable")]
    mid = len(ordered) // 2

    return median_cut(ordered[:mid], depth - 1) + median_cut(ordered[mid:], depth - 1)


def initial_centroids(colors: np.ndarray, target_buckets: int) -> List[RGB]:
    """Median-cut seed centroids, one per leaf bucket."""
    buckets = median_cut(colors, partition_depth(target_buckets))
    return [bucket.centroid for bucket in buckets]
