"""
Deterministic k-means refinement of median-cut seeds.

Each iteration maps one centroid snapshot to the next; nothing is updated in
place, so identical samples and seeds always produce identical clusters.
"""

from functools import reduce
from typing import List, Sequence

import numpy as np
from loguru import logger

from .models import RGB, ColorCluster

KMEANS_ITERATIONS = 8


def assign_to_centroids(samples: np.ndarray, centroids: np.ndarray) -> np.ndarray:
    """
    Index of the nearest centroid (Euclidean RGB) for every sample.

    Ties resolve to the lowest centroid index.
    """
    points = samples.astype(np.float64)
    centers = centroids.astype(np.float64)
    # Squared distances via |x|^2 - 2x.c + |c|^2; exact for 8-bit integer inputs
    distances = (
        np.einsum("ij,ij->i", points, points)[:, None]
        - 2.0 * points @ centers.T
        + np.einsum("ij,ij->i", centers, centers)[None, :]
    )
    return np.argmin(distances, axis=1)


def _channel_sums(samples: np.ndarray, labels: np.ndarray, k: int) -> np.ndarray:
    return np.stack(
        [np.bincount(labels, weights=samples[:, channel], minlength=k) for channel in range(3)],
        axis=1,
    )


def refine_step(samples: np.ndarray, centroids: np.ndarray) -> np.ndarray:
    """
    One assignment + update pass, returning a new centroid array.

    Non-empty clusters move to the rounded mean of their members; empty
    clusters keep their previous position.
    """
    k = len(centroids)
    labels = assign_to_centroids(samples, centroids)
    counts = np.bincount(labels, minlength=k)
    sums = _channel_sums(samples.astype(np.float64), labels, k)

    means = np.divide(sums, counts[:, None], out=np.zeros_like(sums), where=counts[:, None] > 0)
    rounded = np.floor(means + 0.5)
    return np.where(counts[:, None] > 0, rounded, centroids)


def refine_centroids(samples: np.ndarray, seeds: Sequence[RGB],
                     iterations: int = KMEANS_ITERATIONS) -> List[ColorCluster]:
    """
    Run a fixed number of k-means iterations and build the final clusters.

    Args:
        samples: (N, 3) array of RGB samples, N > 0
        seeds: initial centroids (median-cut output)
        iterations: number of refinement passes

    Returns:
        Clusters with at least one member, in centroid order
    """
    initial = np.array([tuple(seed) for seed in seeds], dtype=np.float64)
    centroids = reduce(lambda current, _: refine_step(samples, current), range(iterations), initial)

    labels = assign_to_centroids(samples, centroids)
    total = len(samples)
    clusters = []
    for index, centroid in enumerate(centroids):
        members = samples[labels == index]
        if len(members) == 0:
            continue
        clusters.append(ColorCluster(
            centroid=RGB.from_sequence(centroid),
            members=members,
            weight=len(members) / total,
        ))

    logger.debug(f"K-means: {len(seeds)} seeds -> {len(clusters)} populated clusters "
                 f"after {iterations} iterations")
    return clusters
