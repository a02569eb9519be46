"""
Cluster de-duplication.

Drops negligible clusters, ranks the rest by pixel share and folds
perceptually indistinguishable clusters into the stronger one.
"""

from typing import List, Optional, Sequence

from loguru import logger

from .models import ColorCluster
from .space import delta_e

DELTA_E_THRESHOLD = 10.0
MIN_CLUSTER_PERCENTAGE = 0.5


def deduplicate_clusters(clusters: Sequence[ColorCluster],
                         threshold: float = DELTA_E_THRESHOLD,
                         min_percentage: float = MIN_CLUSTER_PERCENTAGE,
                         limit: Optional[int] = None) -> List[ColorCluster]:
    """
    Merge near-duplicate clusters.

    Clusters at or below ``min_percentage`` are discarded, the survivors are
    stably sorted by descending percentage, then walked in order: a cluster
    within ``threshold`` Delta-E of an already accepted centroid is absorbed
    by the first such cluster (which keeps its centroid), otherwise it is
    accepted as a new distinct color. The result is stably re-sorted by
    descending percentage before ``limit`` is applied.

    Args:
        clusters: refined k-means clusters
        threshold: Delta-E below which two centroids count as duplicates
        min_percentage: clusters must exceed this share to be kept
        limit: maximum number of clusters returned

    Returns:
        Distinct clusters, strongest first
    """
    significant = [c for c in clusters if c.percentage > min_percentage]
    ranked = sorted(significant, key=lambda c: c.percentage, reverse=True)

    accepted: List[ColorCluster] = []
    for cluster in ranked:
        for index, kept in enumerate(accepted):
            if delta_e(kept.centroid, cluster.centroid) < threshold:
                accepted[index] = kept.merged_with(cluster)
                break
        else:
            accepted.append(cluster)

    # Merges can lift a later cluster above an earlier one
    accepted.sort(key=lambda c: c.percentage, reverse=True)

    logger.debug(f"Dedup: {len(clusters)} clusters -> {len(significant)} significant "
                 f"-> {len(accepted)} distinct")

    if limit is not None:
        accepted = accepted[:limit]
    return accepted
