#!/usr/bin/env python3
# agglomerative_clustering.py
"""
Agglomerative clustering of 2-D points by repeated nearest-pair merging.

Starting from one singleton cluster per point, the driver finds the globally
closest pair of clusters, absorbs the second into the first and compacts the
cluster set, until the requested number of clusters is left. Every merge is
recorded so that a full run can be exported as a SciPy-style linkage matrix.
Supported linkages:
    - 'average', 'single', 'complete'

Doxygen-style docstrings are used (with @param / @return tags).
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple
import logging

import numpy as np

from cluster_analysis.cluster_set import ClusterSet
from cluster_analysis.distance import DEFAULT_LINKAGE, LINKAGES

__all__ = [
    "ConfigurationError",
    "ClusteringConfig",
    "MergeStep",
    "AgglomerationResult",
    "agglomerate",
    "linkage_matrix",
    "labels_for",
    "agglomerative",
]

logger = logging.getLogger(__name__)


class ConfigurationError(ValueError):
    """Raised when a clustering run is configured with unusable parameters."""


@dataclass(frozen=True)
class ClusteringConfig:
    """Parameters of a clustering run."""

    n_clusters: int = 1
    linkage: str = DEFAULT_LINKAGE

    def validate(self, available: Optional[int] = None) -> None:
        """
        @param available: number of initial clusters, checked when given
        @raises ConfigurationError: on a non-positive target, an unknown
                                    linkage or a target above available
        """
        if self.linkage not in LINKAGES:
            raise ConfigurationError(f"Unsupported linkage: {self.linkage}")
        if self.n_clusters < 1:
            raise ConfigurationError("n_clusters must be a positive integer.")
        if available is not None:
            if available < 1:
                raise ConfigurationError("At least one initial cluster is required.")
            if self.n_clusters > available:
                raise ConfigurationError(
                    f"Requested {self.n_clusters} clusters but only {available} are available."
                )


@dataclass(frozen=True)
class MergeStep:
    """
    A single merge. Node ids follow SciPy's convention: the initial clusters
    are nodes 0..n-1 and the k-th merge (0-based) creates node n + k.
    """

    left: int
    right: int
    distance: float
    size: int


@dataclass
class AgglomerationResult:
    """Final cluster set of a run together with its merge history."""

    clusters: ClusterSet
    linkage: str
    initial_count: int
    point_count: int
    merges: List[MergeStep] = field(default_factory=list)

    @property
    def is_complete(self) -> bool:
        """True if everything was merged into a single cluster."""
        return len(self.clusters) == 1


def agglomerate(clusters: ClusterSet, config: Optional[ClusteringConfig] = None) -> AgglomerationResult:
    """
    Merge the nearest pair of clusters until config.n_clusters are left.

    Each step finds the nearest pair (i, j), absorbs cluster j into cluster i
    (re-sorted by id) and removes slot j, so the set shrinks by exactly one
    per step and the total number of points never changes. The set is
    modified in place.

    @param clusters: initial cluster set (every cluster non-empty)
    @param config: target count and linkage; defaults to one cluster, average
    @return: AgglomerationResult wrapping the same (now reduced) cluster set
    @raises ConfigurationError: if the set is empty, the target is not
                                positive or exceeds the number of clusters,
                                or the linkage is unknown. Nothing is
                                modified in that case.
    """
    config = config or ClusteringConfig()
    initial = len(clusters)
    config.validate(available=initial)

    result = AgglomerationResult(
        clusters=clusters,
        linkage=config.linkage,
        initial_count=initial,
        point_count=clusters.point_count(),
    )
    logger.info(
        f"Clustering {initial} clusters ({result.point_count} points) down to "
        f"{config.n_clusters} with {config.linkage} linkage"
    )

    # node_ids[k] is the SciPy node id of the cluster currently in slot k
    node_ids = list(range(initial))
    while len(clusters) > config.n_clusters:
        i, j, dist = clusters.find_nearest_pair(config.linkage)
        clusters.merge(i, j)
        clusters.remove_and_compact(j)

        step = MergeStep(left=node_ids[i], right=node_ids[j], distance=dist, size=clusters[i].size)
        result.merges.append(step)
        node_ids[i] = initial + len(result.merges) - 1
        del node_ids[j]
        logger.debug(
            f"Merged slots {i} and {j} at distance {dist:g}, {len(clusters)} clusters left"
        )

    logger.info(f"Finished after {len(result.merges)} merges")
    return result


def linkage_matrix(result: AgglomerationResult) -> np.ndarray:
    """
    Export a complete merge history as a SciPy linkage matrix.

    @param result: result of a run that ended with a single cluster and
                   started from singleton clusters
    @return: array Z shape (n-1, 4) with rows [idx1, idx2, dist, new_cluster_size]
    @raises ValueError: if the history does not describe a full tree
    """
    if not result.is_complete:
        raise ValueError("A linkage matrix needs a run merged down to a single cluster.")
    if result.point_count != result.initial_count:
        raise ValueError("A linkage matrix needs a run started from singleton clusters.")
    if not result.merges:
        return np.empty((0, 4), dtype=float)
    return np.array(
        [[step.left, step.right, step.distance, step.size] for step in result.merges],
        dtype=float,
    )


def labels_for(clusters: ClusterSet, n_points: int) -> np.ndarray:
    """
    Label each point id with the index of the cluster containing it.

    @param clusters: cluster set whose point ids are exactly 0..n_points-1
    @param n_points: number of points
    @return: integer array shape (n_points,)
    """
    labels = np.full(n_points, -1, dtype=int)
    for label, cluster in enumerate(clusters):
        labels[cluster.ids] = label
    return labels


def agglomerative(X: np.ndarray,
                  n_clusters: int = 1,
                  linkage: str = DEFAULT_LINKAGE,
                  return_linkage: bool = False) -> Tuple[np.ndarray, Optional[np.ndarray]]:
    """
    Cluster the rows of a 2-D coordinate array.

    Row k becomes the point with id k.

    @param X: data matrix shape (n_samples, 2)
    @param n_clusters: desired number of clusters (1 <= n_clusters <= n_samples)
    @param linkage: one of 'average', 'single', 'complete'
    @param return_linkage: if True, also return the SciPy-style linkage matrix;
                           requires n_clusters == 1

    @return: tuple (labels, linkage_matrix_or_None)
        - labels: integer array shape (n_samples,) with labels 0..(n_clusters-1)
        - linkage_matrix_or_None: np.ndarray shape (n-1, 4) if return_linkage else None
    """
    X = np.asarray(X, dtype=float)
    if X.ndim != 2 or X.shape[1] != 2:
        raise ValueError("X must be a 2D array of shape (n_samples, 2).")
    if return_linkage and n_clusters != 1:
        raise ValueError("return_linkage requires n_clusters == 1.")

    n = X.shape[0]
    config = ClusteringConfig(n_clusters=n_clusters, linkage=linkage)
    config.validate(available=n)

    clusters = ClusterSet.from_points((k, X[k, 0], X[k, 1]) for k in range(n))
    result = agglomerate(clusters, config)

    labels = labels_for(result.clusters, n)
    if return_linkage:
        return labels, linkage_matrix(result)
    return labels, None
