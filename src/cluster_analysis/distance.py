"""
Point and cluster distances under the supported linkages.

Supported linkages:
    - 'average' (unweighted pair-group average, the default)
    - 'single'  (minimum pairwise distance)
    - 'complete' (maximum pairwise distance)

Nothing is cached: every cluster distance is recomputed from the member
points, O(size(c1) * size(c2)).
"""

import numpy as np

from cluster_analysis.cluster import Cluster

__all__ = [
    "LINKAGES",
    "DEFAULT_LINKAGE",
    "check_linkage",
    "point_distance",
    "cross_distances",
    "cluster_distance",
]

LINKAGES = ("average", "single", "complete")
DEFAULT_LINKAGE = "average"


def check_linkage(linkage: str) -> str:
    """
    @param linkage: linkage name
    @return: the same name if supported
    @raises ValueError: for an unsupported linkage
    """
    if linkage not in LINKAGES:
        raise ValueError(f"Unsupported linkage: {linkage}")
    return linkage


def point_distance(a, b) -> float:
    """
    Euclidean distance between two points.

    @param a: POINT_DTYPE record (or anything with 'x' and 'y' fields)
    @param b: POINT_DTYPE record
    @return: sqrt((a.x - b.x)^2 + (a.y - b.y)^2)
    """
    dx = float(a["x"]) - float(b["x"])
    dy = float(a["y"]) - float(b["y"])
    return float(np.sqrt(dx * dx + dy * dy))


def cross_distances(c1: Cluster, c2: Cluster) -> np.ndarray:
    """
    Distances between every point of c1 and every point of c2.

    @param c1: first cluster
    @param c2: second cluster
    @return: array D shape (size(c1), size(c2)), D[i, j] = distance between
             the i-th point of c1 and the j-th point of c2
    """
    A = c1.coordinates
    B = c2.coordinates
    diff = A[:, np.newaxis, :] - B[np.newaxis, :, :]
    return np.sqrt(np.sum(diff * diff, axis=2))


def cluster_distance(c1: Cluster, c2: Cluster, linkage: str = DEFAULT_LINKAGE) -> float:
    """
    Distance between two non-empty clusters under the given linkage.

    @param c1: first cluster (non-empty)
    @param c2: second cluster (non-empty)
    @param linkage: 'average' | 'single' | 'complete'
    @return: mean, minimum or maximum pairwise point distance
    @raises ValueError: if either cluster is empty or linkage is unsupported
    """
    check_linkage(linkage)
    if c1.size == 0 or c2.size == 0:
        raise ValueError("Cluster distance requires two non-empty clusters.")

    D = cross_distances(c1, c2)
    if linkage == "single":
        return float(D.min())
    elif linkage == "complete":
        return float(D.max())
    # rounding in the sum can push the mean just outside [min, max]
    return float(np.clip(D.sum() / D.size, D.min(), D.max()))
