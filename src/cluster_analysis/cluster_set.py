"""
Dense, ordered set of clusters with nearest-pair search and compaction.
"""

from typing import Iterable, Iterator, List, Tuple

import numpy as np

from cluster_analysis.cluster import Cluster
from cluster_analysis.distance import DEFAULT_LINKAGE, check_linkage, cluster_distance

__all__ = ["ClusterSet"]


class ClusterSet:
    """
    Ordered sequence of clusters indexed 0..len-1 with no gaps.

    The set owns its clusters: a cluster removed by :meth:`remove_and_compact`
    is cleared and must not be used afterwards.
    """

    def __init__(self, clusters: Iterable[Cluster] = ()):
        self._clusters: List[Cluster] = list(clusters)

    @classmethod
    def from_points(cls, points: Iterable) -> "ClusterSet":
        """
        One singleton cluster (capacity 1) per point, in the given order.

        @param points: iterable of POINT_DTYPE records or (id, x, y) triples
        @return: new ClusterSet
        """
        return cls(Cluster.singleton(point) for point in points)

    def append(self, cluster: Cluster) -> None:
        self._clusters.append(cluster)

    def __len__(self) -> int:
        return len(self._clusters)

    def __getitem__(self, idx: int) -> Cluster:
        return self._clusters[idx]

    def __iter__(self) -> Iterator[Cluster]:
        return iter(self._clusters)

    def __repr__(self) -> str:
        return f"ClusterSet({self._clusters!r})"

    def point_count(self) -> int:
        """Total number of points across all clusters."""
        return sum(cluster.size for cluster in self._clusters)

    def ids(self) -> np.ndarray:
        """Ids of all points, cluster by cluster."""
        if not self._clusters:
            return np.empty(0, dtype=np.int64)
        return np.concatenate([cluster.ids for cluster in self._clusters])

    def find_nearest_pair(self, linkage: str = DEFAULT_LINKAGE) -> Tuple[int, int, float]:
        """
        Find the two closest clusters.

        Pairs are scanned with i ascending (outer) and j > i ascending (inner).
        A pair replaces the current best when its distance is less than or
        equal to it, so among equally close pairs the last one scanned wins.

        @param linkage: 'average' | 'single' | 'complete'
        @return: tuple (i, j, distance) with i < j
        @raises ValueError: if the set holds fewer than two clusters
        """
        check_linkage(linkage)
        n = len(self._clusters)
        if n < 2:
            raise ValueError("Nearest-pair search requires at least two clusters.")

        best_i, best_j = 0, 1
        best = cluster_distance(self._clusters[0], self._clusters[1], linkage)
        for i in range(n):
            for j in range(i + 1, n):
                dist = cluster_distance(self._clusters[i], self._clusters[j], linkage)
                if dist <= best:
                    best = dist
                    best_i, best_j = i, j
        return best_i, best_j, best

    def merge(self, i: int, j: int) -> None:
        """
        Absorb cluster j into cluster i (re-sorted by id). Cluster j keeps its
        points until it is removed.

        @raises ValueError: if i == j
        """
        if i == j:
            raise ValueError("Cannot merge a cluster with itself.")
        self._clusters[i].absorb(self._clusters[j])

    def remove_and_compact(self, idx: int) -> int:
        """
        Remove the cluster at idx, shifting every later cluster one slot down.

        Each shifted cluster is re-sorted by id.

        @param idx: index of the cluster to remove (0 <= idx < len)
        @return: new number of clusters
        @raises IndexError: if idx is out of range
        """
        n = len(self._clusters)
        if not 0 <= idx < n:
            raise IndexError(f"Cluster index {idx} out of range for {n} clusters.")

        removed = self._clusters.pop(idx)
        removed.clear()
        for cluster in self._clusters[idx:]:
            cluster.sort_by_id()
        return len(self._clusters)

    def clear(self) -> None:
        """Release every cluster and empty the set."""
        for cluster in self._clusters:
            cluster.clear()
        self._clusters = []
