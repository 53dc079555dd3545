"""Text output of a cluster set: one line per cluster, points as id[x,y]."""

from __future__ import annotations

import sys
from typing import TextIO

from cluster_analysis.cluster import Cluster
from cluster_analysis.cluster_set import ClusterSet

__all__ = ["format_point", "format_cluster", "format_clusters", "write_clusters"]

HEADER = "Clusters:"


def format_point(point) -> str:
    return f"{int(point['id'])}[{float(point['x']):g},{float(point['y']):g}]"


def format_cluster(cluster: Cluster) -> str:
    """Points of the cluster as ``id[x,y]``, space separated, in id order."""
    ordered = sorted(cluster.points, key=lambda point: int(point["id"]))
    return " ".join(format_point(point) for point in ordered)


def format_clusters(clusters: ClusterSet) -> str:
    lines = [HEADER]
    for index, cluster in enumerate(clusters):
        lines.append(f"cluster {index}: {format_cluster(cluster)}")
    return "\n".join(lines) + "\n"


def write_clusters(clusters: ClusterSet, stream: TextIO | None = None) -> None:
    (stream or sys.stdout).write(format_clusters(clusters))
