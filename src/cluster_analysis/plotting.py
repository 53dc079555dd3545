from pathlib import Path
from typing import Optional, Union

import matplotlib.pyplot as plt
from matplotlib.backend_bases import FigureCanvasBase
from matplotlib.axes import Axes
import numpy as np

from cluster_analysis.cluster_set import ClusterSet


def plot_clusters(axis: Axes, clusters: ClusterSet, annotate: bool = True) -> None:
    """
    Plots the points of every cluster in 2D, one colour per cluster.

    Args:
        axis (Axes): Axes to draw on.
        clusters (ClusterSet): Clusters to draw, labelled by their index.
        annotate (bool): Write each point id next to its marker.
    """
    for index, cluster in enumerate(clusters):
        coords = cluster.coordinates
        axis.scatter(coords[:, 0], coords[:, 1], label=f'Cluster {index}')
        if annotate:
            for point_id, (x, y) in zip(cluster.ids, coords):
                axis.annotate(str(point_id), (x, y), textcoords='offset points', xytext=(3, 3), fontsize=8)

    axis.set_title('Agglomerative Clustering Results')
    axis.set_xlabel('x')
    axis.set_ylabel('y')
    if len(clusters):
        axis.legend()
    axis.grid(True)


def plot_dendrogram(axis: Axes, Z: np.ndarray, labels: Optional[list] = None) -> None:
    """
    Plots the dendrogram for the hierarchical clustering.

    Args:
        axis (Axes): Axes to draw on.
        Z (np.ndarray): Linkage matrix of shape (n_samples - 1, 4).
        labels (list): Optional leaf labels, indexed by singleton node id.
    """
    from scipy.cluster.hierarchy import dendrogram

    dendrogram(Z, ax=axis, labels=labels)
    axis.set_title('Dendrogram for Agglomerative Clustering')
    axis.set_xlabel('Point id')
    axis.set_ylabel('Distance')


def supported_formats() -> set:
    """File extensions matplotlib can write figures to."""
    return set(FigureCanvasBase.get_supported_filetypes())


def save_cluster_plot(clusters: ClusterSet, path: Union[str, Path]) -> None:
    fig, ax = plt.subplots(figsize=(8, 8))
    try:
        plot_clusters(ax, clusters)
        fig.savefig(path)
    finally:
        plt.close(fig)


def save_dendrogram(Z: np.ndarray, path: Union[str, Path], labels: Optional[list] = None) -> None:
    fig, ax = plt.subplots(figsize=(10, 7))
    try:
        plot_dendrogram(ax, Z, labels=labels)
        fig.savefig(path)
    finally:
        plt.close(fig)
