import matplotlib.pyplot as plt
import numpy as np

from cluster_analysis.agglomerative_clustering import agglomerate, linkage_matrix
from cluster_analysis.cluster_set import ClusterSet
from cluster_analysis.plotting import plot_clusters, plot_dendrogram, save_cluster_plot, save_dendrogram


def test_plot_clusters_draws_one_collection_per_cluster(two_pairs):
    fig, ax = plt.subplots()
    try:
        plot_clusters(ax, two_pairs, annotate=False)
        assert len(ax.collections) == 4
        assert ax.get_title() == 'Agglomerative Clustering Results'
    finally:
        plt.close(fig)


def test_plot_dendrogram_uses_labels():
    clusters = ClusterSet.from_points([(7, 0.0, 0.0), (8, 1.0, 0.0), (9, 5.0, 0.0)])
    Z = linkage_matrix(agglomerate(clusters))
    fig, ax = plt.subplots()
    try:
        plot_dendrogram(ax, Z, labels=["7", "8", "9"])
        assert len(ax.collections) > 0
        assert ax.get_ylabel() == 'Distance'
    finally:
        plt.close(fig)


def test_save_figures(tmp_path, two_pairs):
    save_cluster_plot(two_pairs, tmp_path / "clusters.png")
    assert (tmp_path / "clusters.png").stat().st_size > 0

    Z = np.array([[0.0, 1.0, 1.0, 2.0], [2.0, 3.0, 4.0, 3.0]])
    save_dendrogram(Z, tmp_path / "dendrogram.png")
    assert (tmp_path / "dendrogram.png").stat().st_size > 0
