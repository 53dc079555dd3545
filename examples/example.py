from cluster_analysis.agglomerative_clustering import ClusteringConfig, agglomerate, agglomerative
from cluster_analysis.cluster_set import ClusterSet
from cluster_analysis.formatters import write_clusters

if __name__ == "__main__":
    # Example dataset
    X = [
        [1.0, 0.0],
        [9.0, 1.0],
        [1.0, 1.0],
        [6.0, 2.0],
        [5.0, 6.0],
    ]

    # Perform agglomerative clustering on a plain array
    clusters, _ = agglomerative(X, n_clusters=3, linkage="average")

    for data, cluster in zip(X, clusters):
        print(f"Data point: {data}, Cluster: {cluster}")

    # Same data with explicit point ids and complete linkage
    points = ClusterSet.from_points((100 + k, x, y) for k, (x, y) in enumerate(X))
    result = agglomerate(points, ClusteringConfig(n_clusters=2, linkage="complete"))
    write_clusters(result.clusters)
