import numpy as np
import pytest
from cluster_analysis.cluster import Cluster, make_point
from cluster_analysis.distance import (
    check_linkage,
    cluster_distance,
    cross_distances,
    point_distance,
)


def _cluster(*points):
    c = Cluster()
    for p in points:
        c.append(p)
    return c


def test_point_distance_basic_properties():
    """
    Verify basic mathematical properties of point distance.

    Checks:
    - zero to itself
    - symmetry
    - correctness on a known example
    """
    a = make_point(1, 0.0, 0.0)
    b = make_point(2, 3.0, 4.0)

    assert point_distance(a, a) == 0.0
    assert point_distance(b, b) == 0.0
    assert point_distance(a, b) == point_distance(b, a)
    assert pytest.approx(point_distance(a, b)) == 5.0


def test_point_distance_symmetric_random():
    rng = np.random.default_rng(3)
    for x1, y1, x2, y2 in rng.uniform(0, 1000, size=(20, 4)):
        a = make_point(1, x1, y1)
        b = make_point(2, x2, y2)
        assert point_distance(a, b) == point_distance(b, a)


def test_cross_distances_matches_naive():
    """
    Compare the vectorized cross distances with explicit loops.
    """
    rng = np.random.default_rng(0)
    c1 = _cluster(*[(k, x, y) for k, (x, y) in enumerate(rng.uniform(0, 1000, size=(4, 2)))])
    c2 = _cluster(*[(k, x, y) for k, (x, y) in enumerate(rng.uniform(0, 1000, size=(3, 2)))])

    D = cross_distances(c1, c2)
    assert D.shape == (4, 3)

    for i, a in enumerate(c1.points):
        for j, b in enumerate(c2.points):
            assert pytest.approx(D[i, j], abs=1e-9) == point_distance(a, b)


@pytest.mark.parametrize(
    "linkage, expected",
    [
        ("single", 1.0),
        ("complete", 4.0),
        ("average", (1.0 + 2.0 + 3.0 + 4.0) / 4),
    ],
)
def test_cluster_distance_linkages(linkage, expected):
    """
    c1 = {0, 1}, c2 = {2, 3} on the x axis: pairwise distances 2, 3, 1, 2.
    """
    c1 = _cluster((1, 0.0, 0.0), (2, 1.0, 0.0))
    c2 = _cluster((3, 2.0, 0.0), (4, 4.0, 0.0))
    # distances: 0-2=2, 0-4=4, 1-2=1, 1-4=3
    assert pytest.approx(cluster_distance(c1, c2, linkage), abs=1e-12) == expected


def test_cluster_distance_default_is_average():
    c1 = _cluster((1, 0.0, 0.0))
    c2 = _cluster((2, 0.0, 2.0), (3, 0.0, 4.0))
    assert cluster_distance(c1, c2) == pytest.approx(3.0)


def test_linkage_ordering_random_clusters():
    """
    single <= average <= complete and average >= 0 for the same pair.
    """
    rng = np.random.default_rng(7)
    for _ in range(25):
        m, k = rng.integers(1, 6, size=2)
        c1 = _cluster(*[(i, x, y) for i, (x, y) in enumerate(rng.uniform(0, 1000, size=(m, 2)))])
        c2 = _cluster(*[(i, x, y) for i, (x, y) in enumerate(rng.uniform(0, 1000, size=(k, 2)))])
        lo = cluster_distance(c1, c2, "single")
        mid = cluster_distance(c1, c2, "average")
        hi = cluster_distance(c1, c2, "complete")
        assert mid >= 0
        assert lo <= mid <= hi


def test_cluster_distance_equal_distances_stays_in_bounds():
    c1 = _cluster((1, 0.0, 0.0))
    c2 = _cluster((2, 0.1, 0.0), (3, 0.0, 0.1), (4, 0.0, 0.1))
    avg = cluster_distance(c1, c2, "average")
    assert cluster_distance(c1, c2, "single") <= avg <= cluster_distance(c1, c2, "complete")


def test_cluster_distance_rejects_empty():
    c = _cluster((1, 0.0, 0.0))
    with pytest.raises(ValueError):
        cluster_distance(c, Cluster())
    with pytest.raises(ValueError):
        cluster_distance(Cluster(), c)


def test_invalid_linkage():
    c = _cluster((1, 0.0, 0.0))
    with pytest.raises(ValueError):
        cluster_distance(c, c, "weird")
    with pytest.raises(ValueError):
        check_linkage("ward")
