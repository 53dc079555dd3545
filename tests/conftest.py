import matplotlib

matplotlib.use("Agg")

import pytest

from cluster_analysis.cluster_set import ClusterSet


@pytest.fixture
def two_pairs():
    """Two tight pairs far apart: {1, 2} near the origin, {3, 4} near (10, 10)."""
    return ClusterSet.from_points([(1, 0.0, 0.0), (2, 0.0, 1.0), (3, 10.0, 10.0), (4, 10.0, 11.0)])


@pytest.fixture
def point_file(tmp_path):
    def _write(text, name="points.txt"):
        path = tmp_path / name
        path.write_text(text)
        return path

    return _write
