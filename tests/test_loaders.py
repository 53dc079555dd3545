import logging

import pytest

from cluster_analysis.loaders import LoadError, load_clusters, parse_points


def test_load_clusters_builds_singletons(point_file):
    path = point_file("count=3\n40 86 663\n43 747 938\n47 285 973\n")
    clusters = load_clusters(path)

    assert len(clusters) == 3
    assert [c.ids.tolist() for c in clusters] == [[40], [43], [47]]
    assert clusters[1].coordinates.tolist() == [[747.0, 938.0]]
    assert all(c.capacity == 1 for c in clusters)


def test_load_clusters_accepts_floats_and_trailing_blank_lines(point_file):
    path = point_file("count=2\n1 0.5 1000\n2 1e2 0\n\n\n")
    clusters = load_clusters(path)
    assert clusters.point_count() == 2
    assert clusters[1].coordinates.tolist() == [[100.0, 0.0]]


def test_load_clusters_missing_file(tmp_path):
    with pytest.raises(LoadError):
        load_clusters(tmp_path / "missing.txt")


@pytest.mark.parametrize(
    "text",
    [
        "",
        "count=\n1 0 0\n",
        "count=abc\n1 0 0\n",
        "count=0\n",
        "count=-1\n1 0 0\n",
        "count=2x\n1 0 0\n2 0 0\n",
        "cnt=1\n1 0 0\n",
        "count=2\n1 0 0\n",
        "count=1\n1 0 0\n2 0 0\n",
        "count=1\n1 0\n",
        "count=1\n1 0 0 0\n",
        "count=1\nx 0 0\n",
        "count=1\n1.5 0 0\n",
        "count=1\n1 a 0\n",
        "count=1\n1 -0.1 0\n",
        "count=1\n1 0 1000.5\n",
        "count=1\n1 nan 0\n",
        "count=+1\n1 0 0\n",
        "count=\u0661\n1 0 0\n",
        "count=1\n1_0 0 0\n",
        "count=1\n1 1_0 0\n",
        "count=1\n1 0 inf\n",
        "count=1\n\u0661 0 0\n",
        "count=1\n1 \u0665 0\n",
        "count=2\n1 0 0\n\n2 0 0\n",
    ],
)
def test_parse_points_rejects_malformed(text):
    with pytest.raises(LoadError):
        parse_points(text)


def test_load_error_reports_line():
    with pytest.raises(LoadError) as excinfo:
        parse_points("count=2\n1 0 0\n2 0 2000\n")
    assert excinfo.value.line == 3
    assert "line 3" in str(excinfo.value)


def test_duplicate_ids_are_logged(caplog):
    with caplog.at_level(logging.WARNING, logger="cluster_analysis.loaders"):
        points = parse_points("count=2\n1 0 0\n1 5 5\n")
    assert points["id"].tolist() == [1, 1]
    assert "Duplicate point ids" in caplog.text


def test_parse_points_accepts_signed_ids_and_exponents():
    points = parse_points("count=2\n-3 +1.5 .5\n+4 1E2 10.\n")
    assert points["id"].tolist() == [-3, 4]
    assert points["x"].tolist() == [1.5, 100.0]
    assert points["y"].tolist() == [0.5, 10.0]
