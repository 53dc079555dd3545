"""Loading point files into an initial cluster set."""

from __future__ import annotations

from pathlib import Path
import logging
import math
import re

import numpy as np

from cluster_analysis.cluster import points_from_records
from cluster_analysis.cluster_set import ClusterSet

__all__ = [
    "LoadError",
    "MAX_COORDINATE",
    "load_clusters",
    "parse_clusters",
    "parse_points",
]

logger = logging.getLogger(__name__)

MIN_COORDINATE = 0.0
MAX_COORDINATE = 1000.0

_HEADER = re.compile(r"count=(\d+)", re.ASCII)
INTEGER = re.compile(r"[+-]?\d+", re.ASCII)
_DECIMAL = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)


class LoadError(ValueError):
    """Raised when a point file cannot be read or is malformed."""

    def __init__(self, message: str, line: int | None = None):
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)
        self.line = line


def load_clusters(path: str | Path) -> ClusterSet:
    """Load a point file and return one singleton cluster per point."""

    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise LoadError(f"Cannot read point file '{path}': {exc}") from exc
    clusters = parse_clusters(text)
    logger.info(f"Loaded {len(clusters)} points from {path}")
    return clusters


def parse_clusters(text: str) -> ClusterSet:
    return ClusterSet.from_points(parse_points(text))


def parse_points(text: str):
    """
    Parse the ``count=N`` format strictly.

    The header must be exactly ``count=N`` with N >= 1, followed by exactly N
    lines of ``<id> <x> <y>`` with coordinates in [0, 1000]. Blank lines
    after the last point are ignored; anything else is a LoadError.
    """

    lines = text.splitlines()
    if not lines:
        raise LoadError("File is empty, expected a 'count=N' header.", line=1)

    match = _HEADER.fullmatch(lines[0].strip())
    if match is None:
        raise LoadError(f"Invalid cluster count header {lines[0]!r}, expected 'count=N'.", line=1)
    count = int(match.group(1))
    if count < 1:
        raise LoadError(f"Cluster count must be at least 1, got {count}.", line=1)

    data = lines[1 : count + 1]
    if len(data) < count:
        raise LoadError(f"Expected {count} points but found {len(data)}.")
    for offset, extra in enumerate(lines[count + 1 :], start=count + 2):
        if extra.strip():
            raise LoadError(f"Found more points than the declared count of {count}.", line=offset)

    records = [_parse_point(line, number) for number, line in enumerate(data, start=2)]
    points = points_from_records(records)

    ids, counts = np.unique(points["id"], return_counts=True)
    duplicates = ids[counts > 1]
    if duplicates.size:
        logger.warning(f"Duplicate point ids in input: {duplicates.tolist()}")
    return points


def _parse_point(line: str, number: int) -> tuple[int, float, float]:
    fields = line.split()
    if len(fields) != 3:
        raise LoadError(f"Expected '<id> <x> <y>', got {line!r}.", line=number)
    if INTEGER.fullmatch(fields[0]) is None or not all(_DECIMAL.fullmatch(f) for f in fields[1:]):
        raise LoadError(f"Invalid point {line!r}.", line=number)
    try:
        point_id = int(fields[0])
        x = float(fields[1])
        y = float(fields[2])
    except ValueError as exc:
        raise LoadError(f"Invalid point {line!r}: {exc}", line=number) from exc
    for value in (x, y):
        if not math.isfinite(value) or not MIN_COORDINATE <= value <= MAX_COORDINATE:
            raise LoadError(
                f"Coordinate {value:g} outside [{MIN_COORDINATE:g}, {MAX_COORDINATE:g}].",
                line=number,
            )
    return point_id, x, y

