"""
Points and the growable cluster container.

A point is a single record of the NumPy structured dtype ``POINT_DTYPE``
(``id``, ``x``, ``y``). A :class:`Cluster` owns a private point buffer that
grows in fixed chunks of ``CLUSTER_CHUNK`` slots and never shrinks, except
when it is explicitly released with :meth:`Cluster.clear`.

Doxygen-style docstrings are used (with @param / @return tags).
"""

from typing import Iterable, Iterator, Optional
import numpy as np

__all__ = [
    "POINT_DTYPE",
    "CLUSTER_CHUNK",
    "make_point",
    "points_from_records",
    "Cluster",
]

POINT_DTYPE = np.dtype([("id", np.int64), ("x", np.float64), ("y", np.float64)])

# Growth step of a cluster buffer, in points.
CLUSTER_CHUNK = 10


def make_point(point_id: int, x: float, y: float) -> np.void:
    """
    Build a single point record.

    @param point_id: caller-unique integer id (not validated here)
    @param x: x coordinate
    @param y: y coordinate
    @return: scalar record of dtype POINT_DTYPE
    """
    return np.array((point_id, x, y), dtype=POINT_DTYPE)[()]


def points_from_records(records: Iterable) -> np.ndarray:
    """
    Convert an iterable of (id, x, y) tuples or point records to a point array.

    @param records: iterable of triples or POINT_DTYPE records
    @return: 1D array of dtype POINT_DTYPE
    """
    if isinstance(records, np.ndarray) and records.dtype == POINT_DTYPE:
        return records.copy()
    return np.array([tuple(r) for r in records], dtype=POINT_DTYPE)


class Cluster:
    """
    Growable, exclusively owned collection of points.

    Invariant: ``0 <= size <= capacity``. A capacity of zero means no buffer
    is allocated. Accessors return copies, so no caller ever holds a
    reference into the internal buffer across an append or absorb.
    """

    __slots__ = ("_size", "_capacity", "_points")

    def __init__(self, capacity: int = 0):
        """
        @param capacity: initial capacity (>= 0); 0 leaves storage unallocated
        @raises ValueError: if capacity is negative
        """
        if capacity < 0:
            raise ValueError("Cluster capacity must be non-negative.")
        self._size = 0
        self._capacity = 0
        self._points: Optional[np.ndarray] = None
        if capacity > 0:
            self._points = np.empty(capacity, dtype=POINT_DTYPE)
            self._capacity = capacity

    @classmethod
    def singleton(cls, point) -> "Cluster":
        """Cluster of capacity 1 holding ``point``."""
        cluster = cls(1)
        cluster.append(point)
        return cluster

    @property
    def size(self) -> int:
        return self._size

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def points(self) -> np.ndarray:
        """Copy of the live points, in storage order."""
        if self._points is None:
            return np.empty(0, dtype=POINT_DTYPE)
        return self._points[: self._size].copy()

    @property
    def ids(self) -> np.ndarray:
        if self._points is None:
            return np.empty(0, dtype=np.int64)
        return self._points["id"][: self._size].copy()

    @property
    def coordinates(self) -> np.ndarray:
        """(size, 2) float array of the x and y coordinates."""
        if self._points is None:
            return np.empty((0, 2), dtype=float)
        live = self._points[: self._size]
        return np.column_stack((live["x"], live["y"]))

    def resize(self, new_capacity: int) -> None:
        """
        Grow the buffer to ``new_capacity`` slots, preserving existing points.

        Does nothing if the current capacity is already large enough; the
        buffer never shrinks here.

        @param new_capacity: requested capacity (>= 0)
        @raises ValueError: if new_capacity is negative
        @raises MemoryError: if the new buffer cannot be allocated; the
                             cluster is left unchanged
        """
        if new_capacity < 0:
            raise ValueError("Cluster capacity must be non-negative.")
        if self._capacity >= new_capacity:
            return
        grown = np.empty(new_capacity, dtype=POINT_DTYPE)
        if self._points is not None:
            grown[: self._size] = self._points[: self._size]
        self._points = grown
        self._capacity = new_capacity

    def append(self, point) -> None:
        """
        Append a point, growing by CLUSTER_CHUNK steps when the buffer is full.

        @param point: POINT_DTYPE record or (id, x, y) triple
        """
        capacity = self._capacity
        while self._size >= capacity:
            capacity += CLUSTER_CHUNK
        self.resize(capacity)
        self._points[self._size] = tuple(point)
        self._size += 1

    def clear(self) -> None:
        """Release storage and reset to an empty, unallocated cluster."""
        self._points = None
        self._capacity = 0
        self._size = 0

    def sort_by_id(self) -> None:
        """Sort points ascending by id."""
        if self._size > 1:
            live = self._points[: self._size]
            order = np.argsort(live["id"], kind="stable")
            self._points[: self._size] = live[order]

    def absorb(self, other: "Cluster") -> None:
        """
        Append every point of ``other`` and re-sort by id.

        ``other`` is left untouched; clearing it is up to the caller.

        @param other: cluster whose points are copied in
        @raises ValueError: if other is this cluster
        """
        if other is self:
            raise ValueError("Cannot absorb a cluster into itself.")
        for point in other.points:
            self.append(point)
        self.sort_by_id()

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[np.void]:
        return iter(self.points)

    def __repr__(self) -> str:
        return f"Cluster(size={self._size}, capacity={self._capacity}, ids={self.ids.tolist()})"
