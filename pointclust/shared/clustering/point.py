"""
Point and centroid value types shared by every clustering algorithm.

Data points are mutable so a finished run can tag them with a cluster id;
centroids are frozen values so snapshots never alias live positions.
"""

import math
from dataclasses import dataclass, field
from typing import Iterable, List, Sequence, Union

import numpy as np

from .errors import InvalidParameterError

UNASSIGNED = -1


@dataclass(eq=False)
class Point:
    """2-D data point with a cluster membership tag"""

    x: float
    y: float
    cluster_id: int = field(default=UNASSIGNED)

    def distance(self, other: "Point") -> float:
        """Euclidean distance to another point or centroid"""
        return euclidean_distance(self, other)

    def copy(self) -> "Point":
        """Detached copy of the coordinates, without the cluster tag"""
        return Point(self.x, self.y)

    @property
    def is_assigned(self) -> bool:
        return self.cluster_id != UNASSIGNED


@dataclass(frozen=True)
class Centroid:
    """Representative position of a K-Means cluster"""

    x: float
    y: float

    @classmethod
    def from_point(cls, point: Union[Point, "Centroid"]) -> "Centroid":
        return cls(float(point.x), float(point.y))

    def distance(self, other: Union[Point, "Centroid"]) -> float:
        return euclidean_distance(self, other)


PointData = Union[Sequence[Point], np.ndarray]


def euclidean_distance(a: Union[Point, Centroid], b: Union[Point, Centroid]) -> float:
    """
    Euclidean distance between two 2-D positions.

    Symmetric and non-negative for finite input; NaN or infinite coordinates
    propagate into the result.
    """
    dx = a.x - b.x
    dy = a.y - b.y
    return math.sqrt(dx * dx + dy * dy)


def as_point_array(data: PointData) -> np.ndarray:
    """
    Coerce points or an (n, 2) array into a float array of shape (n, 2)

    Raises:
        InvalidParameterError: If the data is not 2-D point data
    """
    if isinstance(data, np.ndarray):
        if data.ndim != 2 or data.shape[1] != 2:
            raise InvalidParameterError("Features must be 2D array of shape (n_samples, 2)")
        return data.astype(float, copy=False)

    points = list(data)
    if not points:
        return np.empty((0, 2), dtype=float)
    if not all(isinstance(p, Point) for p in points):
        raise InvalidParameterError("Expected a sequence of Point objects or an (n_samples, 2) array")
    return np.array([[p.x, p.y] for p in points], dtype=float)


def points_from_array(array: np.ndarray) -> List[Point]:
    """Build unassigned Points from an (n, 2) array"""
    array = as_point_array(array)
    return [Point(float(x), float(y)) for x, y in array]


def as_points(data: PointData) -> List[Point]:
    """Return Points as given, or wrap array rows into new Points"""
    if isinstance(data, np.ndarray):
        return points_from_array(data)
    points = list(data)
    as_point_array(points)
    return points


def assign_cluster_ids(points: Iterable[Point], labels: Iterable[int]) -> None:
    """Write cluster labels back onto the points they were computed for"""
    for point, label in zip(points, labels):
        point.cluster_id = int(label)


def labels_of(points: Iterable[Point]) -> np.ndarray:
    """Cluster ids of the given points as an integer array"""
    return np.array([p.cluster_id for p in points], dtype=int)
