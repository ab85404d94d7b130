import math
from typing import Iterable, Iterator, Tuple

import numpy as np

from .point import Centroid, Point, as_point_array
from ..utils.numpy_helpers import pairwise_euclidean


class Cluster:
    """
    Ordered, immutable group of points used by agglomerative clustering.

    Clusters are never edited in place: merging produces a new cluster and the
    caller retires both inputs.
    """

    def __init__(self, members: Iterable[Point]):
        self._members: Tuple[Point, ...] = tuple(members)
        self._coords = as_point_array(self._members)

    @property
    def members(self) -> Tuple[Point, ...]:
        return self._members

    @property
    def coordinates(self) -> np.ndarray:
        """Member coordinates as an array of shape (len(self), 2)"""
        return self._coords

    def distance(self, other: "Cluster") -> float:
        """
        Single-linkage distance: the smallest Euclidean distance between a
        member of this cluster and a member of ``other``

        Args:
            other: Cluster to measure against

        Returns:
            Minimum pairwise distance, or inf when either cluster is empty
        """
        if not self._members or not other._members:
            return math.inf
        return float(np.min(pairwise_euclidean(self._coords, other._coords)))

    def merge(self, other: "Cluster") -> "Cluster":
        """New cluster holding this cluster's members followed by ``other``'s"""
        return Cluster(self._members + other._members)

    def centroid(self) -> Centroid:
        """Mean position of the members"""
        if not self._members:
            raise ValueError("Empty cluster has no centroid")
        x, y = np.mean(self._coords, axis=0)
        return Centroid(float(x), float(y))

    def __len__(self) -> int:
        return len(self._members)

    def __iter__(self) -> Iterator[Point]:
        return iter(self._members)

    def __contains__(self, point: object) -> bool:
        return any(member is point for member in self._members)

    def __repr__(self) -> str:
        inner = " ".join(f"({p.x:.2f}, {p.y:.2f})" for p in self._members)
        return f"Cluster[{inner}]"
