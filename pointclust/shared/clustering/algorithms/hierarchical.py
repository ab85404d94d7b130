import logging
import math
from typing import List, NamedTuple, Optional, Tuple

import numpy as np
from pydantic.dataclasses import dataclass
from pydantic import Field

from ..base import ClusteringAlgorithm, ClusteringConfig
from ..cluster import Cluster
from ..errors import InvalidParameterError
from ..point import PointData, as_point_array
from ...utils.numpy_helpers import pairwise_euclidean

logger = logging.getLogger(__name__)


@dataclass
class HierarchicalConfig(ClusteringConfig):
    """Configuration for Hierarchical clustering"""
    distance_threshold: float = Field(1.0, description="Largest single-linkage distance that may still be merged")
    cache_distances: bool = Field(True, description="Keep an inter-cluster distance matrix instead of rescanning")


class MergeStep(NamedTuple):
    """One merge performed during agglomeration"""
    left: int
    right: int
    distance: float
    size: int


class HierarchicalClustering(ClusteringAlgorithm):
    """
    Bottom-up single-linkage clustering stopped by a distance threshold.

    Every point starts as its own cluster. Each step merges the closest pair of
    active clusters (the lowest (i, j) index pair wins ties), removes both and
    appends the merged cluster, until one cluster remains or the closest pair
    is farther apart than ``distance_threshold``.
    """

    def __init__(self, config: HierarchicalConfig):
        super().__init__(config)
        if not config.distance_threshold >= 0:
            raise InvalidParameterError(
                f"distance_threshold must be non-negative, got {config.distance_threshold}"
            )
        self.distance_threshold = config.distance_threshold
        self._clusters: List[Cluster] = []
        self.merge_history: List[MergeStep] = []

    def _fit(self, features: np.ndarray) -> np.ndarray:
        logger.info(
            f"Starting hierarchical clustering on {len(features)} points "
            f"with distance_threshold={self.distance_threshold}"
        )
        clusters = [Cluster([point]) for point in self._points]
        self.merge_history = []

        if self.config.cache_distances:
            self._clusters = self._agglomerate_cached(clusters, features)
        else:
            self._clusters = self._agglomerate_rescan(clusters)

        logger.info(f"Hierarchical clustering finished with {len(self._clusters)} clusters")
        return self._labels_for(self._points)

    def _agglomerate_rescan(self, clusters: List[Cluster]) -> List[Cluster]:
        """Reference loop: rescan every cluster pair before each merge"""
        while len(clusters) > 1:
            min_distance = math.inf
            best: Optional[Tuple[int, int]] = None
            for i in range(len(clusters)):
                for j in range(i + 1, len(clusters)):
                    distance = clusters[i].distance(clusters[j])
                    if distance < min_distance:
                        min_distance = distance
                        best = (i, j)

            if best is None or min_distance > self.distance_threshold:
                self._log_stop(min_distance)
                break

            clusters = self._merge(clusters, best[0], best[1], min_distance)
        return clusters

    def _agglomerate_cached(self, clusters: List[Cluster], features: np.ndarray) -> List[Cluster]:
        """
        Same merges as the rescan loop, driven by a distance matrix.

        Row/column order follows the active cluster list. Only the upper
        triangle is live; a row-major argmin over it returns the first
        lexicographic (i, j) pair among equal minima. The merged row is the
        element-wise minimum of the two merged rows (single linkage).
        """
        distances = pairwise_euclidean(features)
        # NaN distances never win the strict comparison in the rescan loop
        distances[np.isnan(distances)] = np.inf
        distances[np.tril_indices(len(clusters))] = np.inf

        while len(clusters) > 1:
            flat = int(np.argmin(distances))
            i, j = divmod(flat, len(clusters))
            min_distance = float(distances[i, j])

            # an all-inf matrix decodes to the dead diagonal entry (0, 0)
            if not math.isfinite(min_distance) or not min_distance <= self.distance_threshold:
                self._log_stop(min_distance)
                break

            full = np.minimum(distances, distances.T)
            merged_row = np.minimum(full[i], full[j])
            keep = [k for k in range(len(clusters)) if k != i and k != j]

            reduced = distances[np.ix_(keep, keep)]
            distances = np.full((len(keep) + 1, len(keep) + 1), np.inf)
            distances[:-1, :-1] = reduced
            distances[:-1, -1] = merged_row[keep]

            clusters = self._merge(clusters, i, j, min_distance)
        return clusters

    def _merge(self, clusters: List[Cluster], i: int, j: int, distance: float) -> List[Cluster]:
        merged = clusters[i].merge(clusters[j])
        logger.debug(f"Merging clusters {i} and {j} at distance {distance:.4f}: {clusters[i]} + {clusters[j]}")
        self.merge_history.append(MergeStep(left=i, right=j, distance=distance, size=len(merged)))
        remaining = [c for k, c in enumerate(clusters) if k != i and k != j]
        remaining.append(merged)
        logger.debug(f"Remaining clusters: {len(remaining)}")
        return remaining

    def _log_stop(self, min_distance: float) -> None:
        logger.info(
            f"Closest clusters are {min_distance:.4f} apart, above the threshold "
            f"{self.distance_threshold}; stopping merges"
        )

    def _labels_for(self, points) -> np.ndarray:
        owner = {}
        for label, cluster in enumerate(self._clusters):
            for member in cluster:
                owner[id(member)] = label
        return np.array([owner[id(p)] for p in points], dtype=int)

    def predict(self, data: PointData) -> np.ndarray:
        """Label points by the fitted cluster with the nearest member"""
        self._check_fitted()
        features = as_point_array(data)
        if not self._clusters:
            raise ValueError("No clusters were fitted")
        nearest = np.column_stack(
            [np.min(pairwise_euclidean(features, c.coordinates), axis=1) for c in self._clusters]
        )
        return np.argmin(nearest, axis=1)

    @property
    def clusters(self) -> List[Cluster]:
        """Final clusters, in the order they were left in the active list"""
        self._check_fitted()
        return list(self._clusters)

    @property
    def n_clusters(self) -> int:
        return len(self.clusters)

    def get_cluster_centers(self) -> Optional[np.ndarray]:
        if not self._clusters:
            return None
        return np.array([np.mean(c.coordinates, axis=0) for c in self._clusters])
