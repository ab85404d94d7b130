import logging
import math
import warnings
from typing import Any, Dict, Optional

import numpy as np

from .errors import DegenerateMetricWarning, InvalidParameterError
from .point import PointData, UNASSIGNED, as_point_array, labels_of
from ..utils.numpy_helpers import pairwise_euclidean

logger = logging.getLogger(__name__)


def _resolve_labels(data: PointData, labels: Optional[np.ndarray]) -> np.ndarray:
    if labels is None:
        if isinstance(data, np.ndarray):
            raise InvalidParameterError("labels are required when scoring a coordinate array")
        return labels_of(data)
    labels = np.asarray(labels, dtype=int)
    if labels.ndim != 1:
        raise InvalidParameterError("labels must be a 1D array")
    return labels


class SilhouetteEvaluator:
    """
    Silhouette coefficient of a labelled point set.

    For a point p, a(p) is the mean distance to the other members of its own
    cluster and b(p) the smallest mean distance to the members of another
    cluster index in [0, cluster_count). Its coefficient is
    (b - a) / max(a, b).

    Undefined points are skipped: a point alone in its cluster, or one with no
    populated cluster to compare against. Empty cluster indices are ignored
    when taking the minimum for b(p). When a and b are both 0 the coefficient
    is 0.
    """

    @staticmethod
    def samples(
        data: PointData, labels: Optional[np.ndarray] = None, cluster_count: Optional[int] = None
    ) -> np.ndarray:
        """
        Per-point silhouette coefficients

        Args:
            data: Points or coordinates of shape (n_samples, 2)
            labels: Cluster index per point; defaults to each Point's cluster_id
            cluster_count: Number of cluster indices; defaults to max(labels) + 1

        Returns:
            Coefficients of shape (n_samples,), NaN where undefined

        Raises:
            InvalidParameterError: For unassigned or out-of-range labels
        """
        features = as_point_array(data)
        labels = _resolve_labels(data, labels)
        if len(labels) != len(features):
            raise InvalidParameterError(
                f"Got {len(labels)} labels for {len(features)} points"
            )
        if len(labels) == 0:
            return np.empty(0, dtype=float)
        if np.any(labels == UNASSIGNED) or np.any(labels < 0):
            raise InvalidParameterError("All points must be assigned to a cluster before scoring")

        if cluster_count is None:
            cluster_count = int(labels.max()) + 1
        if np.any(labels >= cluster_count):
            raise InvalidParameterError(
                f"Found label {int(labels.max())} outside of [0, {cluster_count})"
            )

        distances = pairwise_euclidean(features)
        sizes = np.bincount(labels, minlength=cluster_count)
        # sum of distances from every point to every cluster, shape (n, cluster_count)
        sums = np.zeros((len(features), cluster_count))
        for c in range(cluster_count):
            members = labels == c
            if sizes[c] > 0:
                sums[:, c] = distances[:, members].sum(axis=1)

        coefficients = np.full(len(features), np.nan)
        for i, own in enumerate(labels):
            if sizes[own] < 2:
                continue
            a = sums[i, own] / (sizes[own] - 1)

            others = [c for c in range(cluster_count) if c != own and sizes[c] > 0]
            if not others:
                continue
            b = min(sums[i, c] / sizes[c] for c in others)

            denominator = max(a, b)
            coefficients[i] = 0.0 if denominator == 0 else (b - a) / denominator

        return coefficients

    @classmethod
    def score(
        cls, data: PointData, labels: Optional[np.ndarray] = None, cluster_count: Optional[int] = None
    ) -> float:
        """
        Mean silhouette coefficient over the points where it is defined

        Returns:
            Score in [-1, 1], or NaN when no point has a defined coefficient
        """
        coefficients = cls.samples(data, labels, cluster_count)
        defined = coefficients[~np.isnan(coefficients)]
        skipped = len(coefficients) - len(defined)
        if skipped:
            logger.debug(f"Silhouette skipped {skipped} of {len(coefficients)} points with undefined coefficients")
        if len(defined) == 0:
            warnings.warn("Silhouette score is undefined for every point", DegenerateMetricWarning)
            return math.nan
        return float(np.mean(defined))


class ClusteringEvaluator:
    """Evaluates clustering quality of a labelled point set"""

    @staticmethod
    def evaluate(data: PointData, labels: Optional[np.ndarray] = None) -> Dict[str, Any]:
        """
        Compute clustering evaluation metrics

        Args:
            data: Points or coordinates used for clustering
            labels: Cluster labels; defaults to each Point's cluster_id

        Returns:
            Dictionary containing evaluation metrics
        """
        features = as_point_array(data)
        labels = _resolve_labels(data, labels)
        n_samples = len(labels)
        n_clusters = len(np.unique(labels))

        result: Dict[str, Any] = {
            "n_samples": n_samples,
            "n_clusters": n_clusters,
            "inertia": _within_cluster_sum_of_squares(features, labels),
        }

        if n_clusters < 2:
            result.update(
                {
                    "error": "Less than 2 clusters found",
                    "silhouette_score": None,
                    "n_scored_points": 0,
                }
            )
            return result

        coefficients = SilhouetteEvaluator.samples(features, labels)
        defined = coefficients[~np.isnan(coefficients)]
        result["n_scored_points"] = int(len(defined))
        result["silhouette_score"] = float(np.mean(defined)) if len(defined) else None
        if not len(defined):
            result["error"] = "Every cluster is a singleton"
        return result

    @staticmethod
    def get_cluster_statistics(data: PointData, labels: Optional[np.ndarray] = None) -> Dict[str, Any]:
        """
        Get size, share and position statistics for each cluster

        Args:
            data: Points or coordinates
            labels: Cluster labels; defaults to each Point's cluster_id

        Returns:
            Dictionary keyed by ``cluster_<label>``
        """
        features = as_point_array(data)
        labels = _resolve_labels(data, labels)
        stats = {}

        for label in np.unique(labels):
            mask = labels == label
            cluster_features = features[mask]
            centroid = np.mean(cluster_features, axis=0)
            stats[f"cluster_{label}"] = {
                "size": int(np.sum(mask)),
                "percentage": float(np.sum(mask) / len(labels) * 100),
                "centroid": centroid,
                "std": np.std(cluster_features, axis=0),
                "max_radius": float(np.max(np.linalg.norm(cluster_features - centroid, axis=1))),
            }

        return stats


def _within_cluster_sum_of_squares(features: np.ndarray, labels: np.ndarray) -> float:
    total = 0.0
    for label in np.unique(labels):
        members = features[labels == label]
        diff = members - members.mean(axis=0)
        total += float(np.sum(diff * diff))
    return total
