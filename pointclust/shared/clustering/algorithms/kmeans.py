import logging
import warnings
from typing import List, Optional

import numpy as np
from pydantic.dataclasses import dataclass
from pydantic import Field

from ..base import ClusteringAlgorithm, ClusteringConfig
from ..errors import ConvergenceError, ConvergenceWarning, InvalidParameterError
from ..point import Centroid, PointData, as_point_array
from ...utils.numpy_helpers import pairwise_euclidean

logger = logging.getLogger(__name__)

INIT_METHODS = ("k-means++", "random")


@dataclass
class KMeansConfig(ClusteringConfig):
    """Configuration for K-Means clustering"""
    n_clusters: int = Field(8, description="Number of clusters")
    init: str = Field("k-means++", description="Initialization method ('k-means++' or 'random')")
    max_iter: int = Field(300, description="Maximum number of iterations")
    tol: float = Field(1e-4, description="Maximum centroid movement counted as converged")
    raise_on_max_iter: bool = Field(False, description="Raise instead of warn when max_iter is reached")


class KMeansClustering(ClusteringAlgorithm):
    """
    K-Means clustering with Lloyd iterations.

    Centroids are seeded either with K-Means++ (default) or by drawing distinct
    points uniformly, then refined by alternating nearest-centroid assignment
    and mean updates until no centroid moves more than ``tol``.
    """

    def __init__(self, config: KMeansConfig, rng: Optional[np.random.Generator] = None):
        super().__init__(config)
        if config.n_clusters < 1:
            raise InvalidParameterError(f"n_clusters must be >= 1, got {config.n_clusters}")
        if config.init not in INIT_METHODS:
            raise InvalidParameterError(f"Unknown init method: {config.init}. Available: {list(INIT_METHODS)}")
        if config.max_iter < 1:
            raise InvalidParameterError(f"max_iter must be >= 1, got {config.max_iter}")
        if not config.tol >= 0:
            raise InvalidParameterError(f"tol must be non-negative, got {config.tol}")

        self.n_clusters = config.n_clusters
        self._rng = rng if rng is not None else np.random.default_rng(config.random_state)
        self._centers: Optional[np.ndarray] = None
        self.inertia_: Optional[float] = None
        self.n_iter_: int = 0
        self.converged_: bool = False

    def _fit(self, features: np.ndarray) -> np.ndarray:
        n_samples = len(features)
        if self.n_clusters > n_samples:
            raise InvalidParameterError(
                f"n_clusters={self.n_clusters} exceeds the number of points ({n_samples})"
            )

        logger.info(f"Starting K-Means ({self.config.init}) on {n_samples} points with k={self.n_clusters}")

        if self.config.init == "k-means++":
            centers = self._init_kmeans_plus_plus(features)
        else:
            centers = self._init_random(features)

        self.converged_ = False
        labels = np.full(n_samples, -1, dtype=int)
        for iteration in range(1, self.config.max_iter + 1):
            previous = centers.copy()
            labels = self._assign(features, centers)
            centers = self._update(features, labels, centers)
            self.n_iter_ = iteration

            shifts = np.linalg.norm(centers - previous, axis=1)
            logger.debug(f"Iteration {iteration}: max centroid shift {np.max(shifts):.6g}")
            if np.all(shifts <= self.config.tol):
                self.converged_ = True
                break

        self._centers = centers
        self.inertia_ = _inertia(features, labels, centers)

        if self.converged_:
            logger.info(f"K-Means converged after {self.n_iter_} iterations (inertia={self.inertia_:.4f})")
        else:
            if self.config.raise_on_max_iter:
                raise ConvergenceError(self.config.max_iter)
            logger.warning(f"K-Means did not converge within {self.config.max_iter} iterations")
            warnings.warn(
                f"K-Means did not converge within {self.config.max_iter} iterations", ConvergenceWarning
            )

        return labels

    def _init_kmeans_plus_plus(self, features: np.ndarray) -> np.ndarray:
        """
        K-Means++ seeding

        The first centroid is a uniformly drawn point. Every further centroid is
        drawn with probability proportional to the squared distance from a point
        to its nearest chosen centroid, using a cumulative sum and a uniform
        draw in [0, total): the first index whose cumulative weight reaches the
        draw wins. Chosen points have zero weight and are never drawn again
        while any point still has positive weight.
        """
        n_samples = len(features)
        chosen = [int(self._rng.integers(n_samples))]

        while len(chosen) < self.n_clusters:
            dists = pairwise_euclidean(features, features[chosen])
            weights = np.min(dists * dists, axis=1)
            total = float(np.sum(weights))
            cumulative = np.cumsum(weights)
            draw = self._rng.random() * total

            candidates = np.flatnonzero((cumulative >= draw) & (weights > 0))
            if candidates.size == 0:
                # every point coincides with a chosen centroid
                candidates = np.flatnonzero(cumulative >= draw)
            index = int(candidates[0])
            logger.debug(f"K-Means++ picked point {index} (weight {weights[index]:.4g} of {total:.4g})")
            chosen.append(index)

        return features[chosen].copy()

    def _init_random(self, features: np.ndarray) -> np.ndarray:
        """Seed with n_clusters distinct points drawn without replacement"""
        indices = self._rng.choice(len(features), size=self.n_clusters, replace=False)
        return features[indices].copy()

    @staticmethod
    def _assign(features: np.ndarray, centers: np.ndarray) -> np.ndarray:
        # argmin keeps the lowest centroid index on ties
        return np.argmin(pairwise_euclidean(features, centers), axis=1)

    def _update(self, features: np.ndarray, labels: np.ndarray, centers: np.ndarray) -> np.ndarray:
        updated = centers.copy()
        for i in range(self.n_clusters):
            members = features[labels == i]
            if len(members) > 0:
                updated[i] = members.mean(axis=0)
            else:
                logger.debug(f"Centroid {i} has no assigned points, keeping its position")
        return updated

    def predict(self, data: PointData) -> np.ndarray:
        """Label points by their nearest fitted centroid"""
        self._check_fitted()
        return self._assign(as_point_array(data), self._centers)

    @property
    def cluster_centers_(self) -> np.ndarray:
        self._check_fitted()
        return self._centers

    @property
    def centroids(self) -> List[Centroid]:
        """Final centroids, one per cluster index"""
        return [Centroid(float(x), float(y)) for x, y in self.cluster_centers_]

    def get_cluster_centers(self) -> Optional[np.ndarray]:
        return self._centers


def _inertia(features: np.ndarray, labels: np.ndarray, centers: np.ndarray) -> float:
    """Sum of squared distances from each point to its assigned centroid"""
    if len(features) == 0:
        return 0.0
    diff = features - centers[labels]
    return float(np.sum(diff * diff))
