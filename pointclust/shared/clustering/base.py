from abc import ABC, abstractmethod
from typing import List, Optional
import numpy as np
from pydantic.dataclasses import dataclass
from pydantic import Field

from .point import Point, PointData, as_point_array, as_points, assign_cluster_ids


@dataclass
class ClusteringConfig:
    """Base configuration for clustering algorithms"""
    random_state: Optional[int] = Field(42, description="Random seed for reproducibility")


class ClusteringAlgorithm(ABC):
    """Abstract base class for clustering algorithms"""

    def __init__(self, config: ClusteringConfig):
        self.config = config
        self._is_fitted = False
        self._labels: Optional[np.ndarray] = None
        self._points: List[Point] = []

    @abstractmethod
    def _fit(self, features: np.ndarray) -> np.ndarray:
        """
        Run the algorithm on validated features

        Args:
            features: Point coordinates of shape (n_samples, 2)

        Returns:
            Cluster labels as numpy array of shape (n_samples,)
        """

    @abstractmethod
    def predict(self, data: PointData) -> np.ndarray:
        """
        Predict cluster labels for new points

        Args:
            data: Points or coordinates of shape (n_samples, 2)

        Returns:
            Cluster labels as numpy array of shape (n_samples,)
        """

    def fit(self, data: PointData) -> "ClusteringAlgorithm":
        """
        Fit the clustering algorithm to the points

        Each fitted Point has its ``cluster_id`` set to its label. When an
        array is given, fresh Points are created and exposed via ``points``.

        Args:
            data: Points or coordinates of shape (n_samples, 2)

        Returns:
            Self for method chaining
        """
        self._points = as_points(data)
        features = as_point_array(self._points)
        self._labels = self._fit(features)
        assign_cluster_ids(self._points, self._labels)
        self._is_fitted = True
        return self

    def fit_predict(self, data: PointData) -> np.ndarray:
        """
        Fit and return the training labels in one step

        Args:
            data: Points or coordinates of shape (n_samples, 2)

        Returns:
            Cluster labels as numpy array of shape (n_samples,)
        """
        return self.fit(data).labels_

    @property
    def is_fitted(self) -> bool:
        """Check if the algorithm has been fitted"""
        return self._is_fitted

    @property
    def labels_(self) -> np.ndarray:
        self._check_fitted()
        return self._labels

    @property
    def points(self) -> List[Point]:
        """Points of the last fit, tagged with their cluster ids"""
        return self._points

    def get_cluster_centers(self) -> Optional[np.ndarray]:
        """
        Get cluster centers if available

        Returns:
            Cluster centers or None if not available
        """
        return None

    def _check_fitted(self) -> None:
        if not self._is_fitted:
            raise ValueError("Model must be fitted before use")
