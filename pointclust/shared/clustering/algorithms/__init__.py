"""Clustering algorithm implementations"""

from .kmeans import KMeansClustering, KMeansConfig
from .hierarchical import HierarchicalClustering, HierarchicalConfig

__all__ = [
    "KMeansClustering",
    "KMeansConfig",
    "HierarchicalClustering",
    "HierarchicalConfig",
]
