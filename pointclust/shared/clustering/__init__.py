"""
Clustering module for 2-D point data

K-Means (K-Means++ or uniform seeding) and threshold-stopped single-linkage
agglomerative clustering, plus silhouette-based evaluation.
"""

from .factory import ClusteringFactory
from .base import ClusteringAlgorithm, ClusteringConfig
from .evaluation import ClusteringEvaluator, SilhouetteEvaluator
from .errors import (
    ClusteringError,
    ConvergenceError,
    ConvergenceWarning,
    DegenerateMetricWarning,
    InvalidParameterError,
)
from .point import UNASSIGNED, Centroid, Point, euclidean_distance
from .cluster import Cluster

# Algorithm imports
from .algorithms.kmeans import KMeansClustering, KMeansConfig
from .algorithms.hierarchical import HierarchicalClustering, HierarchicalConfig, MergeStep

__all__ = [
    # Factory and base classes
    "ClusteringFactory",
    "ClusteringAlgorithm",
    "ClusteringConfig",
    # Data model
    "Point",
    "Centroid",
    "Cluster",
    "UNASSIGNED",
    "euclidean_distance",
    # Evaluation
    "ClusteringEvaluator",
    "SilhouetteEvaluator",
    # Errors
    "ClusteringError",
    "InvalidParameterError",
    "ConvergenceError",
    "ConvergenceWarning",
    "DegenerateMetricWarning",
    # Specific algorithms
    "KMeansClustering",
    "KMeansConfig",
    "HierarchicalClustering",
    "HierarchicalConfig",
    "MergeStep",
]
