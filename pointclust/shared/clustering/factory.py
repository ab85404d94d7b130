from typing import Any, Dict, Tuple, Type, Union

from .base import ClusteringAlgorithm, ClusteringConfig
from .errors import InvalidParameterError
from .algorithms.kmeans import KMeansClustering, KMeansConfig
from .algorithms.hierarchical import HierarchicalClustering, HierarchicalConfig

_ALIASES: Dict[str, str] = {
    "k-means": "kmeans",
    "agglomerative": "hierarchical",
}


class ClusteringFactory:
    """Builds a point clustering engine from its name and hyperparameters"""

    _registry: Dict[str, Tuple[Type[ClusteringAlgorithm], Type[ClusteringConfig]]] = {
        "kmeans": (KMeansClustering, KMeansConfig),
        "hierarchical": (HierarchicalClustering, HierarchicalConfig),
    }

    @classmethod
    def _lookup(cls, algorithm_name: str) -> Tuple[Type[ClusteringAlgorithm], Type[ClusteringConfig]]:
        key = algorithm_name.lower()
        key = _ALIASES.get(key, key)
        if key not in cls._registry:
            available = sorted([*cls._registry, *_ALIASES])
            raise InvalidParameterError(f"Unknown algorithm: {algorithm_name}. Available: {available}")
        return cls._registry[key]

    @classmethod
    def create(cls, algorithm_name: str, config: Union[Dict[str, Any], ClusteringConfig]) -> ClusteringAlgorithm:
        """
        Create a clustering engine

        Args:
            algorithm_name: ``kmeans``/``k-means`` or ``hierarchical``/``agglomerative``
            config: Hyperparameter dictionary or a matching config object

        Returns:
            Unfitted engine whose parameters were already validated

        Raises:
            InvalidParameterError: For an unknown name, a config of the wrong
                type or out-of-range hyperparameters
        """
        algorithm_class, config_class = cls._lookup(algorithm_name)
        if isinstance(config, dict):
            config = config_class(**config)
        elif not isinstance(config, config_class):
            raise InvalidParameterError(
                f"Config for {algorithm_name} must be dict or {config_class.__name__}, got {type(config).__name__}"
            )
        return algorithm_class(config)

    @classmethod
    def get_algorithm_config_class(cls, algorithm_name: str) -> Type[ClusteringConfig]:
        """Config class accepted by the named algorithm"""
        return cls._lookup(algorithm_name)[1]
