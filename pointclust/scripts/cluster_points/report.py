import logging
import math
from typing import Any, Dict, List

import yaml

from pointclust.shared.clustering import (
    ClusteringAlgorithm,
    ClusteringEvaluator,
    HierarchicalClustering,
    KMeansClustering,
    Point,
    SilhouetteEvaluator,
)
from pointclust.shared.utils.numpy_helpers import convert_to_primitives_nested

logger = logging.getLogger(__name__)


def compute_silhouette(algorithm: ClusteringAlgorithm, points: List[Point]) -> float:
    """Silhouette score over every cluster index the algorithm produced"""
    if not points:
        return math.nan
    cluster_count = getattr(algorithm, "n_clusters", None)
    return SilhouetteEvaluator.score(points, cluster_count=cluster_count)


def build_result(algorithm_name: str, algorithm: ClusteringAlgorithm, points: List[Point], silhouette: float) -> Dict[str, Any]:
    """Collect a run's outcome into a YAML-friendly dictionary"""
    result: Dict[str, Any] = {
        "algorithm": algorithm_name,
        "points": [{"x": p.x, "y": p.y, "cluster_id": p.cluster_id} for p in points],
        "silhouette_score": None if math.isnan(silhouette) else silhouette,
    }

    if isinstance(algorithm, KMeansClustering):
        result["centroids"] = [{"x": c.x, "y": c.y} for c in algorithm.centroids]
        result["n_iter"] = algorithm.n_iter_
        result["converged"] = algorithm.converged_
        result["inertia"] = algorithm.inertia_
    elif isinstance(algorithm, HierarchicalClustering):
        result["clusters"] = [[[p.x, p.y] for p in cluster] for cluster in algorithm.clusters]
        result["merges"] = [step._asdict() for step in algorithm.merge_history]

    summary = ClusteringEvaluator.evaluate(points)
    result["n_clusters"] = summary["n_clusters"]
    result["n_scored_points"] = summary["n_scored_points"]
    result["within_cluster_sum_of_squares"] = summary["inertia"]
    result["cluster_statistics"] = ClusteringEvaluator.get_cluster_statistics(points) if points else {}

    return convert_to_primitives_nested(result)


def log_result(result: Dict[str, Any]) -> None:
    """Print a run's outcome through the logging system"""
    if "centroids" in result:
        logger.info("Final centroids:")
        for i, centroid in enumerate(result["centroids"]):
            logger.info(f"  Centroid {i}: {centroid['x']:.3f}, {centroid['y']:.3f}")
    if "clusters" in result:
        logger.info("Final clusters:")
        for i, members in enumerate(result["clusters"]):
            inner = " ".join(f"({x:.2f}, {y:.2f})" for x, y in members)
            logger.info(f"  Cluster {i}: [{inner}]")

    logger.info("Data points and their cluster ids:")
    for point in result["points"]:
        logger.info(f"  Point ({point['x']:.3f}, {point['y']:.3f}) -> Cluster {point['cluster_id']}")

    if result["silhouette_score"] is None:
        logger.info("Silhouette score: undefined")
    else:
        logger.info(f"Silhouette score: {result['silhouette_score']:.3f}")
    logger.info(f"Silhouette scored {result['n_scored_points']} of {len(result['points'])} points")


def save_result(result: Dict[str, Any], output_path: str) -> None:
    logger.info(f"Saving result to: {output_path}")
    with open(output_path, "w") as f:
        yaml.safe_dump(result, f, sort_keys=False)
