#!/usr/bin/env python3
"""
Point Clustering Script

Clusters a set of 2-D points with K-Means or threshold-stopped hierarchical
clustering and reports centroids/clusters, per-point assignments and the
silhouette score.

Usage:
    python -m pointclust.scripts.cluster_points.run --config path/to/config.yaml [--verbose]

Example config structure:
    algorithm: "kmeans"          # or "hierarchical"
    hyperparameters:
      n_clusters: 5
      init: "k-means++"
      max_iter: 300

    samples:
      n_points: 30               # uniform random sample in [low, high)^2
      low: 0.0
      high: 30.0
      # points: [[0, 0], [0, 1], [10, 10]]   # explicit points instead

    random_state: 42
    output_path: "cluster_result.yaml"       # optional
"""

import logging
import sys
import traceback

import click

from pointclust.shared.clustering.factory import ClusteringFactory
from pointclust.scripts.cluster_points.config import ClusterPointsConfig
from pointclust.scripts.cluster_points.report import build_result, compute_silhouette, log_result, save_result
from pointclust.scripts.cluster_points.sample_generator import load_points


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the script."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def run_clustering(config: ClusterPointsConfig) -> dict:
    """Generate the points, cluster them and return the result dictionary"""
    points = load_points(config.samples, config.random_state)
    logging.info(f"Clustering {len(points)} points with {config.algorithm}")
    for point in points:
        logging.debug(f"  ({point.x:.3f}, {point.y:.3f})")

    hyperparameters = dict(config.hyperparameters)
    hyperparameters.setdefault("random_state", config.random_state)
    algorithm = ClusteringFactory.create(config.algorithm, hyperparameters)
    algorithm.fit(points)

    silhouette = compute_silhouette(algorithm, points)
    return build_result(config.algorithm, algorithm, points, silhouette)


@click.command()
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False, readable=True),
    required=True,
    help="Path to YAML configuration file",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
def main(config: str, verbose: bool):
    """
    Cluster 2-D points and report the result.

    Examples:

        python -m pointclust.scripts.cluster_points.run --config config.yaml

        python -m pointclust.scripts.cluster_points.run --config config.yaml --verbose
    """
    setup_logging(verbose)

    try:
        logging.info(f"Loading configuration from: {config}")
        config_obj = ClusterPointsConfig.from_yaml(config)
        config_obj.validate()

        result = run_clustering(config_obj)
        log_result(result)

        if config_obj.output_path:
            save_result(result, config_obj.output_path)

    except Exception as e:
        logging.error(f"Clustering failed: {e}")
        if verbose:
            logging.error(f"Traceback: {traceback.format_exc()}")
        sys.exit(1)


if __name__ == "__main__":
    main()
