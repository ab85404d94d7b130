from typing import List

import numpy as np

from pointclust.shared.clustering.point import Point
from pointclust.scripts.cluster_points.config import SampleConfig


def generate_points(n_points: int, low: float, high: float, random_state: int = 42) -> List[Point]:
    """
    Draw points with both coordinates uniform in [low, high)

    Args:
        n_points: Number of points to draw
        low: Lower coordinate bound
        high: Upper coordinate bound
        random_state: Seed for the generator

    Returns:
        Fresh, unassigned points
    """
    rng = np.random.default_rng(random_state)
    coordinates = rng.uniform(low, high, size=(n_points, 2))
    return [Point(float(x), float(y)) for x, y in coordinates]


def load_points(samples: SampleConfig, random_state: int = 42) -> List[Point]:
    """Points listed in the config, or a uniform random sample when none are listed"""
    if samples.points is not None:
        return [Point(float(x), float(y)) for x, y in samples.points]
    return generate_points(samples.n_points, samples.low, samples.high, random_state)
