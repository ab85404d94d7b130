import os
from typing import Any, Dict, List, Optional, Tuple

import yaml
from pydantic.dataclasses import dataclass

from pointclust.shared.clustering.factory import ClusteringFactory


@dataclass(frozen=True)
class SampleConfig:
    """Where the points come from: explicit coordinates or uniform random samples"""

    n_points: int = 30
    low: float = 0.0
    high: float = 200.0
    points: Optional[List[Tuple[float, float]]] = None


@dataclass(frozen=True)
class ClusterPointsConfig:
    """Configuration for a single clustering run over 2-D points"""

    algorithm: str
    hyperparameters: Dict[str, Any]
    samples: SampleConfig
    random_state: int = 42
    output_path: Optional[str] = None

    @classmethod
    def from_yaml(cls, config_file: str) -> "ClusterPointsConfig":
        """Load configuration from YAML file"""
        if not os.path.exists(config_file):
            raise ValueError(f"Config file does not exist: {config_file}")

        with open(config_file, "r") as f:
            config_dict = yaml.safe_load(f) or {}

        if "algorithm" not in config_dict:
            raise ValueError("Missing required field 'algorithm' in config file")

        samples_dict = config_dict.get("samples") or {}
        points = samples_dict.get("points")
        samples = SampleConfig(
            n_points=samples_dict.get("n_points", len(points) if points is not None else 30),
            low=samples_dict.get("low", 0.0),
            high=samples_dict.get("high", 200.0),
            points=[tuple(p) for p in points] if points is not None else None,
        )

        # Convert relative paths to absolute
        output_path = config_dict.get("output_path")
        if output_path and not os.path.isabs(output_path):
            output_path = os.path.abspath(output_path)

        return cls(
            algorithm=config_dict["algorithm"],
            hyperparameters=config_dict.get("hyperparameters") or {},
            samples=samples,
            random_state=config_dict.get("random_state", 42),
            output_path=output_path,
        )

    def validate(self) -> None:
        """Validate configuration"""
        ClusteringFactory.get_algorithm_config_class(self.algorithm)

        if self.samples.points is None:
            if self.samples.n_points <= 0:
                raise ValueError("samples.n_points must be a positive integer")
            if not self.samples.low < self.samples.high:
                raise ValueError("samples.low must be smaller than samples.high")

        if self.output_path:
            output_dir = os.path.dirname(self.output_path)
            if output_dir and not os.path.exists(output_dir):
                raise ValueError(f"Output directory does not exist: {output_dir}")
