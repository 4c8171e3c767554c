"""Configuration loading utilities."""

from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Union

import yaml

from flowhash.hashing.registry import ALL_ALGORITHMS, HASH_FUNCTIONS
from flowhash.utils.logger import get_logger

logger = get_logger(__name__)


def load_config(config_path: Union[str, Path]) -> Dict[str, Any]:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Dictionary containing configuration parameters

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If YAML parsing fails
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r") as f:
        config = yaml.safe_load(f)

    logger.info("Loaded config from %s", config_path)

    if config is None:
        return {}

    return config


@dataclass(frozen=True)
class HashConfig:
    """Settings for hashing runs and distribution experiments.

    Attributes:
        algorithm: Registered hash name ("lookup3" or "murmur3"), or "both"
        seed: 32-bit hash seed
        num_buckets: Buckets used for load diagnostics
        num_flows: Number of sampled flows
        rng_seed: Seed of the flow sampler
        device: "cpu" or "cuda" for batch hashing
    """

    algorithm: str = ALL_ALGORITHMS
    seed: int = 0
    num_buckets: int = 1024
    num_flows: int = 100_000
    rng_seed: int = 42
    device: str = "cpu"

    def __post_init__(self) -> None:
        """Validate parameters."""
        valid = sorted(HASH_FUNCTIONS) + [ALL_ALGORITHMS]
        if self.algorithm not in valid:
            raise ValueError(
                f"algorithm must be one of {valid}, got {self.algorithm!r}"
            )
        if not (0 <= self.seed < 2**32):
            raise ValueError(f"seed must be uint32, got {self.seed}")
        if self.num_buckets <= 0:
            raise ValueError(f"num_buckets must be positive, got {self.num_buckets}")
        if self.num_flows <= 0:
            raise ValueError(f"num_flows must be positive, got {self.num_flows}")
        if self.device not in ("cpu", "cuda"):
            raise ValueError(f"device must be 'cpu' or 'cuda', got {self.device}")

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> "HashConfig":
        """Build from a plain mapping, rejecting unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = set(config) - known
        if unknown:
            raise ValueError(f"Unknown config keys: {sorted(unknown)}")
        return cls(**config)

    @classmethod
    def from_file(cls, config_path: Union[str, Path]) -> "HashConfig":
        """Load and validate a YAML config file."""
        return cls.from_dict(load_config(config_path))

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
