"""Common utilities for experiments."""

import argparse
import json
import subprocess
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

import torch

from flowhash.config import HashConfig

# CLI attribute -> HashConfig field
CLI_OVERRIDES = {
    "algorithm": "algorithm",
    "hash_seed": "seed",
    "num_buckets": "num_buckets",
    "num_flows": "num_flows",
    "rng_seed": "rng_seed",
    "device": "device",
}


def make_output_paths(out_dir: Path, exp_id: str) -> tuple[Path, Path]:
    """Create standardized output paths.

    Args:
        out_dir: Base output directory
        exp_id: Experiment ID (e.g., "uniformity")

    Returns:
        (metrics_path, figure_path)
        - metrics_path: artifacts/metrics/uniformity.json
        - figure_path: artifacts/figures/uniformity.pdf
    """
    metrics_dir = out_dir / "metrics"
    figures_dir = out_dir / "figures"
    metrics_dir.mkdir(parents=True, exist_ok=True)
    figures_dir.mkdir(parents=True, exist_ok=True)

    return metrics_dir / f"{exp_id}.json", figures_dir / f"{exp_id}.pdf"


def seed_loop(num_seeds: int) -> List[int]:
    """Seeds for deterministic trials: [0, 1, ..., num_seeds-1]."""
    return list(range(num_seeds))


def resolve_config(args: argparse.Namespace) -> HashConfig:
    """Merge an optional YAML config with CLI overrides.

    CLI values that were left unset (None) fall back to the config file,
    then to HashConfig defaults.
    """
    values: Dict[str, Any] = {}
    if getattr(args, "config", None) is not None:
        values.update(HashConfig.from_file(args.config).to_dict())
    for arg_name, key in CLI_OVERRIDES.items():
        value = getattr(args, arg_name, None)
        if value is not None:
            values[key] = value
    return HashConfig.from_dict(values)


def get_git_commit() -> Optional[str]:
    """Get current git commit hash by walking up to find .git directory.

    Returns:
        Git commit hash string, or None if not found
    """
    current = Path(__file__).resolve()
    for _ in range(8):
        if (current / ".git").exists():
            try:
                result = subprocess.run(
                    ["git", "rev-parse", "HEAD"],
                    capture_output=True,
                    text=True,
                    check=True,
                    cwd=current,
                )
                return result.stdout.strip()
            except (subprocess.CalledProcessError, FileNotFoundError):
                return None
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None


def get_hardware_info() -> dict:
    """Get hardware and version information.

    Returns:
        Dictionary with torch_version, device, and optionally cuda_version, gpu_name
    """
    info = {
        "torch_version": torch.__version__,
    }
    if torch.cuda.is_available():
        info["cuda_version"] = torch.version.cuda
        info["gpu_name"] = torch.cuda.get_device_name(0)
        info["device"] = "cuda"
    else:
        info["device"] = "cpu"
    return info


def write_metrics_json(
    path: Path,
    experiment_id: str,
    experiment_name: str,
    config: Dict[str, Any],
    seeds: List[int],
    raw_trials: List[Dict[str, Any]],
    summary: Dict[str, Any],
) -> None:
    """Write standardized metrics JSON.

    Args:
        path: Output JSON path
        experiment_id: Experiment identifier (e.g., "uniformity")
        experiment_name: Human-readable experiment name
        config: Experiment configuration
        seeds: List of seeds used
        raw_trials: List of per-trial results
        summary: Summary statistics with CI
    """
    metrics = {
        "experiment_id": experiment_id,
        "experiment_name": experiment_name,
        "timestamp": datetime.now().isoformat(),
        "git_commit": get_git_commit(),
        "hardware": get_hardware_info(),
        "config": config,
        "seeds": seeds,
        "raw_trials": raw_trials,
        "summary": summary,
    }

    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        json.dump(metrics, f, indent=2)
