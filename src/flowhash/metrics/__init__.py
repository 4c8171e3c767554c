"""Metrics module for flowhash."""

from flowhash.metrics.distribution import (
    avalanche_bias,
    avalanche_matrix,
    bias_from_matrix,
    bucket_loads,
    chi_square_uniformity,
    collision_rate,
    load_summary,
    max_load,
    random_flows,
)
from flowhash.metrics.stats import gini_coefficient, mean_ci95

__all__ = [
    "random_flows",
    "bucket_loads",
    "max_load",
    "chi_square_uniformity",
    "collision_rate",
    "load_summary",
    "avalanche_matrix",
    "avalanche_bias",
    "bias_from_matrix",
    "gini_coefficient",
    "mean_ci95",
]
