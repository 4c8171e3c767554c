"""Diagnostic functions for flow hash distribution analysis."""

from typing import Any, Dict, Sequence, Tuple

import numpy as np

from flowhash.hashing.base import FlowHashFunction
from flowhash.metrics.stats import gini_coefficient
from flowhash.packing import FlowTuple, pack_key, unpack_key

# Field upper bounds (exclusive), in key order
FIELD_LIMITS = (1 << 32, 1 << 32, 1 << 16, 1 << 16, 1 << 8)

KEY_BITS = 13 * 8
HASH_BITS = 32


def random_flows(n: int, rng: np.random.Generator) -> np.ndarray:
    """Sample uniformly random flow fields.

    Args:
        n: Number of flows
        rng: NumPy Generator (use a local one for reproducibility)

    Returns:
        Array of shape [n, 5] (int64) in key field order
    """
    columns = [rng.integers(0, limit, size=n, dtype=np.int64) for limit in FIELD_LIMITS]
    return np.stack(columns, axis=1)


def bucket_loads(hashes: np.ndarray, num_buckets: int) -> np.ndarray:
    """Count how many hashes land in each bucket (hash % num_buckets).

    Args:
        hashes: Array of 32-bit hash values
        num_buckets: Number of buckets

    Returns:
        Array of counts per bucket, shape [num_buckets]
    """
    if num_buckets <= 0:
        raise ValueError(f"num_buckets must be positive, got {num_buckets}")
    hashes = np.asarray(hashes, dtype=np.int64)
    return np.bincount(hashes % num_buckets, minlength=num_buckets)


def max_load(hashes: np.ndarray, num_buckets: int) -> int:
    """Maximum number of hashes landing in a single bucket."""
    loads = bucket_loads(hashes, num_buckets)
    return int(loads.max()) if len(loads) else 0


def chi_square_uniformity(loads: np.ndarray) -> Tuple[float, int]:
    """Pearson chi-square statistic of bucket loads against uniform.

    For a well-mixed hash the statistic is close to its degrees of freedom.

    Args:
        loads: Counts per bucket

    Returns:
        (statistic, degrees_of_freedom)
    """
    loads = np.asarray(loads, dtype=np.float64)
    total = loads.sum()
    dof = max(len(loads) - 1, 0)
    if total == 0:
        return 0.0, dof
    expected = total / len(loads)
    return float(np.sum((loads - expected) ** 2) / expected), dof


def collision_rate(hashes: np.ndarray) -> float:
    """Fraction of duplicate values among the hashes (1 - unique/total)."""
    hashes = np.asarray(hashes)
    total = hashes.size
    if total == 0:
        return 0.0
    return 1.0 - (np.unique(hashes).size / total)


def load_summary(hashes: np.ndarray, num_buckets: int) -> Dict[str, Any]:
    """Compact bucket-load summary.

    Returns:
        Dictionary with:
        - total: int
        - num_buckets: int
        - mean_load: float
        - std_load: float
        - max_load: int
        - min_load: int
        - empty_buckets: int
        - gini: float
        - chi2: float
        - chi2_dof: int
        - collision_rate: float (full 32-bit values)
    """
    loads = bucket_loads(hashes, num_buckets)
    chi2, dof = chi_square_uniformity(loads)
    return {
        "total": int(loads.sum()),
        "num_buckets": int(num_buckets),
        "mean_load": float(loads.mean()),
        "std_load": float(loads.std()),
        "max_load": int(loads.max()),
        "min_load": int(loads.min()),
        "empty_buckets": int(np.sum(loads == 0)),
        "gini": gini_coefficient(loads),
        "chi2": chi2,
        "chi2_dof": dof,
        "collision_rate": collision_rate(hashes),
    }


def _hash_bits(value: int) -> np.ndarray:
    return (value >> np.arange(HASH_BITS)) & 1


def avalanche_matrix(
    hash_fn: FlowHashFunction, flows: Sequence[FlowTuple], seed: int = 0
) -> np.ndarray:
    """Flip probability of each output bit for each input key bit.

    Entry [i, j] is the fraction of flows for which flipping bit i of the
    packed key flips bit j of the hash. An ideal hash gives 0.5 everywhere.

    Args:
        hash_fn: Flow hash function
        flows: Sample of flows
        seed: Hash seed

    Returns:
        Array of shape [104, 32] (float64)
    """
    counts = np.zeros((KEY_BITS, HASH_BITS), dtype=np.int64)
    if len(flows) == 0:
        return counts.astype(np.float64)

    for flow in flows:
        base = hash_fn(flow, seed)
        key = bytearray(pack_key(flow))
        for bit in range(KEY_BITS):
            key[bit // 8] ^= 1 << (bit % 8)
            flipped = hash_fn(unpack_key(bytes(key)), seed)
            key[bit // 8] ^= 1 << (bit % 8)
            counts[bit] += _hash_bits(base ^ flipped)

    return counts / len(flows)


def bias_from_matrix(matrix: np.ndarray) -> Dict[str, Any]:
    """Summarize a flip-probability matrix from avalanche_matrix.

    Returns:
        Dictionary with:
        - max_bias: float, max |p - 0.5| over the matrix
        - mean_bias: float, mean |p - 0.5|
        - mean_flip_prob: float
    """
    bias = np.abs(matrix - 0.5)
    return {
        "max_bias": float(bias.max()),
        "mean_bias": float(bias.mean()),
        "mean_flip_prob": float(matrix.mean()),
    }


def avalanche_bias(
    hash_fn: FlowHashFunction, flows: Sequence[FlowTuple], seed: int = 0
) -> Dict[str, Any]:
    """Avalanche summary of hash_fn over flows (see bias_from_matrix)."""
    return bias_from_matrix(avalanche_matrix(hash_fn, flows, seed))
