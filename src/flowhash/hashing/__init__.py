"""Hashing modules for flowhash."""

from .base import FlowHashFunction
from .batch import batch_hash, flows_to_tensor, lookup3_batch, murmur3_batch
from .lookup3 import hash_lookup3, lookup3_final, lookup3_tuple
from .murmur3 import fmix32, hash_murmur3, murmur3_32, murmur3_tuple
from .registry import ALL_ALGORITHMS, HASH_FUNCTIONS, algorithm_names, get_hash_function

__all__ = [
    "FlowHashFunction",
    # lookup3
    "hash_lookup3",
    "lookup3_tuple",
    "lookup3_final",
    # MurmurHash3
    "hash_murmur3",
    "murmur3_tuple",
    "murmur3_32",
    "fmix32",
    # Selection by name
    "HASH_FUNCTIONS",
    "get_hash_function",
    "ALL_ALGORITHMS",
    "algorithm_names",
    # Batch (torch)
    "flows_to_tensor",
    "lookup3_batch",
    "murmur3_batch",
    "batch_hash",
]
