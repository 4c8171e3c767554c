"""flowhash: lookup3 and MurmurHash3 hashing of network flow 5-tuples."""

from .config import HashConfig, load_config
from .hashing import (
    HASH_FUNCTIONS,
    FlowHashFunction,
    batch_hash,
    flows_to_tensor,
    fmix32,
    get_hash_function,
    hash_lookup3,
    hash_murmur3,
    lookup3_batch,
    lookup3_final,
    lookup3_tuple,
    murmur3_32,
    murmur3_batch,
    murmur3_tuple,
)
from .packing import PACKED_KEY_LEN, FlowTuple, pack_key, unpack_key
from .utils import Timer, get_logger, resolve_device, seed_everything

__version__ = "0.1.0"

__all__ = [
    # Flow key
    "FlowTuple",
    "pack_key",
    "unpack_key",
    "PACKED_KEY_LEN",
    # Hashing
    "hash_lookup3",
    "hash_murmur3",
    "lookup3_tuple",
    "murmur3_tuple",
    "lookup3_final",
    "murmur3_32",
    "fmix32",
    "FlowHashFunction",
    "HASH_FUNCTIONS",
    "get_hash_function",
    # Batch hashing
    "flows_to_tensor",
    "lookup3_batch",
    "murmur3_batch",
    "batch_hash",
    # Config
    "HashConfig",
    "load_config",
    # Utils
    "seed_everything",
    "get_logger",
    "Timer",
    "resolve_device",
]
