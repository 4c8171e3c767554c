"""Name lookup for the available flow hash functions."""

from typing import Dict, List

from flowhash.hashing.base import FlowHashFunction
from flowhash.hashing.lookup3 import lookup3_tuple
from flowhash.hashing.murmur3 import murmur3_tuple

HASH_FUNCTIONS: Dict[str, FlowHashFunction] = {
    "lookup3": lookup3_tuple,
    "murmur3": murmur3_tuple,
}


def get_hash_function(name: str) -> FlowHashFunction:
    """Return the flow hash function registered under name.

    Raises:
        ValueError: If name is not a registered algorithm
    """
    try:
        return HASH_FUNCTIONS[name]
    except KeyError:
        raise ValueError(
            f"algorithm must be one of {sorted(HASH_FUNCTIONS)}, got {name!r}"
        ) from None


ALL_ALGORITHMS = "both"


def algorithm_names(selection: str) -> List[str]:
    """Expand an algorithm selection into registered names.

    Args:
        selection: A registered name, or "both" for every algorithm

    Returns:
        List of registered algorithm names

    Raises:
        ValueError: If selection is neither "both" nor a registered name
    """
    if selection == ALL_ALGORITHMS:
        return list(HASH_FUNCTIONS)
    get_hash_function(selection)
    return [selection]
