"""Base flow hash function interface."""

from typing import Protocol

from flowhash.packing import FlowTuple


class FlowHashFunction(Protocol):
    """
    Protocol for 5-tuple hash functions.

    Implementations are pure: the same (flow, seed) always yields the same
    32-bit result, and no state is shared between calls.
    """

    def __call__(self, flow: FlowTuple, seed: int = 0) -> int:
        """
        Hash a flow.

        Args:
            flow: Flow 5-tuple
            seed: 32-bit seed

        Returns:
            32-bit unsigned hash
        """
        ...
