"""Quick start guide for flowhash.

Demonstrates:
1. Hashing a single flow with both algorithms
2. The packed key both algorithms consume
3. Vectorized batch hashing
4. Spreading flows over buckets
"""

import torch

from flowhash import (
    FlowTuple,
    batch_hash,
    flows_to_tensor,
    hash_lookup3,
    hash_murmur3,
    lookup3_tuple,
    murmur3_tuple,
    pack_key,
)
from flowhash.metrics import load_summary, random_flows
from flowhash.utils import make_rng


def example_1_single_flow():
    """Example 1: Hash one flow, given as fields or as a FlowTuple."""
    print("=" * 60)
    print("Example 1: Single Flow")
    print("=" * 60)

    seed = 0x12345678
    print(f"lookup3: 0x{hash_lookup3(0xC0A80101, 0x08080808, 12345, 80, 6, seed):08X}")
    print(f"murmur3: 0x{hash_murmur3(0xC0A80101, 0x08080808, 12345, 80, 6, seed):08X}")

    flow = FlowTuple.from_strings("192.168.1.1", "8.8.8.8", 12345, 80, 6)
    print(f"{flow}")
    print(f"  lookup3: 0x{lookup3_tuple(flow, seed):08X}")
    print(f"  murmur3: 0x{murmur3_tuple(flow, seed):08X}")
    print()


def example_2_packed_key():
    """Example 2: The 13-byte little-endian key."""
    print("=" * 60)
    print("Example 2: Packed Key")
    print("=" * 60)

    flow = FlowTuple.from_strings("10.0.0.1", "10.0.0.2", 443, 51515, 17)
    print(f"{flow} -> {pack_key(flow).hex(' ')}")
    print()


def example_3_batch():
    """Example 3: Hash many flows at once."""
    print("=" * 60)
    print("Example 3: Batch Hashing")
    print("=" * 60)

    flows = [
        FlowTuple.from_strings("192.168.1.1", "8.8.8.8", port, 53, 17)
        for port in range(40000, 40005)
    ]
    fields = flows_to_tensor(flows)
    hashes = batch_hash("murmur3", fields, seed=7)
    for flow, h in zip(flows, hashes.tolist()):
        print(f"  {flow}: 0x{h:08X}")
    print()


def example_4_buckets():
    """Example 4: Load across 64 buckets for 100k random flows."""
    print("=" * 60)
    print("Example 4: Bucket Load")
    print("=" * 60)

    fields = torch.from_numpy(random_flows(100_000, make_rng(0)))
    for name in ("lookup3", "murmur3"):
        summary = load_summary(batch_hash(name, fields).numpy(), 64)
        print(
            f"  {name}: mean={summary['mean_load']:.1f} max={summary['max_load']} "
            f"gini={summary['gini']:.4f} chi2={summary['chi2']:.1f}"
        )
    print()


if __name__ == "__main__":
    example_1_single_flow()
    example_2_packed_key()
    example_3_batch()
    example_4_buckets()
