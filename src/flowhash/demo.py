"""Print 5-tuple hashes for an illustrative flow."""

import argparse

from flowhash.hashing.lookup3 import lookup3_tuple
from flowhash.hashing.murmur3 import murmur3_tuple
from flowhash.packing import FlowTuple

DEMO_FLOW = FlowTuple.from_strings("192.168.1.1", "8.8.8.8", 12345, 80, 6)  # TCP
DEMO_SEED = 0x12345678


def main(argv=None) -> None:
    """Demo entrypoint."""
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--algorithm",
        choices=["lookup3", "murmur3", "both"],
        default="both",
        help="Which hash to print",
    )
    args = parser.parse_args(argv)

    if args.algorithm in ("lookup3", "both"):
        print(f"Jenkins lookup3 hash: 0x{lookup3_tuple(DEMO_FLOW, DEMO_SEED):08X}")
    if args.algorithm in ("murmur3", "both"):
        print(f"MurmurHash3 (5-tuple) = 0x{murmur3_tuple(DEMO_FLOW, DEMO_SEED):08X}")


if __name__ == "__main__":
    main()
