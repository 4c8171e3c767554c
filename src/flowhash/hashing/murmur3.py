"""MurmurHash3, x86 32-bit variant.

The underlying hash function was created by Austin Appleby. ``murmur3_32``
handles input of any length; the 5-tuple wrappers feed it the 13-byte
packed key, which is three full blocks and a one-byte tail.

Notes
  (1) Collisions *are* possible with this hash function.
  (2) Blocks are always read little-endian, so results do not depend on
      the host byte order.
  (3) Results match ``mmh3.hash(data, seed, signed=False)``.
"""

from typing import Union

from flowhash.hashing.bits import read_u32_le, rotl32, u32
from flowhash.packing import FlowTuple, pack_key

C1 = 0xCC9E2D51
C2 = 0x1B873593

BytesLike = Union[bytes, bytearray, memoryview]


def _scramble(k1: int) -> int:
    k1 = u32(k1 * C1)
    k1 = rotl32(k1, 15)
    return u32(k1 * C2)


def fmix32(h: int) -> int:
    """Final avalanche of a 32-bit value.

    Args:
        h: 32-bit value

    Returns:
        Mixed 32-bit unsigned integer
    """
    h = u32(h)
    h ^= h >> 16
    h = u32(h * 0x85EBCA6B)
    h ^= h >> 13
    h = u32(h * 0xC2B2AE35)
    h ^= h >> 16
    return h


def murmur3_32(data: BytesLike, seed: int = 0) -> int:
    """MurmurHash3_x86_32 of a byte string.

    Args:
        data: Input bytes
        seed: 32-bit seed (masked to 32 bits)

    Returns:
        32-bit unsigned hash

    Example:
        >>> hex(murmur3_32(b"abc"))
        '0xb3dd93fa'
    """
    data = bytes(data)
    length = len(data)
    nblocks = length // 4
    h1 = u32(seed)

    # body
    for i in range(nblocks):
        h1 ^= _scramble(read_u32_le(data, i * 4))
        h1 = rotl32(h1, 13)
        h1 = u32(h1 * 5 + 0xE6546B64)

    # tail: each longer remainder also takes the shorter cases' bytes
    tail = data[nblocks * 4:]
    remainder = length & 3
    k1 = 0
    if remainder >= 3:
        k1 ^= tail[2] << 16
    if remainder >= 2:
        k1 ^= tail[1] << 8
    if remainder >= 1:
        k1 ^= tail[0]
        h1 ^= _scramble(k1)

    # finalization
    h1 ^= u32(length)
    return fmix32(h1)


def murmur3_tuple(flow: FlowTuple, seed: int = 0) -> int:
    """Hash a flow with MurmurHash3 over its packed key."""
    return murmur3_32(pack_key(flow), seed)


def hash_murmur3(
    src_ip: int,
    dst_ip: int,
    src_port: int,
    dst_port: int,
    protocol: int,
    seed: int,
) -> int:
    """MurmurHash3 of a 5-tuple given as separate fields.

    Example:
        >>> hex(hash_murmur3(0xC0A80101, 0x08080808, 12345, 80, 6, 0x12345678))
        '0x549ded1b'
    """
    return murmur3_tuple(FlowTuple(src_ip, dst_ip, src_port, dst_port, protocol), seed)
