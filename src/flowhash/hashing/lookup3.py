"""Bob Jenkins' lookup3 hash over the packed 5-tuple key.

The packed key is always 13 bytes: one full 12-byte block plus a single
tail byte. lookup3 only runs its ``mix`` step between blocks when more
input follows, so for this key only the ``final`` avalanche runs.
"""

from flowhash.hashing.bits import MASK32, read_u32_le, rotl32, u32
from flowhash.packing import PACKED_KEY_LEN, FlowTuple, pack_key

LOOKUP3_INIT = 0xDEADBEEF


def lookup3_final(a: int, b: int, c: int) -> tuple[int, int, int]:
    """lookup3 ``final``: force all bits of a, b, c to avalanche.

    Rotate amounts and step order are fixed by lookup3 and must not be
    reordered.

    Args:
        a, b, c: 32-bit internal state

    Returns:
        (a, b, c) after finalization; the hash is c
    """
    c ^= b
    c = (c - rotl32(b, 14)) & MASK32
    a ^= c
    a = (a - rotl32(c, 11)) & MASK32
    b ^= a
    b = (b - rotl32(a, 25)) & MASK32
    c ^= b
    c = (c - rotl32(b, 16)) & MASK32
    a ^= c
    a = (a - rotl32(c, 4)) & MASK32
    b ^= a
    b = (b - rotl32(a, 14)) & MASK32
    c ^= b
    c = (c - rotl32(b, 24)) & MASK32
    return a, b, c


def lookup3_tuple(flow: FlowTuple, seed: int = 0) -> int:
    """Hash a flow with lookup3.

    Args:
        flow: Flow 5-tuple
        seed: 32-bit seed (masked to 32 bits)

    Returns:
        32-bit unsigned hash
    """
    key = pack_key(flow)

    a = b = c = u32(LOOKUP3_INIT + PACKED_KEY_LEN + seed)

    # The one full block
    a = u32(a + read_u32_le(key, 0))
    b = u32(b + read_u32_le(key, 4))
    c = u32(c + read_u32_le(key, 8))

    # 13 % 12 == 1: the protocol byte goes into a
    a = u32(a + key[12])

    _, _, c = lookup3_final(a, b, c)
    return c


def hash_lookup3(
    src_ip: int,
    dst_ip: int,
    src_port: int,
    dst_port: int,
    protocol: int,
    seed: int,
) -> int:
    """lookup3 hash of a 5-tuple given as separate fields.

    Example:
        >>> hex(hash_lookup3(0xC0A80101, 0x08080808, 12345, 80, 6, 0x12345678))
        '0xb196650b'
    """
    return lookup3_tuple(FlowTuple(src_ip, dst_ip, src_port, dst_port, protocol), seed)
