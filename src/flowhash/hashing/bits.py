"""32-bit wraparound helpers.

Python integers never overflow, so every hash step masks its result back
into the unsigned 32-bit domain explicitly. These helpers are the only place
the masking rules live.
"""

MASK32 = 0xFFFFFFFF


def u32(x: int) -> int:
    """Force integer into unsigned 32-bit domain.

    Args:
        x: Input integer (can be negative or any size)

    Returns:
        Unsigned 32-bit integer (value modulo 2^32)
    """
    return x & MASK32


def rotl32(x: int, r: int) -> int:
    """Rotate a 32-bit value left by r bits.

    Args:
        x: Input value (will be masked to 32 bits)
        r: Rotate amount; taken modulo 32, so 0 and 32 return x unchanged

    Returns:
        Rotated 32-bit unsigned integer

    Example:
        >>> hex(rotl32(0x80000001, 1))
        '0x3'
    """
    x = u32(x)
    r &= 31
    return ((x << r) | (x >> (32 - r))) & MASK32


def read_u32_le(data: bytes, offset: int = 0) -> int:
    """Read a little-endian 32-bit word starting at offset."""
    return int.from_bytes(data[offset:offset + 4], "little")
