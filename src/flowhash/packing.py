"""Flow 5-tuple value type and its canonical 13-byte key encoding."""

import ipaddress
import struct
from dataclasses import astuple, dataclass

# src_ip, dst_ip, src_port, dst_port, protocol; little-endian, no padding
KEY_FORMAT = "<IIHHB"
PACKED_KEY_LEN = struct.calcsize(KEY_FORMAT)  # 13

_FIELD_BITS = (
    ("src_ip", 32),
    ("dst_ip", 32),
    ("src_port", 16),
    ("dst_port", 16),
    ("protocol", 8),
)


@dataclass(frozen=True)
class FlowTuple:
    """Network flow 5-tuple.

    Addresses are IPv4 addresses as host-order integers, so 192.168.1.1 is
    0xC0A80101. Two tuples with equal fields are interchangeable.

    Attributes:
        src_ip: Source IPv4 address (uint32)
        dst_ip: Destination IPv4 address (uint32)
        src_port: Source port (uint16)
        dst_port: Destination port (uint16)
        protocol: IP protocol number (uint8), e.g. 6 for TCP
    """

    src_ip: int
    dst_ip: int
    src_port: int
    dst_port: int
    protocol: int

    def __post_init__(self) -> None:
        """Validate field widths."""
        for name, bits in _FIELD_BITS:
            value = getattr(self, name)
            # bool is an int subclass but never a meaningful field value
            if not isinstance(value, int) or isinstance(value, bool):
                raise TypeError(f"{name} must be int, got {type(value).__name__}")
            if not (0 <= value < (1 << bits)):
                raise ValueError(f"{name} must be uint{bits}, got {value}")

    @classmethod
    def from_strings(
        cls,
        src_ip: str,
        dst_ip: str,
        src_port: int,
        dst_port: int,
        protocol: int,
    ) -> "FlowTuple":
        """Build a FlowTuple from dotted IPv4 address strings.

        Example:
            >>> FlowTuple.from_strings("192.168.1.1", "8.8.8.8", 12345, 80, 6).src_ip
            3232235777
        """
        return cls(
            int(ipaddress.IPv4Address(src_ip)),
            int(ipaddress.IPv4Address(dst_ip)),
            src_port,
            dst_port,
            protocol,
        )

    def astuple(self) -> tuple[int, int, int, int, int]:
        """Return the five fields in key order."""
        return astuple(self)

    def __str__(self) -> str:
        return (
            f"{ipaddress.IPv4Address(self.src_ip)}:{self.src_port} -> "
            f"{ipaddress.IPv4Address(self.dst_ip)}:{self.dst_port} proto={self.protocol}"
        )


def pack_key(flow: FlowTuple) -> bytes:
    """Serialize a flow into its 13-byte key.

    Layout (all multi-byte fields little-endian):
        bytes[0:4]   src_ip
        bytes[4:8]   dst_ip
        bytes[8:10]  src_port
        bytes[10:12] dst_port
        bytes[12]    protocol

    Args:
        flow: Flow to serialize

    Returns:
        Packed key of exactly PACKED_KEY_LEN bytes
    """
    return struct.pack(
        KEY_FORMAT,
        flow.src_ip,
        flow.dst_ip,
        flow.src_port,
        flow.dst_port,
        flow.protocol,
    )


def unpack_key(key: bytes) -> FlowTuple:
    """Inverse of pack_key.

    Raises:
        ValueError: If key is not exactly PACKED_KEY_LEN bytes long
    """
    if len(key) != PACKED_KEY_LEN:
        raise ValueError(f"packed key must be {PACKED_KEY_LEN} bytes, got {len(key)}")
    return FlowTuple(*struct.unpack(KEY_FORMAT, key))
