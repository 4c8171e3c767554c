"""Vectorized lookup3 and MurmurHash3 over batches of flows.

Flows are carried as an int64 tensor of shape [B, 5] holding the unsigned
field values (src_ip, dst_ip, src_port, dst_port, protocol). Every
intermediate value is kept in [0, 2^32) so the int64 tensors never hold a
negative or overflowed value between steps. 32x32-bit products are split
into 16-bit halves for the same reason.

Results are element-wise identical to lookup3_tuple / murmur3_tuple.
"""

from typing import Optional, Sequence, Union

import torch

from flowhash.hashing.bits import MASK32, u32
from flowhash.hashing.lookup3 import LOOKUP3_INIT
from flowhash.hashing.murmur3 import C1, C2
from flowhash.packing import PACKED_KEY_LEN, FlowTuple
from flowhash.utils.logger import get_logger

logger = get_logger(__name__)

NUM_FIELDS = 5
# Largest value of each field: src_ip, dst_ip, src_port, dst_port, protocol
FIELD_MAX = (0xFFFFFFFF, 0xFFFFFFFF, 0xFFFF, 0xFFFF, 0xFF)


def flows_to_tensor(
    flows: Sequence[FlowTuple], device: Optional[Union[str, torch.device]] = None
) -> torch.Tensor:
    """Stack flows into a [B, 5] int64 field tensor.

    Args:
        flows: Sequence of FlowTuple
        device: Target device (default: CPU)

    Returns:
        Field tensor of shape [B, 5] (int64)
    """
    rows = [flow.astuple() for flow in flows]
    return torch.tensor(rows, dtype=torch.int64, device=device).reshape(-1, NUM_FIELDS)


def _check_fields(fields: torch.Tensor) -> None:
    if not isinstance(fields, torch.Tensor):
        raise TypeError(f"fields must be torch.LongTensor, got {type(fields)}")
    if fields.dtype != torch.long:
        raise TypeError(f"fields must be torch.long dtype, got {fields.dtype}")
    if fields.dim() != 2 or fields.shape[1] != NUM_FIELDS:
        raise ValueError(f"fields must have shape [B, {NUM_FIELDS}], got {list(fields.shape)}")
    limits = torch.tensor(FIELD_MAX, dtype=torch.long, device=fields.device)
    if bool(((fields < 0) | (fields > limits)).any()):
        raise ValueError("fields hold values outside their unsigned widths (u32, u32, u16, u16, u8)")


def _key_words(fields: torch.Tensor) -> tuple[torch.Tensor, torch.Tensor, torch.Tensor, torch.Tensor]:
    """Split fields into the packed key's three LE words and its tail byte.

    Word 2 of the little-endian key is src_port in the low half and
    dst_port in the high half.
    """
    ports = fields[:, 2] | (fields[:, 3] << 16)
    return fields[:, 0], fields[:, 1], ports, fields[:, 4]


def _mul32(x: torch.Tensor, c: int) -> torch.Tensor:
    """(x * c) mod 2^32 for x in [0, 2^32) without int64 overflow."""
    lo = c & 0xFFFF
    hi = (c >> 16) & 0xFFFF
    return (x * lo + (((x * hi) & 0xFFFF) << 16)) & MASK32


def _rotl32_tensor(x: torch.Tensor, r: int) -> torch.Tensor:
    return ((x << r) | (x >> (32 - r))) & MASK32


def _lookup3_final_tensor(
    a: torch.Tensor, b: torch.Tensor, c: torch.Tensor
) -> torch.Tensor:
    """Vectorized lookup3 ``final``; returns c."""
    c = ((c ^ b) - _rotl32_tensor(b, 14)) & MASK32
    a = ((a ^ c) - _rotl32_tensor(c, 11)) & MASK32
    b = ((b ^ a) - _rotl32_tensor(a, 25)) & MASK32
    c = ((c ^ b) - _rotl32_tensor(b, 16)) & MASK32
    a = ((a ^ c) - _rotl32_tensor(c, 4)) & MASK32
    b = ((b ^ a) - _rotl32_tensor(a, 14)) & MASK32
    c = ((c ^ b) - _rotl32_tensor(b, 24)) & MASK32
    return c


def lookup3_batch(fields: torch.Tensor, seed: int = 0) -> torch.Tensor:
    """Vectorized lookup3 over a batch of flows.

    Args:
        fields: Field tensor of shape [B, 5] (int64)
        seed: 32-bit seed

    Returns:
        Hash tensor of shape [B] (int64, values in [0, 2^32))

    Raises:
        TypeError: If fields is not an int64 tensor
        ValueError: If fields has the wrong shape or a value outside its width
    """
    _check_fields(fields)
    w0, w1, w2, tail = _key_words(fields)

    init = u32(LOOKUP3_INIT + PACKED_KEY_LEN + seed)
    a = (w0 + tail + init) & MASK32
    b = (w1 + init) & MASK32
    c = (w2 + init) & MASK32

    return _lookup3_final_tensor(a, b, c)


def _scramble_tensor(k1: torch.Tensor) -> torch.Tensor:
    k1 = _mul32(k1, C1)
    k1 = _rotl32_tensor(k1, 15)
    return _mul32(k1, C2)


def _fmix32_tensor(h: torch.Tensor) -> torch.Tensor:
    h = h ^ (h >> 16)
    h = _mul32(h, 0x85EBCA6B)
    h = h ^ (h >> 13)
    h = _mul32(h, 0xC2B2AE35)
    return h ^ (h >> 16)


def murmur3_batch(fields: torch.Tensor, seed: int = 0) -> torch.Tensor:
    """Vectorized MurmurHash3 over a batch of flows.

    Args:
        fields: Field tensor of shape [B, 5] (int64)
        seed: 32-bit seed

    Returns:
        Hash tensor of shape [B] (int64, values in [0, 2^32))

    Raises:
        TypeError: If fields is not an int64 tensor
        ValueError: If fields has the wrong shape or a value outside its width
    """
    _check_fields(fields)
    w0, w1, w2, tail = _key_words(fields)

    h1 = torch.full_like(w0, u32(seed))
    for block in (w0, w1, w2):
        h1 = h1 ^ _scramble_tensor(block)
        h1 = _rotl32_tensor(h1, 13)
        h1 = (h1 * 5 + 0xE6546B64) & MASK32

    # one-byte tail
    h1 = h1 ^ _scramble_tensor(tail)

    h1 = h1 ^ PACKED_KEY_LEN
    return _fmix32_tensor(h1)


BATCH_HASH_FUNCTIONS = {
    "lookup3": lookup3_batch,
    "murmur3": murmur3_batch,
}


def batch_hash(name: str, fields: torch.Tensor, seed: int = 0) -> torch.Tensor:
    """Dispatch a batch hash by algorithm name.

    Raises:
        ValueError: If name is not a registered algorithm
    """
    if name not in BATCH_HASH_FUNCTIONS:
        raise ValueError(
            f"algorithm must be one of {sorted(BATCH_HASH_FUNCTIONS)}, got {name!r}"
        )
    _check_fields(fields)
    logger.debug("Hashing %d flows with %s (seed=0x%08X)", fields.shape[0], name, u32(seed))
    return BATCH_HASH_FUNCTIONS[name](fields, seed)
