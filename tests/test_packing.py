"""Test the 13-byte flow key encoding."""

import pytest

from flowhash import PACKED_KEY_LEN, FlowTuple, pack_key, unpack_key
from flowhash.utils.seeds import make_rng
from flowhash.metrics import random_flows


def test_packed_key_layout(demo_flow):
    """Each field is written least-significant byte first, no padding."""
    key = pack_key(demo_flow)

    assert len(key) == PACKED_KEY_LEN == 13
    assert key == bytes([
        0x01, 0x01, 0xA8, 0xC0,  # src_ip
        0x08, 0x08, 0x08, 0x08,  # dst_ip
        0x39, 0x30,              # src_port 12345
        0x50, 0x00,              # dst_port 80
        0x06,                    # protocol
    ])


def test_packed_key_fields_decode(demo_flow):
    """Fields reconstruct from their little-endian byte ranges."""
    key = pack_key(demo_flow)

    assert int.from_bytes(key[0:4], "little") == demo_flow.src_ip
    assert int.from_bytes(key[4:8], "little") == demo_flow.dst_ip
    assert int.from_bytes(key[8:10], "little") == demo_flow.src_port
    assert int.from_bytes(key[10:12], "little") == demo_flow.dst_port
    assert key[12] == demo_flow.protocol


def test_pack_unpack_roundtrip_sampled():
    """unpack_key inverts pack_key over random flows."""
    rng = make_rng(7)
    for row in random_flows(200, rng):
        flow = FlowTuple(*map(int, row))
        assert unpack_key(pack_key(flow)) == flow


def test_packing_is_injective_on_neighbours(demo_flow):
    """Tuples differing in one field never share a key."""
    variants = [
        FlowTuple(demo_flow.src_ip + 1, demo_flow.dst_ip, demo_flow.src_port, demo_flow.dst_port, demo_flow.protocol),
        FlowTuple(demo_flow.src_ip, demo_flow.dst_ip + 1, demo_flow.src_port, demo_flow.dst_port, demo_flow.protocol),
        FlowTuple(demo_flow.src_ip, demo_flow.dst_ip, demo_flow.src_port + 1, demo_flow.dst_port, demo_flow.protocol),
        FlowTuple(demo_flow.src_ip, demo_flow.dst_ip, demo_flow.src_port, demo_flow.dst_port + 1, demo_flow.protocol),
        FlowTuple(demo_flow.src_ip, demo_flow.dst_ip, demo_flow.src_port, demo_flow.dst_port, demo_flow.protocol + 1),
        # ports swapped
        FlowTuple(demo_flow.src_ip, demo_flow.dst_ip, demo_flow.dst_port, demo_flow.src_port, demo_flow.protocol),
    ]
    keys = {pack_key(demo_flow)} | {pack_key(v) for v in variants}
    assert len(keys) == len(variants) + 1


def test_field_extremes():
    """Maximum field values pack to all-ones."""
    flow = FlowTuple(0xFFFFFFFF, 0xFFFFFFFF, 0xFFFF, 0xFFFF, 0xFF)
    assert pack_key(flow) == b"\xff" * 13
    assert pack_key(FlowTuple(0, 0, 0, 0, 0)) == b"\x00" * 13


@pytest.mark.parametrize(
    "fields",
    [
        (1 << 32, 0, 0, 0, 0),
        (0, -1, 0, 0, 0),
        (0, 0, 1 << 16, 0, 0),
        (0, 0, 0, 70000, 0),
        (0, 0, 0, 0, 256),
    ],
)
def test_out_of_range_fields_rejected(fields):
    with pytest.raises(ValueError):
        FlowTuple(*fields)


def test_non_int_fields_rejected():
    with pytest.raises(TypeError):
        FlowTuple("10.0.0.1", 0, 0, 0, 0)
    with pytest.raises(TypeError):
        FlowTuple(0, 0, 0, 0, True)


def test_unpack_wrong_length():
    with pytest.raises(ValueError):
        unpack_key(b"\x00" * 12)


def test_from_strings(demo_flow):
    flow = FlowTuple.from_strings("192.168.1.1", "8.8.8.8", 12345, 80, 6)
    assert flow == demo_flow
    assert flow.astuple() == (0xC0A80101, 0x08080808, 12345, 80, 6)
    assert str(flow) == "192.168.1.1:12345 -> 8.8.8.8:80 proto=6"


def test_flow_tuple_value_semantics(demo_flow):
    """Equal fields give equal, interchangeable tuples."""
    same = FlowTuple(0xC0A80101, 0x08080808, 12345, 80, 6)
    assert same == demo_flow
    assert hash(same) == hash(demo_flow)
    assert len({same, demo_flow}) == 1
