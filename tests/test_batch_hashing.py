"""Test vectorized batch hashing against the scalar functions."""

import pytest
import torch

from flowhash import (
    FlowTuple,
    batch_hash,
    flows_to_tensor,
    lookup3_batch,
    lookup3_tuple,
    murmur3_batch,
    murmur3_tuple,
)
from flowhash.metrics import random_flows
from flowhash.utils.seeds import make_rng


@pytest.fixture
def fields():
    """Random flow fields [B, 5] (int64)."""
    return torch.from_numpy(random_flows(1000, make_rng(11)))


def test_reference_vectors_batch(reference_vector):
    *row, seed, expected_l3, expected_m3 = reference_vector
    t = torch.tensor([row], dtype=torch.int64)
    assert lookup3_batch(t, seed).item() == expected_l3
    assert murmur3_batch(t, seed).item() == expected_m3


@pytest.mark.parametrize("seed", [0, 1, 0x12345678, 0xFFFFFFFF])
def test_lookup3_batch_matches_scalar(fields, seed):
    hashes = lookup3_batch(fields, seed)
    for row, h in zip(fields.tolist(), hashes.tolist()):
        assert h == lookup3_tuple(FlowTuple(*row), seed)


@pytest.mark.parametrize("seed", [0, 1, 0x12345678, 0xFFFFFFFF])
def test_murmur3_batch_matches_scalar(fields, seed):
    hashes = murmur3_batch(fields, seed)
    for row, h in zip(fields.tolist(), hashes.tolist()):
        assert h == murmur3_tuple(FlowTuple(*row), seed)


def test_batch_range(fields):
    for name in ("lookup3", "murmur3"):
        hashes = batch_hash(name, fields, 5)
        assert hashes.shape == (fields.shape[0],)
        assert hashes.dtype == torch.int64
        assert (hashes >= 0).all() and (hashes < 2**32).all()


def test_batch_determinism(fields):
    assert torch.equal(murmur3_batch(fields, 3), murmur3_batch(fields, 3))
    assert torch.equal(lookup3_batch(fields, 3), lookup3_batch(fields, 3))


def test_flows_to_tensor(demo_flow):
    t = flows_to_tensor([demo_flow, FlowTuple(0, 0, 0, 0, 0)])
    assert t.shape == (2, 5)
    assert t.dtype == torch.int64
    assert t[0].tolist() == list(demo_flow.astuple())


def test_empty_batch():
    t = flows_to_tensor([])
    assert t.shape == (0, 5)
    assert lookup3_batch(t).shape == (0,)
    assert murmur3_batch(t).shape == (0,)


def test_invalid_inputs(fields):
    with pytest.raises(TypeError):
        lookup3_batch(fields.tolist())
    with pytest.raises(TypeError):
        murmur3_batch(fields.to(torch.int32))
    with pytest.raises(ValueError):
        murmur3_batch(fields[:, :4])
    with pytest.raises(ValueError):
        batch_hash("crc32", fields)


@pytest.mark.parametrize(
    "column,value",
    [(0, -1), (1, 1 << 32), (2, 0x10000), (3, -5), (4, 300)],
)
def test_out_of_range_fields_rejected(fields, column, value):
    bad = fields.clone()
    bad[3, column] = value
    with pytest.raises(ValueError, match="widths"):
        lookup3_batch(bad)
    with pytest.raises(ValueError, match="widths"):
        murmur3_batch(bad)
