"""Test distribution diagnostics."""

import numpy as np
import pytest
import torch

from flowhash import FlowTuple, lookup3_tuple, murmur3_tuple
from flowhash.metrics import (
    avalanche_bias,
    avalanche_matrix,
    bias_from_matrix,
    bucket_loads,
    chi_square_uniformity,
    collision_rate,
    gini_coefficient,
    load_summary,
    max_load,
    mean_ci95,
    random_flows,
)
from flowhash.hashing import batch_hash
from flowhash.utils.seeds import make_rng


def test_bucket_loads_known_input():
    hashes = np.array([0, 1, 2, 3, 4, 5, 8, 0xFFFFFFFF])
    loads = bucket_loads(hashes, 4)
    # 0xFFFFFFFF % 4 == 3
    assert loads.tolist() == [3, 2, 1, 2]
    assert max_load(hashes, 4) == 3


def test_bucket_loads_invalid():
    with pytest.raises(ValueError):
        bucket_loads(np.array([1, 2]), 0)


def test_chi_square_uniform_is_zero():
    stat, dof = chi_square_uniformity(np.array([5, 5, 5, 5]))
    assert stat == 0.0
    assert dof == 3


def test_chi_square_skewed():
    stat, _ = chi_square_uniformity(np.array([20, 0, 0, 0]))
    # expected 5 per bucket: (15^2 + 3 * 5^2) / 5
    assert stat == pytest.approx(60.0)


def test_collision_rate():
    assert collision_rate(np.array([1, 2, 3, 4])) == 0.0
    assert collision_rate(np.array([1, 1, 1, 1])) == pytest.approx(0.75)
    assert collision_rate(np.array([])) == 0.0


def test_gini():
    assert gini_coefficient([1, 1, 1, 1]) == pytest.approx(0.0)
    assert gini_coefficient([0, 0, 0, 10]) == pytest.approx(0.75)
    assert gini_coefficient([]) == 0.0


def test_mean_ci95():
    assert mean_ci95([]) == (0.0, 0.0, 0.0, 0.0)
    assert mean_ci95([2.0]) == (2.0, 2.0, 2.0, 0.0)
    mean, low, high, std = mean_ci95([1.0, 2.0, 3.0])
    assert mean == pytest.approx(2.0)
    assert low < mean < high
    assert std == pytest.approx(1.0)


def test_random_flows_ranges():
    flows = random_flows(5000, make_rng(0))
    assert flows.shape == (5000, 5)
    assert flows.dtype == np.int64
    limits = [2**32, 2**32, 2**16, 2**16, 2**8]
    for col, limit in enumerate(limits):
        assert flows[:, col].min() >= 0
        assert flows[:, col].max() < limit
    assert random_flows(0, make_rng(0)).shape == (0, 5)


def test_random_flows_reproducible():
    assert np.array_equal(random_flows(100, make_rng(5)), random_flows(100, make_rng(5)))


@pytest.mark.parametrize("name", ["lookup3", "murmur3"])
def test_hashes_spread_evenly(name):
    """Random flows fill 256 buckets close to uniform."""
    fields = torch.from_numpy(random_flows(50_000, make_rng(1)))
    hashes = batch_hash(name, fields, 0x12345678).numpy()
    summary = load_summary(hashes, 256)

    assert summary["total"] == 50_000
    assert summary["empty_buckets"] == 0
    assert summary["gini"] < 0.08
    # chi2 with 255 dof; mean 255, std ~22.6
    assert summary["chi2"] < 255 + 6 * 22.6
    assert summary["collision_rate"] < 0.01


@pytest.mark.parametrize("hash_fn", [lookup3_tuple, murmur3_tuple])
def test_avalanche(hash_fn):
    """Each key bit flips each output bit with probability near 0.5."""
    rng = make_rng(2)
    flows = [FlowTuple(*map(int, row)) for row in random_flows(200, rng)]

    matrix = avalanche_matrix(hash_fn, flows, seed=0)
    assert matrix.shape == (104, 32)
    assert 0.45 < matrix.mean() < 0.55

    bias = avalanche_bias(hash_fn, flows, seed=0)
    assert bias["mean_flip_prob"] == pytest.approx(matrix.mean())
    assert bias["mean_bias"] < 0.1


def test_avalanche_empty():
    assert avalanche_matrix(murmur3_tuple, []).sum() == 0.0


def test_bias_from_matrix_known_input():
    matrix = np.full((104, 32), 0.5)
    matrix[0, 0] = 0.9
    matrix[1, 1] = 0.3
    bias = bias_from_matrix(matrix)
    assert bias["max_bias"] == pytest.approx(0.4)
    assert bias["mean_bias"] == pytest.approx(0.6 / matrix.size)
    assert bias["mean_flip_prob"] == pytest.approx(matrix.mean())
