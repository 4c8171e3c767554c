"""Seed management for determinism."""

import random

import numpy as np
import torch


def seed_everything(seed: int) -> None:
    """Set all random seeds for deterministic behavior.

    Sets seeds for Python random, NumPy, and PyTorch (CPU and CUDA).
    Only flow sampling in diagnostics and tests draws from these; the hash
    functions themselves use no randomness.

    Args:
        seed: Random seed value (should be non-negative integer)
    """
    # Python random
    random.seed(seed)

    # NumPy
    np.random.seed(seed)

    # PyTorch CPU
    torch.manual_seed(seed)

    # PyTorch CUDA (all devices)
    if torch.cuda.is_available():
        torch.cuda.manual_seed_all(seed)


def make_rng(seed: int) -> np.random.Generator:
    """Create a local NumPy random number generator with given seed.

    Args:
        seed: Random seed

    Returns:
        NumPy Generator instance
    """
    return np.random.default_rng(seed)
