"""Utilities module for flowhash."""

from flowhash.utils.device import resolve_device
from flowhash.utils.logger import get_logger
from flowhash.utils.seeds import make_rng, seed_everything
from flowhash.utils.timing import Timer, flows_per_second

__all__ = [
    "get_logger",
    "resolve_device",
    "seed_everything",
    "make_rng",
    "Timer",
    "flows_per_second",
]
