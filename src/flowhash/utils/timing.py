"""Timing utilities."""

import time
from typing import Optional

import torch


class Timer:
    """Context manager for timing code blocks with CUDA synchronization support."""

    def __init__(self, name: str = "Operation", device: str = "cpu", verbose: bool = True):
        """
        Initialize timer.

        Args:
            name: Name/description of the operation being timed
            device: Device string ("cpu" or "cuda"). With "cuda", GPU work is
                synchronized before reading the clock.
            verbose: Print the elapsed time on exit
        """
        self.name = name
        self.device = device
        self.verbose = verbose
        self.start_time: Optional[float] = None
        self.elapsed_time: Optional[float] = None

    def __enter__(self) -> "Timer":
        """Start timing."""
        if self.device == "cuda":
            torch.cuda.synchronize()
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Stop timing and record elapsed time."""
        if self.start_time is not None:
            if self.device == "cuda":
                torch.cuda.synchronize()
            self.elapsed_time = time.perf_counter() - self.start_time
            if self.verbose:
                print(f"{self.name} took {self.elapsed_time:.4f} seconds")

    @property
    def elapsed(self) -> float:
        """Get elapsed time in seconds."""
        if self.elapsed_time is None:
            raise ValueError("Timer has not been used as context manager yet")
        return self.elapsed_time


def flows_per_second(num_flows: int, elapsed_seconds: float) -> float:
    """Calculate hashing throughput.

    Returns:
        Flows per second (0.0 if elapsed_seconds <= 0)
    """
    if elapsed_seconds <= 0:
        return 0.0
    return num_flows / elapsed_seconds
