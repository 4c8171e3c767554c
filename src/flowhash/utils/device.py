"""Device management utilities."""

import torch


def resolve_device(device: str) -> torch.device:
    """Resolve device string to torch.device.

    Args:
        device: Device string ("cpu" or "cuda")

    Returns:
        torch.device object

    Raises:
        ValueError: If device string is not "cpu" or "cuda", or if CUDA is
            requested but not available
    """
    if device == "cpu":
        return torch.device("cpu")
    elif device == "cuda":
        if not torch.cuda.is_available():
            raise ValueError(
                "CUDA device requested but CUDA is not available. "
                "Use --device cpu or ensure CUDA is properly installed."
            )
        return torch.device("cuda")
    else:
        raise ValueError(f"device must be 'cpu' or 'cuda', got {device}")
