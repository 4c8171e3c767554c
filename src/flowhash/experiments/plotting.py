"""Shared plotting utilities for experiments."""

import matplotlib

# Use Agg backend (non-interactive, PDF-compatible)
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from pathlib import Path
from typing import Optional

from flowhash.experiments.common import get_git_commit, get_hardware_info


def save_pdf(fig, path: Path) -> None:
    """Save figure as PDF with tight layout.

    Args:
        fig: Matplotlib figure
        path: Output PDF path
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fig.tight_layout()
    fig.savefig(path, bbox_inches="tight", dpi=150)
    plt.close(fig)


def add_footer(fig, experiment_id: str, extra: Optional[dict] = None) -> None:
    """Add hardware/version footer to figure.

    Args:
        fig: Matplotlib figure
        experiment_id: Experiment identifier
        extra: Optional dictionary of additional info to include
    """
    hardware = get_hardware_info()
    git_commit = get_git_commit()

    footer_parts = [experiment_id, f"PyTorch {hardware['torch_version']}", f"Device: {hardware['device']}"]
    if git_commit:
        footer_parts.append(f"Git: {git_commit[:8]}")
    if extra:
        for k, v in extra.items():
            footer_parts.append(f"{k}: {v}")

    fig.text(0.5, 0.01, " | ".join(footer_parts), ha="center", va="bottom",
             fontsize=8, alpha=0.7)
