"""
Plotting helpers for sampled states and traversal paths.

Paths are drawn in the first two or three ambient coordinates.
"""

from typing import List, Optional, Sequence
import numpy as np
import matplotlib
matplotlib.use('Agg')  # Non-interactive backend for saving
import matplotlib.pyplot as plt


def plot_paths(
    paths: Sequence[List[np.ndarray]],
    samples: Optional[Sequence[np.ndarray]] = None,
    save_path: Optional[str] = None,
    title: str = "Manifold traversals",
):
    """
    Plot traversal paths (and optionally the sampled states).

    Args:
        paths: Each path is a list of states as returned by traverse_manifold.
        samples: States to scatter on top.
        save_path: If given, the figure is saved there and closed.

    Returns:
        The matplotlib figure (None once saved and closed).
    """
    dims = 3
    for path in paths:
        if len(path):
            dims = min(3, len(path[0]))
            break
    if samples is not None and len(samples):
        dims = min(3, len(samples[0]))

    fig = plt.figure(figsize=(7, 7))
    ax = fig.add_subplot(111, projection='3d') if dims == 3 else fig.add_subplot(111)

    for path in paths:
        if not len(path):
            continue
        pts = np.asarray(path)[:, :dims]
        ax.plot(*pts.T, linewidth=1.2, alpha=0.8)

    if samples is not None and len(samples):
        pts = np.asarray(samples)[:, :dims]
        ax.scatter(*pts.T, s=12, c='k', alpha=0.7, label='samples')
        ax.legend(loc='upper right')

    ax.set_title(title)
    if dims == 2:
        ax.set_aspect('equal')

    if save_path is not None:
        fig.savefig(save_path, dpi=120, bbox_inches='tight')
        plt.close(fig)
        return None
    return fig
