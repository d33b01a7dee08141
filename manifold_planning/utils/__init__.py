"""
Utility functions for manifold planning.
"""

from manifold_planning.utils.visualization import plot_paths

__all__ = ["plot_paths"]
