"""
Utility functions for the virus simulation.
"""

from .visualization import (
    run_headless,
    plot_epidemic_curve,
    create_heatmap,
)

__all__ = [
    "run_headless",
    "plot_epidemic_curve",
    "create_heatmap",
]
