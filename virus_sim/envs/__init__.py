"""
Simulation Environment
"""

from .grid import Grid, GridError, OccupiedCellError, OutOfBoundsError, InvariantError
from .statistics import Statistics, StatsSnapshot
from .config import SimConfig, PopulationRecipe
from .environment import Simulation

__all__ = [
    "Grid",
    "GridError",
    "OccupiedCellError",
    "OutOfBoundsError",
    "InvariantError",
    "Statistics",
    "StatsSnapshot",
    "SimConfig",
    "PopulationRecipe",
    "Simulation",
]
