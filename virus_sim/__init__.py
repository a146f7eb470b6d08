"""
Virus Grid Simulation
=====================
Epidemia en un grid 2-D con agentes que pasean y se contagian por proximidad.
"""

__version__ = "0.1.0"

from .envs import Simulation, SimConfig, PopulationRecipe, Statistics, StatsSnapshot
from .envs import Grid, GridError, OccupiedCellError, OutOfBoundsError, InvariantError
from .agents import Agent, AgentView, Direction, HealthState, Population

__all__ = [
    "Simulation",
    "SimConfig",
    "PopulationRecipe",
    "Statistics",
    "StatsSnapshot",
    "Grid",
    "GridError",
    "OccupiedCellError",
    "OutOfBoundsError",
    "InvariantError",
    "Agent",
    "AgentView",
    "Direction",
    "HealthState",
    "Population",
]
