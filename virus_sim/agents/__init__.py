"""
Agent Classes
"""

from .agent import Agent, AgentView, Direction, HealthState
from .population import Population

__all__ = [
    "Agent",
    "AgentView",
    "Direction",
    "HealthState",
    "Population",
]
