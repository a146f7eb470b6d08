"""
Agent class
===========
Estado individual de cada agente y su máquina de estados de dirección.
"""

from enum import IntEnum
from dataclasses import dataclass
from typing import List, Tuple, TYPE_CHECKING
import numpy as np

if TYPE_CHECKING:
    from ..envs.grid import Grid


class Direction(IntEnum):
    """Dirección del agente."""
    RIGHT = 0
    DOWN = 1
    LEFT = 2
    UP = 3

    def to_vec(self) -> Tuple[int, int]:
        """Convierte dirección a vector de movimiento (dx, dy)."""
        vectors = {
            Direction.RIGHT: (1, 0),
            Direction.DOWN: (0, 1),
            Direction.LEFT: (-1, 0),
            Direction.UP: (0, -1),
        }
        return vectors[self]

    def others(self) -> List["Direction"]:
        """Las tres direcciones distintas de esta, en orden del enum."""
        return [d for d in Direction if d != self]


class HealthState(IntEnum):
    """Estado de salud del agente."""
    INFECTED = 0
    IMMUNE = 1
    SUSCEPTIBLE = 2

    def can_transition_to(self, other: "HealthState") -> bool:
        """Solo SUSCEPTIBLE -> INFECTED es una transición válida."""
        return self == HealthState.SUSCEPTIBLE and other == HealthState.INFECTED


@dataclass(frozen=True)
class AgentView:
    """Vista inmutable de un agente, para renderizado."""
    id: int
    position: Tuple[int, int]
    health: HealthState
    direction: Direction


@dataclass
class Agent:
    """
    Representa un agente individual en el grid.

    Attributes:
        id: Identificador (índice dentro de la población)
        x, y: Posición en el grid
        direction: Dirección actual
        lounges: Si el agente cambia de rumbo voluntariamente cada cierto tiempo
        health: Estado de salud
        steps_since_redirect: Pasos dados desde el último cambio voluntario
    """
    id: int
    x: int
    y: int
    direction: Direction = Direction.RIGHT
    lounges: bool = False
    health: HealthState = HealthState.SUSCEPTIBLE
    steps_since_redirect: int = 0

    @property
    def position(self) -> Tuple[int, int]:
        """Posición (x, y) del agente."""
        return (self.x, self.y)

    @property
    def is_infected(self) -> bool:
        return self.health == HealthState.INFECTED

    @property
    def is_susceptible(self) -> bool:
        return self.health == HealthState.SUSCEPTIBLE

    def next_position(self) -> Tuple[int, int]:
        """
        Calcula la posición al avanzar un paso.
        No modifica la posición actual.
        """
        dx, dy = self.direction.to_vec()
        return (self.x + dx, self.y + dy)

    def is_blocked(self, grid: "Grid") -> bool:
        """True si avanzar saldría del grid o pisaría una celda ocupada."""
        return not grid.is_free(*self.next_position())

    def resolve_direction(self, grid: "Grid", rng: np.random.Generator, min_step: int) -> None:
        """
        Decide la dirección para este tick.

        Reglas, en orden:
        1. Si el agente deambula y lleva más de `min_step` pasos, elige una
           dirección cualquiera de las cuatro; el contador solo se reinicia
           si la dirección cambia.
        2. Si no, y el camino está bloqueado, elige una de las otras tres.
        3. En otro caso mantiene la dirección.

        La dirección nueva del punto 2 puede seguir bloqueada; en ese caso
        el agente se queda quieto este tick.
        """
        if self.lounges and self.steps_since_redirect > min_step:
            new_direction = Direction(int(rng.integers(0, 4)))
            if new_direction != self.direction:
                self.steps_since_redirect = 0
            self.direction = new_direction
        elif self.is_blocked(grid):
            candidates = self.direction.others()
            self.direction = candidates[int(rng.integers(0, len(candidates)))]

    def try_move(self, grid: "Grid") -> bool:
        """
        Avanza un paso si el destino está libre.

        Returns:
            True si el agente se movió
        """
        if self.is_blocked(grid):
            return False

        new_x, new_y = self.next_position()
        grid.vacate(self.x, self.y)
        self.x, self.y = new_x, new_y
        grid.place(self.x, self.y, self.id)

        if self.lounges:
            self.steps_since_redirect += 1
        return True

    def infect(self) -> bool:
        """
        Infecta al agente si es susceptible.

        Returns:
            True si el estado cambió
        """
        if not self.health.can_transition_to(HealthState.INFECTED):
            return False
        self.health = HealthState.INFECTED
        return True

    def view(self) -> AgentView:
        """Snapshot inmutable para capas externas."""
        return AgentView(self.id, self.position, self.health, self.direction)

    def to_dict(self) -> dict:
        """Convierte el agente a diccionario para serialización."""
        return {
            "id": self.id,
            "position": self.position,
            "direction": int(self.direction),
            "lounges": self.lounges,
            "health": int(self.health),
            "steps_since_redirect": self.steps_since_redirect,
        }

    def __repr__(self) -> str:
        dir_str = ["→", "↓", "←", "↑"][self.direction]
        return f"Agent(id={self.id}, pos={self.position}, dir={dir_str}, health={self.health.name})"
