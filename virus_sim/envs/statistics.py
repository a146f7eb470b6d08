"""
Epidemic Statistics
===================
Contadores incrementales de agentes por estado de salud.
"""

from dataclasses import dataclass

from ..agents.agent import HealthState


@dataclass(frozen=True)
class StatsSnapshot:
    """Copia de solo lectura de los contadores."""
    infected: int
    immune: int
    susceptible: int

    @property
    def total(self) -> int:
        return self.infected + self.immune + self.susceptible

    def to_dict(self) -> dict:
        return {
            "infected": self.infected,
            "immune": self.immune,
            "susceptible": self.susceptible,
            "total": self.total,
        }


class Statistics:
    """
    Contadores de cada HealthState.

    Se rellenan una vez durante la generación (record_initial) y después
    solo cambian con cada transición; nunca se recalculan recorriendo la
    población.
    """

    def __init__(self):
        self._counts = {state: 0 for state in HealthState}

    def record_initial(self, health: HealthState) -> None:
        """Cuenta un agente recién generado."""
        self._counts[health] += 1

    def record_transition(self, from_state: HealthState, to_state: HealthState) -> None:
        """
        Registra el cambio de estado de un agente.

        Raises:
            ValueError: si la transición no es SUSCEPTIBLE -> INFECTED
                o no quedan agentes en el estado de origen
        """
        if not from_state.can_transition_to(to_state):
            raise ValueError(f"Invalid transition {from_state.name} -> {to_state.name}")
        if self._counts[from_state] == 0:
            raise ValueError(f"No {from_state.name} agents left to transition")
        self._counts[from_state] -= 1
        self._counts[to_state] += 1

    def count(self, health: HealthState) -> int:
        return self._counts[health]

    @property
    def infected(self) -> int:
        return self._counts[HealthState.INFECTED]

    @property
    def immune(self) -> int:
        return self._counts[HealthState.IMMUNE]

    @property
    def susceptible(self) -> int:
        return self._counts[HealthState.SUSCEPTIBLE]

    def total(self) -> int:
        """Suma de los tres contadores; igual al tamaño de la población."""
        return sum(self._counts.values())

    def snapshot(self) -> StatsSnapshot:
        return StatsSnapshot(
            infected=self.infected,
            immune=self.immune,
            susceptible=self.susceptible,
        )

    def __repr__(self) -> str:
        return (
            f"Statistics(infected={self.infected}, immune={self.immune}, "
            f"susceptible={self.susceptible})"
        )
