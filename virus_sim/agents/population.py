"""
Population
==========
Colección ordenada de agentes junto con el grid que indexa sus posiciones.
"""

from functools import lru_cache
from typing import Dict, Iterator, List, Optional, Tuple, TYPE_CHECKING
import numpy as np

from .agent import Agent, Direction, HealthState
from ..envs.grid import Grid, InvariantError

if TYPE_CHECKING:
    from ..envs.statistics import Statistics


@lru_cache(maxsize=None)
def disk_mask(radius: int) -> np.ndarray:
    """
    Máscara booleana (2r+1, 2r+1) de las celdas a distancia euclídea <= r
    del centro.
    """
    offsets = np.arange(-radius, radius + 1)
    dy, dx = np.meshgrid(offsets, offsets, indexing="ij")
    mask = dx * dx + dy * dy <= radius * radius
    mask.setflags(write=False)
    return mask


def near_infected(infected_map: np.ndarray, x: int, y: int, radius: int) -> bool:
    """
    True si alguna celda marcada en `infected_map` está a distancia
    euclídea <= radius de (x, y).

    La caja se recorta a los límites del grid, sin índices negativos.
    """
    height, width = infected_map.shape
    y0, y1 = max(0, y - radius), min(height, y + radius + 1)
    x0, x1 = max(0, x - radius), min(width, x + radius + 1)

    mask = disk_mask(radius)
    my0, mx0 = y0 - (y - radius), x0 - (x - radius)
    window = mask[my0:my0 + (y1 - y0), mx0:mx0 + (x1 - x0)]

    return bool(np.any(infected_map[y0:y1, x0:x1] & window))


class Population:
    """
    Todos los agentes de la simulación y su grid de ocupación.

    El id de cada agente es su índice en la lista, de modo que el grid
    guarda índices y no referencias.
    """

    def __init__(self, width: int, height: int):
        self.grid = Grid(width, height)
        self._agents: List[Agent] = []

    @property
    def width(self) -> int:
        return self.grid.width

    @property
    def height(self) -> int:
        return self.grid.height

    def add(
        self,
        x: int,
        y: int,
        direction: Direction = Direction.RIGHT,
        lounges: bool = False,
        health: HealthState = HealthState.SUSCEPTIBLE,
    ) -> Agent:
        """
        Crea un agente y lo coloca en el grid.

        Raises:
            OccupiedCellError: si (x, y) ya está ocupada
            OutOfBoundsError: si (x, y) está fuera del grid
        """
        agent = Agent(
            id=len(self._agents),
            x=x,
            y=y,
            direction=direction,
            lounges=lounges,
            health=health,
        )
        self.grid.place(x, y, agent.id)
        self._agents.append(agent)
        return agent

    def get(self, agent_id: int) -> Optional[Agent]:
        """Obtiene un agente por ID."""
        if 0 <= agent_id < len(self._agents):
            return self._agents[agent_id]
        return None

    def agent_at(self, x: int, y: int) -> Optional[Agent]:
        """Retorna el agente en (x, y), si existe."""
        agent_id = self.grid.occupant(x, y)
        return None if agent_id is None else self._agents[agent_id]

    def count(self, health: HealthState) -> int:
        """Cuenta agentes en un estado recorriendo la población."""
        return sum(1 for a in self._agents if a.health == health)

    def positions(self) -> List[Tuple[int, int]]:
        return [a.position for a in self._agents]

    def infected_map(self) -> np.ndarray:
        """Máscara (height, width) de celdas ocupadas por infectados."""
        infected = np.zeros((self.height, self.width), dtype=bool)
        for agent in self._agents:
            if agent.is_infected:
                infected[agent.y, agent.x] = True
        return infected

    def advance_tick(
        self,
        rng: np.random.Generator,
        statistics: "Statistics",
        min_step: int,
        infection_radius: int,
    ) -> List[int]:
        """
        Avanza un tick para todos los agentes.

        Primero se evalúan los contagios sobre el estado al inicio del tick
        (posiciones y salud), y después cada agente, en orden, decide su
        dirección y se mueve sobre el grid vivo.

        Returns:
            IDs de los agentes infectados en este tick
        """
        new_infections = self._spread_infection(statistics, infection_radius)

        for agent in self._agents:
            agent.resolve_direction(self.grid, rng, min_step)
            agent.try_move(self.grid)

        return new_infections

    def _spread_infection(self, statistics: "Statistics", radius: int) -> List[int]:
        """Contagia a los susceptibles cercanos a un infectado del snapshot."""
        snapshot = self.infected_map()
        if not snapshot.any():
            return []

        new_infections = []
        for agent in self._agents:
            if not agent.is_susceptible:
                continue
            if near_infected(snapshot, agent.x, agent.y, radius):
                previous = agent.health
                if agent.infect():
                    statistics.record_transition(previous, agent.health)
                    new_infections.append(agent.id)

        return new_infections

    def check_invariants(self) -> None:
        """
        Verifica que el grid sea un índice fiel de las posiciones.

        Raises:
            InvariantError: si grid y agentes no coinciden
        """
        if self.grid.num_occupied != len(self._agents):
            raise InvariantError(
                f"{self.grid.num_occupied} occupied cells for {len(self._agents)} agents"
            )
        for agent in self._agents:
            if not self.grid.in_bounds(agent.x, agent.y):
                raise InvariantError(f"{agent!r} outside grid")
            occupant = self.grid.occupant(agent.x, agent.y)
            if occupant != agent.id:
                raise InvariantError(f"{agent!r} not indexed in grid (found {occupant})")

    def health_counts(self) -> Dict[HealthState, int]:
        return {h: self.count(h) for h in HealthState}

    def __iter__(self) -> Iterator[Agent]:
        return iter(self._agents)

    def __len__(self) -> int:
        return len(self._agents)

    def __getitem__(self, agent_id: int) -> Agent:
        return self._agents[agent_id]
