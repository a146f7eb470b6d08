"""
Epidemic Grid Simulation
========================
Simulación de una epidemia en un grid 2-D: cada agente hace un paseo
aleatorio sesgado y los susceptibles cercanos a un infectado se contagian.

La simulación posee la población, el grid y las estadísticas. Las capas
externas (render, input) solo leen snapshots inmutables.
"""

from typing import Any, Dict, List, Optional

import numpy as np

from ..agents import Direction, HealthState, Population, AgentView
from .config import SimConfig
from .statistics import Statistics, StatsSnapshot


class Simulation:
    """
    Simulación de contagio por proximidad.

    Ciclo de vida: generación -> ticks -> reset (nueva generación) -> ticks...

    Ejemplo:
        sim = Simulation(width=40, height=20, seed=0)
        for _ in range(100):
            sim.tick()
        print(sim.statistics())
    """

    def __init__(
        self,
        config: SimConfig = None,
        rng: Optional[np.random.Generator] = None,
        **kwargs,
    ):
        if config is None:
            config = SimConfig(**kwargs)
        elif kwargs:
            raise ValueError(f"Pass either a config or keyword options, not both: {sorted(kwargs)}")
        self.config = config

        self._np_random = rng if rng is not None else np.random.default_rng(config.seed)

        self.current_step = 0
        self.infection_events: List[Dict[str, Any]] = []

        self._population: Population = None
        self._statistics: Statistics = None
        self._generate()

    @property
    def width(self) -> int:
        return self.config.width

    @property
    def height(self) -> int:
        return self.config.height

    @property
    def population(self) -> Population:
        """Población actual. Se sustituye entera en cada reset."""
        return self._population

    def _generate(self) -> None:
        """
        Genera una población nueva a partir de la receta.

        Se hacen `total` intentos en coordenadas aleatorias; si la celda ya
        está ocupada el intento se descarta sin reintentar, así que la
        población final puede ser algo menor que la pedida.

        El estado de salud de cada agente se sortea de forma independiente
        con pesos iguales a los contadores de la receta, así que las
        proporciones obtenidas son aleatorias y no exactas.
        """
        recipe = self.config.initial_population
        population = Population(self.config.width, self.config.height)
        statistics = Statistics()

        weights = recipe.weights()
        p = weights / weights.sum()
        states = list(HealthState)

        for _ in range(recipe.total):
            x = int(self._np_random.integers(0, self.config.width))
            y = int(self._np_random.integers(0, self.config.height))
            if not population.grid.is_free(x, y):
                continue

            health = states[int(self._np_random.choice(len(states), p=p))]

            direction = Direction(int(self._np_random.integers(0, 4)))
            lounges = bool(self._np_random.random() < self.config.lounge_probability)

            population.add(x, y, direction=direction, lounges=lounges, health=health)
            statistics.record_initial(health)

        self._population = population
        self._statistics = statistics
        self.current_step = 0
        self.infection_events = []

    def tick(self) -> None:
        """Avanza la simulación un paso."""
        self.current_step += 1

        new_infections = self._population.advance_tick(
            self._np_random,
            self._statistics,
            min_step=self.config.min_step_before_lounge_redirect,
            infection_radius=self.config.infection_radius,
        )

        for agent_id in new_infections:
            self.infection_events.append({
                "step": self.current_step,
                "agent_id": agent_id,
                "position": self._population[agent_id].position,
            })

    def reset(self, seed: Optional[int] = None) -> None:
        """
        Descarta población, grid y estadísticas y genera unos nuevos con la
        misma receta.

        Args:
            seed: Si se indica, reinicia el generador aleatorio con esta semilla
        """
        if seed is not None:
            self._np_random = np.random.default_rng(seed)
        self._generate()

    def agents(self) -> List[AgentView]:
        """Snapshot de solo lectura de todos los agentes, en orden."""
        return [agent.view() for agent in self._population]

    def statistics(self) -> StatsSnapshot:
        """Snapshot de solo lectura de los contadores."""
        return self._statistics.snapshot()

    def get_info(self) -> Dict[str, Any]:
        """Información adicional del estado."""
        stats = self._statistics.snapshot()
        return {
            "step": self.current_step,
            "num_agents": len(self._population),
            "requested_agents": self.config.initial_population.total,
            **stats.to_dict(),
            "infection_events": len(self.infection_events),
            "infected_percentage": stats.infected / max(1, stats.total),
        }

    def __repr__(self) -> str:
        return (
            f"Simulation({self.width}x{self.height}, step={self.current_step}, "
            f"{self._statistics!r})"
        )
