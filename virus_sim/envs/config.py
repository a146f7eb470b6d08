"""
Simulation Configuration
========================
Dimensiones del grid, parámetros de movimiento/contagio y receta de
la población inicial.

Valores por defecto: grid de 90x50, radio de contagio 10, 20 pasos
mínimos antes de que un agente que deambula cambie de rumbo y 600
agentes con un único infectado.
"""

from dataclasses import dataclass, field, asdict
from typing import Any, Dict, Optional
import numpy as np

from ..agents.agent import HealthState

DEFAULT_WIDTH = 90
DEFAULT_HEIGHT = 50
DEFAULT_MIN_STEP = 20
DEFAULT_INFECTION_RADIUS = 10
DEFAULT_LOUNGE_PROBABILITY = 0.5


@dataclass
class PopulationRecipe:
    """
    Composición deseada de la población inicial.

    Los contadores actúan como pesos del sorteo de estado de cada agente;
    `total` es el número de intentos de colocación y, si no se indica,
    vale la suma de los contadores.
    """
    infected: int = 1
    immune: int = 0
    susceptible: int = 599
    total: Optional[int] = None

    def __post_init__(self):
        for name in ("infected", "immune", "susceptible"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be >= 0, got {getattr(self, name)}")

        weight_sum = self.infected + self.immune + self.susceptible
        if weight_sum == 0:
            raise ValueError("Population recipe needs at least one non-zero count")

        if self.total is None:
            self.total = weight_sum
        elif self.total < 0:
            raise ValueError(f"total must be >= 0, got {self.total}")

    def count(self, health: HealthState) -> int:
        """Número pedido de agentes en un estado."""
        return {
            HealthState.INFECTED: self.infected,
            HealthState.IMMUNE: self.immune,
            HealthState.SUSCEPTIBLE: self.susceptible,
        }[health]

    def weights(self) -> np.ndarray:
        """Contadores en el orden de HealthState."""
        return np.array([self.count(h) for h in HealthState], dtype=np.int64)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PopulationRecipe":
        """Crea una receta desde un diccionario; las claves ausentes toman el valor por defecto."""
        unknown = set(data) - set(cls.__dataclass_fields__)
        if unknown:
            raise ValueError(f"Unknown population options: {sorted(unknown)}")
        return cls(**data)

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)


@dataclass
class SimConfig:
    """Configuración de la simulación."""
    # Grid
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT

    # Mecánicas
    min_step_before_lounge_redirect: int = DEFAULT_MIN_STEP
    infection_radius: int = DEFAULT_INFECTION_RADIUS

    # Población
    initial_population: PopulationRecipe = field(default_factory=PopulationRecipe)
    lounge_probability: float = DEFAULT_LOUNGE_PROBABILITY

    # Otros
    seed: Optional[int] = None

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {self.width}x{self.height}")
        if self.min_step_before_lounge_redirect < 0:
            raise ValueError("min_step_before_lounge_redirect must be >= 0")
        if self.infection_radius < 0:
            raise ValueError("infection_radius must be >= 0")
        if not 0.0 <= self.lounge_probability <= 1.0:
            raise ValueError(f"lounge_probability must be in [0, 1], got {self.lounge_probability}")

        # Permitir la receta como diccionario (p. ej. cargada desde JSON)
        if isinstance(self.initial_population, dict):
            self.initial_population = PopulationRecipe.from_dict(self.initial_population)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SimConfig":
        """Crea una configuración desde un diccionario con las opciones reconocidas."""
        known = set(cls.__dataclass_fields__)
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown config options: {sorted(unknown)}")
        return cls(**data)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
