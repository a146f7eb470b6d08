import os

os.environ.setdefault("MPLBACKEND", "Agg")

import numpy as np
import pytest

from virus_sim import Population, Statistics


@pytest.fixture
def rng():
    return np.random.default_rng(0)


@pytest.fixture
def make_population():
    """Crea una población y sus estadísticas desde (x, y, kwargs) por agente."""

    def _make(width, height, specs):
        population = Population(width, height)
        statistics = Statistics()
        for x, y, kwargs in specs:
            agent = population.add(x, y, **kwargs)
            statistics.record_initial(agent.health)
        return population, statistics

    return _make
