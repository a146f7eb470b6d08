"""
Visualization utilities for the virus simulation.
"""

from typing import Dict, List, Optional, Sequence, Tuple
import numpy as np
import matplotlib.pyplot as plt

from ..agents import AgentView, HealthState
from ..envs import Simulation, StatsSnapshot


def run_headless(
    sim: Simulation,
    num_ticks: int,
    stop_when_stable: bool = False,
    record_positions: bool = False,
) -> Dict[str, list]:
    """
    Ejecuta la simulación sin ventana y guarda el historial.

    Args:
        sim: Simulación ya generada
        num_ticks: Máximo de ticks a ejecutar
        stop_when_stable: Si parar cuando no quedan susceptibles
            (a partir de ahí los contadores ya no cambian)
        record_positions: Si guardar los AgentView de cada tick

    Returns:
        Diccionario con "stats" (StatsSnapshot por tick, incluido el
        inicial) y "positions" (lista de AgentView por tick)
    """
    stats_history: List[StatsSnapshot] = [sim.statistics()]
    positions_history: List[List[AgentView]] = []

    if record_positions:
        positions_history.append(sim.agents())

    for _ in range(num_ticks):
        if stop_when_stable and stats_history[-1].susceptible == 0:
            break

        sim.tick()
        stats_history.append(sim.statistics())

        if record_positions:
            positions_history.append(sim.agents())

    return {
        "stats": stats_history,
        "positions": positions_history,
    }


def plot_epidemic_curve(
    stats_history: List[StatsSnapshot],
    title: str = "Epidemic Curve",
    save_path: Optional[str] = None,
) -> np.ndarray:
    """
    Dibuja la evolución de infectados, inmunes y susceptibles.

    Args:
        stats_history: Snapshots por tick (ver run_headless)
        title: Título del gráfico
        save_path: Ruta para guardar imagen

    Returns:
        Array (ticks, 3) con los contadores infected/immune/susceptible
    """
    counts = np.array(
        [[s.infected, s.immune, s.susceptible] for s in stats_history],
        dtype=np.int64,
    ).reshape(-1, 3)
    ticks = np.arange(len(counts))

    fig, ax = plt.subplots(figsize=(10, 6))
    ax.plot(ticks, counts[:, 0], color="red", label="Infected")
    ax.plot(ticks, counts[:, 1], color="green", label="Immune")
    ax.plot(ticks, counts[:, 2], color="gold", label="Susceptible")
    ax.set_title(title)
    ax.set_xlabel("Tick")
    ax.set_ylabel("Agents")
    ax.grid(True, alpha=0.3)
    ax.legend()

    if save_path:
        plt.savefig(save_path, dpi=150, bbox_inches="tight")

    plt.close(fig)

    return counts


def create_heatmap(
    positions_history: Sequence[Sequence[AgentView]],
    grid_size: Tuple[int, int],
    health: Optional[HealthState] = None,
    title: str = "Agent Positions Heatmap",
    save_path: Optional[str] = None,
) -> np.ndarray:
    """
    Crea un heatmap de posiciones de agentes.

    Args:
        positions_history: AgentView por tick (ver run_headless)
        grid_size: Tamaño del grid (width, height)
        health: Estado de los agentes a incluir (None = todos)
        title: Título del gráfico
        save_path: Ruta para guardar imagen

    Returns:
        Array del heatmap normalizado
    """
    width, height = grid_size
    heatmap = np.zeros((height, width))

    cells = [
        view.position
        for views in positions_history
        for view in views
        if health is None or view.health == health
    ]
    if cells:
        xs, ys = np.array(cells).T
        np.add.at(heatmap, (ys, xs), 1)

    # Normalizar
    if heatmap.max() > 0:
        heatmap = heatmap / heatmap.max()

    fig, ax = plt.subplots(figsize=(10, 6))
    im = ax.imshow(heatmap, cmap="hot", interpolation="nearest")
    ax.set_title(title)
    ax.set_xlabel("X")
    ax.set_ylabel("Y")
    plt.colorbar(im, ax=ax, label="Frecuencia (normalizada)")

    if save_path:
        plt.savefig(save_path, dpi=150, bbox_inches="tight")

    plt.close(fig)

    return heatmap
