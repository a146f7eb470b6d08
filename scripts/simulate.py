#!/usr/bin/env python3
"""
Simulate - Ejecutar la Simulación sin Ventana
=============================================
Ejecuta la epidemia durante N ticks, imprime los contadores y opcionalmente
guarda la curva epidémica y el historial en JSON.

Uso:
    python scripts/simulate.py --ticks 500
    python scripts/simulate.py --width 40 --height 20 --susceptible 150 --infected 2 --seed 7
    python scripts/simulate.py --ticks 1000 --plot results/curve.png --json results/history.json
"""

import sys
from pathlib import Path
import argparse
import json

sys.path.insert(0, str(Path(__file__).parent.parent))

from virus_sim import Simulation, SimConfig, PopulationRecipe
from virus_sim.envs.config import (
    DEFAULT_WIDTH,
    DEFAULT_HEIGHT,
    DEFAULT_MIN_STEP,
    DEFAULT_INFECTION_RADIUS,
    DEFAULT_LOUNGE_PROBABILITY,
)
from virus_sim.utils import run_headless, plot_epidemic_curve


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Simulación de epidemia en grid")

    # Grid
    parser.add_argument("--width", type=int, default=DEFAULT_WIDTH)
    parser.add_argument("--height", type=int, default=DEFAULT_HEIGHT)

    # Población
    parser.add_argument("--infected", type=int, default=1)
    parser.add_argument("--immune", type=int, default=0)
    parser.add_argument("--susceptible", type=int, default=599)
    parser.add_argument("--total", type=int, default=None,
                        help="Intentos de colocación (por defecto, la suma de los contadores)")
    parser.add_argument("--lounge-probability", type=float, default=DEFAULT_LOUNGE_PROBABILITY)

    # Mecánicas
    parser.add_argument("--radius", type=int, default=DEFAULT_INFECTION_RADIUS,
                        help="Radio de contagio (distancia euclídea)")
    parser.add_argument("--min-step", type=int, default=DEFAULT_MIN_STEP,
                        help="Pasos antes de que un agente que deambula cambie de rumbo")

    # Ejecución
    parser.add_argument("--ticks", type=int, default=500)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--every", type=int, default=50,
                        help="Imprimir contadores cada N ticks")
    parser.add_argument("--stop-when-stable", action="store_true",
                        help="Parar cuando no queden susceptibles")

    # Salida
    parser.add_argument("--plot", type=str, default=None, help="Ruta para la curva epidémica")
    parser.add_argument("--json", type=str, default=None, help="Ruta para el historial JSON")

    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)

    config = SimConfig(
        width=args.width,
        height=args.height,
        min_step_before_lounge_redirect=args.min_step,
        infection_radius=args.radius,
        initial_population=PopulationRecipe(
            infected=args.infected,
            immune=args.immune,
            susceptible=args.susceptible,
            total=args.total,
        ),
        lounge_probability=args.lounge_probability,
        seed=args.seed,
    )
    sim = Simulation(config)

    print("=" * 60)
    print(f"Grid: {config.width}x{config.height} | Radius: {config.infection_radius} "
          f"| Min step: {config.min_step_before_lounge_redirect}")
    print(f"Requested agents: {config.initial_population.total} | Placed: {len(sim.population)}")
    print("=" * 60)

    history = run_headless(sim, args.ticks, stop_when_stable=args.stop_when_stable)
    stats_history = history["stats"]

    for step, stats in enumerate(stats_history):
        if step % args.every == 0 or step == len(stats_history) - 1:
            print(f"  Tick {step:5d}: Infected={stats.infected:4d} "
                  f"Immune={stats.immune:4d} Susceptible={stats.susceptible:4d}")

    info = sim.get_info()
    print(f"\nInfection events: {info['infection_events']} "
          f"| Infected: {info['infected_percentage']:.1%}")

    if args.json:
        path = Path(args.json)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump({
                "config": config.to_dict(),
                "stats": [s.to_dict() for s in stats_history],
                "infection_events": sim.infection_events,
            }, f, indent=2)
        print(f"Historial guardado: {path}")

    if args.plot:
        path = Path(args.plot)
        path.parent.mkdir(parents=True, exist_ok=True)
        plot_epidemic_curve(stats_history, save_path=str(path))
        print(f"Curva guardada: {path}")

    return sim


if __name__ == "__main__":
    main()
