"""
Occupancy Grid
==============
Mapa denso de ocupación: cada celda guarda el id del agente que la ocupa
o EMPTY si está libre.
"""

from typing import Iterator, Optional, Tuple
import numpy as np


EMPTY = -1


class GridError(Exception):
    """Error base del grid de ocupación."""


class OccupiedCellError(GridError):
    """Se intentó colocar un agente en una celda ya ocupada."""

    def __init__(self, x: int, y: int, occupant: int):
        super().__init__(f"Cell ({x}, {y}) already occupied by agent {occupant}")
        self.x = x
        self.y = y
        self.occupant = occupant


class OutOfBoundsError(GridError, IndexError):
    """Coordenada fuera de [0, width) x [0, height)."""

    def __init__(self, x: int, y: int, width: int, height: int):
        super().__init__(f"Cell ({x}, {y}) outside grid {width}x{height}")
        self.x = x
        self.y = y


class InvariantError(GridError):
    """El grid y las posiciones de los agentes no coinciden."""


class Grid:
    """
    Índice inverso de posiciones de agentes.

    El grid no posee agentes: solo registra qué id ocupa cada celda.
    Nunca resuelve colisiones por sí mismo; quien mueve un agente debe
    vaciar la celda antigua antes de ocupar la nueva.
    """

    def __init__(self, width: int, height: int):
        if width <= 0 or height <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.cells: np.ndarray = np.full((height, width), EMPTY, dtype=np.int64)

    def in_bounds(self, x: int, y: int) -> bool:
        """True si (x, y) está dentro del grid."""
        return 0 <= x < self.width and 0 <= y < self.height

    def _check_bounds(self, x: int, y: int) -> None:
        if not self.in_bounds(x, y):
            raise OutOfBoundsError(x, y, self.width, self.height)

    def occupant(self, x: int, y: int) -> Optional[int]:
        """Id del agente en (x, y), o None si la celda está libre."""
        self._check_bounds(x, y)
        agent_id = int(self.cells[y, x])
        return None if agent_id == EMPTY else agent_id

    def is_free(self, x: int, y: int) -> bool:
        """True si (x, y) está dentro del grid y libre. Nunca lanza."""
        return self.in_bounds(x, y) and self.cells[y, x] == EMPTY

    def place(self, x: int, y: int, agent_id: int) -> None:
        """
        Coloca un agente en (x, y).

        Raises:
            OccupiedCellError: si la celda ya tiene ocupante
            OutOfBoundsError: si la coordenada no es válida
        """
        self._check_bounds(x, y)
        current = int(self.cells[y, x])
        if current != EMPTY:
            raise OccupiedCellError(x, y, current)
        self.cells[y, x] = agent_id

    def vacate(self, x: int, y: int) -> None:
        """Libera (x, y). Vaciar una celda ya libre no es un error."""
        self._check_bounds(x, y)
        self.cells[y, x] = EMPTY

    @property
    def num_occupied(self) -> int:
        """Número de celdas ocupadas."""
        return int(np.count_nonzero(self.cells != EMPTY))

    def occupied_positions(self) -> Iterator[Tuple[int, int, int]]:
        """Itera (x, y, agent_id) de las celdas ocupadas, por filas."""
        ys, xs = np.nonzero(self.cells != EMPTY)
        for y, x in zip(ys, xs):
            yield int(x), int(y), int(self.cells[y, x])

    def copy(self) -> "Grid":
        """Copia independiente (snapshot) del grid."""
        clone = Grid(self.width, self.height)
        clone.cells = self.cells.copy()
        return clone

    def __repr__(self) -> str:
        return f"Grid({self.width}x{self.height}, occupied={self.num_occupied})"
