from __future__ import annotations

from typing import Union

import numpy as np

from .grid import GameGrid
from .shapes import COLS, ROWS, Shape


BoardLike = Union[GameGrid, np.ndarray]


def _cells(board: BoardLike) -> np.ndarray:
    return board.grid if isinstance(board, GameGrid) else board


def collides(x: int, y: int, shape: Shape, board: BoardLike) -> bool:
    """Whether ``shape`` with its top-left corner at ``(x, y)`` is illegal.

    Cells left/right of the board or below the floor collide. Cells above the
    top row are only checked horizontally, they never hit locked blocks.
    """
    cells = _cells(board)
    h, w = shape.shape
    for r in range(h):
        for c in range(w):
            if not shape[r, c]:
                continue
            nx, ny = x + c, y + r
            if nx < 0 or nx >= COLS or ny >= ROWS:
                return True
            if ny >= 0 and cells[ny, nx] != 0:
                return True
    return False


def drop_distance(x: int, y: int, shape: Shape, board: BoardLike) -> int:
    """Number of rows the shape can still fall from ``(x, y)``."""
    dist = 0
    while not collides(x, y + dist + 1, shape, board):
        dist += 1
    return dist
