from __future__ import annotations

from enum import IntEnum
from typing import Dict

import numpy as np


ROWS, COLS = 20, 10


class TetrominoType(IntEnum):
    I = 1
    J = 2
    L = 3
    O = 4
    S = 5
    T = 6
    Z = 7


Shape = np.ndarray


def _frozen(rows) -> Shape:
    arr = np.array(rows, dtype=np.int8)
    arr.setflags(write=False)
    return arr


# Nonzero entries carry the piece id so a locked cell remembers its color.
SHAPES: Dict[TetrominoType, Shape] = {
    TetrominoType.I: _frozen([[1, 1, 1, 1]]),
    TetrominoType.J: _frozen([[2, 0, 0], [2, 2, 2]]),
    TetrominoType.L: _frozen([[0, 0, 3], [3, 3, 3]]),
    TetrominoType.O: _frozen([[4, 4], [4, 4]]),
    TetrominoType.S: _frozen([[0, 5, 5], [5, 5, 0]]),
    TetrominoType.T: _frozen([[0, 6, 0], [6, 6, 6]]),
    TetrominoType.Z: _frozen([[7, 7, 0], [0, 7, 7]]),
}


def get_shape(kind: int) -> Shape:
    """Canonical (read-only) shape matrix for a piece type 1..7."""
    try:
        return SHAPES[TetrominoType(kind)]
    except ValueError:
        raise ValueError(f"unknown piece type: {kind!r}") from None
