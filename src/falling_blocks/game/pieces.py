from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

import numpy as np

from .shapes import COLS, Shape, TetrominoType, get_shape


def rotate(shape: Shape) -> Shape:
    """Rotate a shape matrix 90 degrees clockwise.

    Equivalent to transposing and then reversing every row, so the new cell
    ``(r, c)`` is the old cell ``(h - 1 - c, r)``. Always returns a fresh array.
    """
    return np.rot90(shape, 1, axes=(1, 0)).copy()


@dataclass(eq=False)
class Piece:
    kind: TetrominoType
    shape: Shape
    x: int = 0
    y: int = 0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Piece):
            return NotImplemented
        return (
            self.kind == other.kind
            and self.x == other.x
            and self.y == other.y
            and np.array_equal(self.shape, other.shape)
        )

    @staticmethod
    def spawn(kind: TetrominoType) -> "Piece":
        shape = get_shape(kind)
        width = shape.shape[1]
        return Piece(TetrominoType(kind), shape, COLS // 2 - width // 2, 0)

    @property
    def color_id(self) -> int:
        return int(self.kind)

    @property
    def width(self) -> int:
        return int(self.shape.shape[1])

    @property
    def height(self) -> int:
        return int(self.shape.shape[0])

    def rotated(self) -> "Piece":
        return Piece(self.kind, rotate(self.shape), self.x, self.y)

    def cells(self) -> List[Tuple[int, int]]:
        """Absolute (x, y) board coordinates of the occupied cells."""
        ys, xs = np.nonzero(self.shape)
        return [(self.x + int(dx), self.y + int(dy)) for dy, dx in zip(ys, xs)]

    def copy(self) -> "Piece":
        return Piece(self.kind, self.shape.copy(), self.x, self.y)
