from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

from .shapes import COLS, ROWS

if TYPE_CHECKING:
    from .pieces import Piece


logger = logging.getLogger(__name__)


class GameGrid:
    """The well of locked cells.

    The grid uses 0 for empty cells and the piece id (1..7) for locked cells,
    row 0 is the top. Dimensions are fixed at ``ROWS x COLS``.
    """

    def __init__(self) -> None:
        self.height = ROWS
        self.width = COLS
        self.grid = np.zeros((self.height, self.width), dtype=np.int8)

    def reset(self) -> None:
        self.grid = np.zeros((self.height, self.width), dtype=np.int8)

    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def is_occupied(self, x: int, y: int) -> bool:
        return self.is_inside(x, y) and self.grid[y, x] != 0

    def lock(self, piece: "Piece") -> int:
        """Write the piece's occupied cells into the grid.

        Cells above the top row are dropped. Returns the number of cells written.
        """
        written = 0
        for x, y in piece.cells():
            if y < 0:
                logger.warning("Dropping cell (%d, %d) of %s locked above the top", x, y, piece.kind.name)
                continue
            self.grid[y, x] = piece.color_id
            written += 1
        return written

    def clear_full_rows(self) -> int:
        full_rows = np.where(np.all(self.grid != 0, axis=1))[0]
        if full_rows.size == 0:
            return 0
        num = int(full_rows.size)
        # Remove full rows and add empty rows at the top
        remaining = np.delete(self.grid, full_rows, axis=0)
        new_rows = np.zeros((num, self.width), dtype=np.int8)
        self.grid = np.vstack((new_rows, remaining))
        return num

    def get_max_height(self) -> int:
        # y=0 is top; find first non-empty from top
        non_empty_rows = np.where(np.any(self.grid != 0, axis=1))[0]
        if non_empty_rows.size == 0:
            return 0
        return self.height - int(non_empty_rows[0])

    def count_holes(self) -> int:
        holes = 0
        for x in range(self.width):
            seen_block = False
            for cell in self.grid[:, x]:
                if cell != 0:
                    seen_block = True
                elif seen_block:
                    holes += 1
        return holes

    def filled_cells(self) -> int:
        return int(np.count_nonzero(self.grid))

    def clone_state(self) -> np.ndarray:
        return self.grid.copy()
