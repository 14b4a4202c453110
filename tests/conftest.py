from __future__ import annotations

import pytest

from falling_blocks.game import COLS, GameConfig, Piece, TetrisEngine, TetrominoType, get_shape, rotate


@pytest.fixture
def engine() -> TetrisEngine:
    game = TetrisEngine(GameConfig(random_seed=7), clock=lambda: 0)
    game.start(now_ms=0)
    return game


@pytest.fixture
def fill_rows():
    """Fill whole rows of the engine's board except one gap column."""
    def fill(engine: TetrisEngine, rows, gap_col: int = 0, value: int = 5) -> None:
        for row in rows:
            for col in range(COLS):
                if col != gap_col:
                    engine.grid.grid[row, col] = value
    return fill


@pytest.fixture
def vertical_i():
    def make(x: int, y: int) -> Piece:
        return Piece(TetrominoType.I, rotate(get_shape(TetrominoType.I)), x, y)
    return make
