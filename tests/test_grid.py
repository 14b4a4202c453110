from __future__ import annotations

import numpy as np

from falling_blocks.game import COLS, ROWS, GameGrid, Piece, TetrominoType, collides, drop_distance, get_shape


def _full(grid: GameGrid, row: int, value: int = 3) -> None:
    grid.grid[row, :] = value


def test_new_grid_is_empty():
    grid = GameGrid()
    assert grid.grid.shape == (ROWS, COLS)
    assert grid.filled_cells() == 0
    assert not grid.is_occupied(0, 0)


def test_is_occupied_out_of_bounds_is_false():
    grid = GameGrid()
    grid.grid[:, :] = 1
    assert grid.is_occupied(0, 0)
    assert not grid.is_occupied(-1, 0)
    assert not grid.is_occupied(COLS, 0)
    assert not grid.is_occupied(0, ROWS)


def test_lock_writes_color_id():
    grid = GameGrid()
    piece = Piece.spawn(TetrominoType.T)
    piece.y = 5
    assert grid.lock(piece) == 4
    assert grid.grid[5, 5] == 6
    assert grid.grid[6, 4:7].tolist() == [6, 6, 6]


def test_lock_drops_cells_above_top():
    grid = GameGrid()
    piece = Piece.spawn(TetrominoType.J)
    piece.y = -1
    assert grid.lock(piece) == 3
    assert grid.grid[0, 4:7].tolist() == [2, 2, 2]
    assert grid.filled_cells() == 3


def test_clear_adjacent_full_rows():
    grid = GameGrid()
    _full(grid, ROWS - 1)
    _full(grid, ROWS - 2)
    grid.grid[ROWS - 3, 0] = 7
    assert grid.clear_full_rows() == 2
    assert grid.grid.shape == (ROWS, COLS)
    assert grid.grid[ROWS - 1, 0] == 7
    assert grid.filled_cells() == 1


def test_clear_keeps_partial_rows_in_order():
    grid = GameGrid()
    _full(grid, ROWS - 1)
    grid.grid[ROWS - 2, 3] = 1
    _full(grid, ROWS - 3)
    grid.grid[ROWS - 4, 8] = 2
    before = grid.filled_cells()
    cleared = grid.clear_full_rows()
    assert cleared == 2
    assert grid.filled_cells() == before - COLS * cleared
    assert grid.grid[ROWS - 1, 3] == 1
    assert grid.grid[ROWS - 2, 8] == 2
    assert not grid.grid[:2].any()


def test_clear_four_rows():
    grid = GameGrid()
    for row in range(ROWS - 4, ROWS):
        _full(grid, row)
    assert grid.clear_full_rows() == 4
    assert grid.filled_cells() == 0


def test_clear_nothing():
    grid = GameGrid()
    grid.grid[ROWS - 1, 1:] = 4
    assert grid.clear_full_rows() == 0
    assert grid.filled_cells() == COLS - 1


def test_reset():
    grid = GameGrid()
    _full(grid, 4)
    grid.reset()
    assert grid.filled_cells() == 0
    assert grid.grid.shape == (ROWS, COLS)


def test_metrics():
    grid = GameGrid()
    grid.grid[ROWS - 3, 2] = 1
    assert grid.get_max_height() == 3
    assert grid.count_holes() == 2


def test_collides_walls_and_floor():
    grid = GameGrid()
    o = get_shape(TetrominoType.O)
    assert not collides(0, 0, o, grid)
    assert collides(-1, 0, o, grid)
    assert collides(COLS - 1, 0, o, grid)
    assert not collides(COLS - 2, ROWS - 2, o, grid)
    assert collides(0, ROWS - 1, o, grid)


def test_collides_above_top_only_checks_sides():
    grid = GameGrid()
    grid.grid[0, :] = 1
    i = get_shape(TetrominoType.I)
    assert not collides(0, -1, i, grid)
    assert collides(0, 0, i, grid)
    assert collides(-1, -5, i, grid)
    assert collides(COLS - 3, -5, i, grid)


def test_collides_with_locked_cells_and_empty_entries():
    grid = GameGrid()
    grid.grid[0, 4] = 2
    t = get_shape(TetrominoType.T)
    # The empty corner of the T overlaps the locked cell without colliding
    assert not collides(4, 0, t, grid)
    assert collides(3, 0, t, grid)


def test_collides_accepts_raw_array():
    board = np.zeros((ROWS, COLS), dtype=np.int8)
    board[ROWS - 1, :] = 1
    o = get_shape(TetrominoType.O)
    assert collides(0, ROWS - 2, o, board)
    assert drop_distance(0, 0, o, board) == ROWS - 3
