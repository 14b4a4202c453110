from __future__ import annotations

import numpy as np
import pytest

from falling_blocks.game import SHAPES, Piece, TetrominoType, get_shape, rotate


def test_catalog_ids_match_cell_values():
    for kind, shape in SHAPES.items():
        values = set(np.unique(shape)) - {0}
        assert values == {int(kind)}
        assert int(np.count_nonzero(shape)) == 4


def test_catalog_is_read_only():
    shape = get_shape(TetrominoType.T)
    with pytest.raises(ValueError):
        shape[0, 0] = 9


def test_unknown_piece_type():
    with pytest.raises(ValueError):
        get_shape(8)


@pytest.mark.parametrize("kind", list(TetrominoType))
def test_four_rotations_is_identity(kind):
    shape = get_shape(kind)
    turned = shape
    for _ in range(4):
        turned = rotate(turned)
    assert turned.shape == shape.shape
    assert np.array_equal(turned, shape)


def test_rotate_is_clockwise():
    t = get_shape(TetrominoType.T)
    assert rotate(t).tolist() == [[6, 0], [6, 6], [6, 0]]
    j = get_shape(TetrominoType.J)
    assert rotate(j).tolist() == [[2, 2], [2, 0], [2, 0]]
    assert rotate(get_shape(TetrominoType.I)).shape == (4, 1)


def test_rotate_returns_new_array():
    original = get_shape(TetrominoType.S)
    before = original.copy()
    rotated = rotate(original)
    rotated[0, 0] = 0
    assert np.array_equal(original, before)


@pytest.mark.parametrize(
    "kind, expected_x",
    [(TetrominoType.I, 3), (TetrominoType.O, 4), (TetrominoType.J, 4), (TetrominoType.T, 4)],
)
def test_spawn_is_centered(kind, expected_x):
    piece = Piece.spawn(kind)
    assert piece.x == expected_x
    assert piece.y == 0
    assert piece.color_id == int(kind)


def test_piece_cells_are_absolute():
    piece = Piece.spawn(TetrominoType.O)
    piece.y = 3
    assert sorted(piece.cells()) == [(4, 3), (4, 4), (5, 3), (5, 4)]


def test_pieces_compare_by_value():
    piece = Piece.spawn(TetrominoType.O)
    assert piece == piece.copy()
    moved = piece.copy()
    moved.x += 1
    assert piece != moved
    assert piece.rotated() != Piece.spawn(TetrominoType.T)
    assert Piece.spawn(TetrominoType.I).rotated() != Piece.spawn(TetrominoType.I)
