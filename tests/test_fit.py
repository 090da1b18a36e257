"""
Tests for the placement feasibility search.
"""

import numpy as np

from grammar_blocks.game import GameGrid, TetrominoType, has_any_placement, valid_placements

from conftest import make_piece


def test_empty_board_fits_everything():
    grid = GameGrid(10)
    for kind in TetrominoType:
        assert has_any_placement(grid, [make_piece(kind)])


def test_full_board_fits_nothing(full_grid, square_pieces):
    assert not has_any_placement(full_grid, square_pieces)


def test_empty_piece_set_never_fits():
    assert not has_any_placement(GameGrid(10), [])


def test_single_hole_fits_only_matching_shape():
    cells = np.ones((10, 10), dtype=np.int8)
    cells[4:6, 4:6] = 0
    grid = GameGrid.from_array(cells)
    bar = make_piece(TetrominoType.I)
    square = make_piece(TetrominoType.O)
    assert not has_any_placement(grid, [bar])
    assert has_any_placement(grid, [bar, square])
    assert valid_placements(grid, square) == [(4, 4)]


def test_single_slot_board(single_slot_grid):
    assert valid_placements(single_slot_grid, make_piece(TetrominoType.I, 0)) == [(0, 0)]
    assert valid_placements(single_slot_grid, make_piece(TetrominoType.I, 1)) == []
    others = [make_piece(k, r) for k in TetrominoType if k is not TetrominoType.I for r in range(4)]
    assert not has_any_placement(single_slot_grid, others)
    after = single_slot_grid.copy()
    assert after.place(make_piece(TetrominoType.I, 0), 0, 0).lines_cleared == 0
    assert not has_any_placement(after, [make_piece(k, r) for k in TetrominoType for r in range(4)])


def test_valid_placements_agree_with_can_place():
    rng = np.random.default_rng(11)
    grid = GameGrid.from_array((rng.random((10, 10)) < 0.4).astype(np.int8))
    piece = make_piece(TetrominoType.L, 2)
    expected = [(r, c) for r in range(10) for c in range(10) if grid.can_place(piece, r, c)]
    assert valid_placements(grid, piece) == expected
    assert has_any_placement(grid, [piece]) == bool(expected)
