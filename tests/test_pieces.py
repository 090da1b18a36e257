"""
Tests for piece shapes, rotation and random draws.
"""

import dataclasses
import random
from collections import Counter

import pytest

from grammar_blocks.game import PieceGenerator, TetrominoType, normalize, rotate90
from grammar_blocks.game.pieces import BASE_CELLS

from conftest import make_piece


class TestRotation:

    def test_rotate_maps_x_y_to_y_minus_x(self):
        assert set(rotate90([(0, 0), (1, 0), (2, 0), (3, 0)])) == {(0, 0), (0, 1), (0, 2), (0, 3)}
        assert set(rotate90([(0, 0), (1, 0), (1, 1)])) == {(0, 1), (0, 0), (1, 0)}

    def test_four_rotations_return_to_start(self):
        for kind, cells in BASE_CELLS.items():
            rotated = normalize(cells)
            for _ in range(4):
                rotated = rotate90(rotated)
            assert set(rotated) == set(normalize(cells)), kind

    def test_normalize_moves_to_origin(self):
        assert set(normalize([(3, 5), (4, 5), (4, 6)])) == {(0, 0), (1, 0), (1, 1)}

    @pytest.mark.parametrize("kind", list(TetrominoType))
    def test_every_rotation_is_normalized(self, kind):
        for rotation in range(4):
            piece = make_piece(kind, rotation)
            xs = [x for x, _ in piece.cells]
            ys = [y for _, y in piece.cells]
            assert min(xs) == 0 and min(ys) == 0
            assert piece.size == 4
            assert len(set(piece.cells)) == 4
            assert piece.width == max(xs) + 1
            assert piece.height == max(ys) + 1

    def test_bar_dimensions_swap(self):
        flat = make_piece(TetrominoType.I, 0)
        upright = make_piece(TetrominoType.I, 1)
        assert (flat.width, flat.height) == (4, 1)
        assert (upright.width, upright.height) == (1, 4)

    def test_shape_mask(self):
        piece = make_piece(TetrominoType.T, 0)
        mask = piece.shape()
        assert mask.shape == (piece.height, piece.width)
        assert int(mask.sum()) == 4
        assert mask.tolist() == [[0, 1, 0], [1, 1, 1]]

    def test_piece_is_immutable(self):
        piece = make_piece(TetrominoType.O)
        with pytest.raises(dataclasses.FrozenInstanceError):
            piece.rotation = 1


class TestPieceGenerator:

    def test_deterministic_with_seed(self):
        g1 = PieceGenerator(random.Random(42))
        g2 = PieceGenerator(random.Random(42))
        assert [g1.draw() for _ in range(20)] == [g2.draw() for _ in range(20)]

    def test_ids_are_unique(self):
        gen = PieceGenerator(random.Random(0))
        ids = [p.id for p in gen.draw_batch(200)]
        assert len(set(ids)) == 200

    def test_batch_size(self):
        gen = PieceGenerator(random.Random(0))
        assert len(gen.draw_batch(3)) == 3

    def test_all_shapes_and_rotations_appear(self):
        gen = PieceGenerator(random.Random(3))
        pieces = gen.draw_batch(700)
        kinds = Counter(p.kind for p in pieces)
        rotations = Counter(p.rotation for p in pieces)
        assert set(kinds) == set(TetrominoType)
        assert set(rotations) == {0, 1, 2, 3}

    def test_drawn_pieces_are_normalized(self):
        gen = PieceGenerator(random.Random(9))
        for piece in gen.draw_batch(100):
            assert min(x for x, _ in piece.cells) == 0
            assert min(y for _, y in piece.cells) == 0
