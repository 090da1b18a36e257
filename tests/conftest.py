"""Shared fixtures for Grammar Blocks tests."""

import random

import numpy as np
import pytest

from grammar_blocks.game import GameGrid, Piece, TetrominoType


class FixedGenerator:
    """Deals pre-arranged batches instead of random pieces."""

    def __init__(self, *batches):
        self._batches = list(batches)
        self.calls = 0

    def draw_batch(self, n):
        self.calls += 1
        batch = tuple(self._batches.pop(0))
        assert len(batch) == n
        return batch


def make_piece(kind, rotation=0, piece_id=None):
    return Piece.create(piece_id or f"{kind.name}-{rotation}", kind, rotation)


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def square_pieces():
    return [make_piece(TetrominoType.O, piece_id=f"O{i}") for i in range(3)]


@pytest.fixture
def full_grid():
    return GameGrid.from_array(np.ones((10, 10), dtype=np.int8))


@pytest.fixture
def single_slot_grid():
    """Full board with room only for a horizontal I at (0, 0).

    Every other row and column has one isolated hole, so no line is complete
    before or after the bar goes in.
    """
    cells = np.ones((10, 10), dtype=np.int8)
    cells[0, 0:4] = 0
    cells[0, 9] = 0
    for row, col in ((1, 5), (2, 0), (3, 6), (4, 1), (5, 7), (6, 2), (7, 8), (8, 3), (9, 4)):
        cells[row, col] = 0
    assert not cells.all(axis=0).any() and not cells.all(axis=1).any()
    return GameGrid.from_array(cells)
