from __future__ import annotations

import itertools
import random
from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, List, Optional, Tuple

import numpy as np


Offset = Tuple[int, int]  # (x, y)


class TetrominoType(IntEnum):
    I = 1
    O = 2
    T = 3
    L = 4
    J = 5
    S = 6
    Z = 7


# Base offsets (x, y) at rotation 0
BASE_CELLS = {
    TetrominoType.I: ((0, 0), (1, 0), (2, 0), (3, 0)),
    TetrominoType.O: ((0, 0), (0, 1), (1, 0), (1, 1)),
    TetrominoType.T: ((1, 0), (0, 1), (1, 1), (2, 1)),
    TetrominoType.L: ((0, 0), (0, 1), (0, 2), (1, 2)),
    TetrominoType.J: ((1, 0), (1, 1), (1, 2), (0, 2)),
    TetrominoType.S: ((1, 0), (2, 0), (0, 1), (1, 1)),
    TetrominoType.Z: ((0, 0), (1, 0), (1, 1), (2, 1)),
}


def normalize(cells: Iterable[Offset]) -> Tuple[Offset, ...]:
    """Translate cells so the minimum x and minimum y are both 0."""
    cells = list(cells)
    min_x = min(x for x, _ in cells)
    min_y = min(y for _, y in cells)
    return tuple((x - min_x, y - min_y) for x, y in cells)


def rotate90(cells: Iterable[Offset]) -> Tuple[Offset, ...]:
    # (x, y) -> (y, -x), then back to the origin
    return normalize((y, -x) for x, y in cells)


def rotated_cells(kind: TetrominoType, rotation: int) -> Tuple[Offset, ...]:
    cells = normalize(BASE_CELLS[kind])
    for _ in range(rotation % 4):
        cells = rotate90(cells)
    return cells


@dataclass(frozen=True)
class Piece:
    id: str
    kind: TetrominoType
    rotation: int
    cells: Tuple[Offset, ...]

    @classmethod
    def create(cls, piece_id: str, kind: TetrominoType, rotation: int = 0) -> "Piece":
        return cls(id=piece_id, kind=kind, rotation=rotation % 4, cells=rotated_cells(kind, rotation))

    @property
    def width(self) -> int:
        return max(x for x, _ in self.cells) + 1

    @property
    def height(self) -> int:
        return max(y for _, y in self.cells) + 1

    @property
    def size(self) -> int:
        return len(self.cells)

    def cells_at(self, row: int, col: int) -> List[Tuple[int, int]]:
        """Board (row, col) cells covered when anchored at (row, col)."""
        return [(row + y, col + x) for x, y in self.cells]

    def shape(self) -> np.ndarray:
        """Occupancy mask of shape (height, width)"""
        mask = np.zeros((self.height, self.width), dtype=np.int8)
        for x, y in self.cells:
            mask[y, x] = 1
        return mask


class PieceGenerator:
    """Draws random pieces from the seven tetromino shapes.

    Shape and rotation are both uniform. Ids come from a per-generator
    serial so every drawn piece is distinct.
    """

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self.rng = rng or random.Random()
        self._serial = itertools.count(1)

    def draw(self) -> Piece:
        kind = self.rng.choice(list(TetrominoType))
        rotation = self.rng.randrange(4)
        return Piece.create(f"P-{next(self._serial):04d}", kind, rotation)

    def draw_batch(self, n: int) -> Tuple[Piece, ...]:
        return tuple(self.draw() for _ in range(n))
