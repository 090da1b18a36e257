from __future__ import annotations

from typing import Iterable, List, Tuple

from .grid import GameGrid
from .pieces import Piece


def valid_placements(grid: GameGrid, piece: Piece) -> List[Tuple[int, int]]:
    """Get all valid (row, col) anchors for a piece"""
    return [
        (row, col)
        for row in range(grid.size)
        for col in range(grid.size)
        if grid.can_place(piece, row, col)
    ]


def has_any_placement(grid: GameGrid, pieces: Iterable[Piece]) -> bool:
    for piece in pieces:
        for row in range(grid.size):
            for col in range(grid.size):
                if grid.can_place(piece, row, col):
                    return True
    return False
