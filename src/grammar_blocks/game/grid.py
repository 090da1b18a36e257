from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Tuple

import numpy as np

if TYPE_CHECKING:
    from .pieces import Piece


Coordinate = Tuple[int, int]


@dataclass(frozen=True)
class PlacementResult:
    placed: bool
    rows: Tuple[int, ...] = ()
    cols: Tuple[int, ...] = ()

    @property
    def lines_cleared(self) -> int:
        return len(self.rows) + len(self.cols)


class GameGrid:
    """Square grid of binary cells with row and column clearing.

    Cells hold 0 (empty) or 1 (filled). Pieces are anchored at (row, col);
    a piece offset (x, y) lands on cell (row + y, col + x).
    """

    def __init__(self, size: int = 10) -> None:
        self.size = int(size)
        self.grid = np.zeros((self.size, self.size), dtype=np.int8)

    @classmethod
    def from_array(cls, cells) -> "GameGrid":
        raw = np.asarray(cells)
        if raw.ndim != 2 or raw.shape[0] != raw.shape[1]:
            raise ValueError(f"Expected a square matrix, got shape {raw.shape}")
        # Check before the int8 cast, which would truncate 0.5 to 0
        if not np.isin(raw, (0, 1)).all():
            raise ValueError("Grid cells must be 0 or 1")
        grid = cls(raw.shape[0])
        grid.grid = raw.astype(np.int8)
        return grid

    def reset(self) -> None:
        self.grid.fill(0)

    def is_inside(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size

    def can_place(self, piece: "Piece", row: int, col: int) -> bool:
        """Check if every cell of piece anchored at (row, col) is inside and empty"""
        for r, c in piece.cells_at(row, col):
            if not self.is_inside(r, c):
                return False
            if self.grid[r, c] != 0:
                return False
        return True

    def place(self, piece: "Piece", row: int, col: int) -> PlacementResult:
        """Place piece, clear full rows and columns, and return result.

        Rejected placements leave the grid untouched.
        """
        if not self.can_place(piece, row, col):
            return PlacementResult(placed=False)
        for r, c in piece.cells_at(row, col):
            self.grid[r, c] = 1
        rows, cols = self._clear_complete_lines()
        return PlacementResult(placed=True, rows=rows, cols=cols)

    def _clear_complete_lines(self) -> Tuple[Tuple[int, ...], Tuple[int, ...]]:
        # Both scans see the board before any clearing
        full_rows = tuple(int(r) for r in np.flatnonzero(np.all(self.grid != 0, axis=1)))
        full_cols = tuple(int(c) for c in np.flatnonzero(np.all(self.grid != 0, axis=0)))
        for r in full_rows:
            self.grid[r, :] = 0
        for c in full_cols:
            self.grid[:, c] = 0
        return full_rows, full_cols

    def filled_count(self) -> int:
        return int(np.count_nonzero(self.grid))

    def get_filled_ratio(self) -> float:
        """Get fraction of grid that is filled"""
        return float(self.filled_count()) / float(self.size * self.size)

    def empty_cells(self) -> List[Coordinate]:
        return [(int(r), int(c)) for r, c in zip(*np.nonzero(self.grid == 0))]

    def copy(self) -> "GameGrid":
        """Create a copy of the current grid"""
        new_grid = GameGrid(self.size)
        new_grid.grid = self.grid.copy()
        return new_grid

    def clone_state(self) -> np.ndarray:
        return self.grid.copy()
