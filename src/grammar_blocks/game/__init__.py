"""Block placement half of Grammar Blocks.

Exports the board and piece primitives:
- GameGrid: 10x10 binary grid with row and column clearing
- Piece: Immutable normalized tetromino
- PieceGenerator: Seeded random draw of pieces
- has_any_placement / valid_placements: Placement feasibility search
- GameConfig: Session configuration
"""

from .grid import GameGrid, PlacementResult
from .pieces import Piece, PieceGenerator, TetrominoType, normalize, rotate90
from .fit import has_any_placement, valid_placements
from .rules import GameConfig

__all__ = [
    "GameGrid",
    "PlacementResult",
    "Piece",
    "PieceGenerator",
    "TetrominoType",
    "normalize",
    "rotate90",
    "has_any_placement",
    "valid_placements",
    "GameConfig",
]
