from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass
class GameConfig:
    """Configuration for a grammar blocks session"""
    grid_size: int = 10
    pieces_per_set: int = 3
    wrong_limit: int = 3
    random_seed: Optional[int] = None
    shuffle_targets: bool = False

    def __post_init__(self) -> None:
        if self.grid_size <= 0:
            raise ValueError(f"grid_size must be positive, got {self.grid_size}")
        if self.pieces_per_set <= 0:
            raise ValueError(f"pieces_per_set must be positive, got {self.pieces_per_set}")
        if self.wrong_limit <= 0:
            raise ValueError(f"wrong_limit must be positive, got {self.wrong_limit}")
