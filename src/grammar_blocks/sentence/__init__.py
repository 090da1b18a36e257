"""Sentence reordering rounds."""

from .rounds import (
    Round,
    check_round,
    pick_token,
    shuffle_tokens,
    solve_order,
    start_round,
    tokenize,
    unpick_token,
)

__all__ = [
    "Round",
    "check_round",
    "pick_token",
    "shuffle_tokens",
    "solve_order",
    "start_round",
    "tokenize",
    "unpick_token",
]
