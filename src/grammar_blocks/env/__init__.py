"""Gymnasium environment for the Grammar Blocks puzzle phase."""

from __future__ import annotations

from gymnasium.envs.registration import register

register(
    id="GrammarBlocks-10x10-v0",
    entry_point="grammar_blocks.env.grammar_blocks_env:GrammarBlocksEnv",
)

__all__ = ["GrammarBlocks-10x10-v0"]
