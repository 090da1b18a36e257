from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from grammar_blocks.game import GameConfig, valid_placements
from grammar_blocks.sentence import Round, solve_order
from grammar_blocks.session import Phase, TerminalReason
from grammar_blocks.session.engine import GrammarBlocksGame


DEFAULT_TARGETS: Tuple[str, ...] = (
    "I have finished my homework.",
    "She doesn't like coffee, does she?",
    "They were playing soccer when it started to rain.",
    "If I were you, I would take the bus.",
    "The book that you lent me is interesting.",
    "He has lived here since 2010.",
    "We're going to visit our grandparents tomorrow.",
    "Could you tell me where the station is?",
)

PIECE_BOX = 4

AnswerPolicy = Callable[[Round], Sequence[int]]


def _compute_action_mask(game: GrammarBlocksGame) -> np.ndarray:
    session = game.session
    size = session.config.grid_size
    k = session.config.pieces_per_set
    mask = np.zeros((k, size, size), dtype=np.bool_)
    if session.phase is not Phase.PUZZLE:
        return mask
    for slot, piece in enumerate(session.bag[:k]):
        for row, col in valid_placements(session.grid, piece):
            mask[slot, row, col] = True
    return mask


def _valid_actions(mask: np.ndarray) -> List[Tuple[int, int, int]]:
    return [tuple(int(v) for v in idx) for idx in np.argwhere(mask)]


class GrammarBlocksEnv(gym.Env):
    """Puzzle phase of Grammar Blocks as a gymnasium environment.

    The sentence rounds are answered by `answer_policy`, which returns the
    tray indices to pick in order (defaults to the correct order). The agent
    only chooses placements: action = (bag slot, row, col).
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 30}

    def __init__(self, targets: Optional[Sequence[str]] = None, config: Optional[GameConfig] = None,
                 render_mode: Optional[str] = None,
                 answer_policy: Optional[AnswerPolicy] = None,
                 invalid_action_penalty: float = -0.1,
                 terminal_penalty: float = 0.0) -> None:
        super().__init__()
        self.game = GrammarBlocksGame(DEFAULT_TARGETS if targets is None else targets, config=config)
        self.render_mode = render_mode
        self.answer_policy: AnswerPolicy = answer_policy or solve_order
        self.invalid_action_penalty = float(invalid_action_penalty)
        self.terminal_penalty = float(terminal_penalty)

        size = self.game.config.grid_size
        k = self.game.config.pieces_per_set

        self.observation_space = spaces.Dict(
            {
                "grid": spaces.Box(low=0, high=1, shape=(size, size), dtype=np.int8),
                "pieces": spaces.Box(low=0, high=1, shape=(k, PIECE_BOX, PIECE_BOX), dtype=np.int8),
                "pieces_remaining": spaces.Discrete(k + 1),
            }
        )
        self.action_space = spaces.MultiDiscrete((k, size, size))
        self._last_obs: Optional[Dict[str, Any]] = None

    def _play_arrange(self) -> None:
        """Answer sentence rounds until the puzzle phase or the end."""
        while self.game.session.phase is Phase.ARRANGE:
            round_ = self.game.session.round
            if round_.checked is None:
                for idx in self.answer_policy(round_):
                    self.game.pick_token(int(idx))
                self.game.submit()
            else:
                self.game.acknowledge()

    def _get_obs(self) -> Dict[str, Any]:
        session = self.game.session
        k = session.config.pieces_per_set
        pieces = np.zeros((k, PIECE_BOX, PIECE_BOX), dtype=np.int8)
        for slot, piece in enumerate(session.bag[:k]):
            shape = piece.shape()
            pieces[slot, : shape.shape[0], : shape.shape[1]] = shape
        return {
            "grid": session.grid.clone_state().astype(np.int8),
            "pieces": pieces,
            "pieces_remaining": len(session.bag),
        }

    def _get_info(self) -> Dict[str, Any]:
        session = self.game.session
        mask = _compute_action_mask(self.game)
        return {
            "action_mask": mask,
            "valid_actions": _valid_actions(mask),
            "score": session.score,
            "round_index": session.round_index,
            "wrong_count": session.wrong_count,
            "reason": session.reason.value if session.reason is not None else None,
        }

    def get_action_mask(self) -> np.ndarray:
        return _compute_action_mask(self.game)

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        self.game.reset(seed)
        self._play_arrange()
        obs = self._get_obs()
        self._last_obs = obs
        return obs, self._get_info()

    def step(self, action):
        slot, row, col = map(int, action)
        before = self.game.session
        reward = 0.0

        if not before.is_terminal and 0 <= slot < len(before.bag):
            after = self.game.place_piece(before.bag[slot].id, row, col)
        else:
            after = before

        if after is before:
            reward += self.invalid_action_penalty
        else:
            reward += float(after.lines_cleared - before.lines_cleared)
            self._play_arrange()

        session = self.game.session
        terminated = session.is_terminal
        if terminated and session.reason is TerminalReason.NO_FIT:
            reward += self.terminal_penalty

        obs = self._get_obs()
        self._last_obs = obs
        return obs, reward, terminated, False, self._get_info()

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode == "rgb_array":
            grid = self._last_obs["grid"] if self._last_obs is not None else self.game.session.grid.grid
            cell = 12
            h, w = grid.shape
            img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
            for y in range(h):
                for x in range(w):
                    color = (70, 200, 120) if grid[y, x] else (30, 30, 36)
                    img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = color
            return img
        return None

    def close(self) -> None:
        pass
