"""
Tests for the gymnasium environment and wrappers.
"""

import gymnasium as gym
import numpy as np
import pytest

import grammar_blocks.env  # noqa: F401  registers the env id
from grammar_blocks.env.grammar_blocks_env import GrammarBlocksEnv
from grammar_blocks.env.wrappers import FlattenDiscreteActionWrapper, ResampleInvalidActionWrapper
from grammar_blocks.game import GameConfig


@pytest.fixture
def env():
    e = GrammarBlocksEnv(targets=["one two three", "four five", "six seven eight"],
                         config=GameConfig(random_seed=0))
    yield e
    e.close()


class TestGrammarBlocksEnv:

    def test_reset_enters_puzzle_phase(self, env):
        obs, info = env.reset(seed=1)
        assert env.observation_space.contains(obs)
        assert obs["pieces_remaining"] == 3
        assert info["action_mask"].shape == (3, 10, 10)
        assert info["action_mask"].any()
        assert info["reason"] is None

    def test_mask_matches_can_place(self, env):
        _, info = env.reset(seed=2)
        session = env.game.session
        for slot, piece in enumerate(session.bag):
            for row in range(10):
                for col in range(10):
                    assert info["action_mask"][slot, row, col] == session.grid.can_place(piece, row, col)

    def test_piece_masks_in_observation(self, env):
        obs, _ = env.reset(seed=3)
        for slot, piece in enumerate(env.game.session.bag):
            assert int(obs["pieces"][slot].sum()) == 4
            assert np.array_equal(obs["pieces"][slot, : piece.height, : piece.width], piece.shape())

    def test_valid_step(self, env):
        _, info = env.reset(seed=4)
        action = info["valid_actions"][0]
        obs, reward, terminated, truncated, info = env.step(action)
        assert reward >= 0.0
        assert obs["pieces_remaining"] == 2
        assert not truncated

    def test_invalid_step_is_penalized(self, env):
        _, info = env.reset(seed=5)
        invalid = np.argwhere(~info["action_mask"])[0]
        before = env.game.session
        obs, reward, terminated, truncated, info = env.step(invalid)
        assert reward == pytest.approx(-0.1)
        assert env.game.session is before
        assert obs["pieces_remaining"] == 3

    def test_episode_terminates(self, env):
        _, info = env.reset(seed=6)
        terminated = False
        steps = 0
        while not terminated:
            obs, reward, terminated, truncated, info = env.step(info["valid_actions"][0])
            steps += 1
            assert steps <= 9
        assert info["reason"] in ("completed", "no-fit")

    def test_wrong_answers_end_at_reset(self):
        env = GrammarBlocksEnv(answer_policy=lambda round_: [], config=GameConfig(random_seed=0))
        obs, info = env.reset()
        assert info["reason"] == "wrong-limit"
        assert info["wrong_count"] == 3
        assert obs["pieces_remaining"] == 0
        assert not info["action_mask"].any()

    def test_empty_targets_are_kept(self):
        env = GrammarBlocksEnv(targets=[], config=GameConfig(random_seed=0))
        assert env.game.targets == ()
        obs, info = env.reset()
        assert info["reason"] == "completed"
        assert obs["pieces_remaining"] == 0

    def test_default_targets_when_none(self):
        env = GrammarBlocksEnv(config=GameConfig(random_seed=0))
        assert len(env.game.targets) == 8

    def test_render_rgb_array(self):
        env = GrammarBlocksEnv(render_mode="rgb_array", config=GameConfig(random_seed=0))
        env.reset()
        img = env.render()
        assert img.shape == (120, 120, 3)


def test_registered_id():
    env = gym.make("GrammarBlocks-10x10-v0")
    obs, info = env.reset(seed=0)
    assert "grid" in obs
    env.close()


def test_flatten_and_resample_wrappers(env):
    wrapped = ResampleInvalidActionWrapper(FlattenDiscreteActionWrapper(env))
    _, info = wrapped.reset(seed=7)
    mask = wrapped.get_action_mask()
    assert mask.shape == (300,)
    assert np.array_equal(mask, info["action_mask"].reshape(-1))
    invalid = int(np.flatnonzero(~mask)[0])
    obs, reward, terminated, truncated, info = wrapped.step(invalid)
    assert reward >= 0.0
    assert obs["pieces_remaining"] == 2 or terminated
