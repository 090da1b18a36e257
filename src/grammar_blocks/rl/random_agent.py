from __future__ import annotations

import argparse
import random
from typing import Optional

import gymnasium as gym

import grammar_blocks.env  # ensure registration


def run_random(episodes: int = 5, seed: Optional[int] = None) -> list[dict]:
    rng = random.Random(seed)
    env = gym.make("GrammarBlocks-10x10-v0")
    results: list[dict] = []
    obs, info = env.reset(seed=seed)
    for _ in range(episodes):
        total_reward = 0.0
        steps = 0
        while True:
            valid = info.get("valid_actions", [])
            action = rng.choice(valid) if valid else env.action_space.sample()
            obs, reward, terminated, truncated, info = env.step(action)
            total_reward += float(reward)
            steps += 1
            if terminated or truncated:
                break
        results.append({"reward": total_reward, "steps": steps, "score": info["score"], "reason": info["reason"]})
        obs, info = env.reset()
    env.close()
    return results


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser()
    p.add_argument("--episodes", type=int, default=5)
    p.add_argument("--seed", type=int, default=None)
    return p


def main() -> None:
    args = build_parser().parse_args()
    for i, r in enumerate(run_random(args.episodes, args.seed)):
        print(f"Episode {i}: score={r['score']} steps={r['steps']} reason={r['reason']} reward={r['reward']:.2f}")


if __name__ == "__main__":  # pragma: no cover
    main()
