from __future__ import annotations

from typing import Optional

import gymnasium as gym

# Ensure envs are registered
import falling_blocks.env  # noqa: F401


def run_random(steps: int = 200, seed: Optional[int] = None) -> float:
    env = gym.make("FallingBlocks-v0")
    obs, info = env.reset(seed=seed)
    env.action_space.seed(seed)
    total_reward = 0.0
    episodes = 1
    for _ in range(steps):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total_reward += float(reward)
        if terminated or truncated:
            obs, info = env.reset()
            episodes += 1
    env.close()
    print(f"Random agent total reward: {total_reward:.2f} over {episodes} episode(s)")
    return total_reward


if __name__ == "__main__":  # pragma: no cover
    run_random()
