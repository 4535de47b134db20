from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from falling_blocks.game import COLORS, Action, GameConfig, TetrisGame, TetrominoType
from falling_blocks.visualization.renderer import hex_to_rgb


class FallingBlocksEnv(gym.Env):
    """Headless driver around :class:`TetrisGame`.

    Each step applies one action and then advances gravity by one tick, so
    pieces keep falling even when the agent never drops them. The reward is
    the change in game score.
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 30}

    def __init__(self, config: Optional[GameConfig] = None, render_mode: Optional[str] = None,
                 max_episode_steps: int = 10000) -> None:
        super().__init__()
        self.game = TetrisGame(config)
        self.render_mode = render_mode
        self.max_episode_steps = int(max_episode_steps)

        h, w = self.game.grid.height, self.game.grid.width
        n_kinds = len(TetrominoType)
        # Placed blocks are positive ids, the falling piece is overlaid as negative ids
        self.observation_space = spaces.Box(low=-n_kinds, high=n_kinds, shape=(h, w), dtype=np.int8)
        self.action_space = spaces.Discrete(len(Action))

        self._steps = 0

    def _get_info(self) -> Dict[str, Any]:
        info = self.game.summary()
        info["holes"] = self.game.grid.count_holes()
        info["max_height"] = self.game.grid.get_max_height()
        info["steps"] = self._steps
        return info

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[np.ndarray, Dict[str, Any]]:
        super().reset(seed=seed)
        if seed is not None:
            self.game.rng.seed(seed)
        self.game.reset()
        self.game.start()
        self._steps = 0
        return self.game.get_state(), self._get_info()

    def step(self, action):
        _, gained, _, _ = self.game.step(Action(int(action)))
        score_before_tick = self.game.score
        self.game.tick()
        gained += self.game.score - score_before_tick
        self._steps += 1

        terminated = bool(self.game.game_over)
        truncated = self._steps >= self.max_episode_steps and not terminated
        info = self._get_info()
        info["score_delta"] = gained
        return self.game.get_state(), float(gained), terminated, truncated, info

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode != "rgb_array":
            return None
        grid = self.game.get_state()
        cell = 12
        h, w = grid.shape
        img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
        for y in range(h):
            for x in range(w):
                v = int(grid[y, x])
                if v:
                    color = hex_to_rgb(COLORS[TetrominoType(abs(v))])
                    img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = color
        return img

    def close(self) -> None:
        pass
