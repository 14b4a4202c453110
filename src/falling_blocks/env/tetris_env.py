from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from falling_blocks.game import COLS, ROWS, Action, GameStatus, TetrisEngine


# Pausing makes no sense for an agent
AGENT_ACTIONS = [a for a in Action if a is not Action.PAUSE]

PALETTE = np.array(
    [
        (20, 20, 26),
        (255, 13, 114),
        (13, 194, 255),
        (13, 255, 114),
        (245, 56, 255),
        (255, 142, 13),
        (255, 225, 56),
        (56, 119, 255),
    ],
    dtype=np.uint8,
)


class FallingBlocksEnv(gym.Env):
    """Gymnasium wrapper around :class:`TetrisEngine`.

    Every step applies one action and then advances a virtual clock by
    ``frame_ms`` before ticking the engine, so gravity works exactly as it
    does in the interactive game. Reward is the change in engine score.
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 30}

    def __init__(self, render_mode: Optional[str] = None, frame_ms: int = 250,
                 max_episode_steps: int = 10000) -> None:
        super().__init__()
        self.render_mode = render_mode
        self.frame_ms = int(frame_ms)
        self.max_episode_steps = int(max_episode_steps)
        self._now = 0
        self.engine = TetrisEngine(clock=lambda: self._now)

        self.observation_space = spaces.Dict(
            {
                # Locked cells are 1..7, the falling piece is overlaid as -1..-7
                "board": spaces.Box(low=-7, high=7, shape=(ROWS, COLS), dtype=np.int8),
                "next": spaces.Discrete(8),
            }
        )
        self.action_space = spaces.Discrete(len(AGENT_ACTIONS))
        self._steps = 0

    def _get_obs(self) -> Dict[str, Any]:
        nxt = self.engine.next_piece
        return {
            "board": self.engine.get_state().astype(np.int8),
            "next": int(nxt.kind) if nxt is not None else 0,
        }

    def _get_info(self) -> Dict[str, Any]:
        return {
            "score": self.engine.score,
            "level": self.engine.level,
            "lines": self.engine.lines,
            "steps": self._steps,
            "max_height": self.engine.grid.get_max_height(),
            "holes": self.engine.grid.count_holes(),
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        if seed is not None:
            self.engine.rng.seed(seed)
        self._now = 0
        self._steps = 0
        self.engine.start(self._now)
        return self._get_obs(), self._get_info()

    def step(self, action: int):
        score_before = self.engine.score
        self.engine.apply(AGENT_ACTIONS[int(action)], self._now)
        self._now += self.frame_ms
        self.engine.tick(self._now)
        self._steps += 1

        reward = float(self.engine.score - score_before)
        terminated = self.engine.status is GameStatus.GAME_OVER
        truncated = (not terminated) and self._steps >= self.max_episode_steps
        return self._get_obs(), reward, terminated, truncated, self._get_info()

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode == "rgb_array":
            cell = 12
            board = np.abs(self.engine.get_state()).astype(np.intp)
            img = PALETTE[board]
            return np.repeat(np.repeat(img, cell, axis=0), cell, axis=1)
        return None

    def close(self) -> None:
        pass
