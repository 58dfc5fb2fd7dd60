# src/env/flappy_env.py
from __future__ import annotations
import asyncio
import random
from typing import Optional, Dict, Any
import numpy as np
import gymnasium as gym
import pygame

from src.flappy.config import WIDTH, HEIGHT, TICK_MS, GROUND_TILE_WIDTH, SCORE_REWARD
from src.flappy.assets import PlaceholderSource
from src.flappy.render import Renderer
from src.flappy.state import GameState
from src.env.observations import build_observation, OBS_SIZE


class FlappyEnv(gym.Env):
    """
    Flappy Gymnasium environment (vector observations).
    - Simulation runs the same tick as the game (TICK_MS per update).
    - Agent acts every `frame_skip` ticks (default 4).
    - Observation: shape (6,), float32, see build_observation.
    """
    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": int(1000 / TICK_MS)}

    def __init__(self,
                 render_mode: Optional[str] = None,
                 frame_skip: int = 4,
                 time_limit_seconds: Optional[float] = 60.0):
        super().__init__()
        assert frame_skip >= 1, "frame_skip must be >= 1"
        assert render_mode is None or render_mode in self.metadata["render_modes"]
        self.render_mode = render_mode
        self.frame_skip = int(frame_skip)

        self.sim_fps = 1000.0 / TICK_MS

        self.time_limit_decisions = None
        if time_limit_seconds is not None:
            self.time_limit_decisions = int(self.sim_fps * time_limit_seconds / self.frame_skip)

        # Actions: 0 = NOOP, 1 = FLAP
        self.action_space = gym.spaces.Discrete(2)

        # [y_norm, vy_norm, next_dx, gap_top, gap_bottom, second_dx]
        low = np.array([0.0, -1.0, 0.0, 0.0, 0.0, 0.0], dtype=np.float32)
        high = np.ones(OBS_SIZE, dtype=np.float32)
        self.observation_space = gym.spaces.Box(low=low, high=high, dtype=np.float32)

        # --- Runtime state ---
        self.state: Optional[GameState] = None
        self.timestep: int = 0
        self.current_seed: Optional[int] = None
        self.death_cause: Optional[str] = None   # "collision" | "bounds" | None

        # Rendering
        self.screen = None
        self.clock = None
        self.renderer: Optional[Renderer] = None

    # -------------------- Core API --------------------

    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict[str, Any]] = None):
        super().reset(seed=seed)  # initializes self.np_random

        # Explicit seed -> exact layout; otherwise derive one from np_random
        if seed is not None:
            level_seed = int(seed)
        else:
            level_seed = int(self.np_random.integers(0, 2**31 - 1))

        self.state = GameState(rng=random.Random(level_seed), ground_tile_width=GROUND_TILE_WIDTH)
        self.state.update(no_advance=True)
        self.state.start()

        self.timestep = 0
        self.current_seed = level_seed
        self.death_cause = None

        obs = build_observation(self.state)
        info = {"seed": self.current_seed, "frame": self.state.frame, "score": 0}

        if self.render_mode == "human":
            self.render()
        return obs, info

    def step(self, action):
        assert self.action_space.contains(action), f"Invalid action {action}"
        assert self.state is not None, "call reset() first"
        state = self.state

        if action == 1 and not state.stopped:
            state.apply_lift()

        score_before = state.score
        for _ in range(self.frame_skip):
            state.update()
            if state.stopped:
                self.death_cause = state.stop_cause.value
                break

        passed = state.score - score_before
        if state.stopped:
            reward = -1.0
        else:
            reward = 1.0 + SCORE_REWARD * passed

        self.timestep += 1
        terminated = state.stopped
        truncated = False
        if (self.time_limit_decisions is not None) and (self.timestep >= self.time_limit_decisions):
            truncated = True

        obs = build_observation(state)
        info = {
            "seed": self.current_seed,
            "timestep": self.timestep,
            "frame": state.frame,
            "score": state.score,
            "death_cause": self.death_cause,
        }

        if self.render_mode == "human":
            self.render()

        return obs, float(reward), bool(terminated), truncated, info

    # -------------------- Rendering --------------------

    def _ensure_renderer(self):
        if self.renderer is not None:
            return
        assets = PlaceholderSource()
        asyncio.run(assets.load())
        self.renderer = Renderer(assets)

        if self.render_mode == "human":
            pygame.init()
            self.screen = pygame.display.set_mode((WIDTH, HEIGHT))
            pygame.display.set_caption("Flappy - Gym Env")
            self.clock = pygame.time.Clock()
        else:
            self.screen = pygame.Surface((WIDTH, HEIGHT))

    def render(self):
        if self.render_mode is None or self.state is None:
            return None

        self._ensure_renderer()
        self.renderer.draw(self.screen, self.state)

        if self.render_mode == "human":
            # Pump the event queue so the OS doesn't think we're hung
            pygame.event.pump()
            pygame.display.flip()
            self.clock.tick(self.metadata["render_fps"])
            return None

        # (W, H, 3) -> (H, W, 3) uint8
        arr = pygame.surfarray.array3d(self.screen)
        return np.transpose(arr, (1, 0, 2))

    def close(self):
        if self.render_mode == "human" and self.screen is not None:
            pygame.display.quit()
            pygame.quit()
        self.screen = None
        self.clock = None
        self.renderer = None
