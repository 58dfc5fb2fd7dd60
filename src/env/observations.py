# src/env/observations.py
from __future__ import annotations
import numpy as np
from src.flappy.config import LIFT_VELOCITY
from src.flappy.state import GameState

OBS_SIZE = 6


def _clamp(x: float, lo: float, hi: float) -> float:
    return lo if x < lo else (hi if x > hi else x)


def build_observation(state: GameState) -> np.ndarray:
    """
    Returns a fixed (6,) float32 vector:
      [ y_norm, vy_norm, next_dx, next_gap_top, next_gap_bottom, second_dx ]
    - y_norm     : character top / height, in [0,1]
    - vy_norm    : velocity / LIFT_VELOCITY, clipped to [-1,1] (+ = going up)
    - next_dx    : (pipe.x - character.x) / width of the nearest pipe not yet
                   passed, in [0,1]; sentinel 1.0 when there is none
    - gap_top/bottom: that pipe's gap edges / height; sentinels 0.0 / 1.0
    - second_dx  : same as next_dx for the pipe after it
    """
    c = state.character
    w, h = float(state.width), float(state.height)

    y_norm = _clamp(c.y / h, 0.0, 1.0)
    vy_norm = _clamp(c.velocity / LIFT_VELOCITY, -1.0, 1.0)

    ahead = state.next_pipes()
    if ahead:
        p = ahead[0]
        next_dx = _clamp((p.x - c.x) / w, 0.0, 1.0)
        gap_top = _clamp(p.gap_top / h, 0.0, 1.0)
        gap_bot = _clamp(p.gap_bottom / h, 0.0, 1.0)
    else:
        next_dx, gap_top, gap_bot = 1.0, 0.0, 1.0

    second_dx = _clamp((ahead[1].x - c.x) / w, 0.0, 1.0) if len(ahead) > 1 else 1.0

    return np.asarray([y_norm, vy_norm, next_dx, gap_top, gap_bot, second_dx], dtype=np.float32)
