# src/flappy/character.py
from __future__ import annotations
from dataclasses import dataclass
from .config import (
    CHARACTER_X, CHARACTER_Y, CHARACTER_W, CHARACTER_H,
    GRAVITY, LIFT_VELOCITY, VELOCITY_SCALE, GROUND_BAND
)
from .pipes import Box


@dataclass
class Character:
    """
    The bird. x never changes after spawn, only y moves.
    - velocity > 0 means moving up (screen y decreases)
    - gravity is subtracted from velocity every tick
    """
    x: float = CHARACTER_X
    y: float = CHARACTER_Y
    width: int = CHARACTER_W
    height: int = CHARACTER_H
    velocity: float = 0.0
    gravity: float = GRAVITY

    @property
    def box(self) -> Box:
        return Box(self.x, self.y, self.width, self.height)

    def apply_lift(self, velocity: float = LIFT_VELOCITY):
        """Override the current velocity with the lift impulse."""
        self.velocity = velocity

    def update(self):
        self.velocity -= self.gravity
        self.y -= self.velocity * VELOCITY_SCALE

    def is_off_screen(self, screen_height: float, ground_band: float = GROUND_BAND) -> bool:
        # strict comparisons: touching the top edge or the ground line is still alive
        return self.y < 0 or (self.y + self.height) > screen_height - ground_band
