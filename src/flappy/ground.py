# src/flappy/ground.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Iterator
from .config import GROUND_SPEED


@dataclass
class Ground:
    """Scroll offset of the repeated ground tile."""
    tile_width: float
    speed: float = GROUND_SPEED
    offset: float = 0.0

    def __post_init__(self):
        if self.tile_width <= 0:
            raise ValueError(f"tile_width must be > 0, got {self.tile_width}")

    def update(self):
        self.offset += self.speed
        # wrap instead of resetting to 0, no jump when speed doesn't divide the tile
        if self.offset >= self.tile_width:
            self.offset -= self.tile_width

    def tile_positions(self, view_width: float) -> Iterator[float]:
        """x of each tile to draw so the strip covers the whole viewport."""
        x = -view_width / 2
        while x <= view_width * 2:
            yield x - self.offset
            x += self.tile_width
