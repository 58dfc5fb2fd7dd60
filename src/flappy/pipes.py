# src/flappy/pipes.py
from __future__ import annotations
import math
from dataclasses import dataclass
from typing import NamedTuple, Tuple
from .config import (
    WIDTH, HEIGHT, CHARACTER_X,
    PIPE_WIDTH, PIPE_SPEED, PIPE_MIN_HEIGHT, PIPE_MIN_SPACE
)


class Box(NamedTuple):
    """Float axis-aligned box (pygame.Rect truncates to ints)."""
    x: float
    y: float
    width: float
    height: float

    @property
    def left(self) -> float:
        return self.x

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def top(self) -> float:
        return self.y

    @property
    def bottom(self) -> float:
        return self.y + self.height


def boxes_intersect(a: Box, b: Box) -> bool:
    """AABB overlap, edges included (touching counts as a hit)."""
    return not (b.left > a.right or
                b.right < a.left or
                b.top > a.bottom or
                b.bottom < a.top)


def generate_pipe_heights(rng, canvas_height: float,
                          min_height: int = PIPE_MIN_HEIGHT,
                          min_space: int = PIPE_MIN_SPACE) -> Tuple[int, int]:
    """
    Returns (top_height, bottom_height).
    - top_height in [min_height, canvas_height/2)
    - the empty gap canvas_height - top - bottom is in [min_space, 2*min_space)
    `rng` only needs a random() -> [0, 1) method.
    """
    top = math.floor(rng.random() * (canvas_height / 2 - min_height)) + min_height
    bottom = (canvas_height - top - min_space) - math.floor(rng.random() * min_space)
    return int(top), int(bottom)


@dataclass
class Pipe:
    """A top/bottom pipe pair sharing one x, scrolling left."""
    x: float
    top_height: int
    bottom_height: int
    canvas_height: float = HEIGHT
    width: int = PIPE_WIDTH
    speed: float = PIPE_SPEED
    score_x: float = CHARACTER_X   # the character's x, used for the score line
    scored: bool = False

    @classmethod
    def spawn(cls, rng, canvas_width: float = WIDTH, canvas_height: float = HEIGHT,
              score_x: float = CHARACTER_X) -> "Pipe":
        top, bottom = generate_pipe_heights(rng, canvas_height)
        return cls(x=float(canvas_width), top_height=top, bottom_height=bottom,
                   canvas_height=canvas_height, score_x=score_x)

    @property
    def gap_top(self) -> float:
        return self.top_height

    @property
    def gap_bottom(self) -> float:
        return self.canvas_height - self.bottom_height

    def update(self) -> bool:
        """Scroll left. Returns True on the single tick the pipe crosses the score line."""
        self.x -= self.speed
        half = self.width / 2
        crossing = (self.score_x - self.speed - half) < self.x < (self.score_x - half)
        if crossing and not self.scored:
            self.scored = True
            return True
        return False

    def is_off_screen(self) -> bool:
        return (self.x + self.width) < 0

    def boxes(self) -> Tuple[Box, Box]:
        top = Box(self.x, 0.0, self.width, self.top_height)
        bottom = Box(self.x, self.gap_bottom, self.width, self.bottom_height)
        return top, bottom

    def collides_with(self, box: Box) -> bool:
        top, bottom = self.boxes()
        return boxes_intersect(box, top) or boxes_intersect(box, bottom)
