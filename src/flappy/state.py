# src/flappy/state.py
from __future__ import annotations
import enum
import logging
import random
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple
from .config import (
    WIDTH, HEIGHT, LIFT_VELOCITY, SPAWN_PERIOD, GROUND_TILE_WIDTH, DEATH_MESSAGE
)
from .character import Character
from .ground import Ground
from .pipes import Pipe

log = logging.getLogger(__name__)


class Phase(enum.Enum):
    LOADING = "loading"
    READY = "ready"
    RUNNING = "running"
    STOPPED = "stopped"


class StopCause(enum.Enum):
    COLLISION = "collision"
    BOUNDS = "bounds"
    MANUAL = "manual"


@dataclass(frozen=True)
class CharacterView:
    x: float
    y: float
    width: int
    height: int
    velocity: float


@dataclass(frozen=True)
class PipeView:
    x: float
    width: int
    top_height: int
    bottom_height: int
    gap_top: float
    gap_bottom: float
    scored: bool


@dataclass(frozen=True)
class GameSnapshot:
    """Read-only copy of a session for hosts, renderers and tests."""
    phase: Phase
    frame: int
    score: int
    width: int
    height: int
    character: Optional[CharacterView]
    pipes: Tuple[PipeView, ...]
    ground_offset: float
    stop_cause: Optional[StopCause] = None
    stop_message: Optional[str] = None

    @property
    def alive(self) -> bool:
        return self.phase is not Phase.STOPPED


ScoreListener = Callable[[int], None]
StopListener = Callable[[Optional[str]], None]


class GameState:
    """
    One session of play: character, ground, active pipes, frame counter.
    Born READY; start() moves to RUNNING; a collision, leaving the screen
    or stop() moves to STOPPED for good.
    """

    def __init__(self,
                 rng: Optional[random.Random] = None,
                 ground_tile_width: float = GROUND_TILE_WIDTH,
                 width: int = WIDTH,
                 height: int = HEIGHT,
                 spawn_period: int = SPAWN_PERIOD):
        assert spawn_period >= 1, "spawn_period must be >= 1"
        self.rng = rng if rng is not None else random.Random()
        self.width = width
        self.height = height
        self.spawn_period = spawn_period

        self.character = Character(x=width / 3, y=height / 2 - LIFT_VELOCITY)
        self.ground = Ground(tile_width=ground_tile_width)
        self.pipes: List[Pipe] = []

        self.frame = 0
        self.score = 0
        self.phase = Phase.READY
        self.stop_cause: Optional[StopCause] = None
        self.stop_message: Optional[str] = None

        self._score_listeners: List[ScoreListener] = []
        self._stop_listeners: List[StopListener] = []

    # -------------------- Observers --------------------

    def add_score_listener(self, cb: ScoreListener):
        self._score_listeners.append(cb)

    def add_stop_listener(self, cb: StopListener):
        self._stop_listeners.append(cb)

    # -------------------- Transitions --------------------

    @property
    def stopped(self) -> bool:
        return self.phase is Phase.STOPPED

    def start(self) -> bool:
        if self.phase is not Phase.READY:
            return False
        self.phase = Phase.RUNNING
        log.debug("state running at frame %d", self.frame)
        return True

    def apply_lift(self):
        self.character.apply_lift()

    def stop(self, cause: StopCause = StopCause.MANUAL, message: Optional[str] = None) -> bool:
        """Move to STOPPED. Only the first call counts; later calls are no-ops."""
        if self.phase is Phase.STOPPED:
            return False
        self.phase = Phase.STOPPED
        self.stop_cause = cause
        self.stop_message = message
        log.info("session stopped at frame %d (cause=%s, score=%d)", self.frame, cause.value, self.score)
        for cb in list(self._stop_listeners):
            cb(message)
        return True

    # -------------------- Per-tick update --------------------

    def update(self, no_advance: bool = False):
        """
        One tick. With no_advance=True nothing moves (render-only frame),
        but pruning, spawning and collision checks still run.
        """
        if self.phase is Phase.STOPPED:
            return

        self.frame += 1

        if not no_advance:
            self.ground.update()
            self.character.update()

        if self.character.is_off_screen(self.height):
            self.stop(StopCause.BOUNDS, DEATH_MESSAGE)

        self.pipes = [p for p in self.pipes if not p.is_off_screen()]

        if self.frame % self.spawn_period == 0:
            self.pipes.append(Pipe.spawn(self.rng, self.width, self.height, score_x=self.character.x))

        box = self.character.box
        for pipe in self.pipes:
            if not no_advance and pipe.update():
                self._on_scored()
            if pipe.collides_with(box):
                self.stop(StopCause.COLLISION, DEATH_MESSAGE)

    def _on_scored(self):
        self.score += 1
        for cb in list(self._score_listeners):
            cb(self.score)

    # -------------------- Queries --------------------

    def next_pipes(self) -> List[Pipe]:
        """Pipes not yet fully passed by the character, nearest first."""
        return [p for p in self.pipes if p.x + p.width >= self.character.x]

    def snapshot(self) -> GameSnapshot:
        c = self.character
        return GameSnapshot(
            phase=self.phase,
            frame=self.frame,
            score=self.score,
            width=self.width,
            height=self.height,
            character=CharacterView(c.x, c.y, c.width, c.height, c.velocity),
            pipes=tuple(
                PipeView(p.x, p.width, p.top_height, p.bottom_height,
                         p.gap_top, p.gap_bottom, p.scored)
                for p in self.pipes
            ),
            ground_offset=self.ground.offset,
            stop_cause=self.stop_cause,
            stop_message=self.stop_message,
        )
