# src/flappy/session.py
from __future__ import annotations
import logging
import random
from typing import Callable, List, Optional
from .assets import AssetSource
from .config import ASSET_IDS, TICK_S, WIDTH, HEIGHT, GROUND_TILE_SCALE
from .errors import InvalidInputError
from .loop import GameLoop
from .state import GameState, GameSnapshot, Phase, StopCause, ScoreListener, StopListener

log = logging.getLogger(__name__)

FrameListener = Callable[[GameState], None]


class Session:
    """
    Host-facing lifecycle of one game:
        LOADING --initialize()--> READY --start()/apply_lift()--> RUNNING --> STOPPED
    A stopped session is final; play again with a new Session.
    """

    def __init__(self,
                 assets: AssetSource,
                 seed: Optional[int] = None,
                 rng: Optional[random.Random] = None,
                 tick_s: float = TICK_S,
                 width: int = WIDTH,
                 height: int = HEIGHT):
        if seed is None:
            seed = random.randrange(0, 2**32 - 1)
        self.seed = seed
        self.rng = rng if rng is not None else random.Random(seed)
        self.assets = assets
        self.width = width
        self.height = height

        self.state: Optional[GameState] = None
        self.loop = GameLoop(self._tick, tick_s)

        self._frame_listeners: List[FrameListener] = []
        self._score_listeners: List[ScoreListener] = []
        self._stop_listeners: List[StopListener] = []

    # -------------------- Observers --------------------

    def add_frame_listener(self, cb: FrameListener):
        self._frame_listeners.append(cb)

    def add_score_listener(self, cb: ScoreListener):
        self._score_listeners.append(cb)
        if self.state is not None:
            self.state.add_score_listener(cb)

    def add_stop_listener(self, cb: StopListener):
        self._stop_listeners.append(cb)
        if self.state is not None:
            self.state.add_stop_listener(cb)

    # -------------------- Lifecycle --------------------

    @property
    def phase(self) -> Phase:
        return Phase.LOADING if self.state is None else self.state.phase

    async def initialize(self) -> GameSnapshot:
        """Load assets, build the world and paint the first frame. AssetLoadError propagates."""
        if self.state is not None:
            return self.state.snapshot()

        await self.assets.load(ASSET_IDS)
        if self.state is not None:
            # an overlapping initialize() finished first
            return self.state.snapshot()

        ground = self.assets.get("ground")
        state = GameState(rng=self.rng,
                          ground_tile_width=ground.width * GROUND_TILE_SCALE,
                          width=self.width,
                          height=self.height)
        for cb in self._score_listeners:
            state.add_score_listener(cb)
        for cb in self._stop_listeners:
            state.add_stop_listener(cb)
        self.state = state

        state.update(no_advance=True)
        self._emit_frame()
        log.info("session ready (seed=%s)", self.seed)
        return state.snapshot()

    def start(self) -> bool:
        try:
            state = self._require_loaded("start")
        except InvalidInputError as e:
            log.warning("%s", e)
            return False
        if state.phase is not Phase.READY:
            return False
        # raises RuntimeError without a running event loop, leaving the state READY
        self.loop.start()
        state.start()
        log.info("session running")
        return True

    def apply_lift(self) -> bool:
        try:
            state = self._require_loaded("lift")
        except InvalidInputError as e:
            log.warning("%s", e)
            return False
        if state.phase is Phase.STOPPED:
            log.debug("lift ignored, session is over")
            return False
        if state.phase is Phase.READY:
            self.start()
        state.apply_lift()
        return True

    def stop(self, reason: Optional[str] = None):
        """Halt the loop and end the session. Repeated calls do nothing."""
        self.loop.stop()
        if self.state is None:
            log.debug("stop ignored, session still loading")
            return
        self.state.stop(StopCause.MANUAL, reason)

    def current_state(self) -> GameSnapshot:
        if self.state is None:
            return GameSnapshot(phase=Phase.LOADING, frame=0, score=0,
                                width=self.width, height=self.height,
                                character=None, pipes=(), ground_offset=0.0)
        return self.state.snapshot()

    async def wait_closed(self):
        await self.loop.wait()

    # -------------------- Internals --------------------

    def _require_loaded(self, action: str) -> GameState:
        if self.state is None:
            raise InvalidInputError(f"{action} ignored: game files are still loading")
        return self.state

    def _tick(self) -> bool:
        state = self.state
        state.update()
        self._emit_frame()
        return state.phase is Phase.RUNNING

    def _emit_frame(self):
        for cb in list(self._frame_listeners):
            cb(self.state)
