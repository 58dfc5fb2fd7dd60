# src/flappy/game.py
import sys, argparse, asyncio, logging
import pygame
from pygame import K_SPACE, K_ESCAPE, K_r, K_n
from .config import WIDTH, HEIGHT, TICK_MS, SEED_DEFAULT
from .assets import AssetSource, ImageFileSource, SpriteSheetSource, PlaceholderSource
from .errors import AssetLoadError
from .render import Renderer
from .session import Session
from .state import Phase

EVENT_POLL_S = 1.0 / 120.0


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Flappy clone")
    p.add_argument("--seed", type=int, default=None,
                   help="Pipe seed. Omit for SEED_DEFAULT, use -1 for random each launch.")
    p.add_argument("--assets", type=str, default=None,
                   help="Directory with one <id>.png per sprite (background, bird, ground, pipe, pipe-rev).")
    p.add_argument("--sheet", type=str, default=None,
                   help="Single sprite sheet laid out like the classic flappy atlas.")
    p.add_argument("--tick-ms", type=float, default=TICK_MS, help="Milliseconds per update")
    p.add_argument("--load-timeout", type=float, default=10.0,
                   help="Seconds to wait for assets before giving up")
    p.add_argument("--log-level", type=str, default="warning",
                   choices=["debug", "info", "warning", "error"])
    return p.parse_args(argv)


def resolve_seed(seed_arg):
    # None -> SEED_DEFAULT; -1 -> random (Session picks one)
    if seed_arg is None:
        return SEED_DEFAULT
    if seed_arg == -1:
        return None
    return seed_arg


def make_asset_source(args) -> AssetSource:
    if args.sheet:
        return SpriteSheetSource(args.sheet)
    if args.assets:
        return ImageFileSource(args.assets)
    return PlaceholderSource()


async def play(args) -> int:
    pygame.init()
    pygame.display.set_caption("Flappy")
    screen = pygame.display.set_mode((WIDTH, HEIGHT))
    font = pygame.font.SysFont("jetbrainsmono", 18)
    assets = make_asset_source(args)
    renderer = Renderer(assets, font)

    def paint(state):
        renderer.draw(screen, state)
        pygame.display.flip()

    def on_stop(message):
        if message:
            print(message)

    async def new_session(seed):
        session = Session(assets, seed=seed, tick_s=args.tick_ms / 1000.0)
        session.add_frame_listener(paint)
        session.add_stop_listener(on_stop)
        await asyncio.wait_for(session.initialize(), timeout=args.load_timeout)
        print(f"Seed: {session.seed}   SPACE / click to flap, ESC to quit")
        return session

    session = await new_session(resolve_seed(args.seed))

    while True:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                session.stop()
                return 0
            if event.type == pygame.KEYDOWN:
                if event.key == K_ESCAPE:
                    session.stop()
                    return 0
                if event.key == K_SPACE:
                    session.apply_lift()
                if event.key == K_r and session.phase is Phase.STOPPED:
                    # Restart SAME seed
                    session = await new_session(session.seed)
                if event.key == K_n and session.phase is Phase.STOPPED:
                    session = await new_session(None)
            if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                session.apply_lift()

        if session.phase is Phase.STOPPED:
            # keep the game-over overlay on screen
            paint(session.state)
        await asyncio.sleep(EVENT_POLL_S)


def run(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper()),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    try:
        code = asyncio.run(play(args))
    except AssetLoadError as e:
        print(f"Could not load game files: {e}", file=sys.stderr)
        code = 1
    except asyncio.TimeoutError:
        print(f"Game files did not load within {args.load_timeout:.0f}s", file=sys.stderr)
        code = 1
    finally:
        pygame.quit()
    sys.exit(code)


if __name__ == "__main__":
    run()
