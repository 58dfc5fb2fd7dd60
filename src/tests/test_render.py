# src/tests/test_render.py
import asyncio
import random
import pygame
from src.flappy.assets import PlaceholderSource
from src.flappy.config import COLOR_BIRD, COLOR_SKY, COLOR_GROUND, COLOR_PIPE, COLOR_PIPE_REV
from src.flappy.pipes import Pipe
from src.flappy.render import Renderer
from src.flappy.state import GameState


def _rgb(surf, pos):
    return tuple(surf.get_at(pos))[:3]


def test_draw_order_and_positions():
    assets = PlaceholderSource()
    asyncio.run(assets.load())
    state = GameState(rng=random.Random(0))
    state.pipes = [Pipe(x=300, top_height=150, bottom_height=200)]
    state.update(no_advance=True)

    surf = pygame.Surface((state.width, state.height))
    Renderer(assets).draw(surf, state)

    assert _rgb(surf, (5, 5)) == COLOR_SKY
    assert _rgb(surf, (5, 590)) == COLOR_GROUND
    assert _rgb(surf, (170, 300)) == COLOR_BIRD
    assert _rgb(surf, (350, 100)) == COLOR_PIPE_REV
    assert _rgb(surf, (350, 450)) == COLOR_PIPE
    # inside the gap: sky
    assert _rgb(surf, (350, 300)) == COLOR_SKY
