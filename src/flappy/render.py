# src/flappy/render.py
from __future__ import annotations
from typing import Dict, Optional, Tuple
import pygame
from .assets import AssetSource
from .config import GROUND_BAND, GROUND_TILE_SCALE, COLOR_FG, COLOR_PANEL, COLOR_DANGER
from .state import GameState


class Renderer:
    """
    Draws a GameState back to front: background, ground, pipes, character.
    Scaled sprites are cached per (identifier, size).
    """

    def __init__(self, assets: AssetSource, font: Optional[pygame.font.Font] = None):
        self.assets = assets
        self.font = font
        self._cache: Dict[Tuple[str, int, int], pygame.Surface] = {}

    def _sprite(self, identifier: str, w: int, h: int) -> pygame.Surface:
        key = (identifier, int(w), int(h))
        surf = self._cache.get(key)
        if surf is None:
            region = self.assets.get(identifier)
            surf = pygame.transform.scale(region.surface(), (max(1, key[1]), max(1, key[2])))
            self._cache[key] = surf
        return surf

    def draw(self, surf: pygame.Surface, state: GameState):
        w, h = state.width, state.height
        surf.blit(self._sprite("background", w, h - GROUND_BAND), (0, 0))

        ground = self.assets.get("ground")
        tile_w = int(ground.width * GROUND_TILE_SCALE)
        tile_h = int(ground.height * GROUND_TILE_SCALE)
        tile = self._sprite("ground", tile_w, tile_h)
        for x in state.ground.tile_positions(w):
            surf.blit(tile, (int(x), h - GROUND_BAND))

        for pipe in state.pipes:
            region = self.assets.get("pipe")
            # keep the sprite's aspect ratio at the pipe's width
            pipe_h = int(region.height / (region.width / pipe.width))
            top = self._sprite("pipe-rev", pipe.width, pipe_h)
            bottom = self._sprite("pipe", pipe.width, pipe_h)
            surf.blit(top, (int(pipe.x), int(pipe.top_height - pipe_h)))
            surf.blit(bottom, (int(pipe.x), int(pipe.gap_bottom)))

        c = state.character
        bird = self._sprite("bird", c.width + 2, c.height + 2)
        surf.blit(bird, (int(c.x - 2), int(c.y - 2)))

        if self.font is not None:
            self._draw_hud(surf, state)

    def _draw_hud(self, surf: pygame.Surface, state: GameState):
        score = self.font.render(str(state.score), True, COLOR_FG)
        surf.blit(score, (state.width // 2 - score.get_width() // 2, 24))

        if state.stopped and state.stop_message:
            panel = pygame.Rect(0, 0, 240, 80)
            panel.center = (state.width // 2, state.height // 2)
            pygame.draw.rect(surf, COLOR_PANEL, panel, border_radius=10)
            pygame.draw.rect(surf, COLOR_DANGER, panel, width=2, border_radius=10)
            msg = self.font.render(state.stop_message, True, COLOR_FG)
            hint = self.font.render("R restart | N new seed", True, COLOR_FG)
            surf.blit(msg, (panel.centerx - msg.get_width() // 2, panel.centery - msg.get_height() - 2))
            surf.blit(hint, (panel.centerx - hint.get_width() // 2, panel.centery + 2))
