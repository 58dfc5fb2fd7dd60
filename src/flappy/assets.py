# src/flappy/assets.py
from __future__ import annotations
import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, Mapping, Optional, Tuple, Union

import pygame

from .config import (
    ASSET_IDS, ASSET_DIR_DEFAULT, ASSET_EXT, SPRITE_SHEET_RECTS,
    PLACEHOLDER_SIZES, PLACEHOLDER_COLORS
)
from .errors import AssetLoadError, NotFoundError

log = logging.getLogger(__name__)

PathLike = Union[str, Path]
RectSpec = Tuple[int, int, int, int]


@dataclass(frozen=True)
class ImageRegion:
    """A drawable rectangle inside a loaded image."""
    image: pygame.Surface
    rect: pygame.Rect

    @property
    def width(self) -> int:
        return self.rect.width

    @property
    def height(self) -> int:
        return self.rect.height

    def surface(self) -> pygame.Surface:
        """The region as its own surface (shares pixels with the image)."""
        if self.rect == self.image.get_rect():
            return self.image
        return self.image.subsurface(self.rect)


class AssetSource:
    """
    Resolves named sprite identifiers to ImageRegions.
    - load() decodes everything off the event loop and resolves once all is ready.
    - get() only works after load() resolved.
    Subclasses implement _load_regions (blocking, runs in a worker thread).
    """

    def __init__(self):
        self._regions: Dict[str, ImageRegion] = {}
        self._ready = False

    @property
    def ready(self) -> bool:
        return self._ready

    async def load(self, identifiers: Iterable[str] = ASSET_IDS) -> Dict[str, ImageRegion]:
        ids = sorted(set(identifiers))
        log.debug("loading %d assets with %s", len(ids), type(self).__name__)
        try:
            regions = await asyncio.to_thread(self._load_regions, ids)
        except AssetLoadError:
            raise
        except (pygame.error, OSError, ValueError) as e:
            raise AssetLoadError(f"could not load assets {ids}: {e}") from e

        self._regions = dict(regions)
        self._ready = True
        log.debug("assets ready: %s", ", ".join(ids))
        return dict(self._regions)

    def get(self, identifier: str) -> ImageRegion:
        if not self._ready:
            raise NotFoundError(f"asset {identifier!r} requested before load() finished")
        try:
            return self._regions[identifier]
        except KeyError:
            raise NotFoundError(f"unknown asset {identifier!r}") from None

    def _load_regions(self, identifiers) -> Dict[str, ImageRegion]:
        raise NotImplementedError


def _whole(image: pygame.Surface) -> ImageRegion:
    return ImageRegion(image=image, rect=image.get_rect())


def _decode(path: Path) -> pygame.Surface:
    if not path.is_file():
        raise AssetLoadError(f"missing image file: {path}")
    image = pygame.image.load(str(path))
    # convert_alpha needs a display; keep the raw surface when headless
    if pygame.display.get_init() and pygame.display.get_surface() is not None:
        image = image.convert_alpha()
    return image


class ImageFileSource(AssetSource):
    """One image file per identifier: <directory>/<identifier><ext>, or explicit paths."""

    def __init__(self, directory: PathLike = ASSET_DIR_DEFAULT,
                 paths: Optional[Mapping[str, PathLike]] = None,
                 ext: str = ASSET_EXT):
        super().__init__()
        self.directory = Path(directory)
        self.paths = {k: Path(v) for k, v in (paths or {}).items()}
        self.ext = ext

    def path_for(self, identifier: str) -> Path:
        if identifier in self.paths:
            return self.paths[identifier]
        return self.directory / f"{identifier}{self.ext}"

    def _load_regions(self, identifiers) -> Dict[str, ImageRegion]:
        return {ident: _whole(_decode(self.path_for(ident))) for ident in identifiers}


class SpriteSheetSource(AssetSource):
    """One shared sheet, each identifier being a sub-rectangle of it."""

    def __init__(self, sheet_path: PathLike, rects: Mapping[str, RectSpec] = SPRITE_SHEET_RECTS):
        super().__init__()
        self.sheet_path = Path(sheet_path)
        self.rects = dict(rects)

    def _load_regions(self, identifiers) -> Dict[str, ImageRegion]:
        missing = [i for i in identifiers if i not in self.rects]
        if missing:
            raise AssetLoadError(f"no sheet rectangle for {missing}")

        sheet = _decode(self.sheet_path)
        bounds = sheet.get_rect()
        regions: Dict[str, ImageRegion] = {}
        for ident in identifiers:
            rect = pygame.Rect(self.rects[ident])
            if not bounds.contains(rect):
                raise AssetLoadError(
                    f"rectangle {tuple(rect)} for {ident!r} lies outside the "
                    f"{bounds.width}x{bounds.height} sheet"
                )
            regions[ident] = ImageRegion(image=sheet, rect=rect)
        return regions


class PlaceholderSource(AssetSource):
    """Solid-colour sprites, no files needed (headless runs, agents, tests)."""

    def __init__(self, colors: Mapping[str, Tuple[int, int, int]] = PLACEHOLDER_COLORS,
                 sizes: Mapping[str, Tuple[int, int]] = PLACEHOLDER_SIZES):
        super().__init__()
        self.colors = dict(colors)
        self.sizes = dict(sizes)

    def _load_regions(self, identifiers) -> Dict[str, ImageRegion]:
        regions: Dict[str, ImageRegion] = {}
        for ident in identifiers:
            if ident not in self.colors or ident not in self.sizes:
                raise AssetLoadError(f"no placeholder defined for {ident!r}")
            surf = pygame.Surface(self.sizes[ident])
            surf.fill(self.colors[ident])
            regions[ident] = _whole(surf)
        return regions
