# src/tests/test_assets.py
import asyncio
import pygame
import pytest
from src.flappy.assets import (
    AssetSource, ImageFileSource, ImageRegion, PlaceholderSource, SpriteSheetSource
)
from src.flappy.config import ASSET_IDS, COLOR_BIRD
from src.flappy.errors import AssetLoadError, NotFoundError


def _save(path, size, color):
    surf = pygame.Surface(size)
    surf.fill(color)
    pygame.image.save(surf, str(path))
    return path


def test_get_before_load_fails():
    source = PlaceholderSource()
    with pytest.raises(NotFoundError):
        source.get("bird")
    assert not source.ready


def test_placeholder_load():
    source = PlaceholderSource()
    regions = asyncio.run(source.load())
    assert set(regions) == set(ASSET_IDS)
    bird = source.get("bird")
    assert isinstance(bird, ImageRegion)
    assert (bird.width, bird.height) == (50, 36)
    assert tuple(bird.surface().get_at((3, 3)))[:3] == COLOR_BIRD


def test_unknown_identifier_after_load():
    source = PlaceholderSource()
    asyncio.run(source.load(["bird"]))
    with pytest.raises(NotFoundError):
        source.get("pipe")
    # NotFoundError is also a KeyError
    with pytest.raises(KeyError):
        source.get("nope")


def test_image_files(tmp_path):
    for i, ident in enumerate(ASSET_IDS):
        _save(tmp_path / f"{ident}.bmp", (10 + i, 20), (i * 40, 0, 0))
    source = ImageFileSource(tmp_path, ext=".bmp")
    asyncio.run(source.load())
    pipe = source.get("pipe")
    assert (pipe.width, pipe.height) == (10 + ASSET_IDS.index("pipe"), 20)
    assert pipe.surface() is pipe.image


def test_explicit_path_overrides_directory(tmp_path):
    _save(tmp_path / "yellow.bmp", (7, 5), (255, 255, 0))
    source = ImageFileSource(tmp_path / "missing", paths={"bird": tmp_path / "yellow.bmp"})
    asyncio.run(source.load(["bird"]))
    assert source.get("bird").width == 7


def test_missing_file_is_a_load_error(tmp_path):
    source = ImageFileSource(tmp_path, ext=".bmp")
    with pytest.raises(AssetLoadError):
        asyncio.run(source.load(["bird"]))
    assert not source.ready
    with pytest.raises(NotFoundError):
        source.get("bird")


def test_corrupt_file_is_a_load_error(tmp_path):
    (tmp_path / "bird.bmp").write_bytes(b"not an image")
    source = ImageFileSource(tmp_path, ext=".bmp")
    with pytest.raises(AssetLoadError):
        asyncio.run(source.load(["bird"]))


def test_sprite_sheet_regions(tmp_path):
    sheet = pygame.Surface((100, 50))
    sheet.fill((0, 0, 255))
    sheet.fill((255, 0, 0), pygame.Rect(60, 10, 20, 30))
    pygame.image.save(sheet, str(tmp_path / "sheet.bmp"))

    rects = {"bird": (60, 10, 20, 30), "ground": (0, 0, 50, 10)}
    source = SpriteSheetSource(tmp_path / "sheet.bmp", rects)
    asyncio.run(source.load(["bird", "ground"]))

    bird, ground = source.get("bird"), source.get("ground")
    assert bird.image is ground.image
    assert bird.rect == pygame.Rect(60, 10, 20, 30)
    sub = bird.surface()
    assert sub.get_size() == (20, 30)
    assert tuple(sub.get_at((0, 0)))[:3] == (255, 0, 0)


def test_sprite_sheet_rect_outside_sheet(tmp_path):
    _save(tmp_path / "sheet.bmp", (40, 40), (0, 0, 0))
    source = SpriteSheetSource(tmp_path / "sheet.bmp", {"bird": (30, 30, 20, 20)})
    with pytest.raises(AssetLoadError):
        asyncio.run(source.load(["bird"]))


def test_sprite_sheet_unknown_identifier(tmp_path):
    _save(tmp_path / "sheet.bmp", (40, 40), (0, 0, 0))
    source = SpriteSheetSource(tmp_path / "sheet.bmp", {"bird": (0, 0, 10, 10)})
    with pytest.raises(AssetLoadError):
        asyncio.run(source.load(["bird", "pipe"]))


def test_base_source_is_abstract():
    with pytest.raises(NotImplementedError):
        asyncio.run(AssetSource().load(["bird"]))
