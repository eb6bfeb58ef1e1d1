from __future__ import annotations

import logging
from pathlib import Path

import pygame
import pytest

import make_language_sheets as sheets

RED = (255, 0, 0, 255)


def _is_red(color: pygame.Color) -> bool:
    return color.r > 240 and color.g < 16 and color.b < 16 and color.a > 240


def _quadrant_icon(size: int = 64) -> pygame.Surface:
    """Transparent square with an opaque red top-left quadrant."""
    icon = pygame.Surface((size, size), pygame.SRCALPHA)
    icon.fill((0, 0, 0, 0))
    icon.fill(RED, pygame.Rect(0, 0, size // 2, size // 2))
    return icon


def test_sheet_is_one_row_of_frames() -> None:
    sheet = sheets.build_sprite_sheet(_quadrant_icon(), num_frames=32, size=64)
    assert sheet.get_size() == (32 * 64, 64)


def test_frames_rotate_clockwise() -> None:
    sheet = sheets.build_sprite_sheet(_quadrant_icon(), num_frames=4, size=64)

    # Frame 0: unrotated.
    assert _is_red(sheet.get_at((16, 16)))
    assert sheet.get_at((48, 16)).a == 0
    # Frame 1: 90 degrees clockwise, top-left moves to top-right.
    assert _is_red(sheet.get_at((64 + 48, 16)))
    assert sheet.get_at((64 + 16, 16)).a == 0
    # Frame 2: 180 degrees, bottom-right.
    assert _is_red(sheet.get_at((128 + 48, 48)))
    # Frame 3: 270 degrees, bottom-left.
    assert _is_red(sheet.get_at((192 + 16, 48)))
    assert sheet.get_at((192 + 48, 48)).a == 0


def test_diagonal_frames_keep_transparent_corners() -> None:
    icon = pygame.Surface((64, 64), pygame.SRCALPHA)
    icon.fill(RED)
    sheet = sheets.build_sprite_sheet(icon, num_frames=8, size=64)
    # 45 degrees: the rotated square grows, so its corners fall outside the icon.
    assert sheet.get_at((64 + 1, 1)).a == 0
    assert _is_red(sheet.get_at((64 + 32, 32)))


@pytest.mark.parametrize(("frames", "size"), [(0, 64), (32, 0)])
def test_rejects_empty_sheets(frames: int, size: int) -> None:
    with pytest.raises(ValueError):
        sheets.build_sprite_sheet(_quadrant_icon(), num_frames=frames, size=size)


def test_generate_sprite_sheet_from_file(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    src = tmp_path / "source" / "rust.png"
    src.parent.mkdir()
    pygame.image.save(_quadrant_icon(128), str(src))
    out = tmp_path / "nested" / "out" / "rust-sheet.png"

    with caplog.at_level(logging.INFO, logger="make_language_sheets"):
        written = sheets.generate_sprite_sheet(src, out, num_frames=8, size=32)

    assert written == out
    assert out.exists()
    assert pygame.image.load(str(out)).get_size() == (8 * 32, 32)
    assert f"Generated sprite sheet: {out}" in caplog.text


def test_placeholder_icons_are_distinct_badges() -> None:
    rust = sheets.paint_placeholder_icon('rust', 64)
    lua = sheets.paint_placeholder_icon('lua', 64)
    assert rust.get_size() == (64, 64)
    assert rust.get_at((0, 0)).a == 0
    assert rust.get_at((32, 50)).a == 255
    assert rust.get_at((32, 50)) != lua.get_at((32, 50))


def test_generate_all_requires_sources(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        sheets.generate_all(tmp_path / "missing", tmp_path / "out", languages=['rust'])
    assert not (tmp_path / "out" / "rust-sheet.png").exists()


def test_generate_all_with_placeholders(tmp_path: Path) -> None:
    written = sheets.generate_all(
        tmp_path / "missing",
        tmp_path / "out",
        languages=['rust', 'lua'],
        num_frames=4,
        size=16,
        placeholders=True,
    )
    assert written == [tmp_path / "out" / "rust-sheet.png", tmp_path / "out" / "lua-sheet.png"]


def test_generate_all_skips_current_sheets(tmp_path: Path) -> None:
    kwargs = dict(languages=['cpp'], num_frames=4, size=16, placeholders=True, skip_existing=True)
    assert len(sheets.generate_all(tmp_path / "src", tmp_path / "out", **kwargs)) == 1
    assert sheets.generate_all(tmp_path / "src", tmp_path / "out", **kwargs) == []
    # A sheet at the wrong size is rebuilt.
    kwargs["size"] = 8
    assert len(sheets.generate_all(tmp_path / "src", tmp_path / "out", **kwargs)) == 1


def test_cli_generates_requested_languages(tmp_path: Path) -> None:
    out = tmp_path / "out"
    code = sheets.main(
        ["--source", str(tmp_path / "src"), "--output", str(out), "--frames", "4", "--size", "16", "--placeholders", "kotlin"]
    )
    assert code == 0
    assert sorted(p.name for p in out.iterdir()) == ["kotlin-sheet.png"]


def test_cli_reports_missing_source(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    code = sheets.main(["--source", str(tmp_path / "src"), "--output", str(tmp_path / "out"), "java"])
    assert code == 1
    assert "No source icon for 'java'" in caplog.text


def test_cli_rejects_unknown_language(tmp_path: Path) -> None:
    with pytest.raises(SystemExit):
        sheets.main(["--output", str(tmp_path), "cobol"])


def test_wide_icons_keep_their_aspect_ratio() -> None:
    icon = pygame.Surface((128, 64), pygame.SRCALPHA)
    icon.fill((0, 0, 0, 0))
    pygame.draw.circle(icon, RED, (64, 32), 30)

    sheet = sheets.build_sprite_sheet(icon, num_frames=1, size=64)
    opaque = sheet.get_bounding_rect(min_alpha=128)
    assert opaque.width >= 56
    assert abs(opaque.width - opaque.height) <= 2
    # Cropped around the centre, so the circle stays centred.
    assert abs(opaque.centerx - 32) <= 2
    assert abs(opaque.centery - 32) <= 2


def test_tall_icons_are_cropped_not_squashed() -> None:
    icon = pygame.Surface((32, 96), pygame.SRCALPHA)
    icon.fill((0, 0, 0, 0))
    pygame.draw.circle(icon, RED, (16, 48), 14)

    sheet = sheets.build_sprite_sheet(icon, num_frames=1, size=64)
    opaque = sheet.get_bounding_rect(min_alpha=128)
    # Scaled by 2 to cover the frame width: a 28 px circle becomes about 56 px round.
    assert abs(opaque.width - opaque.height) <= 3
    assert opaque.width >= 50
