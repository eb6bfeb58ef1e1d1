"""
Language Sheet Generator
========================
How to run: pip install pygame; python make_language_sheets.py [--placeholders] [LANGUAGE ...]
Reads:  imagegen/source/<language>.png
Writes: assets/languages/<language>-sheet.png

Each sheet is a single row of square frames, frame ``i`` holding the icon rotated
clockwise by ``i * 360 / frames`` degrees on a transparent background. The game
plays the row back as its spinning animation.
"""
from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

import pygame

logger = logging.getLogger(__name__)


# --------------------------------------------------------------------------------------
# Constants
# --------------------------------------------------------------------------------------
LANGUAGES: Tuple[str, ...] = (
    'javascript',
    'python',
    'lua',
    'java',
    'typescript',
    'cpp',
    'rust',
    'kotlin',
)
SHEET_FRAMES = 32
FRAME_SIZE = 64
DEFAULT_SOURCE_DIR = Path("imagegen/source")
DEFAULT_OUTPUT_DIR = Path("assets/languages")

# Badge colours for placeholder icons (background, label).
BADGE_COLORS: Dict[str, Tuple[Tuple[int, int, int], Tuple[int, int, int]]] = {
    'javascript': ((240, 219, 79), (30, 30, 30)),
    'python': ((55, 118, 171), (255, 212, 59)),
    'lua': ((0, 0, 128), (255, 255, 255)),
    'java': ((176, 114, 25), (255, 255, 255)),
    'typescript': ((49, 120, 198), (255, 255, 255)),
    'cpp': ((0, 89, 156), (255, 255, 255)),
    'rust': ((222, 165, 132), (20, 20, 20)),
    'kotlin': ((127, 82, 255), (255, 255, 255)),
}
BADGE_LABELS: Dict[str, str] = {
    'javascript': "JS",
    'python': "Py",
    'lua': "Lua",
    'java': "Jv",
    'typescript': "TS",
    'cpp': "C++",
    'rust': "Rs",
    'kotlin': "Kt",
}
COLOR_OUTLINE = (20, 20, 20, 255)
TRANSPARENT = (0, 0, 0, 0)


def source_path(source_dir: Path, language: str) -> Path:
    return Path(source_dir) / f"{language}.png"


def sheet_path(output_dir: Path, language: str) -> Path:
    return Path(output_dir) / f"{language}-sheet.png"


# --------------------------------------------------------------------------------------
# Icon helpers
# --------------------------------------------------------------------------------------
def paint_placeholder_icon(language: str, size: int = FRAME_SIZE) -> pygame.Surface:
    """Paint a round badge with the language's short name."""
    if size < 1:
        raise ValueError(f"Icon size must be positive, got {size}")
    if not pygame.font.get_init():
        pygame.font.init()

    bg, fg = BADGE_COLORS.get(language, ((160, 160, 160), (20, 20, 20)))
    label = BADGE_LABELS.get(language, language[:2].title())

    icon = pygame.Surface((size, size), pygame.SRCALPHA)
    icon.fill(TRANSPARENT)
    center = (size // 2, size // 2)
    radius = max(1, size // 2 - 2)
    pygame.draw.circle(icon, COLOR_OUTLINE, center, radius)
    pygame.draw.circle(icon, (*bg, 255), center, max(1, radius - 3))

    font = pygame.font.Font(None, max(8, int(size * 0.5)))
    text = font.render(label, True, fg)
    icon.blit(text, text.get_rect(center=center))
    # Notch on the rim so the spin reads even for symmetric labels.
    pygame.draw.circle(icon, COLOR_OUTLINE, (size // 2, max(2, size // 10)), max(1, size // 16))
    return icon


def load_icon(path: Path) -> pygame.Surface:
    """Load an icon onto a per-pixel-alpha surface.

    Works without a display mode, so no ``convert_alpha`` here.
    """
    image = pygame.image.load(str(path))
    icon = pygame.Surface(image.get_size(), pygame.SRCALPHA)
    icon.fill(TRANSPARENT)
    icon.blit(image, (0, 0))
    return icon


def rotated_frame(icon: pygame.Surface, degrees: float, size: int) -> pygame.Surface:
    # pygame rotates counterclockwise and grows the canvas to fit the rotated image.
    rotated = pygame.transform.rotate(icon, -degrees)
    # Cover fit: keep the aspect ratio, fill the frame, crop the overflow around the centre.
    w, h = rotated.get_size()
    scale = max(size / w, size / h)
    scaled_size = (max(size, round(w * scale)), max(size, round(h * scale)))
    scaled = pygame.transform.smoothscale(rotated, scaled_size)

    frame = pygame.Surface((size, size), pygame.SRCALPHA)
    frame.fill(TRANSPARENT)
    frame.blit(scaled, ((size - scaled_size[0]) // 2, (size - scaled_size[1]) // 2))
    return frame


# --------------------------------------------------------------------------------------
# Sheet generation
# --------------------------------------------------------------------------------------
def build_sprite_sheet(icon: pygame.Surface, num_frames: int = SHEET_FRAMES, size: int = FRAME_SIZE) -> pygame.Surface:
    if num_frames < 1:
        raise ValueError(f"A sprite sheet needs at least one frame, got {num_frames}")
    if size < 1:
        raise ValueError(f"Frame size must be positive, got {size}")

    sheet = pygame.Surface((size * num_frames, size), pygame.SRCALPHA)
    sheet.fill(TRANSPARENT)
    for i in range(num_frames):
        rotation = (i * 360) / num_frames
        sheet.blit(rotated_frame(icon, rotation, size), (i * size, 0))
    return sheet


def generate_sprite_sheet(
    input_file: Path,
    output_file: Path,
    num_frames: int = SHEET_FRAMES,
    size: int = FRAME_SIZE,
    icon: Optional[pygame.Surface] = None,
) -> Path:
    """Write a rotated sprite sheet for one icon and return its path.

    ``icon`` overrides reading ``input_file``; the game's asset bootstrap passes a
    painted placeholder this way.
    """
    output_file = Path(output_file)
    os.makedirs(output_file.parent, exist_ok=True)

    if icon is None:
        icon = load_icon(Path(input_file))
    sheet = build_sprite_sheet(icon, num_frames, size)
    pygame.image.save(sheet, str(output_file))

    logger.info("Generated sprite sheet: %s", output_file)
    return output_file


def generate_all(
    source_dir: Path = DEFAULT_SOURCE_DIR,
    output_dir: Path = DEFAULT_OUTPUT_DIR,
    languages: Sequence[str] = LANGUAGES,
    num_frames: int = SHEET_FRAMES,
    size: int = FRAME_SIZE,
    placeholders: bool = False,
    skip_existing: bool = False,
) -> List[Path]:
    """Generate one sheet per language.

    Missing sources raise ``FileNotFoundError`` unless ``placeholders`` is set, in
    which case a painted badge stands in for the icon. With ``skip_existing`` a
    sheet already on disk at the expected size is left alone.
    """
    written: List[Path] = []
    for language in languages:
        src = source_path(source_dir, language)
        dst = sheet_path(output_dir, language)

        if skip_existing and sheet_is_current(dst, num_frames, size):
            logger.debug("Sheet for %s is up to date, skipping", language)
            continue

        icon: Optional[pygame.Surface] = None
        if not src.exists():
            if not placeholders:
                raise FileNotFoundError(f"No source icon for '{language}' at {src}")
            logger.info("No source icon for %s, painting a placeholder", language)
            icon = paint_placeholder_icon(language, size)

        written.append(generate_sprite_sheet(src, dst, num_frames, size, icon=icon))
    return written


def sheet_is_current(path: Path, num_frames: int = SHEET_FRAMES, size: int = FRAME_SIZE) -> bool:
    if not Path(path).exists():
        return False
    try:
        existing = pygame.image.load(str(path))
    except pygame.error:
        return False
    return existing.get_size() == (num_frames * size, size)


# --------------------------------------------------------------------------------------
# Entry point
# --------------------------------------------------------------------------------------
def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate rotated sprite sheets for the language icons.")
    parser.add_argument(
        "languages",
        nargs="*",
        metavar="LANGUAGE",
        help=f"Languages to generate, any of {', '.join(LANGUAGES)} (default: all)",
    )
    parser.add_argument(
        "--source",
        type=Path,
        default=DEFAULT_SOURCE_DIR,
        help=f"Directory holding <language>.png icons (default: {DEFAULT_SOURCE_DIR})",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=DEFAULT_OUTPUT_DIR,
        help=f"Directory for <language>-sheet.png files (default: {DEFAULT_OUTPUT_DIR})",
    )
    parser.add_argument("--frames", type=int, default=SHEET_FRAMES, help=f"Frames per sheet (default: {SHEET_FRAMES})")
    parser.add_argument("--size", type=int, default=FRAME_SIZE, help=f"Frame width and height (default: {FRAME_SIZE})")
    parser.add_argument(
        "--placeholders",
        action="store_true",
        help="Paint a badge for any language without a source icon",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)
    unknown = [name for name in args.languages if name not in LANGUAGES]
    if unknown:
        parser.error(f"unknown language(s): {', '.join(unknown)}")
    return args


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    pygame.init()
    try:
        generate_all(
            source_dir=args.source,
            output_dir=args.output,
            languages=args.languages or LANGUAGES,
            num_frames=args.frames,
            size=args.size,
            placeholders=args.placeholders,
        )
    except (FileNotFoundError, ValueError) as exc:
        logger.error("%s", exc)
        return 1
    finally:
        pygame.quit()
    return 0


if __name__ == "__main__":
    sys.exit(main())
