"""
Language Jumper
===============
How to run: pip install pygame; python language_jumper.py
Controls: Space or Up to jump. R = Restart, F1 = Toggle debug overlay, ESC = Quit.
Rules: Catch the good languages for points and powerups, dodge the bad ones.
Every bad catch costs a life; the game is over when no lives are left.
Assets: missing images are generated on first launch (see make_language_sheets.py).
"""
from __future__ import annotations

import argparse
import logging
import random
import sys
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

import pygame

from make_language_sheets import FRAME_SIZE, LANGUAGES, SHEET_FRAMES, generate_all, sheet_path

logger = logging.getLogger(__name__)


# --------------------------------------------------------------------------------------
# Constants
# --------------------------------------------------------------------------------------
TITLE = "Language Jumper"
FRAME_DELAY = 2  # simulation ticks per animation frame

BAD_LANGUAGES: Tuple[str, ...] = ('javascript', 'python', 'lua', 'java')
GOOD_LANGUAGES: Tuple[str, ...] = ('typescript', 'cpp', 'rust', 'kotlin')

DEFAULT_ASSET_ROOT = Path("assets")
DEFAULT_ICON_SOURCE = Path("imagegen/source")
PLAYER_IMAGE = Path("player/player.png")
LANGUAGE_DIR = Path("languages")

COLOR_BG = (51, 51, 51)
COLOR_HUD_TEXT = (255, 255, 255)
COLOR_DEBUG = (120, 200, 240)
COLOR_GOOD = (90, 200, 120)
COLOR_BAD = (220, 80, 80)
COLOR_PLAYER_FALLBACK = (230, 220, 205)

HUD_FONT_SIZE = 20
GAME_OVER_FONT_SIZE = 40
DEBUG_FONT_SIZE = 18


@dataclass(frozen=True)
class GameConfig:
    """Static tuning values. Distances are pixels, speeds pixels per tick."""

    canvas_width: int = 400
    canvas_height: int = 400
    gravity: float = 0.8
    jump_force: float = -15.0
    ground_level: float = 390.0
    initial_lives: int = 3
    score_increment: int = 100
    player_size: int = 64
    language_size: int = 64
    spawn_interval: int = 120
    initial_spawns: int = 3
    offscreen_x: float = -50.0
    fps: int = 60

    def __post_init__(self) -> None:
        if self.canvas_width <= 0 or self.canvas_height <= 0:
            raise ValueError("Canvas dimensions must be positive")
        if self.player_size <= 0 or self.language_size <= 0:
            raise ValueError("Sprite sizes must be positive")
        if self.spawn_interval <= 0:
            raise ValueError("Spawn interval must be at least one tick")
        if self.initial_lives < 1:
            raise ValueError("The game needs at least one starting life")
        if self.score_increment < 0:
            raise ValueError("Score increment cannot be negative")
        if self.initial_spawns < 0:
            raise ValueError("Initial spawns cannot be negative")
        if self.jump_force >= 0:
            raise ValueError("Jump force must point up (negative)")
        if not 0 < self.ground_level <= self.canvas_height:
            raise ValueError("Ground level must lie inside the canvas")
        if self.fps <= 0:
            raise ValueError("FPS must be positive")


DEFAULT_CONFIG = GameConfig()


# --------------------------------------------------------------------------------------
# Animation helpers and asset generation
# --------------------------------------------------------------------------------------
class Animation:
    """Looping spin driven by simulation ticks, one frame every ``frame_delay`` ticks."""

    def __init__(self, frames: List[pygame.Surface], frame_delay: int = FRAME_DELAY) -> None:
        if frame_delay < 1:
            raise ValueError("Frame delay must be at least one tick")
        self.frames = frames
        self.frame_delay = frame_delay
        self.ticks = 0

    @property
    def index(self) -> int:
        if not self.frames:
            return 0
        return (self.ticks // self.frame_delay) % len(self.frames)

    def tick(self) -> None:
        self.ticks += 1

    @property
    def frame(self) -> pygame.Surface:
        return self.frames[self.index] if self.frames else pygame.Surface((1, 1), pygame.SRCALPHA)


def load_sheet(path: Path, frame_w: int = FRAME_SIZE, frame_h: int = FRAME_SIZE) -> List[pygame.Surface]:
    frames: List[pygame.Surface] = []
    try:
        sheet = pygame.image.load(str(path)).convert_alpha()
    except (pygame.error, FileNotFoundError) as exc:
        logger.warning("Could not load sheet %s: %s", path, exc)
        return frames
    sw, sh = sheet.get_size()
    for y in range(0, sh - frame_h + 1, frame_h):
        for x in range(0, sw - frame_w + 1, frame_w):
            frames.append(sheet.subsurface(pygame.Rect(x, y, frame_w, frame_h)).copy())
    return frames


def paint_player(size: int) -> pygame.Surface:
    """Placeholder hero: a hoodie-wearing coder holding a laptop."""
    HOODIE = (70, 110, 180, 255)
    HOODIE_DARK = (45, 75, 130, 255)
    SKIN = (240, 200, 160, 255)
    OUTL = (25, 25, 35, 255)
    LAPTOP = (200, 200, 210, 255)
    SCREEN_GLOW = (140, 220, 255, 255)

    surf = pygame.Surface((size, size), pygame.SRCALPHA)
    u = size / 16.0

    def r(x: float, y: float, w: float, h: float) -> pygame.Rect:
        return pygame.Rect(int(x * u), int(y * u), max(1, int(w * u)), max(1, int(h * u)))

    body = r(4, 7, 8, 7)
    pygame.draw.rect(surf, OUTL, body.inflate(2, 2), border_radius=int(2 * u))
    pygame.draw.rect(surf, HOODIE, body, border_radius=int(2 * u))
    head_center = (int(8 * u), int(4.5 * u))
    pygame.draw.circle(surf, OUTL, head_center, int(3.2 * u) + 1)
    pygame.draw.circle(surf, HOODIE_DARK, head_center, int(3.2 * u))
    pygame.draw.circle(surf, SKIN, (head_center[0], head_center[1] + int(0.5 * u)), int(2.2 * u))
    pygame.draw.circle(surf, OUTL, (int(7.2 * u), int(4.8 * u)), max(1, int(0.4 * u)))
    pygame.draw.circle(surf, OUTL, (int(8.8 * u), int(4.8 * u)), max(1, int(0.4 * u)))
    pygame.draw.rect(surf, OUTL, r(5, 14, 2, 2))
    pygame.draw.rect(surf, OUTL, r(9, 14, 2, 2))
    laptop = r(5, 10, 6, 3)
    pygame.draw.rect(surf, LAPTOP, laptop)
    pygame.draw.rect(surf, SCREEN_GLOW, laptop.inflate(-int(u), -int(u)))
    return surf


def ensure_assets(
    root: Path = DEFAULT_ASSET_ROOT,
    icon_source: Path = DEFAULT_ICON_SOURCE,
    config: GameConfig = DEFAULT_CONFIG,
) -> None:
    """Generate any missing player image or language sprite sheet under ``root``."""

    root = Path(root)
    player_path = root / PLAYER_IMAGE
    needs_player = True
    if player_path.exists():
        try:
            needs_player = pygame.image.load(str(player_path)).get_size() != (config.player_size, config.player_size)
        except pygame.error:
            needs_player = True
    if needs_player:
        player_path.parent.mkdir(parents=True, exist_ok=True)
        pygame.image.save(paint_player(config.player_size), str(player_path))
        logger.info("Generated player image: %s", player_path)

    generate_all(
        source_dir=icon_source,
        output_dir=root / LANGUAGE_DIR,
        languages=LANGUAGES,
        num_frames=SHEET_FRAMES,
        size=config.language_size,
        placeholders=True,
        skip_existing=True,
    )


def load_language_animations(root: Path = DEFAULT_ASSET_ROOT, size: int = FRAME_SIZE) -> Dict[str, List[pygame.Surface]]:
    """Slice every language sheet under ``root`` into frames.

    Frames are converted for fast blitting, so a 1x1 display mode is opened when no
    window exists yet.
    """
    if pygame.display.get_surface() is None:
        pygame.display.set_mode((1, 1))
    output_dir = Path(root) / LANGUAGE_DIR
    return {language: load_sheet(sheet_path(output_dir, language), size, size) for language in LANGUAGES}


def load_player_image(root: Path = DEFAULT_ASSET_ROOT, size: int = DEFAULT_CONFIG.player_size) -> Optional[pygame.Surface]:
    """Load the player image scaled to ``size``; opens a 1x1 display mode if needed."""
    if pygame.display.get_surface() is None:
        pygame.display.set_mode((1, 1))
    path = Path(root) / PLAYER_IMAGE
    try:
        image = pygame.image.load(str(path)).convert_alpha()
    except (pygame.error, FileNotFoundError) as exc:
        logger.warning("Could not load player image %s: %s", path, exc)
        return None
    if image.get_size() != (size, size):
        image = pygame.transform.smoothscale(image, (size, size))
    return image


# --------------------------------------------------------------------------------------
# Entities
# --------------------------------------------------------------------------------------
class Player:
    """The jumping hero. ``pos`` is the midbottom of the hitbox."""

    def __init__(self, config: GameConfig = DEFAULT_CONFIG) -> None:
        self.config = config
        self.pos = pygame.Vector2(config.canvas_width * 0.1, config.canvas_height / 2)
        self.vel = pygame.Vector2(0.0, 0.0)
        self.score = 0
        self.lives = config.initial_lives

    @property
    def rect(self) -> pygame.Rect:
        size = self.config.player_size
        rect = pygame.Rect(0, 0, size, size)
        rect.midbottom = (int(self.pos.x), int(self.pos.y))
        return rect

    @property
    def on_ground(self) -> bool:
        return self.pos.y >= self.config.ground_level

    def update(self, jump_pressed: bool = False) -> None:
        cfg = self.config
        self.vel.y += cfg.gravity
        self.pos += self.vel

        if self.pos.y >= cfg.ground_level:
            self.pos.y = cfg.ground_level
            self.vel.y = 0.0

        if jump_pressed and self.on_ground:
            self.vel.y = cfg.jump_force

    def add_score(self, amount: int) -> None:
        if amount < 0:
            raise ValueError("Score only goes up")
        self.score += amount

    def lose_life(self) -> int:
        self.lives = max(0, self.lives - 1)
        return self.lives


class LanguageSprite:
    """A spinning language icon scrolling right to left."""

    def __init__(
        self,
        language: str,
        is_good: bool,
        x: float,
        y: float,
        speed: float,
        size: int = DEFAULT_CONFIG.language_size,
    ) -> None:
        expected = GOOD_LANGUAGES if is_good else BAD_LANGUAGES
        if language not in expected:
            kind = "good" if is_good else "bad"
            raise ValueError(f"'{language}' is not a {kind} language")
        self.language = language
        self.is_good = is_good
        self.pos = pygame.Vector2(x, y)
        self.speed = speed
        self.size = size
        self.animation: Optional[Animation] = None

    @classmethod
    def spawn(cls, config: GameConfig, rng: random.Random) -> 'LanguageSprite':
        is_good = rng.random() > 0.5
        languages = GOOD_LANGUAGES if is_good else BAD_LANGUAGES
        language = rng.choice(languages)
        x = config.canvas_width + config.language_size
        y = rng.uniform(config.language_size, config.ground_level - config.language_size)
        speed = rng.uniform(-config.canvas_width * 0.01, -config.canvas_width * 0.005)
        return cls(language, is_good, x, y, speed, config.language_size)

    @property
    def rect(self) -> pygame.Rect:
        rect = pygame.Rect(0, 0, self.size, self.size)
        rect.center = (int(self.pos.x), int(self.pos.y))
        return rect

    def update(self) -> None:
        self.pos.x += self.speed

    def is_offscreen(self, limit_x: float) -> bool:
        return self.pos.x < limit_x


@dataclass(frozen=True)
class CollisionEvent:
    language: str
    is_good: bool
    score: int
    lives: int


@dataclass(frozen=True)
class GameSnapshot:
    score: int
    lives: int
    powerups: int
    game_over: bool
    ticks: int
    player_pos: Tuple[float, float]
    player_vel: Tuple[float, float]
    active_languages: int


# --------------------------------------------------------------------------------------
# Simulation
# --------------------------------------------------------------------------------------
class Game:
    """Per-tick simulation: player physics, spawning, scrolling and collisions."""

    def __init__(self, config: GameConfig = DEFAULT_CONFIG, rng: Optional[random.Random] = None) -> None:
        self.config = config
        self.rng = rng or random.Random()
        self.player = Player(config)
        self.languages: List[LanguageSprite] = []
        self.powerup_count = 0
        self.spawn_timer = 0
        self.ticks = 0
        self._game_over = False
        self._jump_requested = False

    @property
    def game_over(self) -> bool:
        return self._game_over

    def _end_game(self) -> None:
        if not self._game_over:
            self._game_over = True
            logger.info(
                "Game over after %d ticks: score %d, powerups %d",
                self.ticks,
                self.player.score,
                self.powerup_count,
            )

    def start(self) -> None:
        for _ in range(self.config.initial_spawns):
            self.spawn_language()
        logger.info("Game started with %d lives", self.player.lives)

    def spawn_language(self) -> LanguageSprite:
        lang = LanguageSprite.spawn(self.config, self.rng)
        self.languages.append(lang)
        logger.debug("Spawned %s (%s) at y=%.1f", lang.language, "good" if lang.is_good else "bad", lang.pos.y)
        return lang

    def jump(self) -> None:
        self._jump_requested = True

    # ----------------------------------------------------------------------------------
    def update(self) -> List[CollisionEvent]:
        if self._game_over:
            self._jump_requested = False
            return []

        self.ticks += 1
        self.player.update(self._jump_requested)
        self._jump_requested = False

        self.spawn_timer += 1
        if self.spawn_timer >= self.config.spawn_interval:
            self.spawn_language()
            self.spawn_timer = 0

        events: List[CollisionEvent] = []
        player_rect = self.player.rect
        for lang in list(self.languages):
            lang.update()
            if lang.is_offscreen(self.config.offscreen_x):
                self.languages.remove(lang)
                continue

            if lang.rect.colliderect(player_rect):
                self.languages.remove(lang)
                events.append(self._collide(lang))
                if self._game_over:
                    break
        return events

    def _collide(self, lang: LanguageSprite) -> CollisionEvent:
        player = self.player
        if lang.is_good:
            player.add_score(self.config.score_increment)
            self.powerup_count += 1
        else:
            if player.lose_life() <= 0:
                self._end_game()
        logger.debug(
            "Caught %s: score=%d lives=%d powerups=%d",
            lang.language,
            player.score,
            player.lives,
            self.powerup_count,
        )
        return CollisionEvent(lang.language, lang.is_good, player.score, player.lives)

    def snapshot(self) -> GameSnapshot:
        return GameSnapshot(
            score=self.player.score,
            lives=self.player.lives,
            powerups=self.powerup_count,
            game_over=self._game_over,
            ticks=self.ticks,
            player_pos=(self.player.pos.x, self.player.pos.y),
            player_vel=(self.player.vel.x, self.player.vel.y),
            active_languages=len(self.languages),
        )


# --------------------------------------------------------------------------------------
# HUD
# --------------------------------------------------------------------------------------
class HUD:
    """Renders score, lives, powerups and overlays."""

    def __init__(self, screen: pygame.Surface, config: GameConfig = DEFAULT_CONFIG) -> None:
        self.screen = screen
        self.config = config
        self.font = pygame.font.Font(None, HUD_FONT_SIZE)
        self.font_large = pygame.font.Font(None, GAME_OVER_FONT_SIZE)
        self.font_debug = pygame.font.Font(None, DEBUG_FONT_SIZE)

    def draw(self, snap: GameSnapshot) -> None:
        lines = [
            f"Score: {snap.score}",
            f"Lives: {snap.lives}",
            f"Powerups: {snap.powerups}",
        ]
        for i, line in enumerate(lines):
            text = self.font.render(line, True, COLOR_HUD_TEXT)
            self.screen.blit(text, text.get_rect(bottomleft=(20, 30 + i * 30)))

        if snap.game_over:
            self.draw_game_over()

    def draw_game_over(self) -> None:
        center = (self.config.canvas_width // 2, self.config.canvas_height // 2)
        title = self.font_large.render("Game Over!", True, COLOR_HUD_TEXT)
        self.screen.blit(title, title.get_rect(center=center))
        prompt = self.font_debug.render("Press R to play again", True, COLOR_HUD_TEXT)
        self.screen.blit(prompt, prompt.get_rect(center=(center[0], center[1] + 30)))

    def draw_debug(self, snap: GameSnapshot, fps: float) -> None:
        px, py = snap.player_pos
        vx, vy = snap.player_vel
        lines = [
            f"FPS: {fps:.2f}",
            f"Game over: {str(snap.game_over).lower()}",
            f"Player Position: ({px:.2f}, {py:.2f})",
            f"Player Velocity: ({vx:.2f}, {vy:.2f})",
        ]
        y = self.config.canvas_height - 10 - len(lines) * 14
        for line in lines:
            text = self.font_debug.render(line, True, COLOR_DEBUG)
            self.screen.blit(text, (10, y))
            y += 14


# --------------------------------------------------------------------------------------
# Host loop
# --------------------------------------------------------------------------------------
class App:
    """Window, input and the fixed-tick frame loop around a ``Game``."""

    JUMP_KEYS = (pygame.K_SPACE, pygame.K_UP)

    def __init__(
        self,
        config: GameConfig = DEFAULT_CONFIG,
        asset_root: Path = DEFAULT_ASSET_ROOT,
        icon_source: Path = DEFAULT_ICON_SOURCE,
        seed: Optional[int] = None,
        debug: bool = False,
    ) -> None:
        pygame.init()
        self.config = config
        self.seed = seed
        self.screen = pygame.display.set_mode((config.canvas_width, config.canvas_height))
        pygame.display.set_caption(TITLE)
        ensure_assets(asset_root, icon_source, config)
        self.language_frames = load_language_animations(asset_root, config.language_size)
        self.player_image = load_player_image(asset_root, config.player_size)
        self.clock = pygame.time.Clock()
        self.hud = HUD(self.screen, config)
        self.debug_overlay = debug
        self.running = True
        self.rng = random.Random(seed)
        self.game = self.new_game()

    def new_game(self) -> Game:
        game = Game(self.config, self.rng)
        game.start()
        return game

    def restart(self) -> None:
        logger.info("Restarting")
        self.game = self.new_game()

    def run(self, max_frames: Optional[int] = None) -> None:
        frames = 0
        while self.running:
            self.clock.tick(self.config.fps)
            self.handle_events()
            self.game.update()
            self.draw()
            frames += 1
            if max_frames is not None and frames >= max_frames:
                self.running = False
        pygame.quit()

    # ----------------------------------------------------------------------------------
    def handle_events(self) -> None:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.KEYDOWN:
                self.handle_key(event.key)

    def handle_key(self, key: int) -> None:
        if key == pygame.K_ESCAPE:
            self.running = False
        elif key in self.JUMP_KEYS:
            self.game.jump()
        elif key == pygame.K_r:
            self.restart()
        elif key == pygame.K_F1:
            self.debug_overlay = not self.debug_overlay

    # ----------------------------------------------------------------------------------
    def draw(self) -> None:
        self.screen.fill(COLOR_BG)
        self.draw_languages()
        self.draw_player()

        snap = self.game.snapshot()
        self.hud.draw(snap)
        if self.debug_overlay:
            self.hud.draw_debug(snap, self.clock.get_fps())

        pygame.display.flip()

    def draw_player(self) -> None:
        rect = self.game.player.rect
        if self.player_image is not None:
            self.screen.blit(self.player_image, rect)
        else:
            pygame.draw.rect(self.screen, COLOR_PLAYER_FALLBACK, rect, border_radius=8)

    def draw_languages(self) -> None:
        for lang in self.game.languages:
            if lang.animation is None:
                frames = self.language_frames.get(lang.language, [])
                lang.animation = Animation(frames, FRAME_DELAY)
            lang.animation.tick()
            if lang.animation.frames:
                self.screen.blit(lang.animation.frame, lang.rect)
            else:
                color = COLOR_GOOD if lang.is_good else COLOR_BAD
                pygame.draw.circle(self.screen, color, lang.rect.center, lang.size // 2)


# --------------------------------------------------------------------------------------
# Entry point
# --------------------------------------------------------------------------------------
def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Jump for the good languages, dodge the bad ones.")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for spawns")
    parser.add_argument("--fps", type=int, default=DEFAULT_CONFIG.fps, help=f"Frame rate (default: {DEFAULT_CONFIG.fps})")
    parser.add_argument(
        "--lives",
        type=int,
        default=DEFAULT_CONFIG.initial_lives,
        help=f"Starting lives (default: {DEFAULT_CONFIG.initial_lives})",
    )
    parser.add_argument(
        "--assets",
        type=Path,
        default=DEFAULT_ASSET_ROOT,
        help=f"Asset root directory (default: {DEFAULT_ASSET_ROOT})",
    )
    parser.add_argument(
        "--icons",
        type=Path,
        default=DEFAULT_ICON_SOURCE,
        help=f"Source icons for sheet generation (default: {DEFAULT_ICON_SOURCE})",
    )
    parser.add_argument("--debug", action="store_true", help="Show the debug overlay at start")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--max-frames", type=int, default=None, help=argparse.SUPPRESS)
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        config = replace(DEFAULT_CONFIG, fps=args.fps, initial_lives=args.lives)
    except ValueError as exc:
        logger.error("%s", exc)
        return 2

    app = App(config, asset_root=args.assets, icon_source=args.icons, seed=args.seed, debug=args.debug)
    app.run(max_frames=args.max_frames)
    return 0


if __name__ == "__main__":
    sys.exit(main())
