from __future__ import annotations

import random

import pytest

from language_jumper import BAD_LANGUAGES, GOOD_LANGUAGES, GameConfig, LanguageSprite
from make_language_sheets import LANGUAGES


def test_label_sets_are_disjoint_and_cover_every_sheet() -> None:
    assert not set(GOOD_LANGUAGES) & set(BAD_LANGUAGES)
    assert set(GOOD_LANGUAGES) | set(BAD_LANGUAGES) == set(LANGUAGES)


def test_spawned_icons_match_their_category(config: GameConfig) -> None:
    rng = random.Random(7)
    seen_good = seen_bad = 0
    for _ in range(500):
        lang = LanguageSprite.spawn(config, rng)
        if lang.is_good:
            seen_good += 1
            assert lang.language in GOOD_LANGUAGES
            assert lang.language not in BAD_LANGUAGES
        else:
            seen_bad += 1
            assert lang.language in BAD_LANGUAGES
            assert lang.language not in GOOD_LANGUAGES
    # Uniform 50/50 split, loose bounds.
    assert 175 < seen_good < 325
    assert seen_good + seen_bad == 500


def test_spawn_position_and_speed_bounds(config: GameConfig) -> None:
    rng = random.Random(99)
    for _ in range(200):
        lang = LanguageSprite.spawn(config, rng)
        assert lang.pos.x == config.canvas_width + config.language_size
        assert config.language_size <= lang.pos.y <= config.ground_level - config.language_size
        assert -config.canvas_width * 0.01 <= lang.speed <= -config.canvas_width * 0.005
        assert lang.rect.size == (config.language_size, config.language_size)
        assert lang.animation is None


def test_icon_scrolls_left_until_offscreen(config: GameConfig) -> None:
    lang = LanguageSprite('rust', True, x=0.0, y=200.0, speed=-4.0)
    lang.update()
    assert lang.pos.x == -4.0
    assert not lang.is_offscreen(config.offscreen_x)
    for _ in range(12):
        lang.update()
    assert lang.pos.x == -52.0
    assert lang.is_offscreen(config.offscreen_x)


@pytest.mark.parametrize(
    ("language", "is_good"),
    [("python", True), ("rust", False), ("cobol", True), ("cobol", False)],
)
def test_rejects_label_from_the_wrong_set(language: str, is_good: bool) -> None:
    with pytest.raises(ValueError):
        LanguageSprite(language, is_good, x=0.0, y=0.0, speed=-1.0)
