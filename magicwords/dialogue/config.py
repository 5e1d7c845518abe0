"""
Dialogue stage configuration and viewport-derived metrics.

All lengths in DialogueConfig are logical units at scale 1.0. The
scale follows the viewport width, so bubbles, fonts and avatars grow
and shrink with the window.
"""

from __future__ import annotations

from dataclasses import dataclass

from magicwords.ui.renderer import FontConfig
from magicwords.ui.theme import BubbleTheme, DEFAULT_BUBBLE_THEME


DEFAULT_DATA_URL = "https://private-624120-softgamesassignment.apiary-mock.com/v2/magicwords"


@dataclass(frozen=True)
class DialogueConfig:
    """Timing, sizing and data source settings for the dialogue stage."""

    # Timing
    interval_ms: float = 2000

    # Responsive scale
    base_width: float = 1024
    min_scale: float = 0.5

    # Bubble geometry
    margin: float = 20
    padding: float = 12
    avatar_size: float = 64
    bubble_radius: float = 12
    border_width: float = 2
    nudge: float = 70
    nudge_left: float = 1.0
    nudge_right: float = -0.1

    # Text
    font_size: float = 20
    line_height_factor: float = 2.2
    name_font_size: int = 11
    name_gap: float = 5

    # Emoji
    emoji_slot: float = 48
    emoji_sprite: float = 32
    emoji_offset: float = 8

    # Paging
    overflow_threshold: float = 100

    # Speakers
    fallback_speakers: tuple[str, ...] = ("Neighbour",)
    synthesize_unknown: bool = False

    # Data source
    data_url: str = DEFAULT_DATA_URL
    request_timeout: float = 10.0

    theme: BubbleTheme = DEFAULT_BUBBLE_THEME


@dataclass(frozen=True)
class Viewport:
    width: float
    height: float


@dataclass(frozen=True)
class BubbleMetrics:
    """Config lengths resolved against one viewport."""
    viewport: Viewport
    scale: float
    margin: float
    padding: float
    avatar_size: float
    max_text_width: float
    font: FontConfig
    line_height: float

    @classmethod
    def for_viewport(cls, viewport: Viewport, config: DialogueConfig) -> BubbleMetrics:
        scale = max(config.min_scale, viewport.width / config.base_width)
        margin = config.margin * scale
        font_size = round(config.font_size * scale)

        return cls(
            viewport=viewport,
            scale=scale,
            margin=margin,
            padding=config.padding * scale,
            avatar_size=config.avatar_size * scale,
            max_text_width=viewport.width - margin * 2,
            font=FontConfig(name=config.theme.font_family, size=font_size),
            line_height=round(font_size * config.line_height_factor),
        )
