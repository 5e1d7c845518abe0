"""
Visual styling for speech bubbles.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple


# Type aliases
Color = Tuple[int, int, int] | Tuple[int, int, int, int]


@dataclass(frozen=True)
class BubbleTheme:
    """Colors, alphas and fonts used when drawing a bubble."""

    # Background
    fill_color: Color = (0, 0, 0)
    fill_alpha: float = 0.6

    # Border
    border_color: Color = (255, 255, 255)
    border_alpha: float = 0.8

    # Text
    text_color: Color = (255, 255, 255)
    name_color: Color = (255, 255, 255)

    # Font family (None = pygame default)
    font_family: Optional[str] = None


DEFAULT_BUBBLE_THEME = BubbleTheme()
