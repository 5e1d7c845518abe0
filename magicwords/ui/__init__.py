"""
UI layer: draw primitives, the retained draw list, and the pygame renderer.

Architecture:
    - DrawList: ordered primitives the dialogue engine writes to
    - UIRenderer: paints primitives and measures text
    - BubbleTheme: bubble colors and fonts
"""

from magicwords.ui.renderer import UIRenderer, FontConfig
from magicwords.ui.theme import BubbleTheme, Color, DEFAULT_BUBBLE_THEME
from magicwords.ui.primitives import (
    DrawList,
    DrawPrimitive,
    DrawText,
    FillRoundedRect,
    PlaceSprite,
)

__all__ = [
    # Renderer
    "UIRenderer",
    "FontConfig",

    # Theme
    "BubbleTheme",
    "Color",
    "DEFAULT_BUBBLE_THEME",

    # Primitives
    "DrawList",
    "DrawPrimitive",
    "DrawText",
    "FillRoundedRect",
    "PlaceSprite",
]
