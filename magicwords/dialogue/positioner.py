"""
Bubble positioning - turns a line layout into absolute draw primitives.

Bubbles stack upward from the bottom of the viewport: the newest
bubble is always computed against the bottom edge and then lifted by
the height of everything already drawn.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional

from magicwords.dialogue.config import BubbleMetrics, DialogueConfig
from magicwords.dialogue.layout import TextMetrics
from magicwords.dialogue.models import Avatar, LineLayout
from magicwords.ui.primitives import DrawPrimitive, DrawText, FillRoundedRect, PlaceSprite
from magicwords.ui.renderer import FontConfig


@dataclass(frozen=True)
class BubblePlan:
    """
    Draw primitives for one bubble plus the numbers the timeline needs.

    Attributes:
        primitives: Avatar, name label, background and tokens, in draw order
        top: Bubble top as if nothing else were drawn
        stack_height: Vertical space this bubble adds to the stack
    """
    primitives: tuple[DrawPrimitive, ...]
    top: float
    stack_height: float


class BubblePositioner:
    """Computes bubble geometry. Performs no drawing."""

    def __init__(self, text_metrics: TextMetrics, config: Optional[DialogueConfig] = None):
        self.text_metrics = text_metrics
        self.config = config or DialogueConfig()
        self._name_font = FontConfig(
            name=self.config.theme.font_family,
            size=self.config.name_font_size,
        )

    def bubble_x(self, layout: LineLayout, avatar: Avatar, metrics: BubbleMetrics) -> float:
        """Left edge of the bubble before the side nudge."""
        if avatar.is_right:
            return metrics.viewport.width - (
                layout.total_width + metrics.padding * 2 + metrics.avatar_size
            )
        return metrics.margin - metrics.padding

    def bubble_top(self, layout: LineLayout, metrics: BubbleMetrics) -> float:
        return (
            metrics.viewport.height
            - layout.total_height
            - metrics.padding * 2
            - metrics.margin
        )

    def nudge(self, avatar: Avatar, metrics: BubbleMetrics) -> float:
        """Horizontal shift that keeps the bubble clear of its avatar."""
        factor = self.config.nudge_right if avatar.is_right else self.config.nudge_left
        return self.config.nudge * metrics.scale * factor

    def position(
        self,
        layout: LineLayout,
        avatar: Avatar,
        cumulative_height: float,
        metrics: BubbleMetrics,
        emojis: Mapping[str, object],
    ) -> BubblePlan:
        """
        Place a laid-out line for avatar on top of the current stack.

        Args:
            layout: Geometry from TokenLayoutEngine.layout
            avatar: Speaker avatar (decides the side)
            cumulative_height: Height of bubbles already drawn
            metrics: Viewport-resolved sizes
            emojis: Emoji name -> image (None for images that failed to load)
        """
        config = self.config
        theme = config.theme

        x0 = self.bubble_x(layout, avatar, metrics)
        y0 = self.bubble_top(layout, metrics)
        top = y0 - cumulative_height
        adj_x = self.nudge(avatar, metrics)
        primitives: list[DrawPrimitive] = []

        # Avatar, flush to its side
        size = metrics.avatar_size
        avatar_x = metrics.viewport.width - size if avatar.is_right else x0
        if avatar.image is not None:
            primitives.append(PlaceSprite(avatar.image, avatar_x, top, size, size))

        name_width, _ = self.text_metrics.measure_text(avatar.name, self._name_font)
        primitives.append(DrawText(
            content=avatar.name,
            x=avatar_x + size / 2 - name_width / 2,
            y=top + size + config.name_gap,
            font=self._name_font,
            color=theme.name_color,
        ))

        # Background
        primitives.append(FillRoundedRect(
            x=x0 + adj_x,
            y=top,
            width=layout.total_width + metrics.padding * 2,
            height=layout.total_height + metrics.padding * 2,
            radius=config.bubble_radius * metrics.scale,
            color=theme.fill_color,
            alpha=theme.fill_alpha,
            border_color=theme.border_color,
            border_alpha=theme.border_alpha,
            border_width=config.border_width * metrics.scale,
        ))

        # Tokens
        origin_x = (x0 if avatar.is_right else 0) + metrics.margin + adj_x
        origin_y = top + metrics.padding

        for item in layout.tokens:
            draw_x = origin_x + item.x
            draw_y = origin_y + item.y

            if item.token.is_emoji:
                image = emojis.get(item.token.emoji_name)
                if image is None:
                    continue
                sprite = config.emoji_sprite
                primitives.append(PlaceSprite(
                    image,
                    draw_x + config.emoji_offset,
                    draw_y - (sprite - metrics.line_height) / 2 - config.emoji_offset,
                    sprite,
                    sprite,
                ))
            else:
                primitives.append(DrawText(
                    content=item.token.content,
                    x=draw_x,
                    y=draw_y,
                    font=metrics.font,
                    color=theme.text_color,
                    wrap_width=metrics.max_text_width,
                ))

        return BubblePlan(
            primitives=tuple(primitives),
            top=y0,
            stack_height=layout.total_height + metrics.padding * 2 + metrics.margin,
        )
