"""
UI Renderer for drawing primitives and text.

Paints draw primitives onto a pygame surface and measures text for
the layout engine, so measurement and drawing always agree on fonts.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, Optional, Tuple

import pygame

if TYPE_CHECKING:
    from magicwords.ui.primitives import DrawPrimitive


@dataclass(frozen=True)
class FontConfig:
    """Font configuration."""
    name: Optional[str] = None  # None = pygame default
    size: int = 16
    bold: bool = False
    italic: bool = False


def _alpha_byte(alpha: float) -> int:
    return max(0, min(255, round(alpha * 255)))


class UIRenderer:
    """
    Renderer for the dialogue stage.

    Usage:
        renderer = UIRenderer(screen_surface)
        renderer.draw_rounded_rect(10, 10, 100, 50, (0, 0, 0), alpha=0.6)
        renderer.draw_text("Hello", 20, 20, color=(255, 255, 255))
        renderer.draw_primitives(draw_list)
    """

    def __init__(self, surface: pygame.Surface):
        self.surface = surface
        self._fonts: dict[tuple, pygame.font.Font] = {}
        self._scaled: dict[tuple, pygame.Surface] = {}
        self._default_font = FontConfig()

    def set_surface(self, surface: pygame.Surface) -> None:
        """Change the target surface. Scaled sprites are dropped (sizes follow the window)."""
        self.surface = surface
        self._scaled.clear()

    def get_font(self, config: Optional[FontConfig] = None) -> pygame.font.Font:
        """Get or create a font from config."""
        if config is None:
            config = self._default_font

        key = (config.name, config.size, config.bold, config.italic)

        if key not in self._fonts:
            if config.name:
                font = pygame.font.Font(config.name, config.size)
            else:
                font = pygame.font.SysFont(None, config.size)
            font.set_bold(config.bold)
            font.set_italic(config.italic)
            self._fonts[key] = font

        return self._fonts[key]

    # Primitives

    def draw_primitives(self, primitives: Iterable[DrawPrimitive]) -> None:
        """Paint primitives in order."""
        from magicwords.ui.primitives import PlaceSprite, FillRoundedRect, DrawText

        for primitive in primitives:
            if isinstance(primitive, PlaceSprite):
                self.draw_surface(
                    primitive.image,
                    primitive.x, primitive.y,
                    primitive.width, primitive.height,
                )
            elif isinstance(primitive, FillRoundedRect):
                self.draw_rounded_rect(
                    primitive.x, primitive.y,
                    primitive.width, primitive.height,
                    primitive.color,
                    radius=int(primitive.radius),
                    alpha=primitive.alpha,
                )
                self.draw_rounded_rect_outline(
                    primitive.x, primitive.y,
                    primitive.width, primitive.height,
                    primitive.border_color,
                    thickness=max(1, round(primitive.border_width)),
                    radius=int(primitive.radius),
                    alpha=primitive.border_alpha,
                )
            elif isinstance(primitive, DrawText):
                self.draw_text(
                    primitive.content,
                    primitive.x, primitive.y,
                    color=primitive.color,
                    font_config=primitive.font,
                    max_width=primitive.wrap_width,
                )

    def draw_rounded_rect(
        self,
        x: float,
        y: float,
        width: float,
        height: float,
        color: Tuple[int, ...],
        radius: int = 4,
        alpha: float = 1.0,
    ) -> None:
        """Draw a filled rounded rectangle."""
        if alpha < 1.0:
            temp = pygame.Surface((int(width), int(height)), pygame.SRCALPHA)
            pygame.draw.rect(
                temp, (*color[:3], _alpha_byte(alpha)), temp.get_rect(),
                border_radius=radius
            )
            self.surface.blit(temp, (int(x), int(y)))
        else:
            rect = pygame.Rect(int(x), int(y), int(width), int(height))
            pygame.draw.rect(self.surface, color[:3], rect, border_radius=radius)

    def draw_rounded_rect_outline(
        self,
        x: float,
        y: float,
        width: float,
        height: float,
        color: Tuple[int, ...],
        thickness: int = 1,
        radius: int = 4,
        alpha: float = 1.0,
    ) -> None:
        """Draw a rounded rectangle outline."""
        if alpha < 1.0:
            temp = pygame.Surface((int(width), int(height)), pygame.SRCALPHA)
            pygame.draw.rect(
                temp, (*color[:3], _alpha_byte(alpha)), temp.get_rect(),
                thickness, border_radius=radius
            )
            self.surface.blit(temp, (int(x), int(y)))
        else:
            rect = pygame.Rect(int(x), int(y), int(width), int(height))
            pygame.draw.rect(self.surface, color[:3], rect, thickness, border_radius=radius)

    def draw_text(
        self,
        text: str,
        x: float,
        y: float,
        color: Tuple[int, ...] = (255, 255, 255),
        font_config: Optional[FontConfig] = None,
        max_width: Optional[float] = None,
    ) -> pygame.Rect:
        """
        Draw text.

        Args:
            text: Text to render
            x, y: Top-left position
            color: Text color (RGB or RGBA)
            font_config: Font settings
            max_width: Maximum width for text wrapping

        Returns:
            Bounding rect of rendered text
        """
        font = self.get_font(font_config)
        lines = self._wrap_text(text, font, max_width) if max_width and text else [text]

        total_rect = pygame.Rect(int(x), int(y), 0, 0)
        line_height = font.get_height()

        for i, line in enumerate(lines):
            if not line:
                continue

            text_surface = font.render(line, True, color[:3])
            if len(color) == 4 and color[3] < 255:
                text_surface.set_alpha(color[3])

            text_rect = text_surface.get_rect()
            text_rect.left = int(x)
            text_rect.top = int(y) + i * line_height

            self.surface.blit(text_surface, text_rect)
            total_rect = total_rect.union(text_rect)

        return total_rect

    def draw_surface(
        self,
        source: pygame.Surface,
        x: float,
        y: float,
        width: Optional[float] = None,
        height: Optional[float] = None,
    ) -> None:
        """Draw a pygame surface, scaled when a size is given."""
        if width and height:
            source = self._get_scaled(source, int(width), int(height))
        self.surface.blit(source, (int(x), int(y)))

    def _get_scaled(self, source: pygame.Surface, width: int, height: int) -> pygame.Surface:
        # transform.scale accepts any pixel depth, paletted images included
        key = (source, width, height)
        if key not in self._scaled:
            self._scaled[key] = pygame.transform.scale(source, (width, height))
        return self._scaled[key]

    # Measurement

    def measure_text(
        self,
        text: str,
        font_config: Optional[FontConfig] = None,
        max_width: Optional[float] = None,
    ) -> Tuple[float, float]:
        """
        Measure text dimensions as draw_text would lay them out.

        With max_width, the text is wrapped first; the width is that of
        the widest wrapped line and the height grows with line count.
        """
        font = self.get_font(font_config)

        if not max_width or not text:
            return font.size(text)

        lines = self._wrap_text(text, font, max_width)
        width = max(font.size(line)[0] for line in lines)
        return width, font.get_height() * len(lines)

    def get_line_height(self, font_config: Optional[FontConfig] = None) -> int:
        """Get font line height."""
        return self.get_font(font_config).get_height()

    def _wrap_text(
        self,
        text: str,
        font: pygame.font.Font,
        max_width: float,
    ) -> list[str]:
        """Wrap text on spaces to fit within max_width."""
        words = text.split(' ')
        lines = []
        current_line = ""

        for word in words:
            test_line = current_line + (" " if current_line else "") + word

            if font.size(test_line)[0] <= max_width:
                current_line = test_line
            else:
                if current_line:
                    lines.append(current_line)
                current_line = word

        if current_line:
            lines.append(current_line)

        return lines if lines else [""]
