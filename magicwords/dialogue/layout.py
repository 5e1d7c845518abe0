"""
Token layout - splits a line into text/emoji tokens and wraps them into rows.

Text like "Hello {smile} there" becomes three tokens:
"Hello ", "{smile}", " there". Tokens are placed left to right and
move to a new row only as a whole; a text run wider than the row is
still one token (the renderer wraps it internally).
"""

from __future__ import annotations

import logging
import re
from typing import Mapping, Optional, Protocol, Tuple

from magicwords.dialogue.models import LineLayout, PositionedToken, Token
from magicwords.ui.renderer import FontConfig

logger = logging.getLogger(__name__)


class TextMetrics(Protocol):
    """Anything that can measure a text run (UIRenderer does)."""

    def measure_text(
        self,
        text: str,
        font_config: Optional[FontConfig] = None,
        max_width: Optional[float] = None,
    ) -> Tuple[float, float]:
        ...


class TokenLayoutEngine:
    """
    Lays out mixed text/emoji lines.

    Layout is a pure function of its inputs and the font metrics, so
    the same line always lands on the same geometry.
    """

    SPLIT_PATTERN = re.compile(r'(\{[^}]+\})')
    EMOJI_PATTERN = re.compile(r'^\{[^}]+\}$')

    def __init__(self, metrics: TextMetrics, emoji_size: float = 48):
        self.metrics = metrics
        self.emoji_size = emoji_size

    def tokenize(self, text: str) -> list[str]:
        """Split text into plain runs and {name} placeholders."""
        return [part for part in self.SPLIT_PATTERN.split(text) if part]

    def measure(
        self,
        content: str,
        max_width: float,
        font: Optional[FontConfig] = None,
    ) -> Token:
        """Measure one token. Text widths are capped at max_width."""
        if self.EMOJI_PATTERN.match(content):
            return Token(content, True, self.emoji_size, self.emoji_size)

        width, height = self.metrics.measure_text(content, font, max_width)
        return Token(content, False, min(width, max_width), height)

    def layout(
        self,
        text: str,
        emojis: Mapping[str, object],
        max_width: float,
        line_height: float,
        font: Optional[FontConfig] = None,
    ) -> LineLayout:
        """
        Greedy-wrap the tokens of text into rows no wider than max_width.

        Args:
            text: Line text with optional {name} placeholders
            emojis: Known emoji names; unknown placeholders still get a slot
            max_width: Row width budget
            line_height: Row advance
            font: Font used to measure text runs
        """
        placed: list[PositionedToken] = []
        cursor_x = 0.0
        cursor_y = 0.0
        max_line_width = 0.0

        for content in self.tokenize(text):
            token = self.measure(content, max_width, font)

            if token.is_emoji and token.emoji_name not in emojis:
                logger.debug(f"No emoji named '{token.emoji_name}', reserving an empty slot")

            if cursor_x + token.width > max_width:
                cursor_x = 0.0
                cursor_y += line_height

            placed.append(PositionedToken(token, cursor_x, cursor_y))
            cursor_x += token.width
            max_line_width = max(max_line_width, cursor_x)

        return LineLayout(
            tokens=tuple(placed),
            total_width=max_line_width,
            total_height=cursor_y + line_height,
        )
