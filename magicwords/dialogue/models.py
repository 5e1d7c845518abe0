"""
Dialogue data model - lines, speakers, tokens, layouts and render state.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Optional


class Side(Enum):
    """Which edge of the viewport an avatar sits on."""
    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class DialogueLine:
    """One scripted line. Order in the script is reveal order."""
    speaker_name: str
    text: str


@dataclass(frozen=True)
class Emoji:
    """An inline glyph, referenced in text as {name}."""
    name: str
    image: Optional[Any] = None  # None when the image failed to load


@dataclass(frozen=True)
class Avatar:
    """A speaker portrait and the side its bubbles anchor to."""
    name: str
    image: Optional[Any] = None  # None when the image failed to load
    side: Side = Side.LEFT

    @property
    def is_right(self) -> bool:
        return self.side is Side.RIGHT


@dataclass(frozen=True)
class Token:
    """An atomic layout unit: a text run or one emoji placeholder."""
    content: str
    is_emoji: bool
    width: float
    height: float

    @property
    def emoji_name(self) -> Optional[str]:
        """Placeholder name without braces, for emoji tokens."""
        return self.content[1:-1] if self.is_emoji else None


@dataclass(frozen=True)
class PositionedToken:
    """A token and its offset from the line origin."""
    token: Token
    x: float
    y: float


@dataclass(frozen=True)
class LineLayout:
    """Geometry of one laid-out line."""
    tokens: tuple[PositionedToken, ...]
    total_width: float
    total_height: float

    @property
    def row_count(self) -> int:
        return len({item.y for item in self.tokens}) or 1


@dataclass(frozen=True)
class RenderState:
    """
    Reveal progress of the timeline.

    Immutable: every transition returns a new state.

    Attributes:
        cumulative_height: Vertical space taken by bubbles currently drawn
        revealed_count: Number of lines consumed so far
        overflow_pending: Last bubble ran into the top margin
        elapsed_ms: Time since the last reveal
    """
    cumulative_height: float = 0.0
    revealed_count: int = 0
    overflow_pending: bool = False
    elapsed_ms: float = field(default=0.0, compare=False)

    def advanced(self, dt_ms: float) -> RenderState:
        return replace(self, elapsed_ms=self.elapsed_ms + dt_ms)

    def with_bubble(self, stack_height: float, overflow: bool) -> RenderState:
        """Account for a bubble that was just drawn."""
        return replace(
            self,
            cumulative_height=self.cumulative_height + stack_height,
            overflow_pending=overflow,
        )

    def next_line(self) -> RenderState:
        """Count one more line as revealed and restart the interval."""
        return replace(self, revealed_count=self.revealed_count + 1, elapsed_ms=0.0)

    def paged(self) -> RenderState:
        """State after the drawn bubbles were cleared."""
        return replace(self, cumulative_height=0.0, overflow_pending=False)
