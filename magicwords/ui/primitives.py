"""
Draw primitives and the retained draw list.

The dialogue engine never touches pygame directly. It emits plain
primitive records into a DrawList, and the UIRenderer paints whatever
the list holds every frame.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Iterator, Optional, Union

from magicwords.ui.renderer import FontConfig
from magicwords.ui.theme import Color


@dataclass(frozen=True)
class PlaceSprite:
    """Blit an image scaled to (width, height) at (x, y)."""
    image: Any
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class FillRoundedRect:
    """Filled, bordered rounded rectangle with separate fill/border alpha."""
    x: float
    y: float
    width: float
    height: float
    radius: float
    color: Color
    alpha: float
    border_color: Color
    border_alpha: float
    border_width: float


@dataclass(frozen=True)
class DrawText:
    """A run of text. wrap_width wraps long runs onto extra lines."""
    content: str
    x: float
    y: float
    font: FontConfig
    color: Color = (255, 255, 255)
    wrap_width: Optional[float] = None


DrawPrimitive = Union[PlaceSprite, FillRoundedRect, DrawText]


class DrawList:
    """
    Ordered, retained list of draw primitives.

    This is the rendering surface the dialogue timeline writes to:
    primitives are appended in reveal order and only ever removed all
    at once.
    """

    def __init__(self):
        self._primitives: list[DrawPrimitive] = []

    def __len__(self) -> int:
        return len(self._primitives)

    def __iter__(self) -> Iterator[DrawPrimitive]:
        return iter(self._primitives)

    @property
    def primitives(self) -> tuple[DrawPrimitive, ...]:
        return tuple(self._primitives)

    def extend(self, primitives: Iterable[DrawPrimitive]) -> None:
        self._primitives.extend(primitives)

    def remove_all(self) -> None:
        self._primitives.clear()

    def texts(self) -> list[str]:
        """Contents of every text primitive, in draw order."""
        return [p.content for p in self._primitives if isinstance(p, DrawText)]
