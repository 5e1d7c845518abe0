"""
Dialogue stage: timed reveal of speech bubbles with inline emoji.

Quick Start:
    from magicwords.dialogue import AvatarRegistry, DialogueTimeline

    registry = AvatarRegistry.build(avatars)
    timeline.start(lines, registry, emojis)
    timeline.tick(dt)

Architecture:
    - AvatarRegistry: speaker name -> avatar, with fallback speakers
    - TokenLayoutEngine: text/emoji tokens wrapped into rows
    - BubblePositioner: layout -> absolute draw primitives
    - OverflowController: when to clear the stack
    - DialogueTimeline: reveal cadence state machine

The DialogueEngine (loader + timeline) lives in magicwords.dialogue.engine.
"""

from magicwords.dialogue.models import (
    Avatar,
    DialogueLine,
    Emoji,
    LineLayout,
    PositionedToken,
    RenderState,
    Side,
    Token,
)
from magicwords.dialogue.config import BubbleMetrics, DialogueConfig, Viewport
from magicwords.dialogue.avatars import AvatarRegistry, UnknownSpeaker, augment_avatars
from magicwords.dialogue.layout import TextMetrics, TokenLayoutEngine
from magicwords.dialogue.positioner import BubblePlan, BubblePositioner
from magicwords.dialogue.overflow import OverflowController
from magicwords.dialogue.timeline import DialogueTimeline, TimelineState

__all__ = [
    # Models
    "Avatar",
    "DialogueLine",
    "Emoji",
    "LineLayout",
    "PositionedToken",
    "RenderState",
    "Side",
    "Token",

    # Config
    "BubbleMetrics",
    "DialogueConfig",
    "Viewport",

    # Components
    "AvatarRegistry",
    "UnknownSpeaker",
    "augment_avatars",
    "TextMetrics",
    "TokenLayoutEngine",
    "BubblePlan",
    "BubblePositioner",
    "OverflowController",
    "DialogueTimeline",
    "TimelineState",
]
