"""
Dialogue timeline - reveals scripted lines one interval at a time.

State machine:
    IDLE --start()--> ACTIVE --last line revealed--> FINISHED
    any  --stop()---> IDLE

Each reveal resolves the speaker, lays out the text, positions the
bubble on top of the stack and appends its primitives to the draw
list. When a bubble reaches the top margin the whole stack is cleared
right after it is drawn; already revealed lines are not shown again.
"""

from __future__ import annotations

import logging
from enum import Enum, auto
from typing import Any, Mapping, Optional, Sequence

from magicwords.core.events import EventBus, DialogueEvent
from magicwords.dialogue.avatars import AvatarRegistry, UnknownSpeaker
from magicwords.dialogue.config import BubbleMetrics, DialogueConfig, Viewport
from magicwords.dialogue.layout import TokenLayoutEngine
from magicwords.dialogue.models import DialogueLine, RenderState
from magicwords.dialogue.overflow import OverflowController
from magicwords.dialogue.positioner import BubblePositioner
from magicwords.ui.primitives import DrawList

logger = logging.getLogger(__name__)


class TimelineState(Enum):
    IDLE = auto()
    ACTIVE = auto()
    FINISHED = auto()


class DialogueTimeline:
    """
    Drives the reveal cadence from periodic ticks.

    Usage:
        timeline = DialogueTimeline(layout_engine, positioner, overflow, draw_list, viewport)
        timeline.start(lines, registry, emojis)
        timeline.tick(dt)          # every frame
        timeline.relayout(Viewport(1280, 720))
        timeline.stop()
    """

    def __init__(
        self,
        layout_engine: TokenLayoutEngine,
        positioner: BubblePositioner,
        overflow: OverflowController,
        surface: DrawList,
        viewport: Viewport,
        events: Optional[EventBus] = None,
        config: Optional[DialogueConfig] = None,
    ):
        self.layout_engine = layout_engine
        self.positioner = positioner
        self.overflow = overflow
        self.surface = surface
        self.viewport = viewport
        self.events = events or EventBus()
        self.config = config or DialogueConfig()

        self._state = TimelineState.IDLE
        self._render = RenderState()
        self._lines: tuple[DialogueLine, ...] = ()
        self._registry = AvatarRegistry()
        self._emojis: dict[str, Any] = {}

    @property
    def state(self) -> TimelineState:
        return self._state

    @property
    def render_state(self) -> RenderState:
        return self._render

    @property
    def lines(self) -> tuple[DialogueLine, ...]:
        return self._lines

    @property
    def revealed_count(self) -> int:
        return self._render.revealed_count

    @property
    def cumulative_height(self) -> float:
        return self._render.cumulative_height

    @property
    def is_finished(self) -> bool:
        return self._state is TimelineState.FINISHED

    def start(
        self,
        lines: Sequence[DialogueLine],
        registry: AvatarRegistry,
        emojis: Mapping[str, Any],
    ) -> None:
        """Begin revealing lines from the first one."""
        self._lines = tuple(lines)
        self._registry = registry
        self._emojis = dict(emojis)

        self.surface.remove_all()
        self._render = RenderState()
        self._state = TimelineState.ACTIVE

        if not self._lines:
            self._finish()

    def stop(self) -> None:
        """Return to IDLE, dropping everything drawn and all progress."""
        was_idle = self._state is TimelineState.IDLE

        self.surface.remove_all()
        self._render = RenderState()
        self._lines = ()
        self._state = TimelineState.IDLE

        if not was_idle:
            self.events.publish(DialogueEvent.DIALOGUE_STOPPED)

    def tick(self, dt: float) -> None:
        """
        Advance time by dt seconds, revealing the next line when due.
        """
        if self._state is not TimelineState.ACTIVE:
            return

        render = self._render.advanced(dt * 1000)

        if (
            render.elapsed_ms >= self.config.interval_ms
            and render.revealed_count < len(self._lines)
        ):
            render = self._reveal(render.revealed_count, render).next_line()
            render = self._page_if_needed(render)

        self._render = render

        if render.revealed_count >= len(self._lines):
            self._finish()

    def relayout(self, viewport: Viewport) -> None:
        """
        Redraw every revealed line for a new viewport size.

        Replays the reveals, paging included, so the result matches a
        fresh run at the new size. revealed_count is unchanged.
        """
        self.viewport = viewport

        if self._state is TimelineState.IDLE:
            return

        self.surface.remove_all()
        render = RenderState(
            revealed_count=self._render.revealed_count,
            elapsed_ms=self._render.elapsed_ms,
        )

        for index in range(render.revealed_count):
            render = self._reveal(index, render, announce=False)
            render = self._page_if_needed(render, announce=False)

        self._render = render

    def _reveal(self, index: int, render: RenderState, announce: bool = True) -> RenderState:
        """Draw line `index` on top of the stack. Unrenderable lines are skipped."""
        line = self._lines[index]

        try:
            avatar = self._registry.resolve(line.speaker_name)
        except UnknownSpeaker as e:
            if announce:
                logger.warning(f"Skipping line {index}: {e}")
                self.events.publish(
                    DialogueEvent.SPEAKER_UNKNOWN,
                    index=index,
                    speaker=line.speaker_name,
                )
            return render

        try:
            metrics = BubbleMetrics.for_viewport(self.viewport, self.config)
            layout = self.layout_engine.layout(
                line.text,
                self._emojis,
                metrics.max_text_width,
                metrics.line_height,
                metrics.font,
            )
            plan = self.positioner.position(
                layout, avatar, render.cumulative_height, metrics, self._emojis
            )
        except Exception as e:
            # Log but don't stop the timeline
            logger.error(f"Failed to lay out line {index} ({line.speaker_name}): {e}")
            return render

        overflow = self.overflow.should_page(plan.top, render.cumulative_height)
        self.surface.extend(plan.primitives)

        if announce:
            self.events.publish(
                DialogueEvent.LINE_REVEALED,
                index=index,
                speaker=avatar.name,
                text=line.text,
            )

        return render.with_bubble(plan.stack_height, overflow)

    def _page_if_needed(self, render: RenderState, announce: bool = True) -> RenderState:
        if not render.overflow_pending:
            return render

        self.surface.remove_all()
        if announce:
            self.events.publish(
                DialogueEvent.PAGE_CLEARED,
                revealed_count=render.revealed_count,
            )
        return render.paged()

    def _finish(self) -> None:
        if self._state is TimelineState.FINISHED:
            return
        self._state = TimelineState.FINISHED
        self.events.publish(DialogueEvent.DIALOGUE_FINISHED, line_count=len(self._lines))
