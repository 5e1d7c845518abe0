"""
Dialogue engine - the public face of the dialogue stage.

Wires the loader, avatar registry and timeline together and guards the
asynchronous load: one load at a time, and a stop() issued while a load
is pending makes its late result be ignored.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from magicwords.core.events import EventBus, DialogueEvent
from magicwords.dialogue.avatars import AvatarRegistry
from magicwords.dialogue.config import DialogueConfig, Viewport
from magicwords.dialogue.layout import TextMetrics, TokenLayoutEngine
from magicwords.dialogue.overflow import OverflowController
from magicwords.dialogue.positioner import BubblePositioner
from magicwords.dialogue.timeline import DialogueTimeline, TimelineState
from magicwords.resources.loader import LoadError, MagicWordsSource
from magicwords.ui.primitives import DrawList

logger = logging.getLogger(__name__)


class DialogueEngine:
    """
    Loads a dialogue and reveals it over time.

    Usage:
        engine = DialogueEngine(source, renderer, Viewport(1024, 768))
        await engine.start()
        engine.tick(dt)              # every frame
        renderer.draw_primitives(engine.draw_list)
        engine.relayout(1280, 720)   # on resize
        engine.stop()                # on hide
    """

    def __init__(
        self,
        source: MagicWordsSource,
        text_metrics: TextMetrics,
        viewport: Viewport,
        events: Optional[EventBus] = None,
        config: Optional[DialogueConfig] = None,
    ):
        self.source = source
        self.config = config or DialogueConfig()
        self.events = events or EventBus()
        self.draw_list = DrawList()

        self.timeline = DialogueTimeline(
            layout_engine=TokenLayoutEngine(text_metrics, emoji_size=self.config.emoji_slot),
            positioner=BubblePositioner(text_metrics, self.config),
            overflow=OverflowController(self.config.overflow_threshold),
            surface=self.draw_list,
            viewport=viewport,
            events=self.events,
            config=self.config,
        )

        self._generation = 0
        self._loading = False
        self._pending: Optional[asyncio.Future] = None

    @property
    def state(self) -> TimelineState:
        return self.timeline.state

    @property
    def is_loading(self) -> bool:
        return self._loading

    async def start(self) -> bool:
        """
        Load the dialogue and begin revealing it.

        Returns:
            True if the timeline was started
        """
        if self._loading:
            logger.warning("Dialogue load already in progress, ignoring start()")
            return False

        self._generation += 1
        generation = self._generation
        self._loading = True

        try:
            if self._pending is not None and not self._pending.done():
                # A load abandoned by stop() is still running; let it drain first
                logger.info("Waiting for the stopped dialogue load to finish")
                await asyncio.wait({self._pending})
                if generation != self._generation:
                    return False

            self._pending = asyncio.ensure_future(self.source.load())
            loaded = await self._pending
        except LoadError as e:
            if generation == self._generation:
                logger.error(f"Failed to load dialogue: {e}")
                self.events.publish(DialogueEvent.LOAD_FAILED, error=str(e))
            return False
        finally:
            if generation == self._generation:
                self._loading = False

        if generation != self._generation:
            logger.info("Dialogue load finished after stop(), discarding result")
            return False

        registry = AvatarRegistry.build(
            loaded.avatars,
            fallback_names=self.config.fallback_speakers,
            synthesize_unknown=self.config.synthesize_unknown,
        )
        self.events.publish(
            DialogueEvent.DIALOGUE_LOADED,
            line_count=len(loaded.lines),
            speakers=registry.names,
        )
        self.timeline.start(loaded.lines, registry, loaded.emoji_table)
        return True

    def stop(self) -> None:
        """
        Hide: discard any pending load result and clear everything.

        A load still in flight keeps running; the next start() waits for
        it before fetching again.
        """
        self._generation += 1
        self._loading = False
        self.timeline.stop()

    def tick(self, dt: float) -> None:
        self.timeline.tick(dt)

    def relayout(self, width: float, height: float) -> None:
        self.timeline.relayout(Viewport(width, height))
