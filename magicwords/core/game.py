"""
Core Game class with fixed timestep game loop.

The Game class is the runtime shell around the dialogue stage. It handles:
- Window creation (pygame software surface)
- Fixed timestep update loop
- Variable render loop
- Scene management delegation
- Pumping an asyncio loop so asset loads resolve on the game thread
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, Coroutine

import pygame

from magicwords.core.scene import SceneManager
from magicwords.core.events import EventBus, EngineEvent
from magicwords.ui.renderer import UIRenderer, FontConfig

logger = logging.getLogger(__name__)


class GameConfig:
    """Configuration for the runtime shell."""

    def __init__(
        self,
        title: str = "Magic Words",
        width: int = 1024,
        height: int = 768,
        target_fps: int = 60,
        fixed_timestep: float = 1 / 60,
        max_frame_skip: int = 5,
        resizable: bool = True,
        background: tuple[int, int, int] = (255, 255, 255),
        show_fps: bool = True,
    ):
        self.title = title
        self.width = width
        self.height = height
        self.target_fps = target_fps
        self.fixed_timestep = fixed_timestep
        self.max_frame_skip = max_frame_skip
        self.resizable = resizable
        self.background = background
        self.show_fps = show_fps


class Game:
    """
    Main runtime class.

    Updates run on a fixed timestep, rendering runs once per frame.
    Coroutines handed to spawn() run on an asyncio loop that is
    advanced one step per frame, so their completions are applied on
    the same thread that ticks the scenes.

    Usage:
        game = Game(GameConfig(width=1280, height=720))
        game.scene_manager.push(MagicWordsScene(game, engine))
        game.run()
    """

    FPS_REFRESH_INTERVAL = 1.0
    FPS_FONT = FontConfig(size=14)

    def __init__(self, config: GameConfig | None = None):
        self.config = config or GameConfig()
        self._running = False

        pygame.init()

        flags = pygame.RESIZABLE if self.config.resizable else 0
        self.screen = pygame.display.set_mode(
            (self.config.width, self.config.height),
            flags
        )
        pygame.display.set_caption(self.config.title)

        self.event_bus = EventBus()
        self.renderer = UIRenderer(self.screen)
        self.scene_manager = SceneManager(self)

        self.loop = asyncio.new_event_loop()
        self._tasks: set[asyncio.Task] = set()

        # Timing
        self._clock = pygame.time.Clock()
        self._accumulator = 0.0
        self._current_time = time.perf_counter()
        self._frame_count = 0
        self._fps = 0.0
        self._fps_update_time = self._current_time
        self._fps_label = "FPS: 0"

    @property
    def width(self) -> int:
        return self.screen.get_width()

    @property
    def height(self) -> int:
        return self.screen.get_height()

    @property
    def fps(self) -> float:
        return self._fps

    def spawn(self, coro: Coroutine[Any, Any, Any]) -> asyncio.Task:
        """Schedule a coroutine on the game's asyncio loop."""
        task = self.loop.create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def run(self) -> None:
        """Run the main loop until quit() is called or the window closes."""
        self._running = True
        self._current_time = time.perf_counter()
        self.event_bus.publish(EngineEvent.GAME_START)

        while self._running:
            new_time = time.perf_counter()
            frame_time = new_time - self._current_time
            self._current_time = new_time

            # Prevent spiral of death
            if frame_time > 0.25:
                frame_time = 0.25

            self._accumulator += frame_time

            self._process_events()
            self._pump_async()

            updates = 0
            while self._accumulator >= self.config.fixed_timestep:
                self.scene_manager.update(self.config.fixed_timestep)
                self._accumulator -= self.config.fixed_timestep
                updates += 1

                if updates >= self.config.max_frame_skip:
                    self._accumulator = 0
                    break

            alpha = self._accumulator / self.config.fixed_timestep
            self._render(alpha)
            self._update_fps()

            self._clock.tick(self.config.target_fps)

        self._shutdown()

    def quit(self) -> None:
        """Request shutdown."""
        self._running = False

    def _pump_async(self) -> None:
        """Run every ready asyncio callback once, without blocking."""
        self.loop.call_soon(self.loop.stop)
        self.loop.run_forever()

    def _process_events(self) -> None:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.quit()
            elif event.type == pygame.VIDEORESIZE:
                self._on_resize(event.w, event.h)
            else:
                self.scene_manager.handle_event(event)

        if self.scene_manager.is_empty:
            self.quit()

    def _render(self, alpha: float) -> None:
        self.screen.fill(self.config.background)
        self.scene_manager.render(alpha)

        if self.config.show_fps:
            self.renderer.draw_text(
                self._fps_label, 5, 3,
                color=(0, 0, 0),
                font_config=self.FPS_FONT,
            )

        pygame.display.flip()

    def _update_fps(self) -> None:
        """Refresh the FPS counter once per interval."""
        self._frame_count += 1
        current = time.perf_counter()
        elapsed = current - self._fps_update_time

        if elapsed >= self.FPS_REFRESH_INTERVAL:
            self._fps = self._frame_count / elapsed
            self._frame_count = 0
            self._fps_update_time = current
            self._fps_label = f"FPS: {self._fps:.0f}"

    def _on_resize(self, width: int, height: int) -> None:
        # pygame 2 resizes the display surface in place
        self.screen = pygame.display.get_surface() or self.screen
        self.renderer.set_surface(self.screen)
        self.scene_manager.on_resize(width, height)
        self.event_bus.publish(EngineEvent.WINDOW_RESIZED, width=width, height=height)

    def _shutdown(self) -> None:
        self.scene_manager.clear()
        self.scene_manager.update(0.0)

        for task in list(self._tasks):
            task.cancel()
        if self._tasks:
            self.loop.run_until_complete(
                asyncio.gather(*self._tasks, return_exceptions=True)
            )
        self.loop.close()

        self.event_bus.publish(EngineEvent.GAME_QUIT)
        pygame.quit()
        logger.info("Shut down cleanly.")
