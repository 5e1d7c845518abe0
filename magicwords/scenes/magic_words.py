"""
Magic Words scene - the dialogue stage inside the game window.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

import pygame

from magicwords.core.scene import Scene
from magicwords.dialogue.config import DialogueConfig, Viewport
from magicwords.dialogue.engine import DialogueEngine
from magicwords.resources.loader import MagicWordsSource

if TYPE_CHECKING:
    from magicwords.core.game import Game


class MagicWordsScene(Scene):
    """
    Shows the scripted conversation.

    Entering the scene starts a fresh load; leaving it (Escape pops the
    scene) stops the engine and drops everything drawn.
    """

    def __init__(
        self,
        game: Game,
        engine: Optional[DialogueEngine] = None,
        config: Optional[DialogueConfig] = None,
    ):
        super().__init__(game)
        config = config or DialogueConfig()
        self.engine = engine or DialogueEngine(
            source=MagicWordsSource(config.data_url, timeout=config.request_timeout),
            text_metrics=game.renderer,
            viewport=Viewport(game.width, game.height),
            events=game.event_bus,
            config=config,
        )

    def on_enter(self) -> None:
        super().on_enter()
        self.engine.relayout(self.game.width, self.game.height)
        self.game.spawn(self.engine.start())

    def on_exit(self) -> None:
        super().on_exit()
        self.engine.stop()

    def on_resize(self, width: int, height: int) -> None:
        self.engine.relayout(width, height)

    def update(self, dt: float) -> None:
        self.engine.tick(dt)

    def render(self, alpha: float) -> None:
        self.game.renderer.draw_primitives(self.engine.draw_list)

    def handle_event(self, event: pygame.event.Event) -> bool:
        if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
            self.game.scene_manager.pop()
            return True
        return False
