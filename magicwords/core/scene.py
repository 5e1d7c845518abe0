"""
Scene management.

A scene is one screen of the showcase (the dialogue stage, a title
card, ...). The SceneManager keeps a stack of them:
- Push: show a scene on top of the current one
- Pop: hide the top scene
- Switch: replace the top scene

Stack operations are deferred to the start of the next update so a
scene can pop itself from inside its own update or event handler.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

import pygame

from magicwords.core.events import EngineEvent

if TYPE_CHECKING:
    from magicwords.core.game import Game


class Scene(ABC):
    """
    Abstract base class for scenes.

    Lifecycle:
        1. __init__: scene is created
        2. on_enter: scene becomes the top of the stack (shown)
        3. update/render: called each frame while on the stack
        4. on_exit: scene is popped or covered (hidden)
        5. on_destroy: scene is permanently removed
    """

    def __init__(self, game: Game):
        self.game = game
        self._is_active = False

    @property
    def is_active(self) -> bool:
        """Whether this scene is currently the top scene."""
        return self._is_active

    def on_enter(self) -> None:
        self._is_active = True

    def on_exit(self) -> None:
        self._is_active = False

    def on_destroy(self) -> None:
        pass

    def on_resize(self, width: int, height: int) -> None:
        """Called when the window is resized."""
        pass

    @abstractmethod
    def update(self, dt: float) -> None:
        """
        Update scene logic.

        Args:
            dt: Delta time in seconds
        """

    @abstractmethod
    def render(self, alpha: float) -> None:
        """
        Render the scene.

        Args:
            alpha: Interpolation factor (0-1) between fixed updates
        """

    def handle_event(self, event: pygame.event.Event) -> bool:
        """
        Handle a pygame event.

        Returns:
            True if the event was consumed
        """
        return False


class SceneManager:
    """Stack of scenes; only the top scene is updated."""

    def __init__(self, game: Game):
        self.game = game
        self._stack: list[Scene] = []
        self._pending_operations: list[tuple[str, Any]] = []

    @property
    def current(self) -> Scene | None:
        return self._stack[-1] if self._stack else None

    @property
    def is_empty(self) -> bool:
        return not self._stack and not self._pending_operations

    def push(self, scene: Scene) -> None:
        self._pending_operations.append(("push", scene))

    def pop(self) -> None:
        self._pending_operations.append(("pop", None))

    def switch(self, scene: Scene) -> None:
        self._pending_operations.append(("switch", scene))

    def clear(self) -> None:
        self._pending_operations.append(("clear", None))

    def update(self, dt: float) -> None:
        """Apply pending stack operations, then update the top scene."""
        self._process_pending()

        if self.current:
            self.current.update(dt)

    def render(self, alpha: float) -> None:
        """Render the top scene; covered scenes are not drawn."""
        if self.current:
            self.current.render(alpha)

    def handle_event(self, event: pygame.event.Event) -> None:
        if self.current:
            self.current.handle_event(event)

    def on_resize(self, width: int, height: int) -> None:
        """Notify every scene on the stack of a window resize."""
        for scene in self._stack:
            scene.on_resize(width, height)

    def _process_pending(self) -> None:
        while self._pending_operations:
            op, arg = self._pending_operations.pop(0)

            if op == "push":
                self._do_push(arg)
            elif op == "pop":
                self._do_pop()
            elif op == "switch":
                self._do_switch(arg)
            elif op == "clear":
                self._do_clear()

    def _do_push(self, scene: Scene) -> None:
        if self._stack:
            self._stack[-1].on_exit()
        self._stack.append(scene)
        scene.on_enter()
        self.game.event_bus.publish(EngineEvent.SCENE_PUSHED, scene=scene)

    def _do_pop(self) -> None:
        if not self._stack:
            return

        scene = self._stack.pop()
        scene.on_exit()
        scene.on_destroy()
        self.game.event_bus.publish(EngineEvent.SCENE_POPPED, scene=scene)

        if self._stack:
            self._stack[-1].on_enter()

    def _do_switch(self, scene: Scene) -> None:
        if self._stack:
            old_scene = self._stack.pop()
            old_scene.on_exit()
            old_scene.on_destroy()

        self._stack.append(scene)
        scene.on_enter()

    def _do_clear(self) -> None:
        while self._stack:
            scene = self._stack.pop()
            scene.on_exit()
            scene.on_destroy()
