"""
Core runtime module.

Exports:
- Game, GameConfig: Main loop and configuration
- Scene, SceneManager: Scene management
- EventBus, Event, EngineEvent, DialogueEvent: Event system
"""

from magicwords.core.events import EventBus, Event, EngineEvent, DialogueEvent
from magicwords.core.scene import Scene, SceneManager
from magicwords.core.game import Game, GameConfig

__all__ = [
    # Game
    "Game",
    "GameConfig",
    # Scene
    "Scene",
    "SceneManager",
    # Events
    "EventBus",
    "Event",
    "EngineEvent",
    "DialogueEvent",
]
