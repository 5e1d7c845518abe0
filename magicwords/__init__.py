"""
Magic Words

A dialogue stage for pygame: scripted lines revealed one by one as
speech bubbles with inline emoji, anchored to speaker avatars.

Quick Start:
    from magicwords.core import Game, GameConfig
    from magicwords.scenes import MagicWordsScene

    game = Game(GameConfig(title="Magic Words"))
    game.scene_manager.push(MagicWordsScene(game))
    game.run()
"""

__version__ = "0.1.0"

from magicwords.core import (
    Game,
    GameConfig,
    Scene,
    SceneManager,
    EventBus,
    Event,
    EngineEvent,
    DialogueEvent,
)
from magicwords.dialogue import DialogueConfig, DialogueTimeline, Viewport
from magicwords.dialogue.engine import DialogueEngine

__all__ = [
    # Core
    "Game",
    "GameConfig",
    "Scene",
    "SceneManager",
    # Events
    "EventBus",
    "Event",
    "EngineEvent",
    "DialogueEvent",
    # Dialogue
    "DialogueConfig",
    "DialogueEngine",
    "DialogueTimeline",
    "Viewport",
]
