import os
import sys
import pytest
from unittest.mock import MagicMock, patch

# Ensure magicwords can be imported
sys.path.append(os.getcwd())

from magicwords.dialogue.config import DialogueConfig, Viewport
from magicwords.dialogue.models import Avatar, Side


class FixedMetrics:
    """Monospace stand-in for font metrics: 10 units per char, 20 per line."""

    CHAR_WIDTH = 10
    LINE_HEIGHT = 20

    def measure_text(self, text, font_config=None, max_width=None):
        return len(text) * self.CHAR_WIDTH, self.LINE_HEIGHT


@pytest.fixture(autouse=True)
def mock_pygame():
    """
    Global mock for pygame to allow headless testing.
    Autoused for all tests to prevent accidental window creation.
    """
    with patch('pygame.init'), \
         patch('pygame.display'), \
         patch('pygame.event'), \
         patch('pygame.time'), \
         patch('pygame.image'), \
         patch('pygame.Surface'):
        yield


@pytest.fixture
def event_bus():
    """Fresh EventBus for each test."""
    from magicwords.core.events import EventBus
    return EventBus()


@pytest.fixture
def text_metrics():
    return FixedMetrics()


@pytest.fixture
def viewport():
    """Viewport at the base width, so scale is exactly 1."""
    return Viewport(1024, 768)


@pytest.fixture
def config():
    return DialogueConfig()


@pytest.fixture
def avatars():
    """One left and one right speaker with distinct image handles."""
    return [
        Avatar(name="Sheldon", image=MagicMock(name="sheldon.png"), side=Side.LEFT),
        Avatar(name="Penny", image=MagicMock(name="penny.png"), side=Side.RIGHT),
    ]


@pytest.fixture
def emojis():
    return {
        "satisfied": MagicMock(name="satisfied.png"),
        "intrigued": MagicMock(name="intrigued.png"),
    }
