"""
Magic Words Demo

Demonstrates:
- Loading a scripted conversation and its images
- Timed reveal of speech bubbles with inline emoji
- Paging when the stack reaches the top of the window
- Re-layout on window resize

Controls:
- Escape: Close the dialogue (and the demo)

Usage:
    python demos/magic_words_demo.py [--data URL_OR_PATH]
"""

import argparse
import logging
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from magicwords.core import Game, GameConfig
from magicwords.dialogue import DialogueConfig
from magicwords.scenes import MagicWordsScene


def main():
    parser = argparse.ArgumentParser(description="Magic Words dialogue demo")
    parser.add_argument("--data", help="Dialogue document URL or local JSON path")
    parser.add_argument("--width", type=int, default=1024)
    parser.add_argument("--height", type=int, default=768)
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO)

    dialogue_config = DialogueConfig(data_url=args.data) if args.data else DialogueConfig()

    game = Game(GameConfig(title="Magic Words", width=args.width, height=args.height))
    game.scene_manager.push(MagicWordsScene(game, config=dialogue_config))
    game.run()


if __name__ == "__main__":
    main()
