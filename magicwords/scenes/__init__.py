"""
Scenes shipped with the showcase.
"""

from magicwords.scenes.magic_words import MagicWordsScene

__all__ = [
    "MagicWordsScene",
]
