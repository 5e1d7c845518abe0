"""
Data source access: wire records and async loaders.
"""

from magicwords.resources.records import (
    AvatarRecord,
    DialogueRecord,
    EmojiRecord,
    MagicWordsPayload,
)
from magicwords.resources.loader import (
    HttpImageLoader,
    ImageLoader,
    LoadError,
    LoadedDialogue,
    MagicWordsSource,
    run_blocking,
)

__all__ = [
    "AvatarRecord",
    "DialogueRecord",
    "EmojiRecord",
    "MagicWordsPayload",
    "HttpImageLoader",
    "ImageLoader",
    "LoadError",
    "LoadedDialogue",
    "MagicWordsSource",
    "run_blocking",
]
