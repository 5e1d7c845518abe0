"""
Wire records for the dialogue data source.

The service answers with:

    {
        "dialogue": [{"name": "Sheldon", "text": "Hi {satisfied}"}],
        "emojies":  [{"name": "satisfied", "url": "https://..."}],
        "avatars":  [{"name": "Sheldon", "url": "https://...", "position": "left"}]
    }

Pydantic validates the shape; unknown keys are ignored.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from magicwords.dialogue.models import DialogueLine, Side


class Record(BaseModel):
    """Base class for wire records."""

    model_config = ConfigDict(
        extra='ignore',
        frozen=True,
        populate_by_name=True,
    )


class DialogueRecord(Record):
    name: str
    text: str

    def to_line(self) -> DialogueLine:
        return DialogueLine(speaker_name=self.name, text=self.text)


class EmojiRecord(Record):
    name: str
    url: str


class AvatarRecord(Record):
    name: str
    url: str
    position: Literal["left", "right"] = "left"

    @property
    def side(self) -> Side:
        return Side(self.position)


class MagicWordsPayload(Record):
    """The whole response document."""
    dialogue: list[DialogueRecord] = Field(default_factory=list)
    emojis: list[EmojiRecord] = Field(default_factory=list, alias="emojies")
    avatars: list[AvatarRecord] = Field(default_factory=list)

    def lines(self) -> list[DialogueLine]:
        return [record.to_line() for record in self.dialogue]
