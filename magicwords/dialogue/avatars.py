"""
Avatar registry - maps speaker names to avatars.
"""

from __future__ import annotations

import logging
from typing import Iterable, Sequence

from magicwords.dialogue.models import Avatar, Side

logger = logging.getLogger(__name__)


class UnknownSpeaker(KeyError):
    """A dialogue line names a speaker with no avatar."""

    def __init__(self, name: str):
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"No avatar for speaker '{self.name}'"


def augment_avatars(
    avatars: Sequence[Avatar],
    fallback_names: Iterable[str],
) -> list[Avatar]:
    """
    Return avatars plus a synthesized entry for each missing fallback name.

    Synthesized avatars reuse the first avatar's image and sit on the
    left. The input sequence is not modified. Without any avatar to
    borrow an image from, nothing is synthesized.
    """
    result = list(avatars)
    if not result:
        return result

    known = {avatar.name for avatar in result}
    for name in fallback_names:
        if name not in known:
            result.append(Avatar(name=name, image=result[0].image, side=Side.LEFT))
            known.add(name)

    return result


class AvatarRegistry:
    """
    Name -> Avatar lookup.

    Usage:
        registry = AvatarRegistry.build(avatars)
        avatar = registry.resolve("Sheldon")
    """

    def __init__(self, avatars: Iterable[Avatar] = (), synthesize_unknown: bool = False):
        avatars = list(avatars)
        # Later entries replace earlier ones with the same name
        self._avatars: dict[str, Avatar] = {avatar.name: avatar for avatar in avatars}

        self._template = avatars[0] if avatars else None
        self.synthesize_unknown = synthesize_unknown

    @classmethod
    def build(
        cls,
        avatars: Sequence[Avatar],
        fallback_names: Iterable[str] = ("Neighbour",),
        synthesize_unknown: bool = False,
    ) -> AvatarRegistry:
        """Create a registry with fallback avatars added."""
        return cls(augment_avatars(avatars, fallback_names), synthesize_unknown)

    def __contains__(self, name: str) -> bool:
        return name in self._avatars

    def __len__(self) -> int:
        return len(self._avatars)

    @property
    def names(self) -> list[str]:
        return list(self._avatars)

    def resolve(self, name: str) -> Avatar:
        """
        Find the avatar for a speaker.

        Raises:
            UnknownSpeaker: if the name has no avatar and none can be synthesized
        """
        avatar = self._avatars.get(name)
        if avatar is not None:
            return avatar

        if self.synthesize_unknown and self._template is not None:
            avatar = Avatar(name=name, image=self._template.image, side=Side.LEFT)
            self._avatars[name] = avatar
            logger.info(f"Synthesized avatar for unlisted speaker '{name}'")
            return avatar

        raise UnknownSpeaker(name)
