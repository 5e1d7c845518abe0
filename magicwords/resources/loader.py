"""
Asset loading for the dialogue stage.

Fetches the dialogue document and every avatar/emoji image. The HTTP
calls are blocking (requests), so they run in the default executor;
callers just await the coroutines.
"""

from __future__ import annotations

import asyncio
import io
import json
import logging
from dataclasses import dataclass, field
from functools import partial
from pathlib import Path
from typing import Any, Callable, Optional, Protocol, TypeVar
from urllib.parse import urlparse

import pygame
import requests
from pydantic import ValidationError

from magicwords.dialogue.config import DEFAULT_DATA_URL
from magicwords.dialogue.models import Avatar, DialogueLine, Emoji
from magicwords.resources.records import MagicWordsPayload

logger = logging.getLogger(__name__)

T = TypeVar('T')


class LoadError(Exception):
    """The data source or an image could not be fetched or parsed."""


async def run_blocking(func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
    """Execute a blocking call outside the event loop."""
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, partial(func, *args, **kwargs))


def _is_remote(location: str) -> bool:
    return urlparse(location).scheme in ("http", "https")


class ImageLoader(Protocol):
    """Loads one image. Raises LoadError on failure."""

    async def load(self, url: str) -> Any:
        ...


class HttpImageLoader:
    """
    Loads images over HTTP (or from local paths) into pygame surfaces.
    """

    def __init__(self, timeout: float = 10.0):
        self.timeout = timeout

    def read_bytes(self, location: str) -> bytes:
        if not _is_remote(location):
            try:
                return Path(location).read_bytes()
            except OSError as e:
                raise LoadError(f"Cannot read image {location}: {e}") from e

        try:
            response = requests.get(location, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise LoadError(f"Cannot fetch image {location}: {e}") from e
        return response.content

    def load_sync(self, location: str) -> pygame.Surface:
        data = self.read_bytes(location)
        namehint = Path(urlparse(location).path).suffix

        try:
            surface = pygame.image.load(io.BytesIO(data), namehint)
            # convert_alpha needs a display mode; headless loads keep the decoded format
            if pygame.display.get_surface() is not None:
                surface = surface.convert_alpha()
        except pygame.error as e:
            raise LoadError(f"Cannot decode image {location}: {e}") from e
        return surface

    async def load(self, url: str) -> pygame.Surface:
        return await run_blocking(self.load_sync, url)


@dataclass
class LoadedDialogue:
    """Everything the timeline needs to start."""
    lines: list[DialogueLine] = field(default_factory=list)
    avatars: list[Avatar] = field(default_factory=list)
    emojis: list[Emoji] = field(default_factory=list)

    @property
    def emoji_table(self) -> dict[str, Any]:
        return {emoji.name: emoji.image for emoji in self.emojis}


class MagicWordsSource:
    """
    The remote dialogue document plus its images.

    Usage:
        source = MagicWordsSource()
        loaded = await source.load()
    """

    def __init__(
        self,
        url: str = DEFAULT_DATA_URL,
        image_loader: Optional[ImageLoader] = None,
        timeout: float = 10.0,
    ):
        self.url = url
        self.timeout = timeout
        self.image_loader = image_loader or HttpImageLoader(timeout=timeout)

    def fetch_payload_sync(self) -> MagicWordsPayload:
        """Fetch and validate the dialogue document."""
        try:
            if _is_remote(self.url):
                response = requests.get(self.url, timeout=self.timeout)
                response.raise_for_status()
                data = response.json()
            else:
                data = json.loads(Path(self.url).read_text(encoding='utf-8'))
        except (requests.RequestException, OSError, ValueError) as e:
            raise LoadError(f"Cannot fetch dialogue from {self.url}: {e}") from e

        try:
            return MagicWordsPayload.model_validate(data)
        except ValidationError as e:
            raise LoadError(f"Malformed dialogue from {self.url}: {e}") from e

    async def fetch_payload(self) -> MagicWordsPayload:
        return await run_blocking(self.fetch_payload_sync)

    async def load(self) -> LoadedDialogue:
        """
        Fetch the document and all images.

        Raises:
            LoadError: if the document itself cannot be loaded. Individual
                images that fail are logged and left as None.
        """
        payload = await self.fetch_payload()

        emoji_images = await asyncio.gather(
            *(self._load_image("emoji", record.name, record.url) for record in payload.emojis)
        )
        avatar_images = await asyncio.gather(
            *(self._load_image("avatar", record.name, record.url) for record in payload.avatars)
        )

        loaded = LoadedDialogue(
            lines=payload.lines(),
            avatars=[
                Avatar(name=record.name, image=image, side=record.side)
                for record, image in zip(payload.avatars, avatar_images)
            ],
            emojis=[
                Emoji(name=record.name, image=image)
                for record, image in zip(payload.emojis, emoji_images)
            ],
        )

        logger.info(
            f"Loaded {len(loaded.lines)} lines, "
            f"{len(loaded.avatars)} avatars, "
            f"{len(loaded.emojis)} emojis."
        )
        return loaded

    async def _load_image(self, kind: str, name: str, url: str) -> Optional[Any]:
        try:
            return await self.image_loader.load(url)
        except LoadError as e:
            logger.warning(f"Failed to load {kind} '{name}': {e}")
            return None
