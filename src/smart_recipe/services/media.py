"""Audio preload-and-play contract for recipe narration."""

import asyncio
import logging
from collections.abc import Callable
from typing import Protocol

logger = logging.getLogger(__name__)

PRELOAD_TIMEOUT_SECONDS = 20.0
LOAD_ERROR = "Error loading audio"
LOAD_TIMEOUT = "Audio loading timeout"


class AudioLoadError(Exception):
    """Raised when audio cannot be preloaded in time."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


class AudioLoader(Protocol):
    """Interface for fetching an audio resource ahead of playback."""

    async def preload(self, audio_url: str) -> bytes:
        """Return the fully loaded audio bytes."""


class AudioPlayer(Protocol):
    """Interface for the component that actually plays audio."""

    async def play(
        self, audio: bytes, on_end: Callable[[], None] | None = None
    ) -> None:
        """Start playback, invoking ``on_end`` when it finishes."""


async def play_audio(
    audio_url: str,
    loader: AudioLoader,
    player: AudioPlayer,
    on_end: Callable[[], None] | None = None,
    timeout: float = PRELOAD_TIMEOUT_SECONDS,
) -> None:
    """Preload ``audio_url`` within ``timeout`` seconds, then play it."""
    try:
        try:
            audio = await asyncio.wait_for(loader.preload(audio_url), timeout)
        except TimeoutError as exc:
            raise AudioLoadError(LOAD_TIMEOUT) from exc
        except Exception as exc:
            raise AudioLoadError(LOAD_ERROR) from exc
        await player.play(audio, on_end)
    except Exception as exc:
        logger.error("play_audio: Error playing audio: %s", exc)
        raise
