"""HTTP audio preloader."""

from dataclasses import dataclass

import httpx

from smart_recipe.services.media import AudioLoader


@dataclass
class HttpxAudioLoader(AudioLoader):
    """Audio loader that downloads the whole resource with httpx."""

    http_client: httpx.AsyncClient

    @classmethod
    def create(cls) -> "HttpxAudioLoader":
        """Create an audio loader with a managed httpx session."""
        return cls(http_client=httpx.AsyncClient(follow_redirects=True))

    async def preload(self, audio_url: str) -> bytes:
        """Download audio bytes, failing on non-2xx responses or empty bodies."""
        response = await self.http_client.get(audio_url)
        response.raise_for_status()
        if not response.content:
            raise RuntimeError("Audio resource is empty")
        return response.content

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
