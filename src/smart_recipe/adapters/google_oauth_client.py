"""Google OAuth2 authorization-code client."""

from dataclasses import dataclass
from typing import Protocol

import httpx

AUTHORIZE_URL = "https://accounts.google.com/o/oauth2/v2/auth"
TOKEN_URL = "https://oauth2.googleapis.com/token"
USERINFO_URL = "https://openidconnect.googleapis.com/v1/userinfo"
SCOPES = "openid email profile"


class GoogleOAuthClient(Protocol):
    """Interface for the Google authorization-code exchange."""

    def authorization_url(self, redirect_uri: str, state: str) -> str:
        """Return the consent-screen URL the browser is sent to."""

    async def exchange_code(self, code: str, redirect_uri: str) -> dict[str, object]:
        """Exchange an authorization code for tokens."""

    async def fetch_userinfo(self, access_token: str) -> dict[str, object]:
        """Fetch the OpenID userinfo for an access token."""


@dataclass
class HttpxGoogleOAuthClient(GoogleOAuthClient):
    """HTTPX-backed Google OAuth client."""

    client_id: str
    client_secret: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, client_id: str, client_secret: str) -> "HttpxGoogleOAuthClient":
        """Create a Google OAuth client with a managed httpx session."""
        return cls(
            client_id=client_id,
            client_secret=client_secret,
            http_client=httpx.AsyncClient(),
        )

    def authorization_url(self, redirect_uri: str, state: str) -> str:
        """Build the consent-screen URL."""
        url = httpx.URL(
            AUTHORIZE_URL,
            params={
                "client_id": self.client_id,
                "redirect_uri": redirect_uri,
                "response_type": "code",
                "scope": SCOPES,
                "state": state,
                "access_type": "online",
                "prompt": "select_account",
            },
        )
        return str(url)

    async def exchange_code(self, code: str, redirect_uri: str) -> dict[str, object]:
        """Exchange the authorization code at Google's token endpoint."""
        response = await self.http_client.post(
            TOKEN_URL,
            data={
                "code": code,
                "client_id": self.client_id,
                "client_secret": self.client_secret,
                "redirect_uri": redirect_uri,
                "grant_type": "authorization_code",
            },
            timeout=10,
        )
        response.raise_for_status()
        return response.json()

    async def fetch_userinfo(self, access_token: str) -> dict[str, object]:
        """Fetch the signed-in user's profile."""
        response = await self.http_client.get(
            USERINFO_URL,
            headers={"Authorization": f"Bearer {access_token}"},
            timeout=10,
        )
        response.raise_for_status()
        return response.json()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
