"""Domain models for authenticated sessions."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime


@dataclass(frozen=True)
class SessionRecord:
    """Represents a persisted session row."""

    id: str
    user_id: str
    token_hash: str
    expires_at: datetime


@dataclass(frozen=True)
class SessionUser:
    """Public user fields exposed on a resolved session."""

    id: str
    name: str | None = None
    email: str | None = None
    image: str | None = None


@dataclass(frozen=True)
class Session:
    """An authenticated principal for one request or page lifecycle."""

    subject_id: str
    expires_at: datetime
    credential: str
    user: SessionUser

    def is_expired(self, now: datetime | None = None) -> bool:
        """Return true once the session lifetime has elapsed."""
        return self.expires_at <= (now or datetime.now(tz=UTC))

    def to_payload(self) -> dict[str, object]:
        """Serialize the session for the client, without the credential."""
        return {
            "user": {
                "id": self.user.id,
                "name": self.user.name,
                "email": self.user.email,
                "image": self.user.image,
            },
            "expires": self.expires_at.isoformat(),
        }


@dataclass(frozen=True)
class RequestContext:
    """Credential material carried by a server request or a client cookie jar."""

    cookies: Mapping[str, str] = field(default_factory=dict)
    headers: Mapping[str, str] = field(default_factory=dict)

    @property
    def cookie_header(self) -> str:
        """Raw Cookie header to forward on server-initiated calls."""
        raw = self.headers.get("cookie")
        if raw is not None:
            return raw
        return "; ".join(f"{name}={value}" for name, value in self.cookies.items())
