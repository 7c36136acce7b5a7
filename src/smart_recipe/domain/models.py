"""Domain models for users of the recipe service."""

from dataclasses import dataclass


@dataclass(frozen=True)
class UserRecord:
    """Represents a user stored in the database."""

    id: str
    email: str | None
    name: str | None
    image: str | None


@dataclass(frozen=True)
class GoogleProfile:
    """Subset of the Google userinfo payload used to provision users."""

    subject: str
    email: str | None
    name: str | None
    picture: str | None
