"""User-related business logic."""

from dataclasses import dataclass
from typing import Protocol

from smart_recipe.domain.models import GoogleProfile, UserRecord

GOOGLE_PROVIDER = "google"


class UserRepository(Protocol):
    """Persistence interface for user data."""

    def get_by_id(self, user_id: str) -> UserRecord | None:
        """Return the user with the given id, if present."""

    def get_by_account(
        self, provider: str, provider_account_id: str
    ) -> UserRecord | None:
        """Return the user linked to an identity-provider account, if present."""

    def create_user(
        self, email: str | None, name: str | None, image: str | None
    ) -> UserRecord:
        """Create and return a new user record."""

    def link_account(
        self, user_id: str, provider: str, provider_account_id: str
    ) -> None:
        """Link an identity-provider account to a user."""

    def update_profile(
        self, user_id: str, name: str | None, image: str | None
    ) -> UserRecord:
        """Refresh the display fields of a user and return it."""


@dataclass
class UserService:
    """Application service for user lifecycle actions."""

    repository: UserRepository

    def ensure_google_user(self, profile: GoogleProfile) -> UserRecord:
        """Ensure a user exists for the Google account and return it."""
        existing = self.repository.get_by_account(GOOGLE_PROVIDER, profile.subject)
        if existing:
            if (existing.name, existing.image) == (profile.name, profile.picture):
                return existing
            return self.repository.update_profile(
                existing.id, profile.name, profile.picture
            )

        created = self.repository.create_user(
            email=profile.email, name=profile.name, image=profile.picture
        )
        self.repository.link_account(created.id, GOOGLE_PROVIDER, profile.subject)
        return created
