"""Supabase-backed user repository."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from smart_recipe.domain.models import UserRecord
from smart_recipe.services.users import UserRepository

_USER_COLUMNS = "id, email, name, image"


@dataclass
class SupabaseUserRepository(UserRepository):
    """Supabase implementation for users and their provider accounts."""

    client: Client

    def get_by_id(self, user_id: str) -> UserRecord | None:
        """Return the user with the given id, if present."""
        response = (
            self.client.table("users")
            .select(_USER_COLUMNS)
            .eq("id", user_id)
            .limit(1)
            .execute()
        )
        if response.data:
            return _row_to_user(response.data[0])
        return None

    def get_by_account(
        self, provider: str, provider_account_id: str
    ) -> UserRecord | None:
        """Return the user linked to a provider account, if present."""
        response = (
            self.client.table("accounts")
            .select("user_id")
            .eq("provider", provider)
            .eq("provider_account_id", provider_account_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return self.get_by_id(str(response.data[0]["user_id"]))

    def create_user(
        self, email: str | None, name: str | None, image: str | None
    ) -> UserRecord:
        """Create a new user row and return it."""
        response = (
            self.client.table("users")
            .insert({"email": email, "name": name, "image": image})
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create user in Supabase")
        return _row_to_user(response.data[0])

    def link_account(
        self, user_id: str, provider: str, provider_account_id: str
    ) -> None:
        """Insert the provider account row for a user."""
        self.client.table("accounts").insert(
            {
                "user_id": user_id,
                "provider": provider,
                "provider_account_id": provider_account_id,
                "type": "oauth",
            }
        ).execute()

    def update_profile(
        self, user_id: str, name: str | None, image: str | None
    ) -> UserRecord:
        """Update display fields and return the refreshed user."""
        response = (
            self.client.table("users")
            .update(
                {
                    "name": name,
                    "image": image,
                    "updated_at": datetime.now(tz=UTC).isoformat(),
                }
            )
            .eq("id", user_id)
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update user in Supabase")
        return _row_to_user(response.data[0])


def _row_to_user(row: dict) -> UserRecord:
    return UserRecord(
        id=str(row["id"]),
        email=row.get("email"),
        name=row.get("name"),
        image=row.get("image"),
    )
