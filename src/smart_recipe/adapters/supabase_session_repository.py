"""Supabase-backed session repository."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from smart_recipe.domain.sessions import SessionRecord
from smart_recipe.services.sessions import SessionRepository


@dataclass
class SupabaseSessionRepository(SessionRepository):
    """Supabase implementation for login sessions."""

    client: Client

    def create_session(
        self, user_id: str, token_hash: str, expires_at: datetime
    ) -> SessionRecord:
        """Create a session row and return it."""
        response = (
            self.client.table("sessions")
            .insert(
                {
                    "user_id": user_id,
                    "token_hash": token_hash,
                    "expires_at": expires_at.isoformat(),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create session")
        return _row_to_session(response.data[0])

    def get_by_token_hash(self, token_hash: str) -> SessionRecord | None:
        """Return the session for a hashed token, if present."""
        response = (
            self.client.table("sessions")
            .select("id, user_id, token_hash, expires_at")
            .eq("token_hash", token_hash)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _row_to_session(response.data[0])

    def delete_by_token_hash(self, token_hash: str) -> None:
        """Delete the session for a hashed token."""
        self.client.table("sessions").delete().eq("token_hash", token_hash).execute()


def _row_to_session(row: dict) -> SessionRecord:
    expires_at = datetime.fromisoformat(row["expires_at"])
    if expires_at.tzinfo is None:
        expires_at = expires_at.replace(tzinfo=UTC)
    return SessionRecord(
        id=str(row["id"]),
        user_id=str(row["user_id"]),
        token_hash=row["token_hash"],
        expires_at=expires_at,
    )
