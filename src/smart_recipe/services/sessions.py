"""Session resolution for page renders and API guards."""

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol

from smart_recipe.domain.sessions import (
    RequestContext,
    Session,
    SessionRecord,
    SessionUser,
)
from smart_recipe.security import hash_token
from smart_recipe.services.users import UserRepository


class SessionRepository(Protocol):
    """Persistence interface for sessions keyed by subject."""

    def create_session(
        self, user_id: str, token_hash: str, expires_at: datetime
    ) -> SessionRecord:
        """Create a session row and return it."""

    def get_by_token_hash(self, token_hash: str) -> SessionRecord | None:
        """Return the session for a hashed credential, if present."""

    def delete_by_token_hash(self, token_hash: str) -> None:
        """Delete the session for a hashed credential."""


@dataclass
class SessionResolver:
    """Determine whether a caller holds a valid authenticated session."""

    session_repository: SessionRepository
    user_repository: UserRepository
    cookie_name: str
    server_salt: str

    def resolve(self, context: RequestContext) -> Session | None:
        """Return the caller's session, or None when absent or expired."""
        credential = context.cookies.get(self.cookie_name)
        if not credential:
            return None
        record = self.session_repository.get_by_token_hash(
            hash_token(credential, self.server_salt)
        )
        if record is None or record.expires_at <= datetime.now(tz=UTC):
            return None
        user = self.user_repository.get_by_id(record.user_id)
        if user is None:
            return None
        # The subject is always the user id; the exposed user carries the same id.
        return Session(
            subject_id=user.id,
            expires_at=record.expires_at,
            credential=credential,
            user=SessionUser(
                id=user.id, name=user.name, email=user.email, image=user.image
            ),
        )
