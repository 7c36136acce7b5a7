"""Google sign-in flow and session lifecycle."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

import httpx

from smart_recipe.adapters.google_oauth_client import GoogleOAuthClient
from smart_recipe.domain.models import GoogleProfile
from smart_recipe.domain.sessions import RequestContext, Session, SessionUser
from smart_recipe.security import generate_token, hash_token, tokens_match
from smart_recipe.services.sessions import SessionRepository, SessionResolver
from smart_recipe.services.users import UserService

logger = logging.getLogger(__name__)


class AuthenticationError(Exception):
    """Raised when the identity-provider callback cannot be completed."""

    def __init__(self, code: str) -> None:
        super().__init__(code)
        self.code = code


@dataclass
class AuthService:
    """Drive the authorization-code exchange and own session rows."""

    oauth_client: GoogleOAuthClient
    user_service: UserService
    session_repository: SessionRepository
    resolver: SessionResolver
    redirect_uri: str
    server_salt: str
    max_age_seconds: int

    def begin_sign_in(self) -> tuple[str, str]:
        """Return the provider URL to redirect to and the state to remember."""
        state = generate_token()
        return self.oauth_client.authorization_url(self.redirect_uri, state), state

    async def complete_sign_in(
        self, code: str | None, state: str | None, expected_state: str | None
    ) -> tuple[Session, str]:
        """Finish the callback and return the new session with its raw token."""
        if not code:
            raise AuthenticationError("OAuthCallback")
        if not tokens_match(state, expected_state):
            raise AuthenticationError("OAuthStateMismatch")
        try:
            tokens = await self.oauth_client.exchange_code(code, self.redirect_uri)
            access_token = tokens.get("access_token")
            if not isinstance(access_token, str):
                raise AuthenticationError("OAuthCallback")
            userinfo = await self.oauth_client.fetch_userinfo(access_token)
        except (httpx.HTTPError, ValueError) as exc:
            logger.exception("Google token exchange failed")
            raise AuthenticationError("OAuthCallback") from exc

        profile = _profile_from_userinfo(userinfo)
        user = self.user_service.ensure_google_user(profile)
        raw_token = generate_token()
        expires_at = datetime.now(tz=UTC) + timedelta(seconds=self.max_age_seconds)
        record = self.session_repository.create_session(
            user_id=user.id,
            token_hash=hash_token(raw_token, self.server_salt),
            expires_at=expires_at,
        )
        session = Session(
            subject_id=record.user_id,
            expires_at=record.expires_at,
            credential=raw_token,
            user=SessionUser(
                id=user.id, name=user.name, email=user.email, image=user.image
            ),
        )
        logger.info("User signed in", extra={"user_id": user.id})
        return session, raw_token

    def refresh(self, context: RequestContext) -> Session | None:
        """Re-resolve the caller's session instead of prompting a new sign-in."""
        return self.resolver.resolve(context)

    def sign_out(self, raw_token: str | None) -> None:
        """Delete the session row behind a credential, if any."""
        if not raw_token:
            return
        self.session_repository.delete_by_token_hash(
            hash_token(raw_token, self.server_salt)
        )


def _profile_from_userinfo(userinfo: dict[str, object]) -> GoogleProfile:
    subject = userinfo.get("sub")
    if not subject:
        raise AuthenticationError("OAuthAccountNotLinked")
    return GoogleProfile(
        subject=str(subject),
        email=_as_str(userinfo.get("email")),
        name=_as_str(userinfo.get("name")),
        picture=_as_str(userinfo.get("picture")),
    )


def _as_str(value: object) -> str | None:
    return value if isinstance(value, str) else None
