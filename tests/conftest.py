"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from uuid import uuid4

import pytest

from smart_recipe.adapters.google_oauth_client import GoogleOAuthClient
from smart_recipe.adapters.rest_client import RestClient
from smart_recipe.config import Settings
from smart_recipe.containers import AppContainer
from smart_recipe.domain.models import UserRecord
from smart_recipe.domain.pagination import PaginationQuery
from smart_recipe.domain.recipes import Recipe
from smart_recipe.domain.sessions import SessionRecord
from smart_recipe.security import hash_token
from smart_recipe.services.auth import AuthService
from smart_recipe.services.data_gate import DataGate
from smart_recipe.services.recipes import RecipeRepository, RecipeService
from smart_recipe.services.sessions import SessionRepository, SessionResolver
from smart_recipe.services.users import UserRepository, UserService

SESSION_SECRET = "session-secret"
COOKIE_NAME = "session-token"


@dataclass
class InMemoryUserRepository(UserRepository):
    """In-memory user repository for tests."""

    users: dict[str, UserRecord] = field(default_factory=dict)
    accounts: dict[tuple[str, str], str] = field(default_factory=dict)
    updated: list[str] = field(default_factory=list)

    def get_by_id(self, user_id: str) -> UserRecord | None:
        return self.users.get(user_id)

    def get_by_account(
        self, provider: str, provider_account_id: str
    ) -> UserRecord | None:
        user_id = self.accounts.get((provider, provider_account_id))
        return self.users.get(user_id) if user_id else None

    def create_user(
        self, email: str | None, name: str | None, image: str | None
    ) -> UserRecord:
        user = UserRecord(id=str(uuid4()), email=email, name=name, image=image)
        self.users[user.id] = user
        return user

    def link_account(
        self, user_id: str, provider: str, provider_account_id: str
    ) -> None:
        self.accounts[(provider, provider_account_id)] = user_id

    def update_profile(
        self, user_id: str, name: str | None, image: str | None
    ) -> UserRecord:
        current = self.users[user_id]
        user = UserRecord(id=user_id, email=current.email, name=name, image=image)
        self.users[user_id] = user
        self.updated.append(user_id)
        return user


@dataclass
class InMemorySessionRepository(SessionRepository):
    """In-memory session repository for tests."""

    sessions: dict[str, SessionRecord] = field(default_factory=dict)

    def create_session(
        self, user_id: str, token_hash: str, expires_at: datetime
    ) -> SessionRecord:
        record = SessionRecord(
            id=str(uuid4()),
            user_id=user_id,
            token_hash=token_hash,
            expires_at=expires_at,
        )
        self.sessions[token_hash] = record
        return record

    def get_by_token_hash(self, token_hash: str) -> SessionRecord | None:
        return self.sessions.get(token_hash)

    def delete_by_token_hash(self, token_hash: str) -> None:
        self.sessions.pop(token_hash, None)


@dataclass
class InMemoryRecipeRepository(RecipeRepository):
    """In-memory recipe repository for tests."""

    recipes: dict[str, Recipe] = field(default_factory=dict)
    users: dict[str, UserRecord] = field(default_factory=dict)
    like_counts: dict[str, int] = field(default_factory=dict)
    queries: list[PaginationQuery] = field(default_factory=list)

    def add(self, recipe: Recipe) -> Recipe:
        self.recipes[recipe.id] = recipe
        self.users[recipe.owner.id] = recipe.owner
        for user in recipe.liked_by:
            self.users[user.id] = user
        return recipe

    def list_recipes(self, query: PaginationQuery) -> list[Recipe]:
        self.queries.append(query)
        items = list(self.recipes.values())
        if query.query:
            items = [
                item
                for item in items
                if query.query.lower() in str(item.fields.get("name", "")).lower()
            ]
        return items[query.skip : query.skip + query.limit]

    def get_recipe(self, recipe_id: str) -> Recipe | None:
        return self.recipes.get(recipe_id)

    def add_like(self, recipe_id: str, user_id: str) -> None:
        recipe = self.recipes[recipe_id]
        user = self.users.get(user_id) or UserRecord(
            id=user_id, email=None, name=None, image=None
        )
        self.recipes[recipe_id] = Recipe(
            id=recipe.id,
            owner=recipe.owner,
            liked_by=(*recipe.liked_by, user),
            fields=recipe.fields,
        )

    def remove_like(self, recipe_id: str, user_id: str) -> None:
        recipe = self.recipes[recipe_id]
        self.recipes[recipe_id] = Recipe(
            id=recipe.id,
            owner=recipe.owner,
            liked_by=tuple(user for user in recipe.liked_by if user.id != user_id),
            fields=recipe.fields,
        )

    def set_like_count(self, recipe_id: str, like_count: int) -> None:
        self.like_counts[recipe_id] = like_count

    def delete_recipe(self, recipe_id: str) -> None:
        self.recipes.pop(recipe_id, None)


@dataclass
class FakeGoogleOAuthClient(GoogleOAuthClient):
    """Fake Google client returning a fixed profile."""

    userinfo: dict[str, object] = field(
        default_factory=lambda: {
            "sub": "google-sub-1",
            "email": "cook@example.com",
            "name": "Test Cook",
            "picture": "https://example.com/cook.png",
        }
    )
    exchanged_codes: list[str] = field(default_factory=list)

    def authorization_url(self, redirect_uri: str, state: str) -> str:
        return f"https://accounts.example.com/auth?state={state}"

    async def exchange_code(self, code: str, redirect_uri: str) -> dict[str, object]:
        self.exchanged_codes.append(code)
        return {"access_token": f"access-{code}"}

    async def fetch_userinfo(self, access_token: str) -> dict[str, object]:
        return self.userinfo


@dataclass
class FakeRestClient(RestClient):
    """Fake REST client that records calls and replays queued responses."""

    responses: list[object] = field(default_factory=list)
    calls: list[dict[str, object]] = field(default_factory=list)

    async def call(
        self,
        address: str,
        method: str = "get",
        payload: dict[str, object] | None = None,
        headers: dict[str, str] | None = None,
    ) -> object:
        self.calls.append(
            {
                "address": address,
                "method": method,
                "payload": payload,
                "headers": headers,
            }
        )
        response = self.responses.pop(0) if self.responses else None
        if isinstance(response, BaseException):
            raise response
        return response


@dataclass
class FakeAudioLoader:
    """Fake audio loader that records requested URLs."""

    content: bytes = b"audio"
    error: Exception | None = None
    loaded: list[str] = field(default_factory=list)

    async def preload(self, audio_url: str) -> bytes:
        self.loaded.append(audio_url)
        if self.error:
            raise self.error
        return self.content


def make_user(name: str = "Cook") -> UserRecord:
    return UserRecord(
        id=str(uuid4()),
        email=f"{name.lower()}@example.com",
        name=name,
        image=f"https://example.com/{name.lower()}.png",
    )


def sign_in(
    user_repository: InMemoryUserRepository,
    session_repository: InMemorySessionRepository,
    user: UserRecord | None = None,
    expires_in: timedelta = timedelta(days=1),
) -> tuple[UserRecord, str]:
    """Persist a user and a session, returning the raw session token."""
    resolved = user or make_user()
    user_repository.users[resolved.id] = resolved
    raw_token = f"token-{resolved.id}"
    session_repository.create_session(
        user_id=resolved.id,
        token_hash=hash_token(raw_token, SESSION_SECRET),
        expires_at=datetime.now(tz=UTC) + expires_in,
    )
    return resolved, raw_token


@pytest.fixture
def settings() -> Settings:
    return Settings(
        google_client_id="google-client",
        google_client_secret="google-secret",
        session_secret=SESSION_SECRET,
        supabase_url="https://example.supabase.co",
        supabase_service_key="service-key",
        api_base_url="http://internal.test",
        session_cookie_name=COOKIE_NAME,
        environment="local",
    )


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def session_repository() -> InMemorySessionRepository:
    return InMemorySessionRepository()


@pytest.fixture
def recipe_repository() -> InMemoryRecipeRepository:
    return InMemoryRecipeRepository()


@pytest.fixture
def rest_client() -> FakeRestClient:
    return FakeRestClient()


@pytest.fixture
def audio_loader() -> FakeAudioLoader:
    return FakeAudioLoader()


@pytest.fixture
def oauth_client() -> FakeGoogleOAuthClient:
    return FakeGoogleOAuthClient()


@pytest.fixture
def resolver(
    user_repository: InMemoryUserRepository,
    session_repository: InMemorySessionRepository,
) -> SessionResolver:
    return SessionResolver(
        session_repository=session_repository,
        user_repository=user_repository,
        cookie_name=COOKIE_NAME,
        server_salt=SESSION_SECRET,
    )


@pytest.fixture
def container(  # noqa: PLR0913
    settings: Settings,
    user_repository: InMemoryUserRepository,
    session_repository: InMemorySessionRepository,
    recipe_repository: InMemoryRecipeRepository,
    rest_client: FakeRestClient,
    oauth_client: FakeGoogleOAuthClient,
    audio_loader: FakeAudioLoader,
    resolver: SessionResolver,
) -> AppContainer:
    user_service = UserService(user_repository)
    auth_service = AuthService(
        oauth_client=oauth_client,
        user_service=user_service,
        session_repository=session_repository,
        resolver=resolver,
        redirect_uri=settings.google_redirect_uri,
        server_salt=settings.session_secret,
        max_age_seconds=settings.session_max_age_seconds,
    )
    data_gate = DataGate(
        resolver=resolver,
        rest_client=rest_client,
        api_base_url=settings.api_base_url,
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        rest_client=rest_client,
        feed_client=rest_client,
        audio_loader=audio_loader,
        oauth_client=oauth_client,
        user_service=user_service,
        session_resolver=resolver,
        auth_service=auth_service,
        data_gate=data_gate,
        recipe_service=RecipeService(recipe_repository),
        close_resources=close_resources,
    )
