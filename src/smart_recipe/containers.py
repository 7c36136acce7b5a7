"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from smart_recipe.adapters.audio_loader import HttpxAudioLoader
from smart_recipe.adapters.google_oauth_client import (
    GoogleOAuthClient,
    HttpxGoogleOAuthClient,
)
from smart_recipe.adapters.rest_client import HttpxRestClient, RestClient
from smart_recipe.adapters.supabase_recipe_repository import SupabaseRecipeRepository
from smart_recipe.adapters.supabase_session_repository import (
    SupabaseSessionRepository,
)
from smart_recipe.adapters.supabase_user_repository import SupabaseUserRepository
from smart_recipe.config import Settings
from smart_recipe.domain.sessions import Session
from smart_recipe.services.auth import AuthService
from smart_recipe.services.data_gate import DataGate
from smart_recipe.services.feed import RecipeFeed
from smart_recipe.services.media import AudioLoader
from smart_recipe.services.recipes import RecipeService
from smart_recipe.services.sessions import SessionResolver
from smart_recipe.services.users import UserService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    rest_client: RestClient
    feed_client: RestClient
    audio_loader: AudioLoader
    oauth_client: GoogleOAuthClient
    user_service: UserService
    session_resolver: SessionResolver
    auth_service: AuthService
    data_gate: DataGate
    recipe_service: RecipeService
    close_resources: Callable[[], Awaitable[None]]

    def open_feed(self, session: Session) -> RecipeFeed:
        """Create a recipe feed for a signed-in viewer."""
        return RecipeFeed(
            rest_client=self.feed_client,
            session=session,
            cookie_name=self.settings.session_cookie_name,
            audio_loader=self.audio_loader,
        )


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    user_repository = SupabaseUserRepository(supabase_client)
    session_repository = SupabaseSessionRepository(supabase_client)
    recipe_repository = SupabaseRecipeRepository(supabase_client)
    user_service = UserService(user_repository)
    session_resolver = SessionResolver(
        session_repository=session_repository,
        user_repository=user_repository,
        cookie_name=resolved_settings.session_cookie_name,
        server_salt=resolved_settings.session_secret,
    )
    oauth_client = HttpxGoogleOAuthClient.create(
        client_id=resolved_settings.google_client_id,
        client_secret=resolved_settings.google_client_secret,
    )
    auth_service = AuthService(
        oauth_client=oauth_client,
        user_service=user_service,
        session_repository=session_repository,
        resolver=session_resolver,
        redirect_uri=resolved_settings.google_redirect_uri,
        server_salt=resolved_settings.session_secret,
        max_age_seconds=resolved_settings.session_max_age_seconds,
    )
    rest_client = HttpxRestClient.create()
    feed_client = HttpxRestClient.create(base_url=resolved_settings.api_base_url)
    audio_loader = HttpxAudioLoader.create()
    data_gate = DataGate(
        resolver=session_resolver,
        rest_client=rest_client,
        api_base_url=resolved_settings.api_base_url,
    )
    recipe_service = RecipeService(
        recipe_repository,
        image_bucket=resolved_settings.s3_bucket,
        image_region=resolved_settings.aws_region,
    )

    async def close_resources() -> None:
        await oauth_client.close()
        await rest_client.close()
        await feed_client.close()
        await audio_loader.close()

    return AppContainer(
        settings=resolved_settings,
        rest_client=rest_client,
        feed_client=feed_client,
        audio_loader=audio_loader,
        oauth_client=oauth_client,
        user_service=user_service,
        session_resolver=session_resolver,
        auth_service=auth_service,
        data_gate=data_gate,
        recipe_service=recipe_service,
        close_resources=close_resources,
    )
