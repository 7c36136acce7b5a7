"""Client-held recipe list kept in sync with the internal API."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

import httpx

from smart_recipe.adapters.rest_client import RestClient
from smart_recipe.domain.pagination import PaginationQuery
from smart_recipe.domain.recipes import ExtendedRecipe
from smart_recipe.domain.results import Err, Ok, Result
from smart_recipe.domain.sessions import Session
from smart_recipe.services.media import (
    AudioLoader,
    AudioLoadError,
    AudioPlayer,
    play_audio,
)
from smart_recipe.services.recipe_lists import update_recipe_list

logger = logging.getLogger(__name__)

_RECOVERABLE = (httpx.HTTPError, ValueError, KeyError, TypeError)


@dataclass
class RecipeFeed:
    """One viewer's recipe list, updated through the reconciler after mutations.

    Mutations that fail leave ``recipes`` untouched and come back as ``Err``.
    """

    rest_client: RestClient
    session: Session
    cookie_name: str = "session-token"
    recipes: list[ExtendedRecipe] = field(default_factory=list)
    query: PaginationQuery = field(default_factory=PaginationQuery)
    audio_loader: AudioLoader | None = None

    async def refresh(
        self, query: PaginationQuery | None = None
    ) -> Result[list[ExtendedRecipe]]:
        """Replace the list with a freshly fetched page."""
        resolved = query or self.query
        try:
            data = await self.rest_client.call(
                "/api/get-recipes",
                payload=resolved.to_params(),
                headers=self._headers(),
            )
            recipes = [ExtendedRecipe.from_payload(item) for item in data or []]
        except _RECOVERABLE as exc:
            return _failure("refresh", exc)
        self.recipes = recipes
        self.query = resolved
        return Ok(recipes)

    async def toggle_like(self, recipe_id: str) -> Result[ExtendedRecipe]:
        """Like or unlike a recipe and swap in the server's version."""
        try:
            data = await self.rest_client.call(
                "/api/like-recipe",
                method="put",
                payload={"recipeId": recipe_id},
                headers=self._headers(),
            )
            updated = ExtendedRecipe.from_payload(data)
        except _RECOVERABLE as exc:
            return _failure("toggle_like", exc)
        self.recipes = update_recipe_list(self.recipes, updated)
        return Ok(updated)

    async def delete(self, recipe_id: str) -> Result[str]:
        """Delete a recipe and drop it from the list."""
        try:
            await self.rest_client.call(
                "/api/delete-recipe",
                method="delete",
                payload={"recipeId": recipe_id},
                headers=self._headers(),
            )
        except _RECOVERABLE as exc:
            return _failure("delete", exc)
        self.recipes = update_recipe_list(self.recipes, None, recipe_id)
        return Ok(recipe_id)

    async def play_narration(
        self,
        recipe_id: str,
        player: AudioPlayer,
        on_end: Callable[[], None] | None = None,
    ) -> Result[str]:
        """Play the narration of a listed recipe through ``player``."""
        recipe = next((item for item in self.recipes if item.id == recipe_id), None)
        audio_url = recipe.fields.get("audio") if recipe else None
        loader = self.audio_loader
        if loader is None or not isinstance(audio_url, str) or not audio_url:
            return Err(reason=f"No narration available for recipe {recipe_id}")
        try:
            await play_audio(audio_url, loader, player, on_end)
        except AudioLoadError as exc:
            return _failure("play_narration", exc)
        return Ok(audio_url)

    def _headers(self) -> dict[str, str]:
        return {"Cookie": f"{self.cookie_name}={self.session.credential}"}


def _failure(action: str, exc: Exception) -> Err:
    logger.warning("Recipe feed %s failed: %s", action, exc)
    return Err(reason=f"{type(exc).__name__}: {exc}", error=exc)
