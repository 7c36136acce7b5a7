"""Recipe queries and viewer mutations behind the internal API."""

from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Protocol

from smart_recipe.domain.pagination import PaginationQuery
from smart_recipe.domain.recipes import ExtendedRecipe, Recipe
from smart_recipe.services.formatting import (
    DEFAULT_BUCKET,
    DEFAULT_REGION,
    format_date,
    normalize_s3_image_url,
)
from smart_recipe.services.pagination import pagination_query
from smart_recipe.services.recipe_lists import filter_results


class RecipeNotFoundError(LookupError):
    """Raised when a recipe id does not exist."""


class RecipeOwnershipError(PermissionError):
    """Raised when a viewer mutates a recipe they do not own."""


class RecipeRepository(Protocol):
    """Persistence interface for recipes and likes."""

    def list_recipes(self, query: PaginationQuery) -> list[Recipe]:
        """Return one page of recipes."""

    def get_recipe(self, recipe_id: str) -> Recipe | None:
        """Return a recipe by id, if present."""

    def add_like(self, recipe_id: str, user_id: str) -> None:
        """Record that a user likes a recipe."""

    def remove_like(self, recipe_id: str, user_id: str) -> None:
        """Remove a user's like from a recipe."""

    def set_like_count(self, recipe_id: str, like_count: int) -> None:
        """Store the denormalized like counter used for popularity sorting."""

    def delete_recipe(self, recipe_id: str) -> None:
        """Delete a recipe and its likes."""


@dataclass
class RecipeService:
    """Application service for recipe listing and mutations."""

    repository: RecipeRepository
    image_bucket: str = DEFAULT_BUCKET
    image_region: str = DEFAULT_REGION

    def list_for_viewer(
        self, raw_query: Mapping[str, object], viewer_id: str
    ) -> list[ExtendedRecipe]:
        """Return one page of recipes shaped for the viewer."""
        query = pagination_query(raw_query)
        recipes = filter_results(self.repository.list_recipes(query), viewer_id)
        return [self._present(recipe) for recipe in recipes]

    def toggle_like(self, recipe_id: str, viewer_id: str) -> ExtendedRecipe:
        """Like or unlike a recipe and return its refreshed view."""
        recipe = self._require(recipe_id)
        already_liked = any(user.id == viewer_id for user in recipe.liked_by)
        if already_liked:
            self.repository.remove_like(recipe_id, viewer_id)
        else:
            self.repository.add_like(recipe_id, viewer_id)
        updated = self._require(recipe_id)
        self.repository.set_like_count(recipe_id, len(updated.liked_by))
        return self._present(filter_results([updated], viewer_id)[0])

    def delete(self, recipe_id: str, viewer_id: str) -> str:
        """Delete a recipe owned by the viewer and return its id."""
        recipe = self._require(recipe_id)
        if recipe.owner.id != viewer_id:
            raise RecipeOwnershipError(recipe_id)
        self.repository.delete_recipe(recipe_id)
        return recipe_id

    def _require(self, recipe_id: str) -> Recipe:
        recipe = self.repository.get_recipe(recipe_id)
        if recipe is None:
            raise RecipeNotFoundError(recipe_id)
        return recipe

    def _present(self, recipe: ExtendedRecipe) -> ExtendedRecipe:
        fields = dict(recipe.fields)
        if "image_url" in fields:
            fields["image_url"] = normalize_s3_image_url(
                fields["image_url"], self.image_bucket, self.image_region
            )
        created_at = fields.get("created_at")
        if isinstance(created_at, str):
            fields["created_label"] = format_date(created_at)
        return replace(recipe, fields=fields)
