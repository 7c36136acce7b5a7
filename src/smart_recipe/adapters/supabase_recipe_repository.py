"""Supabase-backed recipe repository."""

from dataclasses import dataclass

from supabase import Client

from smart_recipe.domain.models import UserRecord
from smart_recipe.domain.pagination import PaginationQuery
from smart_recipe.domain.recipes import Recipe
from smart_recipe.services.recipes import RecipeRepository

_USER_COLUMNS = "id, name, email, image"
_RECIPE_SELECT = (
    "*, owner:users!recipes_owner_id_fkey("
    + _USER_COLUMNS
    + "), recipe_likes(user:users("
    + _USER_COLUMNS
    + "))"
)
_SORT_COLUMNS = {
    "popular": "like_count",
    "recent": "created_at",
}
_RELATION_KEYS = {"owner", "owner_id", "recipe_likes", "id"}


@dataclass
class SupabaseRecipeRepository(RecipeRepository):
    """Supabase implementation for recipes and likes."""

    client: Client

    def list_recipes(self, query: PaginationQuery) -> list[Recipe]:
        """Return one page of recipes, optionally filtered by name."""
        request = self.client.table("recipes").select(_RECIPE_SELECT)
        if query.query:
            request = request.ilike("name", f"%{query.query}%")
        sort_column = _SORT_COLUMNS.get(query.sort_option, "like_count")
        response = (
            request.order(sort_column, desc=True)
            .range(query.skip, query.skip + query.limit - 1)
            .execute()
        )
        return [_row_to_recipe(row) for row in response.data or []]

    def get_recipe(self, recipe_id: str) -> Recipe | None:
        """Return a recipe by id, if present."""
        response = (
            self.client.table("recipes")
            .select(_RECIPE_SELECT)
            .eq("id", recipe_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _row_to_recipe(response.data[0])

    def add_like(self, recipe_id: str, user_id: str) -> None:
        """Insert a like row."""
        self.client.table("recipe_likes").insert(
            {"recipe_id": recipe_id, "user_id": user_id}
        ).execute()

    def remove_like(self, recipe_id: str, user_id: str) -> None:
        """Delete a like row."""
        self.client.table("recipe_likes").delete().eq("recipe_id", recipe_id).eq(
            "user_id", user_id
        ).execute()

    def set_like_count(self, recipe_id: str, like_count: int) -> None:
        """Update the like counter on the recipe row."""
        self.client.table("recipes").update({"like_count": like_count}).eq(
            "id", recipe_id
        ).execute()

    def delete_recipe(self, recipe_id: str) -> None:
        """Delete a recipe and the likes that reference it."""
        self.client.table("recipe_likes").delete().eq("recipe_id", recipe_id).execute()
        self.client.table("recipes").delete().eq("id", recipe_id).execute()


def _row_to_user(row: dict) -> UserRecord:
    return UserRecord(
        id=str(row["id"]),
        email=row.get("email"),
        name=row.get("name"),
        image=row.get("image"),
    )


def _row_to_recipe(row: dict) -> Recipe:
    likes = row.get("recipe_likes") or []
    return Recipe(
        id=str(row["id"]),
        owner=_row_to_user(row["owner"]),
        liked_by=tuple(
            _row_to_user(like["user"]) for like in likes if like.get("user")
        ),
        fields={
            key: value for key, value in row.items() if key not in _RELATION_KEYS
        },
    )
