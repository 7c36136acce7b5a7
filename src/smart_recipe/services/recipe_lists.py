"""Shaping and reconciliation of recipe lists."""

from collections.abc import Sequence
from typing import Protocol, TypeVar

from smart_recipe.domain.models import UserRecord
from smart_recipe.domain.recipes import ExtendedRecipe, Recipe, UserSummary


class _Identified(Protocol):
    @property
    def id(self) -> str: ...


R = TypeVar("R", bound=_Identified)


def filter_results(recipes: Sequence[Recipe], user_id: str) -> list[ExtendedRecipe]:
    """Trim nested users and flag ownership and likes for one viewer."""
    return [
        ExtendedRecipe(
            id=recipe.id,
            owner=_summarize(recipe.owner),
            liked_by=tuple(_summarize(user) for user in recipe.liked_by),
            owns=str(recipe.owner.id) == user_id,
            liked=any(str(user.id) == user_id for user in recipe.liked_by),
            fields=dict(recipe.fields),
        )
        for recipe in recipes
    ]


def update_recipe_list(
    old_list: list[R], new_recipe: R | None, delete_id: str | None = None
) -> list[R]:
    """Replace an updated recipe in place or drop a deleted one.

    Update-only: a ``new_recipe`` whose id is not in the list is not inserted.
    The input list is never mutated; with nothing to apply it is returned as is.
    """
    if new_recipe is None and delete_id is None:
        return old_list
    if new_recipe is not None:
        return [
            new_recipe if recipe.id == new_recipe.id else recipe
            for recipe in old_list
        ]
    return [recipe for recipe in old_list if recipe.id != delete_id]


def _summarize(user: UserRecord) -> UserSummary:
    return UserSummary(id=str(user.id), name=user.name, image=user.image)
