"""Internal recipe API consumed by pages and the client feed."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from pydantic import BaseModel, ConfigDict, Field

from smart_recipe.api.auth import require_session
from smart_recipe.domain.sessions import Session
from smart_recipe.services.recipes import RecipeNotFoundError, RecipeOwnershipError

if TYPE_CHECKING:
    from smart_recipe.containers import AppContainer

router = APIRouter(prefix="/api", tags=["recipes"])


class LikeRecipeRequest(BaseModel):
    """Body of a like toggle."""

    model_config = ConfigDict(populate_by_name=True)

    recipe_id: str = Field(alias="recipeId")


@router.get("/get-recipes")
async def get_recipes(
    request: Request, session: Session = Depends(require_session)
) -> list[dict[str, object]]:
    """Return one page of recipes shaped for the caller."""
    container: AppContainer = request.app.state.container
    recipes = container.recipe_service.list_for_viewer(
        dict(request.query_params), session.subject_id
    )
    return [recipe.to_payload() for recipe in recipes]


@router.put("/like-recipe")
async def like_recipe(
    body: LikeRecipeRequest,
    request: Request,
    session: Session = Depends(require_session),
) -> dict[str, object]:
    """Toggle the caller's like and return the updated recipe."""
    container: AppContainer = request.app.state.container
    try:
        recipe = container.recipe_service.toggle_like(
            body.recipe_id, session.subject_id
        )
    except RecipeNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Recipe not found"
        ) from exc
    return recipe.to_payload()


@router.delete("/delete-recipe")
async def delete_recipe(
    request: Request,
    recipe_id: str = Query(alias="recipeId"),
    session: Session = Depends(require_session),
) -> dict[str, str]:
    """Delete one of the caller's recipes."""
    container: AppContainer = request.app.state.container
    try:
        deleted = container.recipe_service.delete(recipe_id, session.subject_id)
    except RecipeNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Recipe not found"
        ) from exc
    except RecipeOwnershipError as exc:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN, detail="Not the recipe owner"
        ) from exc
    return {"deleted": deleted}
