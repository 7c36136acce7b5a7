"""ASGI entrypoint for the recipe service."""

from smart_recipe.api.app import create_app
from smart_recipe.containers import build_container

app = create_app(build_container())
