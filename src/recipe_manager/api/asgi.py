"""ASGI entrypoint for the recipe manager API."""

from recipe_manager.api.app import create_app
from recipe_manager.containers import build_container

app = create_app(build_container())
