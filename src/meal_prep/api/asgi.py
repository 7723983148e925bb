"""ASGI entrypoint for the meal prep API."""

from meal_prep.api.app import create_app
from meal_prep.containers import build_container

app = create_app(build_container())
