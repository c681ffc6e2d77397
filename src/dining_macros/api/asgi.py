"""ASGI entrypoint for the dining macros API."""

from dining_macros.api.app import create_app
from dining_macros.containers import build_container

app = create_app(build_container())
