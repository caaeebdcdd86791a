"""ASGI entrypoint for the rope fitness API."""

from rope_fitness.api.app import create_app
from rope_fitness.containers import build_container

app = create_app(build_container())
