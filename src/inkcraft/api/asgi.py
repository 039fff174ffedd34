"""ASGI entrypoint for the portfolio API."""

from inkcraft.api.app import create_app
from inkcraft.containers import build_container

app = create_app(build_container())
