"""ASGI entrypoint for the BusinessHub dashboard."""

from business_hub.api.app import create_app
from business_hub.containers import build_container

app = create_app(build_container())
