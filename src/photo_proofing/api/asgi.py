"""ASGI entrypoint for the photo proofing API."""

from photo_proofing.api.app import create_app
from photo_proofing.containers import build_container

app = create_app(build_container())
