"""ASGI application factory and dependencies for the Pictoboard server."""

from pictoboard.server.app import create_app

__all__ = ["create_app"]
