"""Helpers for running the Pictoboard ASGI application."""

from __future__ import annotations

import os

import uvicorn

APP_FACTORY = "pictoboard.server.app:create_app"


def serve(host: str = "127.0.0.1", port: int = 8000, *, reload: bool = False) -> None:
    """Run the API with uvicorn until interrupted."""

    uvicorn.run(
        APP_FACTORY,
        host=host,
        port=port,
        reload=reload,
        factory=True,
    )


def main() -> None:
    """Entry point driven by PICTOBOARD_SERVER_* environment variables."""

    host = os.environ.get("PICTOBOARD_SERVER_HOST", "127.0.0.1")
    raw_port = os.environ.get("PICTOBOARD_SERVER_PORT", "8000")
    try:
        port = int(raw_port)
    except ValueError as exc:
        raise SystemExit(f"Invalid PICTOBOARD_SERVER_PORT '{raw_port}': {exc}") from exc
    serve(host, port, reload=os.environ.get("RELOAD") == "1")


if __name__ == "__main__":
    main()
