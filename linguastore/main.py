"""ASGI entrypoint, served with ``uvicorn linguastore.main:app`` or ``linguastore-api``."""

import uvicorn

from linguastore.core.app import create_app
from linguastore.core.config import get_settings

app = create_app()


def run() -> None:
    """Serve the API with host, port and log level taken from settings."""
    settings = get_settings()
    uvicorn.run(
        "linguastore.main:app",
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
        reload=settings.debug and settings.app_env == "dev",
    )


if __name__ == "__main__":
    run()
