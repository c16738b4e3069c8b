"""
Main entry point for the Calendar API server.

Runs the FastAPI application under uvicorn, bound to localhost only.
"""

from __future__ import annotations

import logging
import sys

import uvicorn

from .settings import Settings


def main() -> int:
    """
    Programmatic uvicorn launcher.
    - Binds ONLY to 127.0.0.1.
    - Uses configured port from settings.
    - Disables uvicorn access log (we emit our own structured logs).
    """
    settings = Settings()

    config = uvicorn.Config(
        app="calendar_api.app:create_app",
        factory=True,
        host="127.0.0.1",
        port=int(settings.port),
        log_level=(settings.log_level or "info").lower(),
        proxy_headers=False,
        access_log=False,
        use_colors=False,
    )
    server = uvicorn.Server(config)

    try:
        server.run()
        return 0
    except KeyboardInterrupt:
        return 130
    except (OSError, RuntimeError) as e:
        logging.getLogger(__name__).error("Server error: %s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
