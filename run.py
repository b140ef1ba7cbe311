"""Entry point for the party planner site.

Launches the FastAPI application with Uvicorn.  It is intended to be
executed from the project root, for example under Docker, where you
only specify a single Python file to run.

Configuration (MONGODB_URI, ADMIN_USERNAME, ADMIN_PASSWORD, ...) is
read from environment variables; see
``party_planner_api/app/core/config.py``.  Host and port come from
``HOST`` and ``PORT`` and default to ``0.0.0.0`` and ``8000``.

Usage:
    python run.py
"""
import os

from uvicorn import Config, Server


def main() -> None:
    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8000"))
    log_level = os.getenv("LOG_LEVEL", "info").lower()
    config = Config(
        app="party_planner_api.app.main:app",
        host=host,
        port=port,
        reload=False,
        log_level=log_level,
    )
    server = Server(config)
    try:
        server.run()
    except (KeyboardInterrupt, SystemExit):
        pass


if __name__ == "__main__":
    main()
