"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
site can start on a developer machine without any configuration; in
that case no database is configured and the application runs in a
degraded mode (reads and writes fail with a clear message) unless
``USE_IN_MEMORY_DB`` is enabled.
"""

import os
from dataclasses import dataclass
from typing import Optional


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Party Planner Site API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = _env_flag("DEBUG")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: Optional[str] = os.getenv("LOG_FILE") or None

    # Display name used in the default copyright line of the settings
    # singleton.
    site_name: str = os.getenv("SITE_NAME", "Servicios Las Primas")

    # MongoDB connection.  When ``mongodb_uri`` is empty the database is
    # left unconfigured and every persistence call fails until the
    # variable is provided.
    mongodb_uri: str = os.getenv("MONGODB_URI", "")
    mongodb_db: str = os.getenv("MONGODB_DB", "party_planner")
    mongodb_timeout_ms: int = int(os.getenv("MONGODB_TIMEOUT_MS", "5000"))

    # Development toggle: keep all collections in process memory.
    use_in_memory_db: bool = _env_flag("USE_IN_MEMORY_DB")

    # Static credential pair for the /admin area (HTTP Basic).  If either
    # value is empty every /admin request is rejected.
    admin_username: str = os.getenv("ADMIN_USERNAME", "")
    admin_password: str = os.getenv("ADMIN_PASSWORD", "")
    admin_realm: str = os.getenv(
        "ADMIN_REALM", "Acceso restringido al área de administración"
    )


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Because the dataclass
# computes values at import time, environment variables should be set
# before importing this module.  Tests build their own ``Settings``
# instance and pass it to ``create_app``.
settings = Settings()
