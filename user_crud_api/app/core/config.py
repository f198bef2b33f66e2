"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables, the same way the deployment scripts pass them
in.  Defaults are provided for all fields so the API starts with no
configuration at all, storing users in a local SQLite file.
"""

import os
from dataclasses import dataclass, field
from typing import List


def _split_csv(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "User CRUD API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # Optional path of a log file.  When empty, logs go to the console only.
    log_file: str = os.getenv("LOG_FILE", "")

    # Path or connection string for the SQLite database.  A relative path
    # is resolved relative to the project root by the ``db`` module.
    database_url: str = os.getenv("DATABASE_URL", "users.db")

    # Prefix under which the user routes are mounted.  Empty by default so
    # the resource lives at ``/users``; set e.g. ``/api/v1`` to version it.
    api_prefix: str = os.getenv("API_PREFIX", "")

    # Comma-separated list of origins allowed to call the API from a
    # browser.  ``*`` allows any origin.
    cors_origins: List[str] = field(
        default_factory=lambda: _split_csv(os.getenv("CORS_ORIGINS", "*"))
    )


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# should be set before importing this module.
settings = Settings()
