"""Calendar API settings.

Stdlib-only, env-backed configuration with the CALENDAR_ prefix. A `.env`
file next to the project root (and `.env.development` in dev) is loaded
once at import without overriding variables already in the environment.
"""

from __future__ import annotations

import contextlib
import os
from pathlib import Path

from utils.dates import DEFAULT_WEEK_START, parse_week_start


def _load_env_file(path: Path) -> None:
    """Load KEY=VALUE from a .env-style file into os.environ if not already set."""
    with contextlib.suppress(OSError, UnicodeDecodeError):
        if not path.exists():
            return
        with path.open(encoding="utf-8") as f:
            for raw in f:
                line = raw.strip()
                if not line or line.startswith("#") or "=" not in line:
                    continue
                key, value = line.split("=", 1)
                key = key.strip()
                value = value.strip().strip('"').strip("'")
                if key and key not in os.environ:
                    os.environ[key] = value


def _load_envs_for_runtime() -> None:
    """
    Load .env (base) and .env.development (when in dev) so Settings sees overrides.
    Only sets variables not already present in the environment.
    """
    root = Path(__file__).resolve().parents[1]
    _load_env_file(root / ".env")
    env = (os.environ.get("CALENDAR_ENV", "dev") or "dev").strip().lower()
    if env in {"dev", "development"}:
        _load_env_file(root / ".env.development")


# One-time load at import
_load_envs_for_runtime()


def _get_env(name: str, default: str | None = None) -> str | None:
    return os.environ.get(name, default)


def _parse_bool(val: str | None, default: bool = False) -> bool:
    if val is None:
        return default
    return str(val).strip().lower() in {"1", "true", "yes", "on"}


def _parse_int(val: str | None, default: int) -> int:
    try:
        return int(str(val)) if val is not None else default
    except ValueError:
        return default


def _parse_csv(val: str | None) -> list[str]:
    if not val:
        return []
    items = [s.strip() for s in str(val).split(",")]
    return [s for s in items if s]


class Settings:
    """
    Runtime configuration loaded from environment variables with prefix
    CALENDAR_.

        Variables:
        - CALENDAR_ENV: "dev" or "prod" (default: dev)
        - CALENDAR_API_PORT: int (default: 24802)
        - CALENDAR_ALLOWED_ORIGINS: CSV list
            dev default if empty: [http://localhost:4200, http://localhost:5173]
            prod default if empty: []
        - CALENDAR_LOG_LEVEL: INFO|DEBUG|WARNING|ERROR (default: INFO)
        - CALENDAR_LOG_DIR: logs directory path (default: logs)
        - CALENDAR_STORAGE_BACKEND: json|sqlite|memory (default: json)
        - CALENDAR_STORAGE_PATH: data directory or .db file (default: data)
        - CALENDAR_STORAGE_KEY: blob key (default: appointments)
        - CALENDAR_WEEK_START: weekday name or 0-6, Monday=0 (default: sunday)
        - CALENDAR_EXPOSE_OPENAPI_IN_DEV: bool (default: true)
    """

    def __init__(self) -> None:
        # Environment
        self.environment: str = (_get_env("CALENDAR_ENV", "dev") or "dev").strip().lower()
        self.is_dev: bool = self.environment in {"dev", "development"}

        # Network
        self.port: int = _parse_int(_get_env("CALENDAR_API_PORT"), 24802)

        if allowed_origins_env := _get_env("CALENDAR_ALLOWED_ORIGINS"):
            self.allowed_origins: list[str] = _parse_csv(allowed_origins_env)
        else:
            self.allowed_origins = (
                [
                    "http://localhost:4200",
                    "http://localhost:5173",  # Vite default dev port
                ]
                if self.is_dev
                else []
            )

        # Logging
        self.log_level: str = (_get_env("CALENDAR_LOG_LEVEL", "INFO") or "INFO").upper()
        self.log_dir: str = _get_env("CALENDAR_LOG_DIR", "logs") or "logs"

        # Storage
        self.storage_backend: str = (
            _get_env("CALENDAR_STORAGE_BACKEND", "json") or "json"
        ).strip().lower()
        self.storage_path: str = _get_env("CALENDAR_STORAGE_PATH", "data") or "data"
        self.storage_key: str = _get_env("CALENDAR_STORAGE_KEY", "appointments") or "appointments"

        # Calendar
        self.week_start: int = parse_week_start(
            _get_env("CALENDAR_WEEK_START"), DEFAULT_WEEK_START
        )

        # Docs in dev
        self.expose_openapi_in_dev: bool = _parse_bool(
            _get_env("CALENDAR_EXPOSE_OPENAPI_IN_DEV"), True
        )
