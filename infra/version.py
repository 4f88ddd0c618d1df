from __future__ import annotations

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

_DEFAULT_APP_VERSION = "1.0.0"
_VERSION_FILE = Path(__file__).with_name("app_version.txt")
_ENV_VAR = "BUDGET_APP_VERSION"


def _read_version_from_file(path: Path) -> str | None:
    try:
        raw = path.read_text(encoding="utf-8").strip()
    except OSError:
        return None
    return raw or None


def resolve_app_version() -> tuple[str, str]:
    """Return ``(version, source)``; source is ``env``, ``file`` or ``default``."""
    env_override = (os.getenv(_ENV_VAR) or "").strip()
    if env_override:
        return env_override, "env"

    file_version = _read_version_from_file(_VERSION_FILE)
    if file_version:
        return file_version, "file"

    logger.debug("No version file at %s; using built-in version", _VERSION_FILE)
    return _DEFAULT_APP_VERSION, "default"


def get_app_version() -> str:
    return resolve_app_version()[0]


__all__ = ["get_app_version", "resolve_app_version"]
