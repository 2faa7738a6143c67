"""Runtime configuration for the tutorial catalogue service."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

_TRUTHY = {"1", "true", "yes", "on"}


def _default_data_root() -> Path:
    backend_root = Path(__file__).resolve().parents[3]
    return backend_root / "data" / "tutorials"


def _read_bool(env: str, default: bool) -> bool:
    raw = os.getenv(env)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUTHY


def _read_int(env: str, default: int) -> int:
    raw = os.getenv(env)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Invalid %s=%s; using %s", env, raw, default)
        return default


def _read_list(env: str, default: List[str]) -> List[str]:
    raw = os.getenv(env)
    if raw is None:
        return list(default)
    items = [item.strip() for item in raw.split(",") if item.strip()]
    return items or list(default)


@dataclass(frozen=True)
class TutorialSettings:
    data_root: Path = field(default_factory=_default_data_root)
    title_case_sensitive: bool = False
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    host: str = "127.0.0.1"
    port: int = 8080
    log_level: str = "info"


def load_settings() -> TutorialSettings:
    """Build settings from the environment (and ``.env`` if present)."""

    override: Optional[str] = os.getenv("TUTORIAL_DATA_ROOT")
    data_root = Path(override) if override else _default_data_root()
    return TutorialSettings(
        data_root=data_root,
        title_case_sensitive=_read_bool("TUTORIAL_TITLE_CASE_SENSITIVE", False),
        cors_origins=_read_list("TUTORIAL_CORS_ORIGINS", ["*"]),
        host=os.getenv("TUTORIAL_HOST", "127.0.0.1"),
        port=_read_int("TUTORIAL_PORT", 8080),
        log_level=os.getenv("TUTORIAL_LOG_LEVEL", "info").lower(),
    )
