"""Per-category log levels for the portfolio API.

Each category has a ``log_level_<category>`` setting and covers a few logger
namespaces. Child loggers inherit, so only the namespace roots are listed.
"""

import logging
import sys

from portfolio.config import Settings, get_settings

logger = logging.getLogger(__name__)

CATEGORIES: dict[str, tuple[str, ...]] = {
    "sql": ("sqlalchemy.engine",),
    "http": ("httpx", "httpcore"),
    "uvicorn": ("uvicorn",),
    "gateway": (
        "portfolio.infrastructure.supabase",
        "portfolio.infrastructure.database",
        "portfolio.infrastructure.memory",
        "portfolio.infrastructure.storage",
    ),
    "forms": (
        "portfolio.application.services",
        "portfolio.infrastructure.notifications",
    ),
}


def setup_logging(settings: Settings | None = None) -> dict[str, int]:
    """Apply the root and per-category levels; returns the level per category."""
    settings = settings or get_settings()

    root = logging.getLogger()
    root.setLevel(_parse_level("log_level", settings.log_level))
    # uvicorn installs its own handler; bare test or script runs do not
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)-8s %(name)s - %(message)s"))
        root.addHandler(handler)

    applied = {}
    for category, namespaces in CATEGORIES.items():
        setting = f"log_level_{category}"
        level = _parse_level(setting, getattr(settings, setting))
        for name in namespaces:
            logging.getLogger(name).setLevel(level)
        applied[category] = level

    logger.debug(
        "Log levels: root=%s %s",
        settings.log_level,
        " ".join(f"{category}={logging.getLevelName(level)}" for category, level in applied.items()),
    )
    return applied


def _parse_level(setting: str, raw: str) -> int:
    level = logging.getLevelName(raw.strip().upper())
    if isinstance(level, int):
        return level
    logger.warning("Unknown level %r for %s; using INFO", raw, setting)
    return logging.INFO
