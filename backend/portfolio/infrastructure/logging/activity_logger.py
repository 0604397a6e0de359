"""Colored activity logger — ANSI-colored console lines for admin form activity.

Every fetch, submit, delete and upload performed by an entity form controller
is logged as a colored stage line, so one admin action can be traced through
the terminal output at a glance.

Color scheme:
    Cyan    — List fetches
    Blue    — Create / update submits
    Yellow  — Deletes
    Green   — Asset uploads
    Magenta — Auth
    Red     — Errors
    Gray    — Details / stats
"""

import logging
from typing import Any


class _Colors:
    """ANSI escape codes for terminal colors."""

    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    BLUE = "\033[94m"
    MAGENTA = "\033[95m"
    CYAN = "\033[96m"
    GRAY = "\033[90m"


class ActivityStage:
    """Predefined activity stages as ``(label, color, icon)`` triples."""

    FETCH = ("FETCH", _Colors.CYAN, "🔄")
    SUBMIT = ("SUBMIT", _Colors.BLUE, "📝")
    DELETE = ("DELETE", _Colors.YELLOW, "🗑️")
    UPLOAD = ("UPLOAD", _Colors.GREEN, "📁")
    AUTH = ("AUTH", _Colors.MAGENTA, "🔑")


class ActivityLogger:
    """Color-coded logger for admin form activity.

    Usage:
        log = ActivityLogger("portfolio.application.services.form_controller")
        log.step_start(ActivityStage.SUBMIT, "Creating blog post")
        log.step_complete(ActivityStage.SUBMIT, "Blog post created", id="42")
    """

    def __init__(self, component_name: str):
        self._logger = logging.getLogger(component_name)

    def step_start(self, stage: tuple[str, str, str], message: str, **kwargs: Any) -> None:
        label, color, icon = stage
        formatted = (
            f"{color}{_Colors.BOLD}{icon} [{label}]{_Colors.RESET} "
            f"{color}{message}{_Colors.RESET}"
        )
        self._logger.info(formatted + _details(kwargs))

    def step_complete(self, stage: tuple[str, str, str], message: str, **kwargs: Any) -> None:
        label, color, icon = stage
        formatted = (
            f"{color}{icon} [{label}]{_Colors.RESET} "
            f"{_Colors.GREEN}✓ {message}{_Colors.RESET}"
        )
        self._logger.info(formatted + _details(kwargs))

    def step_error(self, stage: tuple[str, str, str], message: str, error: Exception | None = None) -> None:
        """Log a failed step in red, with the error type and text when given."""
        label, _, _ = stage
        formatted = (
            f"{_Colors.RED}{_Colors.BOLD}❌ [{label}]{_Colors.RESET} "
            f"{_Colors.RED}{message}{_Colors.RESET}"
        )
        if error:
            formatted += f" {_Colors.DIM}→ {type(error).__name__}: {error}{_Colors.RESET}"
        self._logger.error(formatted)

    def detail(self, message: str, **kwargs: Any) -> None:
        formatted = f"   {_Colors.GRAY}├─ {message}{_Colors.RESET}"
        self._logger.info(formatted + _details(kwargs))

    def stats(self, **kwargs: Any) -> None:
        parts = [f"{k}: {v}" for k, v in kwargs.items()]
        self._logger.info(f"   {_Colors.GRAY}📈 {' | '.join(parts)}{_Colors.RESET}")


def _details(kwargs: dict[str, Any]) -> str:
    if not kwargs:
        return ""
    details = " | ".join(f"{k}={v}" for k, v in kwargs.items())
    return f" {_Colors.GRAY}({details}){_Colors.RESET}"
