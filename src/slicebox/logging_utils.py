"""Runtime logging helpers."""

from __future__ import annotations

import contextlib
import sys
from collections.abc import Generator
from contextvars import ContextVar
from logging import Handler
from typing import Literal

import loguru
from loguru import logger
from rich import get_console
from rich.logging import RichHandler

LogProfile = Literal["default", "console"]

_PROFILE_FORMATS: dict[LogProfile, str] = {
    "console": "{message}",
    "default": "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<6} | {name}:{function}:{line} | {extra[action]} | {message}",
}
_CONFIGURED_PROFILE: LogProfile | None = None
_action_context: ContextVar[str] = ContextVar("action")


def current_action() -> str:
    """Get the type of the action being dispatched in this context."""
    return _action_context.get("-")


@contextlib.contextmanager
def action_context(action_type: str) -> Generator[str, None, None]:
    token = _action_context.set(action_type)
    try:
        yield action_type
    finally:
        _action_context.reset(token)


def _build_console_handler() -> Handler:
    return RichHandler(
        console=get_console(),
        show_level=True,
        show_time=False,
        show_path=False,
        markup=False,
        rich_tracebacks=False,
    )


def configure_logging(*, profile: LogProfile = "default", level: str = "INFO") -> None:
    """Configure process-level logging once."""
    def inject_context(record: loguru.Record) -> None:
        record["extra"]["action"] = current_action()

    global _CONFIGURED_PROFILE
    if profile == _CONFIGURED_PROFILE:
        return

    logger.remove()
    logger.configure(patcher=inject_context)
    if profile == "console":
        logger.add(
            _build_console_handler(),
            level=level.upper(),
            format=_PROFILE_FORMATS[profile],
            backtrace=False,
            diagnose=False,
        )
    else:
        logger.add(
            sys.stderr,
            level=level.upper(),
            format=_PROFILE_FORMATS[profile],
            backtrace=False,
            diagnose=False,
        )
    _CONFIGURED_PROFILE = profile
