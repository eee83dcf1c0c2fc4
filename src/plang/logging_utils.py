"""Runtime logging helpers."""

from __future__ import annotations

import inspect
import logging
import os
import sys
from logging import Handler
from typing import Literal

from loguru import logger
from rich.console import Console
from rich.logging import RichHandler

LogProfile = Literal["default", "repl"]

_DEFAULT_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<6} | {name}:{function}:{line} | {message}"
_CONFIGURED_PROFILE: LogProfile | None = None


class InterceptHandler(logging.Handler):
    """Handler that forwards stdlib logging messages to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = inspect.currentframe(), 0
        while frame:
            filename = frame.f_code.co_filename
            is_logging = filename == logging.__file__
            is_frozen = "importlib" in filename and "_bootstrap" in filename
            if depth > 0 and not (is_logging or is_frozen):
                break
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def _build_repl_handler() -> Handler:
    # stdout belongs to program output
    return RichHandler(
        console=Console(stderr=True),
        show_level=True,
        show_time=False,
        show_path=False,
        markup=False,
        rich_tracebacks=False,
    )


def parse_log_filter(filter_env: str | None = None) -> tuple[str, dict[str | None, str | int | bool]]:
    """Parse a PLANG_LOG_FILTER value.

    Format: "level" or "level,module=level,..."
    Examples:
        - "info" - global INFO level
        - "debug,plang.eval=debug" - global DEBUG, plang.eval at DEBUG
        - "info,plang.surface=false" - global INFO, plang.surface disabled

    Returns:
        (global_level, module_filter_dict)
    """
    if filter_env is None:
        filter_env = os.getenv("PLANG_LOG_FILTER", "warning")
    parts = [p.strip() for p in filter_env.lower().split(",") if p.strip()]

    filter_dict: dict[str | None, str | int | bool] = {}
    global_level = "warning"

    for part in parts:
        if "=" in part:
            module, level = part.split("=", 1)
            module = module.strip()
            level = level.strip()
            if level == "false":
                filter_dict[module] = False
            else:
                filter_dict[module] = level.upper()
        else:
            global_level = part

    return global_level, filter_dict


def configure_logging(*, profile: LogProfile = "default") -> None:
    """Configure process-level logging once per profile.

    Log levels are controlled by PLANG_LOG_FILTER (see ``parse_log_filter``).
    All sinks write to stderr.
    """
    global _CONFIGURED_PROFILE
    if profile == _CONFIGURED_PROFILE:
        return

    global_level, module_filter = parse_log_filter()
    # The "" entry is the default for modules without their own level
    module_filter = {"": global_level.upper(), **module_filter}

    logger.remove()

    if profile == "repl":
        logger.add(
            _build_repl_handler(),
            level=0,
            format="{message}",
            backtrace=False,
            diagnose=False,
            filter=module_filter,
        )
    else:
        logger.add(
            sys.stderr,
            level=0,
            format=_DEFAULT_FORMAT,
            backtrace=False,
            diagnose=False,
            filter=module_filter,
        )

    logging.getLogger().addHandler(InterceptHandler())

    _CONFIGURED_PROFILE = profile
