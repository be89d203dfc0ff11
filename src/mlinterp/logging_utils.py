"""Runtime logging helpers."""

from __future__ import annotations

import inspect
import logging
import os
import sys
from typing import Literal

from loguru import logger

LogProfile = Literal["default", "compact"]

_PROFILE_FORMATS: dict[LogProfile, str] = {
    "compact": "{level} | {message}",
    "default": "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<6} | {name}:{function}:{line} | {message}",
}
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


def parse_log_filter(filter_env: str | None = None) -> tuple[str, dict[str | None, str | int | bool]]:
    """Parse MLINTERP_LOG_FILTER.

    Format: "level" or "level,module1=level,module2=false"
    Examples:
        - "info" - global INFO level
        - "debug,mlinterp.eval=debug" - global DEBUG, mlinterp.eval at DEBUG
        - "info,mlinterp.eval=false" - global INFO, mlinterp.eval disabled

    Returns:
        (global_level, module_filter_dict)
    """
    if filter_env is None:
        filter_env = os.getenv("MLINTERP_LOG_FILTER", "info")
    parts = [p.strip() for p in filter_env.lower().split(",") if p.strip()]

    filter_dict: dict[str | None, str | int | bool] = {}
    global_level = "info"

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


def _setup_stdlib_intercept() -> None:
    """Forward stdlib logging to loguru."""
    root_logger = logging.getLogger()
    if not any(isinstance(h, InterceptHandler) for h in root_logger.handlers):
        root_logger.addHandler(InterceptHandler())


def configure_logging(*, profile: LogProfile = "default") -> None:
    """Configure process-level logging once and enable mlinterp's loggers.

    Log levels are controlled by MLINTERP_LOG_FILTER (see parse_log_filter).
    """
    global _CONFIGURED_PROFILE
    if profile == _CONFIGURED_PROFILE:
        return

    global_level, module_filter = parse_log_filter()

    logger.remove()
    logger.add(
        sys.stderr,
        level=global_level.upper(),
        format=_PROFILE_FORMATS[profile],
        backtrace=False,
        diagnose=False,
        filter=module_filter,
    )
    logger.enable("mlinterp")

    _setup_stdlib_intercept()

    _CONFIGURED_PROFILE = profile
