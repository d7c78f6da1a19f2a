"""Process-level logging helpers."""

from __future__ import annotations

import inspect
import logging
import sys

from loguru import logger

from stlc.config import CalculusSettings, LogProfile, load_settings

_PROFILE_FORMATS: dict[LogProfile, str] = {
    "compact": "{level} | {message}",
    "default": "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<6} | {name}:{function}:{line} | {message}",
}
_CONFIGURED: tuple[LogProfile, str] | None = None


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


def parse_log_filter(spec: str) -> tuple[str, dict[str | None, str | int | bool]]:
    """Parse a log filter string.

    Format: "level" or "level,module1=level,module2=false"
    Examples:
        - "info" - global INFO level
        - "info,stlc.eval=debug" - global INFO, stlc.eval at DEBUG
        - "debug,stlc.core=false" - global DEBUG, stlc.core disabled

    Returns:
        (global_level, module_filter_dict)
    """
    parts = [p.strip() for p in spec.lower().split(",") if p.strip()]

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


def configure_logging(settings: CalculusSettings | None = None) -> None:
    """Configure process-level logging once per (profile, filter) pair.

    Log levels come from ``settings.log_filter`` (env ``STLC_LOG_FILTER``).
    Module-level overrides may only lower the threshold for that module, so
    the sink itself accepts everything down to TRACE and the filter decides.
    """
    global _CONFIGURED

    if settings is None:
        settings = load_settings()
    profile = settings.log_profile
    key = (profile, settings.log_filter)
    if key == _CONFIGURED:
        return

    global_level, module_filter = parse_log_filter(settings.log_filter)
    module_filter.setdefault("", global_level.upper())

    logger.remove()
    logger.add(
        sys.stderr,
        level="TRACE",
        format=_PROFILE_FORMATS[profile],
        backtrace=False,
        diagnose=False,
        filter=module_filter,
    )

    root = logging.getLogger()
    if not any(isinstance(h, InterceptHandler) for h in root.handlers):
        root.addHandler(InterceptHandler())

    _CONFIGURED = key
