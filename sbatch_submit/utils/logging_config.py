"""Diagnostic logging setup for the sbatch-submit command.

Diagnostics go to stderr only; the submission log under ``logs/`` is never
touched by the logging module.
"""

from __future__ import annotations

import logging
import os
from typing import Literal

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

LOG_LEVEL_ENV = "SBATCH_SUBMIT_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_NAMED_LEVELS: dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def get_log_level_from_env(default: int = logging.INFO, env_var: str = LOG_LEVEL_ENV) -> int:
    """Read a level name such as ``DEBUG`` from ``env_var``; unknown names give ``default``."""
    return _NAMED_LEVELS.get(os.getenv(env_var, "").strip().upper(), default)


def resolve_log_level(
    *,
    verbose: bool = False,
    debug: bool = False,
    level: int | None = None,
    respect_env: bool = True,
) -> int:
    """Explicit level, then ``--debug``, then ``--verbose``, then the environment, then WARNING."""
    if level is not None:
        return level
    if debug:
        return logging.DEBUG
    if verbose:
        return logging.INFO
    if respect_env:
        return get_log_level_from_env(default=logging.WARNING)
    return logging.WARNING


def configure_logging(
    verbose: bool = False,
    debug: bool = False,
    level: int | None = None,
    respect_env: bool = True,
) -> int:
    """Install the stderr handler and return the level applied."""
    final_level = resolve_log_level(verbose=verbose, debug=debug, level=level, respect_env=respect_env)
    logging.basicConfig(level=final_level, format=LOG_FORMAT, datefmt=DATE_FORMAT, force=True)
    return final_level


__all__ = [
    "LOG_LEVEL_ENV",
    "LogLevel",
    "configure_logging",
    "get_log_level_from_env",
    "resolve_log_level",
]
