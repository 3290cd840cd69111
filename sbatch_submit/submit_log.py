"""Append-only record of submitted scripts and dry-run archives."""

from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path

LOGGER = logging.getLogger(__name__)

SEPARATOR = "=" * 80


class SubmitLogError(RuntimeError):
    """Raised when the log directory or file cannot be written."""


def ensure_log_dir(log_dir: str | Path) -> Path:
    log_dir = Path(log_dir)
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise SubmitLogError(f"Unable to create log directory {log_dir}: {exc}") from exc
    return log_dir


def format_entry(timestamp: str, script_text: str) -> str:
    """Build one log block: separator, timestamp, separator, script."""
    body = script_text if script_text.endswith("\n") else script_text + "\n"
    return f"{SEPARATOR}\n{timestamp}\n{SEPARATOR}\n{body}"


def append_entry(log_path: str | Path, timestamp: str, script_text: str) -> Path:
    """Append a block for ``script_text`` to ``log_path``.

    The block goes out in a single ``write`` on an ``O_APPEND`` descriptor,
    so entries from concurrent invocations stay contiguous.
    """
    log_path = Path(log_path)
    ensure_log_dir(log_path.parent)
    data = format_entry(timestamp, script_text).encode()
    try:
        fd = os.open(log_path, os.O_WRONLY | os.O_APPEND | os.O_CREAT, 0o644)
    except OSError as exc:
        raise SubmitLogError(f"Unable to open submission log {log_path}: {exc}") from exc
    try:
        written = os.write(fd, data)
    finally:
        os.close(fd)
    if written != len(data):
        raise SubmitLogError(f"Short write to {log_path}: {written} of {len(data)} bytes")
    LOGGER.debug("Appended %d bytes to %s", written, log_path)
    return log_path


def archive_dry_run(script_path: str | Path, log_dir: str | Path, timestamp: str, job_name: str) -> Path:
    """Copy a dry-run script to ``<log_dir>/<timestamp>-<job_name>``."""
    target = ensure_log_dir(log_dir) / f"{timestamp}-{job_name}"
    shutil.copyfile(script_path, target)
    LOGGER.debug("Archived dry run script to %s", target)
    return target


__all__ = [
    "SEPARATOR",
    "SubmitLogError",
    "append_entry",
    "archive_dry_run",
    "ensure_log_dir",
    "format_entry",
]
