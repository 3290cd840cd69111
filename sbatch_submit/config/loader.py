"""Helpers for reading the settings file into ``SubmitSettings``."""

from __future__ import annotations

import logging
import os
from dataclasses import asdict
from pathlib import Path
from typing import Any
from collections.abc import Mapping

from compoconf import parse_config
from omegaconf import OmegaConf

from .schema import SubmitSettings

LOGGER = logging.getLogger(__name__)

SETTINGS_ENV = "SBATCH_SUBMIT_CONFIG"
DEFAULT_SETTINGS_PATH = Path("~/.config/sbatch-submit/settings.yaml")


class ConfigLoaderError(RuntimeError):
    """Raised when the settings file cannot be parsed."""


def _load_yaml(path: str | Path) -> Mapping[str, Any] | None:
    cfg = OmegaConf.load(path)
    return OmegaConf.to_container(cfg, resolve=True)  # type: ignore[return-value]


def resolve_settings_path(explicit: str | Path | None = None) -> tuple[Path, bool]:
    """Pick the settings file to read.

    Returns:
        The candidate path and whether it was requested explicitly (via the
        command line or ``SBATCH_SUBMIT_CONFIG``).
    """
    if explicit:
        return Path(explicit).expanduser(), True
    env_path = os.environ.get(SETTINGS_ENV)
    if env_path:
        return Path(env_path).expanduser(), True
    return DEFAULT_SETTINGS_PATH.expanduser(), False


def load_settings(path: str | Path | None = None) -> SubmitSettings:
    """Load settings, falling back to built-in defaults.

    A missing default settings file is fine; a missing file that was asked
    for explicitly is an error.
    """
    settings_path, explicit = resolve_settings_path(path)
    if not settings_path.exists():
        if explicit:
            raise ConfigLoaderError(f"Settings file not found: {settings_path}")
        LOGGER.debug("No settings file at %s, using built-in defaults", settings_path)
        return SubmitSettings()

    try:
        data = _load_yaml(settings_path)
    except Exception as exc:
        raise ConfigLoaderError(f"Unable to read settings {settings_path}: {exc}") from exc
    if data is None:
        return SubmitSettings()
    if not isinstance(data, Mapping):
        raise ConfigLoaderError(f"Settings root must be a mapping: {settings_path}")

    try:
        settings = parse_config(SubmitSettings, dict(data))
    except Exception as exc:  # pragma: no cover - compoconf raises rich errors
        raise ConfigLoaderError(f"Unable to parse settings {settings_path}: {exc}") from exc
    LOGGER.info("Loaded settings from %s", settings_path)
    return settings


def dump_settings(settings: SubmitSettings) -> str:
    """Render settings as YAML for display."""
    data = asdict(settings)
    data.pop("class_name", None)
    return OmegaConf.to_yaml(OmegaConf.create(data))


__all__ = [
    "ConfigLoaderError",
    "DEFAULT_SETTINGS_PATH",
    "SETTINGS_ENV",
    "dump_settings",
    "load_settings",
    "resolve_settings_path",
]
