"""Checks run on a rendered script before it is logged or submitted."""

from __future__ import annotations

import logging
import re
from pathlib import Path

LOGGER = logging.getLogger(__name__)

_PLACEHOLDER = re.compile(r"(?<!\$)\{[A-Za-z_][A-Za-z0-9_]*\}")


class SlurmValidationError(RuntimeError):
    """Raised when a rendered script is not fit for submission."""


def sbatch_directives(script_text: str) -> dict[str, str | None]:
    """Map each ``#SBATCH --option[=value]`` line to its value (``None`` for bare flags)."""
    directives: dict[str, str | None] = {}
    for line in script_text.splitlines():
        if not line.startswith("#SBATCH "):
            continue
        option, sep, value = line[len("#SBATCH ") :].strip().partition("=")
        directives[option] = value if sep else None
    return directives


def validate_job_script(rendered_path: str | Path, job_name: str) -> None:
    """Validate a rendered script file.

    The job name directive must carry ``job_name`` and no directive may keep
    an unreplaced ``{placeholder}``. Command lines are not inspected for
    placeholders since shell code may contain braces.

    Raises:
        SlurmValidationError: If validation fails.
    """
    rendered = Path(rendered_path).read_text()
    directives = sbatch_directives(rendered)

    if directives.get("--job-name") != job_name:
        raise SlurmValidationError("Rendered script missing job name directive")
    for option, value in directives.items():
        if value is not None and _PLACEHOLDER.search(value):
            raise SlurmValidationError(f"Unreplaced template placeholder in {option}: {value}")

    LOGGER.debug("Validated %d directives for job %s", len(directives), job_name)


__all__ = ["SlurmValidationError", "sbatch_directives", "validate_job_script"]
