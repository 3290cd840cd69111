"""SBATCH script generation helpers."""

from __future__ import annotations

import logging
import os
import shlex
import tempfile
from datetime import datetime
from pathlib import Path

from sbatch_submit.config.schema import JobRequest, SubmitSettings
from sbatch_submit.slurm_gen.template_renderer import load_template, render_template

LOGGER = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y%m%dT%H%M%S"


def make_timestamp(now: datetime | None = None) -> str:
    """Format the process-wide timestamp (``YYYYMMDDTHHMMSS``)."""
    return (now or datetime.now()).strftime(TIMESTAMP_FORMAT)


def build_replacements(
    request: JobRequest,
    settings: SubmitSettings,
    *,
    timestamp: str,
) -> dict[str, str]:
    setup = list(request.setup_commands) + [""] * (2 - len(request.setup_commands))
    return {
        "job_name": request.job_name,
        "account": request.account,
        "partition": request.partition,
        "nodes": str(request.nodes),
        "ntasks_per_node": str(request.ntasks_per_node),
        "walltime": request.walltime,
        "memory": request.memory,
        "workdir": shlex.quote(str(request.workdir)),
        "mail_type": settings.mail_type if request.notifications_enabled else "NONE",
        "email": request.email,
        "profile": settings.profile,
        "setup_command_1": setup[0],
        "setup_command_2": setup[1],
        "setup_command_1_echo": shlex.quote(setup[0]),
        "setup_command_2_echo": shlex.quote(setup[1]),
        "command": request.command,
        "command_echo": shlex.quote(request.command),
        "output_path": shlex.quote(str(request.output_path(timestamp))),
        "timestamp": timestamp,
    }


def render_script(request: JobRequest, settings: SubmitSettings, *, timestamp: str) -> str:
    """Render the submission script text for ``request``."""
    template_text = load_template(settings.template_path)
    return render_template(template_text, build_replacements(request, settings, timestamp=timestamp))


def generate_script(
    request: JobRequest,
    settings: SubmitSettings,
    *,
    timestamp: str,
    tmp_dir: str | Path | None = None,
) -> Path:
    """Render the script into a new, uniquely named temporary file.

    The file name starts with ``<timestamp>-<jobname>-`` so concurrent
    invocations never share a script. The caller owns the file and must
    delete it.
    """
    rendered = render_script(request, settings, timestamp=timestamp)
    fd, name = tempfile.mkstemp(
        prefix=f"{timestamp}-{request.job_name}-",
        suffix=".sbatch",
        dir=tmp_dir,
    )
    try:
        with os.fdopen(fd, "w") as handle:
            handle.write(rendered)
    except BaseException:
        os.unlink(name)
        raise
    LOGGER.debug("Rendered script for job %s to %s", request.job_name, name)
    return Path(name)


__all__ = [
    "TIMESTAMP_FORMAT",
    "build_replacements",
    "generate_script",
    "make_timestamp",
    "render_script",
]
