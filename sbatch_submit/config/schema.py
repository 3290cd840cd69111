"""Configuration dataclasses for sbatch_submit.

``SubmitSettings`` carries the defaults and fixed collaborators of the
tool and is designed for use with compoconf so that it can be read from a
YAML settings file. ``JobRequest`` is the immutable per-invocation record
built by the command line parser.
"""

from __future__ import annotations

import getpass
import re
from dataclasses import dataclass, field
from pathlib import Path

from compoconf import ConfigInterface

WALLTIME_PATTERN = re.compile(r"^(\d+-)?\d{1,3}:[0-5]\d:[0-5]\d$")
MEMORY_PATTERN = re.compile(r"^\d+[KMGT]?$")
JOB_NAME_PATTERN = re.compile(r"[^\s/{}]+")


class JobRequestError(ValueError):
    """Raised when a job request carries an invalid value."""


@dataclass(kw_only=True)
class SubmitSettings(ConfigInterface):
    """Defaults and collaborators used when rendering and submitting jobs.

    Attributes:
        job_name: Job name used when ``-j`` is not given.
        nodes: Default node count.
        ntasks_per_node: Default tasks per node.
        memory: Default memory request, with unit suffix.
        walltime: Default walltime (``H:MM:SS``).
        account: Account charged for the job.
        partition: Partition the job is queued on.
        email: Notification address; ``None`` means the invoking user.
        mail_domain: Domain appended to the user name for the default address.
        mail_type: SLURM ``--mail-type`` used when an address is set.
        profile: Shell profile sourced by the job before running commands.
        submit_cmd: Submission binary (may include extra arguments).
        log_dir: Directory, relative to the invocation location, for logs.
        log_name: Name of the append-only submission log inside ``log_dir``.
        template_path: Optional custom script template.
    """

    class_name: str = "SubmitSettings"
    job_name: str = "untitled"
    nodes: int = 1
    ntasks_per_node: int = 28
    memory: str = "10G"
    walltime: str = "1:00:00"
    account: str = "default"
    partition: str = "standard"
    email: str | None = None
    mail_domain: str | None = None
    mail_type: str = "END,FAIL"
    profile: str = "~/.bash_profile"
    submit_cmd: str = "sbatch"
    log_dir: str = "logs"
    log_name: str = "submit_log"
    template_path: str | None = None

    def default_email(self) -> str:
        if self.email is not None:
            return self.email
        user = getpass.getuser()
        if self.mail_domain:
            return f"{user}@{self.mail_domain}"
        return user


@dataclass(frozen=True, kw_only=True)
class JobRequest:
    """A single job submission, fixed once the command line is parsed."""

    command: str
    job_name: str = "untitled"
    nodes: int = 1
    ntasks_per_node: int = 28
    memory: str = "10G"
    walltime: str = "1:00:00"
    workdir: Path = field(default_factory=Path.cwd)
    account: str = "default"
    partition: str = "standard"
    email: str = ""
    setup_commands: tuple[str, ...] = ()
    dry_run: bool = False

    def __post_init__(self) -> None:
        if not self.command or not self.command.strip():
            raise JobRequestError("a command to run is required")
        if not JOB_NAME_PATTERN.fullmatch(self.job_name):
            raise JobRequestError(
                f"invalid job name {self.job_name!r}; whitespace, slashes and braces are not allowed"
            )
        if len(self.setup_commands) > 2:
            raise JobRequestError("at most two setup commands are supported")
        if self.nodes < 1:
            raise JobRequestError(f"node count must be positive, got {self.nodes}")
        if self.ntasks_per_node < 1:
            raise JobRequestError(f"tasks per node must be positive, got {self.ntasks_per_node}")
        if not WALLTIME_PATTERN.match(self.walltime):
            raise JobRequestError(f"walltime must look like H:MM:SS, got {self.walltime!r}")
        if not MEMORY_PATTERN.match(self.memory):
            raise JobRequestError(f"memory must look like 10G, got {self.memory!r}")

    @property
    def notifications_enabled(self) -> bool:
        return bool(self.email)

    def output_path(self, timestamp: str) -> Path:
        """Where the generated script tees the command's output."""
        return Path(self.workdir) / f"{timestamp}-{self.job_name}.out"


__all__ = [
    "JobRequest",
    "JobRequestError",
    "SubmitSettings",
    "JOB_NAME_PATTERN",
    "MEMORY_PATTERN",
    "WALLTIME_PATTERN",
]
