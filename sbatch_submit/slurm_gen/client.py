"""SLURM client that hands generated scripts to the submission binary."""

from __future__ import annotations

import logging
import shlex
from dataclasses import dataclass
from pathlib import Path

from sbatch_submit.config.schema import JobRequest
from sbatch_submit.slurm_gen.shell import run_command

LOGGER = logging.getLogger(__name__)


class SubmissionError(RuntimeError):
    """Raised when the submission binary cannot be executed at all."""


@dataclass(frozen=True)
class SubmissionResult:
    """Outcome of handing a script to the scheduler.

    Attributes:
        argv: The command that was executed.
        return_code: Exit code of the submission binary. Not interpreted.
        log_path: File that received the binary's combined output.
    """

    argv: tuple[str, ...]
    return_code: int
    log_path: Path


class SlurmClient:
    """Executes the configured submission command (``sbatch`` by default).

    The scheduler's verdict is not inspected: whatever the binary prints is
    appended to the submission log and the exit code is only recorded.
    """

    def __init__(self, submit_cmd: str = "sbatch") -> None:
        self.submit_cmd = submit_cmd

    def build_argv(self, script_path: str | Path, request: JobRequest) -> list[str]:
        return [
            *shlex.split(self.submit_cmd),
            "-p",
            request.partition,
            "-A",
            request.account,
            str(script_path),
        ]

    def submit(
        self,
        script_path: str | Path,
        request: JobRequest,
        log_path: str | Path,
    ) -> SubmissionResult:
        """Submit ``script_path`` and append the binary's output to ``log_path``.

        Raises:
            SubmissionError: If the submission binary cannot be started.
        """
        argv = self.build_argv(script_path, request)
        log_path = Path(log_path)
        with open(log_path, "ab") as log_handle:
            try:
                proc = run_command(argv, output=log_handle)
            except OSError as exc:
                raise SubmissionError(f"Unable to run {argv[0]}: {exc}") from exc
        LOGGER.debug("submit: %s exited with %d", argv[0], proc.returncode)
        if proc.returncode != 0:
            LOGGER.info(
                "submit: %s returned %d for job %s, see %s",
                argv[0],
                proc.returncode,
                request.job_name,
                log_path,
            )
        return SubmissionResult(argv=tuple(argv), return_code=proc.returncode, log_path=log_path)


__all__ = ["SlurmClient", "SubmissionError", "SubmissionResult"]
