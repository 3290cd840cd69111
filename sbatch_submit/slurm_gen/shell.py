"""Shell utilities for running SLURM commands."""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Sequence
from typing import IO

LOGGER = logging.getLogger(__name__)


def run_command(
    argv: Sequence[str],
    *,
    output: IO[bytes],
    check: bool = False,
    timeout: float | None = None,
) -> subprocess.CompletedProcess:
    """Run a command with stdout and stderr sent to ``output``.

    Args:
        argv: Command and arguments to run.
        output: Open binary file receiving stdout and stderr combined.
        check: Raise CalledProcessError on non-zero exit.
        timeout: Timeout in seconds.

    Returns:
        CompletedProcess with returncode.
    """
    LOGGER.debug("Running command: %s", " ".join(argv))
    result = subprocess.run(
        argv,
        check=check,
        stdout=output,
        stderr=subprocess.STDOUT,
        timeout=timeout,
    )
    LOGGER.debug("Command returned: %d", result.returncode)
    return result


__all__ = ["run_command"]
