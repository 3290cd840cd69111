"""Utilities to render SBATCH scripts from templates."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path

LOGGER = logging.getLogger(__name__)

# Shell braces that must survive str.format are written doubled: ${{VAR}}.
DEFAULT_TEMPLATE = """\
#!/bin/bash
#SBATCH --job-name={job_name}
#SBATCH --account={account}
#SBATCH --partition={partition}
#SBATCH --nodes={nodes}
#SBATCH --ntasks-per-node={ntasks_per_node}
#SBATCH --time={walltime}
#SBATCH --mem={memory}
#SBATCH --chdir={workdir}
#SBATCH --mail-type={mail_type}
#SBATCH --mail-user={email}
#SBATCH --export=ALL

echo "Working directory: $(pwd)"
echo "Hostname: $(hostname)"
echo "Started: $(date)"

echo "Setup command 1:" {setup_command_1_echo}
echo "Setup command 2:" {setup_command_2_echo}
echo "Command:" {command_echo}

source {profile}

{setup_command_1}
{setup_command_2}
(time {command} | tee {output_path})

echo "Finished: $(date)"
"""


class SbatchTemplateError(RuntimeError):
    """Raised when template rendering fails."""

    pass


def load_template(template_path: str | Path | None = None) -> str:
    """Return the template text, either the built-in one or a custom file."""
    if template_path is None:
        return DEFAULT_TEMPLATE
    path = Path(template_path).expanduser()
    try:
        return path.read_text()
    except OSError as exc:
        raise SbatchTemplateError(f"Unable to read template {path}: {exc}") from exc


def render_template(template_text: str, replacements: Mapping[str, str]) -> str:
    """Render a template string with the given replacements.

    Args:
        template_text: Template string with {placeholder} variables.
        replacements: Mapping of placeholder names to values.

    Returns:
        Rendered string with placeholders replaced.

    Raises:
        SbatchTemplateError: If a required placeholder is missing or the
            template is malformed.
    """
    try:
        return template_text.format(**replacements)
    except KeyError as exc:
        missing = exc.args[0]
        raise SbatchTemplateError(f"Missing template variable: {missing}") from exc
    except (IndexError, ValueError) as exc:
        raise SbatchTemplateError(f"Malformed template: {exc}") from exc


__all__ = ["DEFAULT_TEMPLATE", "load_template", "render_template", "SbatchTemplateError"]
