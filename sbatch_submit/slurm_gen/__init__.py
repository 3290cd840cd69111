"""slurm_gen - SLURM script generation and submission utilities.

This library provides:
- Template rendering for SBATCH scripts
- Script validation utilities
- A thin client around the submission binary

Example usage:
    from sbatch_submit.slurm_gen import generate_script, make_timestamp

    path = generate_script(request, settings, timestamp=make_timestamp())
"""

from sbatch_submit.slurm_gen.template_renderer import (
    DEFAULT_TEMPLATE,
    load_template,
    render_template,
    SbatchTemplateError,
)
from sbatch_submit.slurm_gen.generator import (
    build_replacements,
    generate_script,
    make_timestamp,
    render_script,
)
from sbatch_submit.slurm_gen.validator import (
    sbatch_directives,
    validate_job_script,
    SlurmValidationError,
)
from sbatch_submit.slurm_gen.client import (
    SlurmClient,
    SubmissionError,
    SubmissionResult,
)

__all__ = [
    # Template rendering
    "DEFAULT_TEMPLATE",
    "load_template",
    "render_template",
    "SbatchTemplateError",
    # Validation
    "sbatch_directives",
    "validate_job_script",
    "SlurmValidationError",
    # Generation
    "build_replacements",
    "generate_script",
    "make_timestamp",
    "render_script",
    # Submission
    "SlurmClient",
    "SubmissionError",
    "SubmissionResult",
]
