"""Command line interface for sbatch_submit."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from sbatch_submit import __version__
from sbatch_submit.config.loader import ConfigLoaderError, dump_settings, load_settings
from sbatch_submit.config.schema import JobRequest, JobRequestError, SubmitSettings
from sbatch_submit.slurm_gen.client import SlurmClient, SubmissionError
from sbatch_submit.slurm_gen.generator import generate_script, make_timestamp
from sbatch_submit.slurm_gen.template_renderer import SbatchTemplateError
from sbatch_submit.slurm_gen.validator import SlurmValidationError, validate_job_script
from sbatch_submit.submit_log import SubmitLogError, append_entry, archive_dry_run
from sbatch_submit.utils.logging_config import configure_logging

LOGGER = logging.getLogger(__name__)

EXIT_USAGE = 1
CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


class UsageError(click.UsageError):
    exit_code = EXIT_USAGE


class SubmitCommand(click.Command):
    """Command whose parse failures exit with status 1 instead of click's 2."""

    def make_context(self, info_name, args, parent=None, **extra):
        try:
            return super().make_context(info_name, args, parent=parent, **extra)
        except click.UsageError as exc:
            exc.exit_code = EXIT_USAGE
            raise


def build_request(
    settings: SubmitSettings,
    *,
    command: str,
    setup_commands: tuple[str, ...],
    job_name: str | None,
    nodes: int | None,
    ntasks_per_node: int | None,
    walltime: str | None,
    memory: str | None,
    workdir: Path | None,
    account: str | None,
    partition: str | None,
    email: str | None,
    dry_run: bool,
) -> JobRequest:
    """Merge command line values over the settings defaults."""

    def pick(value, default):
        return default if value is None else value

    return JobRequest(
        command=command,
        setup_commands=tuple(cmd for cmd in setup_commands if cmd is not None),
        job_name=pick(job_name, settings.job_name),
        nodes=pick(nodes, settings.nodes),
        ntasks_per_node=pick(ntasks_per_node, settings.ntasks_per_node),
        walltime=pick(walltime, settings.walltime),
        memory=pick(memory, settings.memory),
        workdir=Path.cwd() if workdir is None else workdir.expanduser().resolve(),
        account=pick(account, settings.account),
        partition=pick(partition, settings.partition),
        email=email if email is not None else settings.default_email(),
        dry_run=dry_run,
    )


@click.command(cls=SubmitCommand, context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, "-v", "--version", prog_name="sbatch-submit")
@click.option("-s", "--settings", "show_settings", is_flag=True, help="Show the default settings and exit")
@click.option("-D", "--dryrun", "dry_run", is_flag=True, help="Print the generated script without submitting it")
@click.option("-n", "--nodes", type=int, help="Number of nodes [default: 1]")
@click.option("-N", "--ntasks-per-node", "ntasks_per_node", type=int, help="Tasks per node [default: 28]")
@click.option("-t", "--time", "walltime", metavar="H:MM:SS", help="Walltime [default: 1:00:00]")
@click.option("-m", "--mem", "memory", metavar="MEM", help="Memory with unit suffix [default: 10G]")
@click.option(
    "-d", "--workdir", type=click.Path(path_type=Path), help="Working directory [default: current directory]"
)
@click.option("-j", "--job-name", "job_name", help="Job name [default: untitled]")
@click.option("-A", "--account", help="Account charged for the job")
@click.option("-P", "--partition", help="Partition to queue the job on")
@click.option("-E", "--email", help="Notification address; an empty string disables notifications")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    help="Settings file [default: $SBATCH_SUBMIT_CONFIG or ~/.config/sbatch-submit/settings.yaml]",
)
@click.option("--verbose", is_flag=True, help="Log progress to stderr")
@click.option("--debug", is_flag=True, help="Log debug details to stderr")
@click.argument("command", required=False)
@click.argument("setup_1", required=False)
@click.argument("setup_2", required=False)
@click.pass_context
def cli(
    ctx: click.Context,
    show_settings: bool,
    dry_run: bool,
    nodes: int | None,
    ntasks_per_node: int | None,
    walltime: str | None,
    memory: str | None,
    workdir: Path | None,
    job_name: str | None,
    account: str | None,
    partition: str | None,
    email: str | None,
    config_path: Path | None,
    verbose: bool,
    debug: bool,
    command: str | None,
    setup_1: str | None,
    setup_2: str | None,
) -> None:
    """Render a SLURM batch script for COMMAND and submit it.

    SETUP_1 and SETUP_2 are optional commands run, in order, before COMMAND.
    Every submitted script is appended to logs/submit_log together with the
    scheduler's response.
    """
    timestamp = make_timestamp()
    configure_logging(verbose=verbose, debug=debug)

    if not show_settings and (not command or not command.strip()):
        raise UsageError("Missing argument 'COMMAND'.", ctx=ctx)

    try:
        settings = load_settings(config_path)
    except ConfigLoaderError as exc:
        raise click.ClickException(str(exc)) from exc

    if show_settings:
        click.echo("The following default settings are in use:")
        click.echo(dump_settings(settings), nl=False)
        ctx.exit(0)

    try:
        request = build_request(
            settings,
            command=command,
            setup_commands=(setup_1, setup_2),
            job_name=job_name,
            nodes=nodes,
            ntasks_per_node=ntasks_per_node,
            walltime=walltime,
            memory=memory,
            workdir=workdir,
            account=account,
            partition=partition,
            email=email,
            dry_run=dry_run,
        )
    except JobRequestError as exc:
        raise UsageError(str(exc), ctx=ctx) from exc
    except (OSError, KeyError) as exc:
        raise click.ClickException(
            f"Unable to determine the invoking user for the default email ({exc}); pass -E/--email"
        ) from exc

    log_dir = Path.cwd() / settings.log_dir
    try:
        script_path = generate_script(request, settings, timestamp=timestamp)
    except (OSError, SbatchTemplateError) as exc:
        raise click.ClickException(f"Unable to generate job script: {exc}") from exc

    try:
        validate_job_script(script_path, request.job_name)
        script_text = script_path.read_text()
        if request.dry_run:
            archived = archive_dry_run(script_path, log_dir, timestamp, request.job_name)
            click.echo(script_text, nl=False)
        else:
            log_path = append_entry(log_dir / settings.log_name, timestamp, script_text)
            result = SlurmClient(settings.submit_cmd).submit(script_path, request, log_path)
    except (OSError, SlurmValidationError, SubmitLogError, SubmissionError) as exc:
        raise click.ClickException(str(exc)) from exc
    finally:
        script_path.unlink(missing_ok=True)

    if request.dry_run:
        click.echo(f"Dry run complete for job '{request.job_name}'; script saved to {archived}")
        return

    LOGGER.info("Submission command: %s", " ".join(result.argv))
    click.echo(
        f"Job '{request.job_name}' handed to {result.argv[0]}; "
        f"scheduler output logged to {result.log_path}"
    )


def main() -> None:
    cli(prog_name="sbatch-submit")


__all__ = ["cli", "main", "build_request", "SubmitCommand", "UsageError"]


if __name__ == "__main__":
    main()
