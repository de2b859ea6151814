"""Command line interface for cligen."""

from __future__ import annotations

from pathlib import Path

import click

from cligen.comments import find_generate_comments
from cligen.config.loader import load_generator_config
from cligen.errors import CligenError, InvocationError
from cligen.generator import Generator
from cligen.invocation import USAGE, Invocation, parse_invocation
from cligen.source import read_source
from cligen.utils.logging_config import configure_logging

SOURCE_ENV_VAR = "CLIGEN_FILE"
CONFIG_ENV_VAR = "CLIGEN_CONFIG"


def _usage_error(message: str) -> None:
    click.echo(f"Error: {message}", err=True)
    click.echo(USAGE, err=True, nl=False)
    raise click.exceptions.Exit(1)


def _collect_invocations(arguments: tuple[str, ...], source: Path, run_all: bool) -> list[Invocation]:
    if run_all:
        if arguments:
            _usage_error("--all does not take a command")
        invocations = find_generate_comments(read_source(source))
        if not invocations:
            raise click.ClickException(f"no '# cligen:' comments found in {source}")
        return invocations
    if not arguments:
        _usage_error("missing command")
    return [parse_invocation(arguments)]


# click's --help is disabled: --help carries the generated command's help text
@click.command(context_settings={"help_option_names": [], "ignore_unknown_options": True})
@click.argument("arguments", nargs=-1, type=click.UNPROCESSED)
@click.option(
    "--source",
    envvar=SOURCE_ENV_VAR,
    type=click.Path(path_type=Path),
    help=f"Python file holding the argument classes (env: {SOURCE_ENV_VAR})",
)
@click.option(
    "--config",
    "config_path",
    envvar=CONFIG_ENV_VAR,
    type=click.Path(path_type=Path),
    help="YAML file with generator settings",
)
@click.option("--all", "run_all", is_flag=True, help="Run every '# cligen:' comment in the source")
@click.option("--strict", is_flag=True, help="Fail on unrecognized directives")
@click.option("--no-stub", is_flag=True, help="Do not create the implementation stub")
@click.option("--no-project", is_flag=True, help="Do not write pyproject.toml")
@click.option("--verbose", is_flag=True, help="Log progress")
@click.option("--debug", is_flag=True, help="Log debug details")
def cli(
    arguments: tuple[str, ...],
    source: Path | None,
    config_path: Path | None,
    run_all: bool,
    strict: bool,
    no_stub: bool,
    no_project: bool,
    verbose: bool,
    debug: bool,
) -> None:
    """Generate an argparse front end from an annotated argument class."""
    configure_logging(verbose=verbose, debug=debug)

    if source is None:
        _usage_error(f"{SOURCE_ENV_VAR} environment variable not set and no --source given")

    try:
        invocations = _collect_invocations(arguments, source, run_all)
    except InvocationError as exc:
        _usage_error(str(exc))
    except CligenError as exc:
        raise click.ClickException(str(exc)) from exc

    for invocation in invocations:
        overrides = {
            "source_file": str(source),
            "command": invocation.command,
            "help": invocation.help,
            "output": invocation.output,
            "strict_directives": True if strict else None,
            "emit_stub": False if no_stub else None,
            "emit_project": False if no_project else None,
        }
        try:
            config = load_generator_config(config_path, overrides)
            result = Generator(config).generate()
        except CligenError as exc:
            raise click.ClickException(f"failed to generate CLI code: {exc}") from exc
        click.echo(f"Generated CLI code in {result.output_path}")
        if result.stub_created:
            click.echo(f"Created implementation stub {result.stub_path}")


__all__ = ["cli"]
