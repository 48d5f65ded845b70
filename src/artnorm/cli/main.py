"""artnorm command group.

Global options select the stdout format and stderr logging; the
subcommands live in `artnorm.cli.normalize`.
"""

import sys
from typing import Literal

import click

from artnorm import __version__
from artnorm.cli.normalize import mappers, normalize
from artnorm.cli.output import OutputFormat, OutputFormatter
from artnorm.core.logging import configure_logging, set_verbose

EXIT_ERROR = 1


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["jsonl", "json", "human"]),
    default="jsonl",
    show_default=True,
    help="Document output format on stdout",
)
@click.option("--verbose", "-v", is_flag=True, help="Include debug messages on stderr")
@click.option("--quiet", "-q", is_flag=True, help="Only warnings and errors on stderr")
@click.option(
    "--log-format",
    type=click.Choice(["text", "json"]),
    default="text",
    show_default=True,
    help="stderr log format",
)
@click.version_option(version=__version__, prog_name="artnorm")
@click.pass_context
def cli(
    ctx: click.Context,
    output_format: OutputFormat,
    verbose: bool,
    quiet: bool,
    log_format: Literal["text", "json"],
) -> None:
    """artnorm: normalize forensic artifact records into timeline events.

    Reads LECmd, JLECmd, PECmd and MFTECmd output and syslog lines, and
    writes canonical documents with one event per recorded timestamp.
    """
    set_verbose(verbose)
    configure_logging(log_format=log_format, quiet=quiet)

    ctx.obj = {
        "format": output_format,
        "formatter": OutputFormatter(format=output_format),
    }


cli.add_command(normalize)
cli.add_command(mappers)


def main() -> None:
    """Console script entry point."""
    try:
        cli(prog_name="artnorm")
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(EXIT_ERROR)


if __name__ == "__main__":
    main()
