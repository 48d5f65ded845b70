"""Normalize and mappers CLI commands."""

from datetime import UTC, datetime
from pathlib import Path
from typing import IO

import click

from artnorm.cli.input import read_records
from artnorm.cli.output import OutputFormatter, output_human_table, output_json
from artnorm.core import logging as log
from artnorm.core.config import NormalizerConfig, load_config
from artnorm.core.errors import ArtnormError, handle_error
from artnorm.mappers import MapperRegistry
from artnorm.normalizer.pipeline import Pipeline


def _load_config(config_path: Path | None) -> NormalizerConfig:
    if config_path is None:
        return NormalizerConfig()
    return load_config(config_path)


@click.command()
@click.argument("input_file", type=click.File("r", encoding="utf-8"), default="-")
@click.option(
    "--config", "-c", "config_path",
    type=click.Path(path_type=Path),
    default=None,
    help="YAML routing configuration",
)
@click.option(
    "--tag", "-t",
    default=None,
    help="Treat every line as a payload of this plugin or type (e.g. application/syslog)",
)
@click.option(
    "--path", "-p", "artifact_path",
    default="",
    help="Artifact path for records that do not carry one",
)
@click.option(
    "--now",
    type=click.DateTime(formats=["%Y-%m-%d", "%Y-%m-%dT%H:%M:%S"]),
    default=None,
    help="Reference time (UTC) for syslog year inference (default: current time)",
)
@click.pass_context
def normalize(
    ctx: click.Context,
    input_file: IO[str],
    config_path: Path | None,
    tag: str | None,
    artifact_path: str,
    now: datetime | None,
) -> None:
    """Normalize extractor output into canonical timeline documents.

    \b
    Input lines are either JSON records:
      {"path": "...", "plugin": "pecmd", "data": {...}}
    or tagged payloads as written by the extractor runner:
      pecmd:{"ExecutableName": "CMD.EXE", ...}
      application/syslog:Jan 10 00:00:00 host sshd[12]: Accepted ...

    Documents are streamed to stdout; progress goes to stderr.
    """
    formatter: OutputFormatter = ctx.obj["formatter"]

    try:
        config = _load_config(config_path)
        pipeline = Pipeline(config, now=now.replace(tzinfo=UTC) if now else None)
    except ArtnormError as e:
        handle_error(e)

    if config_path is not None:
        log.info("Loaded routing configuration", path=str(config_path), routes=len(config.routes()))

    progress = log.ProgressReporter(description="Normalizing", unit="records")

    def documents():
        for record in read_records(input_file, tag=tag, path=artifact_path):
            docs = pipeline.process(record)
            progress.update(1, emitted=len(docs))
            yield from docs

    try:
        formatter.stream(documents())
    except ArtnormError as e:
        handle_error(e)
    finally:
        progress.finish()


@click.command()
@click.option(
    "--config", "-c", "config_path",
    type=click.Path(path_type=Path),
    default=None,
    help="YAML routing configuration",
)
@click.pass_context
def mappers(ctx: click.Context, config_path: Path | None) -> None:
    """List registered mappers and the tags routed to them."""
    formatter = ctx.obj["formatter"]

    try:
        config = _load_config(config_path)
    except ArtnormError as e:
        handle_error(e)

    routes = config.routes()
    rows = []
    for name in MapperRegistry.supported_types():
        mapper_class = MapperRegistry.get(name)
        rows.append({
            "mapper": name,
            "description": mapper_class.description,
            "tags": sorted(tag for tag, target in routes.items() if target == name),
            "events": [f"{spec.field} -> {spec.action}" for spec in mapper_class.events],
        })

    if formatter.format == "human":
        output_human_table(rows, columns=["mapper", "tags", "description"])
    else:
        output_json(rows)
