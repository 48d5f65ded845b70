"""Document writers for the artnorm CLI.

stdout receives normalized documents (and structured errors) only:
JSONL streams one document per line as it is produced, JSON collects the
run into one array, and the human format renders a timeline table.
"""

import json
import sys
from collections.abc import Iterable
from datetime import datetime
from typing import IO, Any, Literal

from pydantic import BaseModel

OutputFormat = Literal["json", "jsonl", "human"]

TIMELINE_COLUMNS = ["@timestamp", "event.action", "file.path", "process.name", "message"]


class JSONEncoder(json.JSONEncoder):
    """Encodes datetimes as ISO strings and pydantic models as dicts."""

    def default(self, obj: Any) -> Any:
        if isinstance(obj, datetime):
            return obj.isoformat()
        if isinstance(obj, BaseModel):
            return obj.model_dump(mode="json")
        return super().default(obj)


def _plain(item: Any) -> Any:
    return item.model_dump(mode="json") if isinstance(item, BaseModel) else item


def _dump_line(item: Any, file: IO[str]) -> None:
    json.dump(_plain(item), file, cls=JSONEncoder, ensure_ascii=False)
    file.write("\n")
    file.flush()


def output_json(data: Any, file: IO[str] | None = None) -> None:
    """Write one JSON value (dict, list or model) followed by a newline."""
    _dump_line(data, file or sys.stdout)


def output_jsonl(records: Iterable[Any], file: IO[str] | None = None) -> None:
    """Write each record on its own line, flushing as it goes."""
    file = file or sys.stdout
    for record in records:
        _dump_line(record, file)


def lookup(record: dict[str, Any], key: str) -> Any:
    """Column value for a dotted key. Keys present verbatim win (`@timestamp`)."""
    if key in record:
        return record[key]
    value: Any = record
    for part in key.split("."):
        if not isinstance(value, dict) or part not in value:
            return None
        value = value[part]
    return value


def _cell(value: Any) -> str:
    return "" if value is None else str(value)


def output_human_table(
    records: list[dict[str, Any]],
    columns: list[str] | None = None,
    file: IO[str] | None = None,
    max_width: int = 50,
) -> None:
    """Render records as a fixed-width table.

    Args:
        records: Documents or rows to show
        columns: Dotted keys to show (timeline columns if None)
        file: Output file (defaults to stdout)
        max_width: Cells longer than this are cut and end in "..."
    """
    file = file or sys.stdout
    if not records:
        file.write("No records.\n")
        return

    columns = columns or TIMELINE_COLUMNS
    cells = [[_cell(lookup(record, col)) for col in columns] for record in records]
    widths = [
        min(max_width, max([len(col)] + [len(row[i]) for row in cells[:100]]))
        for i, col in enumerate(columns)
    ]

    def render(values: list[str]) -> str:
        out = []
        for value, width in zip(values, widths):
            if len(value) > width:
                value = value[: width - 3] + "..."
            out.append(value.ljust(width))
        return " | ".join(out)

    header = render(columns)
    file.write(header + "\n")
    file.write("-" * len(header) + "\n")
    for row in cells:
        file.write(render(row).rstrip() + "\n")

    file.write(f"\nTotal: {len(records)} records\n")
    file.flush()


def output_error(error: Any, file: IO[str] | None = None) -> None:
    """Write a structured error to stdout, where callers parse results."""
    output_json(error, file=file)


class OutputFormatter:
    """Writes a document stream in the format chosen on the command line."""

    def __init__(self, format: OutputFormat = "jsonl"):
        self.format = format

    def stream(self, records: Iterable[Any], file: IO[str] | None = None) -> None:
        if self.format == "jsonl":
            output_jsonl(records, file=file)
        elif self.format == "json":
            output_json(list(records), file=file)
        else:
            output_human_table([_plain(record) for record in records], file=file)
