"""Input framing for the normalize command.

Each line is either a JSON record object or a tagged payload
``<plugin-or-type>:<payload>``, the framing the extractor runner uses when
it prefixes every output line with the plugin name.
"""

import json
from collections.abc import Iterable, Iterator
from typing import Any

from pydantic import ValidationError

from artnorm.core.errors import InputFormatError
from artnorm.models.record import RawRecord


def _payload(payload: str) -> dict[str, Any] | str:
    """Decode a JSON object payload; anything else stays raw text."""
    if payload.lstrip().startswith("{"):
        try:
            decoded = json.loads(payload)
        except json.JSONDecodeError:
            return payload
        if isinstance(decoded, dict):
            return decoded
    return payload


def tagged_record(tag: str, payload: str, path: str = "") -> RawRecord:
    """Build a record from a tag and its payload.

    Tags containing a slash are type (MIME) tags, others plugin names.
    """
    key = "type" if "/" in tag else "plugin"
    return RawRecord.model_validate({"path": path, key: tag, "data": _payload(payload)})


def read_records(
    lines: Iterable[str],
    tag: str | None = None,
    path: str = "",
) -> Iterator[RawRecord]:
    """Decode input lines into raw records.

    Args:
        lines: Input lines
        tag: Treat every line as a payload of this tag
        path: Artifact path for records that do not name one

    Yields:
        RawRecord per non-blank line

    Raises:
        InputFormatError: If a line cannot be decoded
    """
    for line_number, line in enumerate(lines, start=1):
        line = line.rstrip("\r\n")
        if not line.strip():
            continue

        if tag:
            yield tagged_record(tag, line, path)
            continue

        if line.startswith("{"):
            try:
                data = json.loads(line)
            except json.JSONDecodeError as e:
                raise InputFormatError(f"Invalid JSON record: {e}", line_number=line_number)
            if not isinstance(data, dict):
                raise InputFormatError("JSON record must be an object", line_number=line_number)
            data.setdefault("path", path)
            try:
                yield RawRecord.model_validate(data)
            except ValidationError as e:
                raise InputFormatError(f"Invalid record: {e}", line_number=line_number)
            continue

        line_tag, separator, payload = line.partition(":")
        if not separator or not line_tag or " " in line_tag:
            raise InputFormatError(
                "Expected a JSON record or a '<plugin>:<payload>' line",
                line_number=line_number,
            )
        yield tagged_record(line_tag, payload, path)
