"""Timeline event expansion.

Slices a base record into one event per available timestamp, driven by the
mapper's event table.
"""

import copy
from collections.abc import Iterable
from typing import Any

from artnorm.mappers.base import EventSpec


def get_path(doc: dict[str, Any], path: str) -> Any:
    """Get a nested value using dot notation (e.g., 'mft.created')."""
    value: Any = doc
    for part in path.split("."):
        if isinstance(value, dict) and part in value:
            value = value[part]
        else:
            return None
    return value


def set_path(doc: dict[str, Any], path: str, value: Any) -> None:
    """Set a nested value using dot notation, creating groups as needed."""
    parts = path.split(".")
    target = doc
    for part in parts[:-1]:
        child = target.get(part)
        if not isinstance(child, dict):
            child = {}
            target[part] = child
        target = child
    target[parts[-1]] = value


def _timestamps(value: Any) -> list[Any]:
    if value is None:
        return []
    if isinstance(value, list):
        return [v for v in value if v is not None]
    return [value]


def expand(
    base: dict[str, Any],
    specs: Iterable[EventSpec],
    shared: Iterable[str] = ("file", "log"),
) -> list[dict[str, Any]]:
    """Build the timeline events of a base record.

    Args:
        base: Mapped base record
        specs: Event table of the mapper
        shared: Top-level groups copied onto every event

    Returns:
        Events in table order; specs whose timestamp is null emit nothing
    """
    shared = tuple(shared)
    events = []

    for spec in specs:
        for timestamp in _timestamps(get_path(base, spec.field)):
            event = {
                group: copy.deepcopy(base[group])
                for group in shared
                if group in base
            }
            event["@timestamp"] = timestamp
            event["event"] = {
                "kind": "event",
                "category": spec.category,
                "type": spec.type,
                "action": spec.action,
                "outcome": "success",
            }
            for path in spec.copy_to:
                set_path(event, path, timestamp)
            events.append(event)

    return events
