"""Output normalization.

Documents leave the pipeline without empty values anywhere in the tree
and always carry an `@timestamp`.
"""

import copy
from collections.abc import Iterator
from typing import Any

from artnorm.normalizer.timestamps import SENTINEL_TIMESTAMP

Path = tuple[str | int, ...]


def is_empty(value: Any) -> bool:
    """None, "", [] and {} are empty; 0 and False are values."""
    if value is None:
        return True
    if isinstance(value, str | list | dict):
        return len(value) == 0
    return False


def empty_paths(node: Any, prefix: Path = ()) -> Iterator[Path]:
    """Yield the structural path of every empty value below `node`."""
    if isinstance(node, dict):
        items = node.items()
    elif isinstance(node, list):
        items = enumerate(node)
    else:
        return

    for key, value in items:
        path = prefix + (key,)
        if is_empty(value):
            yield path
        else:
            yield from empty_paths(value, path)


def _delete(doc: Any, path: Path) -> None:
    parent = doc
    for key in path[:-1]:
        parent = parent[key]
    del parent[path[-1]]


def prune(doc: dict[str, Any]) -> dict[str, Any]:
    """Remove empty values until none are left.

    Removing a leaf can empty its parent, so passes repeat until a pass
    finds nothing. The input document is not modified.

    Args:
        doc: Document tree

    Returns:
        Pruned copy of the document
    """
    doc = copy.deepcopy(doc)

    while True:
        paths = list(empty_paths(doc))
        if not paths:
            return doc
        # Reverse order keeps list indices valid while deleting
        for path in reversed(paths):
            _delete(doc, path)


def finalize(doc: dict[str, Any], sentinel: str = SENTINEL_TIMESTAMP) -> dict[str, Any]:
    """Prune a document and give it a timestamp if it has none."""
    doc = prune(doc)
    if "@timestamp" not in doc:
        doc["@timestamp"] = sentinel
    return doc
