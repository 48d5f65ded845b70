from datetime import UTC, datetime
from typing import Any

from artnorm.normalizer.prune import is_empty

NOW = datetime(2024, 1, 15, 12, 0, 0, tzinfo=UTC)


def assert_clean(node: Any) -> None:
    """Fail if any value below node is None, "", [] or {}."""
    if isinstance(node, dict):
        items = node.values()
    elif isinstance(node, list):
        items = node
    else:
        return
    for value in items:
        assert not is_empty(value), f"empty value left in {node!r}"
        assert_clean(value)
