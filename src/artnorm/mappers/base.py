"""Base mapper interface for artnorm."""

import ntpath
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, ClassVar

from artnorm.models.document import FileInfo
from artnorm.models.record import RawRecord


@dataclass(frozen=True)
class EventSpec:
    """One row of a mapper's event table.

    Attributes:
        field: Dotted path of the timestamp in the base record. A list
            value yields one event per element.
        type: event.type of the emitted event
        action: event.action of the emitted event
        category: event.category of the emitted event
        copy_to: Dotted paths that also receive the timestamp
    """

    field: str
    type: str
    action: str
    category: str = "file"
    copy_to: tuple[str, ...] = ()


class MappingError(Exception):
    """Record cannot be mapped; the pipeline passes it through."""


class BaseMapper(ABC):
    """Base class for all artifact mappers.

    A mapper turns one extractor record into a canonical base record and
    declares, through `events`, which of its timestamps become discrete
    timeline events.
    """

    # Mapper metadata (must be set by subclasses)
    name: ClassVar[str]
    description: ClassVar[str] = ""
    events: ClassVar[tuple[EventSpec, ...]] = ()
    shared: ClassVar[tuple[str, ...]] = ("file", "log")

    def __init__(self, clock: Callable[[], datetime] | None = None) -> None:
        """Initialize mapper.

        Args:
            clock: Returns the reference "now" for mappers that need one
        """
        self.clock = clock or (lambda: datetime.now(UTC))

    @abstractmethod
    def map(self, record: RawRecord) -> dict[str, Any]:
        """Map a raw record to a canonical base record.

        Args:
            record: Raw extractor record

        Returns:
            Base record as a dictionary

        Raises:
            MappingError: If the record's data has the wrong shape
        """
        ...

    def require_mapping(self, record: RawRecord) -> dict[str, Any]:
        """Return the record data, which structured mappers need as a mapping."""
        if not isinstance(record.data, dict):
            raise MappingError(
                f"{self.name} expects structured data, got {type(record.data).__name__}"
            )
        return record.data


class MapperRegistry:
    """Registry of available mappers."""

    _mappers: ClassVar[dict[str, type[BaseMapper]]] = {}

    @classmethod
    def register(cls, mapper_class: type[BaseMapper]) -> type[BaseMapper]:
        """Register a mapper class.

        Args:
            mapper_class: Mapper class to register

        Returns:
            The registered class (for use as decorator)
        """
        cls._mappers[mapper_class.name] = mapper_class
        return mapper_class

    @classmethod
    def get(cls, name: str) -> type[BaseMapper] | None:
        """Get mapper by name."""
        return cls._mappers.get(name)

    @classmethod
    def supported_types(cls) -> list[str]:
        """Get list of registered mapper names."""
        return list(cls._mappers.keys())


def to_int(value: Any, zero_is_null: bool = True) -> int | None:
    """Integer value of an extractor field.

    Absent and unconvertible values become None, and so does zero unless
    `zero_is_null` is False (zero marks an absent size or attribute set).
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        if isinstance(value, str):
            text = value.strip()
            number = int(text, 16) if text.lower().startswith("0x") else int(text)
        else:
            number = int(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if number == 0 and zero_is_null:
        return None
    return number


def to_bool(value: Any) -> bool | None:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("true", "yes", "1"):
            return True
        if lowered in ("false", "no", "0"):
            return False
        return None
    if isinstance(value, int):
        return bool(value)
    return None


def split_list(value: Any, separator: str = ", ") -> list[str]:
    """Split an extractor list field; lists pass through."""
    if isinstance(value, list):
        return [str(v) for v in value if v not in (None, "")]
    if not isinstance(value, str) or not value:
        return []
    return [part for part in value.split(separator) if part]


def describe_path(
    path: str | None,
    file_type: str | None = None,
    size: int | None = None,
    target_path: str | None = None,
) -> FileInfo:
    """Build the file group for a Windows path."""
    if size is not None and size < 0:
        size = None
    if not path:
        return FileInfo(type=file_type, size=size, target_path=target_path or None)

    name = ntpath.basename(path.rstrip("\\")) or None
    directory = ntpath.dirname(path.rstrip("\\")) or None
    extension = None
    if name and file_type != "dir":
        extension = ntpath.splitext(name)[1].lstrip(".") or None

    return FileInfo(
        type=file_type,
        path=path,
        name=name,
        extension=extension,
        directory=directory,
        size=size,
        target_path=target_path or None,
    )
