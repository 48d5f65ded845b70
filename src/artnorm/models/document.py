"""Canonical event document models.

The pipeline passes documents around as plain dictionaries; these models
describe the shared groups and are used by mappers to build them.
"""

from typing import Any, Literal

from pydantic import BaseModel, Field

FileType = Literal["dir", "file", "symlink"]


class FileInfo(BaseModel):
    """File described by an artifact record."""

    type: FileType | None = Field(default=None, description="dir, file or symlink")
    path: str | None = Field(default=None, description="Full path")
    name: str | None = Field(default=None, description="Base name")
    extension: str | None = Field(default=None, description="Extension without the dot")
    directory: str | None = Field(default=None, description="Parent directory")
    size: int | None = Field(default=None, ge=0, description="Size in bytes")
    target_path: str | None = Field(default=None, description="Link or reparse target")

    model_config = {"extra": "forbid"}


class EventInfo(BaseModel):
    """Event classification fields."""

    kind: str | None = None
    category: str | None = None
    type: str | None = None
    action: str | None = None
    outcome: str | None = None
    original: str | None = None

    model_config = {"extra": "forbid"}


class ProcessInfo(BaseModel):
    """Process associated with an event."""

    name: str | None = None
    pid: int | None = Field(default=None, ge=0)
    start: str | None = None

    model_config = {"extra": "forbid"}


class LogFile(BaseModel):
    path: str | None = None

    model_config = {"extra": "forbid"}


class LogInfo(BaseModel):
    """Provenance of the record."""

    file: LogFile | None = None

    model_config = {"extra": "forbid"}

    @classmethod
    def for_path(cls, path: str | None) -> "LogInfo":
        return cls(file=LogFile(path=path or None))


class HostInfo(BaseModel):
    hostname: str | None = None

    model_config = {"extra": "forbid"}


class CanonicalDocument(BaseModel):
    """Base record produced by a mapper.

    Artifact namespaces (lnk, jumplist, mft, prefetch) are passed as extra
    fields and dumped alongside the shared groups.
    """

    timestamp: str | None = Field(
        default=None,
        alias="@timestamp",
        description="ISO-8601 event timestamp",
    )
    file: FileInfo | None = None
    event: EventInfo | None = None
    process: ProcessInfo | None = None
    host: HostInfo | None = None
    log: LogInfo | None = None
    message: str | None = None

    model_config = {"extra": "allow", "populate_by_name": True}

    def to_dict(self) -> dict[str, Any]:
        """Dump to a dictionary keyed the way documents are emitted."""
        return self.model_dump(by_alias=True, exclude_none=True)
