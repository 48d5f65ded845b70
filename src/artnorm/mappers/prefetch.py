"""Prefetch mapper.

Maps PECmd records. Every recorded run (the last run plus up to seven
previous runs) becomes a process-start event.
"""

from typing import Any, ClassVar

from artnorm.mappers.base import (
    BaseMapper,
    EventSpec,
    MapperRegistry,
    describe_path,
    split_list,
    to_int,
)
from artnorm.models.document import CanonicalDocument, LogInfo, ProcessInfo
from artnorm.models.record import RawRecord
from artnorm.normalizer.timestamps import to_timestamp

PREVIOUS_RUN_SLOTS = 7
VOLUME_SLOTS = 5


def collect_runs(data: dict[str, Any]) -> list[str]:
    """LastRun followed by PreviousRun0..6, repaired, nulls dropped."""
    fields = ["LastRun"] + [f"PreviousRun{i}" for i in range(PREVIOUS_RUN_SLOTS)]
    runs = (to_timestamp(data.get(field)) for field in fields)
    return [run for run in runs if run is not None]


def collect_volumes(data: dict[str, Any]) -> list[dict[str, Any]]:
    """Volume0..4 descriptors that carry a creation timestamp."""
    volumes = []
    for i in range(VOLUME_SLOTS):
        created = to_timestamp(data.get(f"Volume{i}Created"))
        if created is None:
            continue
        volumes.append({
            "created": created,
            "name": data.get(f"Volume{i}Name"),
            "serial": data.get(f"Volume{i}Serial"),
        })
    return volumes


@MapperRegistry.register
class PrefetchMapper(BaseMapper):
    """Mapper for PECmd prefetch records."""

    name: ClassVar[str] = "prefetch"
    description: ClassVar[str] = "Windows Prefetch execution records (PECmd)"
    shared: ClassVar[tuple[str, ...]] = ("file", "log", "process")
    events: ClassVar[tuple[EventSpec, ...]] = (
        EventSpec(
            "prefetch.runs",
            "start",
            "process-start",
            category="process",
            copy_to=("process.start",),
        ),
    )

    def map(self, record: RawRecord) -> dict[str, Any]:
        data = self.require_mapping(record)
        executable = data.get("ExecutableName")
        source_file = data.get("SourceFilename", data.get("SourceFile"))

        prefetch = {
            "executable_name": executable,
            "hash": data.get("Hash"),
            "version": data.get("Version"),
            "run_count": to_int(data.get("RunCount"), zero_is_null=False),
            "runs": collect_runs(data),
            "volumes": collect_volumes(data),
            "directories": split_list(data.get("Directories")),
            "files_loaded": split_list(data.get("FilesLoaded")),
            "source": {
                "created": to_timestamp(data.get("SourceCreated")),
                "modified": to_timestamp(data.get("SourceModified")),
                "accessed": to_timestamp(data.get("SourceAccessed")),
            },
            "parsing_error": data.get("ParsingError") or None,
        }

        return CanonicalDocument(
            file=describe_path(
                source_file,
                file_type="file" if source_file else None,
                size=to_int(data.get("Size")),
            ),
            process=ProcessInfo(name=executable),
            log=LogInfo.for_path(record.path),
            prefetch=prefetch,
        ).to_dict()
