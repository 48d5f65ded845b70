"""Syslog mapper.

One document per line; syslog records are not expanded.
"""

from typing import Any, ClassVar

from artnorm.mappers.base import BaseMapper, MapperRegistry, MappingError
from artnorm.models.document import CanonicalDocument, EventInfo, HostInfo, LogInfo, ProcessInfo
from artnorm.models.record import RawRecord
from artnorm.normalizer.syslog import parse_syslog_line
from artnorm.normalizer.timestamps import repair_timestamp


@MapperRegistry.register
class SyslogMapper(BaseMapper):
    """Mapper for raw syslog lines."""

    name: ClassVar[str] = "syslog"
    description: ClassVar[str] = "Syslog text lines (application/syslog)"

    def map(self, record: RawRecord) -> dict[str, Any]:
        if not isinstance(record.data, str):
            raise MappingError(f"syslog expects a text line, got {type(record.data).__name__}")

        entry = parse_syslog_line(record.data, now=self.clock())

        return CanonicalDocument(
            timestamp=repair_timestamp(entry.timestamp),
            event=EventInfo(kind="event", original=record.data),
            host=HostInfo(hostname=entry.host),
            process=ProcessInfo(name=entry.process, pid=entry.pid),
            log=LogInfo.for_path(record.path),
            message=entry.message,
        ).to_dict()
