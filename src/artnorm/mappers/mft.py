"""NTFS Master File Table mapper.

Maps MFTECmd entries. The $STANDARD_INFORMATION (0x10) timestamps drive
the timeline; the $FILE_NAME (0x30) copies and the timestomping
indicators stay in the `mft` namespace for analysis.
"""

from typing import Any, ClassVar

from artnorm.mappers.base import (
    BaseMapper,
    EventSpec,
    MapperRegistry,
    describe_path,
    to_bool,
    to_int,
)
from artnorm.models.document import CanonicalDocument, LogInfo
from artnorm.models.record import RawRecord
from artnorm.normalizer.timestamps import to_timestamp


def join_mft_path(parent: Any, filename: Any) -> str | None:
    """Compose `parent\\filename` the way MFTECmd reports paths."""
    if not filename:
        return parent or None
    if not parent:
        return str(filename)
    parent = str(parent).rstrip("\\")
    return f"{parent}\\{filename}"


def mft_file_type(data: dict[str, Any]) -> str:
    if data.get("ReparseTarget"):
        return "symlink"
    return "dir" if to_bool(data.get("IsDirectory")) else "file"


@MapperRegistry.register
class MftMapper(BaseMapper):
    """Mapper for MFTECmd entries."""

    name: ClassVar[str] = "mft"
    description: ClassVar[str] = "NTFS $MFT entries (MFTECmd)"
    events: ClassVar[tuple[EventSpec, ...]] = (
        EventSpec("mft.modified", "change", "file-modified"),
        EventSpec("mft.created", "creation", "file-created"),
        EventSpec("mft.changed", "change", "file-meta-changed"),
        EventSpec("mft.accessed", "access", "file-accessed"),
    )

    def map(self, record: RawRecord) -> dict[str, Any]:
        data = self.require_mapping(record)

        file_info = describe_path(
            join_mft_path(data.get("ParentPath"), data.get("FileName")),
            file_type=mft_file_type(data),
            size=to_int(data.get("FileSize")),
            target_path=data.get("ReparseTarget"),
        )

        mft = {
            "created": to_timestamp(data.get("Created0x10")),
            "modified": to_timestamp(data.get("LastModified0x10")),
            "changed": to_timestamp(data.get("LastRecordChange0x10")),
            "accessed": to_timestamp(data.get("LastAccess0x10")),
            "file_name": {
                "created": to_timestamp(data.get("Created0x30")),
                "modified": to_timestamp(data.get("LastModified0x30")),
                "changed": to_timestamp(data.get("LastRecordChange0x30")),
                "accessed": to_timestamp(data.get("LastAccess0x30")),
            },
            "entry_number": to_int(data.get("EntryNumber"), zero_is_null=False),
            "sequence_number": to_int(data.get("SequenceNumber"), zero_is_null=False),
            "parent_entry_number": to_int(data.get("ParentEntryNumber"), zero_is_null=False),
            "parent_sequence_number": to_int(data.get("ParentSequenceNumber"), zero_is_null=False),
            "in_use": to_bool(data.get("InUse")),
            "is_directory": to_bool(data.get("IsDirectory")),
            "flags": data.get("SiFlags"),
            "name_type": data.get("NameType"),
            "reference_count": to_int(data.get("ReferenceCount"), zero_is_null=False),
            "timestomped": to_bool(data.get("SI<FN")),
            "usec_zeros": to_bool(data.get("uSecZeros")),
            "copied": to_bool(data.get("Copied")),
            "has_ads": to_bool(data.get("HasAds")),
            "is_ads": to_bool(data.get("IsAds")),
            "update_sequence_number": to_int(data.get("UpdateSequenceNumber"), zero_is_null=False),
            "logfile_sequence_number": to_int(data.get("LogfileSequenceNumber"), zero_is_null=False),
            "security_id": to_int(data.get("SecurityId"), zero_is_null=False),
            "object_id": data.get("ObjectIdFileDroid"),
            "logged_util_stream": data.get("LoggedUtilStream"),
            "zone_id_contents": data.get("ZoneIdContents"),
        }

        return CanonicalDocument(
            file=file_info,
            log=LogInfo.for_path(record.path),
            mft=mft,
        ).to_dict()
