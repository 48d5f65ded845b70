"""Windows shortcut (LNK) mapper.

Maps LECmd output to the canonical schema. Two layouts are accepted: the
flat LECmd layout (TargetCreated, FileAttributes, LocalPath, ...) and the
nested layout with a `Header` mapping that JLECmd embeds for each entry.
"""

from typing import Any, ClassVar

from artnorm.mappers.base import (
    BaseMapper,
    EventSpec,
    MapperRegistry,
    describe_path,
    to_int,
)
from artnorm.models.document import CanonicalDocument, FileInfo, LogInfo
from artnorm.models.record import RawRecord
from artnorm.normalizer.timestamps import to_timestamp

# File attribute flags
FILE_ATTR_DIRECTORY = 0x0010

LNK_EVENTS = (
    EventSpec("lnk.target.created", "creation", "file-created"),
    EventSpec("lnk.target.modified", "change", "file-modified"),
    EventSpec("lnk.target.accessed", "access", "file-accessed"),
)

# Nested layout key -> flat layout key
_HEADER_KEYS = {
    "TargetCreationDate": "TargetCreated",
    "TargetModificationDate": "TargetModified",
    "TargetLastAccessedDate": "TargetAccessed",
    "FileSize": "FileSize",
    "FileAttributes": "FileAttributes",
    "DataFlags": "HeaderFlags",
}

_VOLUME_KEYS = {
    "DriveType": "DriveType",
    "VolumeSerialNumber": "VolumeSerialNumber",
    "VolumeLabel": "VolumeLabel",
}


def flatten_lnk(data: dict[str, Any]) -> dict[str, Any]:
    """Bring the nested layout to the flat LECmd key set.

    Flat records are returned as they are.
    """
    header = data.get("Header")
    if not isinstance(header, dict):
        return data

    flat = {k: v for k, v in data.items() if k not in ("Header", "VolumeInfo", "NetworkShareInfo")}
    for nested_key, flat_key in _HEADER_KEYS.items():
        if nested_key in header:
            flat.setdefault(flat_key, header[nested_key])

    volume = data.get("VolumeInfo")
    if isinstance(volume, dict):
        for nested_key, flat_key in _VOLUME_KEYS.items():
            if nested_key in volume:
                flat.setdefault(flat_key, volume[nested_key])

    share = data.get("NetworkShareInfo")
    if isinstance(share, dict) and share.get("NetworkShareName"):
        flat.setdefault("NetworkPath", share["NetworkShareName"])

    return flat


def file_type_from_attributes(value: Any) -> str | None:
    """Derive dir/file from a FILE_ATTRIBUTE bitmask or LECmd flag names.

    Missing or zero attributes yield None.
    """
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        number = to_int(text)
        if number is None:
            if text in ("0", "0x0") or text.lower() == "none":
                return None
            return "dir" if "directory" in text.lower() else "file"
        value = number

    number = to_int(value)
    if number is None:
        return None
    return "dir" if number & FILE_ATTR_DIRECTORY else "file"


def resolve_target_path(data: dict[str, Any]) -> str | None:
    """Best available target path of a shortcut."""
    base = data.get("LocalPath") or data.get("NetworkPath")
    common = data.get("CommonPath")
    if base and common:
        separator = "" if base.endswith("\\") else "\\"
        return f"{base}{separator}{common}"
    return base or data.get("TargetIDAbsolutePath") or data.get("RelativePath") or None


def map_lnk_data(data: dict[str, Any]) -> tuple[FileInfo, dict[str, Any]]:
    """Map shortcut fields to the file group and the `lnk` namespace.

    Shared with the jumplist mapper, which embeds one shortcut per entry.

    Args:
        data: LECmd fields in either layout

    Returns:
        Tuple of (file group, lnk namespace)
    """
    data = flatten_lnk(data)

    target_path = resolve_target_path(data)
    id_list_path = data.get("TargetIDAbsolutePath")
    file_info = describe_path(
        target_path,
        file_type=file_type_from_attributes(data.get("FileAttributes")),
        size=to_int(data.get("FileSize")),
        target_path=id_list_path if id_list_path != target_path else None,
    )

    lnk = {
        "source": {
            "path": data.get("SourceFile"),
            "created": to_timestamp(data.get("SourceCreated")),
            "modified": to_timestamp(data.get("SourceModified")),
            "accessed": to_timestamp(data.get("SourceAccessed")),
        },
        "target": {
            "created": to_timestamp(data.get("TargetCreated")),
            "modified": to_timestamp(data.get("TargetModified")),
            "accessed": to_timestamp(data.get("TargetAccessed")),
            "attributes": data.get("FileAttributes"),
            "mft_entry": to_int(data.get("TargetMFTEntryNumber"), zero_is_null=False),
            "mft_sequence": to_int(data.get("TargetMFTSequenceNumber"), zero_is_null=False),
        },
        "name": data.get("Name"),
        "header_flags": data.get("HeaderFlags"),
        "local_path": data.get("LocalPath"),
        "network_path": data.get("NetworkPath"),
        "common_path": data.get("CommonPath"),
        "relative_path": data.get("RelativePath"),
        "working_directory": data.get("WorkingDirectory"),
        "arguments": data.get("Arguments"),
        "icon_location": data.get("IconLocation"),
        "drive_type": data.get("DriveType"),
        "volume_serial": data.get("VolumeSerialNumber"),
        "volume_label": data.get("VolumeLabel"),
        "machine_id": data.get("MachineID"),
        "mac_address": data.get("MachineMACAddress"),
        "tracker_created": to_timestamp(data.get("TrackerCreatedOn")),
    }

    return file_info, lnk


@MapperRegistry.register
class LnkMapper(BaseMapper):
    """Mapper for LECmd shortcut records."""

    name: ClassVar[str] = "lnk"
    description: ClassVar[str] = "Windows shortcut files (LECmd)"
    events: ClassVar[tuple[EventSpec, ...]] = LNK_EVENTS

    def map(self, record: RawRecord) -> dict[str, Any]:
        data = self.require_mapping(record)
        file_info, lnk = map_lnk_data(data)

        return CanonicalDocument(
            file=file_info,
            log=LogInfo.for_path(record.path),
            lnk=lnk,
        ).to_dict()
