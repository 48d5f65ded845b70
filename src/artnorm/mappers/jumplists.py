"""Jump List mapper.

JLECmd emits one record per jump list entry. Automatic destinations
(DestList based) carry entry metadata next to the embedded shortcut;
custom destinations carry little more than the shortcut itself. Both
delegate the shortcut fields to the LNK mapping.
"""

from typing import Any, ClassVar, Literal

from artnorm.mappers.base import (
    BaseMapper,
    EventSpec,
    MapperRegistry,
    to_bool,
    to_int,
)
from artnorm.mappers.lnk import LNK_EVENTS, map_lnk_data
from artnorm.models.document import CanonicalDocument, LogInfo
from artnorm.models.record import RawRecord
from artnorm.normalizer.timestamps import to_timestamp

JumpListVariant = Literal["automatic", "custom"]

AUTOMATIC_SUFFIX = ".automaticdestinations-ms"
CUSTOM_SUFFIX = ".customdestinations-ms"

# Keys only present on DestList entries
_DESTLIST_KEYS = ("DestListVersion", "EntryNumber", "CreationTime", "LastUsedEntryNumber")


def detect_variant(record: RawRecord) -> JumpListVariant:
    """Decide between automatic and custom destinations.

    The classifier tag wins, then the file name, then the fields present.
    """
    tag = (record.type or "").lower()
    if "automatic" in tag:
        return "automatic"
    if "custom" in tag:
        return "custom"

    path = record.path.lower()
    if path.endswith(AUTOMATIC_SUFFIX):
        return "automatic"
    if path.endswith(CUSTOM_SUFFIX):
        return "custom"

    if isinstance(record.data, dict) and any(k in record.data for k in _DESTLIST_KEYS):
        return "automatic"
    return "custom"


def _embedded_lnk(data: dict[str, Any]) -> dict[str, Any]:
    lnk = data.get("Lnk")
    return lnk if isinstance(lnk, dict) else data


def map_automatic(data: dict[str, Any]) -> dict[str, Any]:
    """Jumplist namespace for an automatic destinations entry."""
    return {
        "variant": "automatic",
        "app_id": data.get("AppId"),
        "app_name": data.get("AppIdDescription"),
        "version": to_int(data.get("DestListVersion")),
        "entry_number": to_int(data.get("EntryNumber"), zero_is_null=False),
        "rank": to_int(data.get("MRU", data.get("MruPosition")), zero_is_null=False),
        "name": data.get("Path"),
        "created": to_timestamp(data.get("CreationTime")),
        "last_modified": to_timestamp(data.get("LastModified")),
        "hostname": data.get("Hostname"),
        "mac_address": data.get("MacAddress"),
        "interaction_count": to_int(data.get("InteractionCount"), zero_is_null=False),
        "pinned": to_bool(data.get("PinStatus")),
        "droids": {
            "file": data.get("FileDroid"),
            "file_birth": data.get("FileBirthDroid"),
            "volume": data.get("VolumeDroid"),
            "volume_birth": data.get("VolumeBirthDroid"),
        },
    }


def map_custom(data: dict[str, Any]) -> dict[str, Any]:
    """Jumplist namespace for a custom destinations entry."""
    return {
        "variant": "custom",
        "app_id": data.get("AppId"),
        "app_name": data.get("AppIdDescription"),
        "rank": to_int(data.get("Rank"), zero_is_null=False),
        "name": data.get("EntryName"),
    }


@MapperRegistry.register
class JumpListMapper(BaseMapper):
    """Mapper for JLECmd automatic and custom destination entries."""

    name: ClassVar[str] = "jumplist"
    description: ClassVar[str] = "Jump lists, automatic and custom destinations (JLECmd)"
    events: ClassVar[tuple[EventSpec, ...]] = LNK_EVENTS

    def map(self, record: RawRecord) -> dict[str, Any]:
        data = self.require_mapping(record)
        variant = detect_variant(record)

        file_info, lnk = map_lnk_data(_embedded_lnk(data))
        jumplist = map_automatic(data) if variant == "automatic" else map_custom(data)

        return CanonicalDocument(
            file=file_info,
            log=LogInfo.for_path(record.path),
            lnk=lnk,
            jumplist=jumplist,
        ).to_dict()
