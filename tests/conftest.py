from typing import Any

import pytest

from artnorm.normalizer.pipeline import Pipeline

from .helpers import NOW


@pytest.fixture
def pipeline() -> Pipeline:
    return Pipeline(now=NOW)


@pytest.fixture
def lecmd_record() -> dict[str, Any]:
    return {
        "path": "C:\\Users\\bob\\AppData\\Roaming\\Microsoft\\Windows\\Recent\\report.lnk",
        "plugin": "lecmd",
        "data": {
            "SourceFile": "C:\\Users\\bob\\AppData\\Roaming\\Microsoft\\Windows\\Recent\\report.lnk",
            "SourceCreated": "2021-03-01T10:00:00.0000000+00:00",
            "SourceModified": "2021-03-01T10:00:00.0000000+00:00",
            "TargetCreated": "2021-02-01T09:00:00.1230000+00:00",
            "TargetModified": "2021-02-02T09:00:00.4560000+00:00",
            "TargetAccessed": None,
            "FileSize": 2048,
            "FileAttributes": "FileAttributeArchive",
            "LocalPath": "C:\\Users\\bob\\Documents\\report.docx",
            "WorkingDirectory": "",
            "Arguments": "",
            "DriveType": "Fixed storage media (Hard drive)",
            "VolumeSerialNumber": "AABB-CCDD",
            "MachineID": "desktop-01",
        },
    }


@pytest.fixture
def mft_record() -> dict[str, Any]:
    return {
        "path": "E:\\C\\$MFT",
        "plugin": "mftecmd",
        "data": {
            "EntryNumber": 1024,
            "SequenceNumber": 3,
            "InUse": True,
            "ParentEntryNumber": 512,
            "ParentSequenceNumber": 1,
            "ParentPath": ".\\Users",
            "FileName": "bob",
            "Extension": "",
            "FileSize": 0,
            "IsDirectory": True,
            "HasAds": False,
            "IsAds": False,
            "SI<FN": True,
            "uSecZeros": False,
            "Copied": False,
            "SiFlags": "Archive",
            "NameType": "Windows",
            "Created0x10": "2020-01-01T00:00:00.0000000+00:00",
            "Created0x30": "2020-06-01T00:00:00.0000000+00:00",
            "LastModified0x10": "2020-01-02T00:00:00.0000000+00:00",
            "LastRecordChange0x10": "2020-01-03T00:00:00.0000000+00:00",
            "LastAccess0x10": "2020-01-04T00:00:00.0000000+00:00",
            "ReparseTarget": "",
        },
    }


@pytest.fixture
def pecmd_record() -> dict[str, Any]:
    return {
        "path": "C:\\Windows\\Prefetch\\CMD.EXE-4A81B364.pf",
        "plugin": "pecmd",
        "data": {
            "SourceFilename": "C:\\Windows\\Prefetch\\CMD.EXE-4A81B364.pf",
            "SourceCreated": "2021-01-01T00:00:00.0000000+00:00",
            "ExecutableName": "CMD.EXE",
            "Hash": "4A81B364",
            "Size": 0,
            "Version": "Windows 10 or Windows 11",
            "RunCount": "3",
            "LastRun": "2021-01-03T00:00:00.1230000Z",
            "PreviousRun0": "2021-01-02T00:00:00.4560000Z",
            "PreviousRun1": None,
            "PreviousRun2": "2021-01-01T00:00:00.7890000Z",
            "Volume0Name": "\\VOLUME{01d6f0a5b3c1e2f4-aabbccdd}",
            "Volume0Serial": "AABBCCDD",
            "Volume0Created": "2020-12-01T00:00:00.0000000Z",
            "Volume1Name": "\\VOLUME{unused}",
            "Volume1Serial": "11223344",
            "Volume1Created": None,
            "Directories": "\\VOLUME{01d6f0a5b3c1e2f4-aabbccdd}\\WINDOWS, \\VOLUME{01d6f0a5b3c1e2f4-aabbccdd}\\WINDOWS\\SYSTEM32",
            "FilesLoaded": "\\VOLUME{01d6f0a5b3c1e2f4-aabbccdd}\\WINDOWS\\SYSTEM32\\NTDLL.DLL",
            "ParsingError": False,
        },
    }
