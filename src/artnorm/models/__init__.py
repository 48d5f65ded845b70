"""Pydantic models for artnorm."""

from artnorm.models.document import CanonicalDocument, FileInfo, LogInfo, ProcessInfo
from artnorm.models.error import ErrorCode, StructuredError
from artnorm.models.record import RawRecord

__all__ = [
    "CanonicalDocument",
    "ErrorCode",
    "FileInfo",
    "LogInfo",
    "ProcessInfo",
    "RawRecord",
    "StructuredError",
]
