"""Artifact mappers for artnorm."""

# Import mappers to register them
from artnorm.mappers import (
    jumplists,  # noqa: F401
    lnk,  # noqa: F401
    mft,  # noqa: F401
    prefetch,  # noqa: F401
    syslog,  # noqa: F401
)
from artnorm.mappers.base import BaseMapper, EventSpec, MapperRegistry, MappingError

__all__ = ["BaseMapper", "EventSpec", "MapperRegistry", "MappingError"]
