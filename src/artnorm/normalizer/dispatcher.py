"""Routes raw records to the mapper registered for their type."""

from collections.abc import Callable
from datetime import datetime

import artnorm.mappers  # noqa: F401
from artnorm.core.config import NormalizerConfig
from artnorm.core.errors import UnknownMapperError
from artnorm.mappers.base import BaseMapper, MapperRegistry
from artnorm.models.record import RawRecord


class Dispatcher:
    """Selects a mapper by plugin tag, then by type tag.

    Mappers are instantiated once per route table; they hold no per-record
    state.
    """

    def __init__(
        self,
        config: NormalizerConfig | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize dispatcher.

        Args:
            config: Routing configuration (defaults apply if None)
            clock: Reference time source handed to mappers

        Raises:
            UnknownMapperError: If a route names an unregistered mapper
        """
        self.config = config or NormalizerConfig()
        self._mappers: dict[str, BaseMapper] = {}

        for mapper_name in set(self.config.routes().values()):
            mapper_class = MapperRegistry.get(mapper_name)
            if mapper_class is None:
                raise UnknownMapperError(mapper_name, MapperRegistry.supported_types())
            self._mappers[mapper_name] = mapper_class(clock=clock)

    def resolve(self, record: RawRecord) -> BaseMapper | None:
        """Find the mapper for a record.

        Args:
            record: Raw record

        Returns:
            Mapper instance, or None when the record passes through
        """
        mapper_name = None
        if record.plugin is not None:
            mapper_name = self.config.plugins.get(record.plugin)
        if mapper_name is None and record.type is not None:
            mapper_name = self.config.types.get(record.type)
        if mapper_name is None:
            return None
        return self._mappers.get(mapper_name)
