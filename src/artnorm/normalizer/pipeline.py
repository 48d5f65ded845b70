"""Normalization pipeline.

Dispatcher -> mapper -> event expander -> output normalizer. Each input
record yields its base record followed by its timeline events; records
are independent of one another.
"""

from collections.abc import Iterable, Iterator
from datetime import datetime
from typing import Any

from pydantic import ValidationError

from artnorm.core import logging as log
from artnorm.core.config import NormalizerConfig
from artnorm.mappers.base import MappingError
from artnorm.models.record import RawRecord
from artnorm.normalizer.dispatcher import Dispatcher
from artnorm.normalizer.expander import expand
from artnorm.normalizer.prune import finalize


class Pipeline:
    """Normalizes raw extractor records into canonical documents."""

    def __init__(
        self,
        config: NormalizerConfig | None = None,
        now: datetime | None = None,
    ) -> None:
        """Initialize the pipeline.

        Args:
            config: Routing configuration (defaults apply if None)
            now: Fixed reference time for syslog year inference;
                the current time is used when None
        """
        self.config = config or NormalizerConfig()
        self.dispatcher = Dispatcher(
            self.config,
            clock=(lambda: now) if now is not None else None,
        )

    def process(self, record: RawRecord | dict[str, Any]) -> list[dict[str, Any]]:
        """Normalize one record.

        Args:
            record: RawRecord or a plain mapping with the same keys

        Returns:
            Base record first, then one event per available timestamp
        """
        if not isinstance(record, RawRecord):
            try:
                record = RawRecord.model_validate(record)
            except ValidationError as e:
                log.warning("Record does not match the input schema, passing through", error=str(e))
                raw = dict(record) if isinstance(record, dict) else {"data": record}
                return [self._finalize(raw)]

        mapper = self.dispatcher.resolve(record)
        if mapper is None:
            log.debug("No mapper for record, passing through", tag=record.tag, path=record.path)
            return [self._finalize(record.to_dict())]

        try:
            base = mapper.map(record)
        except (MappingError, TypeError, AttributeError, ValueError) as e:
            log.warning(
                f"{mapper.name} could not map record, passing through",
                path=record.path,
                error=str(e),
            )
            return [self._finalize(record.to_dict())]

        events = expand(base, mapper.events, mapper.shared)
        log.debug(
            f"Mapped record with {mapper.name}",
            path=record.path,
            events=len(events),
        )

        return [self._finalize(base)] + [self._finalize(event) for event in events]

    def process_stream(
        self, records: Iterable[RawRecord | dict[str, Any]]
    ) -> Iterator[dict[str, Any]]:
        """Normalize a stream of records.

        Args:
            records: Iterable of records

        Yields:
            Canonical documents in input order
        """
        for record in records:
            yield from self.process(record)

    def _finalize(self, doc: dict[str, Any]) -> dict[str, Any]:
        return finalize(doc, self.config.sentinel_timestamp)
