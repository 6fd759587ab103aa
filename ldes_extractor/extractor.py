# -*- coding: utf-8 -*-
"""
Extractor - time-bounded extractions of a versioned LDES.

Loads members from an in-memory store, runs them through an
``ExtractorOperator`` and keeps the metadata of the last run. The whole
store and the extracted subset live in memory, so this is meant for LDESes
that fit in memory.

Usage:
    extractor = Extractor(turtle_string_to_store(text))
    members = extractor.create(ExtractorOptions(ldes_identifier='http://example.org/ES'))
    print(store_to_string(extractor.get_metadata()))
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional

from rdflib import Graph

from .config import ExtractorSettings, get_settings
from .config.extraction import ExtractionConfig, ExtractorOptions
from .conversion import Store, acollect_members, collect_members, store_as_member_stream
from .errors import MetadataNotReadyError
from .extractor_util import resolve_paths
from .metadata import create_extractor_metadata, metadata_graph
from .operators import ExtractorOperator
from .types import Member
from .utils.queues import MemberQueue, pump

module_logger = logging.getLogger(__name__)


class Extractor:
    """Creates extractions of a versioned LDES held in a store."""

    def __init__(self, store: Store, logger: Optional[logging.Logger] = None,
                 settings: Optional[ExtractorSettings] = None):
        self.store = store
        self.logger = logger or module_logger
        self.settings = settings or get_settings()
        self._metadata_store: Optional[Graph] = None
        self._last_stats: Optional[Dict[str, Any]] = None

    def resolve(self, options: ExtractorOptions) -> ExtractionConfig:
        """
        Resolve options against the store.

        Missing paths are read from the LDES description in the store; the
        extractor identifier defaults to the configured placeholder.

        Raises:
            ConfigurationError: If a path can neither be taken from the options
                nor from the store
        """
        options = resolve_paths(self.store, options)
        return ExtractionConfig.from_options(options, self.settings.default_extractor_identifier)

    def _operator(self, source, options: ExtractorOptions,
                  materialize: Optional[bool]) -> ExtractorOperator:
        return ExtractorOperator(
            source,
            self.resolve(options),
            materialize=materialize,
            logger=self.logger,
        )

    def _members(self):
        return store_as_member_stream(self.store, self.settings.follow_blank_nodes)

    def create(self, options: ExtractorOptions, materialize: Optional[bool] = None) -> List[Member]:
        """
        Create an extraction.

        Args:
            options: Extraction options
            materialize: Group members per version identifier (defaults to
                ``options.materialized``)

        Returns:
            The extracted members
        """
        operator = self._operator(self._members(), options, materialize)
        members = collect_members(operator)
        self._publish(operator)
        return members

    async def create_async(self, options: ExtractorOptions,
                           materialize: Optional[bool] = None) -> List[Member]:
        """
        Create an extraction on the event loop.

        Members flow through a bounded queue (``settings.high_water_mark``),
        so the source is never read further ahead than the operator drains.
        """
        queue: MemberQueue = MemberQueue(maxsize=self.settings.high_water_mark)
        operator = self._operator(queue, options, materialize)
        producer = asyncio.create_task(pump(self._members(), queue))

        try:
            members = await acollect_members(operator)
            await producer
        finally:
            if not producer.done():
                producer.cancel()

        self._publish(operator)
        return members

    def _publish(self, operator: ExtractorOperator) -> None:
        self._metadata_store = metadata_graph(operator.metadata)
        self._last_stats = operator.get_stats()

    def get_metadata(self) -> Graph:
        """
        Metadata of the last completed extraction.

        Raises:
            MetadataNotReadyError: If no extraction has been created yet
        """
        if self._metadata_store is None:
            raise MetadataNotReadyError("Can't get metadata before running create")
        return self._metadata_store

    @property
    def last_stats(self) -> Optional[Dict[str, Any]]:
        return self._last_stats

    def create_new_metadata(self, options: ExtractorOptions) -> Graph:
        """Metadata graph for ``options`` without running an extraction."""
        return create_extractor_metadata(options, self.settings.default_extractor_identifier)
