"""
LDES Extraction Operator

Classifies a stream of members against a time window and emits either the
accepted members (filter mode) or, at end of input, the accepted statement
groups regrouped per version identifier (materialize mode).

The operator is a lazy stage: iterate it (``for`` or ``async for``) to run
the extraction. Exactly one metadata event is fired per run, before the
first emitted member.

Example:
    >>> operator = ExtractorOperator(store_as_member_stream(store), options)
    >>> operator.on_metadata(lambda quads: print(len(quads)))
    >>> members = list(operator)
"""

import logging
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple

from rdflib import Graph, URIRef

from ..classifier import classify
from ..config.extraction import DEFAULT_EXTRACTOR_IDENTIFIER, ConfigLike, resolve_config
from ..errors import ClassificationError, ExtractorError
from ..materialize import materialize_member
from ..metadata import build_metadata, metadata_graph
from ..types import MalformedItem, Member, Quad, as_member

module_logger = logging.getLogger(__name__)

MetadataListener = Callable[[List[Quad]], None]


class ExtractorOperator:
    """
    Single-pass extraction stage over a member stream.

    Filter mode keeps arrival order and buffers nothing. Materialize mode
    keeps every accepted statement group in memory until the source is
    exhausted, so the filtered subset has to fit in memory.

    Malformed items and members that cannot be classified are logged and
    dropped; they never abort the run. Errors raised by the source itself
    propagate.
    """

    def __init__(
        self,
        source,
        config: ConfigLike,
        materialize: Optional[bool] = None,
        logger: Optional[logging.Logger] = None,
        default_extractor_identifier: str = DEFAULT_EXTRACTOR_IDENTIFIER,
    ):
        """
        Initialize the extraction operator.

        Args:
            source: Sync or async iterable of members (or raw items)
            config: ExtractorOptions or an already resolved ExtractionConfig
            materialize: Group accepted members per version identifier and emit
                them at end of input. Defaults to ``config.materialized``.
            logger: Logger for per-item diagnostics (module logger by default)
            default_extractor_identifier: Identifier used when the options give none

        Raises:
            ConfigurationError: If versionOfPath or timestampPath is missing
        """
        self.source = source
        self.config = resolve_config(config, default_extractor_identifier)
        self.materialize = self.config.materialized if materialize is None else materialize
        self.logger = logger or module_logger

        self._metadata = build_metadata(self.config)
        self._metadata_listeners: List[MetadataListener] = []
        self._emitted_metadata = False
        self._started = False
        self._finished = False

        # version identifier -> statement groups, in first-sighting order
        self._accumulator: Dict[str, List[Tuple[Quad, ...]]] = {}

        self._stats = {
            'seen': 0,
            'accepted': 0,
            'rejected': 0,
            'dropped': 0,
            'malformed': 0,
            'emitted': 0,
        }

    # ------------------------------------------------------------------
    # Metadata side channel

    def on_metadata(self, listener: MetadataListener) -> 'ExtractorOperator':
        """Register a callback receiving the metadata facts once per run."""
        self._metadata_listeners.append(listener)
        return self

    @property
    def metadata(self) -> Tuple[Quad, ...]:
        return self._metadata

    @property
    def metadata_store(self) -> Graph:
        return metadata_graph(self._metadata)

    @property
    def finished(self) -> bool:
        return self._finished

    def _emit_metadata(self) -> None:
        if self._emitted_metadata:
            return
        self._emitted_metadata = True
        payload = list(self._metadata)
        for listener in self._metadata_listeners:
            listener(payload)

    # ------------------------------------------------------------------
    # Per-item processing

    def process(self, item: Any) -> Optional[Member]:
        """
        Process one input item.

        Returns the member to emit immediately (filter mode), or None when the
        item is dropped, rejected or accumulated.
        """
        self._stats['seen'] += 1
        member = as_member(item)

        if isinstance(member, MalformedItem):
            self._stats['malformed'] += 1
            self.logger.info(f"Item in stream was not a member ({member.reason}): {member.raw!r}")
            return None

        try:
            result = classify(member, self.config, match_version=not self.materialize)
        except ClassificationError as e:
            self._stats['dropped'] += 1
            self.logger.info(f"Following member could not be transformed: {member.id}")
            self.logger.debug(str(e))
            return None

        if not result.accept:
            self._stats['rejected'] += 1
            return None

        self._stats['accepted'] += 1

        if not self.materialize:
            return member

        if self.config.materialized:
            group = materialize_member(member, result.version_term, self.config)
        else:
            group = member.quads

        groups = self._accumulator.get(result.version_id)
        if groups is None:
            self._accumulator[result.version_id] = [group]
        else:
            groups.append(group)
        return None

    def flush(self) -> Iterator[Member]:
        """
        End of input: emit accumulated groups (materialize mode) and finish.

        Each group becomes one member tagged with the subject of its first
        statement, so a version identifier yields as many members as it had
        accepted observations.
        """
        self._emit_metadata()

        accumulator, self._accumulator = self._accumulator, {}
        for version_id, groups in accumulator.items():
            for group in groups:
                identifier = group[0].subject if group and group[0].subject is not None else URIRef(version_id)
                yield Member(id=identifier, quads=group)
        self._finished = True

    def _start(self) -> None:
        if self._started:
            raise ExtractorError("An ExtractorOperator can only be run once")
        self._started = True
        self.logger.debug(
            f"Extracting {self.config.ldes_identifier} into {self.config.extractor_identifier} "
            f"[{self.config.window.start.isoformat()} .. {self.config.window.end.isoformat()}]"
            f"{' (materialize)' if self.materialize else ''}"
        )

    def _emit(self, member: Member) -> Member:
        self._stats['emitted'] += 1
        return member

    # ------------------------------------------------------------------
    # Iteration

    def __iter__(self) -> Iterator[Member]:
        """Synchronous iteration (pull-based)."""
        self._start()
        for item in self.source:
            self._emit_metadata()
            member = self.process(item)
            if member is not None:
                yield self._emit(member)
        for member in self.flush():
            yield self._emit(member)
        self._log_summary()

    async def __aiter__(self):
        """Asynchronous iteration over a sync or async source."""
        self._start()
        if hasattr(self.source, '__aiter__'):
            async for item in self.source:
                self._emit_metadata()
                member = self.process(item)
                if member is not None:
                    yield self._emit(member)
        else:
            for item in self.source:
                self._emit_metadata()
                member = self.process(item)
                if member is not None:
                    yield self._emit(member)
        for member in self.flush():
            yield self._emit(member)
        self._log_summary()

    def _log_summary(self) -> None:
        stats = self._stats
        self.logger.info(
            f"Extraction {self.config.extractor_identifier} complete: "
            f"{stats['emitted']} emitted, {stats['accepted']} accepted, "
            f"{stats['rejected']} outside window, {stats['dropped']} dropped, "
            f"{stats['malformed']} malformed"
        )

    def get_stats(self) -> Dict[str, Any]:
        """Get extraction statistics."""
        return {
            **self._stats,
            'mode': 'materialize' if self.materialize else 'filter',
            'version_identifiers': len(self._accumulator),
            'buffered_groups': sum(len(groups) for groups in self._accumulator.values()),
            'finished': self._finished,
        }
