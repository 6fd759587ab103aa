# -*- coding: utf-8 -*-
"""
Extraction options and the resolved per-run configuration.

``ExtractorOptions`` is the user-facing record (every field optional except
``ldes_identifier``). ``ExtractionConfig`` is resolved from it once per run
and never mutated afterwards.
"""

from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Optional, Union

from rdflib import URIRef

from ..errors import ConfigurationError
from ..timestamps import EPOCH, ensure_utc

DEFAULT_EXTRACTOR_IDENTIFIER = "http://example.org/extractor"


@dataclass(frozen=True)
class ExtractionWindow:
    """Closed time interval ``[start, end]``.

    ``start <= end`` is not checked: a reversed window matches nothing.
    """
    start: datetime
    end: datetime

    def __post_init__(self):
        object.__setattr__(self, 'start', ensure_utc(self.start))
        object.__setattr__(self, 'end', ensure_utc(self.end))

    def contains(self, timestamp: datetime) -> bool:
        timestamp = ensure_utc(timestamp)
        return self.start <= timestamp <= self.end


@dataclass
class ExtractorOptions:
    """Options for creating an extraction of a versioned LDES."""

    # Identifier of the versioned LDES the extraction is created from
    ldes_identifier: str

    # Window bounds (inclusive); start defaults to the epoch, end to now
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None

    # Only members with this version identifier are kept (filter mode only)
    version_identifier: Optional[str] = None

    # Identifier given to the extracted collection
    extractor_identifier: Optional[str] = None

    # Objects of ldes:versionOfPath / ldes:timestampPath of the source LDES
    version_of_path: Optional[str] = None
    timestamp_path: Optional[str] = None

    # Re-subject the timestamp statement under the version identifier
    materialized: bool = False

    def copy(self, **changes) -> 'ExtractorOptions':
        return replace(self, **changes)


@dataclass(frozen=True)
class ExtractionConfig:
    """Resolved configuration of one extraction run."""

    ldes_identifier: str
    version_of_path: URIRef
    timestamp_path: URIRef
    window: ExtractionWindow
    extractor_identifier: URIRef
    version_identifier: Optional[str] = None
    materialized: bool = False

    @classmethod
    def from_options(
        cls,
        options: ExtractorOptions,
        default_extractor_identifier: str = DEFAULT_EXTRACTOR_IDENTIFIER,
        now: Optional[datetime] = None,
    ) -> 'ExtractionConfig':
        """
        Resolve defaults and validate mandatory fields.

        Args:
            options: User-facing options
            default_extractor_identifier: Used when no identifier was given
            now: Reference instant for the default end date

        Raises:
            ConfigurationError: If versionOfPath or timestampPath is missing
        """
        if not options.version_of_path:
            raise ConfigurationError("No versionOfPath was given in options")
        if not options.timestamp_path:
            raise ConfigurationError("No timestampPath was given in options")

        start = options.start_date if options.start_date is not None else EPOCH
        end = options.end_date
        if end is None:
            end = now if now is not None else datetime.now(timezone.utc)

        return cls(
            ldes_identifier=options.ldes_identifier,
            version_of_path=URIRef(options.version_of_path),
            timestamp_path=URIRef(options.timestamp_path),
            window=ExtractionWindow(start, end),
            extractor_identifier=URIRef(
                options.extractor_identifier or default_extractor_identifier
            ),
            version_identifier=options.version_identifier,
            materialized=options.materialized,
        )


ConfigLike = Union[ExtractorOptions, ExtractionConfig]


def resolve_config(
    config: ConfigLike,
    default_extractor_identifier: str = DEFAULT_EXTRACTOR_IDENTIFIER,
) -> ExtractionConfig:
    """Return ``config`` as an ``ExtractionConfig``, resolving options if needed."""
    if isinstance(config, ExtractionConfig):
        return config
    return ExtractionConfig.from_options(config, default_extractor_identifier)
