# -*- coding: utf-8 -*-
"""Introspection of a versioned LDES description held in a store."""

from datetime import datetime, timezone
from typing import Optional

from rdflib import URIRef

from .config.extraction import ExtractorOptions
from .conversion import Store, statements
from .errors import ConfigurationError
from .vocabularies import LDES

# A version materialization can only be defined when the source LDES declares
# both ldes:versionOfPath and ldes:timestampPath.
# https://semiceu.github.io/LinkedDataEventStreams/#version-materializations


def _single_property(store: Store, ldes_identifier: str, predicate: URIRef, name: str) -> str:
    values = [q.object for q in statements(store, URIRef(ldes_identifier), predicate, None)]
    if len(values) != 1:
        raise ConfigurationError(
            f"Found {len(values)} {name} for {ldes_identifier}, only expected one"
        )
    return str(values[0])


def retrieve_version_of_property(store: Store, ldes_identifier: str) -> str:
    """The ``ldes:versionOfPath`` of a versioned LDES."""
    return _single_property(store, ldes_identifier, LDES.versionOfPath, "versionOfProperties")


def retrieve_timestamp_property(store: Store, ldes_identifier: str) -> str:
    """The ``ldes:timestampPath`` of a versioned LDES."""
    return _single_property(store, ldes_identifier, LDES.timestampPath, "timestampProperties")


def extract_extractor_options(store: Store, ldes_identifier: str,
                              now: Optional[datetime] = None) -> ExtractorOptions:
    """Options for an LDES as declared in the store, with an empty window at ``now``."""
    now = now or datetime.now(timezone.utc)
    return ExtractorOptions(
        ldes_identifier=ldes_identifier,
        timestamp_path=retrieve_timestamp_property(store, ldes_identifier),
        version_of_path=retrieve_version_of_property(store, ldes_identifier),
        start_date=now,
        end_date=now,
    )


def resolve_paths(store: Store, options: ExtractorOptions) -> ExtractorOptions:
    """
    Fill in missing versionOfPath/timestampPath from the store.

    Raises:
        ConfigurationError: If a path is neither given nor declared exactly once
    """
    return options.copy(
        timestamp_path=options.timestamp_path or retrieve_timestamp_property(store, options.ldes_identifier),
        version_of_path=options.version_of_path or retrieve_version_of_property(store, options.ldes_identifier),
    )
