# -*- coding: utf-8 -*-
"""
Extraction metadata.

An extraction is described by three facts about its identifier::

    <extractor> rdf:type ldes:EventStream .
    <extractor> ldes:versionOfPath <versionOfPath> .
    <extractor> ldes:timestampPath <timestampPath> .
"""

from typing import Iterable, Tuple

from rdflib import Graph, URIRef

from .config.extraction import (
    DEFAULT_EXTRACTOR_IDENTIFIER,
    ExtractionConfig,
    ExtractorOptions,
)
from .errors import ConfigurationError
from .types import Quad
from .vocabularies import LDES, PREFIXES, RDF

MetadataFacts = Tuple[Quad, Quad, Quad]


def build_metadata(config: ExtractionConfig) -> MetadataFacts:
    """
    Build the metadata facts for an extraction.

    Deterministic: depends on the configuration only.

    Raises:
        ConfigurationError: If versionOfPath or timestampPath is missing
    """
    if not config.version_of_path:
        raise ConfigurationError("No versionOfPath was given in options")
    if not config.timestamp_path:
        raise ConfigurationError("No timestampPath was given in options")

    extractor = URIRef(config.extractor_identifier)
    return (
        Quad(extractor, RDF.type, LDES.EventStream),
        Quad(extractor, LDES.versionOfPath, URIRef(config.version_of_path)),
        Quad(extractor, LDES.timestampPath, URIRef(config.timestamp_path)),
    )


def metadata_graph(facts: Iterable[Quad]) -> Graph:
    """Load metadata facts into a new graph."""
    graph = Graph()
    for prefix, namespace in PREFIXES.items():
        graph.bind(prefix, namespace)
    for fact in facts:
        graph.add(fact.triple())
    return graph


def create_extractor_metadata(
    options: ExtractorOptions,
    default_extractor_identifier: str = DEFAULT_EXTRACTOR_IDENTIFIER,
) -> Graph:
    """Metadata graph for an options record (window defaults do not matter here)."""
    config = ExtractionConfig.from_options(options, default_extractor_identifier)
    return metadata_graph(build_metadata(config))
