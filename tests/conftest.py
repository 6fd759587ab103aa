# -*- coding: utf-8 -*-
"""Pytest configuration for LDES extractor tests."""

from datetime import datetime, timezone

import pytest
from rdflib import Literal, URIRef

from ldes_extractor.config import ExtractorSettings
from ldes_extractor.config.extraction import ExtractionConfig, ExtractorOptions
from ldes_extractor.conversion import turtle_string_to_store
from ldes_extractor.timestamps import date_to_literal
from ldes_extractor.types import Member, Quad
from ldes_extractor.vocabularies import DCT

LDES_IDENTIFIER = "http://example.org/ES"
EXTRACTOR_IDENTIFIER = "http://example.org/extractor"

LDES_EXAMPLE = """
@prefix dct: <http://purl.org/dc/terms/> .
@prefix ldes: <https://w3id.org/ldes#> .
@prefix tree: <https://w3id.org/tree#> .
@prefix xsd: <http://www.w3.org/2001/XMLSchema#> .
@prefix ex: <http://example.org/> .

ex:ES a ldes:EventStream;
    ldes:versionOfPath dct:isVersionOf;
    ldes:timestampPath dct:issued;
    tree:member ex:resource1v0, ex:resource1v1.

ex:resource1v0
    dct:isVersionOf ex:resource1;
    dct:issued "2021-12-15T10:00:00.000Z"^^xsd:dateTime;
    dct:title "First version of the title".

ex:resource1v1
    dct:isVersionOf ex:resource1;
    dct:issued "2021-12-15T12:00:00.000Z"^^xsd:dateTime;
    dct:title "Title has been updated once".
"""

BLANK_NODE_LDES = """
@prefix dct: <http://purl.org/dc/terms/> .
@prefix ldes: <https://w3id.org/ldes#> .
@prefix tree: <https://w3id.org/tree#> .
@prefix xsd: <http://www.w3.org/2001/XMLSchema#> .
@prefix ex: <http://example.org/> .
@prefix owl: <https://www.w3.org/2002/07/owl#> .
@prefix rdfs: <http://www.w3.org/2000/01/rdf-schema#> .

ex:ES1 a ldes:EventStream;
   ldes:versionOfPath dct:isVersionOf;
   ldes:timestampPath dct:created;
   tree:member [
       dct:isVersionOf <http://example.org/A> ;
       dct:created "2020-10-05T11:00:00Z"^^xsd:dateTime;
       owl:versionInfo "v0.0.1";
       rdfs:label "A v0.0.1"
   ], [
       dct:isVersionOf <http://example.org/A> ;
       dct:created "2020-10-06T13:00:00Z"^^xsd:dateTime;
       owl:versionInfo "v0.0.2";
       rdfs:label "A v0.0.2"
   ].
"""


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


def make_member(identifier: str, version_of: str = None, issued=None, title: str = None,
                timestamp_path=DCT.issued) -> Member:
    """Build a member the way a store-backed source would."""
    subject = URIRef(identifier)
    quads = []
    if version_of is not None:
        quads.append(Quad(subject, DCT.isVersionOf, URIRef(version_of)))
    if issued is not None:
        quads.append(Quad(subject, timestamp_path, date_to_literal(issued)))
    if title is not None:
        quads.append(Quad(subject, DCT.title, Literal(title)))
    return Member(id=subject, quads=quads)


@pytest.fixture
def ldes_store():
    """The two-version example LDES."""
    return turtle_string_to_store(LDES_EXAMPLE)


@pytest.fixture
def blank_node_store():
    """An LDES whose members are blank nodes."""
    return turtle_string_to_store(BLANK_NODE_LDES)


@pytest.fixture
def options():
    """Options covering the whole example LDES."""
    return ExtractorOptions(
        ldes_identifier=LDES_IDENTIFIER,
        extractor_identifier=EXTRACTOR_IDENTIFIER,
        version_of_path=str(DCT.isVersionOf),
        timestamp_path=str(DCT.issued),
        start_date=utc(2021, 12, 15, 9, 0),
        end_date=utc(2021, 12, 15, 12, 0),
    )


@pytest.fixture
def config(options):
    return ExtractionConfig.from_options(options)


@pytest.fixture
def settings():
    """Default settings, isolated from the environment and config files."""
    return ExtractorSettings()
