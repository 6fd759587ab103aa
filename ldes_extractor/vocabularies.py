# -*- coding: utf-8 -*-
"""
RDF vocabularies used by the extractor.

Terms are exposed as rdflib URIRefs so they can be used directly in
triple patterns, e.g. ``graph.objects(ldes_id, LDES.versionOfPath)``.
"""

from rdflib import Namespace
from rdflib.namespace import RDF, XSD, DCTERMS

LDES = Namespace("https://w3id.org/ldes#")
TREE = Namespace("https://w3id.org/tree#")
DCT = DCTERMS

# Prefixes bound when serializing extraction results
PREFIXES = {
    'rdf': str(RDF),
    'xsd': str(XSD),
    'dct': str(DCT),
    'ldes': str(LDES),
    'tree': str(TREE),
}

__all__ = ['LDES', 'TREE', 'DCT', 'RDF', 'XSD', 'PREFIXES']
