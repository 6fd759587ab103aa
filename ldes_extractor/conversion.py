"""
Conversion between RDF stores, text and member streams.

Triple formats (Turtle, N-Triples, JSON-LD, RDF/XML, N3) are loaded into an
``rdflib.Graph``; quad formats (N-Quads, TriG) into an ``rdflib.Dataset``.
Every function that reads a store accepts either.

Supported files:
- .ttl, .nt, .n3, .jsonld/.json, .rdf/.xml, .nq, .trig
- any of the above compressed with gzip (.gz)
"""

import gzip
import logging
from pathlib import Path
from typing import Any, AsyncIterator, Iterable, Iterator, List, Optional, Set, Union

from rdflib import BNode, Dataset, Graph, URIRef
from rdflib.graph import DATASET_DEFAULT_GRAPH_ID
from rdflib.term import Node

from .types import Member, Quad, sort_quads
from .vocabularies import PREFIXES, TREE

logger = logging.getLogger(__name__)

Store = Union[Graph, Dataset]

QUAD_FORMATS = {'nquads', 'trig'}

SUFFIX_FORMATS = {
    '.ttl': 'turtle',
    '.turtle': 'turtle',
    '.nt': 'nt',
    '.n3': 'n3',
    '.jsonld': 'json-ld',
    '.json': 'json-ld',
    '.rdf': 'xml',
    '.xml': 'xml',
    '.owl': 'xml',
    '.nq': 'nquads',
    '.trig': 'trig',
}


def guess_format(path: Union[str, Path]) -> str:
    """Guess the RDF serialization of a file from its suffix."""
    suffixes = [s.lower() for s in Path(path).suffixes]
    if suffixes and suffixes[-1] == '.gz':
        suffixes = suffixes[:-1]
    if not suffixes or suffixes[-1] not in SUFFIX_FORMATS:
        raise ValueError(f"Cannot guess RDF format of {path}; pass the format explicitly")
    return SUFFIX_FORMATS[suffixes[-1]]


def new_store(format: str) -> Store:
    """Empty store suited to ``format``."""
    store = Dataset() if format in QUAD_FORMATS else Graph()
    for prefix, namespace in PREFIXES.items():
        store.bind(prefix, namespace)
    return store


def parse_store(text: str, format: str = 'turtle', base_iri: Optional[str] = None) -> Store:
    """Parse RDF text into a new store."""
    store = new_store(format)
    store.parse(data=text, format=format, publicID=base_iri)
    return store


def turtle_string_to_store(text: str, base_iri: Optional[str] = None) -> Graph:
    return parse_store(text, 'turtle', base_iri)


def jsonld_to_store(text: str, base_iri: Optional[str] = None) -> Graph:
    return parse_store(text, 'json-ld', base_iri)


def load_store(path: Union[str, Path], format: Optional[str] = None,
               base_iri: Optional[str] = None) -> Store:
    """
    Load an RDF file (optionally gzip-compressed) into a new store.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If no format is given and none can be guessed
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Input file not found: {path}")

    format = format or guess_format(path)
    opener = gzip.open if path.suffix.lower() == '.gz' else open
    with opener(path, 'rt', encoding='utf-8') as f:
        text = f.read()

    logger.debug(f"Parsing {path} as {format}")
    store = parse_store(text, format, base_iri or path.resolve().as_uri())
    logger.info(f"Loaded {len(store):,} statements from {path}")
    return store


def statements(store: Store, subject: Optional[Node] = None, predicate: Optional[Node] = None,
               obj: Optional[Node] = None) -> Iterator[Quad]:
    """Statements of either store type matching a pattern (None is a wildcard)."""
    if isinstance(store, Dataset):
        for s, p, o, g in store.quads((subject, predicate, obj, None)):
            if isinstance(g, Graph):
                g = g.identifier
            if g == DATASET_DEFAULT_GRAPH_ID:
                g = None
            yield Quad(s, p, o, g)
    else:
        for s, p, o in store.triples((subject, predicate, obj)):
            yield Quad(s, p, o)


def count_statements(store: Store, subject: Optional[Node] = None,
                     predicate: Optional[Node] = None, obj: Optional[Node] = None) -> int:
    return sum(1 for _ in statements(store, subject, predicate, obj))


def member_statements(store: Store, member: Node, follow_blank_nodes: bool = True) -> List[Quad]:
    """
    Statements describing ``member``.

    With ``follow_blank_nodes``, statements about blank nodes reachable from
    the member are included too.
    """
    collected: List[Quad] = []
    seen: Set[Node] = set()
    pending = [member]

    while pending:
        subject = pending.pop()
        if subject in seen:
            continue
        seen.add(subject)
        for quad in statements(store, subject):
            collected.append(quad)
            if follow_blank_nodes and isinstance(quad.object, BNode):
                pending.append(quad.object)

    return list(sort_quads(collected))


def store_as_member_stream(store: Store, follow_blank_nodes: bool = True) -> Iterator[Member]:
    """
    Lazily produce one Member per ``tree:member`` object of the store.

    Members are produced in identifier order and their statements in N3
    order, so the same store always yields the same stream.
    """
    members = {quad.object for quad in statements(store, None, TREE.member, None)}
    for member in sorted(members, key=lambda term: term.n3()):
        yield Member(id=member, quads=member_statements(store, member, follow_blank_nodes))


def _add_member(store: Store, member: Member, collection: Optional[URIRef]) -> None:
    for quad in member.quads:
        if isinstance(store, Dataset) and quad.graph is not None:
            store.add((quad.subject, quad.predicate, quad.object, quad.graph))
        else:
            store.add(quad.triple())
    if collection is not None:
        store.add((collection, TREE.member, member.id))


def _store_for(members: List[Member]) -> Store:
    needs_dataset = any(q.graph is not None for m in members for q in m.quads)
    return new_store('nquads' if needs_dataset else 'turtle')


def member_stream_to_store(stream: Iterable[Member], collection_identifier: Optional[str] = None,
                           store: Optional[Store] = None) -> Store:
    """
    Collect a member stream into a store.

    With ``collection_identifier``, a ``tree:member`` link from the collection
    to every member is added as well.
    """
    members = list(stream)
    store = store if store is not None else _store_for(members)
    collection = URIRef(collection_identifier) if collection_identifier else None
    for member in members:
        _add_member(store, member, collection)
    return store


async def amember_stream_to_store(stream: Any, collection_identifier: Optional[str] = None,
                                  store: Optional[Store] = None) -> Store:
    """Async variant of ``member_stream_to_store``."""
    members = await acollect_members(stream)
    return member_stream_to_store(members, collection_identifier, store)


def collect_members(stream: Iterable[Member]) -> List[Member]:
    """Drain a member stream into a list."""
    return list(stream)


async def acollect_members(stream: Any) -> List[Member]:
    """Drain a sync or async member stream into a list."""
    if hasattr(stream, '__aiter__'):
        return [member async for member in stream]
    return list(stream)


def store_to_string(store: Store, format: Optional[str] = None) -> str:
    """Serialize a store (Turtle for graphs, TriG for datasets by default)."""
    if format is None:
        format = 'trig' if isinstance(store, Dataset) else 'turtle'
    return store.serialize(format=format)
