#!/usr/bin/env python3
"""
Member types for LDES extraction streams.

A member stream carries one item per LDES member. Sources emit either a
``Member`` or a ``MalformedItem`` so operators can tell well-formed input
apart without inspecting its shape.
"""

from typing import Any, Iterable, NamedTuple, Optional, Tuple, Union
from dataclasses import dataclass, field

from rdflib.term import Identifier, Node, URIRef


class Quad(NamedTuple):
    """A subject-predicate-object fact, optionally scoped to a named graph."""

    subject: Optional[Node]
    predicate: Node
    object: Node
    graph: Optional[Node] = None

    def n3(self) -> str:
        """N3 rendering, used to order statements deterministically."""
        parts = [term.n3() for term in self[:3] if term is not None]
        if self.graph is not None:
            parts.append(self.graph.n3())
        return ' '.join(parts)

    def triple(self) -> Tuple[Node, Node, Node]:
        return (self.subject, self.predicate, self.object)


@dataclass(frozen=True)
class Member:
    """
    One entry of an event stream: a root identifier plus its statements.

    Statements are conceptually about ``id`` but nested blank-node
    structures may use other subjects.
    """

    id: Identifier
    quads: Tuple[Quad, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if not isinstance(self.quads, tuple):
            object.__setattr__(self, 'quads', tuple(self.quads))

    @property
    def value(self) -> str:
        """String value of the root identifier."""
        return str(self.id)

    def objects(self, predicate: Node, subject: Optional[Node] = None) -> list:
        """Objects of statements ``(subject or id, predicate, ?)``."""
        subject = self.id if subject is None else subject
        return [q.object for q in self.quads
                if q.subject == subject and q.predicate == predicate]


@dataclass(frozen=True)
class MalformedItem:
    """An input item that is not a member, kept with the reason it was rejected."""

    raw: Any
    reason: str = "not a member"


StreamItem = Union[Member, MalformedItem]


def _is_term(value: Any) -> bool:
    return isinstance(value, Node)


def as_quad(value: Any) -> Optional[Quad]:
    """Coerce a fact record (Quad or 3/4-tuple of rdflib terms) to a Quad."""
    if isinstance(value, Quad):
        return value
    if isinstance(value, tuple) and len(value) in (3, 4):
        if all(_is_term(term) for term in value[1:3]) and (value[0] is None or _is_term(value[0])):
            return Quad(*value)
    return None


def as_member(item: Any) -> StreamItem:
    """
    Classify a raw stream item as a ``Member`` or a ``MalformedItem``.

    A well-formed member has a non-null root identifier with a string value
    and a non-empty statement sequence whose first element is a fact record.
    ``Member`` instances are checked the same way as mappings with
    ``id``/``quads`` keys and other objects carrying those attributes.
    """
    if isinstance(item, MalformedItem):
        return item

    if isinstance(item, dict):
        identifier = item.get('id')
        quads = item.get('quads')
    else:
        identifier = getattr(item, 'id', None)
        quads = getattr(item, 'quads', None)

    if identifier is None or not isinstance(identifier, str):
        return MalformedItem(item, "missing root identifier")

    if not isinstance(quads, (list, tuple)) or not quads:
        return MalformedItem(item, "missing statements")

    first = as_quad(quads[0])
    if first is None:
        return MalformedItem(item, "first statement is not a fact record")

    coerced = []
    for value in quads:
        quad = as_quad(value)
        if quad is None:
            return MalformedItem(item, f"unrecognised statement: {value!r}")
        coerced.append(quad)

    if isinstance(item, Member) and all(isinstance(value, Quad) for value in quads):
        return item

    if not isinstance(identifier, Identifier):
        identifier = URIRef(identifier)

    return Member(id=identifier, quads=tuple(coerced))


def is_member(item: Any) -> bool:
    """True if ``item`` is, or can be read as, a well-formed member."""
    return isinstance(as_member(item), Member)


def sort_quads(quads: Iterable[Quad]) -> Tuple[Quad, ...]:
    """Deterministic statement order (by N3 form)."""
    return tuple(sorted(quads, key=Quad.n3))
