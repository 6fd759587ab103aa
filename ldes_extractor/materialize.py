# -*- coding: utf-8 -*-
"""Version materialization of member statement groups."""

from typing import Tuple

from rdflib.term import Node

from .config.extraction import ExtractionConfig
from .types import Member, Quad


def _usable_subject(quad: Quad):
    if quad.subject is None or not str(quad.subject):
        return quad.graph
    return quad.subject


def materialize_member(member: Member, version: Node,
                       config: ExtractionConfig) -> Tuple[Quad, ...]:
    """
    Reframe a member's statements under its version identifier.

    Only the member's timestamp statement is re-subjected under ``version``.
    Every other statement keeps its subject, or takes the statement's graph
    when the subject is unusable.
    """
    group = []
    for quad in member.quads:
        if quad.subject == member.id and quad.predicate == config.timestamp_path:
            group.append(quad._replace(subject=version))
        else:
            group.append(quad._replace(subject=_usable_subject(quad)))
    return tuple(group)
