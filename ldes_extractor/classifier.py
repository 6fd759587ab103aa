# -*- coding: utf-8 -*-
"""
Member classification against an extraction window.

Pure functions: nothing here touches operator state, so the same
configuration and member always give the same result.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from rdflib import Literal
from rdflib.term import Node

from .config.extraction import ExtractionConfig
from .errors import ClassificationError
from .timestamps import extract_date_from_literal
from .types import Member


@dataclass(frozen=True)
class Classification:
    """Outcome of classifying one member."""
    accept: bool
    timestamp: Optional[datetime] = None
    version_id: Optional[str] = None
    version_term: Optional[Node] = None


def _single_object(member: Member, predicate: Node, what: str) -> Node:
    values = member.objects(predicate)
    if len(values) != 1:
        raise ClassificationError(
            f"Found {len(values)} {what} following the path {predicate} of {member.id}; "
            f"expected exactly one.",
            member_id=member.id,
        )
    return values[0]


def extract_timestamp(member: Member, config: ExtractionConfig) -> datetime:
    """The member's timestamp (exactly one date-time literal on the timestamp path)."""
    value = _single_object(member, config.timestamp_path, "dateTime literals")
    if not isinstance(value, Literal):
        raise ClassificationError(
            f"Timestamp of {member.id} is not a literal: {value.n3()}",
            member_id=member.id,
        )
    try:
        return extract_date_from_literal(value)
    except ValueError as e:
        raise ClassificationError(
            f"Timestamp of {member.id} is not a valid dateTime: {e}",
            member_id=member.id,
        ) from e


def extract_version_term(member: Member, config: ExtractionConfig) -> Node:
    """The term on the member's versionOf path (exactly one required)."""
    return _single_object(member, config.version_of_path, "identifiers")


def extract_version_id(member: Member, config: ExtractionConfig) -> str:
    """The member's version identifier as a string."""
    return str(extract_version_term(member, config))


def classify(member: Member, config: ExtractionConfig,
             match_version: bool = True) -> Classification:
    """
    Decide whether ``member`` belongs to the extraction.

    Accepts iff the timestamp lies in the (inclusive) window and, when
    ``match_version`` is set and a version filter is configured, the version
    identifier equals it.

    Raises:
        ClassificationError: No or several timestamp/version statements, or an
            unparsable timestamp
    """
    version_term = extract_version_term(member, config)
    version_id = str(version_term)
    timestamp = extract_timestamp(member, config)

    in_window = config.window.contains(timestamp)
    version_ok = (
        not match_version
        or not config.version_identifier
        or config.version_identifier == version_id
    )

    return Classification(
        accept=in_window and version_ok,
        timestamp=timestamp,
        version_id=version_id,
        version_term=version_term,
    )
