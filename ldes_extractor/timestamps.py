# -*- coding: utf-8 -*-
"""Date-time helpers for timestamp literals and extraction windows."""

from datetime import datetime, timezone
from typing import Union

from rdflib import Literal
from rdflib.namespace import XSD

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    """Return an aware UTC datetime; naive values are taken as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_datetime(text: str) -> datetime:
    """
    Parse an ISO-8601 date-time string (``Z`` suffix allowed) into UTC.

    Raises:
        ValueError: If ``text`` is not a valid date-time
    """
    text = text.strip()
    if text.endswith('Z') or text.endswith('z'):
        text = text[:-1] + '+00:00'
    return ensure_utc(datetime.fromisoformat(text))


def extract_date_from_literal(literal: Literal) -> datetime:
    """
    Convert a timestamp literal to an aware UTC datetime.

    Only date-time values are supported (``xsd:dateTime`` or an untyped
    ISO-8601 lexical form).

    Raises:
        ValueError: If the literal does not hold a date-time
    """
    if not isinstance(literal, Literal):
        raise ValueError(f"Expected a literal, got {literal!r}")

    value = literal.value if literal.datatype in (None, XSD.dateTime, XSD.dateTimeStamp) else None
    if isinstance(value, datetime):
        return ensure_utc(value)

    if literal.datatype not in (None, XSD.dateTime, XSD.dateTimeStamp, XSD.string):
        raise ValueError(f"Literal {literal.n3()} is not an xsd:dateTime")

    return parse_datetime(str(literal))


def date_to_literal(value: Union[datetime, str]) -> Literal:
    """Create an ``xsd:dateTime`` literal (UTC, ``Z`` suffix)."""
    if isinstance(value, str):
        value = parse_datetime(value)
    value = ensure_utc(value)
    lexical = value.isoformat(timespec='milliseconds').replace('+00:00', 'Z')
    return Literal(lexical, datatype=XSD.dateTime)
