# -*- coding: utf-8 -*-
"""Type definitions for LDES extraction."""

from .members import (
    Quad,
    Member,
    MalformedItem,
    StreamItem,
    as_member,
    as_quad,
    is_member,
    sort_quads,
)

__all__ = [
    'Quad',
    'Member',
    'MalformedItem',
    'StreamItem',
    'as_member',
    'as_quad',
    'is_member',
    'sort_quads',
]
