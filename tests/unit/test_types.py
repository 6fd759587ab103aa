# -*- coding: utf-8 -*-
"""Tests for member stream types."""

import pytest
from rdflib import BNode, Literal, URIRef

from ldes_extractor.types import MalformedItem, Member, Quad, as_member, as_quad, is_member, sort_quads
from ldes_extractor.vocabularies import DCT

S = URIRef("http://example.org/s")


class TestQuad:

    def test_defaults_to_default_graph(self):
        quad = Quad(S, DCT.title, Literal("t"))
        assert quad.graph is None
        assert quad.triple() == (S, DCT.title, Literal("t"))

    def test_n3(self):
        quad = Quad(S, DCT.title, Literal("t"), URIRef("http://example.org/g"))
        assert quad.n3() == '<http://example.org/s> <http://purl.org/dc/terms/title> "t" <http://example.org/g>'

    def test_as_quad(self):
        assert as_quad((S, DCT.title, Literal("t"))) == Quad(S, DCT.title, Literal("t"))
        assert as_quad(("s", "p", "o")) is None
        assert as_quad((S, DCT.title)) is None

    def test_sort_quads(self):
        b = Quad(S, DCT.title, Literal("b"))
        a = Quad(S, DCT.title, Literal("a"))
        assert sort_quads([b, a]) == (a, b)


class TestMember:

    def test_quads_become_a_tuple(self):
        member = Member(id=S, quads=[Quad(S, DCT.title, Literal("t"))])
        assert isinstance(member.quads, tuple)
        assert member.value == "http://example.org/s"

    def test_objects(self):
        other = BNode()
        member = Member(id=S, quads=[
            Quad(S, DCT.title, Literal("t")),
            Quad(other, DCT.title, Literal("nested")),
        ])
        assert member.objects(DCT.title) == [Literal("t")]
        assert member.objects(DCT.title, subject=other) == [Literal("nested")]

    def test_members_are_immutable(self):
        member = Member(id=S)
        with pytest.raises(AttributeError):
            member.id = URIRef("http://example.org/other")


class TestAsMember:

    def test_member_passes_through(self):
        member = Member(id=S, quads=[Quad(S, DCT.title, Literal("t"))])
        assert as_member(member) is member

    def test_member_statements_are_checked(self):
        rebuilt = as_member(Member(id=S, quads=[(S, DCT.title, Literal("t"))]))
        assert rebuilt == Member(id=S, quads=[Quad(S, DCT.title, Literal("t"))])
        assert isinstance(rebuilt.quads[0], Quad)

        empty = as_member(Member(id=S))
        assert isinstance(empty, MalformedItem)
        assert empty.reason == "missing statements"

    def test_mapping(self):
        result = as_member({"id": "http://example.org/s", "quads": [(S, DCT.title, Literal("t"))]})
        assert result == Member(id=S, quads=[Quad(S, DCT.title, Literal("t"))])

    def test_object_with_attributes(self):
        class Raw:
            id = S
            quads = [(S, DCT.title, Literal("t"), None)]

        assert is_member(Raw())

    @pytest.mark.parametrize("item, reason", [
        ({"quads": []}, "missing root identifier"),
        ({"id": 1, "quads": []}, "missing root identifier"),
        ({"id": "http://example.org/s", "quads": []}, "missing statements"),
        ({"id": "http://example.org/s", "quads": "abc"}, "missing statements"),
        ({"id": "http://example.org/s", "quads": [42]}, "first statement is not a fact record"),
    ])
    def test_malformed(self, item, reason):
        result = as_member(item)
        assert isinstance(result, MalformedItem)
        assert result.reason == reason
        assert result.raw is item

    def test_later_bad_statement(self):
        result = as_member({"id": "http://example.org/s", "quads": [(S, DCT.title, Literal("t")), "x"]})
        assert isinstance(result, MalformedItem)
        assert result.reason.startswith("unrecognised statement")
