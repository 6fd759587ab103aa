# -*- coding: utf-8 -*-
"""Tests for the ldes-extractor command line interface."""

import pytest
from rdflib import URIRef
from typer.testing import CliRunner

from ldes_extractor import __version__
from ldes_extractor import cli
from ldes_extractor.cli import app
from ldes_extractor.config import reset_settings
from ldes_extractor.conversion import count_statements, load_store, store_as_member_stream
from ldes_extractor.vocabularies import DCT, LDES, RDF, TREE

from tests.conftest import BLANK_NODE_LDES, LDES_EXAMPLE, LDES_IDENTIFIER

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Keep user config files and LDES_EXTRACTOR_* variables out of the CLI."""
    monkeypatch.setenv('HOME', str(tmp_path))
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv('LDES_EXTRACTOR_CONFIG_FILE', raising=False)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def ldes_file(tmp_path):
    path = tmp_path / "ldes.ttl"
    path.write_text(LDES_EXAMPLE, encoding='utf-8')
    return path


def test_version():
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert __version__ in result.output


class TestExtract:

    def run_extract(self, ldes_file, tmp_path, *args):
        output = tmp_path / "extraction.ttl"
        result = runner.invoke(app, [
            "extract", str(ldes_file),
            "--ldes", LDES_IDENTIFIER,
            "--output", str(output),
            *args,
        ])
        return result, output

    def test_window(self, ldes_file, tmp_path):
        result, output = self.run_extract(
            ldes_file, tmp_path, "--start", "2021-12-15T09:00:00Z", "--end", "2021-12-15T10:30:00Z")

        assert result.exit_code == 0, result.output
        store = load_store(output)
        extractor = URIRef("http://example.org/extractor")
        assert (extractor, TREE.member, URIRef("http://example.org/resource1v0")) in store
        assert (extractor, TREE.member, URIRef("http://example.org/resource1v1")) not in store
        assert (extractor, RDF.type, LDES.EventStream) in store

    def test_default_window_keeps_everything(self, ldes_file, tmp_path):
        result, output = self.run_extract(ldes_file, tmp_path, "--extractor-id", "http://example.org/mine")

        assert result.exit_code == 0, result.output
        store = load_store(output)
        assert count_statements(store, URIRef("http://example.org/mine"), TREE.member, None) == 2

    def test_without_metadata(self, ldes_file, tmp_path):
        result, output = self.run_extract(ldes_file, tmp_path, "--no-metadata")

        assert result.exit_code == 0, result.output
        assert count_statements(load_store(output), None, LDES.timestampPath, None) == 0

    def test_materialize(self, ldes_file, tmp_path):
        result, output = self.run_extract(ldes_file, tmp_path, "--materialize")

        assert result.exit_code == 0, result.output
        store = load_store(output)
        assert count_statements(store, URIRef("http://example.org/resource1"), DCT.issued, None) == 2

    def test_async(self, ldes_file, tmp_path):
        result, output = self.run_extract(ldes_file, tmp_path, "--async")

        assert result.exit_code == 0, result.output
        assert count_statements(load_store(output), None, TREE.member, None) == 2

    def test_blank_node_members(self, tmp_path):
        path = tmp_path / "blank.ttl"
        path.write_text(BLANK_NODE_LDES, encoding='utf-8')
        output = tmp_path / "out.ttl"
        result = runner.invoke(app, [
            "extract", str(path), "--ldes", "http://example.org/ES1",
            "--start", "2020-10-06T00:00:00Z", "--output", str(output),
        ])

        assert result.exit_code == 0, result.output
        assert len(list(store_as_member_stream(load_store(output)))) == 1

    def test_bad_date(self, ldes_file, tmp_path):
        result, _ = self.run_extract(ldes_file, tmp_path, "--start", "yesterday")
        assert result.exit_code != 0

    def test_unknown_ldes(self, ldes_file, tmp_path):
        output = tmp_path / "out.ttl"
        result = runner.invoke(app, [
            "extract", str(ldes_file), "--ldes", "http://example.org/unknown", "--output", str(output),
        ])
        assert result.exit_code == 1
        assert not output.exists()


class TestMetadata:

    def test_metadata(self, ldes_file, tmp_path):
        output = tmp_path / "metadata.ttl"
        result = runner.invoke(app, [
            "metadata", str(ldes_file), "--ldes", LDES_IDENTIFIER, "--output", str(output),
        ])

        assert result.exit_code == 0, result.output
        store = load_store(output)
        assert len(store) == 3
        assert (URIRef("http://example.org/extractor"), LDES.versionOfPath, DCT.isVersionOf) in store


def test_inspect(ldes_file, monkeypatch):
    monkeypatch.setattr(cli.console, "width", 200)
    result = runner.invoke(app, ["inspect", str(ldes_file)])
    assert result.exit_code == 0, result.output
    assert "http://example.org/ES" in result.output


def test_missing_input(tmp_path):
    result = runner.invoke(app, ["extract", str(tmp_path / "missing.ttl"), "--ldes", LDES_IDENTIFIER])
    assert result.exit_code != 0


def test_inspect_without_streams(tmp_path):
    path = tmp_path / "empty.ttl"
    path.write_text("<http://example.org/s> <http://example.org/p> <http://example.org/o> .\n")
    result = runner.invoke(app, ["inspect", str(path)])
    assert result.exit_code == 0
    assert "No ldes:EventStream found" in result.output
