"""Tests for document sources and the fallback resolver."""

import logging
from pathlib import Path
from typing import List
from xml.etree.ElementTree import Element

import pytest

from krelay_gamedata.game_data.sources import (
    CachedFileSource,
    DocumentSource,
    EmbeddedSource,
    ExhaustedChainError,
    LocalFileSource,
    SourceError,
    SourceResolver,
)


class RecordingSource(DocumentSource):
    """Source returning a fixed element or failing, recording each call."""

    def __init__(self, label: str, calls: List[str], fail: bool = False):
        self.label = label
        self.calls = calls
        self.fail = fail

    def fetch(self) -> Element:
        self.calls.append(self.label)
        if self.fail:
            raise SourceError(f"{self.label} is broken")
        return Element(self.label)


class TestLocalFileSource:
    """Test reading documents from disk."""

    def test_reads_document(self, resources_dir: Path) -> None:
        """Test an existing file is parsed to its root element."""
        document = LocalFileSource(resources_dir / "Tiles.xml").fetch()
        assert document.tag == "GroundTypes"

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test a missing file is a source failure."""
        with pytest.raises(SourceError, match="Cannot read"):
            LocalFileSource(tmp_path / "Tiles.xml").fetch()

    def test_corrupt_file(self, tmp_path: Path, corrupt_payload: bytes) -> None:
        """Test every kind of unparsable file is a source failure."""
        path = tmp_path / "Packets.xml"
        path.write_bytes(corrupt_payload)
        with pytest.raises(SourceError, match="Malformed XML"):
            LocalFileSource(path).fetch()

    def test_cache_label(self, tmp_path: Path) -> None:
        """Test the cached copy is labelled as such."""
        assert CachedFileSource(tmp_path / "char_list.xml").label.startswith("cache ")


class TestEmbeddedSource:
    """Test documents bundled with the package."""

    def test_reads_bundled_document(self) -> None:
        """Test a bundled document is parsed."""
        assert EmbeddedSource("Packets.xml").fetch().tag == "Packets"

    def test_unknown_document(self) -> None:
        """Test an unknown resource name is a source failure."""
        with pytest.raises(SourceError, match="missing"):
            EmbeddedSource("Servers.xml").fetch()


class TestSourceResolver:
    """Ordered fallback chain."""

    def test_first_success_wins(self) -> None:
        """Test later sources are not tried once one succeeds."""
        calls: List[str] = []
        resolver = SourceResolver(
            "Tiles", [RecordingSource("local", calls), RecordingSource("embedded", calls)]
        )

        resolved = resolver.resolve()

        assert resolved.source == "local"
        assert resolved.document.tag == "local"
        assert calls == ["local"]

    def test_falls_back_in_order(self) -> None:
        """Test sources are tried in declaration order."""
        calls: List[str] = []
        resolver = SourceResolver(
            "Tiles",
            [
                RecordingSource("local", calls, fail=True),
                RecordingSource("embedded", calls),
                RecordingSource("never", calls),
            ],
        )

        resolved = resolver.resolve()

        assert resolved.source == "embedded"
        assert calls == ["local", "embedded"]

    def test_fallback_is_not_an_error(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test a used fallback logs at info level only."""
        calls: List[str] = []
        resolver = SourceResolver(
            "Objects",
            [RecordingSource("local", calls, fail=True), RecordingSource("embedded", calls)],
        )

        with caplog.at_level(logging.DEBUG, logger="krelay_gamedata"):
            resolver.resolve()

        assert not [r for r in caplog.records if r.levelno >= logging.WARNING]
        assert any("using fallback embedded" in r.getMessage() for r in caplog.records)

    def test_exhausted_chain(self) -> None:
        """Test the exhausted chain reports the last failure only."""
        calls: List[str] = []
        resolver = SourceResolver(
            "Servers",
            [RecordingSource("remote", calls, fail=True), RecordingSource("cache", calls, fail=True)],
        )

        with pytest.raises(ExhaustedChainError) as excinfo:
            resolver.resolve()

        assert excinfo.value.dataset == "Servers"
        assert "cache is broken" in str(excinfo.value)
        # Only the last failure is kept
        assert "remote is broken" not in str(excinfo.value)
        assert isinstance(excinfo.value.__cause__, SourceError)
        assert calls == ["remote", "cache"]

    def test_no_sources(self) -> None:
        """Test an empty chain is exhausted immediately."""
        with pytest.raises(ExhaustedChainError, match="No sources"):
            SourceResolver("Packets", []).resolve()

    def test_local_then_embedded_files(self, tmp_path: Path) -> None:
        """Test a missing local file falls back to the bundled copy."""
        resolver = SourceResolver(
            "Packets",
            [LocalFileSource(tmp_path / "Packets.xml"), EmbeddedSource("Packets.xml")],
        )

        resolved = resolver.resolve()

        assert resolved.source == "embedded Packets.xml"
        assert resolved.document.tag == "Packets"

    def test_corrupt_local_file_falls_back(self, tmp_path: Path, corrupt_payload: bytes) -> None:
        """Test an unparsable local file falls back to the bundled copy."""
        path = tmp_path / "Packets.xml"
        path.write_bytes(corrupt_payload)
        resolver = SourceResolver("Packets", [LocalFileSource(path), EmbeddedSource("Packets.xml")])

        resolved = resolver.resolve()

        assert resolved.source == "embedded Packets.xml"
        assert resolved.document.tag == "Packets"
