#!/usr/bin/env python3
"""Tests for the ZIP archive builder."""

import sys
import zipfile
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

import pytest

from namecast.archive import ArchiveBuilder
from namecast.exceptions import ArchiveError


@pytest.fixture
def builder(logger):
    return ArchiveBuilder(logger=logger)


@pytest.fixture
def source_dir(tmp_path):
    source = tmp_path / "all"
    source.mkdir()
    (source / "002-Bob.png").write_bytes(b"b" * 2048)
    (source / "001-Alice.png").write_bytes(b"a" * 2048)
    nested = source / "nested"
    nested.mkdir()
    (nested / "ignored.png").write_bytes(b"x")
    return source


class TestBuild:
    def test_entries_are_flat_and_sorted(self, builder, source_dir, tmp_path):
        summary = builder.build(source_dir, tmp_path / "invitations.zip")

        assert summary.file_count == 2
        with zipfile.ZipFile(summary.path) as zf:
            assert zf.namelist() == ["001-Alice.png", "002-Bob.png"]
            assert zf.read("001-Alice.png") == b"a" * 2048
            assert all(info.compress_type == zipfile.ZIP_DEFLATED for info in zf.infolist())

    def test_summary_reports_size(self, builder, source_dir, tmp_path):
        summary = builder.build(source_dir, tmp_path / "invitations.zip")

        assert summary.size_bytes == summary.path.stat().st_size
        assert summary.size_bytes > 0

    def test_existing_archive_is_replaced(self, builder, source_dir, tmp_path):
        destination = tmp_path / "invitations.zip"
        destination.write_bytes(b"stale")

        builder.build(source_dir, destination)

        assert zipfile.is_zipfile(destination)
        assert not (tmp_path / ".invitations.zip.part").exists()

    def test_empty_directory_gives_empty_archive(self, builder, tmp_path):
        empty = tmp_path / "empty"
        empty.mkdir()

        summary = builder.build(empty, tmp_path / "invitations.zip")

        assert summary.file_count == 0
        with zipfile.ZipFile(summary.path) as zf:
            assert zf.namelist() == []

    def test_missing_source_raises(self, builder, tmp_path):
        destination = tmp_path / "invitations.zip"

        with pytest.raises(ArchiveError) as exc_info:
            builder.build(tmp_path / "missing", destination)

        assert exc_info.value.code == "ARCHIVE_ERROR"
        assert not destination.exists()

    def test_unwritable_destination_raises_and_leaves_nothing(
        self, builder, source_dir, tmp_path
    ):
        blocker = tmp_path / "blocker"
        blocker.write_text("a file, not a directory")

        with pytest.raises(ArchiveError):
            builder.build(source_dir, blocker / "invitations.zip")

        assert blocker.read_text() == "a file, not a directory"


class TestBuildAsync:
    @pytest.mark.asyncio
    async def test_resolves_after_archive_is_complete(self, builder, source_dir, tmp_path):
        summary = await builder.build_async(source_dir, tmp_path / "invitations.zip")

        with zipfile.ZipFile(summary.path) as zf:
            assert zf.testzip() is None
            assert len(zf.namelist()) == 2
