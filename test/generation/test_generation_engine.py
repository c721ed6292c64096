#!/usr/bin/env python3
"""Tests for the batch generation engine."""

import sys
import zipfile
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

import pytest

from namecast.exceptions import ArchiveError, InvalidSessionStateError, RenderingError
from namecast.generation import BatchGenerationEngine
from namecast.validation.models import OutputFormat, OverlayStyle


def _entries(path):
    with zipfile.ZipFile(path) as zf:
        return zf.namelist()


class FailingArchiveBuilder:
    def build(self, source_dir, destination):
        raise ArchiveError("Archive could not be built", details={"error": "disk full"})


@pytest.fixture
def style():
    return OverlayStyle(x=4, y=4, font_size=18, color="#1a2b3c")


class TestGenerate:
    def test_png_window_from_offset(self, engine, ready_session, style):
        names = [f"Guest {i}" for i in range(120)]
        session = ready_session(names)

        result = engine.generate(session, style, OutputFormat.PNG, offset=50, limit=10)

        assert result.processed == 10
        assert result.offset == 50
        assert result.total == 120
        entries = _entries(result.archive_path)
        assert len(entries) == 10
        assert entries[0] == "051-Guest_50.png"
        assert entries[-1] == "060-Guest_59.png"
        assert result.files == entries

    def test_jpeg_output_leaves_no_png_behind(self, engine, ready_session, style):
        session = ready_session(["Alice", "Bob"])

        result = engine.generate(session, style, OutputFormat.JPEG)

        assert _entries(result.archive_path) == ["001-Alice.jpg", "002-Bob.jpg"]
        out_dir = engine.output_dir(session.session_id)
        assert sorted(p.name for p in out_dir.iterdir()) == ["001-Alice.jpg", "002-Bob.jpg"]
        with zipfile.ZipFile(result.archive_path) as zf:
            assert zf.read("001-Alice.jpg")[:2] == b"\xff\xd8"

    def test_limit_is_capped(self, engine, ready_session, style):
        session = ready_session(["Alice", "Bob", "Carol"])

        result = engine.generate(session, style, limit=1000)

        assert result.processed == 3

    def test_offset_past_end_builds_empty_archive(self, engine, ready_session, style):
        session = ready_session(["Alice"])

        result = engine.generate(session, style, offset=5)

        assert result.processed == 0
        assert _entries(result.archive_path) == []

    def test_repeated_calls_replace_previous_output(self, engine, ready_session, style):
        session = ready_session([f"N{i}" for i in range(20)])

        engine.generate(session, style, offset=0, limit=5)
        result = engine.generate(session, style, offset=10, limit=2)

        assert _entries(result.archive_path) == ["011-N10.png", "012-N11.png"]

    def test_same_request_twice_gives_same_archive_entries(self, engine, ready_session, style):
        session = ready_session(["Alice", "Bob"])

        first = _entries(engine.generate(session, style, OutputFormat.JPEG).archive_path)
        second = _entries(engine.generate(session, style, OutputFormat.JPEG).archive_path)

        assert first == second

    def test_session_dir_is_registered_for_cleanup(
        self, engine, ready_session, session_manager, style
    ):
        session = ready_session(["Alice"])

        engine.generate(session, style)

        stored = session_manager.get_session(session.session_id)
        assert str(engine.session_dir(session.session_id)) in stored.cleanup_paths
        assert engine.has_archive(session.session_id)

    def test_session_without_names_is_rejected(self, engine, ready_session, style):
        session = ready_session([])

        with pytest.raises(InvalidSessionStateError) as exc_info:
            engine.generate(session, style)

        assert exc_info.value.message == "Missing model or names"

    def test_session_without_template_is_rejected(self, engine, session_manager, style):
        session_id = session_manager.create_session()
        session = session_manager.set_names(session_id, ["Alice"])

        with pytest.raises(InvalidSessionStateError):
            engine.generate(session, style)

    def test_rendering_failure_aborts_and_stays_cleanable(
        self, engine, ready_session, session_manager, style, template_path
    ):
        session = ready_session(["Alice", "Bob"])
        template_path.write_bytes(b"corrupted")

        with pytest.raises(RenderingError):
            engine.generate(session, style)

        assert not engine.has_archive(session.session_id)
        session_manager.destroy_session(session.session_id)
        assert not engine.session_dir(session.session_id).exists()

    def test_jpeg_conversion_failure_leaves_no_temporary_png(
        self, engine, ready_session, style, monkeypatch
    ):
        def broken_to_jpeg(png_bytes, quality=90):
            raise RenderingError("Image could not be converted to JPEG")

        monkeypatch.setattr("namecast.generation.engine.to_jpeg", broken_to_jpeg)
        session = ready_session(["Alice", "Bob"])

        with pytest.raises(RenderingError):
            engine.generate(session, style, OutputFormat.JPEG)

        out_dir = engine.output_dir(session.session_id)
        assert list(out_dir.iterdir()) == []

    def test_unwritable_jpeg_target_leaves_no_temporary_png(self, engine, ready_session, style):
        session = ready_session(["Alice"])
        out_dir = engine.output_dir(session.session_id)
        original_reset = engine._reset_output_dir

        def reset_with_blocker(session_id):
            path = original_reset(session_id)
            # a directory where the JPEG file should go makes the final write fail
            (path / "001-Alice.jpg").mkdir()
            return path

        engine._reset_output_dir = reset_with_blocker

        with pytest.raises(RenderingError):
            engine.generate(session, style, OutputFormat.JPEG)

        assert not list(out_dir.glob("*.tmp.png"))

    def test_archive_failure_propagates(
        self, session_manager, compositor, logger, test_data_dir, ready_session, style
    ):
        engine = BatchGenerationEngine(
            session_manager=session_manager,
            work_dir=test_data_dir / "work",
            compositor=compositor,
            archive_builder=FailingArchiveBuilder(),
            logger=logger,
        )
        session = ready_session(["Alice"])

        with pytest.raises(ArchiveError):
            engine.generate(session, style)

        stored = session_manager.get_session(session.session_id)
        assert str(engine.session_dir(session.session_id)) in stored.cleanup_paths


class TestPreview:
    def test_preview_renders_first_name(self, engine, ready_session, style):
        session = ready_session(["Alice", "Bob"])

        png = engine.preview(session, style)

        assert png.startswith(b"\x89PNG")
        preview_file = engine.session_dir(session.session_id) / "preview.png"
        assert preview_file.read_bytes() == png

    def test_out_of_range_index_falls_back_to_first(self, engine, ready_session, style):
        session = ready_session(["Alice", "Bob"])

        assert engine.preview(session, style, index=99) == engine.preview(session, style, index=0)

    def test_preview_requires_names(self, engine, ready_session, style):
        with pytest.raises(InvalidSessionStateError):
            engine.preview(ready_session([]), style)
