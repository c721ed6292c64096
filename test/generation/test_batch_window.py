#!/usr/bin/env python3
"""Tests for batch window clamping and artifact file naming."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

import pytest

from namecast.generation import BatchWindow, artifact_filename, slugify_name


class TestClamp:
    def test_offset_and_limit_within_range(self):
        window = BatchWindow.clamp(total=120, offset=50, limit=10)

        assert (window.start, window.end, window.count) == (50, 60, 10)
        assert list(window.indexes()) == list(range(50, 60))

    def test_window_is_cut_at_the_end_of_the_list(self):
        window = BatchWindow.clamp(total=120, offset=115, limit=10)

        assert (window.start, window.end, window.count) == (115, 120, 5)

    def test_limit_is_capped_by_max_batch_size(self):
        window = BatchWindow.clamp(total=3, offset=0, limit=1000)

        assert window.count == 3
        assert BatchWindow.clamp(total=500, offset=0, limit=1000).count == 50

    def test_missing_limit_uses_the_cap(self):
        assert BatchWindow.clamp(total=500).count == 50
        assert BatchWindow.clamp(total=500, limit=0).count == 50
        assert BatchWindow.clamp(total=500, limit=-4).count == 50

    def test_negative_offset_starts_at_zero(self):
        window = BatchWindow.clamp(total=10, offset=-7, limit=3)

        assert (window.start, window.end) == (0, 3)

    def test_offset_past_the_end_is_empty(self):
        window = BatchWindow.clamp(total=10, offset=10, limit=5)

        assert window.count == 0
        assert list(window.indexes()) == []

    def test_empty_name_list(self):
        assert BatchWindow.clamp(total=0).count == 0

    def test_custom_cap(self):
        assert BatchWindow.clamp(total=100, offset=0, limit=40, max_batch_size=25).count == 25

    @pytest.mark.parametrize("total", [0, 1, 49, 50, 51, 200])
    @pytest.mark.parametrize("offset", [None, -1, 0, 25, 60, 250])
    @pytest.mark.parametrize("limit", [None, -1, 0, 1, 30, 80])
    def test_window_bounds(self, total, offset, limit):
        window = BatchWindow.clamp(total=total, offset=offset, limit=limit)

        assert 0 <= window.count <= 50
        if limit is not None and limit > 0:
            assert window.count <= limit
        for index in window.indexes():
            assert 0 <= index < total
        assert window.start == max(0, offset or 0)


class TestArtifactFilename:
    def test_uses_one_based_absolute_index(self):
        assert artifact_filename(50, "Jane Doe", "png") == "051-Jane_Doe.png"

    def test_index_above_999_keeps_growing(self):
        assert artifact_filename(1233, "Ann", "jpg") == "1234-Ann.jpg"

    def test_slug_collapses_runs_of_unsafe_characters(self):
        assert slugify_name("Élise  O'Neil") == "_lise_O_Neil"
        assert slugify_name("a-b_c 9") == "a-b_c_9"

    def test_slug_never_contains_path_separators(self):
        slug = slugify_name("../../etc/passwd")

        assert "/" not in slug
        assert "." not in slug

    def test_colliding_slugs_get_distinct_file_names(self):
        names = ["Anne Marie", "Anne-Marie", "Anne  Marie", "Anne/Marie"]

        files = {artifact_filename(i, name, "png") for i, name in enumerate(names)}

        assert len(files) == len(names)
