#!/usr/bin/env python3
"""Tests for the housekeeper and configuration defaults."""

import sys
import time
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from namecast.config import Config, get_config_summary
from namecast.housekeeper import Housekeeper


def _age(session_manager, session_id, seconds):
    session = session_manager.get_session(session_id)
    session.created_ts = time.time() - seconds
    session_manager.session_store.save_session(session)


class TestHousekeeper:
    def test_disabled_without_ttl(self, session_manager, logger):
        housekeeper = Housekeeper(session_manager, ttl_minutes=0, logger=logger)

        housekeeper.start()

        assert not housekeeper.enabled
        assert housekeeper._thread is None

    def test_cycle_purges_expired_sessions(self, session_manager, logger, tmp_path):
        expired = session_manager.create_session()
        upload = tmp_path / "upload.csv"
        upload.write_text("Alice")
        session_manager.register_cleanup_path(expired, upload)
        _age(session_manager, expired, 3 * 60)
        kept = session_manager.create_session()

        housekeeper = Housekeeper(session_manager, ttl_minutes=1, logger=logger)

        assert housekeeper.run_cycle() == 1
        assert session_manager.get_session(expired) is None
        assert session_manager.get_session(kept) is not None
        assert not upload.exists()

    def test_start_and_stop(self, session_manager, logger):
        housekeeper = Housekeeper(session_manager, ttl_minutes=5, interval_minutes=1, logger=logger)

        housekeeper.start()
        try:
            assert housekeeper._thread is not None
            assert housekeeper._thread.daemon
        finally:
            housekeeper.stop()

        assert housekeeper._thread is None


class TestConfig:
    def test_test_mode_directories(self, test_data_dir):
        assert Config.is_test_mode()
        assert Config.get_uploads_dir() == test_data_dir.resolve() / "uploads"
        assert Config.get_work_dir() == test_data_dir.resolve() / "work"
        assert Config.get_fonts_dir() == test_data_dir.resolve() / "fonts"

    def test_defaults(self, monkeypatch):
        for name in (
            "NAMECAST_MAX_BATCH_SIZE",
            "NAMECAST_MAX_UPLOAD_MB",
            "NAMECAST_JPEG_QUALITY",
            "NAMECAST_SESSION_TTL_MINUTES",
        ):
            monkeypatch.delenv(name, raising=False)

        assert Config.get_max_batch_size() == 50
        assert Config.get_max_upload_mb() == 50
        assert Config.get_jpeg_quality() == 90
        assert Config.get_session_ttl_minutes() == 0

    def test_invalid_values_fall_back_to_defaults(self, monkeypatch):
        monkeypatch.setenv("NAMECAST_MAX_BATCH_SIZE", "lots")
        monkeypatch.setenv("NAMECAST_WEB_PORT", "0")

        assert Config.get_max_batch_size() == 50
        assert Config.get_web_port() == 8020

    def test_jpeg_quality_is_capped(self, monkeypatch):
        monkeypatch.setenv("NAMECAST_JPEG_QUALITY", "100")

        assert Config.get_jpeg_quality() == 95

    def test_ensure_directories(self, test_data_dir):
        Config.ensure_directories()

        assert (test_data_dir / "uploads").is_dir()
        assert (test_data_dir / "work").is_dir()

    def test_summary(self):
        summary = get_config_summary()

        assert summary["test_mode"] is True
        assert summary["max_batch_size"] == Config.get_max_batch_size()
