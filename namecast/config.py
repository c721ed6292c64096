"""Configuration for the namecast service.

Environment Variables:
    NAMECAST_DATA_DIR                    Base directory for uploads and work dirs (default: ./data)
    NAMECAST_WEB_PORT                    Web server port (default: 8020)
    NAMECAST_MAX_BATCH_SIZE              Hard cap on names rendered per request (default: 50)
    NAMECAST_MAX_UPLOAD_MB               Per-file upload limit in MiB (default: 50)
    NAMECAST_JPEG_QUALITY                JPEG conversion quality, 1-95 (default: 90)
    NAMECAST_FONTS_DIR                   Extra .ttf/.otf fonts (default: {DATA_DIR}/fonts)
    NAMECAST_SESSION_TTL_MINUTES         Evict sessions older than this; 0 disables (default: 0)
    NAMECAST_HOUSEKEEPING_INTERVAL_MINS  Housekeeper cycle (default: 10)
    NAMECAST_LOG_LEVEL                   DEBUG, INFO, WARNING, ERROR (default: INFO)
"""

import os
from pathlib import Path
from typing import Optional, Union

DEFAULT_WEB_PORT = 8020
DEFAULT_MAX_BATCH_SIZE = 50
DEFAULT_MAX_UPLOAD_MB = 50
DEFAULT_JPEG_QUALITY = 90
DEFAULT_SESSION_TTL_MINUTES = 0
DEFAULT_HOUSEKEEPING_INTERVAL_MINS = 10
ARCHIVE_NAME = "invitations.zip"
OUTPUT_SUBDIR = "all"
PREVIEW_NAME = "preview.png"
NAMES_PREVIEW_LIMIT = 50


def _int_env(name: str, default: int, minimum: int = 0) -> int:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value >= minimum else default


class Config:
    """Resolves directories and limits from the environment.

    Tests call ``set_test_mode`` to point every directory at a temporary
    location and ``clear_test_mode`` to restore the environment defaults.
    """

    _data_dir_override: Optional[Path] = None
    _test_mode: bool = False

    @classmethod
    def set_data_dir(cls, data_dir: Union[str, Path]) -> None:
        cls._data_dir_override = Path(data_dir).resolve()

    @classmethod
    def set_test_mode(cls, data_dir: Union[str, Path]) -> None:
        cls.set_data_dir(data_dir)
        cls._test_mode = True

    @classmethod
    def clear_test_mode(cls) -> None:
        cls._data_dir_override = None
        cls._test_mode = False

    @classmethod
    def is_test_mode(cls) -> bool:
        return cls._test_mode

    @classmethod
    def get_data_dir(cls) -> Path:
        if cls._data_dir_override is not None:
            return cls._data_dir_override
        return Path(os.environ.get("NAMECAST_DATA_DIR", "data")).resolve()

    @classmethod
    def get_uploads_dir(cls) -> Path:
        return cls.get_data_dir() / "uploads"

    @classmethod
    def get_work_dir(cls) -> Path:
        return cls.get_data_dir() / "work"

    @classmethod
    def get_fonts_dir(cls) -> Path:
        override = os.environ.get("NAMECAST_FONTS_DIR")
        if override and not cls._test_mode:
            return Path(override)
        return cls.get_data_dir() / "fonts"

    @classmethod
    def get_web_port(cls) -> int:
        return _int_env("NAMECAST_WEB_PORT", DEFAULT_WEB_PORT, minimum=1)

    @classmethod
    def get_max_batch_size(cls) -> int:
        return _int_env("NAMECAST_MAX_BATCH_SIZE", DEFAULT_MAX_BATCH_SIZE, minimum=1)

    @classmethod
    def get_max_upload_mb(cls) -> int:
        return _int_env("NAMECAST_MAX_UPLOAD_MB", DEFAULT_MAX_UPLOAD_MB, minimum=1)

    @classmethod
    def get_jpeg_quality(cls) -> int:
        quality = _int_env("NAMECAST_JPEG_QUALITY", DEFAULT_JPEG_QUALITY, minimum=1)
        return min(quality, 95)

    @classmethod
    def get_session_ttl_minutes(cls) -> int:
        return _int_env("NAMECAST_SESSION_TTL_MINUTES", DEFAULT_SESSION_TTL_MINUTES)

    @classmethod
    def get_housekeeping_interval_mins(cls) -> int:
        return _int_env(
            "NAMECAST_HOUSEKEEPING_INTERVAL_MINS", DEFAULT_HOUSEKEEPING_INTERVAL_MINS, minimum=1
        )

    @classmethod
    def ensure_directories(cls) -> None:
        """Create the uploads and work directories if missing."""
        for directory in (cls.get_uploads_dir(), cls.get_work_dir()):
            directory.mkdir(parents=True, exist_ok=True)


def get_config_summary() -> dict:
    """Get a summary of the current configuration."""
    return {
        "data_dir": str(Config.get_data_dir()),
        "uploads_dir": str(Config.get_uploads_dir()),
        "work_dir": str(Config.get_work_dir()),
        "fonts_dir": str(Config.get_fonts_dir()),
        "web_port": Config.get_web_port(),
        "max_batch_size": Config.get_max_batch_size(),
        "max_upload_mb": Config.get_max_upload_mb(),
        "jpeg_quality": Config.get_jpeg_quality(),
        "session_ttl_minutes": Config.get_session_ttl_minutes(),
        "test_mode": Config.is_test_mode(),
    }
