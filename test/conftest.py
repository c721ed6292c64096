"""Pytest configuration and fixtures

Provides shared fixtures for all tests: a temporary data directory wired
into Config, a logger, a session manager, and small template images and
list documents built on the fly.
"""

import sys
from pathlib import Path

import pytest
from PIL import Image

# Add project root to sys.path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from namecast.config import Config
from namecast.generation import BatchGenerationEngine
from namecast.logger import ConsoleLogger
from namecast.rendering import FontResolver, TextOverlayCompositor
from namecast.sessions import InMemorySessionStore, SessionManager


@pytest.fixture(scope="function", autouse=True)
def test_data_dir(tmp_path):
    """
    Automatically provide a temporary data directory for each test

    Uploads, work dirs and fonts all resolve below this directory while the
    test runs.
    """
    test_dir = tmp_path / "namecast_test_data"
    test_dir.mkdir(parents=True, exist_ok=True)
    Config.set_test_mode(test_dir)

    yield test_dir

    Config.clear_test_mode()


@pytest.fixture
def logger():
    return ConsoleLogger()


@pytest.fixture
def session_manager(logger):
    return SessionManager(session_store=InMemorySessionStore(logger=logger), logger=logger)


@pytest.fixture
def compositor(logger, test_data_dir):
    return TextOverlayCompositor(
        font_resolver=FontResolver(test_data_dir / "fonts", logger=logger), logger=logger
    )


@pytest.fixture
def engine(session_manager, compositor, logger, test_data_dir):
    return BatchGenerationEngine(
        session_manager=session_manager,
        work_dir=test_data_dir / "work",
        compositor=compositor,
        max_batch_size=50,
        logger=logger,
    )


def make_template(path: Path, size=(160, 80), color=(255, 255, 255)) -> Path:
    """Write a plain RGB PNG template."""
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.new("RGB", size, color).save(path, format="PNG")
    return path


@pytest.fixture
def template_path(tmp_path):
    return make_template(tmp_path / "template.png")


@pytest.fixture
def template_bytes(template_path):
    return template_path.read_bytes()


@pytest.fixture
def ready_session(session_manager, template_path, tmp_path):
    """Factory: a session with the template attached and the given names."""

    def _make(names):
        list_path = tmp_path / "names.csv"
        list_path.write_text("\n".join(names), encoding="utf-8")
        session_id = session_manager.create_session()
        session_manager.attach_upload(session_id, template_path, list_path, ".csv")
        return session_manager.set_names(session_id, names)

    return _make
