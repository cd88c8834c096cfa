"""Test configuration and fixtures.

Provides reusable fixtures for:
- Temporary files and directories
- Plain and enhanced (word-level) LRC documents
- LRCLIB provider responses
"""

import logging
import os
import pytest
import tempfile
from pathlib import Path
from unittest.mock import Mock


def pytest_addoption(parser):
    parser.addoption(
        "--run-network",
        action="store_true",
        default=False,
        help="Run tests that require network access",
    )


def pytest_collection_modifyitems(config, items):
    run_network = config.getoption("--run-network") or os.getenv(
        "RUN_INTEGRATION_TESTS"
    ) == "1"
    if run_network:
        return

    skip_network = pytest.mark.skip(
        reason="requires network access (use --run-network or RUN_INTEGRATION_TESTS=1)"
    )
    for item in items:
        if "network" in item.keywords or "integration" in item.keywords:
            item.add_marker(skip_network)

# =============================================================================
# Basic Fixtures
# =============================================================================


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_url():
    """Sample media URL for testing."""
    return "https://www.youtube.com/watch?v=dQw4w9WgXcQ"


@pytest.fixture
def mock_audio_file(temp_dir):
    """Create a mock audio file."""
    audio_file = temp_dir / "downloaded.wav"
    audio_file.write_bytes(b"fake audio data")
    return audio_file


# =============================================================================
# LRC Fixtures
# =============================================================================


@pytest.fixture
def plain_lrc():
    """Line-synchronized LRC with ID tags that should be ignored."""
    return (
        "[ar:Rick Astley]\n"
        "[ti:Never Gonna Give You Up]\n"
        "[00:18.80]We're no strangers to love\n"
        "[00:22.90]You know the rules and so do I\n"
        "[00:27.10]A full commitment's what I'm thinking of\n"
    )


@pytest.fixture
def enhanced_lrc():
    """Enhanced LRC with per-word stamps."""
    return (
        "[00:01.00]<00:01.00>Never <00:01.50>gonna <00:02.00>give\n"
        "[00:03.00]<00:03.00>you <00:03.25>up\n"
    )


# =============================================================================
# LRCLIB Fixtures
# =============================================================================


@pytest.fixture
def lrclib_response():
    """Factory for fake LRCLIB HTTP responses."""

    def _make(status_code=200, payload=None, json_error=None):
        resp = Mock()
        resp.status_code = status_code
        resp.text = "" if payload is None else str(payload)
        if json_error:
            resp.json.side_effect = json_error
        else:
            resp.json.return_value = payload
        resp.raise_for_status.return_value = None
        return resp

    return _make


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers installed by setup_logging during a test."""
    yield
    logger = logging.getLogger("lrckaraoke")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
