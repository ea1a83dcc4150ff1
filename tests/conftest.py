"""Test configuration and fixtures.

Provides reusable fixtures for:
- Temporary files and directories
- Raw lyric payloads in the upload envelope format
- Parsed LyricLine objects
"""

import json
import logging
import tempfile
from pathlib import Path

import pytest

from lyricsync.core.models import LyricLine, WordTiming


def make_line(*spans):
    """Build a LyricLine from ``(text, start, end)`` tuples."""
    return LyricLine(words=tuple(WordTiming(t, s, e) for t, s, e in spans))


# =============================================================================
# Basic Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_lyricsync_logger():
    """Drop handlers installed by setup_logging so streams do not leak across tests."""
    yield
    logger = logging.getLogger("lyricsync")
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


# =============================================================================
# Raw Lyric Fixtures
# =============================================================================


@pytest.fixture
def raw_payload():
    """Upload envelope with three sentences, one of which is malformed."""
    return {
        "err": 0,
        "msg": "Success",
        "data": {
            "sentences": [
                {
                    "words": [
                        {"startTime": 1000, "endTime": 1400, "data": "Hello"},
                        {"startTime": 1500, "endTime": 1900, "data": "darkness"},
                        {"startTime": 2000, "endTime": 2600, "data": "my"},
                    ]
                },
                {
                    "words": [
                        {"startTime": 3000, "endTime": 3500, "data": " old "},
                        {"startTime": 3600, "endTime": 4200, "data": "friend"},
                    ]
                },
                {"words": [{"startTime": 5000, "endTime": 4000, "data": "bad"}]},
            ],
            "file": "song.lrc",
            "enabledVideoBG": False,
            "defaultIBGUrls": [],
            "BGMode": 0,
        },
        "timestamp": 1700000000,
    }


@pytest.fixture
def lyric_file(temp_dir, raw_payload):
    """Write the raw payload to a JSON file."""
    path = temp_dir / "lyric.json"
    path.write_text(json.dumps(raw_payload), encoding="utf-8")
    return path


@pytest.fixture
def two_lines():
    """Two normalized lines separated by a gap."""
    return (
        make_line(("a", 0, 300), ("b", 400, 500)),
        make_line(("c", 1000, 1300), ("d", 1400, 1500)),
    )
