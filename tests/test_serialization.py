"""Test JSON loading and export."""

import json

import pytest

from lyricsync.core.parser import parse_lyrics
from lyricsync.core.serialization import lines_from_json, lines_to_json, load_lyric_file
from lyricsync.exceptions import LyricsError


def test_load_lyric_file(lyric_file, raw_payload):
    assert load_lyric_file(lyric_file) == raw_payload
    assert load_lyric_file(str(lyric_file)) == raw_payload


def test_load_missing_file(temp_dir):
    with pytest.raises(LyricsError, match="not found"):
        load_lyric_file(temp_dir / "missing.json")


def test_load_invalid_json(temp_dir):
    path = temp_dir / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(LyricsError, match="Invalid JSON"):
        load_lyric_file(path)


def test_lines_to_json(raw_payload):
    data = lines_to_json(parse_lyrics(raw_payload))
    assert data[1] == {
        "text": "old friend",
        "start_time": 3000,
        "end_time": 4200,
        "words": [
            {"text": "old", "start_time": 3000, "end_time": 3500},
            {"text": "friend", "start_time": 3600, "end_time": 4200},
        ],
    }
    json.dumps(data)


def test_lines_from_json_restores_lines(raw_payload):
    lines = parse_lyrics(raw_payload)
    assert lines_from_json(lines_to_json(lines)) == lines


def test_lines_from_json_skips_empty_lines():
    assert lines_from_json([{"words": []}]) == ()
