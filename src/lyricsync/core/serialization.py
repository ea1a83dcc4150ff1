"""JSON loading and export for lyric timelines."""

import json
from pathlib import Path
from typing import Any, List, Sequence, Tuple, Union

from ..exceptions import LyricsError
from ..utils.logging import get_logger
from .models import LyricLine, WordTiming

logger = get_logger(__name__)


def load_lyric_file(path: Union[str, Path]) -> Any:
    """Read raw lyric data from a JSON file."""
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        raise LyricsError(f"Lyric file not found: {path}")
    except (OSError, UnicodeDecodeError) as e:
        raise LyricsError(f"Failed to read lyric file {path}: {e}")
    except json.JSONDecodeError as e:
        raise LyricsError(f"Invalid JSON in {path}: {e}")
    logger.debug(f"Loaded lyric data from {path}")
    return data


def lines_to_json(lines: Sequence[LyricLine]) -> List[dict]:
    """Convert LyricLine objects into JSON-serializable dicts."""
    data: List[dict] = []
    for line in lines:
        data.append({
            "text": line.text,
            "start_time": line.start_time,
            "end_time": line.end_time,
            "words": [
                {
                    "text": w.text,
                    "start_time": w.start_time,
                    "end_time": w.end_time,
                } for w in line.words
            ]
        })
    return data


def lines_from_json(data: List[dict]) -> Tuple[LyricLine, ...]:
    """Convert exported dicts back into LyricLine objects."""
    lines = []
    for item in data:
        words = tuple(
            WordTiming(
                text=w["text"],
                start_time=int(w["start_time"]),
                end_time=int(w["end_time"]),
            ) for w in item.get("words", [])
        )
        if words:
            lines.append(LyricLine(words=words))
    return tuple(lines)
