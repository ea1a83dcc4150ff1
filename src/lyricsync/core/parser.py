"""Parsing of raw timed-word data into LyricLine objects.

This module handles:
- Unwrapping the upload envelope (``{"err": 0, "data": {"sentences": [...]}}``)
- Reading line and word records through defaulted accessors
- Dropping words and lines that fail validation
- Optional cleanup of lines that are too short to display
"""

import math
import re
from collections.abc import Mapping
from typing import Any, List, Optional, Sequence, Tuple, Union

from ..config import DEFAULT_PARSE_POLICY, DEFAULT_WORD_DURATION_MS
from ..utils.logging import get_logger
from .models import LyricLine, ParsePolicy, WordTiming

logger = get_logger(__name__)

# Field aliases, in lookup order
_TEXT_KEYS = ("data", "text", "word")
_START_KEYS = ("startTime", "start_time", "start")
_END_KEYS = ("endTime", "end_time", "end")
_LINE_LIST_KEYS = ("sentences", "lines")

_HAS_WORD_CHAR_RE = re.compile(r"[^\W_]")

_MISSING = object()


def _field(record: Any, keys: Sequence[str]) -> Any:
    """Return the first present field of a mapping or object, else _MISSING."""
    for key in keys:
        if isinstance(record, Mapping):
            if key in record:
                return record[key]
        elif hasattr(record, key):
            return getattr(record, key)
    return _MISSING


def _to_number(value: Any) -> Optional[float]:
    """Coerce a raw timing value to a finite number of ms, or None if unusable."""
    if value is _MISSING or value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
        try:
            value = float(value)
        except ValueError:
            return None
    if not isinstance(value, (int, float)):
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


def _coerce_policy(policy: Union[ParsePolicy, str, None]) -> ParsePolicy:
    if policy is None:
        return ParsePolicy(DEFAULT_PARSE_POLICY)
    return ParsePolicy(policy)


def _extract_line_records(raw: Any) -> List[Any]:
    """Find the list of line records in any of the accepted shapes."""
    if raw is None:
        return []

    if isinstance(raw, Mapping):
        # Upload envelope: a non-zero err means "no data"
        err = raw.get("err", 0)
        if err not in (0, None):
            logger.debug(f"Raw data flagged invalid (err={err!r})")
            return []
        payload = raw.get("data", raw)
        if not isinstance(payload, Mapping):
            payload = raw
        for key in _LINE_LIST_KEYS:
            records = payload.get(key)
            if isinstance(records, (list, tuple)):
                return list(records)
        return []

    if isinstance(raw, (list, tuple)):
        return list(raw)

    return []


def _word_records(line_record: Any) -> List[Any]:
    if isinstance(line_record, (list, tuple)):
        return list(line_record)
    words = _field(line_record, ("words",))
    if isinstance(words, (list, tuple)):
        return list(words)
    return []


def parse_word(record: Any, policy: ParsePolicy = ParsePolicy.STRICT) -> Optional[WordTiming]:
    """Validate a single raw word record.

    Returns:
        A WordTiming, or None if the record is dropped.
    """
    text = _field(record, _TEXT_KEYS)
    if not isinstance(text, str) or not text.strip():
        return None
    text = text.strip()

    start = _to_number(_field(record, _START_KEYS))
    end = _to_number(_field(record, _END_KEYS))

    if policy is ParsePolicy.LENIENT:
        if start is None:
            start = 0
        if end is None:
            end = start + DEFAULT_WORD_DURATION_MS

    if start is None or end is None:
        return None
    if start < 0 or end <= start:
        return None

    # Round only after validating, keeping end > start for sub-ms spans
    start_ms = int(round(start))
    end_ms = max(int(round(end)), start_ms + 1)
    return WordTiming(text=text, start_time=start_ms, end_time=end_ms)


def parse_lyrics(
    raw: Any, policy: Union[ParsePolicy, str, None] = None
) -> Tuple[LyricLine, ...]:
    """Parse raw timed-word data into lyric lines.

    Malformed words and lines are dropped; this never raises for data-shape
    problems, so a completely malformed input gives an empty tuple.

    Args:
        raw: Upload envelope, mapping with ``sentences``/``lines``, or a list
            of line records.
        policy: ParsePolicy (or its string value). Defaults to the configured
            policy.

    Returns:
        Tuple of LyricLine in source order.
    """
    policy = _coerce_policy(policy)
    records = _extract_line_records(raw)

    lines: List[LyricLine] = []
    dropped_words = 0
    for idx, record in enumerate(records):
        word_records = _word_records(record)
        words = []
        for word_record in word_records:
            word = parse_word(word_record, policy)
            if word is None:
                dropped_words += 1
                continue
            words.append(word)

        if not words:
            logger.debug(f"Dropping line {idx + 1}: no valid words")
            continue
        lines.append(LyricLine(words=tuple(words)))

    if dropped_words:
        logger.debug(f"Dropped {dropped_words} invalid word records")
    logger.info(f"Parsed {len(lines)} lyric lines from {len(records)} raw sentences")
    return tuple(lines)


def clean_lyrics(lines: Sequence[LyricLine]) -> Tuple[LyricLine, ...]:
    """Remove lines with fewer than two words or only punctuation/symbols."""
    cleaned = []
    for line in lines:
        if len(line.words) < 2:
            continue
        if not any(_HAS_WORD_CHAR_RE.search(w.text) for w in line.words):
            continue
        cleaned.append(line)
    if len(cleaned) != len(lines):
        logger.debug(f"Cleaned {len(lines) - len(cleaned)} short or empty lines")
    return tuple(cleaned)
