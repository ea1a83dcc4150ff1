"""Validation utilities."""

import logging
import math
from typing import Any

from ..config import DELAY_RANGE_MS, MIN_WORD_DURATION_MS, MIN_WORD_GAP_MS
from ..exceptions import ValidationError

logger = logging.getLogger(__name__)


def clamp_delay(delay: Any) -> int:
    """Coerce a delay control value to int ms within the allowed range.

    Out-of-range values are clamped, never rejected; values that are not
    numbers fall back to 0.
    """
    min_delay, max_delay = DELAY_RANGE_MS
    value = delay
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            value = None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        logger.warning(f"Ignoring non-numeric delay {delay!r}, using 0ms")
        return 0
    if isinstance(value, float):
        if math.isnan(value):
            logger.warning(f"Ignoring non-numeric delay {delay!r}, using 0ms")
            return 0
        if math.isinf(value):
            return max_delay if value > 0 else min_delay
        value = int(round(value))

    clamped = min(max(value, min_delay), max_delay)
    if clamped != value:
        logger.debug(f"Clamped delay {value}ms to {clamped}ms")
    return clamped


def validate_timeline(
    lines,
    min_duration: int = MIN_WORD_DURATION_MS,
    min_gap: int = MIN_WORD_GAP_MS,
) -> None:
    """Validate that every word is long enough and spaced from its predecessor."""
    for line_idx, line in enumerate(lines):
        if not getattr(line, "words", None):
            raise ValidationError(f"Line {line_idx + 1} has no words")
        prev = None
        for word_idx, word in enumerate(line.words):
            duration = word.end_time - word.start_time
            if duration < min_duration:
                raise ValidationError(
                    f"Line {line_idx + 1} word {word_idx + 1} ('{word.text}') "
                    f"lasts {duration}ms (< {min_duration}ms)"
                )
            if prev is not None and word.start_time < prev.end_time + min_gap:
                raise ValidationError(
                    f"Line {line_idx + 1} word {word_idx + 1} ('{word.text}') "
                    f"starts {word.start_time - prev.end_time}ms after the "
                    f"previous word (< {min_gap}ms)"
                )
            prev = word
