"""Word timing normalization.

Applies the global delay offset and enforces the display rules every word
must satisfy before it reaches the locator: a minimum on-screen duration and
a minimum gap between consecutive word starts within a line.
"""

from typing import List, Sequence, Tuple

from ..config import DEFAULT_DEMO_DURATION_MS, MIN_WORD_DURATION_MS, MIN_WORD_GAP_MS
from ..utils.logging import get_logger
from .models import LyricLine, WordTiming

logger = get_logger(__name__)


def _normalize_words(
    words: Sequence[WordTiming],
    delay_ms: int,
    min_duration: int,
    min_gap: int,
) -> List[WordTiming]:
    # Pass 1: shift and stretch short words
    shifted = []
    for word in words:
        start = word.start_time + delay_ms
        end = max(word.end_time + delay_ms, start + min_duration)
        shifted.append((word.text, start, end))

    # Pass 2: forward-only gap enforcement against the previous normalized word
    normalized: List[WordTiming] = []
    for i, (text, start, end) in enumerate(shifted):
        if i > 0:
            start = max(start, normalized[-1].end_time + min_gap)
            end = max(end, start + min_duration)
        normalized.append(WordTiming(text=text, start_time=start, end_time=end))
    return normalized


def normalize_timing(
    lines: Sequence[LyricLine],
    delay_ms: int = 0,
    min_duration: int = MIN_WORD_DURATION_MS,
    min_gap: int = MIN_WORD_GAP_MS,
) -> Tuple[LyricLine, ...]:
    """Apply delay and minimum duration/gap rules to every word.

    Args:
        lines: Parsed lyric lines.
        delay_ms: Offset added to every timestamp (negative = earlier).
            The caller is responsible for clamping it to the allowed range.
        min_duration: Minimum word duration in ms.
        min_gap: Minimum distance between a word's start and the previous
            word's end in ms.

    Returns:
        New tuple of LyricLine; the input is not modified.
    """
    result = []
    for line in lines:
        if not line.words:
            continue
        words = _normalize_words(line.words, delay_ms, min_duration, min_gap)
        result.append(LyricLine(words=tuple(words)))
    return tuple(result)


def create_demo_timing(
    lines: Sequence[LyricLine], total_duration_ms: int = DEFAULT_DEMO_DURATION_MS
) -> Tuple[LyricLine, ...]:
    """Spread lines evenly across a duration and words evenly within each line.

    Used when the source has no usable audio timing.
    """
    lines = [line for line in lines if line.words]
    if not lines:
        return ()

    line_duration = total_duration_ms / len(lines)
    result = []
    for line_idx, line in enumerate(lines):
        line_start = line_idx * line_duration
        word_duration = line_duration / len(line.words)
        words = tuple(
            WordTiming(
                text=w.text,
                start_time=int(round(line_start + i * word_duration)),
                end_time=int(round(line_start + (i + 1) * word_duration)),
            )
            for i, w in enumerate(line.words)
        )
        result.append(LyricLine(words=words))

    logger.debug(
        f"Created demo timing for {len(result)} lines over {total_duration_ms}ms"
    )
    return tuple(result)
