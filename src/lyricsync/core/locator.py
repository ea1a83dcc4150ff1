"""Locate the active line and word for a playback timestamp.

Both lookups are linear scans; a song has tens to low hundreds of lines.
Intervals are closed, so a timestamp equal to an end time is still active.
"""

from typing import Sequence, Tuple

from .models import LyricLine


def locate_line(lines: Sequence[LyricLine], time_ms: int) -> int:
    """Return the index of the line to display at ``time_ms``.

    Returns:
        -1 before the first line starts (or if there are no lines), the first
        line whose interval contains the time, otherwise the last line that
        has already started. Gaps between lines and the time after the last
        line keep the previous line on screen.
    """
    if not lines or time_ms < lines[0].start_time:
        return -1

    last_started = 0
    for i, line in enumerate(lines):
        if line.start_time <= time_ms <= line.end_time:
            return i
        if line.start_time <= time_ms:
            last_started = i
    return last_started


def locate_word(line: LyricLine, time_ms: int) -> int:
    """Return the index of the active word within ``line``.

    Returns:
        The first word whose interval contains the time; -1 before the first
        word starts; ``len(line.words)`` otherwise (after the last word, or
        between two words).
    """
    for i, word in enumerate(line.words):
        if word.start_time <= time_ms <= word.end_time:
            return i
    if not line.words or time_ms < line.words[0].start_time:
        return -1
    return len(line.words)


def locate(lines: Sequence[LyricLine], time_ms: int) -> Tuple[int, int]:
    """Return ``(line_index, word_index)``; word index is -1 with no active line."""
    line_idx = locate_line(lines, time_ms)
    if line_idx < 0:
        return -1, -1
    return line_idx, locate_word(lines[line_idx], time_ms)
