"""Sentence-level merging of word timing."""

from typing import Sequence, Tuple

from .models import LyricLine, WordTiming


def merge_line(line: LyricLine) -> LyricLine:
    """Collapse a multi-word line into a single line-spanning word."""
    if len(line.words) <= 1:
        return line
    merged = WordTiming(
        text=line.text,
        start_time=line.words[0].start_time,
        end_time=line.words[-1].end_time,
    )
    return LyricLine(words=(merged,))


def merge_sentence_words(lines: Sequence[LyricLine]) -> Tuple[LyricLine, ...]:
    """Merge every line's words into one unit.

    The merge is lossy: keep the unmerged lines (or the raw data) to switch
    back to word-level timing.
    """
    return tuple(merge_line(line) for line in lines)
