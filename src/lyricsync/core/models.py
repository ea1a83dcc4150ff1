"""Data models for timed lyrics."""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class ParsePolicy(str, Enum):
    """How the parser treats words with missing timing fields."""

    STRICT = "strict"
    LENIENT = "lenient"


@dataclass(frozen=True)
class WordTiming:
    """A single word with its closed millisecond interval."""

    text: str
    start_time: int
    end_time: int

    @property
    def duration(self) -> int:
        return self.end_time - self.start_time

    def contains(self, time_ms: int) -> bool:
        return self.start_time <= time_ms <= self.end_time

    def validate(self) -> None:
        if not self.text.strip():
            raise ValueError("Word text must not be empty")
        if self.start_time < 0:
            raise ValueError("Word timing must be non-negative")
        if self.end_time <= self.start_time:
            raise ValueError("Word end_time must be > start_time")


@dataclass(frozen=True)
class LyricLine:
    """A line of lyrics; its bounds and text follow from its words."""

    words: Tuple[WordTiming, ...]

    def __post_init__(self):
        if not isinstance(self.words, tuple):
            object.__setattr__(self, "words", tuple(self.words))

    @property
    def start_time(self) -> int:
        return self.words[0].start_time if self.words else 0

    @property
    def end_time(self) -> int:
        return self.words[-1].end_time if self.words else 0

    @property
    def text(self) -> str:
        return " ".join(w.text for w in self.words)

    def contains(self, time_ms: int) -> bool:
        return bool(self.words) and self.start_time <= time_ms <= self.end_time

    def validate(self) -> None:
        if not self.words:
            raise ValueError("Line must contain at least one word")
        for w in self.words:
            w.validate()
