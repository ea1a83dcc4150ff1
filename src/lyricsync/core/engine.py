"""Playback synchronization engine.

Holds the current raw lyric data and the delay/merge controls, and answers
each playback tick with the active line and word.
"""

from dataclasses import dataclass
from typing import Any, Tuple, Union

from ..utils.logging import get_logger
from ..utils.validation import clamp_delay
from .cache import ProcessingCache
from .locator import locate
from .models import LyricLine, ParsePolicy

logger = get_logger(__name__)


@dataclass(frozen=True)
class SyncState:
    """Snapshot handed to the renderer on every tick."""

    line_index: int
    word_index: int
    lines: Tuple[LyricLine, ...]

    @property
    def line(self):
        if 0 <= self.line_index < len(self.lines):
            return self.lines[self.line_index]
        return None


class SyncEngine:
    """Owns the processing cache and maps playback time to lyric positions."""

    def __init__(
        self,
        raw: Any = None,
        delay_ms: Any = 0,
        merge_enabled: bool = False,
        policy: Union[ParsePolicy, str, None] = None,
        clean: bool = False,
    ):
        self.cache = ProcessingCache(policy=policy, clean=clean)
        self._raw = raw
        self._delay_ms = clamp_delay(delay_ms)
        self._merge_enabled = bool(merge_enabled)

    @property
    def raw(self) -> Any:
        return self._raw

    @property
    def delay_ms(self) -> int:
        return self._delay_ms

    @property
    def merge_enabled(self) -> bool:
        return self._merge_enabled

    def load(self, raw: Any) -> None:
        """Replace the raw lyric data; always forces reprocessing."""
        self._raw = raw
        self.cache.invalidate()
        logger.debug("Loaded new lyric data")

    def set_delay(self, delay: Any) -> int:
        """Set the delay offset (clamped) and return the applied value."""
        self._delay_ms = clamp_delay(delay)
        return self._delay_ms

    def set_merge(self, enabled: bool) -> None:
        self._merge_enabled = bool(enabled)

    def reset(self) -> None:
        """Restore default controls and drop the cached timeline."""
        self._delay_ms = 0
        self._merge_enabled = False
        self.cache.invalidate()

    @property
    def lines(self) -> Tuple[LyricLine, ...]:
        return self.cache.get_processed(
            self._raw, self._delay_ms, self._merge_enabled
        )

    @property
    def has_data(self) -> bool:
        return len(self.lines) > 0

    def tick(self, time_ms: int) -> SyncState:
        """Resolve the active line and word for a playback timestamp."""
        lines = self.lines
        line_idx, word_idx = locate(lines, time_ms)
        return SyncState(line_index=line_idx, word_index=word_idx, lines=lines)
