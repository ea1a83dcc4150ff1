"""Single-slot cache for the processed lyric timeline."""

from typing import Any, Dict, Optional, Tuple, Union

from ..utils.logging import get_logger
from ..utils.validation import clamp_delay
from .merge import merge_sentence_words
from .models import LyricLine, ParsePolicy
from .parser import clean_lyrics, parse_lyrics
from .timing import normalize_timing

logger = get_logger(__name__)

_NO_SOURCE = object()


def process_lyric_data(
    raw: Any,
    delay_ms: int = 0,
    merge_enabled: bool = False,
    policy: Union[ParsePolicy, str, None] = None,
    clean: bool = False,
) -> Tuple[LyricLine, ...]:
    """Run parse -> normalize -> merge without caching."""
    lines = parse_lyrics(raw, policy)
    if clean:
        lines = clean_lyrics(lines)
    lines = normalize_timing(lines, delay_ms)
    if merge_enabled:
        lines = merge_sentence_words(lines)
    return lines


class ProcessingCache:
    """Memoizes the processed timeline for the most recent
    (source, delay, merge) key.

    The source is compared by identity, so data mutated in place needs an
    explicit :meth:`invalidate`.
    """

    def __init__(
        self,
        policy: Union[ParsePolicy, str, None] = None,
        clean: bool = False,
    ):
        self.policy = policy
        self.clean = clean
        self._source: Any = _NO_SOURCE
        self._delay_ms: Optional[int] = None
        self._merge_enabled: Optional[bool] = None
        self._lines: Optional[Tuple[LyricLine, ...]] = None
        self._last_hit = False
        self.hits = 0
        self.misses = 0

    def is_valid(self, raw: Any, delay_ms: Any, merge_enabled: bool) -> bool:
        """Whether :meth:`get_processed` would be a cache hit."""
        return (
            self._lines is not None
            and self._source is raw
            and self._delay_ms == clamp_delay(delay_ms)
            and self._merge_enabled == bool(merge_enabled)
        )

    def get_processed(
        self, raw: Any, delay_ms: Any = 0, merge_enabled: bool = False
    ) -> Tuple[LyricLine, ...]:
        """Return the processed timeline, recomputing only on a key change."""
        delay_ms = clamp_delay(delay_ms)
        merge_enabled = bool(merge_enabled)

        if self.is_valid(raw, delay_ms, merge_enabled):
            self.hits += 1
            self._last_hit = True
            return self._lines

        logger.debug(
            f"Processing lyrics (delay={delay_ms}ms, merge={merge_enabled})"
        )
        lines = process_lyric_data(
            raw,
            delay_ms=delay_ms,
            merge_enabled=merge_enabled,
            policy=self.policy,
            clean=self.clean,
        )

        self._source = raw
        self._delay_ms = delay_ms
        self._merge_enabled = merge_enabled
        self._lines = lines
        self._last_hit = False
        self.misses += 1
        return lines

    def invalidate(self) -> None:
        """Drop the cached entry so the next read recomputes."""
        if self._lines is not None:
            logger.debug("Invalidated processed lyric cache")
        self._source = _NO_SOURCE
        self._delay_ms = None
        self._merge_enabled = None
        self._lines = None
        self._last_hit = False

    @property
    def status(self) -> str:
        """'none' when empty, 'cached' after a hit, 'fresh' after a recompute."""
        if self._lines is None:
            return "none"
        return "cached" if self._last_hit else "fresh"

    def stats(self) -> Dict[str, Any]:
        """Get cache statistics."""
        return {
            "status": self.status,
            "hits": self.hits,
            "misses": self.misses,
            "lines": len(self._lines) if self._lines is not None else 0,
            "delay_ms": self._delay_ms,
            "merge_enabled": self._merge_enabled,
        }
