"""lyricsync - word-level lyric timing and playback synchronization."""

__version__ = "0.3.0"

from .core.models import WordTiming, LyricLine, ParsePolicy
from .core.parser import parse_lyrics, clean_lyrics
from .core.timing import normalize_timing, create_demo_timing
from .core.merge import merge_sentence_words
from .core.locator import locate_line, locate_word, locate
from .core.cache import ProcessingCache
from .core.engine import SyncEngine, SyncState

__all__ = [
    "__version__",
    "WordTiming",
    "LyricLine",
    "ParsePolicy",
    "parse_lyrics",
    "clean_lyrics",
    "normalize_timing",
    "create_demo_timing",
    "merge_sentence_words",
    "locate_line",
    "locate_word",
    "locate",
    "ProcessingCache",
    "SyncEngine",
    "SyncState",
]
