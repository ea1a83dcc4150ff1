"""Custom exceptions for lyricsync."""

class LyricSyncError(Exception):
    """Base exception for lyricsync."""
    pass

class LyricsError(LyricSyncError):
    """Error loading or decoding lyric data."""
    pass

class ValidationError(LyricSyncError):
    """Timeline violates a timing invariant."""
    pass

class ConfigError(LyricSyncError):
    """Invalid configuration value."""
    pass
