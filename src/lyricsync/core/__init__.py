"""Core lyric timing and synchronization pipeline."""
