"""Configuration settings for lyricsync."""

import os
from typing import Tuple

from .exceptions import ConfigError

# Timing rules (milliseconds)
MIN_WORD_DURATION_MS = 300
MIN_WORD_GAP_MS = 100
DEFAULT_WORD_DURATION_MS = 500  # synthesized end for lenient parsing

# Delay slider bounds; values outside are clamped, not rejected
DELAY_RANGE_MS: Tuple[int, int] = (-10000, 10000)

# Playback clock cadence (can be overridden via environment variables)
TICK_INTERVAL_MS = int(os.getenv("LYRICSYNC_TICK_INTERVAL_MS", "100"))

# Parsing strictness: "strict" drops words without an end time,
# "lenient" synthesizes one
PARSE_POLICIES = ("strict", "lenient")
DEFAULT_PARSE_POLICY = os.getenv("LYRICSYNC_PARSE_POLICY", "strict").strip().lower()

# Demo timing when no audio timing exists
DEFAULT_DEMO_DURATION_MS = 180000


def validate_config() -> None:
    """Validate configuration values."""
    min_delay, max_delay = DELAY_RANGE_MS
    if not min_delay <= 0 <= max_delay:
        raise ConfigError("Invalid delay range")

    if TICK_INTERVAL_MS <= 0:
        raise ConfigError("Invalid tick interval")

    if DEFAULT_PARSE_POLICY not in PARSE_POLICIES:
        raise ConfigError(
            f"Invalid parse policy: {DEFAULT_PARSE_POLICY}. "
            f"Use one of: {', '.join(PARSE_POLICIES)}"
        )

    if MIN_WORD_DURATION_MS <= 0 or MIN_WORD_GAP_MS < 0:
        raise ConfigError("Invalid word timing rules")

# Validate config on import
validate_config()
