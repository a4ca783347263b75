"""Configuration for the pkg-segments command line.

Read from the environment (and a ``.env`` file loaded by the CLI). The core
closure and segment functions take everything as arguments and never consult
this module.
"""

import os

from .constants import DEFAULT_SUBDIR, SEGMENT_FILE


class SegmentConfig:
    """Configuration for segment generation."""

    # Name of the segment list file inside the project directory
    SEGMENT_FILE: str = os.getenv("PKG_SEGMENTS_FILE", SEGMENT_FILE)

    # Output subdirectory for ad-hoc segments
    DEFAULT_SUBDIR: str = os.getenv("PKG_SEGMENTS_DEFAULT_SUBDIR", DEFAULT_SUBDIR)

    # Skip failing segments instead of stopping at the first error
    KEEP_GOING: bool = os.getenv("PKG_SEGMENTS_KEEP_GOING", "false").lower() == "true"


class LoggingConfig:
    """Configuration for log output."""

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


# Global config instances
segment_config = SegmentConfig()
logging_config = LoggingConfig()
