"""Configuration and logging helpers for ttlint"""

import logging
import os


LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def get_int_env(key: str, default: int = 0) -> int:
    """Get integer value from environment variable, return default if not set or invalid."""
    val = os.getenv(key)
    if val is None:
        return default
    try:
        return int(val)
    except ValueError:
        return default


def get_str_env(key: str, default: str) -> str:
    """Get string from environment variable, return default if not set."""
    return os.getenv(key, default)


def get_max_workers() -> int:
    """Number of files linted in parallel (TTLINT_MAX_WORKERS, at least 1)."""
    return max(1, get_int_env('TTLINT_MAX_WORKERS', 1))


def get_env_patterns() -> list[str]:
    """Extra literal patterns from TTLINT_PATTERNS (comma separated, blanks dropped)."""
    raw = get_str_env('TTLINT_PATTERNS', '')
    return [item for item in raw.split(',') if item]


def setup_logging(verbose: bool = False):
    """
    Configure stderr logging for the ttlint loggers.

    The level comes from TTLINT_LOG_LEVEL (default WARNING); --verbose forces DEBUG.
    Unknown level names fall back to WARNING.
    """
    if verbose:
        level = logging.DEBUG
    else:
        level_name = get_str_env('TTLINT_LOG_LEVEL', 'WARNING').upper()
        level = getattr(logging, level_name, logging.WARNING)
        if not isinstance(level, int):
            level = logging.WARNING
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger('ttlint').setLevel(level)
