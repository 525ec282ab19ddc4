"""Utility functions for sshdscan"""

import logging
import os


DEFAULT_LOG_LEVEL = 'WARNING'
DEFAULT_MAX_FILE_SIZE_MB = 10
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def get_int_env(key: str) -> int:
    """Get integer value from environment variable, return 0 if not set or invalid."""
    val = os.getenv(key)
    if val is None:
        return 0
    try:
        return int(val)
    except ValueError:
        return 0


def get_str_env(key: str, default: str) -> str:
    """
    Get string from environment variable, return default if not set.

    Args:
        key: Environment variable name
        default: Default value if not set

    Returns:
        String value or default
    """
    return os.getenv(key, default)


def get_bool_env(key: str, default: bool) -> bool:
    """
    Get boolean from environment variable, return default if not set.

    Recognizes: true/false, yes/no, 1/0 (case-insensitive)

    Args:
        key: Environment variable name
        default: Default value if not set

    Returns:
        Boolean value or default
    """
    val = os.getenv(key)
    if val is None:
        return default
    val_lower = val.lower()
    if val_lower in ('true', 'yes', '1'):
        return True
    elif val_lower in ('false', 'no', '0'):
        return False
    return default


def get_max_file_size_bytes() -> int:
    """Largest log file the CLI will load, from SSHDSCAN_MAX_FILE_SIZE_MB (default 10MB)."""
    size_mb = get_int_env('SSHDSCAN_MAX_FILE_SIZE_MB')
    if size_mb <= 0:
        size_mb = DEFAULT_MAX_FILE_SIZE_MB
    return size_mb * 1024 * 1024


def setup_logging() -> None:
    """Configure root logging from SSHDSCAN_LOG_LEVEL.

    Unknown level names fall back to the default level.
    """
    level_name = get_str_env('SSHDSCAN_LOG_LEVEL', DEFAULT_LOG_LEVEL).upper()
    level = getattr(logging, level_name, None)
    if not isinstance(level, int):
        level = getattr(logging, DEFAULT_LOG_LEVEL)
    logging.basicConfig(level=level, format=LOG_FORMAT)
