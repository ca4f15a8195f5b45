"""
Enumeration types for the domain analysis system.

These enums provide type-safe constants for error codes and logging
levels throughout the system.
"""

from enum import Enum


class LogLevel(Enum):
    """Logging severity levels."""

    DEBUG = "debug"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"

    @property
    def rank(self) -> int:
        """Numeric severity used for level filtering."""
        return _LEVEL_RANKS[self]


_LEVEL_RANKS = {
    LogLevel.DEBUG: 10,
    LogLevel.INFO: 20,
    LogLevel.WARN: 30,
    LogLevel.ERROR: 40,
}


class MalformedInputCode(Enum):
    """Error codes for inputs that cannot be turned into a Domain."""

    EMPTY_DOMAIN = "empty_domain"
    MISSING_DOT = "missing_dot"
    UNPARSEABLE_URL = "unparseable_url"
    IDNA_ERROR = "idna_error"


class ConfigurationErrorCode(Enum):
    """Error codes for startup and configuration defects."""

    INVALID_PATTERN = "invalid_pattern"
    TLD_FILE_UNREADABLE = "tld_file_unreadable"
    TLD_FILE_UNWRITABLE = "tld_file_unwritable"
    INVALID_CONFIG = "invalid_config"


class NetworkErrorCode(Enum):
    """Error codes for TLD source downloads."""

    HTTP_ERROR = "http_error"
    TRANSPORT_ERROR = "transport_error"


class ResolutionErrorCode(Enum):
    """Error codes for host address lookups."""

    LOOKUP_FAILED = "lookup_failed"
