"""
Exception classes for the domain analysis system.

All exceptions inherit from DomainAnalysisError and provide structured
error information with codes, messages, and optional details.
"""

from typing import Optional


class DomainAnalysisError(Exception):
    """Base exception for all domain analysis errors."""

    def __init__(
        self,
        code: str,
        message: str,
        details: Optional[dict] = None,
    ) -> None:
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"

    def to_dict(self) -> dict:
        """Convert exception to dictionary for serialization."""
        return {
            "error_type": self.__class__.__name__,
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class MalformedInputError(DomainAnalysisError):
    """Raised when a URL or domain cannot be normalized into a usable hostname."""

    pass


class ResolutionWarning(DomainAnalysisError):
    """Raised when a best-effort DNS lookup fails. Recovered by the caller."""

    pass


class ConfigurationError(DomainAnalysisError):
    """Raised for startup defects: bad grammar, unreadable TLD file, bad config."""

    pass


class NetworkError(DomainAnalysisError):
    """Raised when downloading a TLD source fails."""

    pass
