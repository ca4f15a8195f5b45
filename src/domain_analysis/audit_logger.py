"""
Audit Logger module for the domain analysis system.

Provides structured logging with dual-format output (JSON and human-readable
text), level filtering, optional HMAC signing in audit mode, and masking of
sensitive values such as download credentials.
"""

import hmac
import hashlib
import json
import sys
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional, TextIO

from domain_analysis.enums import LogLevel
from domain_analysis.exceptions import DomainAnalysisError


@dataclass
class LogEntry:
    """Represents a single log entry with all metadata."""

    timestamp: str
    level: LogLevel
    component: str
    message: str
    data: dict = field(default_factory=dict)
    signature: Optional[str] = None


class AuditLogger:
    """
    Structured logger shared by the resolver, the domain entity and the CLI.

    Entries below ``min_level`` are dropped. Every emitted entry is kept in
    memory so that callers (and tests) can inspect what was reported.
    """

    # Keys that should be masked in log output
    SENSITIVE_KEYS = frozenset({
        'token', 'secret', 'password', 'api_key', 'auth',
        'authorization', 'credential', 'signing_key',
    })

    MASK_VALUE = "***MASKED***"

    def __init__(
        self,
        output_format: str = "text",
        output_stream: Optional[TextIO] = None,
        min_level: LogLevel = LogLevel.INFO,
    ):
        """
        Initialize the audit logger.

        Args:
            output_format: Output format - 'json', 'text', or 'both'
            output_stream: Output stream for log entries (defaults to sys.stderr)
            min_level: Lowest level that is emitted
        """
        if output_format not in ("json", "text", "both"):
            raise ValueError(f"Invalid output_format: {output_format}")

        self._output_format = output_format
        self._output_stream = output_stream or sys.stderr
        self._min_level = min_level
        self._signing_key: Optional[bytes] = None
        self._entries: list[LogEntry] = []

    @property
    def output_format(self) -> str:
        return self._output_format

    @property
    def min_level(self) -> LogLevel:
        return self._min_level

    @property
    def audit_mode(self) -> bool:
        return self._signing_key is not None

    @property
    def entries(self) -> list[LogEntry]:
        """Get all emitted entries."""
        return self._entries.copy()

    def enable_audit_mode(self, signing_key: str) -> None:
        """Sign every subsequent entry with HMAC-SHA256 over ``signing_key``."""
        if not signing_key:
            raise ValueError("Signing key cannot be empty")
        self._signing_key = signing_key.encode('utf-8')

    def disable_audit_mode(self) -> None:
        self._signing_key = None

    def log(
        self,
        level: LogLevel,
        component: str,
        message: str,
        data: Optional[dict] = None,
    ) -> Optional[LogEntry]:
        """
        Log an entry in the configured format(s).

        Args:
            level: Log severity level
            component: Component name generating the log
            message: Human-readable log message
            data: Optional additional data to include

        Returns:
            The created LogEntry, or None if the level is filtered out
        """
        if level.rank < self._min_level.rank:
            return None

        entry = LogEntry(
            timestamp=datetime.now(timezone.utc).isoformat(),
            level=level,
            component=component,
            message=message,
            data=self.mask_sensitive_data(data or {}),
        )

        if self._signing_key:
            entry.signature = self._sign_entry(entry)

        self._entries.append(entry)
        self._output_entry(entry)

        return entry

    def log_warning(
        self,
        component: str,
        message: str,
        error: Optional[Exception] = None,
        additional_data: Optional[dict] = None,
    ) -> Optional[LogEntry]:
        """Log a recovered problem, attaching the error's context if given."""
        return self.log(
            LogLevel.WARN,
            component,
            message,
            self._error_context(error, additional_data),
        )

    def log_error(
        self,
        component: str,
        message: str,
        error: Optional[Exception] = None,
        additional_data: Optional[dict] = None,
    ) -> Optional[LogEntry]:
        """
        Log an error with full context.

        Args:
            component: Component name generating the log
            message: Human-readable error message
            error: Optional exception object
            additional_data: Optional additional context data

        Returns:
            The created LogEntry object
        """
        return self.log(
            LogLevel.ERROR,
            component,
            message,
            self._error_context(error, additional_data),
        )

    def _error_context(
        self,
        error: Optional[Exception],
        additional_data: Optional[dict],
    ) -> dict:
        data = additional_data.copy() if additional_data else {}

        if error is not None:
            data["error_message"] = str(error)
            data["error_type"] = type(error).__name__
            if isinstance(error, DomainAnalysisError):
                data["error_code"] = error.code

        return data

    def mask_sensitive_data(self, data: dict) -> dict:
        """
        Recursively mask sensitive data in a dictionary.

        Args:
            data: Dictionary potentially containing sensitive data

        Returns:
            New dictionary with sensitive values masked
        """
        masked = {}
        for key, value in data.items():
            key_lower = str(key).lower()

            if any(sensitive in key_lower for sensitive in self.SENSITIVE_KEYS):
                masked[key] = self.MASK_VALUE
            elif isinstance(value, dict):
                masked[key] = self.mask_sensitive_data(value)
            elif isinstance(value, list):
                masked[key] = [
                    self.mask_sensitive_data(item) if isinstance(item, dict) else item
                    for item in value
                ]
            else:
                masked[key] = value

        return masked

    def _sign_entry(self, entry: LogEntry) -> str:
        signable = {
            "timestamp": entry.timestamp,
            "level": entry.level.value,
            "component": entry.component,
            "message": entry.message,
            "data": entry.data,
        }
        content = json.dumps(signable, sort_keys=True, ensure_ascii=False)

        return hmac.new(
            self._signing_key,
            content.encode('utf-8'),
            hashlib.sha256
        ).hexdigest()

    def verify_signature(self, entry: LogEntry) -> bool:
        """Return True if ``entry`` carries a signature made with the current key."""
        if not entry.signature or not self._signing_key:
            return False

        return hmac.compare_digest(entry.signature, self._sign_entry(entry))

    def _output_entry(self, entry: LogEntry) -> None:
        if self._output_format in ("json", "both"):
            self._output_stream.write(self.format_json(entry) + "\n")

        if self._output_format in ("text", "both"):
            self._output_stream.write(self.format_text(entry) + "\n")

        self._output_stream.flush()

    def format_json(self, entry: LogEntry) -> str:
        """Render an entry as a single JSON line."""
        obj = {
            "timestamp": entry.timestamp,
            "level": entry.level.value,
            "component": entry.component,
            "message": entry.message,
            "data": entry.data,
        }

        if entry.signature:
            obj["signature"] = entry.signature

        return json.dumps(obj, ensure_ascii=False)

    def format_text(self, entry: LogEntry) -> str:
        """Render an entry as ``[TIMESTAMP] LEVEL [COMPONENT] MESSAGE {data}``."""
        parts = [
            f"[{entry.timestamp}]",
            entry.level.value.upper(),
            f"[{entry.component}]",
            entry.message,
        ]

        if entry.data:
            parts.append(json.dumps(entry.data, ensure_ascii=False))

        text = " ".join(parts)

        if entry.signature:
            text += f" [sig:{entry.signature[:16]}...]"

        return text

    def clear_entries(self) -> None:
        self._entries.clear()
