"""
Domain Analysis - URL decomposition into TLD, mid-level domain and subdomains.

This package normalizes URLs and bare domains, classifies IPv4 literals,
resolves registered TLD suffixes from an externally supplied list, and derives
the blockable domain of a hostname.
"""

__version__ = "0.1.0"

from domain_analysis.exceptions import (
    DomainAnalysisError,
    MalformedInputError,
    ResolutionWarning,
    ConfigurationError,
    NetworkError,
)
from domain_analysis.enums import (
    LogLevel,
    MalformedInputCode,
    ConfigurationErrorCode,
    NetworkErrorCode,
    ResolutionErrorCode,
)
from domain_analysis.validators import (
    MAX_DOMAIN_LENGTH,
    is_ipv4,
    is_domain,
    is_url,
    normalize_to_canonical,
)
from domain_analysis.audit_logger import (
    AuditLogger,
    LogEntry,
)
from domain_analysis.tld_list import (
    DEFAULT_TLD_SOURCE_URL,
    TLDList,
    format_tld_lines,
    collect_tld_set,
)
from domain_analysis.models import (
    AnalysisData,
    AnalysisError,
    AnalyzerResult,
)
from domain_analysis.domain import (
    NOT_COLLECTED,
    Domain,
    resolve_host_address,
)
from domain_analysis.config import (
    TLDSourceConfig,
    HostDomainConfig,
    LoggingConfig,
    SystemConfig,
    create_default_config,
    load_config_from_file,
    save_config_to_file,
)
from domain_analysis.analyzer import (
    DomainAnalyzer,
)
from domain_analysis.cli import (
    main as cli_main,
    create_parser,
)

__all__ = [
    # Exceptions
    "DomainAnalysisError",
    "MalformedInputError",
    "ResolutionWarning",
    "ConfigurationError",
    "NetworkError",
    # Enums
    "LogLevel",
    "MalformedInputCode",
    "ConfigurationErrorCode",
    "NetworkErrorCode",
    "ResolutionErrorCode",
    # Validators
    "MAX_DOMAIN_LENGTH",
    "is_ipv4",
    "is_domain",
    "is_url",
    "normalize_to_canonical",
    # Audit Logger
    "AuditLogger",
    "LogEntry",
    # TLD List
    "DEFAULT_TLD_SOURCE_URL",
    "TLDList",
    "format_tld_lines",
    "collect_tld_set",
    # Models
    "AnalysisData",
    "AnalysisError",
    "AnalyzerResult",
    # Domain
    "NOT_COLLECTED",
    "Domain",
    "resolve_host_address",
    # Configuration
    "TLDSourceConfig",
    "HostDomainConfig",
    "LoggingConfig",
    "SystemConfig",
    "create_default_config",
    "load_config_from_file",
    "save_config_to_file",
    # Analyzer
    "DomainAnalyzer",
    # CLI
    "cli_main",
    "create_parser",
]
