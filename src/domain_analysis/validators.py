"""
Syntactic validators for IP addresses, domains, and URLs.

Each grammar is assembled from smaller fragments, compiled once at import
time, and matched against the entire input string. A fragment that fails to
compile is a programming defect and aborts the import with a
ConfigurationError instead of degrading into a validator that always
returns False.
"""

import re

import idna

from domain_analysis.enums import ConfigurationErrorCode, MalformedInputCode
from domain_analysis.exceptions import ConfigurationError, MalformedInputError


# Maximum possible length of a domain name
MAX_DOMAIN_LENGTH = 253

# ============================================================================
# IP ADDRESSES
# ============================================================================

# Any integer from 0 to 255
INT_ZERO_TO_255_REGEX = r"25[0-5]|2[0-4]\d|[01]?\d?\d"

# 0.0.0.0 to 255.255.255.255
IPV4_REGEX = r"\.".join([f"({INT_ZERO_TO_255_REGEX})"] * 4)

# IPv6 is not supported; IP_REGEX is IPv4 only
IP_REGEX = IPV4_REGEX

# ============================================================================
# DOMAINS
# ============================================================================

# Also accounts for "www."; consecutive inner dots are not rejected
SUBDOMAIN_REGEX = r"[\w\-\.]*[^\.][\.]"
DOMAIN_NAME_REGEX = r"[A-Za-z0-9\-]{1,63}"
DOMAIN_TLD_REGEX = r"\.(xn--[A-Za-z0-9]{1,59}|[A-Za-z]{2,63})"

DOMAIN_REGEX = f"({SUBDOMAIN_REGEX})?({DOMAIN_NAME_REGEX}){DOMAIN_TLD_REGEX}"

# ============================================================================
# URLS
# ============================================================================

# Any integer from 1 to 65535
INT_1_TO_65535_REGEX = (
    r"6553[0-5]|655[0-2]\d|65[0-4]\d\d|6[0-4]\d\d\d|[0-5]?\d?\d?\d?\d"
)

IP_OR_DOMAIN_REGEX = f"(({IP_REGEX})|({DOMAIN_REGEX}))"

# Commonly seen IANA schemes beyond http(s) and ftp(s)
OTHER_SCHEMES_REGEX = r"[Rr][Tt][Mm][Pp]"
HTTP_OR_FTP_REGEX = r"([Hh][Tt]|[Ff])[Tt][Pp][Ss]?"
COLON_SLASH_SLASH_REGEX = r"(:|%3[Aa])(/|%2[Ff])(/|%2[Ff])"

ALL_SCHEMES_REGEX = (
    f"(({HTTP_OR_FTP_REGEX})|({OTHER_SCHEMES_REGEX})){COLON_SLASH_SLASH_REGEX}"
)

TCP_PORT_NUMBER_REGEX = f"(:|%3[Aa])({INT_1_TO_65535_REGEX})"
VALID_CHAR_REGEX = r"[\w\-.`~|!*'(){}<>;:@&=+$,/?%#\[\] ]"
SLASH_REGEX = r"(/|%2F)"
HASH_SIGN_REGEX = r"(#|%23)"

# Escaped characters are already covered by the plain character class
PAGE_REGEX = f"{SLASH_REGEX}{VALID_CHAR_REGEX}*"
PAGE_ANCHOR_REGEX = f"{HASH_SIGN_REGEX}{VALID_CHAR_REGEX}*"
PAGE_OR_ANCHOR_REGEX = f"({PAGE_REGEX})|({PAGE_ANCHOR_REGEX})"

URL_REGEX = (
    f"({ALL_SCHEMES_REGEX})?"          # http(s)/ftp(s)/rtmp + ://   [OPTIONAL]
    f"{IP_OR_DOMAIN_REGEX}"            # (subdomain.)domain.tld      [REQUIRED]
    f"({TCP_PORT_NUMBER_REGEX})?"      # :65535                      [OPTIONAL]
    f"({PAGE_OR_ANCHOR_REGEX})?"       # /path/to/page.html          [OPTIONAL]
    f"({SLASH_REGEX})?"                # trailing slash              [OPTIONAL]
)


def _compile(name: str, pattern: str) -> re.Pattern:
    """
    Compile a grammar, turning a syntax error into a ConfigurationError.

    Args:
        name: Grammar name used in the error details
        pattern: Regular expression source

    Returns:
        Compiled pattern (ASCII semantics for \\w and \\d)

    Raises:
        ConfigurationError: If the pattern does not compile
    """
    try:
        return re.compile(pattern, re.ASCII)
    except re.error as e:
        raise ConfigurationError(
            code=ConfigurationErrorCode.INVALID_PATTERN.value,
            message=f"Invalid {name} grammar: {e}",
            details={"grammar": name, "pattern": pattern},
        ) from e


IPV4_PATTERN = _compile("ipv4", IPV4_REGEX)
DOMAIN_PATTERN = _compile("domain", DOMAIN_REGEX)
URL_PATTERN = _compile("url", URL_REGEX)


def is_ipv4(value: str) -> bool:
    """Return True if the whole string is a dotted-quad IPv4 address."""
    return IPV4_PATTERN.fullmatch(value) is not None


def is_domain(value: str) -> bool:
    """Return True if the whole string is a domain name."""
    return DOMAIN_PATTERN.fullmatch(value) is not None


def is_url(value: str) -> bool:
    """Return True if the whole string is a URL (scheme optional)."""
    return URL_PATTERN.fullmatch(value) is not None


def normalize_to_canonical(host: str) -> str:
    """
    Convert a hostname to canonical form (lowercase, IDNA-encoded).

    Args:
        host: Hostname to normalize

    Returns:
        Canonical form of the hostname

    Raises:
        MalformedInputError: If IDNA encoding fails
    """
    host_lower = host.lower()

    if all(ord(c) < 128 for c in host_lower):
        return host_lower

    try:
        return idna.encode(host_lower, uts46=True).decode("ascii")
    except idna.IDNAError as e:
        raise MalformedInputError(
            code=MalformedInputCode.IDNA_ERROR.value,
            message=f"IDNA encoding failed: {e}",
            details={"host": host, "idna_error": str(e)},
        ) from e
