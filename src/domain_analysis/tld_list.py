"""
TLD list loading and suffix resolution.

A TLDList holds an immutable set of known TLD suffixes ("com", "co.uk", ...)
and resolves the registered suffix of a hostname. Entries are opaque strings;
"co.uk" is matched as a whole, never split into labels.

The module also carries the downloader that turns a public suffix list into
the one-TLD-per-line file TLDList.from_file expects.
"""

from pathlib import Path
from typing import Iterable, Iterator, Optional, Union

import httpx

from .audit_logger import AuditLogger
from .enums import ConfigurationErrorCode, LogLevel, NetworkErrorCode
from .exceptions import ConfigurationError, NetworkError

DEFAULT_TLD_SOURCE_URL = "https://publicsuffix.org/list/public_suffix_list.dat"

COMPONENT = "tld_list"


class TLDList:
    """
    Immutable set of known TLD suffixes.

    Resolution walks the hostname from the left: the full hostname is tested
    first, then the remainder after each dot. The first hit is the longest
    registered suffix. When nothing matches, the last dot-segment is
    presumed to be the TLD.
    """

    def __init__(self, tlds: Iterable[str]) -> None:
        """
        Args:
            tlds: TLD strings; lowercased, surrounding whitespace removed,
                blank entries dropped
        """
        self._tlds = frozenset(
            tld.strip().lower() for tld in tlds if tld and tld.strip()
        )

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> "TLDList":
        """
        Build a TLDList from raw lines.

        Each line is either a bare TLD or a comma-separated row whose first
        field is the TLD.
        """
        return cls(line.split(",", 1)[0] for line in lines)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "TLDList":
        """
        Load a TLDList from a text file.

        Raises:
            ConfigurationError: If the file cannot be read
        """
        try:
            with open(path, "r", encoding="utf-8") as f:
                return cls.from_lines(f.read().splitlines())
        except OSError as e:
            raise ConfigurationError(
                code=ConfigurationErrorCode.TLD_FILE_UNREADABLE.value,
                message=f"Could not read TLD file: {e}",
                details={"path": str(path)},
            ) from e

    @property
    def tlds(self) -> frozenset:
        return self._tlds

    def __contains__(self, tld: object) -> bool:
        return tld in self._tlds

    def __len__(self) -> int:
        return len(self._tlds)

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._tlds))

    def __repr__(self) -> str:
        return f"TLDList({len(self._tlds)} entries)"

    def resolve(self, hostname: str) -> str:
        """
        Return the TLD of ``hostname``.

        Args:
            hostname: Lowercase hostname (e.g. 'www.example.co.uk')

        Returns:
            The longest suffix of ``hostname`` present in the set, or the
            final dot-segment when no suffix is registered
        """
        if hostname.endswith("."):
            hostname = hostname[:-1]

        start = 0
        while start < len(hostname):
            candidate = hostname[start:]
            if candidate in self._tlds:
                return candidate

            dot = hostname.find(".", start)
            if dot == -1:
                break
            start = dot + 1

        return hostname[hostname.rfind(".") + 1:]

    get_tld_from_domain = resolve


def format_tld_lines(
    lines: Iterable[str],
    logger: Optional[AuditLogger] = None,
) -> list[str]:
    """
    Turn public suffix list lines into bare TLD entries.

    - ``// xn--label (comment)`` and ``// xn--label : comment`` become ``xn--label``
    - ``*.prefix`` becomes ``prefix``
    - other ``//`` comment lines and blank lines are dropped

    Args:
        lines: Raw lines of the suffix list
        logger: Optional logger for unrecognised punycode comments

    Returns:
        Formatted entries in source order
    """
    formatted = []

    for raw_line in lines:
        line = raw_line.strip().lower()

        if line.startswith("// xn--"):
            start = line.index("xn--")
            if line.find(" (") > 0:
                line = line[start:line.index(" (")]
            elif line.find(" :") > 0:
                line = line[start:line.index(" :")]
            else:
                if logger:
                    logger.log(
                        LogLevel.WARN,
                        COMPONENT,
                        "Ignoring unknown formatted line",
                        {"line": line},
                    )
                line = ""
        elif line.startswith("*."):
            line = line[2:]
        elif line.startswith("//"):
            line = ""

        if line:
            formatted.append(line)

    return formatted


def collect_tld_set(
    url: str,
    to_file: Union[str, Path],
    client: Optional[httpx.Client] = None,
    timeout: float = 30.0,
    logger: Optional[AuditLogger] = None,
) -> list[str]:
    """
    Download a suffix list, format it and write one TLD per line.

    Args:
        url: Source of the suffix list
        to_file: Destination file
        client: Optional preconfigured httpx client (not closed here)
        timeout: Request timeout in seconds when a client is created
        logger: Optional audit logger

    Returns:
        The TLD entries written to ``to_file``

    Raises:
        NetworkError: If the download fails or returns a non-2xx status
        ConfigurationError: If the destination cannot be written
    """
    owns_client = client is None
    if owns_client:
        client = httpx.Client(timeout=httpx.Timeout(timeout), follow_redirects=True)

    try:
        response = client.get(url)
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        raise NetworkError(
            code=NetworkErrorCode.HTTP_ERROR.value,
            message=f"TLD source returned HTTP {e.response.status_code}",
            details={"url": url, "status_code": e.response.status_code},
        ) from e
    except httpx.HTTPError as e:
        raise NetworkError(
            code=NetworkErrorCode.TRANSPORT_ERROR.value,
            message=f"Could not download TLD source: {e}",
            details={"url": url},
        ) from e
    finally:
        if owns_client:
            client.close()

    tlds = format_tld_lines(response.text.splitlines(), logger=logger)

    path = Path(to_file)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("".join(f"{tld}\n" for tld in tlds), encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(
            code=ConfigurationErrorCode.TLD_FILE_UNWRITABLE.value,
            message=f"Could not write TLD file: {e}",
            details={"path": str(path)},
        ) from e

    if logger:
        logger.log(
            LogLevel.INFO,
            COMPONENT,
            "TLD list collected",
            {"url": url, "path": str(path), "count": len(tlds)},
        )

    return tlds
