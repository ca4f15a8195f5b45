"""
Domain entity: decomposition of a URL or hostname into TLD, MLD and subdomains.

A Domain is built once from raw input and never recomputed. Everything except
its AnalysisData container is read-only after construction, so a Domain can be
shared between threads without further locking.
"""

import socket
from typing import Callable, Optional
from urllib.parse import SplitResult, urlsplit

from .audit_logger import AuditLogger
from .enums import MalformedInputCode, ResolutionErrorCode
from .exceptions import MalformedInputError, ResolutionWarning
from .models import AnalysisData
from .tld_list import TLDList
from .validators import is_ipv4, normalize_to_canonical

# Value of ip_address when address collection is switched off
NOT_COLLECTED = "NOT COLLECTED"

DEFAULT_PORTS = {
    "http": 80,
    "https": 443,
    "ftp": 21,
    "ftps": 990,
}

COMPONENT = "domain"


def resolve_host_address(
    hostname: str,
    resolver: Callable[[str], str] = socket.gethostbyname,
) -> str:
    """
    Look up the IPv4 address of ``hostname``.

    A single attempt is made; there is no timeout beyond the resolver's own.

    Raises:
        ResolutionWarning: If the lookup fails
    """
    try:
        return resolver(hostname)
    except (OSError, UnicodeError) as e:
        raise ResolutionWarning(
            code=ResolutionErrorCode.LOOKUP_FAILED.value,
            message=f"Could not get an IP address for: {hostname}",
            details={"hostname": hostname, "reason": str(e)},
        ) from e


class Domain:
    """
    Holds analysis information about a domain.

    The domain may carry subdomains (including a kept "www.") or be a bare
    IPv4 address. Two Domains are equal when their ``domain`` strings are
    equal, regardless of scheme, port or path.
    """

    def __init__(
        self,
        url: str,
        tld_list: TLDList,
        source: str = "",
        host: str = "",
        host_type: str = "",
        collect_ip: bool = True,
        resolver: Optional[Callable[[str], str]] = None,
        logger: Optional[AuditLogger] = None,
    ) -> None:
        """
        Args:
            url: URL or bare domain to analyse
            tld_list: Known TLD suffixes, consulted during construction only
            source: Provenance tag of the URL (list name, feed, ...)
            host: Known hosting domain this domain lives under, if any
            host_type: Kind of hosting domain (e.g. 'whitelist', 'blacklist')
            collect_ip: Look up the address; False skips all network access
            resolver: Hostname to address function (defaults to socket.gethostbyname)
            logger: Optional audit logger for failed lookups

        Raises:
            MalformedInputError: If no usable hostname can be derived
        """
        self._source = source
        self._host = host or ""
        self._host_type = host_type or ""
        self._collect_ip = collect_ip

        self._url, self._port = self._parse_url(url)
        self._url_host = normalize_to_canonical(self._url.hostname or "")
        if self._url_host.endswith("."):
            self._url_host = self._url_host[:-1]
        self._domain = self._domain_from_host(self._url_host)

        self._is_ip = is_ipv4(self._domain)
        self._tld = "" if self._is_ip else tld_list.resolve(self._domain)
        self._is_tld = self._domain == self._tld
        self._mld = self._mld_from_domain()
        self._subdomain = self._subdomain_from_domain()
        self._num_subdomains = (
            self._subdomain.count(".") + 1 if self._subdomain else 0
        )

        self._analysis_data = AnalysisData()

        self._resolution_warning: Optional[ResolutionWarning] = None
        self._ip_address = self._ip_address_from_domain(
            resolver or socket.gethostbyname, logger
        )

    @staticmethod
    def _parse_url(raw: str) -> tuple[SplitResult, Optional[int]]:
        value = raw.lower().strip()
        if "://" not in value:
            value = "http://" + value

        try:
            parts = urlsplit(value)
            port = parts.port
        except ValueError as e:
            raise MalformedInputError(
                code=MalformedInputCode.UNPARSEABLE_URL.value,
                message=f"Could not parse URL: {e}",
                details={"raw_input": raw},
            ) from e

        return parts, port

    @staticmethod
    def _domain_from_host(host: str) -> str:
        # "www." is kept, and may sit mid-string: cut from its first occurrence
        www = host.find("www.")
        domain = host[www:] if www != -1 else host

        if not domain:
            raise MalformedInputError(
                code=MalformedInputCode.EMPTY_DOMAIN.value,
                message="Domain is empty",
                details={"host": host},
            )
        if "." not in domain:
            raise MalformedInputError(
                code=MalformedInputCode.MISSING_DOT.value,
                message=f'Domain does not contain a dot character. String: "{domain}"',
                details={"domain": domain},
            )

        return domain

    def _mld_from_domain(self) -> str:
        if self._is_ip or self._is_tld:
            return ""

        without_tld = self._domain[:max(len(self._domain) - len(self._tld) - 1, 0)]
        return without_tld[without_tld.rfind(".") + 1:]

    def _subdomain_from_domain(self) -> str:
        if self._is_ip or self._is_tld or self._domain.startswith(self._mld):
            return ""

        return self._domain[:self._domain.find("." + self._mld)]

    def _ip_address_from_domain(
        self,
        resolver: Callable[[str], str],
        logger: Optional[AuditLogger],
    ) -> str:
        if not self._collect_ip:
            return NOT_COLLECTED
        if self._is_ip:
            return self._domain

        try:
            return resolve_host_address(self._url_host, resolver)
        except ResolutionWarning as warning:
            self._resolution_warning = warning
            if logger:
                logger.log_warning(
                    COMPONENT,
                    warning.message,
                    error=warning,
                    additional_data={"domain": self._domain, "source": self._source},
                )
            return ""

    # ------------------------------------------------------------------
    # URL parts
    # ------------------------------------------------------------------

    @property
    def source(self) -> str:
        return self._source

    @property
    def url(self) -> str:
        """Normalized URL, always with a scheme."""
        return self._url.geturl()

    @property
    def scheme(self) -> str:
        return self._url.scheme

    @property
    def authority(self) -> str:
        """Userinfo, host and port as written in the URL."""
        return self._url.netloc

    @property
    def url_host(self) -> str:
        """Host of the URL, including any "www." prefix before the kept part."""
        return self._url_host

    @property
    def port(self) -> Optional[int]:
        return self._port

    @property
    def default_port(self) -> Optional[int]:
        return DEFAULT_PORTS.get(self._url.scheme)

    @property
    def path(self) -> str:
        return self._url.path

    # ------------------------------------------------------------------
    # Decomposition
    # ------------------------------------------------------------------

    @property
    def domain(self) -> str:
        return self._domain

    @property
    def is_ip(self) -> bool:
        return self._is_ip

    @property
    def is_tld(self) -> bool:
        """True if the domain is itself a TLD (an effective TLD)."""
        return self._is_tld

    @property
    def tld(self) -> str:
        return self._tld

    @property
    def mld(self) -> str:
        return self._mld

    @property
    def subdomain(self) -> str:
        return self._subdomain

    @property
    def num_subdomains(self) -> int:
        return self._num_subdomains

    @property
    def host(self) -> str:
        return self._host

    @property
    def host_type(self) -> str:
        return self._host_type

    @property
    def ip_address(self) -> str:
        """Resolved address, "" if the lookup failed, NOT_COLLECTED if skipped."""
        return self._ip_address

    @property
    def resolution_warning(self) -> Optional[ResolutionWarning]:
        """The recovered lookup failure, if any."""
        return self._resolution_warning

    @property
    def domain_without_tld(self) -> str:
        if not self._subdomain:
            return self._mld
        return f"{self._subdomain}.{self._mld}"

    def nth_subdomain(self, position: int) -> str:
        """
        Return the subdomain label at ``position``.

        Position 1 is the label nearest the MLD: for 'a.b.example.com',
        1 gives 'b' and 2 gives 'a'. Positions outside the stack give ''.
        """
        if position > self._num_subdomains:
            return ""

        labels = self._subdomain.split(".")
        while labels and not labels[-1]:
            labels.pop()
        index = len(labels) - position
        if 0 <= index < len(labels):
            return labels[index]
        return ""

    def blockable_domain(self, host_domain: Optional[str] = None) -> str:
        """
        Return the smallest domain that can be blocked without blocking a host.

        Normally this is MLD.TLD. When MLD.TLD is the known hosting domain
        (``host_domain``, defaulting to this Domain's ``host``) and there is a
        subdomain, the block moves one level down to
        (last subdomain label).MLD.TLD.
        """
        if host_domain is None:
            host_domain = self._host

        blockable = f"{self._mld}.{self._tld}"

        if host_domain and blockable.lower() == host_domain.lower() and self._subdomain:
            last_label = self._subdomain[self._subdomain.rfind(".") + 1:]
            blockable = f"{last_label}.{blockable}"

        return blockable

    # ------------------------------------------------------------------
    # Analysis data
    # ------------------------------------------------------------------

    @property
    def analysis_data(self) -> AnalysisData:
        return self._analysis_data

    def get_analysis_datum(self, key: str) -> Optional[int]:
        return self._analysis_data.get(key)

    def set_analysis_datum(self, key: str, value: int) -> None:
        self._analysis_data.set(key, value)

    def to_dict(self) -> dict:
        """Decomposition and current analysis data as a JSON-friendly dict."""
        return {
            "source": self._source,
            "url": self.url,
            "domain": self._domain,
            "is_ip": self._is_ip,
            "is_tld": self._is_tld,
            "tld": self._tld,
            "mld": self._mld,
            "subdomain": self._subdomain,
            "num_subdomains": self._num_subdomains,
            "domain_without_tld": self.domain_without_tld,
            "blockable_domain": self.blockable_domain(),
            "host": self._host,
            "host_type": self._host_type,
            "ip_address": self._ip_address,
            "analysis_data": self._analysis_data.snapshot(),
        }

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Domain):
            return NotImplemented
        return self._domain == other._domain

    def __hash__(self) -> int:
        return hash(self._domain)

    def __repr__(self) -> str:
        return f"Domain({self._domain!r})"
