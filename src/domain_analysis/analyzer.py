"""
Batch analyzer for the domain analysis system.

Builds Domain entities for many raw inputs. A malformed input is logged and
recorded as an AnalysisError; it never aborts the rest of the batch.
Configuration defects (ConfigurationError) still propagate.
"""

from typing import Callable, Iterable, Optional

from .audit_logger import AuditLogger
from .config import HostDomainConfig
from .domain import Domain
from .enums import LogLevel
from .exceptions import MalformedInputError
from .models import AnalysisError, AnalyzerResult
from .tld_list import TLDList

COMPONENT = "analyzer"


class DomainAnalyzer:
    """
    Turns raw URLs into deduplicated Domain entities.

    Known hosting domains are matched against each entity's MLD.TLD; on a
    match the entity is rebuilt with that host attached, so its
    blockable_domain moves one level below the hosting platform.
    """

    def __init__(
        self,
        tld_list: TLDList,
        hosts: Optional[Iterable[HostDomainConfig]] = None,
        collect_ip: bool = False,
        resolver: Optional[Callable[[str], str]] = None,
        logger: Optional[AuditLogger] = None,
    ) -> None:
        """
        Args:
            tld_list: Known TLD suffixes
            hosts: Known hosting domains
            collect_ip: Whether Domains look up their address
            resolver: Optional hostname to address function for lookups
            logger: Optional audit logger
        """
        self._tld_list = tld_list
        self._hosts = {host.domain.lower(): host for host in hosts or []}
        self._collect_ip = collect_ip
        self._resolver = resolver
        self._logger = logger

    def _find_host(self, domain: Domain) -> Optional[HostDomainConfig]:
        if domain.is_ip or domain.is_tld:
            return None
        return self._hosts.get(f"{domain.mld}.{domain.tld}")

    def analyze(self, url: str, source: str = "") -> Domain:
        """
        Build a single Domain, attaching a known host when one matches.

        Raises:
            MalformedInputError: If the input has no usable hostname
        """
        # Decompose without network access first; the host tag needs MLD.TLD
        probe = Domain(url, self._tld_list, source=source, collect_ip=False)
        host = self._find_host(probe)

        if host is None and not self._collect_ip:
            return probe

        return Domain(
            url,
            self._tld_list,
            source=source,
            host=host.domain if host else "",
            host_type=host.host_type if host else "",
            collect_ip=self._collect_ip,
            resolver=self._resolver,
            logger=self._logger,
        )

    def analyze_all(self, urls: Iterable[str], source: str = "") -> AnalyzerResult:
        """
        Analyse every input, skipping malformed ones.

        Domains equal to an earlier one (same hostname) are counted as
        duplicates and dropped.
        """
        result = AnalyzerResult()
        seen: set[Domain] = set()

        for url in urls:
            if not url.strip():
                continue

            try:
                domain = self.analyze(url, source=source)
            except MalformedInputError as e:
                result.errors.append(AnalysisError(
                    source=source,
                    raw_input=url,
                    code=e.code,
                    message=e.message,
                ))
                if self._logger:
                    self._logger.log_warning(
                        COMPONENT,
                        "Skipping malformed input",
                        error=e,
                        additional_data={"raw_input": url, "source": source},
                    )
                continue

            if domain in seen:
                result.duplicates += 1
                continue

            seen.add(domain)
            result.domains.append(domain)

        if self._logger:
            self._logger.log(
                LogLevel.INFO,
                COMPONENT,
                "Batch analysed",
                {
                    "source": source,
                    "domains": len(result.domains),
                    "errors": len(result.errors),
                    "duplicates": result.duplicates,
                },
            )

        return result
