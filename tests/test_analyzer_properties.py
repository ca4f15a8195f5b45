"""
Property-based tests for the batch analyzer.

A batch must survive malformed items, deduplicate by hostname and attach
known hosting domains.
"""

import string
from io import StringIO
from unittest.mock import MagicMock

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from domain_analysis.analyzer import DomainAnalyzer
from domain_analysis.audit_logger import AuditLogger
from domain_analysis.config import HostDomainConfig
from domain_analysis.domain import NOT_COLLECTED
from domain_analysis.enums import LogLevel
from domain_analysis.exceptions import MalformedInputError
from domain_analysis.tld_list import TLDList


TLDS = TLDList(["com", "net", "co.uk", "uk"])

valid_url = st.builds(
    lambda sub, name, tld: f"{sub}.{name}.{tld}" if sub else f"{name}.{tld}",
    st.text(alphabet="abcdfg", max_size=4),
    st.text(alphabet=string.ascii_lowercase, min_size=1, max_size=6).map(lambda s: f"x{s}"),
    st.sampled_from(["com", "net", "co.uk"]),
)
malformed_url = st.text(alphabet=string.ascii_lowercase, min_size=1, max_size=10)


class TestBatchResilienceProperty:
    """Malformed items are recorded, never fatal."""

    @given(
        urls=st.lists(
            st.one_of(valid_url, malformed_url).map(lambda u: (u, "." in u)),
            max_size=20,
        )
    )
    @settings(max_examples=100)
    def test_every_input_is_accounted_for(self, urls: list[tuple[str, bool]]) -> None:
        analyzer = DomainAnalyzer(TLDS)

        result = analyzer.analyze_all([url for url, _ in urls])

        valid_count = sum(1 for _, valid in urls if valid)
        malformed_count = len(urls) - valid_count

        assert len(result.errors) == malformed_count
        assert len(result.domains) + result.duplicates == valid_count
        assert len(set(result.domains)) == len(result.domains)

    def test_errors_carry_input_and_code(self) -> None:
        logger = AuditLogger(output_format="json", output_stream=StringIO())
        analyzer = DomainAnalyzer(TLDS, logger=logger)

        result = analyzer.analyze_all(["example.com", "nodotshere", "http://"], source="feed")

        assert [d.domain for d in result.domains] == ["example.com"]
        assert [(e.raw_input, e.code) for e in result.errors] == [
            ("nodotshere", "missing_dot"),
            ("http://", "empty_domain"),
        ]
        assert all(e.source == "feed" for e in result.errors)

        warnings = [entry for entry in logger.entries if entry.level == LogLevel.WARN]
        assert len(warnings) == 2
        assert logger.entries[-1].data["errors"] == 2

    def test_blank_lines_are_skipped(self) -> None:
        result = DomainAnalyzer(TLDS).analyze_all(["", "   ", "example.com"])

        assert len(result.domains) == 1
        assert result.errors == []


class TestDeduplication:
    """Domains with the same hostname collapse to the first occurrence."""

    def test_first_occurrence_wins(self) -> None:
        result = DomainAnalyzer(TLDS).analyze_all([
            "http://example.com/a",
            "https://EXAMPLE.com:8443/b",
            "www.example.com",
        ])

        assert [d.url for d in result.domains] == [
            "http://example.com/a",
            "http://www.example.com",
        ]
        assert result.duplicates == 1


class TestHostMatching:
    """Known hosting domains are attached to matching entities."""

    def test_host_is_attached_on_match(self) -> None:
        analyzer = DomainAnalyzer(
            TLDS,
            hosts=[HostDomainConfig(domain="blogspot.com", host_type="whitelist")],
        )

        hosted = analyzer.analyze("http://someblog.blogspot.com/post")
        plain = analyzer.analyze("http://someblog.example.com/post")

        assert hosted.host == "blogspot.com"
        assert hosted.host_type == "whitelist"
        assert hosted.blockable_domain() == "someblog.blogspot.com"

        assert plain.host == ""
        assert plain.blockable_domain() == "example.com"

    def test_ip_input_never_matches_host(self) -> None:
        analyzer = DomainAnalyzer(TLDS, hosts=[HostDomainConfig(domain="1.1")])

        domain = analyzer.analyze("10.0.1.1")

        assert domain.is_ip
        assert domain.host == ""

    def test_single_input_propagates_malformed_error(self) -> None:
        with pytest.raises(MalformedInputError):
            DomainAnalyzer(TLDS).analyze("nodotshere")


class TestAddressCollection:
    """collect_ip is forwarded to every Domain."""

    def test_resolver_is_used_when_collecting(self) -> None:
        resolver = MagicMock(return_value="192.0.2.10")
        analyzer = DomainAnalyzer(TLDS, collect_ip=True, resolver=resolver)

        domain = analyzer.analyze("www.example.co.uk")

        assert domain.ip_address == "192.0.2.10"
        resolver.assert_called_once_with("www.example.co.uk")

    def test_no_lookup_by_default(self) -> None:
        resolver = MagicMock(return_value="192.0.2.10")
        analyzer = DomainAnalyzer(TLDS, resolver=resolver)

        domain = analyzer.analyze("www.example.co.uk")

        assert domain.ip_address == NOT_COLLECTED
        resolver.assert_not_called()
