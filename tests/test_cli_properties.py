"""
Tests for the command-line interface.
"""

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from domain_analysis.cli import create_parser, main


@pytest.fixture
def tld_file(tmp_path: Path) -> Path:
    path = tmp_path / "tlds.txt"
    path.write_text("com\nnet\nuk\nco.uk,Nominet\n", encoding="utf-8")
    return path


class TestAnalyzeCommand:
    """'analyze' prints the decomposition as JSON."""

    def test_analyze_prints_decomposition(self, tld_file: Path, capsys) -> None:
        exit_code = main(["analyze", "https://www.example.co.uk/path", "--tld-file", str(tld_file)])

        assert exit_code == 0
        output = json.loads(capsys.readouterr().out)
        assert output["domain"] == "www.example.co.uk"
        assert output["tld"] == "co.uk"
        assert output["mld"] == "example"
        assert output["subdomain"] == "www"
        assert output["ip_address"] == "NOT COLLECTED"

    def test_analyze_with_host(self, tld_file: Path, capsys) -> None:
        exit_code = main([
            "analyze", "sub.blogspot.com",
            "--tld-file", str(tld_file),
            "--host", "blogspot.com",
            "--host-type", "whitelist",
        ])

        assert exit_code == 0
        output = json.loads(capsys.readouterr().out)
        assert output["blockable_domain"] == "sub.blogspot.com"
        assert output["host_type"] == "whitelist"

    def test_malformed_input_exits_nonzero(self, tld_file: Path, capsys) -> None:
        exit_code = main(["analyze", "nodotshere", "--tld-file", str(tld_file)])

        assert exit_code == 1
        assert "dot" in capsys.readouterr().err

    def test_missing_tld_file_exits_nonzero(self, tmp_path: Path, capsys) -> None:
        exit_code = main(["analyze", "example.com", "--tld-file", str(tmp_path / "absent.txt")])

        assert exit_code == 1
        assert "TLD file" in capsys.readouterr().err


class TestAnalyzeListCommand:
    """'analyze-list' reports domains, errors and duplicates."""

    def test_report_written_to_file(self, tld_file: Path, tmp_path: Path) -> None:
        urls = tmp_path / "urls.txt"
        urls.write_text(
            "# feed\nhttp://example.com/a\nexample.com\nnodotshere\n\nwww.example.net\n",
            encoding="utf-8",
        )
        output = tmp_path / "out" / "report.json"

        exit_code = main([
            "analyze-list", str(urls),
            "--tld-file", str(tld_file),
            "--output", str(output),
        ])

        report = json.loads(output.read_text(encoding="utf-8"))
        assert exit_code == 2
        assert [d["domain"] for d in report["domains"]] == ["example.com", "www.example.net"]
        assert report["errors"][0]["code"] == "missing_dot"
        assert report["duplicates"] == 1
        assert report["domains"][0]["source"] == str(urls)

    def test_clean_list_exits_zero(self, tld_file: Path, tmp_path: Path, capsys) -> None:
        urls = tmp_path / "urls.txt"
        urls.write_text("example.com\n", encoding="utf-8")

        exit_code = main(["analyze-list", str(urls), "--tld-file", str(tld_file)])

        assert exit_code == 0
        assert json.loads(capsys.readouterr().out)["errors"] == []

    def test_undecodable_line_is_a_per_item_error(self, tld_file: Path, tmp_path: Path, capsys) -> None:
        urls = tmp_path / "urls.txt"
        urls.write_bytes(b"example.com\n\xff\xfe.com\nexample.net\n")

        exit_code = main(["analyze-list", str(urls), "--tld-file", str(tld_file)])

        report = json.loads(capsys.readouterr().out)
        assert exit_code == 2
        assert [d["domain"] for d in report["domains"]] == ["example.com", "example.net"]
        assert len(report["errors"]) == 1


class TestFetchTLDsCommand:
    """'fetch-tlds' delegates to collect_tld_set."""

    def test_fetch_uses_given_url_and_output(self, tmp_path: Path, capsys) -> None:
        output = tmp_path / "tlds.txt"

        with patch("domain_analysis.cli.collect_tld_set", return_value=["com", "net"]) as collect:
            exit_code = main(["fetch-tlds", "--url", "https://suffixes.example/list.dat", "--output", str(output)])

        assert exit_code == 0
        assert collect.call_args.args[:2] == ("https://suffixes.example/list.dat", output)
        assert "Wrote 2 TLDs" in capsys.readouterr().out


class TestConfigCommand:
    """'config' init/show/validate."""

    def test_init_show_validate(self, tmp_path: Path, capsys) -> None:
        path = tmp_path / "config.json"

        assert main(["config", "init", "--path", str(path)]) == 0
        assert path.exists()
        assert main(["config", "init", "--path", str(path)]) == 1
        assert main(["config", "init", "--path", str(path), "--force"]) == 0
        assert main(["config", "show", "--path", str(path)]) == 0
        assert main(["config", "validate", "--path", str(path)]) == 0

        assert "Collect IP: False" in capsys.readouterr().out

    def test_show_missing_config(self, tmp_path: Path) -> None:
        assert main(["config", "show", "--path", str(tmp_path / "absent.json")]) == 1

    def test_invalid_config_is_reported(self, tmp_path: Path, capsys) -> None:
        path = tmp_path / "config.json"
        path.write_text("{broken", encoding="utf-8")

        assert main(["config", "validate", "--path", str(path)]) == 1
        assert "Error" in capsys.readouterr().err


class TestParser:
    def test_no_command_prints_help(self, capsys) -> None:
        assert main([]) == 0
        assert "usage" in capsys.readouterr().out

    def test_version(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            create_parser().parse_args(["--version"])

        assert exc_info.value.code == 0
