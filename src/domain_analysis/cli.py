"""
Command-line interface for the domain analysis system.

This module provides the main CLI entry point with commands for:
- analyze: Decompose a single URL or domain
- analyze-list: Decompose every URL in a file
- fetch-tlds: Download and format a TLD list
- config: Configuration management
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Optional

from . import __version__
from .analyzer import DomainAnalyzer
from .audit_logger import AuditLogger
from .config import (
    DEFAULT_CONFIG_PATH,
    HostDomainConfig,
    SystemConfig,
    create_default_config,
    load_config_from_file,
    save_config_to_file,
)
from .exceptions import DomainAnalysisError, MalformedInputError
from .tld_list import TLDList, collect_tld_set


def create_logger(config: SystemConfig) -> AuditLogger:
    """Create the audit logger described by ``config.logging``."""
    logger = AuditLogger(
        output_format=config.logging.output_format,
        min_level=config.logging.log_level,
    )
    if config.logging.audit_mode and config.logging.audit_signing_key:
        logger.enable_audit_mode(config.logging.audit_signing_key)
    return logger


def resolve_config(args: argparse.Namespace) -> SystemConfig:
    """
    Load the configuration named on the command line and apply overrides.

    Raises:
        DomainAnalysisError: If an explicitly named config file is missing or invalid
    """
    config = None
    if getattr(args, "config", None):
        config = load_config_from_file(Path(args.config))
        if config is None:
            raise DomainAnalysisError(
                code="config_not_found",
                message=f"Could not load config from {args.config}",
            )

    if config is None:
        config = create_default_config()

    if getattr(args, "tld_file", None):
        config.tld_source.path = Path(args.tld_file)
    if getattr(args, "collect_ip", False):
        config.collect_ip = True
    if getattr(args, "host", None):
        config.hosts.append(HostDomainConfig(
            domain=args.host.lower(),
            host_type=args.host_type or "",
        ))

    return config


def create_analyzer(config: SystemConfig, logger: AuditLogger) -> DomainAnalyzer:
    return DomainAnalyzer(
        tld_list=TLDList.from_file(config.tld_source.path),
        hosts=config.hosts,
        collect_ip=config.collect_ip,
        logger=logger,
    )


def cmd_analyze(args: argparse.Namespace) -> int:
    """Handle the 'analyze' command."""
    config = resolve_config(args)
    logger = create_logger(config)
    analyzer = create_analyzer(config, logger)

    try:
        domain = analyzer.analyze(args.url, source=args.source)
    except MalformedInputError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1

    print(json.dumps(domain.to_dict(), indent=2, ensure_ascii=False))
    return 0


def cmd_analyze_list(args: argparse.Namespace) -> int:
    """Handle the 'analyze-list' command."""
    config = resolve_config(args)
    logger = create_logger(config)
    analyzer = create_analyzer(config, logger)

    try:
        with open(args.file, "r", encoding="utf-8", errors="replace") as f:
            lines = [line.strip() for line in f]
    except OSError as e:
        print(f"Error reading file: {e}", file=sys.stderr)
        return 1

    urls = [line for line in lines if line and not line.startswith("#")]
    result = analyzer.analyze_all(urls, source=args.source or args.file)

    report = {
        "domains": [domain.to_dict() for domain in result.domains],
        "errors": [
            {"raw_input": error.raw_input, "code": error.code, "message": error.message}
            for error in result.errors
        ],
        "duplicates": result.duplicates,
    }

    if args.output:
        output_file = Path(args.output)
        try:
            output_file.parent.mkdir(parents=True, exist_ok=True)
            with open(output_file, "w", encoding="utf-8") as f:
                json.dump(report, f, indent=2, ensure_ascii=False)
            print(f"Results written to: {output_file}")
        except OSError as e:
            print(f"Error writing results: {e}", file=sys.stderr)
            return 1
    else:
        print(json.dumps(report, indent=2, ensure_ascii=False))

    print(
        f"Analysed {len(result.domains)} domains, "
        f"{len(result.errors)} errors, {result.duplicates} duplicates",
        file=sys.stderr,
    )
    return 0 if not result.errors else 2


def cmd_fetch_tlds(args: argparse.Namespace) -> int:
    """Handle the 'fetch-tlds' command."""
    config = resolve_config(args)
    logger = create_logger(config)

    url = args.url or config.tld_source.url
    output = Path(args.output) if args.output else config.tld_source.path

    tlds = collect_tld_set(url, output, logger=logger)
    print(f"Wrote {len(tlds)} TLDs to: {output}")
    return 0


def cmd_config(args: argparse.Namespace) -> int:
    """Handle the 'config' command."""
    config_path = Path(args.path) if args.path else DEFAULT_CONFIG_PATH

    if args.action == "show":
        config = load_config_from_file(config_path)
        if config is None:
            print(f"No configuration found at: {config_path}")
            print("Use 'config init' to create a default configuration.")
            return 1

        print(f"Configuration from: {config_path}")
        print(f"  TLD file: {config.tld_source.path}")
        print(f"  TLD source: {config.tld_source.url}")
        print(f"  Hosts: {', '.join(host.domain for host in config.hosts) or '-'}")
        print(f"  Collect IP: {config.collect_ip}")
        print(f"  Log level: {config.logging.level}")
        print(f"  Audit mode: {config.logging.audit_mode}")
        return 0

    elif args.action == "init":
        if config_path.exists() and not args.force:
            print(f"Configuration already exists at: {config_path}")
            print("Use --force to overwrite.")
            return 1

        save_config_to_file(create_default_config(), config_path)
        print(f"Configuration created at: {config_path}")
        return 0

    elif args.action == "validate":
        config = load_config_from_file(config_path)
        if config is None:
            print(f"Error: Could not load config from {config_path}", file=sys.stderr)
            return 1

        print(f"Configuration at {config_path} is valid.")
        return 0

    return 1


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config", "-c",
        help="Path to configuration file",
    )
    parser.add_argument(
        "--tld-file", "-t",
        help="Path to TLD list (one TLD per line or CSV with TLD first)",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="domain-analysis",
        description="Decompose URLs into TLD, mid-level domain and subdomains",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # 'analyze' command
    analyze_parser = subparsers.add_parser(
        "analyze",
        help="Decompose a single URL or domain",
    )
    analyze_parser.add_argument(
        "url",
        help="URL or domain to analyse (e.g., https://www.example.co.uk/path)",
    )
    _add_common_arguments(analyze_parser)
    analyze_parser.add_argument(
        "--source", "-s",
        default="",
        help="Provenance tag for the URL",
    )
    analyze_parser.add_argument(
        "--host",
        help="Known hosting domain (e.g., blogspot.com)",
    )
    analyze_parser.add_argument(
        "--host-type",
        help="Type of the hosting domain",
    )
    analyze_parser.add_argument(
        "--collect-ip",
        action="store_true",
        help="Look up the IP address of the domain",
    )
    analyze_parser.set_defaults(func=cmd_analyze)

    # 'analyze-list' command
    analyze_list_parser = subparsers.add_parser(
        "analyze-list",
        help="Decompose every URL in a file",
    )
    analyze_list_parser.add_argument(
        "file",
        help="Path to file containing URLs (one per line)",
    )
    _add_common_arguments(analyze_list_parser)
    analyze_list_parser.add_argument(
        "--output", "-o",
        help="Path to write results as JSON",
    )
    analyze_list_parser.add_argument(
        "--source", "-s",
        help="Provenance tag (defaults to the file name)",
    )
    analyze_list_parser.add_argument(
        "--collect-ip",
        action="store_true",
        help="Look up the IP address of every domain",
    )
    analyze_list_parser.set_defaults(func=cmd_analyze_list)

    # 'fetch-tlds' command
    fetch_parser = subparsers.add_parser(
        "fetch-tlds",
        help="Download and format a TLD list",
    )
    fetch_parser.add_argument(
        "--url", "-u",
        help="Suffix list URL (defaults to the public suffix list)",
    )
    fetch_parser.add_argument(
        "--output", "-o",
        help="Where to write the TLD list (defaults to the configured TLD file)",
    )
    fetch_parser.add_argument(
        "--config", "-c",
        help="Path to configuration file",
    )
    fetch_parser.set_defaults(func=cmd_fetch_tlds)

    # 'config' command
    config_parser = subparsers.add_parser(
        "config",
        help="Configuration management",
    )
    config_parser.add_argument(
        "action",
        choices=["show", "init", "validate"],
        help="Configuration action",
    )
    config_parser.add_argument(
        "--path", "-p",
        help="Path to configuration file",
    )
    config_parser.add_argument(
        "--force", "-f",
        action="store_true",
        help="Force overwrite existing configuration",
    )
    config_parser.set_defaults(func=cmd_config)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    try:
        return args.func(args)
    except DomainAnalysisError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
