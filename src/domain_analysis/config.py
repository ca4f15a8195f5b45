"""
Configuration dataclasses for the domain analysis system.

This module defines the configuration structures used by the CLI and the
batch analyzer (TLD source, known hosting domains, logging) together with
JSON load/save helpers.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .enums import ConfigurationErrorCode, LogLevel
from .exceptions import ConfigurationError
from .tld_list import DEFAULT_TLD_SOURCE_URL


DEFAULT_CONFIG_PATH = Path.home() / ".domain_analysis" / "config.json"
DEFAULT_TLD_FILE = Path.home() / ".domain_analysis" / "tlds.txt"


@dataclass
class TLDSourceConfig:
    """Where the TLD list lives and where it is downloaded from."""

    path: Path = DEFAULT_TLD_FILE
    url: str = DEFAULT_TLD_SOURCE_URL


@dataclass
class HostDomainConfig:
    """A known multi-tenant hosting domain (e.g. blogspot.com)."""

    domain: str
    host_type: str = ""


@dataclass
class LoggingConfig:
    """Logging and audit configuration."""

    level: str = "info"
    output_format: str = "text"  # 'json', 'text', 'both'
    audit_mode: bool = False
    audit_signing_key: Optional[str] = None

    @property
    def log_level(self) -> LogLevel:
        return LogLevel(self.level.lower())


@dataclass
class SystemConfig:
    """Main system configuration combining all sub-configurations."""

    tld_source: TLDSourceConfig = field(default_factory=TLDSourceConfig)
    hosts: list[HostDomainConfig] = field(default_factory=list)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    collect_ip: bool = False


def create_default_config(collect_ip: bool = False) -> SystemConfig:
    """Create a configuration with default settings."""
    return SystemConfig(collect_ip=collect_ip)


def config_from_dict(data: dict) -> SystemConfig:
    """
    Build a SystemConfig from parsed JSON.

    Raises:
        ConfigurationError: If a field has the wrong shape or value
    """
    try:
        tld_data = data.get("tld_source", {})
        tld_source = TLDSourceConfig(
            path=Path(tld_data.get("path", DEFAULT_TLD_FILE)),
            url=tld_data.get("url", DEFAULT_TLD_SOURCE_URL),
        )

        hosts = [
            HostDomainConfig(
                domain=host_data["domain"].lower(),
                host_type=host_data.get("host_type", ""),
            )
            for host_data in data.get("hosts", [])
        ]

        logging_data = data.get("logging", {})
        logging_config = LoggingConfig(
            level=logging_data.get("level", "info"),
            output_format=logging_data.get("output_format", "text"),
            audit_mode=logging_data.get("audit_mode", False),
            audit_signing_key=logging_data.get("audit_signing_key"),
        )
        LogLevel(logging_config.level.lower())

        if logging_config.output_format not in ("json", "text", "both"):
            raise ValueError(f"Invalid output_format: {logging_config.output_format}")

        return SystemConfig(
            tld_source=tld_source,
            hosts=hosts,
            logging=logging_config,
            collect_ip=bool(data.get("collect_ip", False)),
        )

    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise ConfigurationError(
            code=ConfigurationErrorCode.INVALID_CONFIG.value,
            message=f"Invalid configuration: {e}",
            details={"error": str(e)},
        ) from e


def config_to_dict(config: SystemConfig) -> dict:
    return {
        "tld_source": {
            "path": str(config.tld_source.path),
            "url": config.tld_source.url,
        },
        "hosts": [
            {"domain": host.domain, "host_type": host.host_type}
            for host in config.hosts
        ],
        "logging": {
            "level": config.logging.level,
            "output_format": config.logging.output_format,
            "audit_mode": config.logging.audit_mode,
            "audit_signing_key": config.logging.audit_signing_key,
        },
        "collect_ip": config.collect_ip,
    }


def load_config_from_file(config_path: Path) -> Optional[SystemConfig]:
    """
    Load configuration from a JSON file.

    Args:
        config_path: Path to the configuration file

    Returns:
        SystemConfig, or None if the file does not exist

    Raises:
        ConfigurationError: If the file exists but is not a valid configuration
    """
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        return None
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(
            code=ConfigurationErrorCode.INVALID_CONFIG.value,
            message=f"Error loading config: {e}",
            details={"path": str(config_path)},
        ) from e

    if not isinstance(data, dict):
        raise ConfigurationError(
            code=ConfigurationErrorCode.INVALID_CONFIG.value,
            message="Configuration root must be a JSON object",
            details={"path": str(config_path)},
        )

    return config_from_dict(data)


def save_config_to_file(config: SystemConfig, config_path: Path) -> None:
    """
    Save configuration to a JSON file, creating parent directories.

    Raises:
        ConfigurationError: If the file cannot be written
    """
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, "w", encoding="utf-8") as f:
            json.dump(config_to_dict(config), f, indent=2, ensure_ascii=False)
    except OSError as e:
        raise ConfigurationError(
            code=ConfigurationErrorCode.INVALID_CONFIG.value,
            message=f"Error saving config: {e}",
            details={"path": str(config_path)},
        ) from e
