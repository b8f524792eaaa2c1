"""Settings and configuration loading for the exporter."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import TypeVar

import yaml

DEFAULT_LOGIN_URL = "https://as.wiz.cn/as/user/login"
DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

SectionT = TypeVar("SectionT")


@dataclass
class LoggingSettings:
    """Logging configuration."""

    level: str = "INFO"
    file: str | None = None
    format: str = DEFAULT_LOG_FORMAT


@dataclass
class ApiSettings:
    """Remote API configuration."""

    login_url: str = DEFAULT_LOGIN_URL
    page_size: int = 200
    order_by: str = "created"
    timeout: float | None = None
    request_delay: float = 0.1


@dataclass
class OutputSettings:
    """Output configuration."""

    output_dir: Path = field(default_factory=lambda: Path("."))
    strip_backslashes: bool = True


@dataclass
class Settings:
    """Main settings container for the exporter."""

    api: ApiSettings = field(default_factory=ApiSettings)
    output: OutputSettings = field(default_factory=OutputSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)

    @classmethod
    def load(cls, path: str | Path) -> "Settings":
        """Load settings from a YAML file.

        Sections and keys left out of the file keep their defaults, so a
        file holding only ``api: {request_delay: 0.5}`` is valid.

        Args:
            path: Path to the settings YAML file.

        Returns:
            Settings instance populated from the file.

        Raises:
            FileNotFoundError: If the settings file doesn't exist.
            yaml.YAMLError: If the file contains invalid YAML.
            ValueError: If a section has unknown keys or invalid values.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Settings file not found: {path}")

        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: dict) -> "Settings":
        """Create Settings from a dictionary."""
        if not isinstance(data, dict):
            raise ValueError("Settings file must contain a mapping")

        api = _build_section(ApiSettings, "api", data.get("api"))
        output = _build_section(OutputSettings, "output", data.get("output"))
        output.output_dir = Path(output.output_dir)
        logging_settings = _build_section(LoggingSettings, "logging", data.get("logging"))

        if not isinstance(api.page_size, int) or api.page_size < 1:
            raise ValueError(f"api.page_size must be a positive integer, got {api.page_size!r}")
        if api.request_delay < 0:
            raise ValueError(f"api.request_delay must not be negative, got {api.request_delay!r}")
        if api.timeout is not None and api.timeout <= 0:
            raise ValueError(f"api.timeout must be positive, got {api.timeout!r}")

        return cls(api=api, output=output, logging=logging_settings)

    @classmethod
    def default(cls) -> "Settings":
        """Create Settings with default values."""
        return cls()


def _build_section(section_cls: type[SectionT], name: str, values: dict | None) -> SectionT:
    """Instantiate one settings section, rejecting keys it doesn't define."""
    if values is None:
        return section_cls()
    if not isinstance(values, dict):
        raise ValueError(f"Settings section '{name}' must be a mapping")

    known = {f.name for f in fields(section_cls)}
    unknown = sorted(set(values) - known)
    if unknown:
        raise ValueError(f"Unknown keys in settings section '{name}': {', '.join(unknown)}")

    return section_cls(**values)
