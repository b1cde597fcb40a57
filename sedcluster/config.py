"""
Configuration management for distance computation.

This module handles loading, saving, and validating the settings that
control how the pairwise distance matrix is computed and reused.
"""

import logging
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class SedConfig:
    """Configuration for corpus loading and matrix computation."""

    # Corpus parsing
    encoding: str = "utf-8"

    # All-pairs computation (1 = inline, 0 = one worker per CPU)
    workers: int = 1
    use_processes: bool = False

    # Skip computation when the distance file already exists. The existing
    # file is trusted as-is; its contents are not checked against the corpus.
    reuse_existing: bool = True

    log_level: str = "INFO"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'SedConfig':
        """Create from dictionary, ignoring unknown keys."""
        data = data or {}
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning("Ignoring unknown config keys: %s", ", ".join(unknown))
        return cls(**{k: v for k, v in data.items() if k in known})

    def errors(self) -> List[str]:
        """Return a list of validation problems (empty when valid)."""
        errors = []

        if not isinstance(self.workers, int) or self.workers < 0:
            errors.append(f"workers must be a non-negative integer, got {self.workers!r}")

        if str(self.log_level).upper() not in LOG_LEVELS:
            errors.append(f"log_level must be one of {', '.join(LOG_LEVELS)}, got {self.log_level!r}")

        try:
            "".encode(self.encoding)
        except (LookupError, TypeError):
            errors.append(f"unknown encoding {self.encoding!r}")

        return errors

    def validate(self) -> bool:
        """Validate configuration parameters, logging any problems."""
        errors = self.errors()
        for error in errors:
            logger.error("Configuration error: %s", error)
        return not errors


class ConfigManager:
    """Loads and saves ``SedConfig`` as YAML."""

    DEFAULT_CONFIG_FILE = ".sedcluster.yml"

    def __init__(self, config_path: Optional[Path] = None):
        """
        Initialize config manager.

        Args:
            config_path: Path to configuration file
        """
        self.console = Console()
        self.config_path = Path(config_path) if config_path else Path(self.DEFAULT_CONFIG_FILE)
        self._config: Optional[SedConfig] = None

    def load(self) -> SedConfig:
        """
        Load configuration from file or create default.

        Returns:
            Loaded or default configuration

        Raises:
            yaml.YAMLError: If the file exists but is not valid YAML
        """
        if self._config is not None:
            return self._config

        if self.config_path.exists():
            with open(self.config_path, 'r') as f:
                data = yaml.safe_load(f)
            self._config = SedConfig.from_dict(data)
            logger.info("Loaded config from %s", self.config_path)
        else:
            self._config = SedConfig()
            logger.debug("No config at %s, using defaults", self.config_path)

        return self._config

    def save(self, config: Optional[SedConfig] = None) -> None:
        """
        Save configuration to file.

        Args:
            config: Configuration to save (uses current if None)
        """
        config = config or self._config or SedConfig()
        with open(self.config_path, 'w') as f:
            yaml.safe_dump(config.to_dict(), f, default_flow_style=False)
        self._config = config
        logger.info("Saved config to %s", self.config_path)

    def update(self, **kwargs) -> SedConfig:
        """
        Update configuration parameters.

        Raises:
            KeyError: For a parameter SedConfig does not have
        """
        config = self.load()
        for key, value in kwargs.items():
            if not hasattr(config, key):
                raise KeyError(f"Unknown parameter '{key}'")
            setattr(config, key, value)
        return config

    def reset(self) -> SedConfig:
        self._config = SedConfig()
        return self._config

    def display(self, config: Optional[SedConfig] = None):
        """Display configuration in a formatted panel."""
        config = config or self.load()

        yaml_str = yaml.safe_dump(config.to_dict(), default_flow_style=False)
        syntax = Syntax(yaml_str, "yaml", theme="monokai", line_numbers=True)
        panel = Panel(
            syntax,
            title=f"[bold cyan]sedcluster configuration ({self.config_path})[/bold cyan]",
            border_style="cyan"
        )
        self.console.print(panel)


def load_config(config_path: Optional[Path] = None) -> SedConfig:
    """Load configuration from ``config_path`` (or the default file)."""
    return ConfigManager(config_path).load()


def create_default_config_file(path: Optional[Path] = None) -> Path:
    """
    Write a default configuration file.

    Returns:
        Path of the written file
    """
    path = Path(path) if path else Path(ConfigManager.DEFAULT_CONFIG_FILE)
    ConfigManager(path).save(SedConfig())
    return path
