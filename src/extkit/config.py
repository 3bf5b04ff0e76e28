"""
Configuration -- ``$EXTKIT_HOME/config.yaml``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field

from .errors import ConfigError
from .ledger.models import LedgerConfig

logger = logging.getLogger("extkit.config")

CONFIG_FILE = "config.yaml"


class ExtkitConfig(BaseModel):
    """Complete configuration for one owner."""

    ledger: LedgerConfig = Field(default_factory=LedgerConfig)
    wallet_address: Optional[str] = None
    signer_key: Optional[str] = None
    audit: bool = True


def load_config(home: Path, strict: bool = False) -> ExtkitConfig:
    """Load configuration from ``home``.

    Args:
        home: extkit home directory.
        strict: Raise instead of falling back to defaults on a broken file.

    Raises:
        ConfigError: If ``strict`` and the file cannot be parsed.
    """
    config_file = home.expanduser() / CONFIG_FILE
    if config_file.exists():
        try:
            data = yaml.safe_load(config_file.read_text(encoding="utf-8")) or {}
            return ExtkitConfig(**data)
        except (yaml.YAMLError, ValueError, TypeError) as exc:
            if strict:
                raise ConfigError(f"Failed to load {config_file}: {exc}") from exc
            logger.warning("Failed to load config: %s", exc)
    return ExtkitConfig()


def save_config(home: Path, config: ExtkitConfig) -> Path:
    """Persist configuration to ``home``, creating it if needed."""
    home = home.expanduser()
    home.mkdir(parents=True, exist_ok=True)
    config_file = home / CONFIG_FILE
    data = config.model_dump(mode="json")
    config_file.write_text(yaml.dump(data, default_flow_style=False), encoding="utf-8")
    return config_file
