"""Tests for YAML configuration loading and saving."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from extkit.config import ExtkitConfig, load_config, save_config
from extkit.errors import ConfigError
from extkit.ledger.models import LedgerBackendType, LedgerConfig


def test_defaults_when_missing(tmp_home: Path):
    config = load_config(tmp_home)
    assert config.ledger.backend == LedgerBackendType.FILE
    assert config.wallet_address is None
    assert config.audit is True


def test_save_and_load(tmp_home: Path):
    config = ExtkitConfig(
        ledger=LedgerConfig(backend=LedgerBackendType.MEMORY, network_id=5),
        wallet_address="0xabc",
        signer_key="ABCD1234",
    )
    save_config(tmp_home, config)

    data = yaml.safe_load((tmp_home / "config.yaml").read_text())
    assert data["ledger"]["backend"] == "memory"
    assert load_config(tmp_home) == config


def test_broken_file_falls_back(tmp_home: Path):
    (tmp_home / "config.yaml").write_text("ledger: [unclosed\n")
    assert load_config(tmp_home) == ExtkitConfig()


def test_broken_file_strict(tmp_home: Path):
    (tmp_home / "config.yaml").write_text("ledger:\n  backend: carrier-pigeon\n")
    with pytest.raises(ConfigError):
        load_config(tmp_home, strict=True)


def test_save_creates_home(tmp_path: Path):
    path = save_config(tmp_path / "new-home", ExtkitConfig())
    assert path.exists()
