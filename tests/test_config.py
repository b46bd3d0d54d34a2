"""Tests for configuration loading."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from cyber_zen.core.config import ensure_install_dir, find_config_file, load_config
from cyber_zen.core.errors import ConfigError
from cyber_zen.models.config import AppConfig


def test_defaults_when_no_file(tmp_path, monkeypatch):
    """Missing config file is not an error and defaults apply."""
    monkeypatch.setenv("HOME", str(tmp_path))

    config = load_config(search_dirs=[tmp_path / "nowhere"])

    assert config.install_dir == tmp_path / ".cyber-zen"
    assert config.platform
    assert config.architecture


def test_first_search_dir_wins(tmp_path):
    first = tmp_path / "first"
    second = tmp_path / "second"
    first.mkdir()
    second.mkdir()
    (first / "config.yaml").write_text("platform: from-first\n")
    (second / "config.yaml").write_text("platform: from-second\n")

    assert find_config_file([first, second]) == first / "config.yaml"
    assert load_config(search_dirs=[first, second]).platform == "from-first"


def test_file_overrides_only_given_keys(tmp_path):
    (tmp_path / "config.yaml").write_text(
        "install_dir: ~/custom-install\narchitecture: riscv64\n"
    )

    config = load_config(search_dirs=[tmp_path])

    assert config.architecture == "riscv64"
    assert config.install_dir == Path.home() / "custom-install"
    assert config.platform  # default kept


def test_malformed_yaml_is_an_error(tmp_path):
    (tmp_path / "config.yaml").write_text("install_dir: [unclosed\n")

    with pytest.raises(ConfigError, match="Failed to read"):
        load_config(search_dirs=[tmp_path])


def test_non_mapping_yaml_is_an_error(tmp_path):
    (tmp_path / "config.yaml").write_text("- just\n- a list\n")

    with pytest.raises(ConfigError, match="must contain a mapping"):
        load_config(search_dirs=[tmp_path])


def test_config_is_read_only(tmp_path):
    config = AppConfig(install_dir=tmp_path, platform="linux", architecture="x86_64")

    with pytest.raises(ValidationError):
        config.platform = "darwin"


def test_ensure_install_dir_creates_directory(tmp_path):
    config = AppConfig(
        install_dir=tmp_path / "test-install", platform="linux", architecture="x86_64"
    )

    assert ensure_install_dir(config) == tmp_path / "test-install"
    assert (tmp_path / "test-install").is_dir()


def test_ensure_install_dir_rejects_empty():
    config = AppConfig(install_dir="", platform="linux", architecture="x86_64")

    with pytest.raises(ConfigError, match="not configured"):
        ensure_install_dir(config)
