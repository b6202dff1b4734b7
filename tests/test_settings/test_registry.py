"""Тесты реестра настроек."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from container_scope.settings.exceptions import (
    SettingsIOError,
    SettingsNotFoundError,
    SettingsValidationError,
)
from container_scope.settings.registry import SettingsRegistry


def test_missing_file_gives_defaults(tmp_path: Path) -> None:
    registry = SettingsRegistry(tmp_path / "config.json")
    registry.load_from_disk()
    assert registry.get_value("docker", "identity_strategy") == "hostname"
    assert registry.get_value("logging", "level") == "INFO"


def test_load_partial_config(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text(
        json.dumps({"docker": {"socket_path": "/run/docker.sock", "timeout_sec": 2}}),
        encoding="utf-8",
    )
    registry = SettingsRegistry(path)
    registry.load_from_disk()

    config = registry.engine_config()
    assert registry.get_value("docker", "socket_path") == "/run/docker.sock"
    assert config.timeout_sec == 2.0
    assert config.default_socket == "/var/run/docker.sock"


def test_invalid_json_raises_io_error(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(SettingsIOError):
        SettingsRegistry(path).load_from_disk()


def test_invalid_value_in_file_raises(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"docker": {"timeout_sec": -1}}), encoding="utf-8")
    with pytest.raises(SettingsValidationError):
        SettingsRegistry(path).load_from_disk()


def test_environment_overrides(tmp_path: Path) -> None:
    registry = SettingsRegistry(tmp_path / "config.json")
    registry.load_from_disk()
    registry.apply_environment(
        {
            "CSCOPE_DOCKER_SOCKET": "/custom/docker.sock",
            "CSCOPE_TIMEOUT_SEC": "7.5",
            "CSCOPE_ENFORCE_NETWORK": "yes",
            "CSCOPE_STRICT_TRANSPORT": "0",
            "CSCOPE_IDENTITY_STRATEGY": "environment",
            "CSCOPE_LOG_LEVEL": "debug",
            "UNRELATED": "x",
        }
    )
    assert registry.get_value("docker", "socket_path") == "/custom/docker.sock"
    assert registry.get_value("docker", "timeout_sec") == 7.5
    assert registry.get_value("docker", "enforce_network_validation") is True
    assert registry.get_value("docker", "strict_transport") is False
    assert registry.engine_config().identity_strategy == "environment"
    assert registry.get_value("logging", "level") == "DEBUG"


def test_environment_bad_boolean(tmp_path: Path) -> None:
    registry = SettingsRegistry(tmp_path / "config.json")
    with pytest.raises(SettingsValidationError):
        registry.apply_environment({"CSCOPE_ENFORCE_NETWORK": "maybe"})


def test_unknown_group(tmp_path: Path) -> None:
    with pytest.raises(SettingsNotFoundError):
        SettingsRegistry(tmp_path / "config.json").get_group("theme")
