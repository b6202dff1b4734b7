"""Тесты вспомогательных функций модуля main."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, List

import pytest

from container_scope import main as main_module
from container_scope.docker_api.exceptions import SelfResolutionError, TargetNotInNetworkError
from container_scope.docker_api.models import Container
from container_scope.main import initialize_settings, parse_target, setup_logging_from_settings


@pytest.fixture(autouse=True)
def restore_logging():
    yield
    logging.disable(logging.NOTSET)


def test_initialize_settings_applies_environment(tmp_path: Path) -> None:
    (tmp_path / "config.json").write_text(
        json.dumps({"docker": {"socket_path": "/from/file.sock"}}), encoding="utf-8"
    )
    settings = initialize_settings(tmp_path, environ={"CSCOPE_TIMEOUT_SEC": "3"})
    assert settings.get_value("docker", "socket_path") == "/from/file.sock"
    assert settings.engine_config().timeout_sec == 3.0


def test_setup_logging_to_file(tmp_path: Path) -> None:
    settings = initialize_settings(tmp_path, environ={})
    settings.set_value("logging", "to_file", True)
    setup_logging_from_settings(tmp_path, settings)
    logging.getLogger("test").info("log entry")
    for handler in logging.getLogger().handlers:
        handler.flush()
    assert "log entry" in (tmp_path / "logs" / "container_scope.log").read_text(encoding="utf-8")


def test_setup_logging_disabled(tmp_path: Path) -> None:
    settings = initialize_settings(tmp_path, environ={})
    settings.set_value("logging", "enabled", False)
    setup_logging_from_settings(tmp_path, settings)
    assert logging.root.manager.disable >= logging.CRITICAL


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("web:8080", ("web", 8080)),
        ("172.17.0.5:5432", ("172.17.0.5", 5432)),
        ("[fd00::5]:443", ("fd00::5", 443)),
    ],
)
def test_parse_target(raw: str, expected) -> None:
    assert parse_target(raw) == expected


@pytest.mark.parametrize("raw", ["web", ":80", "web:http", "web:"])
def test_parse_target_rejects_garbage(raw: str) -> None:
    with pytest.raises(ValueError):
        parse_target(raw)


@pytest.fixture
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.setenv("CSCOPE_HOME", str(tmp_path))
    monkeypatch.setattr(main_module, "check_socket", lambda path, config: True)
    return tmp_path


def test_main_prints_inventory(isolated_home: Path, monkeypatch, capsys) -> None:
    calls: List[Any] = []

    def fake_list(socket_path, enforce, *, config):
        calls.append((socket_path, enforce, config.timeout_sec))
        return [Container(id="a1b2c3d4e5f6", name="web")]

    monkeypatch.setattr(main_module, "list_containers", fake_list)

    assert main_module.main([]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload[0]["name"] == "web"
    assert calls == [("", False, 5.0)]


def test_main_validates_target(isolated_home: Path, monkeypatch) -> None:
    seen: List[Any] = []

    def fake_validate(socket_path, address, port, *, config):
        seen.append((address, port))
        return True

    monkeypatch.setattr(main_module, "is_within_host_network", fake_validate)

    assert main_module.main(["web:8080"]) == 0
    assert seen == [("web", 8080)]


def test_main_reports_rejected_target(isolated_home: Path, monkeypatch) -> None:
    def fake_validate(socket_path, address, port, *, config):
        raise TargetNotInNetworkError(address, port)

    monkeypatch.setattr(main_module, "is_within_host_network", fake_validate)

    assert main_module.main(["10.0.0.9:9999"]) == 1


def test_main_reports_engine_failure(isolated_home: Path, monkeypatch) -> None:
    def fake_list(socket_path, enforce, *, config):
        raise SelfResolutionError("failed to find host container")

    monkeypatch.setattr(main_module, "list_containers", fake_list)

    assert main_module.main([]) == 1


def test_main_rejects_bad_config(isolated_home: Path) -> None:
    config_dir = isolated_home / ".container_scope"
    config_dir.mkdir()
    (config_dir / "config.json").write_text("[]", encoding="utf-8")

    assert main_module.main([]) == 2


def test_main_rejects_string_log_size(isolated_home: Path) -> None:
    config_dir = isolated_home / ".container_scope"
    config_dir.mkdir()
    (config_dir / "config.json").write_text(
        '{"logging": {"max_file_size_mb": "10"}}', encoding="utf-8"
    )

    assert main_module.main([]) == 2
