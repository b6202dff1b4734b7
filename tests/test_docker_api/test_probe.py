"""Тесты проверки доступности сокета."""

from __future__ import annotations

import logging
import socket
from pathlib import Path

import pytest

from container_scope.docker_api.config import EngineConfig
from container_scope.docker_api.probe import check_socket


@pytest.fixture
def listening_socket(tmp_path: Path):
    path = tmp_path / "docker.sock"
    server = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
    server.bind(str(path))
    server.listen(1)
    yield path
    server.close()


def test_available_socket(listening_socket: Path) -> None:
    assert check_socket(str(listening_socket), EngineConfig()) is True


def test_unix_scheme_is_accepted(listening_socket: Path) -> None:
    assert check_socket(f"unix://{listening_socket}", EngineConfig()) is True


def test_empty_path_uses_configured_default(listening_socket: Path) -> None:
    config = EngineConfig(default_socket=str(listening_socket))
    assert check_socket("", config) is True
    assert check_socket(None, config) is True


def test_missing_socket_returns_false(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger="container_scope.docker_api.probe")
    missing = tmp_path / "absent.sock"

    assert check_socket(str(missing), EngineConfig()) is False
    assert "not available" in caplog.text
    assert str(missing) in caplog.text
