"""Фикстуры тестов docker_api."""

from __future__ import annotations

from typing import Callable

import pytest
from engine_fakes import FakeEngine

from container_scope.docker_api.client import EngineSession
from container_scope.docker_api.config import EngineConfig


@pytest.fixture
def engine() -> FakeEngine:
    return FakeEngine()


@pytest.fixture
def config() -> EngineConfig:
    return EngineConfig(default_socket="/tmp/fake-docker.sock")


@pytest.fixture
def session_factory(engine: FakeEngine) -> Callable[[str, float], EngineSession]:
    def factory(socket_path: str, timeout_sec: float) -> EngineSession:
        return EngineSession(socket_path, timeout_sec, raw_client=engine)

    return factory
