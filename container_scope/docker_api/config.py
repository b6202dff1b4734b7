"""Явная конфигурация доступа к Docker Engine, передаваемая в каждую операцию."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from container_scope.utils.helpers import normalize_socket_path, strip_socket_scheme

DEFAULT_SOCKET = "/var/run/docker.sock"


@dataclass(slots=True, frozen=True)
class EngineConfig:
    """Параметры сессии Docker и политики проверки целей."""

    default_socket: str = DEFAULT_SOCKET
    timeout_sec: float = 5.0
    strict_transport: bool = False
    identity_strategy: str = "hostname"
    identity_env_var: str = "CONTAINER_ID"

    def resolve_socket(self, socket_path: Optional[str]) -> str:
        """Возвращает путь к сокету, подставляя default_socket для пустого значения."""

        path = strip_socket_scheme(socket_path or "")
        return path or strip_socket_scheme(self.default_socket)

    def base_url(self, socket_path: Optional[str]) -> str:
        return normalize_socket_path(self.resolve_socket(socket_path))

    @classmethod
    def from_settings(cls, group: Any) -> "EngineConfig":
        """Собирает конфигурацию из группы настроек `docker`."""

        return cls(
            default_socket=group.get("default_socket"),
            timeout_sec=float(group.get("timeout_sec")),
            strict_transport=bool(group.get("strict_transport")),
            identity_strategy=group.get("identity_strategy"),
            identity_env_var=group.get("identity_env_var"),
        )
