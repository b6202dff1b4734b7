"""Определение собственного контейнера процесса.

Стратегия выдаёт идентификатор-кандидат, после чего Engine подтверждает его
через docker inspect. Способ по умолчанию (имя хоста равно идентификатору
контейнера) ломается в режиме сети host или при заданном hostname, поэтому
стратегии взаимозаменяемы.
"""

from __future__ import annotations

import logging
import os
import re
import socket
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional

from container_scope.docker_api.client import EngineSession
from container_scope.docker_api.config import EngineConfig
from container_scope.docker_api.exceptions import ContainerNotFoundError

LOGGER = logging.getLogger(__name__)

CONTAINER_ID_PATTERN = re.compile(r"(?:/containers/|/docker/|docker-)([0-9a-f]{64})(?![0-9a-f])")
CGROUP_PATHS = (Path("/proc/self/cgroup"), Path("/proc/self/mountinfo"))


@dataclass(slots=True, frozen=True)
class SelfResolution:
    """Результат поиска собственного контейнера.

    `container` равен None только когда контейнер не найден; найденный
    контейнер без сетей даёт пустой `network_names`.
    """

    container: Optional[Dict[str, Any]] = None
    reason: str = ""

    @classmethod
    def missing(cls, reason: str) -> "SelfResolution":
        return cls(container=None, reason=reason)

    @property
    def found(self) -> bool:
        return self.container is not None

    @property
    def container_id(self) -> str:
        if self.container is None:
            return ""
        return self.container.get("Id") or ""

    @property
    def network_names(self) -> List[str]:
        if self.container is None:
            return []
        networks = (self.container.get("NetworkSettings") or {}).get("Networks") or {}
        return list(networks.keys())


class IdentityStrategy(ABC):
    """Источник идентификатора собственного контейнера."""

    name: str = ""

    @abstractmethod
    def candidate_id(self) -> Optional[str]:
        """Возвращает идентификатор для docker inspect или None."""

    def resolve(self, session: EngineSession) -> SelfResolution:
        """Подтверждает кандидата через Engine.

        Отсутствие кандидата и ответ «нет такого контейнера» дают
        SelfResolution.missing; прочие ошибки inspect пробрасываются.
        """

        candidate = self.candidate_id()
        if not candidate:
            return SelfResolution.missing(f"{self.name} strategy produced no identifier")
        try:
            container = session.inspect_container(candidate)
        except ContainerNotFoundError:
            LOGGER.debug("No container matches %s identifier %s", self.name, candidate)
            return SelfResolution.missing(f"failed to find host container '{candidate}'")
        LOGGER.debug("Resolved self container %s via %s", container.get("Id", candidate), self.name)
        return SelfResolution(container=container, reason=self.name)


class HostnameIdentity(IdentityStrategy):
    """Имя хоста процесса как идентификатор контейнера."""

    name = "hostname"

    def candidate_id(self) -> Optional[str]:
        try:
            return socket.gethostname() or None
        except OSError as exc:
            LOGGER.debug("Failed to find hostname for container: %s", exc)
            return None


class EnvironmentIdentity(IdentityStrategy):
    """Идентификатор из переменной окружения."""

    name = "environment"

    def __init__(self, variable: str, environ: Optional[Mapping[str, str]] = None) -> None:
        self.variable = variable
        self._environ = environ if environ is not None else os.environ

    def candidate_id(self) -> Optional[str]:
        return self._environ.get(self.variable, "").strip() or None


class CgroupIdentity(IdentityStrategy):
    """Идентификатор из /proc/self/cgroup или /proc/self/mountinfo."""

    name = "cgroup"

    def __init__(self, paths: Iterable[Path] = CGROUP_PATHS) -> None:
        self.paths = tuple(paths)

    def candidate_id(self) -> Optional[str]:
        for path in self.paths:
            try:
                text = path.read_text(encoding="utf-8", errors="ignore")
            except OSError:
                continue
            match = CONTAINER_ID_PATTERN.search(text)
            if match:
                return match.group(1)
        return None


def strategy_from_config(config: EngineConfig) -> IdentityStrategy:
    """Создаёт стратегию по имени из конфигурации."""

    if config.identity_strategy == HostnameIdentity.name:
        return HostnameIdentity()
    if config.identity_strategy == EnvironmentIdentity.name:
        return EnvironmentIdentity(config.identity_env_var)
    if config.identity_strategy == CgroupIdentity.name:
        return CgroupIdentity()
    raise ValueError(f"Unknown identity strategy: {config.identity_strategy}")
