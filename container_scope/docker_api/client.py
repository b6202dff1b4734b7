"""Короткоживущая сессия docker-py с общим дедлайном на всю операцию."""

from __future__ import annotations

import logging
import time
from typing import Any, Dict, List, Optional

import docker
from docker.errors import DockerException, NotFound
from requests.exceptions import RequestException

from container_scope.docker_api.exceptions import (
    ClientCreationError,
    ContainerNotFoundError,
    DeadlineExceededError,
    InspectionError,
    ListingError,
)
from container_scope.utils.helpers import normalize_socket_path

LOGGER = logging.getLogger(__name__)

_ENGINE_ERRORS = (DockerException, RequestException)


class Deadline:
    """Монотонный дедлайн, отсчитываемый с момента создания."""

    def __init__(self, timeout_sec: float) -> None:
        self.timeout_sec = timeout_sec
        self._expires_at = time.monotonic() + timeout_sec

    @property
    def expired(self) -> bool:
        return time.monotonic() >= self._expires_at

    def remaining(self) -> float:
        """Возвращает остаток времени в секундах либо бросает DeadlineExceededError."""

        left = self._expires_at - time.monotonic()
        if left <= 0:
            raise DeadlineExceededError(self.timeout_sec)
        return left


class EngineSession:
    """Управляет одним docker client на время одной логической операции.

    Дедлайн создаётся вместе с сессией и ограничивает всё: подключение,
    согласование версии API и каждый запрос внутри сессии.
    Таймаут requests ограничивает отдельные операции сокета, поэтому
    ответ, полученный после истечения дедлайна, тоже отвергается. Клиент
    освобождается при выходе из `with` независимо от результата.
    """

    def __init__(
        self,
        socket_path: str,
        timeout_sec: float = 5.0,
        raw_client: Any | None = None,
    ) -> None:
        self.socket_path = socket_path
        self.deadline = Deadline(timeout_sec)
        self._client = raw_client or self._create_client()  # создаём docker client

    def _create_client(self) -> Any:
        base_url = normalize_socket_path(self.socket_path)
        try:
            return docker.DockerClient(
                base_url=base_url,
                version="auto",
                timeout=self.deadline.remaining(),
            )
        except DeadlineExceededError as exc:
            raise ClientCreationError(self.socket_path, str(exc)) from exc
        except _ENGINE_ERRORS as exc:
            LOGGER.error("Docker client init error via %s: %s", base_url, exc)
            raise ClientCreationError(self.socket_path, str(exc)) from exc

    def __enter__(self) -> "EngineSession":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def get_raw_client(self) -> Any:
        """Возвращает внутренний docker client."""

        return self._client

    def close(self) -> None:
        try:
            self._client.close()
        except _ENGINE_ERRORS as exc:  # pragma: no cover - зависит от окружения
            LOGGER.debug("Docker client close failed for %s: %s", self.socket_path, exc)

    # ---------------------------------------------------------------- requests
    def list_containers(self, filters: Optional[Dict[str, List[str]]] = None) -> List[Dict[str, Any]]:
        """Возвращает краткие записи `docker ps -a` в порядке, заданном Engine."""

        try:
            self._apply_deadline()
            containers = self._client.containers.list(all=True, filters=filters or {}, sparse=True)
        except _ENGINE_ERRORS as exc:
            self._raise_if_expired(exc)
            raise ListingError(self.socket_path, str(exc)) from exc
        self._check_deadline()
        return [container.attrs for container in containers]

    def inspect_container(self, identifier: str) -> Dict[str, Any]:
        """Возвращает полный результат docker inspect."""

        try:
            self._apply_deadline()
            container = self._client.containers.get(identifier)
        except NotFound as exc:
            raise ContainerNotFoundError(identifier) from exc
        except _ENGINE_ERRORS as exc:
            self._raise_if_expired(exc)
            raise InspectionError(identifier, str(exc)) from exc
        self._check_deadline()
        return getattr(container, "attrs", {}) or {}

    # ----------------------------------------------------------------- helpers
    def _apply_deadline(self) -> None:
        # requests внутри docker-py берут таймаут из APIClient.timeout
        self._client.api.timeout = self.deadline.remaining()

    def _check_deadline(self) -> None:
        # таймаут docker-py действует на каждую операцию сокета, а не на весь запрос
        if self.deadline.expired:
            raise DeadlineExceededError(self.deadline.timeout_sec)

    def _raise_if_expired(self, exc: BaseException) -> None:
        if self.deadline.expired:
            raise DeadlineExceededError(self.deadline.timeout_sec) from exc
