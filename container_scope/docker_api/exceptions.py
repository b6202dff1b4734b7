"""Исключения подсистемы работы с Docker Engine."""

from __future__ import annotations

from typing import Any, Dict, Optional


class DockerAPIError(Exception):
    """Базовая ошибка обращения к Docker Engine с поддержкой контекста."""

    def __init__(self, message: str, *, context: Optional[Dict[str, Any]] = None) -> None:
        self.message = message
        self.context = context or {}
        super().__init__(message)


class ClientCreationError(DockerAPIError):
    """Не удалось создать клиент для сокета Docker."""

    def __init__(self, socket_path: str, reason: str) -> None:
        self.socket_path = socket_path
        super().__init__(
            f"Failed to create Docker client for '{socket_path}': {reason}",
            context={"socket_path": socket_path, "reason": reason},
        )


class DeadlineExceededError(DockerAPIError):
    """Общий дедлайн сессии исчерпан."""

    def __init__(self, timeout_sec: float) -> None:
        self.timeout_sec = timeout_sec
        super().__init__(
            f"Docker session deadline of {timeout_sec:g}s exceeded",
            context={"timeout_sec": timeout_sec},
        )


class SelfResolutionError(DockerAPIError):
    """Собственный контейнер не найден, а проверка сети обязательна."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(
            f"Network validation enforced, cannot validate due to: {reason}",
            context={"reason": reason},
        )


class ListingError(DockerAPIError):
    """Сбой запроса списка контейнеров."""

    def __init__(self, socket_path: str, reason: str) -> None:
        self.socket_path = socket_path
        super().__init__(
            f"Failed to list containers via '{socket_path}': {reason}",
            context={"socket_path": socket_path, "reason": reason},
        )


class InspectionError(DockerAPIError):
    """Сбой docker inspect для конкретного контейнера."""

    def __init__(self, identifier: str, reason: str) -> None:
        self.identifier = identifier
        super().__init__(
            f"Failed to inspect container '{identifier}': {reason}",
            context={"identifier": identifier, "reason": reason},
        )


class ContainerNotFoundError(InspectionError):
    """Engine сообщил, что контейнера с таким идентификатором нет."""

    def __init__(self, identifier: str) -> None:
        super().__init__(identifier, "no such container")


class MalformedContainerError(DockerAPIError):
    """Идентификатор контейнера короче допустимого."""

    def __init__(self, raw_id: Any) -> None:
        self.raw_id = raw_id
        super().__init__(
            f"Malformed container identifier: {raw_id!r}",
            context={"raw_id": raw_id},
        )


class TargetNotInNetworkError(DockerAPIError):
    """Цель не найдена среди контейнеров сети контроллера."""

    def __init__(self, address: str, port: int) -> None:
        self.target = f"{address}:{port}"
        super().__init__(
            f"target address not within host container network: {self.target}",
            context={"address": address, "port": port},
        )
