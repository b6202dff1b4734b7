"""Проверка доступности управляющего сокета Docker."""

from __future__ import annotations

import logging
import socket
from typing import Optional

from container_scope.docker_api.config import EngineConfig

LOGGER = logging.getLogger(__name__)


def check_socket(socket_path: Optional[str], config: EngineConfig) -> bool:
    """Пробует одно подключение к сокету и возвращает True при успехе.

    Ошибка подключения не пробрасывается: она пишется в журнал, а результатом
    становится False.
    """

    path = config.resolve_socket(socket_path)
    try:
        with socket.socket(socket.AF_UNIX, socket.SOCK_STREAM) as conn:
            conn.connect(path)
    except OSError as exc:
        LOGGER.debug("Docker socket not available at %s: %s", path, exc)
        return False

    LOGGER.debug("Docker socket is available at %s", path)
    return True
