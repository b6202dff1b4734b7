"""Выбор способа адресации контейнеров: по IP или по имени."""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from container_scope.docker_api.identity import SelfResolution

LOGGER = logging.getLogger(__name__)

BRIDGE_NETWORK = "bridge"


class AddressingMode(str, Enum):
    """Режим адресации, единый для всего построения инвентаря."""

    IP = "ip"
    NAME = "name"


def choose_addressing(resolution: "SelfResolution") -> AddressingMode:
    """Возвращает IP, если собственный контейнер подключён только к сети bridge.

    Без собственного контейнера узнать сети нельзя, поэтому остаётся IP.
    Контейнер без сетей тоже получает IP (условие выполняется на пустом наборе).
    """

    if not resolution.found:
        LOGGER.warning(
            "Self container not resolved (%s), falling back to IP addressing",
            resolution.reason,
        )
        return AddressingMode.IP
    if all(name == BRIDGE_NETWORK for name in resolution.network_names):
        return AddressingMode.IP
    return AddressingMode.NAME
