"""Проверка, что адрес:порт принадлежит контейнеру из сети контроллера."""

from __future__ import annotations

import ipaddress
import logging
from typing import Iterable, Optional

from container_scope.docker_api.client import EngineSession
from container_scope.docker_api.config import EngineConfig
from container_scope.docker_api.exceptions import TargetNotInNetworkError
from container_scope.docker_api.identity import IdentityStrategy
from container_scope.docker_api.inventory import SessionFactory, list_containers
from container_scope.docker_api.models import Container

LOGGER = logging.getLogger(__name__)

DEFAULT_PROTOCOL = "tcp"


def is_within_host_network(
    socket_path: Optional[str],
    target_address: str,
    target_port: int,
    *,
    config: EngineConfig,
    protocol: Optional[str] = None,
    identity: Optional[IdentityStrategy] = None,
    session_factory: SessionFactory = EngineSession,
) -> bool:
    """Возвращает True, если цель достижима в сети контроллера.

    Проверка сети включена всегда, независимо от настроек вызывающего.
    Если совпадения нет, бросает TargetNotInNetworkError с адресом:портом.
    """

    containers = list_containers(
        socket_path,
        True,
        config=config,
        identity=identity,
        session_factory=session_factory,
    )
    match = find_target(
        containers,
        target_address,
        target_port,
        protocol=protocol,
        strict_transport=config.strict_transport,
    )
    if match is None:
        raise TargetNotInNetworkError(target_address, target_port)
    LOGGER.debug("Target %s:%s matched container %s", target_address, target_port, match.id)
    return True


def find_target(
    containers: Iterable[Container],
    target_address: str,
    target_port: int,
    *,
    protocol: Optional[str] = None,
    strict_transport: bool = False,
) -> Optional[Container]:
    """Ищет первый контейнер, совпадающий по адресу и порту.

    IP-адрес сравнивается с ipAddress сетей, остальное с именем контейнера
    (с учётом регистра). Порт совпадает с privatePort или publicPort;
    протокол учитывается только при strict_transport.
    """

    is_ip = _is_ip_literal(target_address)
    wanted_type = (protocol or DEFAULT_PROTOCOL).lower() if strict_transport else None

    for container in containers:
        for network in container.networks.values():
            if is_ip:
                address_matches = bool(network.ip_address) and network.ip_address == target_address
            else:
                address_matches = container.name == target_address
            if address_matches and _has_port(container, target_port, wanted_type):
                return container
    return None


def _has_port(container: Container, port: int, wanted_type: Optional[str]) -> bool:
    for record in container.ports:
        if wanted_type is not None and record.type.lower() != wanted_type:
            continue
        if record.matches(port):
            return True
    return False


def _is_ip_literal(value: str) -> bool:
    try:
        ipaddress.ip_address(value)
    except ValueError:
        return False
    return True
