"""Построение инвентаря контейнеров, видимых из сети контроллера."""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Dict, Iterable, List, Optional

from container_scope.docker_api.addressing import AddressingMode, choose_addressing
from container_scope.docker_api.client import EngineSession
from container_scope.docker_api.config import EngineConfig
from container_scope.docker_api.exceptions import (
    InspectionError,
    MalformedContainerError,
    SelfResolutionError,
)
from container_scope.docker_api.identity import IdentityStrategy, strategy_from_config
from container_scope.docker_api.models import Container

LOGGER = logging.getLogger(__name__)

SessionFactory = Callable[[str, float], EngineSession]


def list_containers(
    socket_path: Optional[str],
    enforce_network_validation: bool,
    *,
    config: EngineConfig,
    identity: Optional[IdentityStrategy] = None,
    session_factory: SessionFactory = EngineSession,
) -> List[Container]:
    """Возвращает контейнеры в порядке, в котором их отдал Engine.

    При включённой проверке сети список фильтруется на стороне Engine по
    сетям собственного контейнера; если собственный контейнер не найден,
    операция завершается SelfResolutionError. Собственный контейнер в
    результат не попадает никогда.
    """

    path = config.resolve_socket(socket_path)
    strategy = identity or strategy_from_config(config)

    with session_factory(path, config.timeout_sec) as session:
        resolution = strategy.resolve(session)
        if enforce_network_validation and not resolution.found:
            raise SelfResolutionError(resolution.reason)

        filters: Dict[str, List[str]] = {}
        if resolution.found and enforce_network_validation:
            if not resolution.network_names:
                # пустой фильтр Engine трактует как отсутствие фильтра
                LOGGER.warning("Self container has no networks, nothing is reachable")
                return []
            filters["network"] = resolution.network_names
        mode = choose_addressing(resolution)
        LOGGER.debug(
            "Listing containers via %s (self=%s, filters=%s, addressing=%s)",
            path,
            resolution.container_id[:12] or "-",
            filters,
            mode.value,
        )

        summaries = session.list_containers(filters)
        return _build_inventory(session, summaries, resolution.container_id, mode)


def _build_inventory(
    session: EngineSession,
    summaries: Iterable[Dict[str, Any]],
    self_id: str,
    mode: AddressingMode,
) -> List[Container]:
    containers: List[Container] = []
    for summary in summaries:
        full_id = summary.get("Id") or ""
        if self_id and full_id == self_id:
            continue
        try:
            container = Container.from_summary(summary, "", mode)
        except MalformedContainerError as exc:
            LOGGER.error("Skipping container: %s", exc)
            continue
        # inspect только после проверки идентификатора: короткий id Engine трактует как префикс
        container.hostname = _fetch_hostname(session, full_id)
        containers.append(container)
    return containers


def _fetch_hostname(session: EngineSession, container_id: str) -> str:
    """Читает Config.Hostname; при ошибке inspect возвращает пустую строку."""

    if not container_id:
        return ""
    try:
        attrs = session.inspect_container(container_id)
    except InspectionError as exc:
        LOGGER.debug("Hostname lookup failed for %s: %s", container_id, exc)
        return ""
    return (attrs.get("Config") or {}).get("Hostname") or ""


def inventory_to_json(containers: Iterable[Container], *, indent: Optional[int] = None) -> str:
    """Сериализует инвентарь для передачи на сервер отчётов."""

    return json.dumps([container.to_dict() for container in containers], indent=indent)
