"""Точка входа: печать инвентаря контейнеров или проверка одной цели."""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from container_scope import __version__
from container_scope.docker_api.exceptions import DockerAPIError
from container_scope.docker_api.inventory import inventory_to_json, list_containers
from container_scope.docker_api.membership import is_within_host_network
from container_scope.docker_api.probe import check_socket
from container_scope.settings.exceptions import SettingsError
from container_scope.settings.registry import SettingsRegistry
from container_scope.utils.logger import configure_logging

LOGGER = logging.getLogger(__name__)


def initialize_settings(base_dir: Path, environ: Optional[dict] = None) -> SettingsRegistry:
    """Загружает config.json и применяет переменные окружения CSCOPE_*."""

    registry = SettingsRegistry(config_path=base_dir / "config.json")
    registry.load_from_disk()
    registry.apply_environment(os.environ if environ is None else environ)
    return registry


def setup_logging_from_settings(base_dir: Path, settings: SettingsRegistry) -> None:
    """Настраивает логирование в соответствии с группой `logging`."""

    logging_settings = settings.get_group("logging")
    if not logging_settings.get("enabled"):
        logging.disable(logging.CRITICAL)
        return

    logging.disable(logging.NOTSET)
    configure_logging(
        log_dir=base_dir / "logs" if logging_settings.get("to_file") else None,
        level_name=logging_settings.get("level", "INFO"),
        max_bytes=logging_settings.get("max_file_size_mb", 10) * 1024 * 1024,
        backup_count=logging_settings.get("max_archived_files", 5),
    )


def parse_target(raw: str) -> Tuple[str, int]:
    """Разбирает `адрес:порт`; IPv6 допускается в квадратных скобках."""

    address, separator, port = raw.rpartition(":")
    if not separator or not address or not port.isdigit():
        raise ValueError(f"Expected address:port, got {raw!r}")
    if address.startswith("[") and address.endswith("]"):
        address = address[1:-1]
    return address, int(port)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Печатает инвентарь в stdout либо проверяет цель, переданную аргументом."""

    args: List[str] = list(sys.argv[1:] if argv is None else argv)
    home_dir = Path(os.environ.get("CSCOPE_HOME", Path.home()))
    base_dir = home_dir / ".container_scope"

    try:
        settings = initialize_settings(base_dir)
    except SettingsError as exc:
        configure_logging()
        LOGGER.error("Cannot load settings: %s", exc)
        return 2
    setup_logging_from_settings(base_dir, settings)

    config = settings.engine_config()
    socket_path = settings.get_value("docker", "socket_path")
    LOGGER.info("container-scope %s, socket %s", __version__, config.resolve_socket(socket_path))
    if not check_socket(socket_path, config):
        LOGGER.warning("Docker socket %s is not reachable", config.resolve_socket(socket_path))

    try:
        if args:
            address, port = parse_target(args[0])
            is_within_host_network(socket_path, address, port, config=config)
            LOGGER.info("Target %s:%s is within the host container network", address, port)
            return 0
        containers = list_containers(
            socket_path,
            settings.get_value("docker", "enforce_network_validation"),
            config=config,
        )
    except ValueError as exc:
        LOGGER.error("%s", exc)
        return 2
    except DockerAPIError as exc:
        LOGGER.error("%s", exc)
        return 1

    sys.stdout.write(inventory_to_json(containers, indent=2) + "\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
