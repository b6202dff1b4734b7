"""Схема config.json по умолчанию."""

from __future__ import annotations

from typing import Any, Dict

from container_scope.docker_api.config import DEFAULT_SOCKET

# DEFAULT_CONFIG служит шаблоном для начального config.json
DEFAULT_CONFIG: Dict[str, Any] = {
    "version": "1.0.0",
    "docker": {
        "socket_path": "",
        "default_socket": DEFAULT_SOCKET,
        "timeout_sec": 5.0,
        "enforce_network_validation": False,
        "strict_transport": False,
        "identity_strategy": "hostname",
        "identity_env_var": "CONTAINER_ID",
    },
    "logging": {
        "enabled": True,
        "level": "INFO",
        "to_file": False,
        "max_file_size_mb": 10,
        "max_archived_files": 5,
    },
}
