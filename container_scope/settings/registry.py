"""Реестр настроек: config.json плюс переопределения из окружения."""

from __future__ import annotations

import copy
import json
import logging
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

from container_scope.docker_api.config import EngineConfig
from container_scope.settings.exceptions import (
    SettingsIOError,
    SettingsNotFoundError,
    SettingsValidationError,
)
from container_scope.settings.groups import DockerSettings, LoggingSettings, SettingsGroup
from container_scope.settings.schemas import DEFAULT_CONFIG


def _parse_bool(raw: str) -> bool:
    lowered = raw.strip().lower()
    if lowered in ("1", "true", "yes", "on"):
        return True
    if lowered in ("0", "false", "no", "off"):
        return False
    raise ValueError(f"not a boolean: {raw!r}")


def _parse_upper(raw: str) -> str:
    return raw.strip().upper()


def _parse_str(raw: str) -> str:
    return raw.strip()


# переменная окружения -> (группа, ключ, разбор строки)
ENVIRONMENT_OVERRIDES: Dict[str, Tuple[str, str, Callable[[str], Any]]] = {
    "CSCOPE_DOCKER_SOCKET": ("docker", "socket_path", _parse_str),
    "CSCOPE_TIMEOUT_SEC": ("docker", "timeout_sec", float),
    "CSCOPE_ENFORCE_NETWORK": ("docker", "enforce_network_validation", _parse_bool),
    "CSCOPE_STRICT_TRANSPORT": ("docker", "strict_transport", _parse_bool),
    "CSCOPE_IDENTITY_STRATEGY": ("docker", "identity_strategy", _parse_str),
    "CSCOPE_LOG_LEVEL": ("logging", "level", _parse_upper),
}


class SettingsRegistry:
    """Хранит группы настроек и загружает их из config.json."""

    def __init__(self, config_path: Optional[Path] = None) -> None:
        self._logger = logging.getLogger(__name__)
        self._file_path = config_path or Path.home() / ".container_scope" / "config.json"
        self._settings: Dict[str, SettingsGroup] = {
            "docker": DockerSettings(),
            "logging": LoggingSettings(),
        }

    @property
    def file_path(self) -> Path:
        return self._file_path

    def get_group(self, group: str) -> SettingsGroup:
        try:
            return self._settings[group]
        except KeyError:
            raise SettingsNotFoundError(group, None) from None

    def get_value(self, group: str, key: str, default: Any = None) -> Any:
        return self.get_group(group).get(key, default)

    def set_value(self, group: str, key: str, value: Any) -> None:
        self.get_group(group).set(key, value)

    def load_from_disk(self, path: Optional[Path] = None) -> None:
        """Загружает config.json; отсутствующий файл означает значения по умолчанию."""

        target = path or self._file_path
        if not target.exists():
            self._logger.debug("Config file %s not found, using defaults", target)
            self._apply(copy.deepcopy(DEFAULT_CONFIG))
            return
        try:
            content = json.loads(target.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise SettingsIOError(target, str(exc)) from exc
        if not isinstance(content, dict):
            raise SettingsIOError(target, "top-level JSON value must be an object")
        self._apply(self._merge_with_defaults(content))

    def apply_environment(self, environ: Mapping[str, str]) -> None:
        """Переопределяет значения переменными CSCOPE_*."""

        for variable, (group, key, parse) in ENVIRONMENT_OVERRIDES.items():
            raw = environ.get(variable)
            if raw is None or raw == "":
                continue
            try:
                value = parse(raw)
            except ValueError as exc:
                raise SettingsValidationError(f"{group}.{key}", raw, str(exc)) from exc
            self._logger.debug("Setting %s.%s overridden by %s", group, key, variable)
            self.set_value(group, key, value)

    def engine_config(self) -> EngineConfig:
        return EngineConfig.from_settings(self.get_group("docker"))

    # ----------------------------------------------------------------- helpers
    def _apply(self, config: Dict[str, Any]) -> None:
        for name, group in self._settings.items():
            group.reset_to_defaults()
            values = config.get(name)
            if isinstance(values, dict):
                group.from_dict(values)

    @staticmethod
    def _merge_with_defaults(incoming: Dict[str, Any]) -> Dict[str, Any]:
        base = copy.deepcopy(DEFAULT_CONFIG)
        for key, value in incoming.items():
            if isinstance(value, dict) and isinstance(base.get(key), dict):
                base[key].update(value)
            else:
                base[key] = value
        return base
