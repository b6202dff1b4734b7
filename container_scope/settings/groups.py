"""Группы настроек с валидацией."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Tuple

from container_scope.docker_api.config import DEFAULT_SOCKET
from container_scope.settings.exceptions import SettingsNotFoundError, SettingsValidationError
from container_scope.settings.validators import (
    CompositeValidator,
    EnumValidator,
    RangeValidator,
    RegexValidator,
    TypeValidator,
    Validator,
)

# пустая строка означает «использовать default_socket»
SOCKET_PATTERN = r"^((unix://)?/\S*)?$"
DEFAULT_SOCKET_PATTERN = r"^(unix://)?/\S+$"
ENV_VAR_PATTERN = r"^[A-Za-z_][A-Za-z0-9_]*$"


class SettingsGroup(ABC):
    """База для групп настроек: дефолты, валидаторы и текущие значения."""

    group_name: str = ""

    def __init__(self) -> None:
        self._defaults: Dict[str, Any] = {}
        self._validators: Dict[str, Validator] = {}
        self._values: Dict[str, Any] = {}
        self._initialize_defaults()
        self._setup_validators()
        self.reset_to_defaults()

    @abstractmethod
    def _initialize_defaults(self) -> None:
        """Задаёт значения по умолчанию."""

    @abstractmethod
    def _setup_validators(self) -> None:
        """Привязывает валидаторы к ключам."""

    def keys(self) -> Tuple[str, ...]:
        return tuple(self._defaults.keys())

    def get(self, key: str, default: Any = None) -> Any:
        if key not in self._defaults:
            raise SettingsNotFoundError(self.group_name, key)
        return self._values.get(key, default)

    def validate(self, key: str, value: Any) -> Tuple[bool, str]:
        validator = self._validators.get(key)
        if not validator:
            return True, ""
        return validator.validate(value)

    def set(self, key: str, value: Any) -> None:
        """Сохраняет значение, выбрасывая ошибку при невалидных данных."""

        if key not in self._defaults:
            raise SettingsNotFoundError(self.group_name, key)
        is_valid, error = self.validate(key, value)
        if not is_valid:
            raise SettingsValidationError(
                key=f"{self.group_name}.{key}",
                value=value,
                reason=error,
            )
        self._values[key] = value

    def from_dict(self, data: Dict[str, Any]) -> None:
        """Заполняет группу из словаря; неизвестные ключи игнорируются."""

        for key, value in data.items():
            if key in self._defaults:
                self.set(key, value)

    def to_dict(self) -> Dict[str, Any]:
        return dict(self._values)

    def reset_to_defaults(self) -> None:
        self._values = dict(self._defaults)


class DockerSettings(SettingsGroup):
    """Доступ к Docker Engine и политика проверки целей."""

    group_name = "docker"

    def _initialize_defaults(self) -> None:
        self._defaults = {
            "socket_path": "",
            "default_socket": DEFAULT_SOCKET,
            "timeout_sec": 5.0,
            "enforce_network_validation": False,
            "strict_transport": False,
            "identity_strategy": "hostname",
            "identity_env_var": "CONTAINER_ID",
        }

    def _setup_validators(self) -> None:
        self._validators = {
            "socket_path": RegexValidator(SOCKET_PATTERN),
            "default_socket": RegexValidator(DEFAULT_SOCKET_PATTERN),
            "timeout_sec": CompositeValidator(
                [TypeValidator((int, float)), RangeValidator(0.1, 120)]
            ),
            "enforce_network_validation": TypeValidator(bool),
            "strict_transport": TypeValidator(bool),
            "identity_strategy": EnumValidator(["hostname", "environment", "cgroup"]),
            "identity_env_var": RegexValidator(ENV_VAR_PATTERN),
        }


class LoggingSettings(SettingsGroup):
    """Настройки логирования."""

    group_name = "logging"

    def _initialize_defaults(self) -> None:
        self._defaults = {
            "enabled": True,
            "level": "INFO",
            "to_file": False,
            "max_file_size_mb": 10,
            "max_archived_files": 5,
        }

    def _setup_validators(self) -> None:
        self._validators = {
            "enabled": TypeValidator(bool),
            "level": EnumValidator(["DEBUG", "INFO", "WARNING", "ERROR"]),
            "to_file": TypeValidator(bool),
            "max_file_size_mb": CompositeValidator([TypeValidator(int), RangeValidator(1, 1000)]),
            "max_archived_files": CompositeValidator([TypeValidator(int), RangeValidator(1, 50)]),
        }
