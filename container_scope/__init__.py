"""Инвентаризация контейнеров и проверка принадлежности цели сети контроллера."""

__version__ = "0.1.0"
