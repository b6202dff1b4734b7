"""Доступ к Docker Engine: инвентарь контейнеров и проверка целей."""
