"""Environment variable helpers used by the settings modules."""

from __future__ import annotations

import os

from django.core.exceptions import ImproperlyConfigured  # type: ignore


def get_env(var_name: str, default=None, required: bool = False):
    value = os.environ.get(var_name, default)
    if required and value in (None, ""):
        raise ImproperlyConfigured(f"Missing required environment variable: {var_name}")
    return value


def get_bool_env(var_name: str, default: bool = False) -> bool:
    value = os.environ.get(var_name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def get_list_env(var_name: str, default: str = "") -> list[str]:
    raw = os.environ.get(var_name, default)
    return [item.strip() for item in raw.split(",") if item.strip()]
