"""Utility helpers shared by the iron_ssg configuration loader."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from .models import ConfigError


def _optional_str(value: object | None, *, field: str) -> str | None:
    """Return ``value`` as a string, ``None`` when absent, or raise on bad types."""
    match value:
        case None:
            return None
        case str():
            return value
        case bool() | dict() | list():
            msg = f"Field '{field}' must be a string, got {type(value).__name__}."
            raise ConfigError(msg)
        case _:
            return str(value)


def _required_str(raw: typ.Mapping[str, typ.Any], key: str) -> str:
    """Return a mandatory top-level string field or raise ``ConfigError``."""
    if key not in raw or raw[key] is None:
        msg = f"Missing required field '{key}' in site configuration."
        raise ConfigError(msg)
    text = _optional_str(raw[key], field=key)
    return text or ""


def _as_bool(value: object | None, *, field: str, default: bool) -> bool:
    """Return a boolean flag, falling back to ``default`` when unset."""
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    msg = f"Field '{field}' must be a boolean, got {type(value).__name__}."
    raise ConfigError(msg)


def _as_str_list(value: object | None, *, field: str) -> list[str]:
    """Normalize a list of strings, rejecting scalars and nested structures."""
    if value is None:
        return []
    if not isinstance(value, list | tuple):
        msg = f"Field '{field}' must be a list of strings."
        raise ConfigError(msg)
    items: list[str] = []
    for item in value:
        if not isinstance(item, str):
            msg = f"Field '{field}' must only contain strings, got {item!r}."
            raise ConfigError(msg)
        items.append(item)
    return items


def _as_path(value: object | None, *, field: str, default: str) -> Path:
    """Return a ``Path`` for an optional string setting."""
    text = _optional_str(value, field=field)
    return Path(text or default)


def _first_present(raw: typ.Mapping[str, typ.Any], *keys: str) -> typ.Any:
    """Return the value of the first key present in ``raw`` (``None`` otherwise)."""
    for key in keys:
        if raw.get(key) is not None:
            return raw[key]
    return None


__all__ = [
    "_as_bool",
    "_as_path",
    "_as_str_list",
    "_first_present",
    "_optional_str",
    "_required_str",
]
