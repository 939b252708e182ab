"""Utility helpers shared by the rho configuration loader."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from .models import SiteConfigError


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _optional_path(root: Path, value: object | None) -> Path | None:
    """Resolve ``value`` against ``root``, or return None when it is empty."""
    text = _optional_str(value)
    if text is None:
        return None
    path = Path(text).expanduser()
    return path if path.is_absolute() else root / path


def _resolve_path(root: Path, value: object | None, default: Path) -> Path:
    """Resolve ``value`` against ``root``, falling back to ``default``."""
    resolved = _optional_path(root, value)
    return default if resolved is None else resolved


def _optional_workers(value: typ.Any) -> int | None:
    """Return a positive worker count, or None when unset."""
    match value:
        case None:
            return None
        case bool():
            msg = "'workers' must be a positive integer."
            raise SiteConfigError(msg)
        case int() if value > 0:
            return value
        case str() if value.strip().isdigit() and int(value) > 0:
            return int(value)
        case _:
            msg = f"'workers' must be a positive integer, got {value!r}."
            raise SiteConfigError(msg)


__all__ = ["_optional_path", "_optional_str", "_optional_workers", "_resolve_path"]
