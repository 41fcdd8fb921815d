"""Environment and filename helpers shared by config, service and CLI."""
from __future__ import annotations

import os
from typing import Optional

_TRUTHY = frozenset({"1", "true", "yes", "on"})


def resolve_path(value: str, base_dir: str) -> str:
    """Anchor a relative path at base_dir; absolute paths pass through."""
    return value if os.path.isabs(value) else os.path.join(base_dir, value)


def env_text(name: str, default: str) -> str:
    """Return the stripped variable, or ``default`` when it is unset or blank."""
    return (os.getenv(name) or "").strip() or default


def parse_int_env(
    name: str,
    default: int,
    *,
    min_value: Optional[int] = None,
    max_value: Optional[int] = None,
) -> int:
    """Read an integer variable, clamped to the given bounds.

    Unparseable values fall back to ``default`` before clamping.
    """
    try:
        value = int(env_text(name, str(default)))
    except ValueError:
        value = default
    if min_value is not None and value < min_value:
        return min_value
    if max_value is not None and value > max_value:
        return max_value
    return value


def parse_flag_env(name: str, default: str = "0") -> bool:
    """Parse a boolean environment flag ("1", "true", "yes", "on")."""
    return env_text(name, default).lower() in _TRUTHY


def file_extension(filename: str | None) -> str:
    """Return the lowercased text after the last dot of a filename.

    A name without a dot yields the whole name, mirroring how upload
    filenames are split when picking an import format.
    """
    name = str(filename or "unknown")
    return name.rsplit(".", 1)[-1].strip().lower()
