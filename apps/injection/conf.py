# apps/injection/conf.py
from __future__ import annotations

from pathlib import Path
from typing import List

from django.conf import settings

HYPERDRIVE_VERSION = "1.0.0-beta.3"

DEFAULT_MAX_DEPTH = 32
DEFAULT_LOADER_NAME = "fetchInject"


def enabled() -> bool:
    return bool(getattr(settings, "HYPERDRIVE_ENABLED", True))


def max_depth() -> int:
    value = getattr(settings, "HYPERDRIVE_MAX_DEPTH", DEFAULT_MAX_DEPTH)
    try:
        value = int(value)
    except (TypeError, ValueError):
        return DEFAULT_MAX_DEPTH
    return value if value > 0 else DEFAULT_MAX_DEPTH


def skip_empty_first_batch() -> bool:
    return bool(getattr(settings, "HYPERDRIVE_SKIP_EMPTY_FIRST_BATCH", False))


def include_styles() -> bool:
    return bool(getattr(settings, "HYPERDRIVE_INCLUDE_STYLES", True))


def manifest_paths() -> List[Path]:
    raw = getattr(settings, "HYPERDRIVE_MANIFESTS", None) or []
    return [Path(p) for p in raw]
