# apps/injection/errors.py
from __future__ import annotations

from typing import Sequence


class HyperdriveError(Exception):
    """Base class for every error raised by the injection pipeline."""


class ParticleValidationError(HyperdriveError, ValueError):
    """Entrée du flattener/assembler mal formée (ni Leaf, ni Group)."""


class CycleOrDepthExceeded(HyperdriveError, RecursionError):
    """Dependency recursion went deeper than the configured maximum."""

    def __init__(self, max_depth: int, path: Sequence[str] = ()):
        self.max_depth = max_depth
        self.path = tuple(path)
        super().__init__(str(self))

    def __str__(self) -> str:
        trail = " -> ".join(self.path) if self.path else "(anonymous)"
        return f"Dependency depth exceeded {self.max_depth} (cycle?): {trail}"


class UnknownHandle(HyperdriveError, KeyError):
    """Handle introuvable dans le registre de ressources."""

    def __init__(self, handle: str, kind: str = "script"):
        super().__init__(handle)
        self.handle = handle
        self.kind = kind

    def __str__(self) -> str:  # pragma: no cover - string repr helper
        return f"Unknown {self.kind} handle '{self.handle}'."


class ManifestError(HyperdriveError):
    pass
