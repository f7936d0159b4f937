# apps/injection/resources/registry.py
from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple

from apps.injection.errors import UnknownHandle

log = logging.getLogger("hyperdrive.registry")

KINDS = ("script", "style")


@dataclass(frozen=True)
class Resource:
    handle: str
    src: str = ""
    deps: Tuple[str, ...] = ()
    ver: Optional[str] = None
    conditional: Optional[str] = None  # ex: "lt IE 9"
    kind: str = "script"

    @property
    def url(self) -> str:
        """Source suffixée par ``?ver=`` quand une version est déclarée."""
        suffix = f"?ver={self.ver}" if (self.src and self.ver) else ""
        return f"{self.src}{suffix}"


def _ensure_tuple(v) -> Tuple[str, ...]:
    if v is None:
        return ()
    if isinstance(v, (list, tuple)):
        return tuple(str(x) for x in v)
    return (str(v),)


class ResourceRegistry:
    """
    Table des ressources d'un type (scripts ou styles) pour une requête.

    - ``registered`` : handle -> Resource (première déclaration gagnante)
    - ``queue`` : handles enqueued, dans l'ordre d'enqueue
    """

    def __init__(
        self,
        kind: str = "script",
        registered: Optional[Dict[str, Resource]] = None,
        queue: Optional[Iterable[str]] = None,
    ):
        if kind not in KINDS:
            raise ValueError(f"Unknown resource kind: {kind!r} (expected one of {KINDS})")
        self.kind = kind
        self.registered: Dict[str, Resource] = dict(registered or {})
        self.queue: List[str] = list(queue or [])

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"<ResourceRegistry {self.kind} registered={len(self.registered)} queue={self.queue}>"

    # ---------------------------
    # Enregistrement
    # ---------------------------
    def register(
        self,
        handle: str,
        src: str = "",
        deps: Iterable[str] | None = (),
        ver: Optional[str] = None,
        *,
        conditional: Optional[str] = None,
    ) -> bool:
        handle = (handle or "").strip()
        if not handle:
            raise ValueError("Resource handle must be a non-empty string.")
        if handle in self.registered:
            log.debug("register skipped, %s handle '%s' already registered", self.kind, handle)
            return False
        self.registered[handle] = Resource(
            handle=handle,
            src=str(src or ""),
            deps=_ensure_tuple(deps),
            ver=str(ver) if ver not in (None, "") else None,
            conditional=(str(conditional).strip() or None) if conditional else None,
            kind=self.kind,
        )
        return True

    def enqueue(self, handle: str) -> None:
        self.get(handle)
        if handle not in self.queue:
            self.queue.append(handle)

    def dequeue(self, handle: str) -> None:
        if handle in self.queue:
            self.queue.remove(handle)

    def is_enqueued(self, handle: str) -> bool:
        return handle in self.queue

    # ---------------------------
    # Lecture
    # ---------------------------
    def get(self, handle: str) -> Resource:
        try:
            return self.registered[handle]
        except KeyError:
            raise UnknownHandle(handle, self.kind) from None

    def src_for(self, handle: str) -> str:
        return self.get(handle).url

    def deps_for(self, handle: str) -> Tuple[str, ...]:
        return self.get(handle).deps

    def enqueued(self) -> List[Resource]:
        return [self.get(handle) for handle in self.queue]

    def resolve_queue(self) -> List[Resource]:
        """
        Ordre d'impression "normal" : dépendances d'abord, chaque handle une seule fois.
        Les handles inconnus sont ignorés (warning), les cycles coupés.
        """
        ordered: List[Resource] = []
        done: set[str] = set()
        visiting: set[str] = set()

        def visit(handle: str) -> None:
            if handle in done:
                return
            if handle in visiting:
                log.warning("dependency cycle on %s handle '%s', edge ignored", self.kind, handle)
                return
            meta = self.registered.get(handle)
            if meta is None:
                log.warning("missing %s dependency '%s', skipped", self.kind, handle)
                return
            visiting.add(handle)
            for dep in meta.deps:
                visit(dep)
            visiting.discard(handle)
            done.add(handle)
            ordered.append(meta)

        for handle in self.queue:
            visit(handle)
        return ordered

    def copy(self) -> "ResourceRegistry":
        return ResourceRegistry(self.kind, self.registered, self.queue)


@dataclass
class PageResources:
    """Scripts + styles attachés à une requête par le middleware."""

    scripts: ResourceRegistry = field(default_factory=lambda: ResourceRegistry("script"))
    styles: ResourceRegistry = field(default_factory=lambda: ResourceRegistry("style"))

    def for_kind(self, kind: str) -> ResourceRegistry:
        if kind == "style":
            return self.styles
        if kind == "script":
            return self.scripts
        raise ValueError(f"Unknown resource kind: {kind!r}")

    def copy(self) -> "PageResources":
        return PageResources(scripts=self.scripts.copy(), styles=self.styles.copy())

    def adopt(self, other: "PageResources") -> None:
        """Reprend les queues d'une copie de travail (commit après succès)."""
        self.scripts.queue = list(other.scripts.queue)
        self.styles.queue = list(other.styles.queue)

    @classmethod
    def from_defaults(cls) -> "PageResources":
        return cls(scripts=defaults_for("script"), styles=defaults_for("style"))


# ==========================================================
# Déclarations globales (manifests YAML, apps.ready)
# ==========================================================
_DEFAULTS: Dict[str, ResourceRegistry] = {kind: ResourceRegistry(kind) for kind in KINDS}


def defaults_for(kind: str) -> ResourceRegistry:
    """Copie fraîche du registre par défaut (une par requête)."""
    if kind not in _DEFAULTS:
        raise ValueError(f"Unknown resource kind: {kind!r}")
    return _DEFAULTS[kind].copy()


def default_handles(kind: str) -> List[str]:
    return list(_DEFAULTS[kind].registered.keys())


def register_default(
    kind: str,
    handle: str,
    src: str = "",
    deps: Iterable[str] | None = (),
    ver: Optional[str] = None,
    *,
    conditional: Optional[str] = None,
    enqueue: bool = False,
    override: bool = False,
) -> bool:
    bucket = _DEFAULTS[kind]
    if override:
        bucket.registered.pop(handle, None)
    created = bucket.register(handle, src, deps, ver, conditional=conditional)
    if enqueue:
        bucket.enqueue(handle)
    return created


def bulk_register(kind: str, items: List[Dict[str, Any]], *, override: bool = False) -> Tuple[int, List[str]]:
    """
    Attendu par item:
      {"handle": str, "src": str?, "deps": list[str]?, "ver": str?,
       "conditional": str?, "enqueue": bool?}
    """
    count = 0
    warnings: List[str] = []
    bucket = _DEFAULTS[kind]

    for item in items:
        if not isinstance(item, dict):
            warnings.append(f"skip invalid {kind} item (not a mapping): {item!r}")
            continue
        handle = str(item.get("handle") or "").strip()
        if not handle:
            warnings.append(f"skip invalid {kind} item (handle missing): {item}")
            continue
        if handle in bucket.registered and not override:
            warnings.append(f"collision for {kind} handle '{handle}' (override=False)")
            continue

        register_default(
            kind,
            handle,
            item.get("src") or "",
            item.get("deps") or (),
            item.get("ver"),
            conditional=item.get("conditional"),
            enqueue=bool(item.get("enqueue", False)),
            override=override,
        )
        count += 1

    return count, warnings


def snapshot_defaults() -> Dict[str, ResourceRegistry]:
    return {kind: copy.deepcopy(reg) for kind, reg in _DEFAULTS.items()}


def restore_defaults(snapshot: Dict[str, ResourceRegistry]) -> None:
    for kind in KINDS:
        _DEFAULTS[kind] = snapshot.get(kind) or ResourceRegistry(kind)


def clear_defaults() -> None:
    for kind in KINDS:
        _DEFAULTS[kind] = ResourceRegistry(kind)
