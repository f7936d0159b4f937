from __future__ import annotations

from django.conf import settings
from django.core.checks import Error, Warning, register

from .resources import registry

MIDDLEWARE_PATH = "apps.injection.middleware.resources.PageResourcesMiddleware"


@register()
def max_depth_check(app_configs, **kwargs):
    value = getattr(settings, "HYPERDRIVE_MAX_DEPTH", None)
    if value is None:
        return []
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        return [Error(
            f"HYPERDRIVE_MAX_DEPTH invalide: {value!r}",
            hint="Doit être un entier strictement positif.",
            id="hyperdrive.E001",
        )]
    return []


@register()
def middleware_check(app_configs, **kwargs):
    # Pas bloquant: services.page_resources() crée le registre à la volée.
    if MIDDLEWARE_PATH not in list(getattr(settings, "MIDDLEWARE", []) or []):
        return [Warning(
            "PageResourcesMiddleware absent de MIDDLEWARE.",
            hint=f"Ajoute '{MIDDLEWARE_PATH}' pour un registre frais par requête.",
            id="hyperdrive.W001",
        )]
    return []


@register()
def default_dependencies_check(app_configs, **kwargs):
    """Dépendances inconnues (W002) et cycles (E002) dans les ressources par défaut."""
    messages = []
    for kind in registry.KINDS:
        reg = registry.defaults_for(kind)
        for handle, meta in reg.registered.items():
            for dep in meta.deps:
                if dep not in reg.registered:
                    messages.append(Warning(
                        f"{kind} '{handle}' dépend d'un handle inconnu '{dep}'.",
                        hint="Déclare la dépendance dans un manifest hyperdrive.yml.",
                        id="hyperdrive.W002",
                    ))

        state: dict = {}  # handle -> "visiting" | "done"

        def visit(handle, trail):
            if state.get(handle) == "done":
                return None
            if state.get(handle) == "visiting":
                return trail[trail.index(handle):] + [handle]
            meta = reg.registered.get(handle)
            if meta is None:
                return None
            state[handle] = "visiting"
            for dep in meta.deps:
                cycle = visit(dep, trail + [handle])
                if cycle:
                    return cycle
            state[handle] = "done"
            return None

        for handle in reg.registered:
            cycle = visit(handle, [])
            if cycle:
                messages.append(Error(
                    f"Cycle de dépendances ({kind}): {' -> '.join(cycle)}",
                    hint="Le collecteur lèverait CycleOrDepthExceeded à chaque rendu.",
                    id="hyperdrive.E002",
                ))
                break
    return messages
