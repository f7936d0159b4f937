"""
Façade de services pour l'app Injection.

- Accès au registre de la requête (posé par PageResourcesMiddleware).
- Helpers register/enqueue côté vues.
- Impression "normale" des tags pour ce qui reste en queue.
"""

from __future__ import annotations

from typing import Iterable, Optional

from django.utils.html import format_html, format_html_join
from django.utils.safestring import SafeString, mark_safe

from apps.injection.resources.registry import PageResources, Resource


def page_resources(request) -> PageResources:
    """Registre de la requête ; créé à la volée si le middleware est absent."""
    resources = getattr(request, "page_resources", None)
    if resources is None:
        resources = PageResources.from_defaults()
        if request is not None:
            request.page_resources = resources
    return resources


def register(
    request,
    kind: str,
    handle: str,
    src: str = "",
    deps: Iterable[str] | None = (),
    ver: Optional[str] = None,
    *,
    conditional: Optional[str] = None,
    enqueue: bool = False,
) -> None:
    registry = page_resources(request).for_kind(kind)
    registry.register(handle, src, deps, ver, conditional=conditional)
    if enqueue:
        registry.enqueue(handle)


def enqueue(request, kind: str, *handles: str) -> None:
    registry = page_resources(request).for_kind(kind)
    for handle in handles:
        registry.enqueue(handle)


def enqueue_script(request, *handles: str) -> None:
    enqueue(request, "script", *handles)


def enqueue_style(request, *handles: str) -> None:
    enqueue(request, "style", *handles)


# -------------------------
# Chargement "normal" (hôte)
# -------------------------

def _tag_for(resource: Resource) -> SafeString:
    if resource.kind == "style":
        tag = format_html('<link rel="stylesheet" id="{}-css" href="{}">', resource.handle, resource.url)
    else:
        tag = format_html('<script id="{}-js" src="{}"></script>', resource.handle, resource.url)
    if resource.conditional:
        # Commentaires conditionnels façon IE ; la condition est échappée.
        return format_html("<!--[if {}]>{}<![endif]-->", resource.conditional, tag)
    return tag


def print_resources(resources: PageResources) -> SafeString:
    """
    Tags <link>/<script> pour tout ce qui est encore en queue (dépendances
    d'abord). Les groupes sans src ne produisent rien.
    """
    printable = [
        r
        for registry in (resources.styles, resources.scripts)
        for r in registry.resolve_queue()
        if r.src
    ]
    if not printable:
        return mark_safe("")
    return format_html_join("\n", "{}", ((_tag_for(r),) for r in printable))
