# apps/injection/compose/collector.py
from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence

from apps.injection import conf
from apps.injection.errors import CycleOrDepthExceeded
from apps.injection.resources.registry import PageResources, ResourceRegistry

from .particles import DependencyNode

log = logging.getLogger("hyperdrive.collector")


def get_dependency_data(
    registry: ResourceRegistry,
    handles: Iterable[str],
    *,
    max_depth: Optional[int] = None,
    _path: Sequence[str] = (),
) -> List[DependencyNode]:
    """
    Résout récursivement une liste de handles en noeuds.

    Pour chaque handle : un noeud (handle, url, ()) si une URL existe, puis
    un noeud de regroupement (handle, "", deps...) si le handle a lui-même
    des dépendances. Les deux peuvent coexister.
    """
    limit = max_depth if max_depth is not None else conf.max_depth()
    nodes: List[DependencyNode] = []
    for handle in handles:
        path = (*_path, handle)
        if len(path) > limit:
            raise CycleOrDepthExceeded(limit, path)
        url = registry.src_for(handle)
        if url:
            nodes.append(DependencyNode(handle, url, ()))
        deps = registry.deps_for(handle)
        if deps:
            children = get_dependency_data(registry, deps, max_depth=limit, _path=path)
            nodes.append(DependencyNode(handle, "", tuple(children)))
    return nodes


def calibrate_thrusters(registry: ResourceRegistry, *, max_depth: Optional[int] = None) -> List[DependencyNode]:
    """
    Construit les données de calibration pour un registre et retire de la
    queue chaque ressource collectée (l'hôte ne doit plus la charger).
    Les ressources conditionnelles restent dans la queue.

    Exemple (jquery-scrollto dépend de jquery, groupe de jquery-core + jquery-migrate)::

        DependencyNode("jquery-scrollto", "/js/jquery.scrollTo.js?ver=2.1.2", (
            DependencyNode("jquery", "", (
                DependencyNode("jquery-core", "/js/jquery/jquery.js?ver=1.12.4"),
                DependencyNode("jquery-migrate", "/js/jquery/jquery-migrate.min.js?ver=1.4.1"),
            )),
        ))
    """
    limit = max_depth if max_depth is not None else conf.max_depth()
    calibration: List[DependencyNode] = []
    for resource in registry.enqueued():
        if resource.conditional:
            log.debug("conditional %s '%s' left to the host", registry.kind, resource.handle)
            continue
        children = get_dependency_data(registry, resource.deps, max_depth=limit, _path=(resource.handle,))
        calibration.append(DependencyNode(resource.handle, resource.url, tuple(children)))
        registry.dequeue(resource.handle)
    return calibration


def calibrate_page(resources: PageResources, *, include_styles: bool = True, max_depth: Optional[int] = None) -> List[DependencyNode]:
    """Styles d'abord (si activés), puis scripts."""
    nodes: List[DependencyNode] = []
    if include_styles:
        nodes.extend(calibrate_thrusters(resources.styles, max_depth=max_depth))
    nodes.extend(calibrate_thrusters(resources.scripts, max_depth=max_depth))
    log.debug("calibrated %d top-level resources", len(nodes))
    return nodes
