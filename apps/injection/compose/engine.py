# apps/injection/compose/engine.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from django.utils.safestring import SafeString, mark_safe

from apps.injection import conf
from apps.injection.errors import HyperdriveError
from apps.injection.resources.registry import PageResources

from .antimatter import generate_antimatter
from .collector import calibrate_page
from .particles import DependencyNode, ParticleList
from .runtime import render_loader
from .spacetime import FoldResult, fold_spacetime

log = logging.getLogger("hyperdrive.engine")


@dataclass(frozen=True)
class FlightPlan:
    calibration: Tuple[DependencyNode, ...]
    particles: ParticleList
    fold: FoldResult
    resources: PageResources  # copie de travail, queues déjà vidées

    @property
    def batches(self) -> List[List[str]]:
        return [list(b.urls) for b in self.fold.batches]


def plan(
    resources: PageResources,
    *,
    include_styles: Optional[bool] = None,
    max_depth: Optional[int] = None,
    skip_empty_first: Optional[bool] = None,
) -> FlightPlan:
    """
    calibrate -> generate -> fold sur une copie de travail.
    ``resources`` n'est jamais modifié ici.
    """
    working = resources.copy()
    calibration = calibrate_page(
        working,
        include_styles=conf.include_styles() if include_styles is None else include_styles,
        max_depth=max_depth,
    )
    particles = generate_antimatter(calibration, max_depth=max_depth)
    fold = fold_spacetime(particles, max_depth=max_depth, skip_empty_first=skip_empty_first)
    return FlightPlan(tuple(calibration), particles, fold, working)


def enter_hyperspace(dark_energy: str) -> SafeString:
    if not dark_energy:
        return mark_safe("")
    return mark_safe(f"<script>{dark_energy}</script>")


def engage(resources: PageResources, **options) -> SafeString:
    """
    Page integration: runs the pipeline once and returns the inline loader.

    Dequeues are committed on ``resources`` only when the whole pipeline
    succeeded; on failure every resource stays with the host's normal
    loading path and nothing is emitted.
    """
    if not conf.enabled():
        return mark_safe("")
    try:
        flight = plan(resources, **options)
    except HyperdriveError:
        log.exception("Hyperdrive pipeline failed, falling back to regular tags")
        return mark_safe("")

    if flight.fold.expression is None:
        log.debug("nothing to defer")
        return mark_safe("")

    resources.adopt(flight.resources)
    log.debug(
        "hyperdrive engaged: %d resources in %d batches",
        len(flight.calibration),
        len(flight.fold.batches),
    )
    return enter_hyperspace(render_loader(flight.fold))
