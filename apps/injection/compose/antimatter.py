# apps/injection/compose/antimatter.py
from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from apps.injection import conf
from apps.injection.errors import CycleOrDepthExceeded, ParticleValidationError

from .particles import DependencyNode, Group, Leaf, Particle, ParticleList, ensure_particle, particle_sort_key


def dedupe_sorted(particles: Iterable[Particle]) -> ParticleList:
    """Déduplication stable par égalité structurelle (premier gagnant)."""
    seen, ordered = set(), []
    for particle in particles:
        if particle not in seen:
            seen.add(particle)
            ordered.append(particle)
    return tuple(ordered)


def generate_antimatter(
    calibration_data: Iterable[object],
    *,
    max_depth: Optional[int] = None,
    _path: Sequence[str] = (),
) -> ParticleList:
    """
    Translate calibration data into a ParticleList.

    Each node contributes its URL (``""`` for grouping nodes) and, when it has
    children, one nested group flattened the same way. Every level is then
    sorted and deduplicated on its own; nothing is deduplicated across levels
    here, that is the batch assembler's job.
    """
    limit = max_depth if max_depth is not None else conf.max_depth()
    if len(_path) >= limit:
        raise CycleOrDepthExceeded(limit, _path)

    particles: List[Particle] = []
    for entry in calibration_data:
        if isinstance(entry, DependencyNode):
            if not isinstance(entry.url, str):
                raise ParticleValidationError(
                    f"Node '{entry.handle}' url must be a str, got {type(entry.url).__name__}."
                )
            particles.append(Leaf(entry.url))
            if entry.children:
                nested = generate_antimatter(entry.children, max_depth=limit, _path=(*_path, entry.handle))
                particles.append(Group(nested))
        else:
            # Entrée déjà (partiellement) aplatie.
            particles.append(ensure_particle(entry))

    particles.sort(key=particle_sort_key)
    return dedupe_sorted(particles)
