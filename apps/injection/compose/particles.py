# apps/injection/compose/particles.py
"""
Types shared by the collector, the flattener and the batch assembler.

``DependencyNode`` is what the collector builds from the registry.
``Leaf``/``Group`` are the flattened form: a ParticleList is a tuple whose
elements are either a URL leaf or a nested group, sorted and deduplicated
per level.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from functools import cmp_to_key
from typing import Iterable, Tuple, Union

from apps.injection.errors import ParticleValidationError


@dataclass(frozen=True)
class DependencyNode:
    handle: str
    url: str = ""
    children: Tuple["DependencyNode", ...] = field(default_factory=tuple)

    @property
    def is_group(self) -> bool:
        """Noeud de regroupement : pas d'URL propre, seulement des enfants."""
        return not self.url and bool(self.children)


@dataclass(frozen=True)
class Leaf:
    url: str


@dataclass(frozen=True)
class Group:
    children: Tuple["Particle", ...] = ()

    def __len__(self) -> int:
        return len(self.children)

    def __iter__(self):
        return iter(self.children)


Particle = Union[Leaf, Group]
ParticleList = Tuple[Particle, ...]


def compare_particles(a: Particle, b: Particle) -> int:
    """
    Ordre "multisort" : les URLs avant les groupes, les URLs entre elles
    par comparaison de chaînes, les groupes par taille puis élément par élément.
    """
    a_leaf, b_leaf = isinstance(a, Leaf), isinstance(b, Leaf)
    if a_leaf and b_leaf:
        return (a.url > b.url) - (a.url < b.url)
    if a_leaf != b_leaf:
        return -1 if a_leaf else 1
    if len(a) != len(b):
        return -1 if len(a) < len(b) else 1
    for left, right in zip(a.children, b.children):
        result = compare_particles(left, right)
        if result:
            return result
    return 0


particle_sort_key = cmp_to_key(compare_particles)


def ensure_particle(item: object) -> Particle:
    if isinstance(item, Leaf):
        if not isinstance(item.url, str):
            raise ParticleValidationError(f"Leaf url must be a str, got {type(item.url).__name__}.")
        return item
    if isinstance(item, Group):
        if not isinstance(item.children, tuple):
            raise ParticleValidationError("Group children must be a tuple of particles.")
        return item
    raise ParticleValidationError(f"Expected Leaf or Group, got {type(item).__name__}: {item!r}")


def from_nested(value: Iterable[object]) -> ParticleList:
    """
    Build a ParticleList from plain nested lists of strings, e.g.
    ``[["a", "b"], ["b", "c"], "a"]``. Anything else is rejected.
    """
    if isinstance(value, (str, bytes)) or not isinstance(value, (list, tuple)):
        raise ParticleValidationError(f"Expected a list, got {type(value).__name__}.")
    out = []
    for item in value:
        if isinstance(item, str):
            out.append(Leaf(item))
        elif isinstance(item, (list, tuple)):
            out.append(Group(from_nested(item)))
        else:
            raise ParticleValidationError(f"Unsupported particle {type(item).__name__}: {item!r}")
    return tuple(out)


def to_nested(particles: Iterable[Particle]) -> list:
    return [p.url if isinstance(p, Leaf) else to_nested(p.children) for p in particles]
