# apps/injection/compose/spacetime.py
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Tuple

from apps.injection import conf
from apps.injection.errors import CycleOrDepthExceeded, ParticleValidationError

from .particles import Group, Leaf, Particle, ensure_particle

log = logging.getLogger("hyperdrive.spacetime")

# Échappement pour un JSON inline dans <script> (cf. django.utils.html.json_script)
_JSON_SCRIPT_ESCAPES = {
    ord(">"): "\\u003E",
    ord("<"): "\\u003C",
    ord("&"): "\\u0026",
}


@dataclass(frozen=True)
class Batch:
    urls: Tuple[str, ...]

    def to_json(self) -> str:
        """JSON compact, slashes non échappés (``/`` reste ``/``)."""
        return json.dumps(list(self.urls), separators=(",", ":"))

    def to_inline_json(self) -> str:
        return self.to_json().translate(_JSON_SCRIPT_ESCAPES)

    @property
    def is_empty_artifact(self) -> bool:
        # Comme le handle "jquery" du core : groupe sans URL propre.
        return self.urls == ("",)


@dataclass(frozen=True)
class LoaderCall:
    """
    One ``load(batch, continuation)`` step. ``continuation`` is the call for
    the previous batch; the innermost call has none and runs first.
    """

    batch: Batch
    continuation: Optional["LoaderCall"] = None

    def chain(self) -> List[Batch]:
        """Batches du plus interne (exécuté en premier) au plus externe."""
        out: List[Batch] = []
        node: Optional[LoaderCall] = self
        while node is not None:
            out.append(node.batch)
            node = node.continuation
        out.reverse()
        return out

    def render(self, loader_name: str = conf.DEFAULT_LOADER_NAME) -> str:
        expression = ""
        for batch in self.chain():
            if expression:
                expression = f"{loader_name}({batch.to_inline_json()}, {expression})"
            else:
                expression = f"{loader_name}({batch.to_inline_json()})"
        return expression


@dataclass
class SeenParticles:
    """Dedup set shared by the whole walk: the first occurrence of a URL wins."""

    urls: List[str] = field(default_factory=list)
    _index: set = field(default_factory=set, repr=False)

    def __contains__(self, url: str) -> bool:
        return url in self._index

    def claim(self, url: str) -> bool:
        if url in self._index:
            return False
        self._index.add(url)
        self.urls.append(url)
        return True


@dataclass(frozen=True)
class FoldResult:
    batches: Tuple[Batch, ...]
    expression: Optional[LoaderCall]

    def render(self, loader_name: str = conf.DEFAULT_LOADER_NAME) -> str:
        return self.expression.render(loader_name) if self.expression else ""


def _validate(particles: Iterable[object], limit: int, depth: int = 0) -> None:
    if depth >= limit:
        raise CycleOrDepthExceeded(limit)
    if isinstance(particles, (str, bytes)) or not isinstance(particles, (list, tuple)):
        raise ParticleValidationError(f"Expected a sequence of particles, got {type(particles).__name__}.")
    for item in particles:
        particle = ensure_particle(item)
        if isinstance(particle, Group):
            _validate(particle.children, limit, depth + 1)


def _walk(particles: Sequence[Particle], seen: SeenParticles, batches: List[Batch]) -> None:
    accumulator: List[str] = []
    for particle in particles:
        if isinstance(particle, Group):
            # Les enfants sont flushés avant le niveau courant.
            if particle.children:
                _walk(particle.children, seen, batches)
        elif isinstance(particle, Leaf) and particle.url and seen.claim(particle.url):
            accumulator.append(particle.url)
    if accumulator:
        batches.append(Batch(tuple(accumulator)))


def fold_batches(particles: Sequence[Particle], *, max_depth: Optional[int] = None) -> List[Batch]:
    """
    Depth-first walk producing one batch per level that found new URLs.
    The input is validated entirely before anything is emitted.
    """
    limit = max_depth if max_depth is not None else conf.max_depth()
    _validate(particles, limit)
    batches: List[Batch] = []
    _walk(particles, SeenParticles(), batches)
    return batches


def assemble_chain(batches: Sequence[Batch], *, skip_empty_first: bool = False) -> Optional[LoaderCall]:
    """
    Chain batches so that each one waits for the previous one.

    A ``[""]`` batch in the middle of the chain is dropped. The first batch is
    kept even when it is ``[""]`` unless ``skip_empty_first`` is set, and the
    last batch is always kept.
    """
    chain: Optional[LoaderCall] = None
    last = len(batches) - 1
    for idx, batch in enumerate(batches):
        if idx == 0:
            if skip_empty_first and batch.is_empty_artifact:
                continue
            chain = LoaderCall(batch)
        elif idx == last:
            chain = LoaderCall(batch, chain)
        elif batch.is_empty_artifact:
            continue
        else:
            chain = LoaderCall(batch, chain)
    return chain


def fold_spacetime(
    particles: Sequence[Particle],
    *,
    max_depth: Optional[int] = None,
    skip_empty_first: Optional[bool] = None,
) -> FoldResult:
    if skip_empty_first is None:
        skip_empty_first = conf.skip_empty_first_batch()
    batches = fold_batches(particles, max_depth=max_depth)
    expression = assemble_chain(batches, skip_empty_first=skip_empty_first)
    log.debug("folded %d batches", len(batches))
    return FoldResult(batches=tuple(batches), expression=expression)
