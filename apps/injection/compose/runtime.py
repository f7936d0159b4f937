# apps/injection/compose/runtime.py
from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from django.template.loader import render_to_string

from apps.injection import conf

from .spacetime import FoldResult

RUNTIME_PATH = Path(__file__).resolve().parents[1] / "static" / "injection" / "js" / "fetch-inject.js"
TEMPLATE_NAME = "injection/hyperdrive.js"


@lru_cache(maxsize=1)
def load_runtime_source() -> str:
    """Source du loader navigateur (lue une fois par process)."""
    return RUNTIME_PATH.read_text(encoding="utf-8").rstrip()


def render_loader(fold: FoldResult) -> str:
    """Bannière + runtime + invocation, prêt à être inliné dans un <script>."""
    return render_to_string(
        TEMPLATE_NAME,
        {
            "version": conf.HYPERDRIVE_VERSION,
            "runtime": load_runtime_source(),
            "expression": fold.render(conf.DEFAULT_LOADER_NAME),
        },
    ).strip()
