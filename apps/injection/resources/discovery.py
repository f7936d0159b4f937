# apps/injection/resources/discovery.py
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Tuple

import yaml
from django.apps import apps as django_apps

from apps.injection import conf
from apps.injection.errors import ManifestError

from . import registry

log = logging.getLogger("hyperdrive.discovery")

APP_MANIFEST_FILENAMES = ("hyperdrive.yml", "hyperdrive.yaml")
_SECTIONS = {"scripts": "script", "styles": "style"}


def _app_manifests() -> List[Path]:
    found: List[Path] = []
    for app_config in django_apps.get_app_configs():
        for name in APP_MANIFEST_FILENAMES:
            candidate = Path(app_config.path) / name
            if candidate.is_file():
                found.append(candidate)
                break
    return found


def manifest_paths() -> List[Path]:
    """Manifests déclarés en settings d'abord, puis ceux des apps installées."""
    uniq: List[Path] = []
    seen = set()
    for p in list(conf.manifest_paths()) + _app_manifests():
        try:
            rp = p.resolve()
        except OSError:
            rp = p
        if rp not in seen:
            uniq.append(p)
            seen.add(rp)
    return uniq


def load_manifest(path: Path) -> Dict[str, List[Dict[str, Any]]]:
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ManifestError(f"Manifest illisible: {path} ({e})") from e

    if not isinstance(raw, dict):
        raise ManifestError(f"Manifest invalide (mapping attendu): {path}")

    unknown = set(raw.keys()) - set(_SECTIONS)
    if unknown:
        raise ManifestError(f"{path}: sections inconnues {sorted(unknown)} (attendu: scripts, styles)")

    out: Dict[str, List[Dict[str, Any]]] = {}
    for section in _SECTIONS:
        items = raw.get(section) or []
        if not isinstance(items, list):
            raise ManifestError(f"{path}: '{section}' doit être une liste (type={type(items).__name__}).")
        out[section] = items
    return out


def discover(paths: Iterable[Path] | None = None, *, override_existing: bool = False) -> Tuple[int, List[str]]:
    """
    Charge les manifests YAML dans le registre par défaut.
    Retourne (nombre de ressources enregistrées, warnings).
    Les manifests absents sont ignorés ; un manifest mal formé lève ManifestError.
    """
    total = 0
    warnings: List[str] = []
    for path in (manifest_paths() if paths is None else list(paths)):
        if not path.exists():
            log.debug("manifest absent, skipped: %s", path)
            continue
        data = load_manifest(path)
        for section, kind in _SECTIONS.items():
            count, warns = registry.bulk_register(kind, data[section], override=override_existing)
            total += count
            warnings.extend(f"{path.name}: {w}" for w in warns)
        log.info("hyperdrive manifest loaded: %s", path)
    return total, warnings
