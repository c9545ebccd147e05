from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List

import yaml

MANIFEST_DIR = Path(__file__).resolve().parents[1] / "manifests"


def load_yaml_rel(rel_path: str, *, base: Path = MANIFEST_DIR) -> Dict[str, Any]:
    """Load a YAML manifest shipped inside the package (manifests/...)."""

    p = base / rel_path.lstrip("/")
    data = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Manifest must be a mapping/dict: {p}")
    return data


def load_platforms() -> Dict[str, str]:
    """Return {distribution: minimum_version}."""

    raw = load_yaml_rel("platforms.yaml").get("platforms") or {}
    if not isinstance(raw, dict):
        raise ValueError("platforms.yaml: platforms must be a mapping")
    return {str(name): str((spec or {}).get("min_version", "")) for name, spec in raw.items()}


def load_releases() -> List[Dict[str, Any]]:
    releases = load_yaml_rel("releases.yaml").get("releases") or []
    if not isinstance(releases, list) or not releases:
        raise ValueError("releases.yaml: releases must be a non-empty list")
    return releases


def load_packages_manifest() -> Dict[str, Any]:
    return load_yaml_rel("packages.yaml")
