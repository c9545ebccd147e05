from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple

from .errors import UnsupportedPlatform
from .lib.manifests import load_platforms

logger = logging.getLogger(__name__)

_COMPONENT = re.compile(r"^\d+$")


def parse_version(version: str) -> Optional[Tuple[int, ...]]:
    """Parse "22.04" into (22, 4). Returns None if any component is not numeric."""

    text = (version or "").strip()
    if not text:
        return None
    parts = text.split(".")
    if not all(_COMPONENT.match(p) for p in parts):
        return None
    return tuple(int(p) for p in parts)


def version_at_least(version: str, minimum: str) -> bool:
    """Numeric per-component comparison; missing components count as zero.

    "9.10" >= "9.9" is True, "9.1" >= "9.2" is False.
    """

    have = parse_version(version)
    need = parse_version(minimum)
    if have is None or need is None:
        return False
    width = max(len(have), len(need))
    have = have + (0,) * (width - len(have))
    need = need + (0,) * (width - len(need))
    return have >= need


@dataclass(frozen=True)
class PlatformCheck:
    name: str
    version: str
    error: Optional[UnsupportedPlatform] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _lookup(name: str, supported: Mapping[str, str]) -> Optional[Tuple[str, str]]:
    for dist, minimum in supported.items():
        if dist.lower() == (name or "").strip().lower():
            return dist, minimum
    return None


def check_platform(
    name: str,
    version: str,
    supported: Optional[Mapping[str, str]] = None,
) -> PlatformCheck:
    """Check a detected (distribution, version) against the supported matrix."""

    matrix = load_platforms() if supported is None else supported

    hit = _lookup(name, matrix)
    if hit is None:
        return PlatformCheck(name, version, UnsupportedPlatform(name, version, "distribution not supported"))

    dist, minimum = hit
    if not version_at_least(version, minimum):
        return PlatformCheck(
            name, version, UnsupportedPlatform(name, version, f"{dist} {minimum} or newer is required")
        )

    logger.info("Platform supported: %s %s (minimum %s)", dist, version, minimum)
    return PlatformCheck(name, version)


def require_platform(name: str, version: str, supported: Optional[Mapping[str, str]] = None) -> None:
    result = check_platform(name, version, supported)
    if result.error is not None:
        raise result.error
