from __future__ import annotations

import logging
import platform
from pathlib import Path
from typing import Dict, Optional, Tuple

from .command import run_cmd

logger = logging.getLogger(__name__)

# /etc/os-release ID -> lsb_release -is spelling
_OS_RELEASE_IDS = {
    "ubuntu": "Ubuntu",
    "debian": "Debian",
}


def normalize_arch(machine: str) -> str:
    m = machine.lower()
    return {
        "x86_64": "amd64",
        "amd64": "amd64",
        "aarch64": "arm64",
        "arm64": "arm64",
        "armv7l": "armhf",
        "armv6l": "armhf",
    }.get(m, m)


def detect_arch() -> str:
    return normalize_arch(platform.machine())


def _lsb_value(flag: str) -> Optional[str]:
    try:
        r = run_cmd(["lsb_release", flag], check=False)
    except OSError:
        return None
    if r.returncode != 0:
        return None
    return r.stdout.strip() or None


def parse_os_release(text: str) -> Dict[str, str]:
    values: Dict[str, str] = {}
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, _, value = line.partition("=")
        values[key.strip()] = value.strip().strip('"').strip("'")
    return values


def detect_os(os_release: Path = Path("/etc/os-release")) -> Tuple[str, str]:
    """Return (distribution, version) as lsb_release reports them.

    Falls back to /etc/os-release when lsb_release is missing. Unknown values
    are returned as empty strings.
    """

    name = _lsb_value("-is")
    version = _lsb_value("-rs")
    if name and version:
        logger.info("Detected OS via lsb_release: %s %s", name, version)
        return name, version

    try:
        info = parse_os_release(os_release.read_text(encoding="utf-8"))
    except OSError:
        info = {}

    os_id = info.get("ID", "").lower()
    name = name or _OS_RELEASE_IDS.get(os_id, info.get("NAME", ""))
    version = version or info.get("VERSION_ID", "")
    logger.info("Detected OS via %s: %s %s", os_release, name or "unknown", version or "unknown")
    return name, version


def server_ip() -> str:
    """First address reported by `hostname -I` (best-effort)."""

    try:
        r = run_cmd(["hostname", "-I"], check=False)
    except OSError:
        return "localhost"
    parts = r.stdout.split()
    return parts[0] if parts else "localhost"
