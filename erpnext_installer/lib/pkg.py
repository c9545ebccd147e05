from __future__ import annotations

import logging
from typing import Sequence

from .command import as_root, run_cmd

logger = logging.getLogger(__name__)


def _apt_get(*args: str) -> list[str]:
    # sudo resets the environment, so the frontend goes through env(1).
    return as_root(["env", "DEBIAN_FRONTEND=noninteractive", "apt-get", *args])


def apt_update(*, dry_run: bool = False) -> None:
    run_cmd(_apt_get("update"), dry_run=dry_run, capture=False)


def apt_upgrade(*, dry_run: bool = False) -> None:
    run_cmd(_apt_get("upgrade", "-y"), dry_run=dry_run, capture=False)


def apt_install(packages: Sequence[str], *, dry_run: bool = False) -> None:
    if not packages:
        return
    run_cmd(_apt_get("install", "-y", *packages), dry_run=dry_run, capture=False)


def apt_fix_broken(*, dry_run: bool = False) -> None:
    run_cmd(_apt_get("--fix-broken", "install", "-y"), dry_run=dry_run, capture=False)


def dpkg_install(deb_path: str, *, dry_run: bool = False) -> bool:
    """Install a local .deb. Returns False on failure (apt fixes dependencies afterwards)."""

    r = run_cmd(as_root(["dpkg", "-i", deb_path]), check=False, dry_run=dry_run)
    if r.returncode != 0:
        logger.warning("dpkg -i %s exited %s; relying on apt --fix-broken", deb_path, r.returncode)
    return r.returncode == 0


def snap_install_classic(name: str, *, dry_run: bool = False) -> None:
    run_cmd(as_root(["snap", "install", "--classic", name]), dry_run=dry_run, capture=False)
