from __future__ import annotations

import logging

from ..context import InstallContext
from ..errors import InstallerError
from ..lib.manifests import load_packages_manifest
from ..lib.pkg import apt_install, apt_update, apt_upgrade
from ..pipeline import BaseStage

logger = logging.getLogger(__name__)


class SystemPackagesStage(BaseStage):
    stage_id = "10_system_packages"

    def run(self, ctx: InstallContext) -> None:
        manifest = load_packages_manifest()
        packages = (manifest.get("system") or {}).get("packages") or []
        if not isinstance(packages, list):
            raise InstallerError("packages.yaml: system.packages must be a list")

        apt_update(dry_run=ctx.dry_run)
        apt_upgrade(dry_run=ctx.dry_run)
        apt_install([str(p).strip() for p in packages if str(p).strip()], dry_run=ctx.dry_run)
        logger.info("System packages installed (%d)", len(packages))
