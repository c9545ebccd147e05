from __future__ import annotations

import logging

from ..context import InstallContext
from ..lib.command import as_root, run_cmd
from ..lib.env import PATHS
from ..lib.manifests import load_packages_manifest
from ..lib.pkg import apt_install
from ..pipeline import BaseStage

logger = logging.getLogger(__name__)


class MariaDBServerStage(BaseStage):
    stage_id = "20_mariadb_server"

    def run(self, ctx: InstallContext) -> None:
        section = load_packages_manifest().get("mariadb") or {}
        apt_install([str(p) for p in section.get("packages") or []], dry_run=ctx.dry_run)

        # utf8mb4 everywhere; frappe refuses to create sites otherwise.
        run_cmd(
            as_root(["tee", PATHS.mariadb_frappe_cnf]),
            input_text=str(section.get("config") or ""),
            dry_run=ctx.dry_run,
        )
        run_cmd(as_root(["systemctl", "restart", str(section.get("service") or "mysql")]), dry_run=ctx.dry_run)
        logger.info("MariaDB configured (%s)", PATHS.mariadb_frappe_cnf)
