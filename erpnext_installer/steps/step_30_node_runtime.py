from __future__ import annotations

import logging
import shlex

from ..context import InstallContext
from ..lib.bench import nvm, nvm_exec
from ..lib.command import run_cmd
from ..lib.manifests import load_packages_manifest
from ..pipeline import BaseStage

logger = logging.getLogger(__name__)


class NodeRuntimeStage(BaseStage):
    stage_id = "30_node_runtime"

    def run(self, ctx: InstallContext) -> None:
        url = str((load_packages_manifest().get("nvm") or {})["installer_url"])
        run_cmd(
            ["bash", "-c", f"set -o pipefail; curl -fsSL {shlex.quote(url)} | bash"],
            env={"NVM_DIR": str(ctx.nvm_dir)},
            dry_run=ctx.dry_run,
        )

        major = str(ctx.release.node_major)
        nvm(ctx, "install", major)
        nvm(ctx, "alias", "default", major)
        nvm_exec(ctx, ["npm", "install", "-g", "yarn"])
        logger.info("Node.js %s with yarn installed via nvm (%s)", major, ctx.nvm_dir)
