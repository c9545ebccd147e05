from __future__ import annotations

import logging
import shutil
from pathlib import Path

from ..context import InstallContext
from ..lib.command import as_root, run_cmd
from ..lib.manifests import load_packages_manifest
from ..pipeline import BaseStage

logger = logging.getLogger(__name__)


class BenchCliStage(BaseStage):
    stage_id = "40_bench_cli"

    def is_complete(self, ctx: InstallContext) -> bool:
        return shutil.which("bench") is not None

    def run(self, ctx: InstallContext) -> None:
        # PEP 668: system pip refuses to install while these markers exist.
        for marker in sorted(Path("/usr/lib").glob("python3.*/EXTERNALLY-MANAGED")):
            run_cmd(as_root(["rm", "-f", str(marker)]), dry_run=ctx.dry_run)

        package = str((load_packages_manifest().get("bench") or {}).get("pip_package") or "frappe-bench")
        run_cmd(as_root(["python3", "-m", "pip", "install", "--upgrade", "pip"]), dry_run=ctx.dry_run)
        run_cmd(as_root(["python3", "-m", "pip", "install", package]), dry_run=ctx.dry_run)
        logger.info("Installed %s", package)
