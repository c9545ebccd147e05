from __future__ import annotations

import logging

from ..context import InstallContext
from ..lib.bench import bench, site_bench
from ..pipeline import BaseStage

logger = logging.getLogger(__name__)

APP = "erpnext"


class InstallERPNextStage(BaseStage):
    stage_id = "70_install_erpnext"

    def enabled(self, ctx: InstallContext) -> bool:
        return ctx.install_erpnext

    def is_complete(self, ctx: InstallContext) -> bool:
        if ctx.dry_run or not (ctx.bench_dir / "sites" / ctx.site_name).is_dir():
            return False
        r = site_bench(ctx, "list-apps", check=False)
        return r.returncode == 0 and any(line.split()[0] == APP for line in r.stdout.splitlines() if line.strip())

    def run(self, ctx: InstallContext) -> None:
        if not (ctx.bench_dir / "apps" / APP).is_dir():
            bench(ctx, "get-app", APP, "--branch", ctx.release.branch)
        site_bench(ctx, "install-app", APP)
        logger.info("%s installed on %s", APP, ctx.site_name)
