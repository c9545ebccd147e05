from __future__ import annotations

import logging

from ..context import InstallContext
from ..lib.bench import bench
from ..lib.command import as_root, run_cmd
from ..pipeline import BaseStage

logger = logging.getLogger(__name__)


class NewSiteStage(BaseStage):
    stage_id = "60_new_site"

    def is_complete(self, ctx: InstallContext) -> bool:
        return (ctx.bench_dir / "sites" / ctx.site_name).is_dir()

    def run(self, ctx: InstallContext) -> None:
        # nginx and supervisor need to traverse the home directory.
        run_cmd(as_root(["chmod", "-R", "o+rx", str(ctx.home)]), dry_run=ctx.dry_run)

        db_pw = ctx.db_root_password.reveal()
        admin_pw = ctx.admin_password.reveal()
        bench(
            ctx,
            "new-site",
            ctx.site_name,
            "--db-root-username",
            "root",
            "--db-root-password",
            db_pw,
            "--admin-password",
            admin_pw,
            secrets=[db_pw, admin_pw],
        )
        logger.info("Site %s created", ctx.site_name)
