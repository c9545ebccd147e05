from __future__ import annotations

import logging

from ..context import InstallContext
from ..lib.bench import bench
from ..lib.command import run_cmd
from ..pipeline import BaseStage

logger = logging.getLogger(__name__)


class BenchInitStage(BaseStage):
    stage_id = "50_bench_init"

    def is_complete(self, ctx: InstallContext) -> bool:
        return (ctx.bench_dir / "apps" / "frappe").is_dir()

    def run(self, ctx: InstallContext) -> None:
        if ctx.bench_dir.exists():
            # Left over from an interrupted init; bench refuses to reuse it.
            logger.warning("Removing incomplete bench directory %s", str(ctx.bench_dir))
            run_cmd(["rm", "-rf", str(ctx.bench_dir)], dry_run=ctx.dry_run)

        bench(
            ctx,
            "init",
            ctx.bench_dir.name,
            "--version",
            ctx.release.branch,
            "--verbose",
            cwd=ctx.bench_dir.parent,
        )
        logger.info("Bench initialized at %s (%s)", str(ctx.bench_dir), ctx.release.branch)
