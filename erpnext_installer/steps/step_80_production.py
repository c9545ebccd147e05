from __future__ import annotations

import logging
from pathlib import Path
from typing import List

from ..context import InstallContext
from ..lib.bench import site_bench
from ..lib.command import as_root, run_cmd
from ..pipeline import BaseStage

logger = logging.getLogger(__name__)

_PLAYBOOK = "bench/playbooks/roles/mariadb/tasks/main.yml"


def find_mariadb_playbooks(roots: List[Path] | None = None) -> List[Path]:
    """bench's bundled Ansible role, wherever pip put it."""

    search = roots if roots is not None else [Path("/usr/local/lib"), Path("/usr/lib")]
    found: List[Path] = []
    for root in search:
        found.extend(sorted(root.glob(f"python3*/dist-packages/{_PLAYBOOK}")))
    return found


class ProductionStage(BaseStage):
    stage_id = "80_production"

    def enabled(self, ctx: InstallContext) -> bool:
        return ctx.setup_production

    def run(self, ctx: InstallContext) -> None:
        # Newer Ansible dropped the bare `include:` keyword.
        for playbook in find_mariadb_playbooks():
            logger.info("Patching %s (include -> include_tasks)", str(playbook))
            run_cmd(
                as_root(["sed", "-i", "s/- include: /- include_tasks: /g", str(playbook)]),
                dry_run=ctx.dry_run,
            )

        run_cmd(
            as_root(["bench", "setup", "production", ctx.user], preserve_env=True),
            cwd=str(ctx.bench_dir),
            input_text="y\n" * 50,
            dry_run=ctx.dry_run,
        )
        site_bench(ctx, "scheduler", "enable")
        site_bench(ctx, "scheduler", "resume")
        logger.info("Production setup complete for %s (user=%s)", ctx.site_name, ctx.user)
