from __future__ import annotations

import logging

from ..context import InstallContext
from ..errors import AuthExhausted
from ..lib.mariadb import ROOT_MARKER, apply_root_configuration, build_root_sql
from ..pipeline import BaseStage
from ..state_store import MarkerStore

logger = logging.getLogger(__name__)


class MariaDBRootStage(BaseStage):
    stage_id = "25_mariadb_root"

    def _markers(self, ctx: InstallContext) -> MarkerStore:
        return MarkerStore(ctx.marker_dir, dry_run=ctx.dry_run)

    def is_complete(self, ctx: InstallContext) -> bool:
        return self._markers(ctx).exists(ROOT_MARKER)

    def run(self, ctx: InstallContext) -> None:
        password = ctx.db_root_password.reveal()
        outcome = apply_root_configuration(
            build_root_sql(password),
            password,
            markers=self._markers(ctx),
            dry_run=ctx.dry_run,
        )
        if not outcome.ok:
            raise AuthExhausted(outcome.attempted, outcome.last_returncode)
        logger.info("MariaDB root configured (%s)", outcome.strategy or outcome.state.value)
