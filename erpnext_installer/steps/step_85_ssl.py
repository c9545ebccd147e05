from __future__ import annotations

import logging
from pathlib import Path

from ..context import InstallContext
from ..errors import InstallerError
from ..lib.command import as_root, run_cmd
from ..lib.env import PATHS
from ..lib.pkg import snap_install_classic
from ..pipeline import BaseStage

logger = logging.getLogger(__name__)


class SSLCertificateStage(BaseStage):
    stage_id = "85_ssl"

    def enabled(self, ctx: InstallContext) -> bool:
        return ctx.setup_production and ctx.install_ssl

    def is_complete(self, ctx: InstallContext) -> bool:
        return (Path(PATHS.letsencrypt_live) / ctx.site_name).is_dir()

    def run(self, ctx: InstallContext) -> None:
        if not ctx.ssl_email:
            raise InstallerError("An e-mail address is required to request a certificate")

        snap_install_classic("certbot", dry_run=ctx.dry_run)
        run_cmd(as_root(["ln", "-sf", "/snap/bin/certbot", "/usr/bin/certbot"]), dry_run=ctx.dry_run)
        run_cmd(
            as_root(
                [
                    "certbot",
                    "--nginx",
                    "--non-interactive",
                    "--agree-tos",
                    "--email",
                    ctx.ssl_email,
                    "-d",
                    ctx.site_name,
                ]
            ),
            dry_run=ctx.dry_run,
        )
        logger.info("TLS certificate issued for %s", ctx.site_name)
