from __future__ import annotations

import logging
import shutil
import tempfile
from pathlib import Path

from ..context import InstallContext
from ..errors import InstallerError
from ..lib.command import as_root, run_cmd
from ..lib.hostdetect import detect_arch
from ..lib.manifests import load_packages_manifest
from ..lib.pkg import apt_fix_broken, dpkg_install
from ..pipeline import BaseStage

logger = logging.getLogger(__name__)


class WkhtmltopdfStage(BaseStage):
    stage_id = "15_wkhtmltopdf"

    def is_complete(self, ctx: InstallContext) -> bool:
        return shutil.which("wkhtmltopdf") is not None

    def run(self, ctx: InstallContext) -> None:
        section = load_packages_manifest().get("wkhtmltopdf") or {}
        arch = detect_arch()
        if arch not in (section.get("arches") or []):
            raise InstallerError(f"Unsupported architecture for wkhtmltopdf: {arch}")

        url = str(section["url"]).format(arch=arch)
        with tempfile.TemporaryDirectory(prefix="wkhtmltox-") as tmp:
            deb = str(Path(tmp) / url.rsplit("/", 1)[-1])
            run_cmd(["wget", "-q", "-O", deb, url], dry_run=ctx.dry_run)
            dpkg_install(deb, dry_run=ctx.dry_run)
            apt_fix_broken(dry_run=ctx.dry_run)

        # The upstream package installs into /usr/local/bin only.
        for binary in sorted(Path("/usr/local/bin").glob("wkhtmlto*")):
            target = f"/usr/bin/{binary.name}"
            run_cmd(as_root(["cp", str(binary), target]), check=False, dry_run=ctx.dry_run)
            run_cmd(as_root(["chmod", "a+x", target]), check=False, dry_run=ctx.dry_run)

        logger.info("wkhtmltopdf installed (arch=%s)", arch)
