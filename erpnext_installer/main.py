from __future__ import annotations

import argparse
import logging
import sys
from typing import Callable, Optional, Sequence, TextIO

from . import prompts
from .context import InstallContext, Release
from .errors import UnsupportedPlatform
from .lib.env import PATHS
from .lib.hostdetect import detect_os, server_ip
from .lib.manifests import load_releases
from .logging_utils import DEFAULT_LOG_PATH, configure_logging
from .pipeline import PipelineResult, Stage, run_pipeline
from .preflight import check_platform, version_at_least
from .steps import (
    BenchCliStage,
    BenchInitStage,
    InstallERPNextStage,
    MariaDBRootStage,
    MariaDBServerStage,
    NewSiteStage,
    NodeRuntimeStage,
    ProductionStage,
    SSLCertificateStage,
    SystemPackagesStage,
    WkhtmltopdfStage,
)

logger = logging.getLogger(__name__)

Reader = Callable[[str], str]


def build_stages() -> list[Stage]:
    return [
        SystemPackagesStage(),
        WkhtmltopdfStage(),
        MariaDBServerStage(),
        MariaDBRootStage(),
        NodeRuntimeStage(),
        BenchCliStage(),
        BenchInitStage(),
        NewSiteStage(),
        InstallERPNextStage(),
        ProductionStage(),
        SSLCertificateStage(),
    ]


class Cancelled(Exception):
    """Operator chose not to continue."""


def check_release(release: Release, os_name: str, os_version: str) -> None:
    """Some releases need a newer host than the base matrix allows."""

    if not release.min_platform:
        return
    by_name = {d.lower(): v for d, v in release.min_platform.items()}
    minimum = by_name.get(os_name.lower())
    if minimum is None or not version_at_least(os_version, minimum):
        needs = " or ".join(f"{d} {v}+" for d, v in release.min_platform.items())
        raise UnsupportedPlatform(os_name, os_version, f"{release.label} requires {needs}")


def configure(
    *,
    os_name: str,
    os_version: str,
    input_fn: Reader = input,
    getpass_fn: Optional[Reader] = None,
    out: Optional[TextIO] = None,
) -> InstallContext:
    """Ask every question up front, before anything touches the host."""

    secret_kw = {"getpass_fn": getpass_fn} if getpass_fn is not None else {}
    io_kw = {"input_fn": input_fn, "out": out}

    releases = [Release.from_manifest(r) for r in load_releases()]
    idx = prompts.choose(
        "Please select the ERPNext version you wish to install:",
        [r.label for r in releases],
        **io_kw,
    )
    release = releases[idx]
    check_release(release, os_name, os_version)
    logger.info("Selected %s (branch %s)", release.label, release.branch)

    db_root = prompts.collect_secret("What is your required SQL root password", **io_kw, **secret_kw)
    site_name = prompts.ask_text("Enter the site name (e.g. erp.example.com)", **io_kw)
    admin = prompts.collect_secret("Enter the ERPNext Administrator password", **io_kw, **secret_kw)

    install_erpnext = prompts.confirm_stage("Would you like to install ERPNext?", **io_kw)
    setup_production = prompts.confirm_stage("Would you like to setup for production?", **io_kw)
    install_ssl = False
    ssl_email = None
    if setup_production:
        install_ssl = prompts.confirm_stage("Install SSL certificate?", **io_kw)
        if install_ssl:
            ssl_email = prompts.ask_text("Enter email for SSL", **io_kw)

    ctx = InstallContext(
        release=release,
        site_name=site_name,
        db_root_password=db_root,
        admin_password=admin,
        install_erpnext=install_erpnext,
        setup_production=setup_production,
        install_ssl=install_ssl,
        ssl_email=ssl_email,
        os_name=os_name,
        os_version=os_version,
    )

    if not prompts.confirm_stage(f"Proceed with the installation of {release.label} on {site_name}?", **io_kw):
        ctx.clear_secrets()
        raise Cancelled()
    return ctx


def exit_code_for(result: PipelineResult) -> int:
    if result.failure is None:
        return 0
    code = result.failure.exit_code
    return code if 0 < code < 256 else 1


def install(
    ctx: InstallContext,
    *,
    stages: Optional[Sequence[Stage]] = None,
) -> PipelineResult:
    try:
        result = run_pipeline(ctx=ctx, stages=build_stages() if stages is None else stages)
    finally:
        ctx.clear_secrets()

    logger.info(
        "Pipeline finished: ran=%s skipped=%s disabled=%s",
        ",".join(result.ran_stages) or "-",
        ",".join(result.skipped_stages) or "-",
        ",".join(result.disabled_stages) or "-",
    )
    if result.failure is not None:
        logger.error("%s", result.failure)
    return result


def main(
    argv: Optional[list[str]] = None,
    *,
    input_fn: Reader = input,
    getpass_fn: Optional[Reader] = None,
    out: Optional[TextIO] = None,
    stages: Optional[Sequence[Stage]] = None,
) -> int:
    p = argparse.ArgumentParser(prog="erpnext-installer")
    p.add_argument("--log", default=DEFAULT_LOG_PATH, help="Path to installer log")
    p.add_argument("--marker-dir", default=PATHS.marker_dir, help="Directory for completion markers")
    p.add_argument("--dry-run", action="store_true", help="Log commands without running them")

    args = p.parse_args(argv)
    configure_logging(log_path=args.log)
    stream = out or sys.stderr

    os_name, os_version = detect_os()
    check = check_platform(os_name, os_version)
    if check.error is not None:
        logger.error("%s", check.error)
        return 1

    stream.write("Welcome to the ERPNext installer.\n")
    try:
        ctx = configure(
            os_name=os_name,
            os_version=os_version,
            input_fn=input_fn,
            getpass_fn=getpass_fn,
            out=out,
        )
    except UnsupportedPlatform as e:
        logger.error("%s", e)
        return 1
    except (Cancelled, KeyboardInterrupt, EOFError):
        stream.write("\nInstallation cancelled.\n")
        logger.info("Installation cancelled by operator")
        return 0

    ctx.marker_dir = args.marker_dir
    ctx.dry_run = bool(args.dry_run)

    try:
        result = install(ctx, stages=stages)
    except KeyboardInterrupt:
        logger.error("Interrupted")
        return 130

    if not result.ok:
        return exit_code_for(result)

    scheme = "https" if ctx.install_ssl else "http"
    host = ctx.site_name if ctx.install_ssl else server_ip()
    stream.write(f"Installation complete! Access your site at: {scheme}://{host}\n")
    return 0
