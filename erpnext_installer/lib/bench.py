from __future__ import annotations

import logging
import shlex
from pathlib import Path
from typing import Sequence

from ..context import InstallContext
from .command import CmdResult, run_cmd

logger = logging.getLogger(__name__)

# Runs "$@" after loading nvm so node/npm/yarn from nvm are on PATH.
_NVM_WRAPPER = '[ -s "$NVM_DIR/nvm.sh" ] && . "$NVM_DIR/nvm.sh"; exec "$@"'


def nvm_exec(
    ctx: InstallContext,
    argv: Sequence[str],
    *,
    cwd: Path | None = None,
    check: bool = True,
    secrets: Sequence[str] = (),
    input_text: str | None = None,
) -> CmdResult:
    """Run argv in a bash that has sourced $NVM_DIR/nvm.sh."""

    return run_cmd(
        ["bash", "-c", _NVM_WRAPPER, "bash", *argv],
        env={"NVM_DIR": str(ctx.nvm_dir)},
        cwd=str(cwd) if cwd else None,
        check=check,
        dry_run=ctx.dry_run,
        secrets=secrets,
        input_text=input_text,
    )


def nvm(ctx: InstallContext, *args: str) -> CmdResult:
    """Run an nvm subcommand (nvm is a shell function, not a binary)."""

    script = '. "$NVM_DIR/nvm.sh" && nvm ' + " ".join(shlex.quote(a) for a in args)
    return run_cmd(["bash", "-c", script], env={"NVM_DIR": str(ctx.nvm_dir)}, dry_run=ctx.dry_run)


def bench(
    ctx: InstallContext,
    *args: str,
    cwd: Path | None = None,
    check: bool = True,
    secrets: Sequence[str] = (),
    input_text: str | None = None,
) -> CmdResult:
    return nvm_exec(
        ctx,
        ["bench", *args],
        cwd=cwd if cwd is not None else ctx.bench_dir,
        check=check,
        secrets=secrets,
        input_text=input_text,
    )


def site_bench(ctx: InstallContext, *args: str, check: bool = True) -> CmdResult:
    return bench(ctx, "--site", ctx.site_name, *args, check=check)
