from __future__ import annotations

import logging
import os
import shlex
import subprocess
from dataclasses import dataclass
from typing import Iterable, Mapping, Sequence

from ..errors import CommandFailed
from ..logging_utils import REDACTED

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CmdResult:
    argv: list[str]
    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0


def _redact(text: str, secrets: Iterable[str]) -> str:
    for s in secrets:
        if s:
            text = text.replace(s, REDACTED)
    return text


def fmt_argv(argv: Sequence[str], secrets: Iterable[str] = ()) -> str:
    secret_list = list(secrets)
    # Redact before quoting: quoting rewrites any secret that contains a quote.
    return " ".join(shlex.quote(_redact(a, secret_list)) for a in argv)


def is_root() -> bool:
    return os.geteuid() == 0


def as_root(argv: Sequence[str], *, preserve_env: bool = False) -> list[str]:
    """Prefix argv with sudo unless we already run as root."""

    if is_root():
        return list(argv)
    return ["sudo", "-E", *argv] if preserve_env else ["sudo", *argv]


def run_cmd(
    argv: Sequence[str],
    *,
    check: bool = True,
    env: Mapping[str, str] | None = None,
    cwd: str | None = None,
    input_text: str | None = None,
    dry_run: bool = False,
    secrets: Sequence[str] = (),
    capture: bool = True,
) -> CmdResult:
    """Run a command with consistent logging.

    - Always logs the command, with any value in ``secrets`` replaced by ****.
    - ``env`` extends the child's environment only; os.environ is never touched.
    - ``input_text`` is fed on stdin and is never logged.
    - dry_run logs but does not execute.
    - check=True raises CommandFailed on a non-zero exit.
    """

    argv_list = list(argv)
    secret_list = [s for s in secrets if s]
    logger.info("CMD %s", fmt_argv(argv_list, secret_list))

    if dry_run:
        return CmdResult(argv=argv_list, returncode=0, stdout="", stderr="")

    pipe = subprocess.PIPE if capture else None
    p = subprocess.run(
        argv_list,
        input=input_text,
        text=True,
        stdout=pipe,
        stderr=pipe,
        cwd=cwd,
        env=dict(os.environ, **(env or {})),
    )
    stdout = _redact(p.stdout or "", secret_list)
    stderr = _redact(p.stderr or "", secret_list)

    if stdout:
        logger.debug("STDOUT %s", stdout.strip())
    if stderr:
        logger.debug("STDERR %s", stderr.strip())

    if check and p.returncode != 0:
        raise CommandFailed([_redact(a, secret_list) for a in argv_list], p.returncode, stderr)

    return CmdResult(argv=argv_list, returncode=p.returncode, stdout=stdout, stderr=stderr)

