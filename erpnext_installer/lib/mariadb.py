"""MariaDB root bootstrap.

The right way to reach root differs between a fresh server (unix socket, no
password), a Debian-family server that ships a maintenance account, and a
server whose root already has a password. We cannot know which one we face,
so the root SQL is applied through an ordered list of strategies and the
first one that works wins.

States: NOT_ATTEMPTED -> TRYING(strategy) -> SUCCEEDED | EXHAUSTED.
ALREADY_DONE is returned when the completion marker exists; nothing runs.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence

from ..state_store import MarkerStore
from .command import CmdResult, as_root, run_cmd
from .env import PATHS

logger = logging.getLogger(__name__)

ROOT_MARKER = "mariadb_root_configured"

Runner = Callable[..., CmdResult]


class BootstrapState(enum.Enum):
    NOT_ATTEMPTED = "not_attempted"
    TRYING = "trying"
    SUCCEEDED = "succeeded"
    EXHAUSTED = "exhausted"
    ALREADY_DONE = "already_done"


def sql_quote(value: str) -> str:
    return value.replace("\\", "\\\\").replace("'", "\\'")


def build_root_sql(password: str) -> str:
    pw = sql_quote(password)
    return "\n".join(
        [
            f"ALTER USER 'root'@'localhost' IDENTIFIED VIA mysql_native_password USING PASSWORD('{pw}');",
            "DELETE FROM mysql.user WHERE User='';",
            "DROP DATABASE IF EXISTS test;",
            "DELETE FROM mysql.db WHERE Db='test' OR Db='test\\_%';",
            "FLUSH PRIVILEGES;",
            "",
        ]
    )


@dataclass(frozen=True)
class AuthStrategy:
    """One way of reaching MariaDB as root.

    Subclasses describe their own argv/env; nothing is shared between attempts.
    """

    name: str = ""

    def available(self) -> bool:
        return True

    def probe(self, runner: Runner, *, dry_run: bool) -> bool:
        return True

    def argv(self) -> List[str]:
        raise NotImplementedError

    def env(self, password: str) -> Dict[str, str]:
        return {}


@dataclass(frozen=True)
class SocketAuth(AuthStrategy):
    name: str = "socket"

    def probe(self, runner: Runner, *, dry_run: bool) -> bool:
        r = runner(as_root(["mysql", "-e", "status"]), check=False, dry_run=dry_run)
        return r.returncode == 0

    def argv(self) -> List[str]:
        return as_root(["mysql"])


@dataclass(frozen=True)
class MaintenanceFileAuth(AuthStrategy):
    name: str = "maintenance-file"
    defaults_file: str = PATHS.mariadb_maintenance_cnf

    def available(self) -> bool:
        return Path(self.defaults_file).is_file()

    def argv(self) -> List[str]:
        return as_root(["mysql", f"--defaults-file={self.defaults_file}"])


@dataclass(frozen=True)
class PasswordAuth(AuthStrategy):
    name: str = "password"

    def argv(self) -> List[str]:
        return as_root(["mysql", "-u", "root"], preserve_env=True)

    def env(self, password: str) -> Dict[str, str]:
        # Only the child process sees this; os.environ is left untouched.
        return {"MYSQL_PWD": password}


def default_strategies() -> List[AuthStrategy]:
    return [SocketAuth(), MaintenanceFileAuth(), PasswordAuth()]


@dataclass
class BootstrapOutcome:
    state: BootstrapState
    strategy: Optional[str] = None
    attempted: List[str] = field(default_factory=list)
    last_returncode: Optional[int] = None

    @property
    def ok(self) -> bool:
        return self.state in (BootstrapState.SUCCEEDED, BootstrapState.ALREADY_DONE)


def apply_root_configuration(
    sql_script: str,
    password: str,
    *,
    markers: MarkerStore,
    strategies: Optional[Sequence[AuthStrategy]] = None,
    runner: Runner = run_cmd,
    dry_run: bool = False,
) -> BootstrapOutcome:
    """Apply sql_script as MariaDB root using the first strategy that works."""

    if markers.exists(ROOT_MARKER):
        logger.info("MariaDB root already configured (marker %s)", str(markers.path(ROOT_MARKER)))
        return BootstrapOutcome(BootstrapState.ALREADY_DONE)

    outcome = BootstrapOutcome(BootstrapState.NOT_ATTEMPTED)

    for strategy in default_strategies() if strategies is None else strategies:
        if not strategy.available():
            logger.info("MariaDB auth %s not available, skipping", strategy.name)
            continue
        if not strategy.probe(runner, dry_run=dry_run):
            logger.info("MariaDB auth %s probe failed", strategy.name)
            outcome.attempted.append(strategy.name)
            continue

        outcome.state = BootstrapState.TRYING
        outcome.attempted.append(strategy.name)
        logger.info("Applying MariaDB root settings via %s", strategy.name)

        r = runner(
            strategy.argv(),
            check=False,
            env=strategy.env(password),
            input_text=sql_script,
            dry_run=dry_run,
            secrets=[password],
        )
        outcome.last_returncode = r.returncode
        if r.returncode == 0:
            outcome.state = BootstrapState.SUCCEEDED
            outcome.strategy = strategy.name
            markers.write(ROOT_MARKER, strategy=strategy.name)
            return outcome

        logger.warning("MariaDB auth %s failed (exit %s)", strategy.name, r.returncode)

    outcome.state = BootstrapState.EXHAUSTED
    logger.error("MariaDB root access exhausted (tried: %s)", ", ".join(outcome.attempted) or "nothing")
    return outcome
