"""Installer logging.

Records go to a log file and the console. Both handlers carry a
``SecretFilter`` that replaces every registered secret with ``****``, in its
raw form and in the shell-quoted form that ``CMD`` lines use.
"""

from __future__ import annotations

import logging
import shlex
from pathlib import Path
from typing import List, Set

from .lib.env import PATHS

DEFAULT_LOG_PATH = PATHS.log_default
FALLBACK_LOG_NAME = "erpnext-installer.log"
REDACTED = "****"

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_DATEFMT = "%Y-%m-%dT%H:%M:%S%z"


class SecretFilter(logging.Filter):
    def __init__(self) -> None:
        super().__init__()
        self._values: Set[str] = set()

    def add(self, value: str) -> None:
        if value:
            self._values.add(value)

    def discard(self, value: str) -> None:
        self._values.discard(value)

    def mask(self, text: str) -> str:
        # Longest first so a secret containing another is masked whole.
        for value in sorted(self._values, key=len, reverse=True):
            text = text.replace(shlex.quote(value), REDACTED).replace(value, REDACTED)
        return text

    def filter(self, record: logging.LogRecord) -> bool:
        if not self._values:
            return True
        message = record.getMessage()
        masked = self.mask(message)
        if masked != message:
            record.msg = masked
            record.args = None
        return True


def secret_filter() -> SecretFilter:
    """The process-wide filter, kept on the root logger."""

    root = logging.getLogger()
    flt = getattr(root, "_erpnext_secret_filter", None)
    if flt is None:
        flt = SecretFilter()
        setattr(root, "_erpnext_secret_filter", flt)
    return flt


def register_secret(value: str) -> None:
    secret_filter().add(value)


def forget_secret(value: str) -> None:
    secret_filter().discard(value)


def _open_file_handler(log_path: str) -> logging.FileHandler:
    try:
        Path(log_path).parent.mkdir(parents=True, exist_ok=True)
        return logging.FileHandler(log_path)
    except OSError:
        # /var/log is usually not writable for the sudo-capable user we run as.
        return logging.FileHandler(str(Path.cwd() / FALLBACK_LOG_NAME))


def build_handlers(log_path: str, *, also_console: bool = True) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [_open_file_handler(log_path)]
    if also_console:
        handlers.append(logging.StreamHandler())

    fmt = logging.Formatter(fmt=_FORMAT, datefmt=_DATEFMT)
    flt = secret_filter()
    for h in handlers:
        h.setFormatter(fmt)
        h.addFilter(flt)
    return handlers


def configure_logging(
    log_path: str = DEFAULT_LOG_PATH,
    level: int = logging.INFO,
    also_console: bool = True,
) -> str:
    """Attach the installer handlers to the root logger once.

    Returns the log file actually used.
    """

    root = logging.getLogger()
    root.setLevel(level)
    if getattr(root, "_erpnext_log_path", None):
        return root._erpnext_log_path  # type: ignore[attr-defined]

    handlers = build_handlers(log_path, also_console=also_console)
    for h in handlers:
        root.addHandler(h)

    actual = handlers[0].baseFilename  # type: ignore[attr-defined]
    setattr(root, "_erpnext_log_path", actual)
    logging.getLogger(__name__).info("Logging initialized (requested=%s, actual=%s)", log_path, actual)
    return actual
