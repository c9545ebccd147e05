from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from .lib.env import PATHS
from .logging_utils import forget_secret, register_secret


class Secret:
    """A credential held in memory only. str() and repr() never show the value."""

    __slots__ = ("label", "_value")

    def __init__(self, label: str, value: str) -> None:
        self.label = label
        self._value: Optional[str] = value
        register_secret(value)

    def reveal(self) -> str:
        if self._value is None:
            raise ValueError(f"Secret {self.label!r} has been cleared")
        return self._value

    def clear(self) -> None:
        if self._value is not None:
            forget_secret(self._value)
        self._value = None

    @property
    def cleared(self) -> bool:
        return self._value is None

    def __repr__(self) -> str:
        return f"Secret({self.label!r}, '****')"

    __str__ = __repr__


@dataclass(frozen=True)
class Release:
    label: str
    branch: str
    node_major: int
    min_platform: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def from_manifest(cls, raw: Dict[str, Any]) -> "Release":
        return cls(
            label=str(raw["label"]),
            branch=str(raw["branch"]),
            node_major=int(raw["node_major"]),
            min_platform={str(k): str(v) for k, v in (raw.get("min_platform") or {}).items()},
        )


@dataclass
class InstallContext:
    """Everything a stage needs, collected before the pipeline starts."""

    release: Release
    site_name: str
    db_root_password: Secret
    admin_password: Secret
    install_erpnext: bool = True
    setup_production: bool = False
    install_ssl: bool = False
    ssl_email: Optional[str] = None
    os_name: str = ""
    os_version: str = ""
    home: Path = field(default_factory=Path.home)
    user: str = field(default_factory=lambda: os.environ.get("USER") or os.environ.get("LOGNAME") or "frappe")
    marker_dir: str = PATHS.marker_dir
    dry_run: bool = False

    @property
    def bench_dir(self) -> Path:
        return self.home / PATHS.bench_dir_name

    @property
    def nvm_dir(self) -> Path:
        return Path(os.environ.get("NVM_DIR") or (self.home / ".nvm"))

    def clear_secrets(self) -> None:
        self.db_root_password.clear()
        self.admin_password.clear()
