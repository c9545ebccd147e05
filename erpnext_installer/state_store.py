from __future__ import annotations

import json
import logging
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

_SAFE_NAME = re.compile(r"^[A-Za-z0-9_.-]+$")


class MarkerStore:
    """On-disk completion markers for one-time privileged operations.

    A marker is written only after the operation succeeded and is checked
    before every attempt. Markers never contain secrets.
    """

    def __init__(self, directory: str, *, dry_run: bool = False) -> None:
        self.directory = Path(directory)
        self.dry_run = dry_run

    def path(self, name: str) -> Path:
        if not _SAFE_NAME.match(name):
            raise ValueError(f"Invalid marker name: {name!r}")
        return self.directory / f"{name}.done"

    def exists(self, name: str) -> bool:
        return self.path(name).exists()

    def read(self, name: str) -> Optional[Dict[str, Any]]:
        p = self.path(name)
        if not p.exists():
            return None
        data = json.loads(p.read_text(encoding="utf-8") or "{}")
        if not isinstance(data, dict):
            raise ValueError(f"Marker file must contain an object: {p}")
        return data

    def write(self, name: str, **details: Any) -> Path:
        p = self.path(name)
        if self.dry_run:
            logger.info("Would write marker %s", str(p))
            return p
        p.parent.mkdir(parents=True, exist_ok=True)
        payload = {"completed_at": datetime.now(timezone.utc).isoformat(), **details}
        p.write_text(json.dumps(payload, indent=2, sort_keys=True) + "\n", encoding="utf-8")
        logger.info("Wrote marker %s", str(p))
        return p
