from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Protocol, Sequence

from .context import InstallContext
from .errors import AuthExhausted, CommandFailed, InstallerError, StageFailure

logger = logging.getLogger(__name__)


class Stage(Protocol):
    """A single named unit of provisioning work."""

    stage_id: str

    def enabled(self, ctx: InstallContext) -> bool:
        ...

    def is_complete(self, ctx: InstallContext) -> bool:
        ...

    def run(self, ctx: InstallContext) -> None:
        ...


class BaseStage:
    """Defaults: always enabled, never already complete."""

    stage_id = ""

    def enabled(self, ctx: InstallContext) -> bool:
        return True

    def is_complete(self, ctx: InstallContext) -> bool:
        return False

    def run(self, ctx: InstallContext) -> None:
        raise NotImplementedError


@dataclass
class PipelineResult:
    ran_stages: List[str] = field(default_factory=list)
    skipped_stages: List[str] = field(default_factory=list)
    disabled_stages: List[str] = field(default_factory=list)
    failure: Optional[StageFailure] = None

    @property
    def ok(self) -> bool:
        return self.failure is None


def _failure(stage_id: str, exc: Exception) -> StageFailure:
    if isinstance(exc, FileNotFoundError):
        return StageFailure(stage_id, 127, str(exc))
    if isinstance(exc, CommandFailed):
        return StageFailure(stage_id, exc.returncode, str(exc))
    if isinstance(exc, AuthExhausted) and exc.returncode:
        return StageFailure(stage_id, exc.returncode, str(exc))
    return StageFailure(stage_id, 1, str(exc))


def run_pipeline(*, ctx: InstallContext, stages: Sequence[Stage]) -> PipelineResult:
    """Run stages in order; stop at the first failure."""

    result = PipelineResult()

    for stage in stages:
        if not stage.enabled(ctx):
            result.disabled_stages.append(stage.stage_id)
            continue

        if stage.is_complete(ctx):
            logger.info("Skipping stage %s (already completed)", stage.stage_id)
            result.skipped_stages.append(stage.stage_id)
            continue

        logger.info("Running stage %s", stage.stage_id)
        try:
            stage.run(ctx)
        except (InstallerError, OSError) as e:
            result.failure = _failure(stage.stage_id, e)
            logger.error(
                "Stage %s failed with exit status %s", stage.stage_id, result.failure.exit_code
            )
            break
        result.ran_stages.append(stage.stage_id)

    return result
