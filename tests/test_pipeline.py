from erpnext_installer.errors import AuthExhausted, CommandFailed, InstallerError
from erpnext_installer.pipeline import BaseStage, run_pipeline


class RecordingStage(BaseStage):
    def __init__(self, stage_id, log, *, fail=None, done=False, enabled=True):
        self.stage_id = stage_id
        self.log = log
        self.fail = fail
        self.done = done
        self._enabled = enabled

    def enabled(self, ctx):
        return self._enabled

    def is_complete(self, ctx):
        return self.done

    def run(self, ctx):
        self.log.append(self.stage_id)
        if self.fail is not None:
            raise self.fail


def test_fail_fast_stops_before_later_stages(make_ctx):
    log = []
    stages = [
        RecordingStage("A", log),
        RecordingStage("B", log, fail=CommandFailed(["apt-get"], 100)),
        RecordingStage("C", log),
    ]

    result = run_pipeline(ctx=make_ctx(), stages=stages)

    assert log == ["A", "B"]
    assert result.ran_stages == ["A"]
    assert not result.ok
    assert result.failure.stage_id == "B"
    assert result.failure.exit_code == 100


def test_completed_stage_is_skipped_not_failed(make_ctx):
    log = []
    stages = [RecordingStage("A", log, done=True), RecordingStage("B", log)]

    result = run_pipeline(ctx=make_ctx(), stages=stages)

    assert log == ["B"]
    assert result.ok
    assert result.skipped_stages == ["A"]


def test_disabled_stage_does_not_skip_later_required_stages(make_ctx):
    log = []
    stages = [
        RecordingStage("A", log),
        RecordingStage("optional", log, enabled=False),
        RecordingStage("C", log),
    ]

    result = run_pipeline(ctx=make_ctx(), stages=stages)

    assert log == ["A", "C"]
    assert result.disabled_stages == ["optional"]
    assert result.ok


def test_non_command_errors_exit_one(make_ctx):
    result = run_pipeline(ctx=make_ctx(), stages=[RecordingStage("A", [], fail=InstallerError("boom"))])
    assert result.failure.exit_code == 1
    assert "boom" in result.failure.message


def test_auth_exhausted_keeps_mysql_exit_code(make_ctx):
    result = run_pipeline(ctx=make_ctx(), stages=[RecordingStage("db", [], fail=AuthExhausted(["socket"], 1))])
    assert result.failure.stage_id == "db"
    assert result.failure.exit_code == 1


def test_missing_binary_reports_127(make_ctx):
    result = run_pipeline(ctx=make_ctx(), stages=[RecordingStage("A", [], fail=FileNotFoundError("bench"))])
    assert result.failure.exit_code == 127


def test_failure_message_keeps_trailing_punctuation():
    from erpnext_installer.errors import StageFailure

    assert str(StageFailure("A", 2)) == "Stage A failed with exit status 2"
    assert str(StageFailure("A", 2, "bad input:")) == "Stage A failed with exit status 2: bad input:"
