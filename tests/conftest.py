from pathlib import Path

import pytest

from erpnext_installer.context import InstallContext, Release, Secret
from erpnext_installer.errors import CommandFailed
from erpnext_installer.lib.command import CmdResult


class FakeRunner:
    """Stands in for run_cmd: records calls, answers from a rule function."""

    def __init__(self, rule=None):
        self.calls = []
        self._rule = rule or (lambda argv, kw: 0)

    def __call__(self, argv, **kw):
        argv = list(argv)
        self.calls.append((argv, kw))
        answer = self._rule(argv, kw)
        if isinstance(answer, CmdResult):
            return answer
        rc, out = (answer, "") if isinstance(answer, int) else answer
        if kw.get("check", True) and rc != 0:
            raise CommandFailed(argv, rc, "")
        return CmdResult(argv=argv, returncode=rc, stdout=out, stderr="")

    def argvs(self):
        return [argv for argv, _ in self.calls]


@pytest.fixture
def fake_runner():
    return FakeRunner


@pytest.fixture
def release():
    return Release(label="Version 15", branch="version-15", node_major=18)


@pytest.fixture
def make_ctx(tmp_path: Path, release):
    def _make(**overrides):
        values = dict(
            release=release,
            site_name="erp.example.com",
            db_root_password=Secret("db", "r00t'pw"),
            admin_password=Secret("admin", "adm1n"),
            home=tmp_path / "home",
            user="frappe",
            marker_dir=str(tmp_path / "markers"),
        )
        values.update(overrides)
        ctx = InstallContext(**values)
        ctx.home.mkdir(parents=True, exist_ok=True)
        return ctx

    return _make
