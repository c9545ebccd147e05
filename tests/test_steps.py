import pytest

from erpnext_installer.errors import AuthExhausted, InstallerError
from erpnext_installer.lib import bench as bench_lib
from erpnext_installer.lib import pkg
from erpnext_installer.lib.mariadb import BootstrapOutcome, BootstrapState
from erpnext_installer.steps import (
    BenchInitStage,
    InstallERPNextStage,
    MariaDBRootStage,
    NewSiteStage,
    ProductionStage,
    SSLCertificateStage,
    SystemPackagesStage,
)
from erpnext_installer.steps import step_25_mariadb_root, step_50_bench_init, step_60_new_site
from erpnext_installer.steps.step_80_production import find_mariadb_playbooks
from erpnext_installer.state_store import MarkerStore


def test_system_packages_run_apt_in_order(monkeypatch, make_ctx, fake_runner):
    runner = fake_runner()
    monkeypatch.setattr(pkg, "run_cmd", runner)

    SystemPackagesStage().run(make_ctx())

    verbs = [argv[argv.index("apt-get") + 1] for argv in runner.argvs()]
    assert verbs == ["update", "upgrade", "install"]
    assert "redis-server" in runner.argvs()[-1]


def test_mariadb_root_stage_uses_marker(make_ctx):
    ctx = make_ctx()
    stage = MariaDBRootStage()
    assert not stage.is_complete(ctx)
    MarkerStore(ctx.marker_dir).write("mariadb_root_configured", strategy="socket")
    assert stage.is_complete(ctx)


def test_mariadb_root_stage_raises_when_exhausted(monkeypatch, make_ctx):
    monkeypatch.setattr(
        step_25_mariadb_root,
        "apply_root_configuration",
        lambda *a, **kw: BootstrapOutcome(BootstrapState.EXHAUSTED, attempted=["socket", "password"], last_returncode=1),
    )
    with pytest.raises(AuthExhausted) as exc:
        MariaDBRootStage().run(make_ctx())
    assert exc.value.attempted == ["socket", "password"]


def test_new_site_passes_secrets_for_redaction(monkeypatch, make_ctx, fake_runner):
    runner = fake_runner()
    monkeypatch.setattr(bench_lib, "run_cmd", runner)
    monkeypatch.setattr(step_60_new_site, "run_cmd", runner)
    ctx = make_ctx()

    NewSiteStage().run(ctx)

    argv, kw = runner.calls[-1]
    assert "new-site" in argv and "erp.example.com" in argv
    assert set(kw["secrets"]) == {"r00t'pw", "adm1n"}
    assert kw["cwd"] == str(ctx.bench_dir)


def test_new_site_complete_when_site_dir_exists(make_ctx):
    ctx = make_ctx()
    assert not NewSiteStage().is_complete(ctx)
    (ctx.bench_dir / "sites" / ctx.site_name).mkdir(parents=True)
    assert NewSiteStage().is_complete(ctx)


def test_bench_init_clears_incomplete_dir(monkeypatch, make_ctx, fake_runner):
    runner = fake_runner()
    monkeypatch.setattr(bench_lib, "run_cmd", runner)
    monkeypatch.setattr(step_50_bench_init, "run_cmd", runner)
    ctx = make_ctx()
    ctx.bench_dir.mkdir()

    stage = BenchInitStage()
    assert not stage.is_complete(ctx)
    stage.run(ctx)

    assert runner.argvs()[0] == ["rm", "-rf", str(ctx.bench_dir)]
    init = runner.argvs()[1]
    assert init[init.index("init"):] == ["init", "frappe-bench", "--version", "version-15", "--verbose"]


def test_install_erpnext_follows_operator_choice(make_ctx):
    assert InstallERPNextStage().enabled(make_ctx(install_erpnext=True))
    assert not InstallERPNextStage().enabled(make_ctx(install_erpnext=False))


def test_install_erpnext_detects_installed_app(monkeypatch, make_ctx, fake_runner):
    runner = fake_runner(lambda argv, kw: (0, "frappe 15.0.0 version-15\nerpnext 15.0.0 version-15\n"))
    monkeypatch.setattr(bench_lib, "run_cmd", runner)
    ctx = make_ctx()
    (ctx.bench_dir / "sites" / ctx.site_name).mkdir(parents=True)

    assert InstallERPNextStage().is_complete(ctx)


def test_ssl_requires_production(make_ctx):
    stage = SSLCertificateStage()
    assert not stage.enabled(make_ctx(setup_production=False, install_ssl=True))
    assert stage.enabled(make_ctx(setup_production=True, install_ssl=True))
    assert not ProductionStage().enabled(make_ctx(setup_production=False))


def test_ssl_without_email_fails(make_ctx):
    with pytest.raises(InstallerError):
        SSLCertificateStage().run(make_ctx(setup_production=True, install_ssl=True, ssl_email=None))


def test_find_mariadb_playbooks(tmp_path):
    pb = tmp_path / "local" / "python3.12" / "dist-packages" / "bench/playbooks/roles/mariadb/tasks/main.yml"
    pb.parent.mkdir(parents=True)
    pb.write_text("- include: debian.yml\n")

    assert find_mariadb_playbooks([tmp_path / "local", tmp_path / "none"]) == [pb]
