from erpnext_installer.lib import hostdetect
from erpnext_installer.lib.command import CmdResult


def test_normalize_arch():
    assert hostdetect.normalize_arch("x86_64") == "amd64"
    assert hostdetect.normalize_arch("aarch64") == "arm64"
    assert hostdetect.normalize_arch("riscv64") == "riscv64"


def test_detect_os_prefers_lsb_release(monkeypatch):
    answers = {"-is": "Ubuntu\n", "-rs": "22.04\n"}
    monkeypatch.setattr(
        hostdetect, "run_cmd", lambda argv, **kw: CmdResult(list(argv), 0, answers[argv[1]], "")
    )
    assert hostdetect.detect_os() == ("Ubuntu", "22.04")


def test_detect_os_falls_back_to_os_release(monkeypatch, tmp_path):
    def missing(argv, **kw):
        raise FileNotFoundError(argv[0])

    monkeypatch.setattr(hostdetect, "run_cmd", missing)
    os_release = tmp_path / "os-release"
    os_release.write_text('PRETTY_NAME="Debian GNU/Linux 12 (bookworm)"\nNAME="Debian GNU/Linux"\nVERSION_ID="12"\nID=debian\n')

    assert hostdetect.detect_os(os_release) == ("Debian", "12")


def test_detect_os_unknown(monkeypatch, tmp_path):
    monkeypatch.setattr(hostdetect, "run_cmd", lambda argv, **kw: CmdResult(list(argv), 1, "", ""))
    assert hostdetect.detect_os(tmp_path / "missing") == ("", "")


def test_server_ip(monkeypatch):
    monkeypatch.setattr(hostdetect, "run_cmd", lambda argv, **kw: CmdResult(list(argv), 0, "10.0.0.5 172.17.0.1\n", ""))
    assert hostdetect.server_ip() == "10.0.0.5"
