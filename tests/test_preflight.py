import pytest

from erpnext_installer.errors import UnsupportedPlatform
from erpnext_installer.preflight import check_platform, parse_version, require_platform, version_at_least

MATRIX = {"Ubuntu": "20.04", "Debian": "10"}


@pytest.mark.parametrize(
    "name,version",
    [
        ("Fedora", "39"),
        ("CentOS", "7"),
        ("", ""),
        ("Ubuntu", "18.04"),
        ("Ubuntu", "19.10"),
        ("Debian", "9"),
        ("Ubuntu", ""),
        ("Ubuntu", "n/a"),
    ],
)
def test_unsupported_platforms_are_rejected(name, version):
    result = check_platform(name, version, MATRIX)
    assert not result.ok
    assert isinstance(result.error, UnsupportedPlatform)


@pytest.mark.parametrize("name,version", [("Ubuntu", "20.04"), ("Debian", "10")])
def test_minimum_version_is_inclusive(name, version):
    assert check_platform(name, version, MATRIX).ok


@pytest.mark.parametrize("name,version", [("Ubuntu", "24.04"), ("Debian", "12"), ("debian", "11"), ("Ubuntu", "22.10")])
def test_newer_versions_pass(name, version):
    assert check_platform(name, version, MATRIX).ok


def test_numeric_not_lexicographic():
    assert version_at_least("9.10", "9.9")
    assert not version_at_least("9.1", "9.2")
    assert version_at_least("10", "9.2")
    # "10" < "9" as text
    assert check_platform("Debian", "10", {"Debian": "9"}).ok


def test_missing_components_count_as_zero():
    assert version_at_least("12", "12.0")
    assert version_at_least("12.0", "12")
    assert not version_at_least("12", "12.1")


def test_parse_version():
    assert parse_version("22.04") == (22, 4)
    assert parse_version("") is None
    assert parse_version("22.04-lts") is None


def test_error_names_the_platform():
    with pytest.raises(UnsupportedPlatform) as exc:
        require_platform("Fedora", "39", MATRIX)
    assert "Fedora 39" in str(exc.value)


def test_packaged_matrix():
    assert check_platform("Ubuntu", "22.04").ok
    assert not check_platform("Ubuntu", "18.04").ok
