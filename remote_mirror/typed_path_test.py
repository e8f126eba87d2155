import os

import pytest

from .typed_path import AbsDir, AbsFile, Ext, RelDir, RelFile, Remote, TypedPath


def test_typed_path_is_abstract() -> None:
    with pytest.raises(TypeError):
        TypedPath("file")


def test_abs_dir_is_absolute(typed_tmp_path: AbsDir, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(typed_tmp_path.path)
    assert AbsDir("cache") == AbsDir(typed_tmp_path.path / "cache")


@pytest.mark.parametrize(
    "other, expected",
    [
        (RelDir("lib"), AbsDir("/cache/lib")),
        (RelFile("mirror.yaml"), AbsFile("/cache/mirror.yaml")),
    ],
)
def test_abs_dir_join(other: RelDir | RelFile, expected: TypedPath) -> None:
    assert AbsDir("/cache") / other == expected


def test_abs_dir_join_rejects_absolute() -> None:
    with pytest.raises(TypeError):
        AbsDir("/cache") / AbsDir("/lib")  # type: ignore [operator]


def test_abs_dir_extension() -> None:
    assert AbsDir("/cache/lib") + Ext(".lock") == AbsFile("/cache/lib.lock")


def test_abs_dir_parent() -> None:
    assert AbsDir("/cache/lib").parent == AbsDir("/cache")


@pytest.mark.parametrize("name", ["lib", "lib.git", "my-lib_2"])
def test_rel_dir_component(name: str) -> None:
    assert RelDir.component(name) == RelDir(name)


@pytest.mark.parametrize("name", ["", ".", "..", "a/b", "/lib", "lib/"])
def test_rel_dir_component_invalid(name: str) -> None:
    with pytest.raises(ValueError):
        RelDir.component(name)


def test_str_is_quoted() -> None:
    assert str(AbsDir("/cache/lib")) == "'/cache/lib'"
    assert str(Remote("https://example.com/lib.git")) == "'https://example.com/lib.git'"


@pytest.mark.parametrize(
    "left, right, same",
    [
        ("https://example.com/lib.git", "https://example.com/lib.git", True),
        ("https://example.com/lib.git", "https://example.com/lib.git//", True),
        ("https://example.com/lib.git", "https://example.com/other.git", False),
        ("git@example.com:lib.git", "git@example.com:lib.git/", True),
    ],
)
def test_remote_same_as(left: str, right: str, same: bool) -> None:
    assert Remote(left).same_as(Remote(right)) == same


def test_local_remote_same_as(typed_tmp_path: AbsDir) -> None:
    (typed_tmp_path.path / "remote").mkdir()
    os.symlink(typed_tmp_path.path / "remote", typed_tmp_path.path / "link")
    remote = Remote(os.fspath(typed_tmp_path.path / "remote"))
    assert remote.same_as(Remote(os.fspath(typed_tmp_path.path / "link")))
    assert remote.same_as(Remote(os.fspath(typed_tmp_path.path / "remote") + "/"))
