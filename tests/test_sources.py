"""Tests for recursive source collection."""

import os

import pytest

from gojo.sources import collect_source_files


def _touch(path):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("")


def test_collects_exactly_matching_files(tmp_path):
    matching = [
        tmp_path / "main.cc",
        tmp_path / "lib" / "a.cc",
        tmp_path / "lib" / "a.h",
        tmp_path / "lib" / "deep" / "b.h",
    ]
    other = [
        tmp_path / "notes.txt",
        tmp_path / "lib" / "a.hpp",
        tmp_path / "lib" / "deep" / "b.cpp",
        tmp_path / "lib" / "deep" / "cc",
        tmp_path / "empty" / "README.md",
    ]
    for path in matching + other:
        _touch(path)

    found = collect_source_files(tmp_path, "cc", "h")

    assert sorted(found) == sorted(matching)


def test_order_is_stable(tmp_path):
    for name in ("b.cc", "a.cc", "c.h"):
        _touch(tmp_path / name)
    assert [p.name for p in collect_source_files(tmp_path, "cc", "h")] == ["a.cc", "b.cc", "c.h"]


def test_missing_root_raises(tmp_path):
    with pytest.raises(OSError):
        collect_source_files(tmp_path / "nope", "cc", "h")


def test_extension_with_plus_signs(tmp_path):
    _touch(tmp_path / "x.c++")
    _touch(tmp_path / "x.h++")
    _touch(tmp_path / "x.cc")
    found = collect_source_files(tmp_path, "c++", "h++")
    assert sorted(p.name for p in found) == ["x.c++", "x.h++"]


@pytest.mark.skipif(not hasattr(os, "symlink") or os.name == "nt", reason="needs POSIX symlinks")
def test_symlink_cycle_terminates(tmp_path):
    _touch(tmp_path / "a" / "one.cc")
    os.symlink(tmp_path, tmp_path / "a" / "loop")

    found = collect_source_files(tmp_path, "cc", "h")

    assert found == [tmp_path / "a" / "one.cc"]


def test_unreadable_subdirectory_raises(tmp_path, monkeypatch):
    _touch(tmp_path / "a.cc")
    _touch(tmp_path / "locked" / "b.cc")
    _touch(tmp_path / "z" / "c.cc")
    real_scandir = os.scandir

    def scandir(path="."):
        if os.fspath(path) == os.fspath(tmp_path / "locked"):
            raise PermissionError(13, "Permission denied", os.fspath(path))
        return real_scandir(path)

    monkeypatch.setattr(os, "scandir", scandir)
    with pytest.raises(PermissionError):
        collect_source_files(tmp_path, "cc", "h")
