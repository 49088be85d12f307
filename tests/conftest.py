"""
Pytest configuration and shared fixtures.

No external tool (cmake, ctest, git, clang-format, ...) is ever spawned:
`fake_run` replaces subprocess.run and records every argument vector.
"""

import subprocess

import pytest

from gojo import commands


class FakeRun:
    """Stand-in for subprocess.run that records calls and returns `returncode`."""

    def __init__(self):
        self.calls = []
        self.returncode = 0

    def __call__(self, argv, **kwargs):
        self.calls.append((list(argv), kwargs))
        if kwargs.get("check") and self.returncode:
            raise subprocess.CalledProcessError(self.returncode, argv)
        return subprocess.CompletedProcess(argv, self.returncode)

    @property
    def argvs(self):
        return [argv for argv, _ in self.calls]


@pytest.fixture()
def fake_run(monkeypatch):
    fake = FakeRun()
    monkeypatch.setattr(subprocess, "run", fake)
    return fake


@pytest.fixture()
def project(tmp_path, fake_run):
    """A freshly initialized `demo` project; `fake_run` is reset afterwards."""
    assert commands.init_cmd(["demo"], cwd=tmp_path) == 0
    fake_run.calls.clear()
    return tmp_path / "demo"
