"""Unit tests for the external contract build."""

import subprocess

import pytest

from cngn_deployments import build
from cngn_deployments.exceptions import BuildError


class TestRunBuild:
    """Test the run_build function."""

    def test_runs_scarb_build(self, monkeypatch, tmp_path):
        calls = []

        def fake_run(command, check, cwd):
            calls.append((command, check, cwd))
            return subprocess.CompletedProcess(command, 0)

        monkeypatch.setattr(build.subprocess, "run", fake_run)

        build.run_build(cwd=tmp_path)

        assert calls == [(["scarb", "build"], True, tmp_path)]

    def test_non_zero_exit_raises(self, monkeypatch):
        def fake_run(command, check, cwd):
            raise subprocess.CalledProcessError(2, command)

        monkeypatch.setattr(build.subprocess, "run", fake_run)

        with pytest.raises(BuildError) as exc_info:
            build.run_build()

        assert "exit code 2" in str(exc_info.value)

    def test_missing_tool_raises(self, tmp_path):
        with pytest.raises(BuildError) as exc_info:
            build.run_build(command=[str(tmp_path / "no-such-scarb"), "build"])

        assert "not found" in str(exc_info.value)
