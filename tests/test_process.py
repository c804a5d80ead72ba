"""Tests for the process runner and its launchers."""

import os
import sys

import pytest
from helpers import ScriptedLauncher

from foldbench.harness.process import (
    ExecutableNotFoundError,
    Outcome,
    ProcessRunner,
    SubprocessLauncher,
)
from foldbench.scenarios.corpus import generate, write_case
from foldbench.scenarios.definitions import ConfigurationSpec

WINDOW_20 = ConfigurationSpec.from_flags("window_20", "-w 20")


def test_argv_layout(launcher, fake_clock):
    runner = ProcessRunner("./src/CDSfold", launcher=launcher, clock=fake_clock, verbose=False)
    runner.run(WINDOW_20, generate(10))
    assert launcher.calls == [["./src/CDSfold", "-w", "20", "test_10.faa"]]


def test_uses_persisted_path(tmp_path, launcher, fake_clock):
    case = write_case(generate(10), tmp_path)
    runner = ProcessRunner("fold", launcher=launcher, clock=fake_clock, verbose=False)
    runner.run(WINDOW_20, case)
    assert launcher.calls[0][-1] == str(tmp_path / "test_10.faa")


def test_success_sample(launcher, fake_clock):
    runner = ProcessRunner("fold", launcher=launcher, clock=fake_clock, verbose=False)
    sample = runner.run(WINDOW_20, generate(25))

    assert sample.outcome is Outcome.SUCCESS
    assert sample.authoritative
    assert sample.configuration_label == "window_20"
    assert sample.source_label == "test_25.faa"
    assert sample.exit_code == 0
    assert sample.elapsed_ms == pytest.approx(50.0)


def test_failure_is_recorded_not_raised(fake_clock, capsys):
    launcher = ScriptedLauncher(fake_clock, failing={("test_10.faa", "-w")}, exit_code=3)
    runner = ProcessRunner("fold", launcher=launcher, clock=fake_clock)
    sample = runner.run(WINDOW_20, generate(10))

    assert sample.outcome is Outcome.FAILURE
    assert not sample.authoritative
    assert sample.exit_code == 3
    # Duration is still measured, just not authoritative
    assert sample.elapsed_ms == pytest.approx(20.0)
    assert "Warning: CDSfold execution failed for test_10.faa" in capsys.readouterr().err


def test_custom_success_code(launcher, fake_clock):
    runner = ProcessRunner("fold", launcher=launcher, success_code=7, clock=fake_clock, verbose=False)
    assert runner.run(WINDOW_20, generate(10)).outcome is Outcome.FAILURE


def test_timeout_outcome(fake_clock):
    launcher = ScriptedLauncher(fake_clock, hanging={("test_10.faa", "-w")})
    runner = ProcessRunner("fold", launcher=launcher, timeout_seconds=0.5, clock=fake_clock, verbose=False)
    sample = runner.run(WINDOW_20, generate(10))
    assert sample.outcome is Outcome.TIMEOUT
    assert sample.exit_code is None
    assert not sample.authoritative


def test_preflight_missing(fake_clock):
    runner = ProcessRunner("fold", launcher=ScriptedLauncher(fake_clock, missing=True))
    with pytest.raises(ExecutableNotFoundError):
        runner.preflight()


def test_sample_to_dict(launcher, fake_clock):
    runner = ProcessRunner("fold", launcher=launcher, clock=fake_clock, verbose=False)
    data = runner.run(WINDOW_20, generate(10)).to_dict()
    assert data["outcome"] == "success"
    assert data["authoritative"] is True


# ── SubprocessLauncher ─────────────────────────────────────────


class TestSubprocessLauncher:
    def test_resolve_missing_path(self, tmp_path):
        with pytest.raises(ExecutableNotFoundError):
            SubprocessLauncher().resolve(str(tmp_path / "CDSfold"))

    def test_resolve_directory(self, tmp_path):
        with pytest.raises(ExecutableNotFoundError, match="not a file"):
            SubprocessLauncher().resolve(str(tmp_path))

    @pytest.mark.skipif(os.name == "nt", reason="POSIX permission bits")
    def test_resolve_not_executable(self, tmp_path):
        path = tmp_path / "CDSfold"
        path.write_text("#!/bin/sh\n")
        path.chmod(0o644)
        with pytest.raises(ExecutableNotFoundError, match="not executable"):
            SubprocessLauncher().resolve(str(path))

    def test_resolve_bare_name_not_on_path(self):
        with pytest.raises(ExecutableNotFoundError, match="PATH"):
            SubprocessLauncher().resolve("definitely-not-a-real-cdsfold-binary")

    def test_real_process_success_and_failure(self):
        runner = ProcessRunner(sys.executable, verbose=False)
        runner.preflight()
        case = generate(10)

        ok = ConfigurationSpec("ok", ("-c", "print('noise' * 1000)"))
        bad = ConfigurationSpec("bad", ("-c", "import sys; sys.exit(4)"))

        good = runner.run(ok, case)
        assert good.outcome is Outcome.SUCCESS
        assert good.elapsed_ms > 0

        failed = runner.run(bad, case)
        assert failed.outcome is Outcome.FAILURE
        assert failed.exit_code == 4

    def test_real_process_timeout(self):
        runner = ProcessRunner(sys.executable, timeout_seconds=0.2, verbose=False)
        slow = ConfigurationSpec("slow", ("-c", "import time; time.sleep(10)"))
        assert runner.run(slow, generate(10)).outcome is Outcome.TIMEOUT

    def test_launch_failure_is_fatal(self, tmp_path):
        with pytest.raises(ExecutableNotFoundError):
            SubprocessLauncher().launch([str(tmp_path / "missing"), "x"])
