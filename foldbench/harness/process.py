"""
Timed invocation of the external folding executable.

The runner depends on a launcher capability (resolve, launch, wait) rather
than on ``subprocess`` directly, so tests can substitute a scripted
launcher and a fake clock.
"""

import os
import shutil
import subprocess
import sys
import time
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Optional, Protocol, Sequence

from foldbench.instrumentation.timing import Clock, timed
from foldbench.scenarios.corpus import InputCase
from foldbench.scenarios.definitions import ConfigurationSpec


class HarnessError(Exception):
    """Base exception for errors that abort a benchmark run."""


class ExecutableNotFoundError(HarnessError):
    """The external executable is missing or cannot be executed."""

    def __init__(self, executable: str, reason: str = "not found"):
        super().__init__(f"Executable {executable!r} {reason}")
        self.executable = executable
        self.reason = reason


class Outcome(Enum):
    """Classification of one timed invocation."""

    SUCCESS = "success"
    FAILURE = "failure"
    TIMEOUT = "timeout"


@dataclass(frozen=True)
class Sample:
    """One observed measurement."""

    configuration_label: str
    elapsed_ms: float
    outcome: Outcome
    exit_code: Optional[int] = None
    source_label: Optional[str] = None

    @property
    def authoritative(self) -> bool:
        """Only successful durations may feed statistics or throughput."""
        return self.outcome is Outcome.SUCCESS

    def to_dict(self) -> dict:
        return {
            "configuration_label": self.configuration_label,
            "source_label": self.source_label,
            "elapsed_ms": self.elapsed_ms,
            "outcome": self.outcome.value,
            "exit_code": self.exit_code,
            "authoritative": self.authoritative,
        }


class Launcher(Protocol):
    """Capability set needed to run one child process."""

    def resolve(self, executable: str) -> str:
        """Return a launchable path or raise ExecutableNotFoundError."""
        ...

    def launch(self, argv: Sequence[str]) -> Any:
        """Start the child and return a handle."""
        ...

    def wait(self, handle: Any, timeout: Optional[float]) -> Optional[int]:
        """Block until exit; return the exit status, or None if it was killed on timeout."""
        ...


class SubprocessLauncher:
    """Launcher backed by ``subprocess.Popen`` with all output discarded."""

    def resolve(self, executable: str) -> str:
        path = Path(executable)
        if path.parent != Path(".") or path.exists():
            if not path.exists():
                raise ExecutableNotFoundError(executable)
            if not path.is_file():
                raise ExecutableNotFoundError(executable, "is not a file")
            if not os.access(path, os.X_OK):
                raise ExecutableNotFoundError(executable, "is not executable")
            # Popen searches PATH for bare names, never the working directory
            return str(path.absolute())

        found = shutil.which(executable)
        if found is None:
            raise ExecutableNotFoundError(executable, "not found on PATH")
        return found

    def launch(self, argv: Sequence[str]) -> subprocess.Popen:
        try:
            return subprocess.Popen(
                list(argv),
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except OSError as e:
            raise ExecutableNotFoundError(argv[0], f"could not be launched: {e}") from e

    def wait(self, handle: subprocess.Popen, timeout: Optional[float]) -> Optional[int]:
        try:
            return handle.wait(timeout=timeout)
        except subprocess.TimeoutExpired:
            handle.kill()
            handle.wait()
            return None


class ProcessRunner:
    """Runs the executable once per (configuration, input) and times it."""

    def __init__(
        self,
        executable: str,
        launcher: Optional[Launcher] = None,
        success_code: int = 0,
        timeout_seconds: Optional[float] = None,
        clock: Clock = time.perf_counter,
        verbose: bool = True,
    ):
        self.executable = executable
        self.launcher = launcher or SubprocessLauncher()
        self.success_code = success_code
        self.timeout_seconds = timeout_seconds
        self.clock = clock
        self.verbose = verbose
        self._resolved: Optional[str] = None

    def preflight(self) -> str:
        """Verify the executable exists; raises ExecutableNotFoundError."""
        self._resolved = self.launcher.resolve(self.executable)
        return self._resolved

    def build_argv(self, config: ConfigurationSpec, case: InputCase) -> list[str]:
        """``<executable> [argument_set] <input>``"""
        executable = self._resolved or self.executable
        return [executable, *config.argument_set, case.input_ref]

    def classify(self, exit_code: Optional[int]) -> Outcome:
        if exit_code is None:
            return Outcome.TIMEOUT
        if exit_code == self.success_code:
            return Outcome.SUCCESS
        return Outcome.FAILURE

    def run(self, config: ConfigurationSpec, case: InputCase) -> Sample:
        """Launch synchronously and return one Sample.

        A non-success exit is recorded, never raised. Only launch errors
        (missing executable) propagate.
        """
        argv = self.build_argv(config, case)

        with timed(config.label, clock=self.clock) as timer:
            handle = self.launcher.launch(argv)
            exit_code = self.launcher.wait(handle, self.timeout_seconds)

        outcome = self.classify(exit_code)
        if self.verbose and outcome is not Outcome.SUCCESS:
            detail = "timed out" if outcome is Outcome.TIMEOUT else f"exited with {exit_code}"
            print(
                f"Warning: CDSfold execution failed for {case.source_label} "
                f"[{config.label}] ({detail})",
                file=sys.stderr,
            )

        return Sample(
            configuration_label=config.label,
            elapsed_ms=timer.elapsed_ms,
            outcome=outcome,
            exit_code=exit_code,
            source_label=case.source_label,
        )
