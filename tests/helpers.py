"""Test doubles for harness tests.

Process tests never spawn CDSfold: a scripted launcher stands in for
``subprocess`` and advances a fake clock by a synthetic latency.
"""

from pathlib import Path

from foldbench.harness.process import ExecutableNotFoundError
from foldbench.scenarios.corpus import FILE_PREFIX, FILE_SUFFIX


class FakeClock:
    """Manually advanced monotonic clock, in seconds."""

    def __init__(self):
        self.now = 0.0

    def __call__(self) -> float:
        return self.now

    def advance_ms(self, ms: float) -> None:
        self.now += ms / 1000


def length_of(input_ref: str) -> int:
    name = Path(input_ref).name
    return int(name[len(FILE_PREFIX):-len(FILE_SUFFIX)])


class ScriptedLauncher:
    """Launcher double: latency = length * ms_per_residue, exit code by rule."""

    def __init__(self, clock: FakeClock, ms_per_residue: float = 2.0, failing=(), exit_code: int = 1,
                 hanging=(), missing: bool = False):
        self.clock = clock
        self.ms_per_residue = ms_per_residue
        # (source_label, first flag or "") pairs
        self.failing = set(failing)
        self.hanging = set(hanging)
        self.exit_code = exit_code
        self.missing = missing
        self.calls: list[list[str]] = []

    def resolve(self, executable: str) -> str:
        if self.missing:
            raise ExecutableNotFoundError(executable)
        return executable

    def _key(self, argv):
        flags = argv[1:-1]
        return (Path(argv[-1]).name, flags[0] if flags else "")

    def launch(self, argv):
        self.calls.append(list(argv))
        return list(argv)

    def wait(self, handle, timeout):
        key = self._key(handle)
        if key in self.hanging:
            self.clock.advance_ms((timeout or 0) * 1000)
            return None
        self.clock.advance_ms(length_of(handle[-1]) * self.ms_per_residue)
        return self.exit_code if key in self.failing else 0
