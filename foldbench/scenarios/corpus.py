"""
Synthetic amino-acid corpus for fold benchmarking.

Each input case is a FASTA record of a requested length, drawn from a
seeded generator so that the same (length, seed) always yields the same
bytes.
"""

import random
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Iterable, Optional

# 20 amino acids plus the stop symbol
AMINO_ACIDS = "ACDEFGHIKLMNPQRSTVWY*"

FILE_PREFIX = "test_"
FILE_SUFFIX = ".faa"


def case_filename(length: int) -> str:
    """Artifact name for a sequence length; distinct lengths never collide."""
    return f"{FILE_PREFIX}{length}{FILE_SUFFIX}"


@dataclass(frozen=True)
class InputCase:
    """One synthetic test input."""

    sequence_length: int
    content: str
    source_label: str
    path: Optional[Path] = None

    @property
    def input_ref(self) -> str:
        """Reference handed to the external tool."""
        return str(self.path) if self.path is not None else self.source_label

    def to_dict(self) -> dict:
        return {
            "sequence_length": self.sequence_length,
            "source_label": self.source_label,
            "path": str(self.path) if self.path is not None else None,
        }


def generate(length: int, seed: int = 42) -> InputCase:
    """Build a FASTA record of exactly `length` residues.

    A fresh generator is seeded per call, so output depends only on
    (length, seed) and not on what was generated before.
    """
    if isinstance(length, bool) or not isinstance(length, int) or length <= 0:
        raise ValueError(f"length must be a positive integer, got {length!r}")

    rng = random.Random(seed)
    residues = "".join(rng.choice(AMINO_ACIDS) for _ in range(length))
    content = f">{length}_test_sequence\n{residues}"

    return InputCase(
        sequence_length=length,
        content=content,
        source_label=case_filename(length),
    )


def build_corpus(lengths: Iterable[int], seed: int = 42) -> list[InputCase]:
    """Generate one case per length, preserving the given order."""
    return [generate(length, seed) for length in lengths]


def write_case(case: InputCase, directory: Path) -> InputCase:
    """Persist a case as `test_<len>.faa` and return it with its path set."""
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / case.source_label
    path.write_bytes(case.content.encode("ascii"))
    return replace(case, path=path)


def write_corpus(
    cases: Iterable[InputCase],
    directory: Path,
    verbose: bool = True,
) -> list[InputCase]:
    """Persist every case, returning the path-bearing copies in order."""
    if verbose:
        print("Creating test sequence files...")

    written = []
    for case in cases:
        written.append(write_case(case, directory))
        if verbose:
            print(f"  Created: {case.source_label} ({case.sequence_length} amino acids)")
    return written


def cleanup_corpus(directory: Path) -> list[Path]:
    """Remove generated `test_*.faa` artifacts from a directory."""
    removed = []
    for path in sorted(Path(directory).glob(f"{FILE_PREFIX}*{FILE_SUFFIX}")):
        stem = path.name[len(FILE_PREFIX):-len(FILE_SUFFIX)]
        # Leave anything we could not have written
        if not stem.isdigit():
            continue
        path.unlink()
        removed.append(path)
    return removed
