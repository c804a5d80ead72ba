"""
Benchmark configuration definitions for CDSfold.

A configuration is a named, opaque list of flag tokens passed verbatim to
the executable. The harness never interprets them.
"""

import shlex
from dataclasses import dataclass
from typing import Iterable, Sequence


@dataclass(frozen=True)
class ConfigurationSpec:
    """A named benchmark configuration."""

    label: str
    argument_set: tuple[str, ...] = ()

    @classmethod
    def from_flags(cls, label: str, flags: str = "") -> "ConfigurationSpec":
        """Build from a shell-style flag string, e.g. ``"-w 20"``."""
        return cls(label=label, argument_set=tuple(shlex.split(flags)))

    def to_dict(self) -> dict:
        return {
            "label": self.label,
            "argument_set": list(self.argument_set),
        }


DEFAULT_LENGTHS = (10, 25, 50, 100, 200, 500, 1000)

DEFAULT_CONFIGURATIONS = (
    ConfigurationSpec.from_flags("default"),
    ConfigurationSpec.from_flags("window_20", "-w 20"),
    ConfigurationSpec.from_flags("window_50", "-w 50"),
    ConfigurationSpec.from_flags("exclude_codons", "-e GUA,GUC,CUG"),
    ConfigurationSpec.from_flags("reverse_opt", "-r"),
)


def parse_configuration(text: str) -> ConfigurationSpec:
    """Parse ``LABEL=FLAGS`` (FLAGS may be empty)."""
    label, sep, flags = text.partition("=")
    label = label.strip()
    if not sep or not label:
        raise ValueError(f"Expected LABEL=FLAGS, got {text!r}")
    return ConfigurationSpec.from_flags(label, flags)


def merge_configurations(
    base: Sequence[ConfigurationSpec],
    overrides: Iterable[ConfigurationSpec],
) -> list[ConfigurationSpec]:
    """Replace same-label entries in place and append new ones."""
    merged = list(base)
    for override in overrides:
        for i, existing in enumerate(merged):
            if existing.label == override.label:
                merged[i] = override
                break
        else:
            merged.append(override)
    return merged


def get_configuration(label: str) -> ConfigurationSpec:
    """Look up a default configuration by label."""
    for config in DEFAULT_CONFIGURATIONS:
        if config.label == label:
            return config
    raise ValueError(f"Unknown configuration: {label}")


def list_configurations() -> list[str]:
    """List default configuration labels."""
    return [c.label for c in DEFAULT_CONFIGURATIONS]


def check_unique_labels(configurations: Iterable[ConfigurationSpec]) -> None:
    """Raise ValueError if any label repeats."""
    seen = set()
    for config in configurations:
        if config.label in seen:
            raise ValueError(f"Duplicate configuration label: {config.label}")
        seen.add(config.label)
