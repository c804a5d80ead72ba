"""
Inputs and configuration matrix for fold benchmarking.
"""

from .corpus import (
    AMINO_ACIDS,
    InputCase,
    build_corpus,
    case_filename,
    cleanup_corpus,
    generate,
    write_case,
    write_corpus,
)

from .definitions import (
    ConfigurationSpec,
    DEFAULT_CONFIGURATIONS,
    DEFAULT_LENGTHS,
    check_unique_labels,
    get_configuration,
    list_configurations,
    merge_configurations,
    parse_configuration,
)

__all__ = [
    # Corpus
    "AMINO_ACIDS",
    "InputCase",
    "build_corpus",
    "case_filename",
    "cleanup_corpus",
    "generate",
    "write_case",
    "write_corpus",
    # Configurations
    "ConfigurationSpec",
    "DEFAULT_CONFIGURATIONS",
    "DEFAULT_LENGTHS",
    "check_unique_labels",
    "get_configuration",
    "list_configurations",
    "merge_configurations",
    "parse_configuration",
]
