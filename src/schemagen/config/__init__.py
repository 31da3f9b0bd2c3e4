"""Configuration for schema generation runs."""

from schemagen.config.settings import (
    DEFAULT_FILE_NAMES,
    DEFAULT_INSERT_SUFFIX,
    TS_MODULE_KINDS,
    ArtifactKind,
    GeneratorConfig,
    OutputTargets,
)

__all__ = [
    "DEFAULT_FILE_NAMES",
    "DEFAULT_INSERT_SUFFIX",
    "TS_MODULE_KINDS",
    "ArtifactKind",
    "GeneratorConfig",
    "OutputTargets",
]
