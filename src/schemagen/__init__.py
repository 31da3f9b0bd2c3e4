"""Compile SQL table and enum declarations into TypeScript, Zod and Convo-Lang types."""

from schemagen.builder import BuildContext, build_type_model
from schemagen.config import ArtifactKind, GeneratorConfig, OutputTargets
from schemagen.errors import (
    ConfigurationError,
    ErrorCode,
    InputReadError,
    MalformedDeclaration,
    OutputWriteError,
    SchemaGenError,
    SourceParseError,
)
from schemagen.models import PropDef, TableMap, TypeDef, TypeKind, TypeMapping, TypeModel
from schemagen.pipeline import compile_schema, generate
from schemagen.type_map import TypeMappingResolver

__version__ = "0.1.0"

__all__ = [
    "ArtifactKind",
    "BuildContext",
    "ConfigurationError",
    "ErrorCode",
    "GeneratorConfig",
    "InputReadError",
    "MalformedDeclaration",
    "OutputTargets",
    "OutputWriteError",
    "PropDef",
    "SchemaGenError",
    "SourceParseError",
    "TableMap",
    "TypeDef",
    "TypeKind",
    "TypeMapping",
    "TypeMappingResolver",
    "TypeModel",
    "build_type_model",
    "compile_schema",
    "generate",
]
