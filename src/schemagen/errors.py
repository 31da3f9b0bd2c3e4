"""Error taxonomy for the schema-to-type-model compiler."""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Bounded error codes surfaced by the CLI and logs."""

    INPUT_READ_ERROR = "INPUT_READ_ERROR"
    SOURCE_PARSE_ERROR = "SOURCE_PARSE_ERROR"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    MALFORMED_DECLARATION = "MALFORMED_DECLARATION"
    OUTPUT_WRITE_ERROR = "OUTPUT_WRITE_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class SchemaGenError(Exception):
    """Base class for all generator errors."""

    code: ErrorCode = ErrorCode.INTERNAL_ERROR

    def __init__(self, message: str, **details: Any):
        super().__init__(message)
        self.message = message
        self.details = details


class InputReadError(SchemaGenError):
    """Raised when a source or configuration file cannot be read."""

    code = ErrorCode.INPUT_READ_ERROR


class SourceParseError(SchemaGenError):
    """Raised when the concatenated source text cannot be tokenized."""

    code = ErrorCode.SOURCE_PARSE_ERROR


class ConfigurationError(SchemaGenError):
    """Raised when a type-map override or setting is invalid."""

    code = ErrorCode.CONFIGURATION_ERROR


class MalformedDeclaration(SchemaGenError):
    """Raised when a table or enum declaration lacks required parts.

    Recoverable: the declaration is skipped and processing continues.
    """

    code = ErrorCode.MALFORMED_DECLARATION


class OutputWriteError(SchemaGenError):
    """Raised when an artifact cannot be written to its destination."""

    code = ErrorCode.OUTPUT_WRITE_ERROR

