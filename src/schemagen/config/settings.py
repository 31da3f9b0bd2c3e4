"""Run configuration: generator settings and artifact destinations."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from pydantic import BaseModel, Field, ValidationError, field_validator

from schemagen.config.env import get_env_bool, get_env_str
from schemagen.errors import ConfigurationError

DEFAULT_INSERT_SUFFIX = "Insertion"
DEFAULT_DIALECT = "postgres"


class GeneratorConfig(BaseModel):
    """Values the compiler consumes; flag parsing happens in the CLI."""

    insert_suffix: str = Field(
        DEFAULT_INSERT_SUFFIX, description="Suffix appended to insertion type names"
    )
    clear_type_map: bool = Field(
        False, description="Discard built-in type mappings before applying overrides"
    )
    type_map_files: List[Path] = Field(
        default_factory=list, description="Override files merged in order"
    )
    dialect: str = Field(DEFAULT_DIALECT, description="sqlglot dialect of the source text")

    @field_validator("insert_suffix")
    @classmethod
    def _suffix_is_single_token(cls, value: str) -> str:
        if any(ch.isspace() for ch in value):
            raise ValueError("insert_suffix must not contain whitespace")
        return value

    @classmethod
    def from_env(cls, **overrides: Any) -> "GeneratorConfig":
        """Build config from SCHEMAGEN_* variables; explicit overrides win.

        Overrides whose value is None are ignored so CLI defaults do not mask
        the environment.
        """
        values: Dict[str, Any] = {}
        suffix = get_env_str("insert_suffix")
        if suffix is not None:
            values["insert_suffix"] = suffix
        clear = get_env_bool("clear_type_map")
        if clear is not None:
            values["clear_type_map"] = clear
        dialect = get_env_str("dialect")
        if dialect:
            values["dialect"] = dialect

        values.update({key: value for key, value in overrides.items() if value is not None})
        try:
            return cls(**values)
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid generator configuration: {exc}") from exc


class ArtifactKind(str, Enum):
    """Every artifact a run can produce."""

    TYPESCRIPT = "ts"
    ZOD = "zod"
    CONVO = "convo"
    TYPE_MAP = "type_map"
    TABLE_MAP = "table_map"
    TS_TABLE_MAP = "ts_table_map"
    TYPE_LIST = "type_list"
    TYPE_LIST_SHORT = "type_list_short"
    TYPE_INDEX = "type_index"
    PARSED_SQL = "parsed_sql"
    BARREL = "barrel"


# File names used when only an output directory is given.
DEFAULT_FILE_NAMES: Dict[ArtifactKind, str] = {
    ArtifactKind.TYPESCRIPT: "types-ts.ts",
    ArtifactKind.ZOD: "types-zod.ts",
    ArtifactKind.CONVO: "types-convo.convo",
    ArtifactKind.TYPE_MAP: "type-map.json",
    ArtifactKind.TABLE_MAP: "type-table-map.json",
    ArtifactKind.TS_TABLE_MAP: "type-table-map-ts.ts",
    ArtifactKind.TYPE_LIST: "type-list.json",
    ArtifactKind.TYPE_LIST_SHORT: "type-list-short.json",
    ArtifactKind.TYPE_INDEX: "type-index.ts",
    ArtifactKind.PARSED_SQL: "type-sql-src.json",
    ArtifactKind.BARREL: "index.ts",
}

# Artifacts that are TypeScript modules and can be re-exported by the barrel.
TS_MODULE_KINDS = (
    ArtifactKind.TYPESCRIPT,
    ArtifactKind.ZOD,
    ArtifactKind.TS_TABLE_MAP,
    ArtifactKind.TYPE_INDEX,
)


class OutputTargets(BaseModel):
    """Destination paths per artifact; an artifact with no paths is not produced."""

    paths: Dict[ArtifactKind, List[Path]] = Field(default_factory=dict)

    @classmethod
    def from_options(
        cls,
        options: Dict[ArtifactKind, Optional[Sequence[str | Path]]],
        out_dirs: Sequence[str | Path] = (),
    ) -> "OutputTargets":
        """Collect per-artifact paths, filling unset ones from the output directories."""
        paths: Dict[ArtifactKind, List[Path]] = {}
        for kind in ArtifactKind:
            explicit = [Path(p) for p in options.get(kind) or []]
            if not explicit and out_dirs:
                explicit = [Path(d) / DEFAULT_FILE_NAMES[kind] for d in out_dirs]
            if explicit:
                paths[kind] = explicit
        return cls(paths=paths)

    def get(self, kind: ArtifactKind) -> List[Path]:
        return list(self.paths.get(kind, []))

    def requested(self, kind: ArtifactKind) -> bool:
        return bool(self.paths.get(kind))
