"""Declaration type name to per-target rendering rules."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, Optional, Sequence

from pydantic import ValidationError

from schemagen.errors import ConfigurationError, InputReadError
from schemagen.models import TypeMapping

logger = logging.getLogger(__name__)

DEFAULT_KEY = "_default"
FALLBACK_MAPPING = TypeMapping(name="string")

_INT_ZOD = "z.number().int()"
_JSON_MAPPING: Dict[str, Any] = {
    "name": "json",
    "ts": "Record<string,any>",
    "zod": "z.record(z.string(),z.any())",
    "convo": "map",
}

DEFAULT_TYPE_MAP: Dict[str, Dict[str, Any]] = {
    DEFAULT_KEY: {"name": "string"},
    "text": {"name": "string"},
    "varchar": {"name": "string"},
    "char": {"name": "string"},
    "int": {"name": "number", "zod": _INT_ZOD},
    "smallint": {"name": "number", "zod": _INT_ZOD},
    "bigint": {"name": "number", "zod": _INT_ZOD},
    "serial": {"name": "number", "zod": _INT_ZOD},
    "smallserial": {"name": "number", "zod": _INT_ZOD},
    "bigserial": {"name": "number", "zod": _INT_ZOD},
    "float": {"name": "number"},
    "double": {"name": "number"},
    "decimal": {"name": "number"},
    "boolean": {"name": "boolean"},
    "json": dict(_JSON_MAPPING),
    "jsonb": dict(_JSON_MAPPING),
}

# Postgres spellings folded onto the sqlglot canonical type name.
TYPE_ALIASES: Dict[str, str] = {
    "int4": "int",
    "integer": "int",
    "int8": "bigint",
    "int2": "smallint",
    "float8": "double",
    "double precision": "double",
    "float4": "float",
    "real": "float",
    "numeric": "decimal",
    "bool": "boolean",
    "timestamp with time zone": "timestamptz",
    "timestamp without time zone": "timestamp",
    "time with time zone": "timetz",
    "time without time zone": "time",
    "character varying": "varchar",
    "character": "char",
    "serial4": "serial",
    "serial8": "bigserial",
    "serial2": "smallserial",
}


def canonical_type_name(type_name: str) -> str:
    """Lowercase a type name and fold known aliases onto their canonical name."""
    normalized = " ".join(type_name.strip().lower().split())
    return TYPE_ALIASES.get(normalized, normalized)


class TypeMappingResolver:
    """Case-insensitive lookup table of type mappings.

    Read-mostly: it is only mutated while override files are merged and while
    enum declarations register their generated names.
    """

    def __init__(self, mappings: Optional[Mapping[str, Any]] = None):
        self._mappings: Dict[str, TypeMapping] = {}
        if mappings:
            self.merge(mappings)

    @classmethod
    def from_config(
        cls,
        *,
        clear_defaults: bool = False,
        overrides: Iterable[Mapping[str, Any]] = (),
    ) -> "TypeMappingResolver":
        """Build a resolver from the built-in table and ordered override tables."""
        resolver = cls(None if clear_defaults else DEFAULT_TYPE_MAP)
        for override in overrides:
            resolver.merge(override)
        return resolver

    def merge(self, overrides: Mapping[str, Any], *, source: Optional[str] = None) -> None:
        """Shallow-merge override fields over existing mappings, per type key.

        Keys are stored under their canonical name, so an override written for
        `int4` or `integer` lands on `int` and appears as `int` in the computed
        type map artifact.
        """
        for raw_key, fields in overrides.items():
            if not isinstance(fields, Mapping):
                raise ConfigurationError(
                    f"Type mapping for '{raw_key}' must be a JSON object"
                    + (f" in {source}" if source else ""),
                    path=source,
                    key=raw_key,
                )
            key = canonical_type_name(raw_key)
            current = self._mappings.get(key)
            merged = current.model_dump(exclude_none=True) if current else {}
            merged.update(fields)
            try:
                self._mappings[key] = TypeMapping.model_validate(merged)
            except ValidationError as exc:
                raise ConfigurationError(
                    f"Invalid type mapping for '{raw_key}': {exc.errors()[0]['msg']}",
                    path=source,
                    key=raw_key,
                ) from exc

    def register_enum(self, sql_name: str, type_name: str) -> TypeMapping:
        """Register the mapping columns typed with an enum resolve to."""
        mapping = TypeMapping(name=type_name, zod=f"{type_name}Schema")
        self._mappings[canonical_type_name(sql_name)] = mapping
        logger.debug(f"Registered enum type mapping {sql_name} -> {type_name}")
        return mapping

    def resolve(self, type_name: str) -> TypeMapping:
        key = canonical_type_name(type_name)
        mapping = self._mappings.get(key)
        if mapping is not None:
            return mapping
        return self._mappings.get(DEFAULT_KEY, FALLBACK_MAPPING)

    def __contains__(self, type_name: object) -> bool:
        return isinstance(type_name, str) and canonical_type_name(type_name) in self._mappings

    def snapshot(self) -> Dict[str, TypeMapping]:
        """Return the merged table ordered by key."""
        return {key: self._mappings[key] for key in sorted(self._mappings)}


def read_type_map_file(path: str | Path) -> Dict[str, Any]:
    """Read one override file; it must contain a flat JSON object."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise InputReadError(f"Unable to read file at path: {path}", path=str(path)) from exc

    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigurationError(
            f"Unable to parse JSON contents of: {path}", path=str(path)
        ) from exc

    if not isinstance(payload, dict):
        raise ConfigurationError(
            f"Type map file should contain a JSON object: {path}", path=str(path)
        )
    return payload


def load_type_map_resolver(
    paths: Sequence[str | Path], *, clear_defaults: bool = False
) -> TypeMappingResolver:
    """Build a resolver, merging override files in the order given."""
    resolver = TypeMappingResolver.from_config(clear_defaults=clear_defaults)
    for path in paths:
        logger.info(f"Load type map {path}")
        resolver.merge(read_type_map_file(path), source=str(path))
    return resolver
