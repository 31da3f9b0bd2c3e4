"""TypeScript interface emitter."""

from __future__ import annotations

import re
from typing import Iterable, List

from schemagen.emitters.formatting import INDENT, join_blocks, jsdoc, jsdoc_lines, json_string
from schemagen.models import PropDef, Shape, TypeDef, TypeRecord
from schemagen.sorting import sort_records

_IDENTIFIER = re.compile(r"^[A-Za-z_$][\w$]*$")


def property_key(name: str) -> str:
    """Property name as written in an object type, quoted when not an identifier."""
    return name if _IDENTIFIER.match(name) else json_string(name)


def table_tags(type_def: TypeDef) -> List[str]:
    """JSDoc tags describing where a table type comes from."""
    tags: List[str] = []
    if type_def.insert_for:
        tags.append(f"@insertFor {type_def.insert_for}")
    tags.append(f"@table {type_def.sql_table}")
    if type_def.sql_schema:
        tags.append(f"@schema {type_def.sql_schema}")
    return tags


def _render_prop(prop: PropDef) -> List[str]:
    lines: List[str] = []
    if prop.description:
        lines.append(jsdoc(prop.description, INDENT))
    optional = "?" if prop.optional else ""
    arrays = "[]" * prop.array_dimensions
    lines.append(f"{INDENT}{property_key(prop.name)}{optional}:{prop.type.ts_type()}{arrays};")
    return lines


def render_interface(record: TypeRecord) -> str:
    type_def = record.type_def
    lines = ["/**"]
    if type_def.description:
        lines.append(jsdoc_lines(type_def.description))
    lines.extend(f" * {tag}" for tag in table_tags(type_def))
    lines.append(" */")
    lines.append(f"export interface {type_def.name}")
    lines.append("{")
    for prop in type_def.props:
        lines.extend(_render_prop(prop))
    lines.append("}")
    return "\n".join(lines)


def render_union(record: TypeRecord) -> str:
    type_def = record.type_def
    union = "|".join(json_string(value) for value in record.enum_values) or "never"
    declaration = f"export type {type_def.name}={union};"
    if type_def.description:
        return f"{jsdoc(type_def.description)}\n{declaration}"
    return declaration


def render_typescript(records: Iterable[TypeRecord]) -> str:
    """Render one TypeScript construct per type, enums first."""
    return join_blocks(
        render_union(record) if record.shape is Shape.ENUM else render_interface(record)
        for record in sort_records(records)
    )
