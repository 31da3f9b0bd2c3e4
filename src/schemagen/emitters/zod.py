"""Zod schema emitter."""

from __future__ import annotations

from typing import Iterable, List

from schemagen.emitters.formatting import INDENT, join_blocks, jsdoc_lines, json_string
from schemagen.emitters.typescript import property_key, table_tags
from schemagen.models import PropDef, Shape, TypeRecord
from schemagen.sorting import sort_records

HEADER = 'import { z } from "zod";\n\n'


def schema_name(type_name: str) -> str:
    return f"{type_name}Schema"


def _describe(description: str | None) -> str:
    return f".describe({json_string(description)})" if description else ""


def property_schema(prop: PropDef) -> str:
    """Validator expression for one property.

    Optionality applies to the property itself, so it wraps the array levels:
    a nullable `text[]` column is `z.string().array().optional()`, matching the
    `tags?:string[]` interface property.
    """
    schema = prop.type.zod_type()
    schema += ".array()" * prop.array_dimensions
    if prop.optional:
        schema += ".optional()"
    return schema + _describe(prop.description)


def render_object_schema(record: TypeRecord) -> str:
    type_def = record.type_def
    lines = ["/**", f' * Zod schema for the "{type_def.name}" interface']
    lines.extend(f" * {tag}" for tag in table_tags(type_def))
    lines.append(" */")
    lines.append(f"export const {schema_name(type_def.name)}=z.object({{")
    for prop in type_def.props:
        lines.append(f"{INDENT}{property_key(prop.name)}:{property_schema(prop)},")
    lines.append(f"}}){_describe(type_def.description)};")
    return "\n".join(lines)


def render_enum_schema(record: TypeRecord) -> str:
    type_def = record.type_def
    lines: List[str] = ["/**"]
    if type_def.description:
        lines.append(jsdoc_lines(type_def.description))
    lines.append(f' * Zod schema for the "{type_def.name}" union')
    lines.append(" */")
    if record.enum_values:
        values = ",".join(json_string(value) for value in record.enum_values)
        schema = f"z.enum([{values}])"
    else:
        schema = "z.never()"
    lines.append(
        f"export const {schema_name(type_def.name)}={schema}{_describe(type_def.description)};"
    )
    return "\n".join(lines)


def render_zod(records: Iterable[TypeRecord]) -> str:
    """Render one runtime schema object per type, enums first."""
    blocks = [
        render_enum_schema(record) if record.shape is Shape.ENUM else render_object_schema(record)
        for record in sort_records(records)
    ]
    return join_blocks(blocks, header=HEADER)
