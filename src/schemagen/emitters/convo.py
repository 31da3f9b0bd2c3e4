"""Convo-Lang struct emitter."""

from __future__ import annotations

from typing import Iterable, List

from schemagen.emitters.formatting import INDENT, convo_comment, join_blocks, json_string
from schemagen.models import PropDef, Shape, TypeRecord
from schemagen.sorting import sort_records

HEADER = "> define\n\n"


def _render_prop(prop: PropDef) -> List[str]:
    lines: List[str] = []
    if prop.description:
        lines.append(convo_comment(prop.description, INDENT))
    prop_type = prop.type.convo_type()
    for _ in range(prop.array_dimensions):
        prop_type = f"array({prop_type})"
    optional = "?" if prop.optional else ""
    lines.append(f"{INDENT}{prop.name}{optional}: {prop_type}")
    return lines


def render_struct(record: TypeRecord) -> str:
    type_def = record.type_def
    lines: List[str] = []
    if type_def.description:
        lines.append(convo_comment(type_def.description))
    if type_def.insert_for:
        lines.append(f"# insertFor: {type_def.insert_for}")
    lines.append(f"# table: {type_def.sql_table}")
    if type_def.sql_schema:
        lines.append(f"# schema: {type_def.sql_schema}")
    lines.append(f"{type_def.name} = struct(")
    for prop in type_def.props:
        lines.extend(_render_prop(prop))
    lines.append(")")
    return "\n".join(lines)


def render_enum(record: TypeRecord) -> str:
    type_def = record.type_def
    values = " ".join(json_string(value) for value in record.enum_values)
    declaration = f"{type_def.name} = enum({values})"
    if type_def.description:
        return f"{convo_comment(type_def.description)}\n{declaration}"
    return declaration


def render_convo(records: Iterable[TypeRecord]) -> str:
    """Render one struct or enum per type, enums first."""
    blocks = [
        render_enum(record) if record.shape is Shape.ENUM else render_struct(record)
        for record in sort_records(records)
    ]
    return join_blocks(blocks, header=HEADER)
