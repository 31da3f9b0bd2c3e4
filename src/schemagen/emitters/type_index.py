"""TypeScript index cross-referencing generated names with type metadata."""

from __future__ import annotations

from typing import Any, Dict

from schemagen.emitters.formatting import dump_json
from schemagen.emitters.zod import schema_name
from schemagen.models import TypeModel
from schemagen.sorting import sort_json_value, sort_records

TYPE_DESCRIPTION_INTERFACE = """/**
 * Links a generated interface and its Zod schema to the declaration it came from
 */
export interface TypeDescription
{
    name:string;
    interfaceName:string;
    schemaName:string;
    kind:"table"|"enum";
    typeDef:Record<string,any>;
}"""


def type_index_payload(model: TypeModel) -> Dict[str, Any]:
    entries: Dict[str, Any] = {}
    for record in sort_records(model.records):
        type_def = record.type_def
        entries[type_def.name] = {
            "name": type_def.name,
            "interfaceName": type_def.name,
            "schemaName": schema_name(type_def.name),
            "kind": type_def.kind.value,
            "typeDef": type_def.to_json_dict(),
        }
    return sort_json_value(entries)


def render_type_index(model: TypeModel) -> str:
    payload = dump_json(type_index_payload(model))
    return (
        f"{TYPE_DESCRIPTION_INTERFACE}\n\n"
        f"export const typeDescriptions:Record<string,TypeDescription>={payload};\n"
    )
