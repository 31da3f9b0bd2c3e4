"""Machine-readable JSON artifacts: type list, type map, table map."""

from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, List, Sequence

from schemagen.emitters.formatting import dump_json
from schemagen.models import TypeModel
from schemagen.parsing.nodes import DeclarationNode
from schemagen.sorting import sort_json_value

TS_TABLE_MAP_PREFIX = "export const tableMap="


def type_list_payload(model: TypeModel, *, short: bool = False) -> List[Dict[str, Any]]:
    type_defs = sorted(model.type_defs, key=lambda type_def: type_def.name)
    return sort_json_value([type_def.to_json_dict(short=short) for type_def in type_defs])


def render_type_list(model: TypeModel, *, short: bool = False) -> str:
    """Full type list, or with props flattened to names when `short`."""
    return dump_json(type_list_payload(model, short=short)) + "\n"


def render_type_map(model: TypeModel) -> str:
    payload = {
        key: mapping.model_dump(mode="json", exclude_none=True)
        for key, mapping in model.type_map.items()
    }
    return dump_json(sort_json_value(payload)) + "\n"


def table_map_payload(model: TypeModel) -> Dict[str, Any]:
    return sort_json_value(model.table_map.model_dump(by_alias=True))


def render_table_map(model: TypeModel) -> str:
    return dump_json(table_map_payload(model)) + "\n"


def render_ts_table_map(model: TypeModel) -> str:
    return f"{TS_TABLE_MAP_PREFIX}{dump_json(table_map_payload(model))};\n"


def render_declarations(declarations: Sequence[DeclarationNode]) -> str:
    """Dump the normalized declaration nodes for debugging."""
    payload = [{"node": type(node).__name__, **asdict(node)} for node in declarations]
    return dump_json(payload) + "\n"
