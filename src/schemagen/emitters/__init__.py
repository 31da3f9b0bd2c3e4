"""Renderers turning a type model into textual artifacts."""

from schemagen.emitters.barrel import render_barrel
from schemagen.emitters.convo import render_convo
from schemagen.emitters.json_artifacts import (
    render_declarations,
    render_table_map,
    render_ts_table_map,
    render_type_list,
    render_type_map,
)
from schemagen.emitters.type_index import render_type_index
from schemagen.emitters.typescript import render_typescript
from schemagen.emitters.zod import render_zod

__all__ = [
    "render_barrel",
    "render_convo",
    "render_declarations",
    "render_table_map",
    "render_ts_table_map",
    "render_type_index",
    "render_type_list",
    "render_type_map",
    "render_typescript",
    "render_zod",
]
