"""Storage-name <-> generated-type-name lookup tables."""

from typing import Iterable

from schemagen.models import Shape, TableMap, TypeRecord


def build_table_map(records: Iterable[TypeRecord]) -> TableMap:
    """Build the table map from table-derived type records.

    Only read shapes get a storage -> type entry; both shapes map back to their
    storage table. Duplicate table names overwrite earlier entries.
    """
    table_map = TableMap()
    for record in records:
        table = record.type_def.sql_table
        if record.shape is Shape.ENUM or not table:
            continue
        if record.shape is Shape.READ:
            table_map.to_name[table] = record.name
        table_map.to_table[record.name] = table
    return table_map
