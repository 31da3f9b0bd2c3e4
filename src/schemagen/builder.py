"""Build the canonical type model from declaration nodes.

Each table yields two type records, the read shape and the insertion shape,
and each enum yields one. Enums are processed before any table so that their
generated names are registered as type mappings by the time a column declared
with the enum type is resolved.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from schemagen.comments import CommentDirection, recover_comment
from schemagen.config.settings import DEFAULT_INSERT_SUFFIX
from schemagen.models import (
    PropDef,
    Shape,
    TypeDef,
    TypeKind,
    TypeModel,
    TypeRecord,
)
from schemagen.naming import to_type_name
from schemagen.parsing.nodes import (
    ColumnNode,
    DataTypeRef,
    DeclarationNode,
    EnumDeclaration,
    TableDeclaration,
    UnsupportedDeclaration,
)
from schemagen.sorting import sort_records
from schemagen.table_map import build_table_map
from schemagen.type_map import TypeMappingResolver

logger = logging.getLogger(__name__)


@dataclass
class BuildContext:
    """State owned by one build run and discarded with it."""

    source: str
    resolver: TypeMappingResolver
    insert_suffix: str = DEFAULT_INSERT_SUFFIX
    comment_direction: CommentDirection = CommentDirection.BACKWARD
    records: List[TypeRecord] = field(default_factory=list)

    def comment_at(self, position: Optional[int]) -> Optional[str]:
        return recover_comment(self.source, position, self.comment_direction)


def strip_array(data_type: DataTypeRef) -> tuple[DataTypeRef, int]:
    """Return the innermost element type and the number of array levels removed."""
    depth = 0
    while data_type.array_of is not None:
        depth += 1
        data_type = data_type.array_of
    return data_type, depth


def is_required(column: ColumnNode, *, primary: bool, shape: Shape) -> bool:
    """Whether a column must be present in the given shape.

    Not-null and primary-key columns are required; on insert a column with a
    default is optional since the database can supply it.
    """
    required = column.not_null or primary
    if shape is Shape.INSERT:
        required = required and not column.has_default
    return required


def build_enum_record(declaration: EnumDeclaration, ctx: BuildContext) -> TypeRecord:
    name = to_type_name(declaration.name)
    ctx.resolver.register_enum(declaration.name, name)
    type_def = TypeDef(
        name=name,
        kind=TypeKind.ENUM,
        description=ctx.comment_at(declaration.start),
        sql_schema=declaration.schema,
    )
    return TypeRecord(
        type_def=type_def,
        base_name=name,
        shape=Shape.ENUM,
        enum_values=tuple(declaration.values),
    )


def build_prop(
    column: ColumnNode,
    *,
    primary_keys: Sequence[str],
    shape: Shape,
    ctx: BuildContext,
) -> PropDef:
    base_type, depth = strip_array(column.data_type)
    mapping = ctx.resolver.resolve(base_type.name)
    primary = column.primary or column.name in primary_keys

    sql_def = None
    if column.start is not None and column.end is not None:
        sql_def = ctx.source[column.start : column.end]

    return PropDef(
        name=column.name,
        type=mapping.model_copy(update={"ts": mapping.ts_type(), "sql": base_type.name}),
        primary=primary,
        description=ctx.comment_at(column.start) if shape is Shape.READ else None,
        sql_def=sql_def,
        optional=not is_required(column, primary=primary, shape=shape),
        has_default=column.has_default,
        is_array=depth > 0,
        array_dimensions=depth,
    )


def build_table_record(
    declaration: TableDeclaration, shape: Shape, ctx: BuildContext
) -> TypeRecord:
    base_name = to_type_name(declaration.name)
    name = base_name + ctx.insert_suffix if shape is Shape.INSERT else base_name
    primary_keys = declaration.primary_key_columns

    props = [
        build_prop(column, primary_keys=primary_keys, shape=shape, ctx=ctx)
        for column in declaration.columns
    ]
    primary_key = next((prop.name for prop in props if prop.primary), None)

    type_def = TypeDef(
        name=name,
        kind=TypeKind.TABLE,
        description=ctx.comment_at(declaration.start) if shape is Shape.READ else None,
        primary_key=primary_key,
        insert_for=base_name if shape is Shape.INSERT else None,
        sql_table=declaration.name,
        sql_schema=declaration.schema,
        props=props,
    )
    return TypeRecord(type_def=type_def, base_name=base_name, shape=shape)


def build_type_model(declarations: Sequence[DeclarationNode], ctx: BuildContext) -> TypeModel:
    """Build every type record in two passes: enums, then tables."""
    for declaration in declarations:
        if isinstance(declaration, EnumDeclaration):
            ctx.records.append(build_enum_record(declaration, ctx))

    skipped = 0
    for declaration in declarations:
        if isinstance(declaration, TableDeclaration):
            for shape in (Shape.READ, Shape.INSERT):
                ctx.records.append(build_table_record(declaration, shape, ctx))
        elif isinstance(declaration, UnsupportedDeclaration):
            skipped += 1
        elif not isinstance(declaration, EnumDeclaration):
            raise TypeError(f"Unexpected declaration node: {type(declaration).__name__}")

    records = tuple(sort_records(ctx.records))
    logger.info(
        f"Built {len(records)} types from {len(declarations)} declarations "
        f"({skipped} unsupported statements ignored)"
    )
    return TypeModel(
        records=records,
        type_map=ctx.resolver.snapshot(),
        table_map=build_table_map(records),
    )
