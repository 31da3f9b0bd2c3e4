"""Adapt sqlglot statements into parser-independent declaration nodes."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from sqlglot import exp
from sqlglot.tokens import Token, TokenType

from schemagen.errors import MalformedDeclaration
from schemagen.parsing.nodes import (
    ColumnNode,
    ConstraintNode,
    DataTypeRef,
    DeclarationNode,
    EnumDeclaration,
    TableDeclaration,
    UnsupportedDeclaration,
)

logger = logging.getLogger(__name__)

_OPENERS = (TokenType.L_PAREN, TokenType.L_BRACKET)
_CLOSERS = (TokenType.R_PAREN, TokenType.R_BRACKET)

# Pseudo-types whose values the database always supplies.
_SERIAL_TYPES = {"serial", "smallserial", "bigserial"}

Span = Tuple[int, int]


@dataclass(frozen=True)
class StatementChunk:
    """The tokens of one statement and what sqlglot made of them."""

    tokens: Tuple[Token, ...]
    expression: Optional[exp.Expression]

    @property
    def start(self) -> int:
        return self.tokens[0].start

    @property
    def end(self) -> int:
        # Token.end is inclusive.
        return self.tokens[-1].end + 1

    @property
    def keyword_texts(self) -> List[str]:
        return [token.text.upper() for token in self.tokens]


def normalize_statement(chunk: StatementChunk) -> DeclarationNode:
    """Classify one statement as a table, an enum, or unsupported.

    Raises:
        MalformedDeclaration: a table without a column list or an enum without
            a value list.
    """
    enum = _normalize_enum(chunk)
    if enum is not None:
        return enum

    expression = chunk.expression
    create_kind = str(expression.args.get("kind") or "") if expression is not None else ""
    if isinstance(expression, exp.Create) and create_kind.upper() == "TABLE":
        return _normalize_table(expression, chunk)

    kind = " ".join(chunk.keyword_texts[:2]).lower()
    logger.debug(f"Ignoring unsupported statement '{kind}' at offset {chunk.start}")
    return UnsupportedDeclaration(kind=kind, start=chunk.start, end=chunk.end)


def _normalize_enum(chunk: StatementChunk) -> Optional[EnumDeclaration]:
    """Match `CREATE TYPE name AS ENUM ('a', ...)` on the token stream."""
    texts = chunk.keyword_texts
    if len(texts) < 2 or texts[0] != "CREATE" or texts[1] != "TYPE":
        return None
    try:
        as_index = texts.index("AS", 2)
    except ValueError:
        return None
    if as_index + 1 >= len(texts) or texts[as_index + 1] != "ENUM":
        return None

    name_parts = [t.text for t in chunk.tokens[2:as_index] if t.token_type != TokenType.DOT]
    if not name_parts:
        raise MalformedDeclaration("Enum declaration has no name")
    name = name_parts[-1]
    schema = name_parts[-2] if len(name_parts) > 1 else None

    body = chunk.tokens[as_index + 2 :]
    if (
        len(body) < 2
        or body[0].token_type != TokenType.L_PAREN
        or body[-1].token_type != TokenType.R_PAREN
    ):
        raise MalformedDeclaration(f"Enum '{name}' has no value list", name=name)

    values = tuple(t.text for t in body[1:-1] if t.token_type == TokenType.STRING)
    return EnumDeclaration(
        name=name, values=values, schema=schema, start=chunk.start, end=chunk.end
    )


def _normalize_table(create: exp.Create, chunk: StatementChunk) -> TableDeclaration:
    schema_node = create.this
    table_node = schema_node.this if isinstance(schema_node, exp.Schema) else schema_node
    if not isinstance(table_node, exp.Table) or not table_node.name:
        raise MalformedDeclaration("Table declaration has no name")

    name = table_node.name
    if not isinstance(schema_node, exp.Schema):
        # CREATE TABLE ... AS SELECT and friends
        raise MalformedDeclaration(f"Table '{name}' has no column list", name=name)

    elements = schema_node.expressions
    spans: Sequence[Optional[Span]] = element_spans(chunk.tokens)
    if len(spans) != len(elements):
        logger.debug(
            f"Table '{name}': {len(spans)} source elements for {len(elements)} parsed elements, "
            "column offsets unavailable"
        )
        spans = [None] * len(elements)

    columns: List[ColumnNode] = []
    constraints: List[ConstraintNode] = []
    for element, span in zip(elements, spans):
        if isinstance(element, exp.ColumnDef):
            columns.append(_normalize_column(element, span, table=name))
        else:
            constraints.append(_normalize_constraint(element))

    return TableDeclaration(
        name=name,
        schema=table_node.db or None,
        columns=tuple(columns),
        constraints=tuple(constraints),
        start=chunk.start,
        end=chunk.end,
    )


def element_spans(tokens: Sequence[Token]) -> List[Span]:
    """Source spans of the comma-separated elements in the first parenthesis group."""
    open_index = next(
        (i for i, token in enumerate(tokens) if token.token_type == TokenType.L_PAREN), None
    )
    if open_index is None:
        return []

    spans: List[Span] = []
    depth = 0
    first: Optional[Token] = None
    last: Optional[Token] = None
    for token in tokens[open_index + 1 :]:
        kind = token.token_type
        if depth == 0 and kind in (TokenType.COMMA, TokenType.R_PAREN):
            if first is not None and last is not None:
                spans.append((first.start, last.end + 1))
            first = last = None
            if kind == TokenType.R_PAREN:
                break
            continue
        if kind in _OPENERS:
            depth += 1
        elif kind in _CLOSERS:
            depth -= 1
        if first is None:
            first = token
        last = token
    return spans


def _normalize_column(column: exp.ColumnDef, span: Optional[Span], *, table: str) -> ColumnNode:
    name = column.name
    kind = column.args.get("kind")
    if not name or kind is None:
        raise MalformedDeclaration(
            f"Column '{name}' of table '{table}' has no type", table=table, column=name
        )

    data_type = data_type_ref(kind)
    not_null = primary = has_default = False
    for constraint in column.args.get("constraints") or []:
        constraint_kind = constraint
        if isinstance(constraint, exp.ColumnConstraint):
            constraint_kind = constraint.args.get("kind")
        if isinstance(constraint_kind, exp.NotNullColumnConstraint):
            # `null` parses as a NotNull constraint with allow_null set
            not_null = not constraint_kind.args.get("allow_null")
        elif isinstance(constraint_kind, exp.PrimaryKeyColumnConstraint):
            primary = True
        elif isinstance(
            constraint_kind,
            (exp.DefaultColumnConstraint, exp.GeneratedAsIdentityColumnConstraint),
        ):
            has_default = True

    if data_type.name in _SERIAL_TYPES:
        has_default = True

    start, end = span if span else (None, None)
    return ColumnNode(
        name=name,
        data_type=data_type,
        not_null=not_null,
        primary=primary,
        has_default=has_default,
        start=start,
        end=end,
    )


def data_type_ref(node: exp.Expression) -> DataTypeRef:
    """Convert a sqlglot type into a DataTypeRef, unwrapping array levels."""
    if isinstance(node, exp.DataType):
        if node.is_type(exp.DataType.Type.ARRAY) and node.expressions:
            return DataTypeRef(name="array", array_of=data_type_ref(node.expressions[0]))
        if node.this == exp.DataType.Type.USERDEFINED:
            udt = node.args.get("kind")
            udt_name = udt if isinstance(udt, str) else (udt.name if udt is not None else "")
            return DataTypeRef(name=udt_name.split(".")[-1].strip('"'))
        return DataTypeRef(name=node.this.value.lower())
    return DataTypeRef(name=(node.name or node.sql()).lower())


def _normalize_constraint(node: exp.Expression) -> ConstraintNode:
    name: Optional[str] = None
    candidates: Sequence[exp.Expression] = [node]
    if isinstance(node, exp.Constraint):
        name = node.name or None
        candidates = node.expressions

    for candidate in candidates:
        if isinstance(candidate, exp.PrimaryKey):
            return ConstraintNode(kind="primary key", name=name, columns=_key_columns(candidate))
        if isinstance(candidate, exp.ForeignKey):
            return ConstraintNode(kind="foreign key", name=name, columns=_key_columns(candidate))
        if isinstance(candidate, exp.UniqueColumnConstraint):
            return ConstraintNode(kind="unique", name=name)
        if isinstance(candidate, exp.CheckColumnConstraint):
            return ConstraintNode(kind="check", name=name)

    kind = candidates[0].key if candidates else node.key
    return ConstraintNode(kind=kind, name=name)


def _key_columns(node: exp.Expression) -> Tuple[str, ...]:
    names: List[str] = []
    for key in node.expressions:
        target = key.this if isinstance(key, exp.Ordered) else key
        if target.name:
            names.append(target.name)
    return tuple(names)
