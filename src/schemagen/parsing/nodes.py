"""Parser-independent declaration nodes.

A `DeclarationParser` turns source text into a sequence of these nodes. The
union is closed: every statement is a table, an enum, or unsupported.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple, Union


@dataclass(frozen=True)
class DataTypeRef:
    """A declared column type; arrays nest their element type."""

    name: str
    array_of: Optional["DataTypeRef"] = None


@dataclass(frozen=True)
class ColumnNode:
    name: str
    data_type: DataTypeRef
    not_null: bool = False
    primary: bool = False
    has_default: bool = False
    start: Optional[int] = None
    end: Optional[int] = None


@dataclass(frozen=True)
class ConstraintNode:
    """A table-level constraint such as `primary key (a, b)`."""

    kind: str
    name: Optional[str] = None
    columns: Tuple[str, ...] = ()


@dataclass(frozen=True)
class TableDeclaration:
    name: str
    columns: Tuple[ColumnNode, ...]
    constraints: Tuple[ConstraintNode, ...] = ()
    schema: Optional[str] = None
    start: Optional[int] = None
    end: Optional[int] = None

    @property
    def primary_key_columns(self) -> Tuple[str, ...]:
        keys: list[str] = []
        for constraint in self.constraints:
            if constraint.kind == "primary key":
                keys.extend(constraint.columns)
        return tuple(keys)


@dataclass(frozen=True)
class EnumDeclaration:
    name: str
    values: Tuple[str, ...]
    schema: Optional[str] = None
    start: Optional[int] = None
    end: Optional[int] = None


@dataclass(frozen=True)
class UnsupportedDeclaration:
    """Any statement that is neither a table nor an enum (indexes, functions...)."""

    kind: str
    start: Optional[int] = None
    end: Optional[int] = None


DeclarationNode = Union[TableDeclaration, EnumDeclaration, UnsupportedDeclaration]
