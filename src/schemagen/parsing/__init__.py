"""Parser capability: source text in, declaration nodes out."""

from schemagen.parsing.interface import DeclarationParser
from schemagen.parsing.nodes import (
    ColumnNode,
    ConstraintNode,
    DataTypeRef,
    DeclarationNode,
    EnumDeclaration,
    TableDeclaration,
    UnsupportedDeclaration,
)
from schemagen.parsing.sqlglot_parser import SqlglotDeclarationParser

__all__ = [
    "ColumnNode",
    "ConstraintNode",
    "DataTypeRef",
    "DeclarationNode",
    "DeclarationParser",
    "EnumDeclaration",
    "SqlglotDeclarationParser",
    "TableDeclaration",
    "UnsupportedDeclaration",
]
