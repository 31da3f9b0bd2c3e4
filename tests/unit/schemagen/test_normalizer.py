"""Tests for the sqlglot-backed declaration parser and node normalization."""

import logging

import pytest

from schemagen.errors import ConfigurationError, SourceParseError
from schemagen.parsing import (
    DataTypeRef,
    DeclarationParser,
    EnumDeclaration,
    SqlglotDeclarationParser,
    TableDeclaration,
    UnsupportedDeclaration,
)
from schemagen.parsing.dialect import normalize_sqlglot_dialect
from schemagen.parsing.normalizer import element_spans


@pytest.fixture
def parser():
    return SqlglotDeclarationParser()


def _tables(nodes):
    return {node.name: node for node in nodes if isinstance(node, TableDeclaration)}


def test_parser_satisfies_protocol(parser):
    """The sqlglot parser is usable wherever a DeclarationParser is expected."""
    assert isinstance(parser, DeclarationParser)


def test_fixture_declarations_in_source_order(parser, schema_sql):
    """Every statement produces exactly one node, in source order."""
    nodes = parser.parse(schema_sql)

    assert [type(node).__name__ for node in nodes] == [
        "EnumDeclaration",
        "TableDeclaration",
        "UnsupportedDeclaration",
        "TableDeclaration",
        "TableDeclaration",
        "TableDeclaration",
        "UnsupportedDeclaration",
    ]
    assert nodes[2].kind == "create index"


def test_table_names_and_schema(parser, schema_sql):
    """Qualified names split into table name and schema."""
    tables = _tables(parser.parse(schema_sql))

    assert tables["user_profile"].schema == "public"
    assert tables["account"].schema == "public"
    assert tables["membership"].schema is None


def test_column_flags(parser, schema_sql):
    """Nullability, primary key and default flags are read from column constraints."""
    columns = {c.name: c for c in _tables(parser.parse(schema_sql))["user_profile"].columns}

    assert columns["id"].not_null and columns["id"].has_default
    assert columns["name"].not_null and not columns["name"].has_default
    assert not columns["current_mood"].not_null
    assert columns["current_mood"].data_type == DataTypeRef(name="mood")


def test_inline_primary_key(parser, schema_sql):
    """An inline `primary key` marks the column itself."""
    slug = _tables(parser.parse(schema_sql))["tag"].columns[0]
    assert slug.name == "slug"
    assert slug.primary


def test_array_types_nest(parser, schema_sql):
    """Each array level wraps the element type once."""
    columns = {c.name: c for c in _tables(parser.parse(schema_sql))["user_profile"].columns}

    assert columns["tags"].data_type == DataTypeRef(name="array", array_of=DataTypeRef("text"))
    scores = columns["scores"].data_type
    assert scores.array_of is not None and scores.array_of.array_of == DataTypeRef("int")


def test_table_constraints(parser, schema_sql):
    """Named and composite key constraints keep their columns."""
    tables = _tables(parser.parse(schema_sql))

    profile = tables["user_profile"]
    assert [(c.kind, c.name) for c in profile.constraints] == [
        ("primary key", "user_profile_pkey"),
        ("foreign key", "user_profile_account_id_fkey"),
    ]
    assert profile.primary_key_columns == ("id",)
    assert tables["membership"].primary_key_columns == ("account_id", "user_profile_id")


def test_column_spans_cover_column_text(parser, schema_sql):
    """Column offsets slice back to the column's declaration text."""
    column = _tables(parser.parse(schema_sql))["tag"].columns[1]
    assert schema_sql[column.start : column.end] == "label varchar(64)"


def test_statement_span_starts_at_create(parser, schema_sql):
    """Statement offsets point at the first token of the statement."""
    enum = parser.parse(schema_sql)[0]
    assert schema_sql[enum.start :].startswith("create type mood")


def test_enum_values(parser):
    """Enum values are the quoted labels, in order, without quotes."""
    (node,) = parser.parse("create type app.status as enum ('on', 'off');")

    assert isinstance(node, EnumDeclaration)
    assert node.name == "status"
    assert node.schema == "app"
    assert node.values == ("on", "off")


def test_empty_enum(parser):
    """An enum with no labels is still a declaration."""
    (node,) = parser.parse("create type nothing as enum ();")
    assert node.values == ()


@pytest.mark.parametrize(
    "sql",
    [
        "create type bad as enum;",
        "create table copy_of as select 1 as a;",
    ],
)
def test_malformed_declarations_are_skipped(parser, sql, caplog):
    """Malformed tables and enums are dropped with a warning."""
    with caplog.at_level(logging.WARNING, logger="schemagen.parsing.sqlglot_parser"):
        nodes = parser.parse(sql + "\ncreate table ok (a int);")

    assert [node.name for node in nodes] == ["ok"]
    assert "Skipping malformed declaration" in caplog.text


def test_non_enum_type_is_unsupported(parser):
    """Composite types are not enums."""
    (node,) = parser.parse("create type pair as (a int, b int);")
    assert isinstance(node, UnsupportedDeclaration)


def test_unterminated_string_is_fatal(parser):
    """Source that cannot be tokenized aborts the run."""
    with pytest.raises(SourceParseError):
        parser.parse("create type mood as enum ('happy);")


def test_empty_source(parser):
    """Empty input and stray semicolons yield no declarations."""
    assert parser.parse("") == []
    assert parser.parse(" ;; ") == []


def test_element_spans_skip_nested_commas(parser):
    """Commas inside parentheses do not split elements."""
    sql = "create table t (a numeric(10, 2), b int)"
    spans = element_spans(parser.tokenize(sql))
    assert [sql[start:end] for start, end in spans] == ["a numeric(10, 2)", "b int"]


def test_unknown_dialect():
    """An unknown dialect name is a configuration error."""
    with pytest.raises(ConfigurationError, match="Unknown SQL dialect"):
        SqlglotDeclarationParser("not-a-dialect")


@pytest.mark.parametrize(
    "name,expected",
    [("PostgreSQL", "postgres"), ("pg", "postgres"), ("duck", "duckdb"), ("mysql", "mysql")],
)
def test_dialect_aliases(name, expected):
    assert normalize_sqlglot_dialect(name) == expected
