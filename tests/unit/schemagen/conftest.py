"""Shared fixtures for schema generator tests."""

from pathlib import Path

import pytest

from schemagen.config.settings import GeneratorConfig
from schemagen.pipeline import compile_schema, concat_sources

FIXTURES_DIR = Path(__file__).resolve().parents[2] / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture
def schema_sql() -> str:
    return (FIXTURES_DIR / "schema.sql").read_text(encoding="utf-8")


@pytest.fixture
def compiled(schema_sql):
    """The fixture schema compiled with default configuration."""
    return compile_schema(concat_sources([schema_sql]), GeneratorConfig())


@pytest.fixture
def types_by_name(compiled):
    return {type_def.name: type_def for type_def in compiled.model.type_defs}
