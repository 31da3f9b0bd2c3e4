"""Dialect name handling for sqlglot."""

from typing import Optional

_DIALECT_ALIASES = {
    "postgresql": "postgres",
    "pg": "postgres",
    "psql": "postgres",
    "duck": "duckdb",
    "cockroach": "postgres",
    "cockroachdb": "postgres",
}


def normalize_sqlglot_dialect(dialect: Optional[str]) -> str:
    """Normalize a dialect name for use with sqlglot.

    Args:
        dialect: The dialect name to normalize (e.g., 'PostgreSQL', 'pg').

    Returns:
        A lowercase sqlglot dialect name, "postgres" when unset.
    """
    if not dialect:
        return "postgres"

    d = dialect.lower().strip()
    return _DIALECT_ALIASES.get(d, d)
