"""sqlglot-backed declaration parser.

sqlglot parses statements but does not report where each statement or column
starts in the source. Offsets are therefore taken from the token stream: the
text is tokenized once, split on top-level semicolons, and each chunk is parsed
on its own so its first and last tokens bound the statement.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

from sqlglot import exp
from sqlglot.dialects.dialect import Dialect
from sqlglot.errors import ErrorLevel, SqlglotError, TokenError
from sqlglot.tokens import Token, TokenType

from schemagen.errors import ConfigurationError, MalformedDeclaration, SourceParseError
from schemagen.parsing.dialect import normalize_sqlglot_dialect
from schemagen.parsing.nodes import DeclarationNode
from schemagen.parsing.normalizer import StatementChunk, normalize_statement

logger = logging.getLogger(__name__)


def split_statements(tokens: Sequence[Token]) -> List[Tuple[Token, ...]]:
    """Split a token stream on semicolons, dropping empty statements."""
    chunks: List[Tuple[Token, ...]] = []
    current: List[Token] = []
    for token in tokens:
        if token.token_type == TokenType.SEMICOLON:
            if current:
                chunks.append(tuple(current))
                current = []
            continue
        current.append(token)
    if current:
        chunks.append(tuple(current))
    return chunks


class SqlglotDeclarationParser:
    """Parses DDL with sqlglot and normalizes it into declaration nodes."""

    def __init__(self, dialect: str = "postgres"):
        """Initialize the parser for a sqlglot dialect."""
        self.dialect = normalize_sqlglot_dialect(dialect)
        try:
            self._dialect = Dialect.get_or_raise(self.dialect)
        except ValueError as exc:
            raise ConfigurationError(f"Unknown SQL dialect: {dialect}", dialect=dialect) from exc

    def tokenize(self, sql: str) -> List[Token]:
        try:
            return self._dialect.tokenize(sql)
        except TokenError as exc:
            raise SourceParseError(f"Unable to tokenize SQL source: {exc}") from exc

    def parse_statements(self, sql: str) -> List[StatementChunk]:
        """Tokenize `sql` and parse each statement independently."""
        return [
            StatementChunk(tokens=chunk, expression=self._parse_chunk(chunk, sql))
            for chunk in split_statements(self.tokenize(sql))
        ]

    def parse(self, sql: str) -> List[DeclarationNode]:
        nodes: List[DeclarationNode] = []
        for chunk in self.parse_statements(sql):
            try:
                nodes.append(normalize_statement(chunk))
            except MalformedDeclaration as exc:
                logger.warning(f"Skipping malformed declaration at offset {chunk.start}: {exc}")
        return nodes

    def _parse_chunk(self, tokens: Tuple[Token, ...], sql: str) -> Optional[exp.Expression]:
        parser = self._dialect.parser(error_level=ErrorLevel.IGNORE)
        try:
            expressions = parser.parse(list(tokens), sql)
        except SqlglotError as exc:
            logger.debug(f"sqlglot could not parse statement at offset {tokens[0].start}: {exc}")
            return None
        return next((e for e in expressions if e is not None), None)
