"""Tests for documentation comment recovery."""

import pytest

from schemagen.comments import CommentDirection, recover_comment

SOURCE = """-- Table doc
-- second line
create table t (
  -- Column doc
  a int,

  -- Detached

  b int,
  c int -- trailing
);
"""


def _at(text: str) -> int:
    return SOURCE.index(text)


def test_backward_collects_contiguous_block():
    """All comment lines directly above the declaration form one description."""
    assert recover_comment(SOURCE, _at("create table")) == "Table doc\nsecond line"


def test_backward_ignores_indentation():
    """Indented comments belong to the indented declaration below them."""
    assert recover_comment(SOURCE, _at("a int")) == "Column doc"


@pytest.mark.parametrize("target", ["b int", "c int"])
def test_backward_blank_or_code_line_breaks_association(target):
    """A blank line or a non-comment line between comment and declaration detaches it."""
    assert recover_comment(SOURCE, _at(target)) is None


def test_backward_requires_declaration_to_start_its_line():
    """Text before the position on the same line means there is no leading comment."""
    assert recover_comment(SOURCE, _at("int,")) is None


def test_first_line_has_no_backward_comment():
    """Nothing can precede the first line of the source."""
    assert recover_comment("create table t (a int);", 0) is None


def test_forward_collects_block_below():
    """Forward mode reads comment lines that follow the declaration's line."""
    source = "create table t (a int);\n-- after one\n--after two\nselect 1;"
    result = recover_comment(source, 0, CommentDirection.FORWARD)
    assert result == "after one\nafter two"


def test_forward_without_following_line():
    """A declaration on the last line has nothing after it."""
    assert recover_comment("select 1", 0, CommentDirection.FORWARD) is None


def test_marker_and_single_space_are_stripped():
    """Only the marker and one following space are removed from each line."""
    source = "--  indented text\n--\n-- end\ndecl"
    assert recover_comment(source, source.index("decl")) == " indented text\n\nend"


def test_empty_comment_lines_at_edges_are_trimmed():
    """Leading and trailing empty comment lines do not reach the description."""
    source = "--\n-- body\n--\nx"
    assert recover_comment(source, source.index("x")) == "body"


@pytest.mark.parametrize("position", [None, -1, 10_000])
def test_invalid_position(position):
    """Positions outside the source have no comment."""
    assert recover_comment(SOURCE, position) is None
