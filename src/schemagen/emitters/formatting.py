"""Text helpers shared by the source emitters."""

import json
from typing import Any, Iterable

INDENT = "    "
TYPE_SEPARATOR = "\n\n"


def escape_js_comment(text: str) -> str:
    return text.replace("*/", "(star)/")


def jsdoc_lines(text: str, indent: str = "") -> str:
    """Render text as the ` * ` body lines of a JSDoc block, without delimiters."""
    body = escape_js_comment(text).replace("\n", f"\n{indent} * ")
    return f"{indent} * {body}"


def jsdoc(text: str, indent: str = "") -> str:
    return f"{indent}/**\n{jsdoc_lines(text, indent)}\n{indent} */"


def convo_comment(text: str, indent: str = "") -> str:
    return f"{indent}# " + text.replace("\n", f"\n{indent}# ")


def json_string(value: Any) -> str:
    """JSON literal for embedding in generated source."""
    return json.dumps(value, ensure_ascii=False)


def dump_json(value: Any) -> str:
    return json.dumps(value, indent=4, ensure_ascii=False)


def join_blocks(blocks: Iterable[str], header: str = "") -> str:
    return header + TYPE_SEPARATOR.join(blocks) + "\n"
