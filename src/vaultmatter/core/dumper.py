"""Serializer producing minimally quoted frontmatter YAML."""

import re
from collections.abc import Iterator
from decimal import Decimal

from vaultmatter.core.errors import UnterminatedLiteralError
from vaultmatter.core.line import find_mapping_colon
from vaultmatter.core.scalars import resolve_scalar
from vaultmatter.core.types import Value

INDENT = "  "

_SPECIAL_FIRST_CHARS = "&!-{['\"#|"
_COMMENT_RE = re.compile(r"\s#")
_KEY_COLON_RE = re.compile(r":[ \t]")


def _reads_as_string(value: str) -> bool:
    try:
        return isinstance(resolve_scalar(value), str)
    except UnterminatedLiteralError:
        return False


def needs_quotes(value: str) -> bool:
    """Check whether a string must be quoted to read back unchanged."""
    stripped = value.strip()
    if not stripped or stripped != value or "\n" in value:
        return True
    if not _reads_as_string(value):
        return True
    # A bare colon (12:30, https://x) is fine; one followed by a blank splits.
    if _KEY_COLON_RE.search(value) or value.endswith(":"):
        return True
    if value[0] in _SPECIAL_FIRST_CHARS:
        return True
    return bool(_COMMENT_RE.search(value))


def _quote(value: str) -> str:
    if value.endswith("\\"):
        # A trailing backslash would escape the closing double quote.
        return "'" + value.replace("'", "''") + "'"
    return '"' + value.replace('"', '\\"') + '"'


def format_string(value: str) -> str:
    if needs_quotes(value):
        return _quote(value)
    return value


def format_number(value: int | float) -> str:
    text = repr(value)
    if isinstance(value, float) and "e" in text:
        # Exponent notation would read back as a string.
        text = format(Decimal(text), "f")
    return text


def format_scalar(value: Value) -> str:
    """Render a scalar; None renders as an empty string."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return format_number(value)
    return format_string(str(value))


def _format_key(key: object) -> str:
    if not isinstance(key, str):
        return format_scalar(key)
    text = format_string(key)
    if text == key and find_mapping_colon(f"{key}:") != len(key):
        # An open quote or bracket in the key would hide its colon.
        return _quote(key)
    return text


def _block_header(value: str) -> str:
    """Pick `|` indicators so the block reads back exactly."""
    header = "|"
    first = next((line for line in value.split("\n") if line.strip(" \t")), " ")
    if first[0] in " \t":
        header += str(len(INDENT))
    if value.endswith("\n"):
        header += "+"
    return header


def _block_lines(value: str) -> Iterator[str]:
    keep = value.endswith("\n")
    body = value[:-1] if keep else value
    for line in body.split("\n"):
        # Kept trailing blank lines need their indent to survive splitlines().
        yield INDENT + line if line or keep else ""


def _is_block(value: Value) -> bool:
    return isinstance(value, (list, dict)) and bool(value)


def _dump_lines(value: Value) -> Iterator[str]:
    if isinstance(value, dict):
        if not value:
            yield "{}"
            return
        for key, item in value.items():
            prefix = f"{_format_key(key)}:"
            if _is_block(item):
                yield prefix
                for line in _dump_lines(item):
                    yield INDENT + line
            elif isinstance(item, str) and "\n" in item:
                yield f"{prefix} {_block_header(item)}"
                yield from _block_lines(item)
            elif item is None:
                yield prefix
            else:
                yield f"{prefix} {next(_dump_lines(item))}"
    elif isinstance(value, list):
        if not value:
            yield "[]"
            return
        for item in value:
            if item is None:
                yield "-"
                continue
            nested = _dump_lines(item)
            yield f"- {next(nested)}"
            for line in nested:
                yield INDENT + line if line else ""
    else:
        # Quoted multi-line strings fold back to spaces when read.
        yield from format_scalar(value).split("\n")


def dump(value: Value) -> str:
    """
    Serialize a value tree to frontmatter YAML.

    Mapping keys keep insertion order. Nested collections are indented two
    spaces per level; empty ones render inline as `[]` or `{}`.

    Args:
        value: None, bool, int, float, str, list, or dict

    Returns:
        YAML text without `---` delimiters or a trailing newline
    """
    return "\n".join(_dump_lines(value))
