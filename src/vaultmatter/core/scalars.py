"""Scalar resolution: null, boolean, number, and string tokens."""

import re

from vaultmatter.core.errors import ScalarFormatError, UnterminatedLiteralError
from vaultmatter.core.types import Scalar

# Plain signed integer or decimal. Dotted dates like 2025.5.6 don't match.
_NUMBER_RE = re.compile(r"[-+]?(?:\d+(?:\.\d+)?|\.\d+)")


def closing_quote(text: str, start: int = 0) -> int:
    """
    Find the quote closing the span opened at `start`.

    Returns:
        Index of the closing quote, or -1 if the span is never closed
    """
    quote = text[start]
    i = start + 1
    while i < len(text):
        ch = text[i]
        if quote == '"' and ch == "\\" and i + 1 < len(text) and text[i + 1] == '"':
            i += 2
            continue
        if quote == "'" and text.startswith("''", i):
            i += 2
            continue
        if ch == quote:
            return i
        i += 1
    return -1


def is_quoted(token: str) -> bool:
    """True if token is exactly one quoted string."""
    return (
        len(token) >= 2
        and token[0] in "\"'"
        and closing_quote(token) == len(token) - 1
    )


def parse_string(token: str) -> str:
    """Parse a plain or quoted string, trimming surrounding whitespace."""
    token = token.strip()
    if not is_quoted(token):
        return token
    inner = token[1:-1]
    if token[0] == '"':
        return inner.replace('\\"', '"')
    return inner.replace("''", "'")


def parse_number(token: str) -> int | float:
    """Parse a plain integer or decimal literal."""
    token = token.strip()
    if not _NUMBER_RE.fullmatch(token):
        raise ScalarFormatError(f"Invalid number: {token!r}")
    if "." in token:
        return float(token)
    return int(token)


def parse_boolean(token: str) -> bool:
    """Parse the exact literals `true` and `false`."""
    token = token.strip()
    if token == "true":
        return True
    if token == "false":
        return False
    raise ScalarFormatError(f"Invalid boolean: {token!r}")


def parse_null(token: str) -> None:
    """Parse `null` or an empty token."""
    token = token.strip()
    if token in ("", "null"):
        return None
    raise ScalarFormatError(f"Invalid null value: {token!r}")


def resolve_scalar(token: str) -> Scalar:
    """
    Resolve a token to the first matching scalar type.

    Order: null, boolean, number, quoted string, plain string.

    Raises:
        UnterminatedLiteralError: If the token opens a quote it never closes
    """
    token = token.strip()
    if token in ("", "null"):
        return None
    if token in ("true", "false"):
        return token == "true"
    if _NUMBER_RE.fullmatch(token):
        return parse_number(token)
    if token[0] in "\"'" and closing_quote(token) == -1:
        raise UnterminatedLiteralError(f"Unterminated quoted string: {token}")
    return parse_string(token)
