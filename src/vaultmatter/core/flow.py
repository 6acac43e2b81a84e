"""Flow collections: inline `[a, b]` sequences and `{a: 1}` mappings."""

from vaultmatter.core.errors import KeyFormatError, UnterminatedLiteralError
from vaultmatter.core.scalars import closing_quote, parse_string, resolve_scalar
from vaultmatter.core.types import Value

_CLOSERS = {"[": "]", "{": "}"}


def matching_bracket(text: str, start: int = 0) -> int:
    """
    Find the bracket closing the one at `start`, skipping quoted spans.

    Returns:
        Index of the matching bracket

    Raises:
        UnterminatedLiteralError: If a bracket or quote is never closed, or a
            closing bracket doesn't match its opener
    """
    stack: list[str] = []
    i = start
    while i < len(text):
        ch = text[i]
        if ch in "\"'" and (i == start or text[i - 1] in " \t[{,:"):
            end = closing_quote(text, i)
            if end == -1:
                raise UnterminatedLiteralError(f"Unterminated quoted string in: {text}")
            i = end + 1
            continue
        if ch in _CLOSERS:
            stack.append(_CLOSERS[ch])
        elif ch in "]}":
            if not stack or stack.pop() != ch:
                raise UnterminatedLiteralError(f"Mismatched {ch!r} in: {text}")
            if not stack:
                return i
        i += 1
    raise UnterminatedLiteralError(f"Unclosed {text[start]!r} in: {text}")


def is_flow_collection(token: str) -> bool:
    """
    Check whether a token is a complete flow collection.

    A token like `[Foo](bar)` opens a bracket but continues after it closes,
    so it is a plain string.
    """
    token = token.strip()
    if not token or token[0] not in _CLOSERS:
        return False
    return matching_bracket(token) == len(token) - 1


def split_elements(inner: str) -> list[str]:
    """Split the inside of a flow collection on top-level commas."""
    elements: list[str] = []
    depth = 0
    current: list[str] = []
    i = 0
    while i < len(inner):
        ch = inner[i]
        if ch in "\"'" and (i == 0 or inner[i - 1] in " \t[{,:"):
            end = closing_quote(inner, i)
            if end == -1:
                raise UnterminatedLiteralError(f"Unterminated quoted string in: {inner}")
            current.append(inner[i : end + 1])
            i = end + 1
            continue
        if ch in "[{":
            depth += 1
        elif ch in "]}":
            depth -= 1
        elif ch == "," and depth == 0:
            elements.append("".join(current).strip())
            current = []
            i += 1
            continue
        current.append(ch)
        i += 1
    last = "".join(current).strip()
    if last:
        elements.append(last)
    return elements


def _split_flow_pair(element: str) -> tuple[str, str]:
    depth = 0
    i = 0
    while i < len(element):
        ch = element[i]
        if ch in "\"'" and (i == 0 or element[i - 1] in " \t[{,:"):
            end = closing_quote(element, i)
            i = (end if end != -1 else len(element)) + 1
            continue
        if ch in "[{":
            depth += 1
        elif ch in "]}":
            depth -= 1
        elif ch == ":" and depth == 0 and (i == 0 or element[i - 1] != "\\"):
            return element[:i], element[i + 1 :]
        i += 1
    raise KeyFormatError(f"Missing ':' in flow mapping entry: {element!r}")


def parse_flow_value(token: str) -> Value:
    """Parse a flow element: a nested collection or a scalar."""
    token = token.strip()
    if token and token[0] in _CLOSERS and is_flow_collection(token):
        return parse_flow(token)
    return resolve_scalar(token)


def parse_flow(token: str) -> list[Value] | dict[str, Value]:
    """
    Parse a complete flow sequence or mapping.

    Raises:
        UnterminatedLiteralError: On an unclosed bracket or quote
        KeyFormatError: On a mapping entry without a colon
    """
    token = token.strip()
    end = matching_bracket(token)
    if end != len(token) - 1:
        raise UnterminatedLiteralError(f"Unexpected text after flow collection: {token}")
    elements = split_elements(token[1:-1])
    if token[0] == "[":
        return [parse_flow_value(element) for element in elements]
    mapping: dict[str, Value] = {}
    for element in elements:
        key, value = _split_flow_pair(element)
        mapping[parse_string(key)] = parse_flow_value(value)
    return mapping
