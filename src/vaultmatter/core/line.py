"""Line reader and quote-aware scanning helpers."""

from collections.abc import Iterator
from dataclasses import dataclass

_QUOTES = "\"'"
# A quote only opens a quoted span at the start of a token.
_QUOTE_OPENERS = " \t[{,:"
_WHITESPACE = " \t"


def iter_unquoted(text: str) -> Iterator[tuple[int, str]]:
    """Yield (index, char) for every character outside a quoted span.

    Quote characters that open or close a span are not yielded. An
    unterminated quote swallows the rest of the text. Inside single quotes a
    doubled `''` is an escaped quote.
    """
    quote: str | None = None
    i = 0
    while i < len(text):
        ch = text[i]
        if quote is not None:
            if quote == "'" and text.startswith("''", i):
                i += 2
                continue
            if ch == quote and not (quote == '"' and text[i - 1] == "\\"):
                quote = None
        elif ch in _QUOTES and (i == 0 or text[i - 1] in _QUOTE_OPENERS):
            quote = ch
        else:
            yield i, ch
        i += 1


def is_sequence_item(text: str) -> bool:
    """Check whether text starts a block sequence item."""
    return text == "-" or text.startswith(("- ", "-\t"))


def split_sequence_item(text: str) -> tuple[int, str]:
    """Split a sequence item into (value column, value text)."""
    rest = text[1:].lstrip(_WHITESPACE)
    return len(text) - len(rest), rest


def find_mapping_colon(text: str) -> int:
    """
    Find the colon separating a mapping key from its value.

    Only an unquoted, unescaped colon outside any bracket that is followed by
    whitespace or the end of the text counts.

    Returns:
        Index of the colon, or -1 if text is not a mapping entry
    """
    depth = 0
    for i, ch in iter_unquoted(text):
        if ch in "[{":
            depth += 1
        elif ch in "]}":
            depth = max(depth - 1, 0)
        elif ch == ":" and depth == 0:
            if i > 0 and text[i - 1] == "\\":
                continue
            if i + 1 == len(text) or text[i + 1] in _WHITESPACE:
                return i
    return -1


def _strip_trailing_comment(text: str) -> str:
    if is_sequence_item(text):
        # The item value is scanned on its own so "- #tag" keeps its tag.
        column, rest = split_sequence_item(text)
        return (text[:column] + _strip_trailing_comment(rest)).rstrip()
    for i, ch in iter_unquoted(text):
        if ch == "#" and i > 0 and text[i - 1] in _WHITESPACE:
            return text[:i].rstrip()
    return text


def strip_comment(text: str) -> str:
    """Remove a whole-line or trailing comment from indentation-free text."""
    if text.startswith("#"):
        return ""
    return _strip_trailing_comment(text)


@dataclass(frozen=True)
class Line:
    """A single physical line of input."""

    number: int
    indent: int
    text: str
    content: str
    # Untouched source text, used by block scalars.
    raw: str = ""

    @classmethod
    def from_raw(cls, raw: str, number: int = 1) -> "Line":
        """
        Build a line record from raw input.

        Tabs and spaces each count as one unit of indentation.
        """
        text = raw.lstrip(_WHITESPACE).rstrip()
        indent = len(raw) - len(raw.lstrip(_WHITESPACE))
        return cls(
            number=number,
            indent=indent,
            text=text,
            content=strip_comment(text),
            raw=raw,
        )

    @property
    def is_blank(self) -> bool:
        """True for empty and comment-only lines."""
        return not self.content

    def shifted(self, columns: int, text: str) -> "Line":
        """Return a line for inline content starting `columns` further right."""
        return Line(
            number=self.number,
            indent=self.indent + columns,
            text=text,
            content=strip_comment(text),
            raw=" " * (self.indent + columns) + text,
        )


def read_lines(text: str) -> list[Line]:
    """Split text into line records, numbered from 1."""
    return [
        Line.from_raw(raw, number) for number, raw in enumerate(text.splitlines(), 1)
    ]
