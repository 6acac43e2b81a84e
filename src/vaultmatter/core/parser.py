"""Indentation-sensitive block parser for the frontmatter YAML subset.

The parser walks line records once, keeping an explicit stack of open
containers. Each frame records the column its entries start at; a line that is
less indented closes frames until it lines up with one of them. Only flow
collections (`[a, b]`, `{a: 1}`) recurse, bounded by their bracket depth.
"""

import logging
import re
from dataclasses import dataclass

from vaultmatter.core.errors import (
    KeyFormatError,
    UnterminatedLiteralError,
    YamlIndentationError,
)
from vaultmatter.core.flow import is_flow_collection, parse_flow
from vaultmatter.core.line import (
    Line,
    find_mapping_colon,
    is_sequence_item,
    read_lines,
    split_sequence_item,
)
from vaultmatter.core.scalars import (
    closing_quote,
    is_quoted,
    parse_string,
    resolve_scalar,
)
from vaultmatter.core.types import Value

logger = logging.getLogger(__name__)

# `|`, optionally with an indentation digit and a `+`/`-` chomping indicator
_BLOCK_HEADER_RE = re.compile(r"\|(?:[1-9][+-]?|[+-][1-9]?)?")


@dataclass
class _Frame:
    """An open container and the column its entries start at."""

    indent: int
    container: list | dict
    # Key or index whose value may still turn out to be a nested block.
    pending: str | int | None = None


def _is_plain(line: Line) -> bool:
    return not is_sequence_item(line.content) and find_mapping_colon(line.content) == -1


class _BlockParser:
    def __init__(self, lines: list[Line]):
        self.lines = lines
        self.pos = 0
        self.stack: list[_Frame] = []

    def _peek(self) -> Line | None:
        """Return the next non-blank line without consuming it."""
        while self.pos < len(self.lines):
            line = self.lines[self.pos]
            if not line.is_blank:
                return line
            self.pos += 1
        return None

    def _pop(self) -> Line | None:
        line = self._peek()
        if line is not None:
            self.pos += 1
        return line

    def parse(self) -> Value:
        first = self._peek()
        if first is None:
            return None
        if first.indent != 0:
            raise YamlIndentationError(
                "Unexpected indentation at document start", first.number
            )

        if is_sequence_item(first.content):
            root: list | dict = []
        elif find_mapping_colon(first.content) != -1:
            root = {}
        else:
            return self._parse_root_scalar()

        self.stack = [_Frame(0, root)]
        while True:
            line = self._pop()
            if line is None:
                break
            self._handle(line)
        return root

    def _parse_root_scalar(self) -> Value:
        line = self._pop()
        value = self._resolve_value(line.content, -1, line, allow_block=False)
        extra = self._peek()
        if extra is not None:
            raise KeyFormatError("Unexpected content after document scalar", extra.number)
        return value

    # --- Line dispatch ---

    def _handle(self, line: Line) -> None:
        if self._resolve_pending(line):
            return
        self._close_frames(line)

        frame = self.stack[-1]
        if line.indent != frame.indent:
            raise YamlIndentationError(
                f"Invalid indentation: expected {frame.indent} columns, "
                f"got {line.indent}",
                line.number,
            )

        if isinstance(frame.container, list):
            if not is_sequence_item(line.content):
                raise KeyFormatError("Expected a sequence item", line.number)
            self._sequence_item(frame, line)
            return

        if is_sequence_item(line.content):
            raise YamlIndentationError(
                "Sequence item not allowed at mapping indentation", line.number
            )
        colon = find_mapping_colon(line.content)
        if colon == -1:
            raise KeyFormatError(
                f"Expected 'key: value', got {line.content!r}", line.number
            )
        self._mapping_entry(frame, line, colon)

    def _resolve_pending(self, line: Line) -> bool:
        """
        Attach a nested block to an entry that had no inline value.

        Returns:
            True if the line was consumed as the entry's scalar value
        """
        frame = self.stack[-1]
        if frame.pending is None:
            return False
        slot = frame.pending
        frame.pending = None

        is_mapping = isinstance(frame.container, dict)
        if is_sequence_item(line.content):
            # A mapping's sequence may sit at the key's own column.
            if line.indent > frame.indent or (is_mapping and line.indent == frame.indent):
                child: list | dict = []
                frame.container[slot] = child
                self.stack.append(_Frame(line.indent, child))
            return False
        if line.indent <= frame.indent:
            return False
        if find_mapping_colon(line.content) != -1:
            child = {}
            frame.container[slot] = child
            self.stack.append(_Frame(line.indent, child))
            return False

        frame.container[slot] = self._resolve_value(
            line.content, frame.indent, line, allow_block=False
        )
        return True

    def _close_frames(self, line: Line) -> None:
        while len(self.stack) > 1:
            top = self.stack[-1]
            if line.indent < top.indent:
                self.stack.pop()
            elif (
                isinstance(top.container, list)
                and line.indent == top.indent
                and not is_sequence_item(line.content)
            ):
                # Sequence sharing its parent key's column ends at the next key.
                self.stack.pop()
            else:
                break

    def _mapping_entry(self, frame: _Frame, line: Line, colon: int) -> None:
        key = parse_string(line.content[:colon])
        value = line.content[colon + 1 :].strip()
        if key in frame.container:
            logger.debug(f"Duplicate key {key!r} on line {line.number}")
        frame.container[key] = self._resolve_value(
            value, frame.indent, line, allow_block=True
        )
        if not value:
            frame.pending = key

    def _sequence_item(self, frame: _Frame, line: Line) -> None:
        column, rest = split_sequence_item(line.content)
        items = frame.container
        if not rest:
            items.append(None)
            frame.pending = len(items) - 1
            return

        if is_sequence_item(rest) or find_mapping_colon(rest) != -1:
            # Inline collection: "- a: 1" or "- - 1" continues at the value column.
            child: list | dict = [] if is_sequence_item(rest) else {}
            items.append(child)
            self.stack.append(_Frame(line.indent + column, child))
            _, text = split_sequence_item(line.text)
            self._handle(line.shifted(column, text))
            return

        items.append(self._resolve_value(rest, line.indent, line, allow_block=False))

    # --- Values ---

    def _resolve_value(
        self, value: str, owner_indent: int, line: Line, allow_block: bool
    ) -> Value:
        if not value:
            return None
        if allow_block and _BLOCK_HEADER_RE.fullmatch(value):
            return self._block_scalar(value, owner_indent)
        if value[0] in "[{" and is_flow_collection(value):
            return parse_flow(value)
        if value[0] in "\"'" and (
            closing_quote(value) == -1 or self._has_quoted_continuation(owner_indent)
        ):
            return self._fold_quoted(value, owner_indent, line)

        result = resolve_scalar(value)
        if (
            isinstance(result, str)
            and not is_quoted(value)
            and self._has_plain_continuation(owner_indent)
        ):
            return self._fold_plain(value, owner_indent)
        return result

    def _has_quoted_continuation(self, owner_indent: int) -> bool:
        nxt = self._peek()
        return (
            nxt is not None
            and nxt.indent > owner_indent
            and nxt.content[0] in "\"'"
        )

    def _has_plain_continuation(self, owner_indent: int) -> bool:
        nxt = self._peek()
        return nxt is not None and nxt.indent > owner_indent and _is_plain(nxt)

    def _fold_plain(self, first: str, owner_indent: int) -> str:
        pieces = [first]
        while self._has_plain_continuation(owner_indent):
            pieces.append(self._pop().content)
        return " ".join(pieces)

    def _fold_quoted(self, first: str, owner_indent: int, line: Line) -> str:
        pieces = [first]
        while True:
            nxt = self._peek()
            if nxt is None or nxt.indent <= owner_indent:
                break
            pieces.append(self._pop().content)

        parts: list[str] = []
        buffer: str | None = None
        for piece in pieces:
            buffer = piece if buffer is None else f"{buffer} {piece}"
            if buffer[0] in "\"'" and closing_quote(buffer) == -1:
                continue
            parts.append(parse_string(buffer))
            buffer = None
        if buffer is not None:
            raise UnterminatedLiteralError("Unterminated quoted string", line.number)
        return " ".join(parts)

    def _block_scalar(self, header: str, owner_indent: int) -> str:
        """
        Consume a `|` block verbatim, comments and extra indentation included.

        Trailing blank lines are dropped unless the header has `+`. A digit in
        the header fixes the content column relative to the owning key;
        otherwise the first non-blank line sets it.
        """
        block: list[Line] = []
        while self.pos < len(self.lines):
            line = self.lines[self.pos]
            if line.text and line.indent <= owner_indent:
                break
            block.append(line)
            self.pos += 1

        digits = header.strip("|+-")
        if digits:
            base = owner_indent + int(digits)
        else:
            base = next((line.indent for line in block if line.text), 0)

        keep = "+" in header
        if not keep:
            while block and not block[-1].text and len(block[-1].raw) <= base:
                block.pop()
        text = "\n".join(line.raw[min(base, line.indent) :] for line in block)
        return text + "\n" if keep else text


def parse(text: str) -> Value:
    """
    Parse frontmatter YAML into Python values.

    Args:
        text: Document text without `---` delimiters

    Returns:
        None, bool, int, float, str, list, or dict (in source key order)

    Raises:
        YamlIndentationError: On inconsistent indentation
        KeyFormatError: On a mapping line without a `key: value` separator
        UnterminatedLiteralError: On an unclosed quote or bracket
    """
    lines = read_lines(text)
    result = _BlockParser(lines).parse()
    logger.debug(f"Parsed {len(lines)} lines into {type(result).__name__}")
    return result
