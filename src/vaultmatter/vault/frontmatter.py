"""YAML frontmatter parsing and writing for vault notes.

A note's frontmatter is the block between a `---` first line and the next
`---` line. The block is read and written with the vaultmatter YAML core;
this module only locates it and maps it to a typed model.
"""

import logging
from typing import Any

from pydantic import BaseModel, Field, field_validator

from vaultmatter.core.config import FRONTMATTER_KEY_ORDER
from vaultmatter.core.dumper import dump
from vaultmatter.core.errors import YamlError
from vaultmatter.core.parser import parse

logger = logging.getLogger(__name__)

DELIMITER = "---"


class FrontmatterError(Exception):
    """Raised when a note's frontmatter block is invalid."""

    pass


def _as_string_list(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return [str(item) for item in value if item is not None]
    return [str(value)]


class NoteFrontmatter(BaseModel, frozen=True):
    """Parsed frontmatter from a vault note."""

    id: str | None = None
    aliases: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    metadata: dict[str, Any] = Field(default_factory=dict)

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> str | None:
        if value is None:
            return None
        if isinstance(value, (dict, list)):
            raise ValueError(f"id must be a scalar, got {type(value).__name__}")
        return str(value)

    @field_validator("aliases", mode="before")
    @classmethod
    def _coerce_aliases(cls, value: Any) -> list[str]:
        return _as_string_list(value)

    @field_validator("tags", mode="before")
    @classmethod
    def _coerce_tags(cls, value: Any) -> list[str]:
        # Inline "#tag" syntax is stored without the hash in frontmatter.
        return [tag.lstrip("#") for tag in _as_string_list(value) if tag.lstrip("#")]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "NoteFrontmatter":
        """Create from a parsed frontmatter mapping."""
        metadata = {
            key: value
            for key, value in data.items()
            if key not in ("id", "aliases", "tags")
        }
        return cls(
            id=data.get("id"),
            aliases=data.get("aliases"),
            tags=data.get("tags"),
            metadata=metadata,
        )

    def to_dict(self, key_order: list[str] | None = None) -> dict[str, Any]:
        """
        Convert to an ordered mapping for serialization.

        Keys listed in key_order come first, then the remaining metadata in
        its original order.
        """
        fields: dict[str, Any] = {}
        if self.id is not None:
            fields["id"] = self.id
        fields["aliases"] = list(self.aliases)
        fields["tags"] = list(self.tags)
        fields.update(self.metadata)

        ordered: dict[str, Any] = {}
        for key in key_order if key_order is not None else FRONTMATTER_KEY_ORDER:
            if key in fields:
                ordered[key] = fields[key]
        for key, value in fields.items():
            ordered.setdefault(key, value)
        return ordered


def split_frontmatter(content: str) -> tuple[str | None, str]:
    """
    Split note content into its frontmatter block and body.

    Args:
        content: Full note content

    Returns:
        (block, body) - block is None when the note has no frontmatter
    """
    lines = content.splitlines(keepends=True)
    if not lines or lines[0].rstrip() != DELIMITER:
        return None, content
    for index in range(1, len(lines)):
        if lines[index].rstrip() == DELIMITER:
            return "".join(lines[1:index]), "".join(lines[index + 1 :])
    logger.debug("Opening frontmatter delimiter without a closing one")
    return None, content


def load_frontmatter(content: str) -> tuple[dict[str, Any] | None, str]:
    """
    Parse the frontmatter block of a note into a mapping.

    Returns:
        (data, body) - data is None when the note has no frontmatter

    Raises:
        FrontmatterError: If the block is not valid YAML or not a mapping
    """
    block, body = split_frontmatter(content)
    if block is None:
        return None, body
    try:
        data = parse(block)
    except YamlError as e:
        raise FrontmatterError(f"Invalid frontmatter: {e}") from e
    if data is None:
        return {}, body
    if not isinstance(data, dict):
        raise FrontmatterError(
            f"Frontmatter must be a mapping, got {type(data).__name__}"
        )
    return data, body


def parse_frontmatter(content: str) -> tuple[NoteFrontmatter | None, str]:
    """
    Parse YAML frontmatter from note content.

    Invalid frontmatter is logged and treated as absent, in which case the
    whole content is returned as the body.

    Args:
        content: Full note content including frontmatter

    Returns:
        (frontmatter, body) - Frontmatter object and remaining body text
    """
    try:
        data, body = load_frontmatter(content)
    except FrontmatterError as e:
        logger.warning(f"Ignoring frontmatter: {e}")
        return None, content
    if data is None:
        return None, body
    return NoteFrontmatter.from_dict(data), body


def write_frontmatter(frontmatter: NoteFrontmatter) -> str:
    """
    Write frontmatter to YAML string.

    Args:
        frontmatter: Frontmatter object to serialize

    Returns:
        YAML frontmatter string with --- delimiters
    """
    return f"{DELIMITER}\n{dump(frontmatter.to_dict())}\n{DELIMITER}\n"


def update_frontmatter(
    content: str,
    updates: dict[str, Any],
) -> str:
    """
    Update frontmatter fields in note content.

    A note without frontmatter gains a block. A None value in updates removes
    that key.

    Args:
        content: Full note content including frontmatter
        updates: Fields to update

    Returns:
        Updated note content

    Raises:
        FrontmatterError: If the existing frontmatter is invalid
    """
    data, body = load_frontmatter(content)
    merged = dict(data or {})
    for key, value in updates.items():
        if value is None:
            merged.pop(key, None)
        else:
            merged[key] = value
    return write_frontmatter(NoteFrontmatter.from_dict(merged)) + body


def format_note(content: str) -> str:
    """
    Re-render a note's existing frontmatter in canonical form.

    Notes without frontmatter are returned unchanged.

    Raises:
        FrontmatterError: If the existing frontmatter is invalid
    """
    block, _ = split_frontmatter(content)
    if block is None:
        return content
    return update_frontmatter(content, {})


def create_default_frontmatter(title: str, tags: list[str] | None = None) -> str:
    """
    Create default frontmatter for a new note.

    Args:
        title: Note title
        tags: Optional tags

    Returns:
        YAML frontmatter string
    """
    return write_frontmatter(
        NoteFrontmatter(id=title, aliases=[title], tags=tags or [])
    )
