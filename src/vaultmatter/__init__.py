"""vaultmatter - frontmatter YAML for Markdown note vaults."""

from typing import TYPE_CHECKING

from vaultmatter.core import (
    KeyFormatError,
    ScalarFormatError,
    UnterminatedLiteralError,
    Value,
    YamlError,
    YamlIndentationError,
    dump,
    parse,
)

if TYPE_CHECKING:
    from vaultmatter.vault.frontmatter import NoteFrontmatter, parse_frontmatter

__all__ = [
    # Core
    "dump",
    "parse",
    "Value",
    # Errors
    "KeyFormatError",
    "ScalarFormatError",
    "UnterminatedLiteralError",
    "YamlError",
    "YamlIndentationError",
    # Notes
    "NoteFrontmatter",
    "parse_frontmatter",
]


def __getattr__(name: str):
    if name == "NoteFrontmatter":
        from vaultmatter.vault.frontmatter import NoteFrontmatter

        return NoteFrontmatter
    if name == "parse_frontmatter":
        from vaultmatter.vault.frontmatter import parse_frontmatter

        return parse_frontmatter
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
