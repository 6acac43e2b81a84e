"""vaultmatter core - the frontmatter YAML parser and serializer."""

from vaultmatter.core.dumper import dump
from vaultmatter.core.errors import (
    KeyFormatError,
    ScalarFormatError,
    UnterminatedLiteralError,
    YamlError,
    YamlIndentationError,
)
from vaultmatter.core.parser import parse
from vaultmatter.core.types import Value

__all__ = [
    # Entry points
    "dump",
    "parse",
    # Types
    "Value",
    # Errors
    "KeyFormatError",
    "ScalarFormatError",
    "UnterminatedLiteralError",
    "YamlError",
    "YamlIndentationError",
]
