"""Vault module: note frontmatter built on the vaultmatter YAML core.

Notes are Markdown files whose metadata lives in a `---` delimited YAML block.
This package locates that block, maps it to a typed model, and checks a whole
vault for missing or unreadable frontmatter.
"""

from vaultmatter.vault.check import CheckReport, NoteIssue, check_vault
from vaultmatter.vault.frontmatter import (
    FrontmatterError,
    NoteFrontmatter,
    create_default_frontmatter,
    format_note,
    load_frontmatter,
    parse_frontmatter,
    split_frontmatter,
    update_frontmatter,
    write_frontmatter,
)
from vaultmatter.vault.layout import get_note_path, get_vault_root, list_notes

__all__ = [
    "CheckReport",
    "FrontmatterError",
    "NoteFrontmatter",
    "NoteIssue",
    "check_vault",
    "create_default_frontmatter",
    "format_note",
    "get_note_path",
    "get_vault_root",
    "list_notes",
    "load_frontmatter",
    "parse_frontmatter",
    "split_frontmatter",
    "update_frontmatter",
    "write_frontmatter",
]
