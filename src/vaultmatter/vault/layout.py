"""Vault layout and path helpers."""

from pathlib import Path

from vaultmatter.core.config import VAULT_DIR


def get_vault_root() -> Path:
    """
    Get the vault root directory.

    Returns:
        Path to vault root
    """
    return VAULT_DIR


def get_note_path(relative_path: str, root: Path | None = None) -> Path:
    """
    Get absolute path for a note by relative path.

    Args:
        relative_path: Path relative to vault root
        root: Vault root (defaults to the configured vault)

    Returns:
        Absolute path to note
    """
    return (root or get_vault_root()) / relative_path


def list_notes(folder: str = ".", root: Path | None = None) -> list[Path]:
    """
    List all markdown notes in a folder, skipping hidden directories.

    Args:
        folder: Folder path relative to vault root
        root: Vault root (defaults to the configured vault)

    Returns:
        List of note paths
    """
    vault_root = root or get_vault_root()
    folder_path = vault_root / folder
    if not folder_path.exists():
        return []
    return sorted(
        path
        for path in folder_path.glob("**/*.md")
        if not any(
            part.startswith(".") for part in path.relative_to(vault_root).parts
        )
    )
