"""Vault-wide frontmatter health check."""

import logging
import time
from pathlib import Path

from pydantic import BaseModel, Field

from vaultmatter.vault.frontmatter import FrontmatterError, load_frontmatter
from vaultmatter.vault.layout import get_vault_root, list_notes

logger = logging.getLogger(__name__)


class NoteIssue(BaseModel, frozen=True):
    """A problem found in a single note."""

    path: str
    message: str


class CheckReport(BaseModel, frozen=True):
    """Result of checking every note in a vault."""

    count: int = 0
    elapsed_ms: int = 0
    warnings: list[NoteIssue] = Field(default_factory=list)
    errors: list[NoteIssue] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        """True when no note failed to parse."""
        return not self.errors


def check_note(path: Path) -> str | None:
    """
    Check a single note.

    Returns:
        None if the note is fine, "missing frontmatter" if it has none

    Raises:
        FrontmatterError: If the frontmatter block is invalid
        OSError: If the note can't be read
    """
    content = path.read_text(encoding="utf-8")
    data, _ = load_frontmatter(content)
    if data is None:
        return "missing frontmatter"
    return None


def check_vault(root: Path | None = None) -> CheckReport:
    """
    Check the frontmatter of every note in a vault.

    Args:
        root: Vault root (defaults to the configured vault)

    Returns:
        CheckReport with warnings for notes without frontmatter and errors
        for notes whose frontmatter can't be read
    """
    vault_root = root or get_vault_root()
    start = time.perf_counter()
    warnings: list[NoteIssue] = []
    errors: list[NoteIssue] = []

    notes = list_notes(root=vault_root)
    for path in notes:
        relative = path.relative_to(vault_root).as_posix()
        try:
            warning = check_note(path)
        except (FrontmatterError, OSError, UnicodeDecodeError) as e:
            logger.debug(f"Failed to parse note {relative}: {e}")
            errors.append(NoteIssue(path=relative, message=str(e)))
            continue
        if warning:
            warnings.append(NoteIssue(path=relative, message=warning))

    report = CheckReport(
        count=len(notes),
        elapsed_ms=int((time.perf_counter() - start) * 1000),
        warnings=warnings,
        errors=errors,
    )
    logger.info(
        f"Checked {report.count} notes in {report.elapsed_ms}ms: "
        f"{len(warnings)} warnings, {len(errors)} errors"
    )
    return report
