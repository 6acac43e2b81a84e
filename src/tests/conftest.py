"""Shared test fixtures and configuration."""

from __future__ import annotations

import pytest


@pytest.fixture
def sample_note():
    """Note content with frontmatter and a body."""
    return (
        "---\n"
        "id: my-note\n"
        "aliases:\n"
        "  - My Note\n"
        'tags: [demo, "#draft"]\n'
        "status: open\n"
        "---\n"
        "# My Note\n"
        "\n"
        "Body text.\n"
    )


@pytest.fixture
def sample_value():
    """A value tree covering every kind of node the serializer emits."""
    return {
        "id": "my-note",
        "aliases": ["My Note", "Research project: staged training"],
        "tags": ["demo", "draft"],
        "count": 3,
        "ratio": 0.5,
        "done": False,
        "empty": "",
        "nothing": None,
        "nested": {"a": 1, "b": ["x", "y"]},
        "list_of_maps": [{"a": 1, "b": 2}, {"c": "d"}],
        "quoted": 'say "hi"',
        "hash": "#tag",
        "amp": "& x",
        "blank": [],
    }


@pytest.fixture
def vault_dir(tmp_path):
    """Create a small vault with one good, one plain, and one broken note."""
    (tmp_path / "daily").mkdir()
    (tmp_path / ".obsidian").mkdir()
    (tmp_path / "good.md").write_text("---\nid: good\ntags: []\n---\nGood note.\n")
    (tmp_path / "daily" / "plain.md").write_text("No frontmatter here.\n")
    (tmp_path / "bad.md").write_text("---\n foo: 1\nbar: 2\n---\nBroken.\n")
    (tmp_path / ".obsidian" / "hidden.md").write_text("ignored\n")
    return tmp_path
