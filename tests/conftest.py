"""Shared test fixtures."""

from collections.abc import Callable
from pathlib import Path

import pytest

from vaultctx.vault import ACCEPTED_EXTENSIONS, Entry, Stat, VaultStore
from vaultctx.vault.tags import normalize_tag

# 2024-01-01T00:00:00.000Z and 2024-01-02T00:00:00.000Z
CTIME = 1704067200000
MTIME = 1704153600000


class MemoryVault(VaultStore):
    """In-memory store: path -> (content, tags)."""

    def __init__(self, notes: dict[str, tuple[str, list[str]]]) -> None:
        self.notes = notes
        self.failing: set[str] = set()
        self.reads: list[str] = []
        self.listings = 0

    def list_children(self, folder: str) -> list[Entry]:
        folder = folder.strip("/")
        prefix = folder + "/" if folder else ""
        entries: dict[str, Entry] = {}
        for path in sorted(self.notes):
            if not path.startswith(prefix):
                continue
            head, sep, _ = path[len(prefix) :].partition("/")
            if sep:
                entries.setdefault(head, Entry(path=prefix + head, is_folder=True))
            else:
                extension = path.rsplit(".", 1)[-1]
                if extension in ACCEPTED_EXTENSIONS:
                    entries[head] = Entry(path=path, is_folder=False, extension=extension)
        return list(entries.values())

    def read_content(self, path: str) -> str:
        self.reads.append(path)
        if path in self.failing or path not in self.notes:
            raise OSError(f"Cannot read {path}")
        return self.notes[path][0]

    def get_tags(self, path: str) -> list[str]:
        return [normalize_tag(tag) for tag in self.notes[path][1]]

    def get_stat(self, path: str) -> Stat:
        return Stat(ctime=CTIME, mtime=MTIME)

    def list_all_tags(self) -> list[str]:
        tags = {normalize_tag(tag) for _, note_tags in self.notes.values() for tag in note_tags}
        return sorted(tags, key=str.lower)

    def list_documents(self) -> list[str]:
        self.listings += 1
        return sorted(
            path for path in self.notes if path.rsplit(".", 1)[-1] in ACCEPTED_EXTENSIONS
        )


@pytest.fixture
def make_vault() -> Callable[..., MemoryVault]:
    """Factory for in-memory vaults."""

    def factory(notes: dict[str, tuple[str, list[str]]]) -> MemoryVault:
        return MemoryVault(notes)

    return factory


@pytest.fixture
def memory_vault() -> MemoryVault:
    """A small tagged vault."""
    return MemoryVault(
        {
            "a.md": ("X", []),
            "b/c.md": ("Y", ["work"]),
            "b/d.md": ("D", ["work/meetings"]),
            "e/f.md": ("F", ["#Work/Projects", "private/notes"]),
            "e/g.canvas": ("{}", []),
            "e/skip.pdf": ("binary", []),
        }
    )


@pytest.fixture
def tmp_vault(tmp_path: Path) -> Path:
    """Create a temporary vault directory with sample notes."""
    vault = tmp_path / "vault"
    vault.mkdir()

    # Create some sample notes
    (vault / "Note1.md").write_text("# Note 1\n\nThis is note 1 content.\n\n#tag1 #tag2/sub")
    (vault / "Note2.md").write_text(
        "---\ntitle: Custom Title\ntags: [project, '#area/home']\n---\n\nNote 2 with frontmatter."
    )

    # Create a subfolder
    inbox = vault / "Inbox"
    inbox.mkdir()
    (inbox / "Task.md").write_text("- [ ] Buy groceries\n- [x] Done task")
    (inbox / "Board.canvas").write_text('{"nodes": []}')
    (inbox / "image.png").write_bytes(b"\x89PNG")

    # Create daily notes folder
    daily = vault / "Daily Notes"
    daily.mkdir()

    return vault


@pytest.fixture
def sample_note_content() -> str:
    """Sample note content for testing."""
    return """---
title: Test Note
tags: [test, sample]
---

# Test Note

This is a test note with some content.

```python
x = 1  #not-a-tag
```

#inline-tag #nested/tag
"""
