"""Selection state: picked documents, picked tag roots and excluded tree nodes."""

import logging
from dataclasses import dataclass, field

from vaultctx.vault.tags import canonical_tag, tag_key

logger = logging.getLogger(__name__)


@dataclass
class SelectionSet:
    """What an export includes.

    Documents and tag roots are kept in insertion order. ``excluded_keys``
    holds document paths and tag keys ('#work/meetings') pruned from the
    trees. Exclusion is sticky: re-adding a document or tag root clears only
    the exclusion of that exact key.
    """

    selected_documents: dict[str, None] = field(default_factory=dict)
    selected_tag_roots: dict[str, None] = field(default_factory=dict)
    excluded_keys: set[str] = field(default_factory=set)

    @property
    def documents(self) -> list[str]:
        return list(self.selected_documents)

    @property
    def tag_roots(self) -> list[str]:
        return list(self.selected_tag_roots)

    @property
    def is_empty(self) -> bool:
        return not self.selected_documents and not self.selected_tag_roots

    def add_document(self, path: str) -> None:
        """Select a document and un-hide it if its path was excluded."""
        path = path.strip("/")
        if not path:
            raise ValueError("Document path is empty")
        self.selected_documents[path] = None
        self.excluded_keys.discard(path)

    def add_tag_root(self, tag: str) -> None:
        """Select a tag subtree. Clears the exclusion of the root key only."""
        tag = canonical_tag(tag)
        if not tag:
            raise ValueError("Tag is empty")
        self.selected_tag_roots[tag] = None
        self.excluded_keys.discard(tag_key(tag))

    def remove_document(self, path: str) -> None:
        self.selected_documents.pop(path.strip("/"), None)

    def remove_tag_root(self, tag: str) -> None:
        self.selected_tag_roots.pop(canonical_tag(tag), None)

    def remove_folder(self, folder: str) -> int:
        """Deselect every document at or under a folder. Returns count removed."""
        folder = folder.strip("/")
        removed = [
            path
            for path in self.selected_documents
            if not folder or path == folder or path.startswith(folder + "/")
        ]
        for path in removed:
            del self.selected_documents[path]
        logger.debug(f"Removed {len(removed)} documents under '{folder}'")
        return len(removed)

    def exclude(self, key: str) -> None:
        """Hide a document path or tag key from the trees and the export."""
        if key.startswith("#"):
            key = tag_key(key)
        else:
            key = key.strip("/")
        if key:
            self.excluded_keys.add(key)

    def is_excluded(self, key: str) -> bool:
        return key in self.excluded_keys

    def clear_all(self) -> None:
        self.selected_documents.clear()
        self.selected_tag_roots.clear()
        self.excluded_keys.clear()
