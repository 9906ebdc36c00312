"""Turns a selection into the final, de-duplicated list of documents to export."""

import errno
import logging
from collections.abc import Iterable

from vaultctx.tree import tag_tree
from vaultctx.tree.tag_tree import TagSegment
from vaultctx.vault import Document, VaultStore
from vaultctx.vault.tags import matches_any, normalize_tag

from .state import SelectionSet

logger = logging.getLogger(__name__)


def document_order(document: Document) -> list[str]:
    """Sort key matching the order the path tree lists documents in."""
    return document.path.split("/")


class Resolver:
    """Resolves selections against a vault store.

    Documents carrying any ignored tag (or a descendant of one) are dropped
    everywhere, even when selected explicitly.
    """

    def __init__(self, store: VaultStore, ignored_tags: Iterable[str] = ()) -> None:
        self.store = store
        self.ignored_tags = [tag for tag in (normalize_tag(t) for t in ignored_tags) if tag]

    def is_ignored(self, document: Document) -> bool:
        return matches_any(document.tags, self.ignored_tags)

    def documents(self) -> list[Document]:
        """Every document in the vault that isn't ignored."""
        documents = []
        for path in self.store.list_documents():
            document = self.store.snapshot(path)
            if self.is_ignored(document):
                logger.debug(f"Ignoring {path} (ignored tag)")
                continue
            documents.append(document)
        return documents

    def tag_trees(self, selection: SelectionSet) -> dict[str, TagSegment]:
        """Pruned tag trees for the selection's tag roots."""
        if not selection.selected_tag_roots:
            return {}
        return tag_tree.build(selection.tag_roots, self.documents(), selection.excluded_keys)

    def resolve(self, selection: SelectionSet) -> list[Document]:
        """Collect the selection's documents.

        Tag roots contribute the documents left in their pruned trees; direct
        picks contribute themselves unless their own path is excluded. Each
        document appears once, ordered by path.

        Raises FileNotFoundError if a directly selected document is not in the
        vault.
        """
        resolved: dict[str, Document] = {}
        known = set(self.store.list_documents()) if selection.selected_documents else set()

        for root in self.tag_trees(selection).values():
            for document in tag_tree.leaves(root):
                resolved.setdefault(document.path, document)

        for path in selection.documents:
            if path in resolved or selection.is_excluded(path):
                continue

            if path not in known:
                raise FileNotFoundError(
                    errno.ENOENT, "Selected document not found in vault", path
                )

            document = self.store.snapshot(path)
            if self.is_ignored(document):
                logger.debug(f"Ignoring {path} (ignored tag)")
                continue
            resolved[path] = document

        documents = sorted(resolved.values(), key=document_order)
        logger.debug(f"Resolved {len(documents)} documents")
        return documents

    def collect_folder(self, folder: str) -> list[str]:
        """List every accepted document under a folder, recursively."""
        paths = []
        for entry in self.store.list_children(folder):
            if entry.is_folder:
                paths.extend(self.collect_folder(entry.path))
            else:
                paths.append(entry.path)
        return paths
