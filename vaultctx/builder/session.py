"""Context builder session - the state behind the interactive builder."""

import logging

from vaultctx.selection import Resolver, SelectionSet
from vaultctx.tree import path_tree, tag_tree
from vaultctx.vault import Document
from vaultctx.vault.tags import canonical_tag

logger = logging.getLogger(__name__)

DEFAULT_SEARCH_LIMIT = 15


class ContextBuilder:
    """Interactive selection of notes, folders and tags for one export."""

    def __init__(
        self,
        resolver: Resolver,
        selection: SelectionSet | None = None,
        search_limit: int = DEFAULT_SEARCH_LIMIT,
    ) -> None:
        self.resolver = resolver
        self.store = resolver.store
        self.selection = selection or SelectionSet()
        self.search_limit = search_limit

    def add_folder(self, folder: str) -> int:
        """Select every document in a folder. Returns count added."""
        paths = self.resolver.collect_folder(folder)
        for path in paths:
            self.selection.add_document(path)
        logger.debug(f"Added {len(paths)} documents from '{folder or '/'}'")
        return len(paths)

    def search_notes(self, query: str, limit: int | None = None) -> list[str]:
        """Find unselected notes whose path contains the query (case-insensitive)."""
        query = query.strip().lower()
        if not query:
            return []

        if limit is None:
            limit = self.search_limit
        results = []
        for document in self.resolver.documents():
            if len(results) >= limit:
                break
            if document.path in self.selection.selected_documents:
                continue
            if query in document.path.lower():
                results.append(document.path)
        return results

    def search_tags(self, query: str, limit: int | None = None) -> list[str]:
        """Tag autocomplete: tags containing the query, unselected roots only."""
        query = canonical_tag(query)
        if limit is None:
            limit = self.search_limit
        results = []
        for tag in self.store.list_all_tags():
            if len(results) >= limit:
                break
            if canonical_tag(tag) in self.selection.selected_tag_roots:
                continue
            if query in canonical_tag(tag):
                results.append(tag)
        return results

    def selected_tree(self) -> str:
        """Tree of directly selected documents followed by the tag trees."""
        paths = [
            path
            for path in self.selection.documents
            if not self.selection.is_excluded(path)
        ]
        sections = []
        if paths:
            sections.append(path_tree.render_paths(paths))

        trees = self.resolver.tag_trees(self.selection)
        if trees:
            sections.append(tag_tree.render(trees))

        return "".join(sections)

    def resolve(self) -> list[Document]:
        return self.resolver.resolve(self.selection)

    def clear(self) -> None:
        self.selection.clear_all()
