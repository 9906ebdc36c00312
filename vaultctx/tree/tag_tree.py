"""Tag tree: documents grouped under selected root tags by tag segment."""

from collections.abc import Collection, Iterable, Iterator
from dataclasses import dataclass, field

from vaultctx.vault import Document
from vaultctx.vault.tags import SEPARATOR, canonical_tag, is_under, relative_segments, tag_key

from .path_tree import BRANCH, LAST_BRANCH, PIPE, SPACE

TAG_GLYPH = "# "
DOCUMENT_GLYPH = "📄 "


@dataclass
class DocumentLeaf:
    """A document reached through a tag. Keyed by document path."""

    name: str
    document: Document

    @property
    def key(self) -> str:
        return self.document.path


@dataclass
class TagSegment:
    """A tag path segment. ``key`` is the cumulative tag key, e.g. '#work/meetings'."""

    name: str
    key: str
    children: dict[str, "TagSegment | DocumentLeaf"] = field(default_factory=dict)

    def sorted_children(self) -> list["TagSegment | DocumentLeaf"]:
        return [self.children[key] for key in sorted(self.children)]


def build(
    root_tags: Iterable[str],
    documents: Iterable[Document],
    excluded_keys: Collection[str] = frozenset(),
) -> dict[str, TagSegment]:
    """Build one tree per root tag, keyed by the root's display name ('#work').

    Excluded tag keys prune the whole segment beneath them and excluded
    document paths are left out. Roots whose own key is excluded are omitted.
    Documents must already be filtered for ignored tags.
    """
    documents = list(documents)
    trees: dict[str, TagSegment] = {}

    for root_tag in root_tags:
        root_key = tag_key(root_tag)
        if root_key in excluded_keys or root_key in trees:
            continue

        root = TagSegment(name=root_key, key=root_key)
        trees[root_key] = root

        for document in documents:
            if document.path in excluded_keys:
                continue
            for tag in document.tags:
                if is_under(tag, root_tag):
                    _attach(root, document, relative_segments(tag, root_tag), excluded_keys)

    return trees


def _attach(
    root: TagSegment,
    document: Document,
    segments: list[str],
    excluded_keys: Collection[str],
) -> None:
    """Walk/create the segment path and hang the document under its last segment."""
    current = root
    for segment in segments:
        child_key = current.key + SEPARATOR + canonical_tag(segment)
        if child_key in excluded_keys:
            return

        child = current.children.get(child_key)
        if not isinstance(child, TagSegment):
            child = TagSegment(name=segment, key=child_key)
            current.children[child_key] = child
        current = child

    current.children[document.path] = DocumentLeaf(name=document.name, document=document)


def render(trees: dict[str, TagSegment]) -> str:
    """Render every root tree, in root order."""
    result = ""
    for root in trees.values():
        result += root.name + "\n"
        result += _render_children(root, "")
    return result


def _render_children(node: TagSegment, prefix: str) -> str:
    result = ""
    children = node.sorted_children()

    for index, child in enumerate(children):
        is_last = index == len(children) - 1
        connector = LAST_BRANCH if is_last else BRANCH

        if isinstance(child, DocumentLeaf):
            result += prefix + connector + DOCUMENT_GLYPH + child.name + "\n"
        else:
            result += prefix + connector + TAG_GLYPH + child.name + "\n"
            result += _render_children(child, prefix + (SPACE if is_last else PIPE))

    return result


def leaves(root: TagSegment) -> Iterator[Document]:
    """Yield every document under a root, depth-first in render order.

    A document tagged with several segments of one root is yielded once per
    segment.
    """
    for child in root.sorted_children():
        if isinstance(child, DocumentLeaf):
            yield child.document
        else:
            yield from leaves(child)
