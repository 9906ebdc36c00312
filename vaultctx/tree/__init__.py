"""Text trees of selected documents, by folder and by tag."""

from . import path_tree, tag_tree
from .path_tree import File, Folder
from .tag_tree import DocumentLeaf, TagSegment

__all__ = [
    "DocumentLeaf",
    "File",
    "Folder",
    "TagSegment",
    "path_tree",
    "tag_tree",
]
