"""Vault access - the store contract and a filesystem-backed store."""

from .base import ACCEPTED_EXTENSIONS, Document, Entry, Stat, VaultStore, to_iso
from .filesystem import FileSystemVault, extract_tags, parse_frontmatter

__all__ = [
    "ACCEPTED_EXTENSIONS",
    "Document",
    "Entry",
    "FileSystemVault",
    "Stat",
    "VaultStore",
    "extract_tags",
    "parse_frontmatter",
    "to_iso",
]
