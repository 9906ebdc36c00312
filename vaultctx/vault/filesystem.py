"""Vault store backed by a directory of markdown and canvas files."""

import logging
import re
from pathlib import Path

import yaml

from .base import ACCEPTED_EXTENSIONS, Entry, Stat, VaultStore
from .tags import normalize_tag

logger = logging.getLogger(__name__)

# Inline tags: #tag, #tag/sub, #tag-name (not headings, not inside words)
INLINE_TAG_PATTERN = re.compile(r"(?<!\S)#([a-zA-Z_][\w\-/]*)")


def parse_frontmatter(content: str) -> tuple[dict, str]:
    """Parse frontmatter from note content.

    Returns (frontmatter_dict, body_content).
    """
    if not content.startswith("---"):
        return {}, content

    match = re.match(r"^---\n(.*?)\n---\n?(.*)", content, re.DOTALL)
    if not match:
        return {}, content

    try:
        frontmatter = yaml.safe_load(match.group(1)) or {}
    except yaml.YAMLError:
        return {}, content

    if not isinstance(frontmatter, dict):
        return {}, content
    return frontmatter, match.group(2)


def extract_tags(content: str) -> list[str]:
    """Extract tags from frontmatter and inline, normalized and de-duplicated."""
    frontmatter, body = parse_frontmatter(content)
    found: list[str] = []

    # Frontmatter tags: list or comma/space separated string
    fm_tags = frontmatter.get("tags") or frontmatter.get("tag") or []
    if isinstance(fm_tags, str):
        fm_tags = re.split(r"[,\s]+", fm_tags)
    if isinstance(fm_tags, list):
        found.extend(str(tag) for tag in fm_tags if tag)

    # Inline tags, skipping fenced code blocks
    body = re.sub(r"```.*?```", "", body, flags=re.DOTALL)
    found.extend(INLINE_TAG_PATTERN.findall(body))

    tags: list[str] = []
    seen: set[str] = set()
    for tag in found:
        tag = normalize_tag(tag)
        if tag and tag.lower() not in seen:
            seen.add(tag.lower())
            tags.append(tag)
    return tags


class FileSystemVault(VaultStore):
    """Reads an Obsidian-style vault from disk. Hidden files and folders are skipped."""

    def __init__(self, vault_path: Path) -> None:
        self.vault_path = vault_path.resolve()
        self._documents: list[str] | None = None
        self._document_set: set[str] = set()
        self._tags: dict[str, list[str]] = {}

    def refresh(self) -> None:
        """Drop cached document listings and tags."""
        self._documents = None
        self._document_set = set()
        self._tags = {}

    def _resolve(self, path: str) -> Path:
        """Validate that path is within the vault and return the full path."""
        path = path.strip("/")
        full_path = (self.vault_path / path).resolve()

        try:
            full_path.relative_to(self.vault_path)
        except ValueError as e:
            raise ValueError(f"Path escapes vault: {path}") from e

        return full_path

    def _relative(self, full_path: Path) -> str:
        return full_path.relative_to(self.vault_path).as_posix()

    def _is_hidden(self, full_path: Path) -> bool:
        rel_parts = full_path.relative_to(self.vault_path).parts
        return any(part.startswith(".") for part in rel_parts)

    @staticmethod
    def _extension(full_path: Path) -> str:
        return full_path.suffix.lstrip(".").lower()

    def list_children(self, folder: str) -> list[Entry]:
        folder_path = self.vault_path if folder in ("", "/") else self._resolve(folder)
        if not folder_path.is_dir():
            raise NotADirectoryError(f"Not a folder: {folder}")

        entries = []
        for item in sorted(folder_path.iterdir()):
            if item.name.startswith("."):
                continue

            if item.is_dir():
                entries.append(Entry(path=self._relative(item), is_folder=True))
            elif self._extension(item) in ACCEPTED_EXTENSIONS:
                entries.append(
                    Entry(
                        path=self._relative(item),
                        is_folder=False,
                        extension=self._extension(item),
                    )
                )
        return entries

    def list_documents(self) -> list[str]:
        if self._documents is None:
            documents = []
            for item in self.vault_path.rglob("*"):
                if not item.is_file() or self._is_hidden(item):
                    continue
                if self._extension(item) in ACCEPTED_EXTENSIONS:
                    documents.append(self._relative(item))
            self._documents = sorted(documents)
            self._document_set = set(documents)
            logger.debug(f"Listed {len(documents)} documents in {self.vault_path}")
        return self._documents

    def exists(self, path: str) -> bool:
        self.list_documents()
        return path in self._document_set

    def read_content(self, path: str) -> str:
        return self._resolve(path).read_text(encoding="utf-8")

    def get_tags(self, path: str) -> list[str]:
        if path not in self._tags:
            if not path.endswith(".md"):
                self._tags[path] = []
            else:
                try:
                    self._tags[path] = extract_tags(self.read_content(path))
                except (OSError, UnicodeDecodeError) as e:
                    logger.warning(f"Failed to read tags of {path}: {e}")
                    self._tags[path] = []
        return self._tags[path]

    def get_stat(self, path: str) -> Stat:
        stat = self._resolve(path).stat()
        created = getattr(stat, "st_birthtime", None) or stat.st_ctime
        return Stat(ctime=int(created * 1000), mtime=int(stat.st_mtime * 1000))

    def list_all_tags(self) -> list[str]:
        tags: dict[str, str] = {}
        for path in self.list_documents():
            for tag in self.get_tags(path):
                tags.setdefault(tag.lower(), tag)
        return sorted(tags.values(), key=str.lower)
