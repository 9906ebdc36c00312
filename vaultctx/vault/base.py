"""Vault store contract and the document snapshot type."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from pathlib import PurePosixPath

# Note and canvas files are the only exportable documents
ACCEPTED_EXTENSIONS = ("md", "canvas")

EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


def to_iso(epoch_ms: int) -> str:
    """Format epoch milliseconds as an ISO-8601 UTC timestamp with a Z suffix."""
    moment = EPOCH + timedelta(milliseconds=epoch_ms)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(frozen=True)
class Stat:
    """Creation and modification times in epoch milliseconds."""

    ctime: int
    mtime: int


@dataclass(frozen=True)
class Entry:
    """A child of a vault folder."""

    path: str
    is_folder: bool
    extension: str = ""


@dataclass(frozen=True)
class Document:
    """Read-only snapshot of a vault document. Content is read on demand."""

    path: str
    ctime: int = 0
    mtime: int = 0
    tags: tuple[str, ...] = field(default_factory=tuple)

    @property
    def name(self) -> str:
        return PurePosixPath(self.path).name

    @property
    def created(self) -> str:
        return to_iso(self.ctime)

    @property
    def modified(self) -> str:
        return to_iso(self.mtime)


class VaultStore(ABC):
    """Host store providing the file hierarchy, tag index and content reads."""

    @abstractmethod
    def list_children(self, folder: str) -> list[Entry]:
        """List folders and accepted documents directly inside a folder.

        Use '' or '/' for the vault root.
        """

    @abstractmethod
    def read_content(self, path: str) -> str:
        """Read a document's content. Raises OSError when the read fails."""

    @abstractmethod
    def get_tags(self, path: str) -> list[str]:
        """Get a document's normalized tags (empty if none)."""

    @abstractmethod
    def get_stat(self, path: str) -> Stat:
        """Get a document's creation and modification times."""

    @abstractmethod
    def list_all_tags(self) -> list[str]:
        """List every tag in the vault, sorted."""

    @abstractmethod
    def list_documents(self) -> list[str]:
        """List the path of every accepted document in the vault."""

    def exists(self, path: str) -> bool:
        return path in set(self.list_documents())

    def get_document(self, path: str) -> Document | None:
        """Build a snapshot for a document, or None if it isn't in the vault."""
        if not self.exists(path):
            return None
        return self.snapshot(path)

    def snapshot(self, path: str) -> Document:
        """Build a snapshot for a document known to exist."""
        stat = self.get_stat(path)
        return Document(
            path=path,
            ctime=stat.ctime,
            mtime=stat.mtime,
            tags=tuple(self.get_tags(path)),
        )
