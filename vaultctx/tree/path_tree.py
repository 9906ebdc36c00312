"""Folder/file tree built from a flat set of document paths."""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

BRANCH = "├── "
LAST_BRANCH = "└── "
PIPE = "│   "
SPACE = "    "


@dataclass
class File:
    """A document leaf."""

    name: str
    path: str


@dataclass
class Folder:
    """A folder. A folder with no children is an empty folder marker."""

    name: str = ""
    children: dict[str, "Folder | File"] = field(default_factory=dict)

    def child_folder(self, name: str) -> "Folder":
        """Get or create a child folder. A folder replaces a file of the same name."""
        child = self.children.get(name)
        if not isinstance(child, Folder):
            child = Folder(name=name)
            self.children[name] = child
        return child

    def sorted_children(self) -> list["Folder | File"]:
        return [self.children[name] for name in sorted(self.children)]


Node = Folder | File


def build(paths: Iterable[str]) -> Folder:
    """Build a tree from document paths.

    The result depends only on the set of paths, not on their order. A path
    ending with '/' adds an empty folder marker.
    """
    root = Folder()
    # Folders first so that a later file never overwrites a folder
    ordered = sorted(set(paths), key=lambda p: (not p.endswith("/"), p))

    for path in ordered:
        parts = [part for part in path.split("/") if part]
        if not parts:
            continue

        if path.endswith("/"):
            current = root
            for part in parts:
                current = current.child_folder(part)
            continue

        current = root
        for part in parts[:-1]:
            current = current.child_folder(part)

        leaf = parts[-1]
        if not isinstance(current.children.get(leaf), Folder):
            current.children[leaf] = File(name=leaf, path="/".join(parts))

    return root


def render(root: Folder, prefix: str = "") -> str:
    """Render a tree with box-drawing connectors, one line per node.

    Nodes with at least one child get a trailing '/'.
    """
    result = ""
    children = root.sorted_children()

    for index, node in enumerate(children):
        is_last = index == len(children) - 1
        connector = LAST_BRANCH if is_last else BRANCH
        has_children = isinstance(node, Folder) and bool(node.children)

        result += prefix + connector + node.name + ("/" if has_children else "") + "\n"

        if has_children:
            result += render(node, prefix + (SPACE if is_last else PIPE))

    return result


def leaf_paths(root: Folder, parent: str = "") -> Iterator[str]:
    """Yield the full path of every file, in render order."""
    for node in root.sorted_children():
        path = f"{parent}/{node.name}" if parent else node.name
        if isinstance(node, File):
            yield path
        else:
            yield from leaf_paths(node, path)


def render_paths(paths: Iterable[str]) -> str:
    """Build and render in one step."""
    return render(build(paths))
