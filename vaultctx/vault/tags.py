"""Hierarchical tag helpers.

Tags are '/'-separated paths. A leading '#' is cosmetic and comparisons are
case-insensitive, so '#Work/Meetings' and 'work/meetings' are the same tag.
"""

from collections.abc import Iterable

TAG_MARKER = "#"
SEPARATOR = "/"


def normalize_tag(tag: str) -> str:
    """Strip the '#' marker, surrounding slashes and empty segments. Keeps case."""
    cleaned = tag.strip().lstrip(TAG_MARKER)
    return SEPARATOR.join(part.strip() for part in cleaned.split(SEPARATOR) if part.strip())


def canonical_tag(tag: str) -> str:
    """Normalized, lowercased form used for comparisons."""
    return normalize_tag(tag).lower()


def tag_key(tag: str) -> str:
    """Exclusion key of a tag node, e.g. '#work/meetings'."""
    return TAG_MARKER + canonical_tag(tag)


def is_tag_key(key: str) -> bool:
    return key.startswith(TAG_MARKER)


def is_under(tag: str, root: str) -> bool:
    """True if tag equals root or is one of its descendants."""
    tag = canonical_tag(tag)
    root = canonical_tag(root)
    if not root:
        return False
    return tag == root or tag.startswith(root + SEPARATOR)


def relative_segments(tag: str, root: str) -> list[str]:
    """Segments of tag below root, keeping the tag's own case.

    Returns an empty list when tag equals root.
    """
    depth = len(canonical_tag(root).split(SEPARATOR))
    return normalize_tag(tag).split(SEPARATOR)[depth:]


def has_tag(tags: Iterable[str], root: str) -> bool:
    """True if any tag is root or a descendant of root."""
    return any(is_under(tag, root) for tag in tags)


def matches_any(tags: Iterable[str], roots: Iterable[str]) -> bool:
    """True if any tag falls under any of the given roots."""
    tags = list(tags)
    return any(has_tag(tags, root) for root in roots)
