"""Render exported documents as XML, JSON or a custom template."""

import json
from collections.abc import Sequence

from vaultctx.storage import ExportFormat, ExportSettings
from vaultctx.vault import Document

TREE_PLACEHOLDER = "{{TREE}}"
PATH_PLACEHOLDER = "{{PATH}}"
CTIME_PLACEHOLDER = "{{CTIME}}"
MTIME_PLACEHOLDER = "{{MTIME}}"

# (document, content) in output order
Item = tuple[Document, str]


def substitute(template: str, values: dict[str, str]) -> str:
    """Replace every literal occurrence of each placeholder. No escaping."""
    for placeholder, value in values.items():
        template = template.replace(placeholder, value)
    return template


def render_prefix(prefix: str, tree_text: str) -> str:
    return substitute(prefix, {TREE_PLACEHOLDER: tree_text})


def render_item_template(template: str, document: Document) -> str:
    return substitute(
        template,
        {
            PATH_PLACEHOLDER: document.path,
            CTIME_PLACEHOLDER: document.created,
            MTIME_PLACEHOLDER: document.modified,
        },
    )


def render_xml(items: Sequence[Item], tree_text: str, include_tree: bool = True) -> str:
    """Render the structured XML shape. Paths and content are embedded verbatim."""
    output = "<context>\n"
    if include_tree:
        output += "<tree>\n" + tree_text + "</tree>\n"

    for document, content in items:
        output += (
            f'<item loc="{document.path}" created="{document.created}" '
            f'modified="{document.modified}">\n'
            f"{content}\n"
            "</item>\n"
        )

    output += "</context>"
    return output


def render_json(items: Sequence[Item], tree_text: str, include_tree: bool = True) -> str:
    """Render the structured JSON shape with a real encoder."""
    payload: dict = {}
    if include_tree:
        payload["tree"] = tree_text

    payload["context"] = {
        document.path: {
            "content": content,
            "created": document.created,
            "modified": document.modified,
        }
        for document, content in items
    }
    return json.dumps(payload, indent=2, ensure_ascii=False)


def render_custom(items: Sequence[Item], tree_text: str, settings: ExportSettings) -> str:
    """Render the user's templates.

    Content goes between item prefix and suffix unescaped, so a hand-written
    JSON template breaks on quotes or newlines in a note. Use the JSON format
    for JSON output.
    """
    output = render_prefix(settings.custom_prefix, tree_text)
    for document, content in items:
        output += render_item_template(settings.custom_item_prefix, document)
        output += content
        output += render_item_template(settings.custom_item_suffix, document)
    output += settings.custom_suffix
    return output


def render_output(items: Sequence[Item], tree_text: str, settings: ExportSettings) -> str:
    """Render items in the configured format."""
    if settings.format == ExportFormat.JSON:
        return render_json(items, tree_text, settings.include_tree)
    if settings.format == ExportFormat.XML:
        return render_xml(items, tree_text, settings.include_tree)
    return render_custom(items, tree_text, settings)
