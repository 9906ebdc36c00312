"""Export pipeline: resolve, read, render, deliver. All or nothing."""

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass

from vaultctx.selection import Resolver, SelectionSet
from vaultctx.storage import ExportFormat, ExportSettings
from vaultctx.tree import path_tree
from vaultctx.vault import Document, VaultStore

from .errors import ContentReadError, EmptySelectionError, SinkWriteError
from .sinks import OutputSink
from .templates import Item, render_output

logger = logging.getLogger(__name__)


@dataclass
class ExportResult:
    """Outcome of a delivered export."""

    document_count: int
    total_chars: int
    output: str
    destination: str = "output"

    def get_summary(self) -> str:
        noun = "file" if self.document_count == 1 else "files"
        return (
            f"Exported {self.document_count} {noun} "
            f"({self.total_chars:,} chars) to {self.destination}"
        )


class ContextExporter:
    """Builds the export text for a selection and hands it to a sink."""

    def __init__(
        self,
        store: VaultStore,
        settings: ExportSettings,
        sink: OutputSink,
        resolver: Resolver | None = None,
    ) -> None:
        self.store = store
        self.settings = settings
        self.sink = sink
        self.resolver = resolver or Resolver(store, settings.ignored_tags)

    async def export(self, selection: SelectionSet) -> ExportResult:
        """Resolve a selection and export it.

        A directly selected note missing from the vault aborts the export with
        ContentReadError.
        """
        try:
            documents = self.resolver.resolve(selection)
        except FileNotFoundError as e:
            logger.error(f"Cannot export, selected note is missing: {e.filename}")
            raise ContentReadError(e.filename, e) from e
        return await self.export_documents(documents)

    async def export_documents(self, documents: Sequence[Document]) -> ExportResult:
        """Export already-resolved documents in the given order.

        Raises EmptySelectionError, ContentReadError or SinkWriteError. The
        sink is written exactly once, after the whole text is built.
        """
        if not documents:
            raise EmptySelectionError()

        logger.info(f"Exporting {len(documents)} files...")

        items = await self._read_all(documents)
        output = self.render(items)

        try:
            self.sink.write(output)
        except Exception as e:
            logger.exception(f"Failed to deliver export to {self.sink.description}")
            raise SinkWriteError(f"Failed to write to {self.sink.description}: {e}") from e

        result = ExportResult(
            document_count=len(items),
            total_chars=sum(len(content) for _, content in items),
            output=output,
            destination=self.sink.description,
        )
        logger.info(result.get_summary())
        return result

    def render(self, items: Sequence[Item]) -> str:
        """Render read items with the configured format."""
        tree_text = ""
        if self.settings.include_tree or self.settings.format == ExportFormat.CUSTOM:
            tree_text = path_tree.render_paths(document.path for document, _ in items)
        return render_output(items, tree_text, self.settings)

    async def _read_all(self, documents: Sequence[Document]) -> list[Item]:
        """Read contents one at a time, in order. Any failure aborts the export."""
        items: list[Item] = []
        for document in documents:
            try:
                content = await asyncio.to_thread(self.store.read_content, document.path)
            except Exception as e:
                logger.exception(f"Failed to read {document.path}")
                raise ContentReadError(document.path, e) from e
            items.append((document, content))
        return items
