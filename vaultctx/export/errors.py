"""Export failures. Any of these means nothing was delivered."""


class ExportError(Exception):
    """Base class for export failures."""


class EmptySelectionError(ExportError):
    """The selection resolved to no documents."""

    def __init__(self, message: str = "No files selected for export.") -> None:
        super().__init__(message)


class ContentReadError(ExportError):
    """Reading a document's content failed."""

    def __init__(self, path: str, cause: Exception) -> None:
        super().__init__(f"Failed to read {path}: {cause}")
        self.path = path


class SinkWriteError(ExportError):
    """Delivering the output to its destination failed."""
