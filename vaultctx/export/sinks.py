"""Destinations for the exported text."""

import sys
from abc import ABC, abstractmethod
from pathlib import Path
from typing import TextIO


class OutputSink(ABC):
    """Receives the finished export in a single write."""

    description: str = "output"

    @abstractmethod
    def write(self, text: str) -> None:
        """Deliver the text. Raise on failure."""


class StdoutSink(OutputSink):
    """Writes the export text unchanged to a stream, stdout by default."""

    description = "stdout"

    def __init__(self, stream: TextIO | None = None) -> None:
        self.stream = stream

    def write(self, text: str) -> None:
        stream = self.stream or sys.stdout
        stream.write(text)
        stream.flush()


class FileSink(OutputSink):
    """Writes to a file, replacing it."""

    def __init__(self, path: Path) -> None:
        self.path = path
        self.description = str(path)

    def write(self, text: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(text, encoding="utf-8")
