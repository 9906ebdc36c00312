"""Exporting selected notes as one text blob."""

from .errors import ContentReadError, EmptySelectionError, ExportError, SinkWriteError
from .exporter import ContextExporter, ExportResult
from .sinks import FileSink, OutputSink, StdoutSink
from .templates import render_custom, render_json, render_output, render_xml

__all__ = [
    "ContentReadError",
    "ContextExporter",
    "EmptySelectionError",
    "ExportError",
    "ExportResult",
    "FileSink",
    "OutputSink",
    "SinkWriteError",
    "StdoutSink",
    "render_custom",
    "render_json",
    "render_output",
    "render_xml",
]
