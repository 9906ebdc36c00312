"""Persistent export settings."""

from .settings import ExportFormat, ExportSettings, SettingsStorage, coerce_setting

__all__ = [
    "ExportFormat",
    "ExportSettings",
    "SettingsStorage",
    "coerce_setting",
]
