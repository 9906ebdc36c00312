"""Export settings stored in the vault."""

import json
import logging
from dataclasses import asdict, dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

SETTINGS_DIR = ".vaultctx"


class ExportFormat(str, Enum):
    """Shape of the exported text."""

    XML = "xml"  # <context><tree/><item/>...</context>
    JSON = "json"  # {"tree": ..., "context": {path: {...}}}
    CUSTOM = "custom"  # User templates with placeholders

    @classmethod
    def parse(cls, value: str) -> "ExportFormat":
        """Accept 'xml', 'structured-xml', 'JSON', ..."""
        value = value.strip().lower().removeprefix("structured-")
        return cls(value)


DEFAULT_PREFIX = "<context>\n{{TREE}}\n"
DEFAULT_SUFFIX = "\n</context>"
DEFAULT_ITEM_PREFIX = '<item loc="{{PATH}}" created="{{CTIME}}" modified="{{MTIME}}">\n'
DEFAULT_ITEM_SUFFIX = "\n</item>\n"


@dataclass
class ExportSettings:
    """User-configurable export settings."""

    format: ExportFormat = ExportFormat.XML
    include_tree: bool = True
    ignored_tags: list[str] = field(default_factory=list)
    custom_prefix: str = DEFAULT_PREFIX
    custom_suffix: str = DEFAULT_SUFFIX
    custom_item_prefix: str = DEFAULT_ITEM_PREFIX
    custom_item_suffix: str = DEFAULT_ITEM_SUFFIX

    def to_dict(self) -> dict:
        data = asdict(self)
        data["format"] = self.format.value
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "ExportSettings":
        return cls(
            format=ExportFormat.parse(data.get("format", ExportFormat.XML.value)),
            include_tree=parse_bool(data.get("include_tree", True)),
            ignored_tags=list(data.get("ignored_tags", [])),
            custom_prefix=data.get("custom_prefix", DEFAULT_PREFIX),
            custom_suffix=data.get("custom_suffix", DEFAULT_SUFFIX),
            custom_item_prefix=data.get("custom_item_prefix", DEFAULT_ITEM_PREFIX),
            custom_item_suffix=data.get("custom_item_suffix", DEFAULT_ITEM_SUFFIX),
        )


def parse_bool(value: Any) -> bool:
    """Accept real booleans and the usual yes/no spellings."""
    if isinstance(value, bool):
        return value
    lowered = str(value).strip().lower()
    if lowered in ("1", "true", "yes", "on"):
        return True
    if lowered in ("0", "false", "no", "off"):
        return False
    raise ValueError(f"Not a boolean: {value}")


def coerce_setting(key: str, value: str) -> Any:
    """Convert a command-line 'key=value' string to the setting's type."""
    if key == "format":
        return ExportFormat.parse(value)
    if key == "include_tree":
        return parse_bool(value)
    if key == "ignored_tags":
        return [tag.strip() for tag in value.split(",") if tag.strip()]
    if key.startswith("custom_"):
        # Allow escaped newlines from the shell
        return value.replace("\\n", "\n")
    raise KeyError(f"Unknown setting: {key}")


class SettingsStorage:
    """Manages export settings stored in .vaultctx/settings.json."""

    def __init__(self, vault_path: Path) -> None:
        self.vault_path = vault_path
        self.settings_dir = vault_path / SETTINGS_DIR
        self.settings_file = self.settings_dir / "settings.json"
        self._settings: ExportSettings | None = None

    def get(self) -> ExportSettings:
        """Get current settings, loading from disk or using defaults."""
        if self._settings is None:
            self._settings = self._load()
        return self._settings

    def update(self, **kwargs) -> ExportSettings:
        """Update specific settings and save to disk."""
        settings = self.get()

        for key, value in kwargs.items():
            if not hasattr(settings, key):
                raise KeyError(f"Unknown setting: {key}")
            setattr(settings, key, value)

        self._save(settings)
        self._settings = settings
        return settings

    def _load(self) -> ExportSettings:
        """Load settings from disk, falling back to defaults."""
        if not self.settings_file.exists():
            return ExportSettings()

        try:
            data = json.loads(self.settings_file.read_text(encoding="utf-8"))
            return ExportSettings.from_dict(data)
        except (json.JSONDecodeError, OSError, ValueError) as e:
            logger.warning(f"Failed to load settings, using defaults: {e}")
            return ExportSettings()

    def _save(self, settings: ExportSettings) -> None:
        """Save settings to disk."""
        try:
            self.settings_dir.mkdir(parents=True, exist_ok=True)
            self.settings_file.write_text(
                json.dumps(settings.to_dict(), indent=2, ensure_ascii=False),
                encoding="utf-8",
            )
        except OSError as e:
            logger.error(f"Failed to save settings: {e}")
