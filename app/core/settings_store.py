"""Local persistence for client settings (background, history URL, message API URL/password)."""
import json
import logging
from pathlib import Path

from app.core.config import get_settings
from app.models.schemas import ChatSettings

logger = logging.getLogger(__name__)

# Same key the browser client uses in localStorage
STORAGE_KEY = "mindmateChatSettings"


class SettingsStore:
    """JSON file holding {STORAGE_KEY: {...settings...}}. Unknown or missing keys fall back to defaults."""

    def __init__(self, path: Path | str | None = None):
        self.path = Path(path) if path else get_settings().settings_path

    def load(self) -> ChatSettings:
        if not self.path.is_file():
            return ChatSettings()
        try:
            doc = json.loads(self.path.read_text(encoding="utf-8"))
            saved = doc.get(STORAGE_KEY, {}) if isinstance(doc, dict) else {}
            if not isinstance(saved, dict):
                saved = {}
            merged = ChatSettings().model_dump(by_alias=True)
            # Key by key: a null or mistyped value keeps its default without dropping the rest
            for key, value in saved.items():
                if key in merged and isinstance(value, str):
                    merged[key] = value
                elif key in merged:
                    logger.warning("Ignoring invalid saved setting %s (expected a string)", key)
            return ChatSettings.model_validate(merged)
        except Exception as e:
            logger.error("Failed to parse settings from %s: %s", self.path, e)
            return ChatSettings()

    def save(self, settings: ChatSettings) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        doc = {STORAGE_KEY: settings.model_dump(by_alias=True)}
        self.path.write_text(json.dumps(doc, indent=2), encoding="utf-8")

    def update(self, **changes) -> ChatSettings:
        """Merge changes (field names or browser keys) into the stored settings and persist."""
        current = self.load().model_dump()
        aliases = {f.alias: name for name, f in ChatSettings.model_fields.items() if f.alias}
        for key, value in changes.items():
            name = aliases.get(key, key)
            if name not in current:
                raise KeyError(f"Unknown setting: {key}")
            current[name] = value
        settings = ChatSettings(**current)
        self.save(settings)
        return settings
