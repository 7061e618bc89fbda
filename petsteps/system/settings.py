from __future__ import annotations
import json, os
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Callable, List, Optional
from petsteps.core.logging import logger

SETTINGS_FILENAME = ".petsteps_settings.json"
LOG_LEVELS = {"DEBUG", "INFO", "WARN", "ERROR"}

@dataclass
class SettingsData:
    log_level: str = "INFO"        # DEBUG / INFO / WARN / ERROR
    autosave: bool = True          # Save after every applied action
    debug: bool = False            # Dump battle messages at DEBUG
    save_dir: str = ""             # Empty means ~/.petsteps_saves

    def normalize(self):
        if not isinstance(self.log_level, str) or self.log_level.upper() not in LOG_LEVELS:
            self.log_level = "INFO"
        self.log_level = self.log_level.upper()
        self.autosave = bool(self.autosave)
        self.debug = bool(self.debug)
        if not isinstance(self.save_dir, str):
            self.save_dir = ""

class Settings:
    def __init__(self, data: SettingsData, path: Path):
        self.data = data
        self.path = path
        self._listeners: List[Callable[[SettingsData], None]] = []

    @classmethod
    def _resolve_path(cls) -> Path:
        home = Path(os.path.expanduser("~"))
        if home.is_dir() and os.access(home, os.W_OK):
            return home / SETTINGS_FILENAME
        return Path.cwd() / SETTINGS_FILENAME

    @classmethod
    def defaults(cls, **overrides) -> "Settings":
        data = SettingsData(**overrides)
        data.normalize()
        return cls(data, cls._resolve_path())

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "Settings":
        path = Path(path) if path is not None else cls._resolve_path()
        if path.exists():
            try:
                raw = json.loads(path.read_text(encoding="utf-8"))
                if not isinstance(raw, dict):
                    raise ValueError("settings root must be an object")
                # Unknown keys are ignored, missing ones take defaults
                field_names = {f.name for f in fields(SettingsData)}
                data = SettingsData(**{k: v for k, v in raw.items() if k in field_names})
                data.normalize()
                logger.debug("SettingsLoaded", path=str(path))
                return cls(data, path)
            except (OSError, ValueError, TypeError) as e:
                logger.warn("SettingsParseFailedUsingDefaults", path=str(path), error=str(e))
        data = SettingsData()
        data.normalize()
        return cls(data, path)

    def save(self):
        try:
            self.path.write_text(json.dumps(asdict(self.data), indent=2), encoding="utf-8")
            logger.debug("SettingsSaved", path=str(self.path))
        except OSError as e:
            logger.error("SettingsSaveFailed", error=str(e))

    def update(self, **changes):
        """Apply changes, normalize, push the log level to the logger and persist."""
        for key, value in changes.items():
            if hasattr(self.data, key):
                setattr(self.data, key, value)
        self.data.normalize()
        self.apply_log_level()
        self.save()
        self._notify()

    def apply_log_level(self):
        logger.set_level(self.data.log_level)  # type: ignore[arg-type]

    def on_change(self, fn: Callable[[SettingsData], None]):
        self._listeners.append(fn)

    def _notify(self):
        for fn in self._listeners:
            fn(self.data)
