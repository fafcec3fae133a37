"""Persistent user preferences for ai-commit."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, Optional, Protocol

logger = logging.getLogger(__name__)

CONFIG_DIR_NAME = "ai-commit"
PREFERENCES_FILE_NAME = "preferences.json"

AUTO_COMMIT_KEY = "auto_commit"
AUTO_PUSH_KEY = "auto_push"


class PreferenceStore(Protocol):
    """Boolean key/value store backing :class:`UserPreferences`."""

    def get_bool(self, key: str, default: bool = False) -> bool: ...

    def set_bool(self, key: str, value: bool) -> None: ...

    def remove_all(self) -> None: ...


def config_home(env: Optional[Dict[str, str]] = None) -> Path:
    env_dict = os.environ if env is None else env
    override = env_dict.get("AI_COMMIT_CONFIG_HOME", "").strip()
    if override:
        return Path(override).expanduser()
    xdg = env_dict.get("XDG_CONFIG_HOME", "").strip()
    if xdg:
        return Path(xdg).expanduser() / CONFIG_DIR_NAME
    return Path.home() / ".config" / CONFIG_DIR_NAME


def preferences_file_path() -> Path:
    return config_home() / PREFERENCES_FILE_NAME


class JsonPreferenceStore:
    """Preferences persisted as a small JSON object on disk."""

    def __init__(self, path: Optional[Path] = None) -> None:
        self.path = Path(path) if path is not None else preferences_file_path()

    def _load(self) -> Dict[str, object]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text())
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Ignoring unreadable preferences at %s: %s", self.path, exc)
            return {}
        return data if isinstance(data, dict) else {}

    def _save(self, data: Dict[str, object]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        # Replace in one step so an interrupted write never truncates the file.
        fd, tmp_name = tempfile.mkstemp(
            dir=str(self.path.parent), prefix=".preferences-", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w") as handle:
                json.dump(data, handle, indent=2)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def get_bool(self, key: str, default: bool = False) -> bool:
        value = self._load().get(key, default)
        return value if isinstance(value, bool) else default

    def set_bool(self, key: str, value: bool) -> None:
        data = self._load()
        data[key] = bool(value)
        self._save(data)

    def remove_all(self) -> None:
        if self.path.exists():
            self.path.unlink()


class MemoryPreferenceStore:
    """In-process store; nothing survives the interpreter."""

    def __init__(self, values: Optional[Dict[str, bool]] = None) -> None:
        self._values: Dict[str, bool] = dict(values or {})

    def get_bool(self, key: str, default: bool = False) -> bool:
        return self._values.get(key, default)

    def set_bool(self, key: str, value: bool) -> None:
        self._values[key] = bool(value)

    def remove_all(self) -> None:
        self._values.clear()


class UserPreferences:
    """Auto-commit and auto-push switches, both off by default."""

    def __init__(self, store: Optional[PreferenceStore] = None) -> None:
        self.store: PreferenceStore = store or JsonPreferenceStore()

    def auto_commit_enabled(self) -> bool:
        return self.store.get_bool(AUTO_COMMIT_KEY, False)

    def set_auto_commit(self, enabled: bool) -> None:
        self.store.set_bool(AUTO_COMMIT_KEY, enabled)

    def auto_push_enabled(self) -> bool:
        return self.store.get_bool(AUTO_PUSH_KEY, False)

    def set_auto_push(self, enabled: bool) -> None:
        self.store.set_bool(AUTO_PUSH_KEY, enabled)

    def reset(self) -> None:
        self.store.remove_all()

    def display_settings(self) -> str:
        def _state(flag: bool) -> str:
            return "enabled" if flag else "disabled"

        return "\n".join(
            [
                "Current Settings:",
                f"  Auto-commit: {_state(self.auto_commit_enabled())}",
                f"  Auto-push:   {_state(self.auto_push_enabled())}",
                "",
                "Note: When auto-commit is enabled, you won't be able to:",
                "  - Regenerate the AI message",
                "  - Edit the commit message",
                "  - Cancel the commit",
            ]
        )
