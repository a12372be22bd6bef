from __future__ import annotations

import json
import os
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any

import yaml

from hexinspect.scalar import MIN_WINDOW

CONFIG_ENV = "HEXINSPECT_CONFIG"
MIN_WINDOW_SIZE = MIN_WINDOW


@dataclass
class AppSettings:
    locale: str = "en"
    save_window_state: bool = False
    dark_mode: bool = False
    window_size: int = 1024

    @staticmethod
    def from_mapping(payload: dict[str, Any]) -> AppSettings:
        """Build settings from a loaded mapping, ignoring unknown keys.

        Values must already have the field's type or be its YAML text form;
        anything else, or a window smaller than MIN_WINDOW_SIZE, raises ValueError.
        """
        defaults = asdict(AppSettings())
        values = {
            key: _coerce(key, payload.get(key, default), type(default))
            for key, default in defaults.items()
        }
        if values["window_size"] < MIN_WINDOW_SIZE:
            raise ValueError(
                f"window_size must be at least {MIN_WINDOW_SIZE}, got {values['window_size']}"
            )
        return AppSettings(**values)

    def updated(self, key: str, value: str) -> AppSettings:
        """Copy with one field replaced, parsing ``value`` from its text form."""
        if key not in {f.name for f in fields(self)}:
            raise KeyError(key)
        return AppSettings.from_mapping({**asdict(self), key: value})


def _coerce(key: str, value: Any, expected: type) -> Any:
    if isinstance(value, str) and expected is not str:
        try:
            value = yaml.safe_load(value)
        except yaml.YAMLError as exc:
            raise ValueError(f"{key} expects {expected.__name__}, got {value!r}") from exc
    if type(value) is not expected:
        raise ValueError(f"{key} expects {expected.__name__}, got {value!r}")
    return value


def default_settings_path() -> Path:
    override = os.environ.get(CONFIG_ENV)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".config" / "hexinspect" / "settings.yaml"


def _is_yaml(path: Path) -> bool:
    return path.suffix.lower() in {".yml", ".yaml"}


def load_settings(path: Path | None = None) -> AppSettings:
    """Read settings from YAML or JSON; a missing file yields the defaults."""
    path = path or default_settings_path()
    if not path.exists():
        return AppSettings()
    if _is_yaml(path):
        payload = yaml.safe_load(path.read_text()) or {}
    else:
        payload = json.loads(path.read_text())
    return AppSettings.from_mapping(payload)


def save_settings(settings: AppSettings, path: Path | None = None) -> bool:
    path = path or default_settings_path()
    payload = asdict(settings)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        if _is_yaml(path):
            path.write_text(yaml.safe_dump(payload, sort_keys=False))
        else:
            path.write_text(json.dumps(payload, indent=2))
    except OSError:
        return False
    return True
