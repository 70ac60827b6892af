"""Persistent JSON config helpers.

Stores the Pygments style, UI theme name, and label/export preferences.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
from pathlib import Path

from platformdirs import user_config_dir

from .syntax_tree.export import DEFAULT_EXPORT_INDENT
from .syntax_tree.labels import DEFAULT_SUMMARY_MAX_CHARS

APP_NAME = "astlens"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except Exception:
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Any filesystem/serialization error is ignored to keep runtime behavior
    non-fatal when config cannot be written.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except Exception:
        pass


def _load_name(key: str) -> str | None:
    value = load_config().get(key)
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def _save_name(key: str, value: str) -> None:
    stripped = str(value).strip()
    if not stripped:
        return
    config = load_config()
    config[key] = stripped
    save_config(config)


def _load_positive_int(key: str, default: int) -> int:
    """Read a positive integer; booleans and other types fall back to ``default``."""
    value = load_config().get(key)
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        return default
    return value


def load_style_name() -> str | None:
    """Load persisted Pygments style name, returning ``None`` when unset/invalid."""
    return _load_name("style")


def save_style_name(style: str) -> None:
    _save_name("style", style)


def load_theme_name() -> str | None:
    """Load persisted UI theme name, returning ``None`` when unset/invalid."""
    return _load_name("theme")


def save_theme_name(theme_name: str) -> None:
    _save_name("theme", theme_name)


def load_summary_max_chars() -> int:
    """Max characters of inline text shown in node summaries."""
    return _load_positive_int("summary_max_chars", DEFAULT_SUMMARY_MAX_CHARS)


def load_export_indent() -> int:
    return _load_positive_int("export_indent", DEFAULT_EXPORT_INDENT)
