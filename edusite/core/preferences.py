"""Persisted display-language preference (the site's one local-storage key)."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from .models import DEFAULT_LANGUAGE, LANGUAGES

PREFERENCE_KEY = "edu_lang"
LOGGER = logging.getLogger(__name__)


class LanguagePreference:
    """Read once at startup, written on every change."""

    def __init__(self, path: Path, *, default: str = DEFAULT_LANGUAGE) -> None:
        self.path = path
        self.default = default if default in LANGUAGES else DEFAULT_LANGUAGE
        self._language = self._read()

    @property
    def language(self) -> str:
        return self._language

    def set(self, language: str) -> str:
        if language not in LANGUAGES:
            raise ValueError(f"Unsupported language '{language}'; expected one of {', '.join(LANGUAGES)}")
        self._language = language
        self._write()
        return language

    def _read(self) -> str:
        if not self.path.exists():
            return self.default
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            LOGGER.warning("Unreadable preference file %s (%s); using %s", self.path, exc, self.default)
            return self.default
        value = data.get(PREFERENCE_KEY) if isinstance(data, dict) else None
        return value if value in LANGUAGES else self.default

    def _write(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        data = {}
        if self.path.exists():
            try:
                loaded = json.loads(self.path.read_text(encoding="utf-8"))
                data = loaded if isinstance(loaded, dict) else {}
            except ValueError:
                data = {}
        data[PREFERENCE_KEY] = self._language
        self.path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")


__all__ = ["LanguagePreference", "PREFERENCE_KEY"]
