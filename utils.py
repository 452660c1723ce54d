"""Utility helpers for word normalization, wordlist files, config, and logging."""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any

from models import Entry, SearchSettings


def _choose_app_dir() -> Path:
    """
    Pick a writable app directory.

    Preferred location is user home, with local workspace fallback when blocked.
    """
    preferred = Path.home() / ".isogram_finder"
    try:
        preferred.mkdir(parents=True, exist_ok=True)
        return preferred
    except OSError:
        fallback = Path(".isogram_finder")
        fallback.mkdir(parents=True, exist_ok=True)
        return fallback


APP_DIR = _choose_app_dir()
CONFIG_PATH = APP_DIR / "config.json"
LOG_PATH = APP_DIR / "app.log"
WORDLIST_DIR = Path(__file__).resolve().parent / "wordlists"

DEFAULT_LANGUAGE = "de"
# Letters accepted in addition to a-z, per language.
LANGUAGE_LETTERS = {
    "de": "äöüß",
    "en": "",
}


def ensure_app_dirs() -> None:
    """Create the app directory if it does not already exist."""
    APP_DIR.mkdir(parents=True, exist_ok=True)


def setup_logging() -> None:
    """Configure file logging once per app run."""
    ensure_app_dirs()
    logging.basicConfig(
        filename=str(LOG_PATH),
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def load_config() -> dict[str, Any]:
    """Load config from the user home config file."""
    ensure_app_dirs()
    if not CONFIG_PATH.exists():
        return {}
    try:
        return json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except Exception:
        logging.exception("Failed to load config from %s", CONFIG_PATH)
        return {}


def save_config(config: dict[str, Any]) -> None:
    """Persist config to disk."""
    ensure_app_dirs()
    try:
        CONFIG_PATH.write_text(json.dumps(config, indent=2), encoding="utf-8")
    except Exception:
        logging.exception("Failed to save config to %s", CONFIG_PATH)


def settings_from_config(config: dict[str, Any]) -> SearchSettings:
    """Rebuild search settings from config, falling back to defaults when invalid."""
    stored = config.get("settings")
    if not isinstance(stored, dict):
        return SearchSettings()
    try:
        return SearchSettings.from_dict(stored)
    except (TypeError, ValueError):
        logging.warning("Ignoring invalid settings in config: %r", stored)
        return SearchSettings()


def _letters(language: str) -> str:
    if language not in LANGUAGE_LETTERS:
        raise ValueError(f"Unsupported language: {language!r}")
    return "a-z" + LANGUAGE_LETTERS[language]


def _strip_pattern(language: str) -> re.Pattern[str]:
    return re.compile(f"[^{_letters(language)}]")


def _split_pattern(language: str) -> re.Pattern[str]:
    extra = LANGUAGE_LETTERS.get(language, "")
    return re.compile(f"[^{_letters(language)}A-Z{extra.upper()}]+")


def is_isogram(word: str) -> bool:
    """True when no character occurs more than once."""
    return len(set(word)) == len(word)


def clean_and_check_isogram(word: str, language: str = DEFAULT_LANGUAGE) -> str | None:
    """
    Normalize a raw token and validate it.

    Steps:
    1) Lowercase.
    2) Strip every character outside the language's letters.
    3) Reject empty results and non-isograms.
    """
    cleaned = _strip_pattern(language).sub("", word.lower()).strip()
    if cleaned and is_isogram(cleaned):
        return cleaned
    return None


def _unique_isograms(tokens: list[str], language: str) -> list[str]:
    unique: dict[str, None] = {}
    for token in tokens:
        cleaned = clean_and_check_isogram(token, language)
        if cleaned:
            unique.setdefault(cleaned, None)
    return list(unique)


def build_entries(word_list: str, language: str = DEFAULT_LANGUAGE) -> list[Entry]:
    """Parse one word per line into unique entries, longest first."""
    tokens = [line.strip() for line in word_list.split("\n")]
    words = _unique_isograms([token for token in tokens if token], language)
    entries = [Entry.from_word(word) for word in words]
    entries.sort(key=lambda entry: entry.length, reverse=True)
    return entries


def prepare_wordlist(text: str, language: str = DEFAULT_LANGUAGE) -> list[str]:
    """Extract unique isograms from arbitrary text, longest first."""
    tokens = [token for token in _split_pattern(language).split(text) if token]
    words = _unique_isograms(tokens, language)
    words.sort(key=len, reverse=True)
    return words


def count_isogram_lines(word_list: str) -> int:
    """Count non-blank lines that are isograms as written."""
    lines = (line.strip() for line in word_list.split("\n"))
    return sum(1 for line in lines if line and is_isogram(line))


def default_wordlist_path(language: str) -> Path:
    """Path of the bundled wordlist for a language."""
    _letters(language)
    return WORDLIST_DIR / f"{language}.txt"


def load_wordlist(path: str | Path) -> str:
    """Read a wordlist file as text, ignoring undecodable bytes."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Wordlist file not found: {path}")
    return path.read_bytes().decode("utf-8", errors="ignore")


def save_wordlist(path: str | Path, text: str) -> None:
    """Write wordlist text as UTF-8."""
    Path(path).write_text(text, encoding="utf-8")
