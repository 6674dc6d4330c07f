"""Localized message catalogs."""

import json
from functools import lru_cache
from pathlib import Path

LOCALES_DIR = Path(__file__).resolve().parent / "locales"
DEFAULT_LANGUAGE = "en"


@lru_cache
def load_catalogs() -> dict[str, dict[str, str]]:
    """Load every locales/<lang>.json file, keyed by language code."""
    catalogs = {}
    for path in sorted(LOCALES_DIR.glob("*.json")):
        with open(path, encoding="utf-8") as f:
            catalogs[path.stem] = json.load(f)
    return catalogs


def supported_languages() -> list[str]:
    return list(load_catalogs())


def resolve_language(accept_language: str | None) -> str:
    """Pick the best supported language from an Accept-Language header."""
    if not accept_language:
        return DEFAULT_LANGUAGE

    catalogs = load_catalogs()
    candidates = []
    for position, part in enumerate(accept_language.split(",")):
        tag, _, params = part.strip().partition(";")
        tag = tag.strip().lower()
        if not tag:
            continue
        quality = 1.0
        params = params.strip()
        if params.startswith("q="):
            try:
                quality = float(params[2:])
            except ValueError:
                quality = 0.0
        # q=0 marks a language as not acceptable
        if quality <= 0:
            continue
        candidates.append((-quality, position, tag))

    for _, _, tag in sorted(candidates):
        primary = tag.split("-")[0]
        if tag in catalogs:
            return tag
        if primary in catalogs:
            return primary
    return DEFAULT_LANGUAGE


def translate(key: str, language: str = DEFAULT_LANGUAGE) -> str:
    """Return the message for key, falling back to English and then to the key."""
    catalogs = load_catalogs()
    message = catalogs.get(language, {}).get(key)
    if message is None:
        message = catalogs.get(DEFAULT_LANGUAGE, {}).get(key, key)
    return message
