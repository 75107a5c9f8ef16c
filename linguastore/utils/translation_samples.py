from __future__ import annotations

import random
from datetime import datetime, timezone
from typing import Iterator

_CONTEXTS = ("mobile", "web", "desktop")
_LOCALES = ("en", "fr", "de", "es", "it", "pt", "nl", "sv", "pl", "ja", "zh", "ar")
_WORDS = (
    "account", "action", "alert", "button", "cancel", "cart", "checkout", "close",
    "confirm", "dashboard", "delete", "details", "download", "edit", "email", "error",
    "filter", "footer", "header", "help", "home", "label", "language", "login",
    "logout", "menu", "message", "next", "notice", "open", "order", "password",
    "previous", "profile", "refresh", "save", "search", "settings", "share", "submit",
    "summary", "title", "update", "upload", "welcome", "window",
)
_ENTRIES_PER_BUNDLE = 10


def _ensure_rng(rng: random.Random | None, seed: int | None) -> random.Random:
    if rng is not None:
        return rng
    if seed is None:
        seed = int(datetime.now(timezone.utc).timestamp())
    return random.Random(seed)


def _sentence(rng: random.Random) -> str:
    words = rng.sample(_WORDS, rng.randint(3, 8))
    return " ".join(words).capitalize() + "."


def sample_translation_map(
    *,
    entries: int = _ENTRIES_PER_BUNDLE,
    rng: random.Random | None = None,
    seed: int | None = None,
) -> dict[str, str]:
    """Build ``entries`` unique snake_case keys mapped to short sentences."""
    rng = _ensure_rng(rng, seed)
    mapping: dict[str, str] = {}
    while len(mapping) < entries:
        key = "_".join(rng.sample(_WORDS, 3))
        mapping.setdefault(key, _sentence(rng))
    return mapping


def generate_translation_samples(
    count: int,
    *,
    entries_per_bundle: int = _ENTRIES_PER_BUNDLE,
    seed: int | None = None,
    rng: random.Random | None = None,
) -> Iterator[dict[str, object]]:
    """Yield ``count`` create payloads with random context, locale and entries."""
    rng = _ensure_rng(rng, seed)
    for _ in range(max(0, count)):
        yield {
            "context": rng.choice(_CONTEXTS),
            "locale": rng.choice(_LOCALES),
            "translations": sample_translation_map(entries=entries_per_bundle, rng=rng),
        }
