"""Collation strategies for ordering index keys.

Index keys are Czech place names, so byte order is wrong ("Žatec" would
land after "Zdice" only by accident, lowercase after uppercase, ...).
The index builder takes a `Collator` and orders keys by `collator.key`.

- `CzechCollator` follows the Czech alphabet without any locale data:
  "č", "ř", "š" and "ž" are letters of their own after "c", "r", "s"
  and "z", "ch" is one letter after "h", other accents only break ties.
- `LocaleCollator` uses the C library's collation tables for a locale
  (e.g. cs_CZ.UTF-8). When the locale is not installed it falls back to
  `CzechCollator` for Czech locale names, `CaseFoldCollator` otherwise.
- `CaseFoldCollator` orders by case-folded text with accents removed,
  then by accents, then by the raw text.

All of them append the raw text to the key so the order is total: two
distinct strings never compare equal, so repeated runs sort identically.
"""

from __future__ import annotations

import locale
import threading
import unicodedata
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, Protocol

from .logging_config import get_logger

logger = get_logger(__name__)

# Letters with a primary weight of their own, sorted right after their base
CZECH_LETTERS = {"č": "c", "ř": "r", "š": "s", "ž": "z"}

# LC_COLLATE is process-wide; only one collator may switch it at a time
_locale_lock = threading.Lock()


class Collator(Protocol):
    def key(self, text: str) -> Any: ...


def _strip_accents(text: str) -> str:
    decomposed = unicodedata.normalize("NFD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def _is_czech(locale_name: str) -> bool:
    language = locale_name.split(".")[0].split("_")[0].lower()
    return language in ("cs", "czech")


class CaseFoldCollator:
    """Locale-independent, accent-insensitive first-pass ordering."""

    def key(self, text: str) -> tuple[str, str, str]:
        folded = text.casefold()
        return (_strip_accents(folded), folded, text)


class CzechCollator:
    """Ordering by the Czech alphabet.

    Primary weights: a b c č d e f g h ch i ... r ř s š t ... z ž, where
    vowels with accents and ď, ň, ť weigh the same as their base letter.
    Ties are broken by the accented case-folded text, then the raw text.
    """

    def _letters(self, folded: str) -> list[tuple[str, int]]:
        letters = []
        i = 0
        while i < len(folded):
            ch = folded[i]
            if ch in CZECH_LETTERS:
                letters.append((CZECH_LETTERS[ch], 1))
            elif ch == "c" and folded[i + 1 : i + 2] == "h":
                letters.append(("h", 1))
                i += 1
            else:
                letters.append((_strip_accents(ch) or ch, 0))
            i += 1
        return letters

    def key(self, text: str) -> tuple[list[tuple[str, int]], str, str]:
        folded = unicodedata.normalize("NFC", text.casefold())
        return (self._letters(folded), folded, text)


class LocaleCollator:
    """Ordering by the C library's collation rules for `locale_name`.

    LC_COLLATE is switched only while a key is computed and restored
    afterwards. If the locale is not installed a warning is logged and a
    locale-free collator is used instead.
    """

    def __init__(self, locale_name: str = "cs_CZ.UTF-8"):
        self.locale_name = locale_name
        self._fallback: Collator | None = None
        try:
            with self._collating():
                pass
        except locale.Error:
            self._fallback = CzechCollator() if _is_czech(locale_name) else CaseFoldCollator()
            logger.warning(
                f"Locale {locale_name} is not available, ordering index keys "
                f"with {type(self._fallback).__name__} instead"
            )

    @contextmanager
    def _collating(self) -> Iterator[None]:
        with _locale_lock:
            previous = locale.setlocale(locale.LC_COLLATE)
            locale.setlocale(locale.LC_COLLATE, self.locale_name)
            try:
                yield
            finally:
                locale.setlocale(locale.LC_COLLATE, previous)

    @property
    def is_native(self) -> bool:
        """True when the requested locale is used."""
        return self._fallback is None

    def key(self, text: str) -> Any:
        if self._fallback is not None:
            return self._fallback.key(text)
        with self._collating():
            return (locale.strxfrm(text), text)
