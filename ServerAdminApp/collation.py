"""
Locale-aware, case-insensitive text comparison.

Keys are built from the NFC form of the text with the locale's case folding applied,
so 'World', 'world' and 'WORLD' compare equal while accents and other marks still
distinguish names. Turkic locales fold dotted and dotless I separately.
"""

import unicodedata
from typing import Iterable, List

TURKIC_LANGUAGES = {'tr', 'az'}


class CaseInsensitiveCollator:

    def __init__(self, locale: str = 'en'):
        self.locale = locale
        self.language = locale.replace('-', '_').split('_')[0].lower()

    def key(self, text: str) -> str:
        text = unicodedata.normalize('NFC', text)
        if self.language in TURKIC_LANGUAGES:
            text = text.replace('I', 'ı').replace('İ', 'i')
        return unicodedata.normalize('NFC', text.casefold())

    def equals(self, first: str, second: str) -> bool:
        return self.key(first) == self.key(second)

    def compare(self, first: str, second: str) -> int:
        first_key, second_key = self.key(first), self.key(second)
        return (first_key > second_key) - (first_key < second_key)

    def starts_with(self, text: str, prefix: str) -> bool:
        return self.key(text).startswith(self.key(prefix))

    def sorted(self, items: Iterable[str]) -> List[str]:
        return sorted(items, key=self.key)

    def __repr__(self):
        return f"{self.__class__.__name__}(locale={self.locale})"
