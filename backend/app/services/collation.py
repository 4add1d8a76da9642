"""
Notekeeper Backend — String Collation for Duplicate Detection
===============================================================

What:  Folds strings to a comparison key at a given collation strength.
Why:   Two notes are duplicates when their (user, title, text) match while
       ignoring letter case and, at the default strength, accents. The
       comparison is done in Python so it behaves the same on every store.

Strength levels (same meaning as ICU collation strengths):
    1 (PRIMARY):   base letters only   → "Café" == "CAFE" == "cafe"
    2 (SECONDARY): case-insensitive    → "Café" == "CAFÉ", "Café" != "Cafe"
    3 (TERTIARY):  exact after NFC     → "Café" != "café"
"""

import unicodedata

PRIMARY = 1
SECONDARY = 2
TERTIARY = 3


def _strip_accents(value: str) -> str:
    decomposed = unicodedata.normalize("NFKD", value)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def fold(value: str, strength: int = PRIMARY) -> str:
    """
    Return the comparison key for `value`.

    NFC normalization always applies, so a precomposed "é" and "e" + U+0301
    compare equal at every strength.
    """
    value = unicodedata.normalize("NFC", value)
    if strength >= TERTIARY:
        return value
    value = value.casefold()
    if strength == SECONDARY:
        return value
    return _strip_accents(value)


def collation_equal(a: str, b: str, strength: int = PRIMARY) -> bool:
    return fold(a, strength) == fold(b, strength)
