"""
Stress mark removal for words looked up on Forvo.

Russian learning material marks the stressed vowel with a combining acute
accent (``многоба́йтовый``). Forvo indexes the unaccented form, so the marks
have to go before the word is used as a query.
"""

import unicodedata
from typing import FrozenSet, List

# Letters of the target alphabet that carry a combining mark in NFD form.
ALPHABET_LETTERS_WITH_MARKS = frozenset("йЙёЁ")


def strip_stress(word: str, alphabet_letters: FrozenSet[str] = ALPHABET_LETTERS_WITH_MARKS) -> str:
    """
    Remove combining stress marks from a word.

    The word is decomposed (NFD), every non-spacing mark that does not belong
    to a letter of the alphabet is dropped, and the rest is recomposed (NFC).
    Case and whitespace are left alone.

    Args:
        word: The word as written, possibly with stress marks
        alphabet_letters: Precomposed letters whose marks must be kept

    Returns:
        str: The word without stress marks
    """
    kept: List[str] = []
    cluster = ""

    for char in unicodedata.normalize("NFD", word):
        if unicodedata.category(char) != "Mn":
            kept.append(char)
            cluster = char
            continue

        # A mark stays only if it completes a letter together with the marks kept so far
        if cluster and unicodedata.normalize("NFC", cluster + char) in alphabet_letters:
            kept.append(char)
            cluster += char

    return unicodedata.normalize("NFC", "".join(kept))
