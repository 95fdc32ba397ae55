# ludoteca/library/text.py
import unicodedata
from typing import Tuple


def normalize(text: str) -> str:
    """Lowercase and drop diacritics so "Médio", "MEDIO" and "medio" compare equal."""

    decomposed = unicodedata.normalize("NFD", text.lower())
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def collation_key(text: str) -> Tuple[str, str, str]:
    # accents, then case, only break ties between otherwise equal names; lowercase first
    return normalize(text), text.casefold(), text.swapcase()
